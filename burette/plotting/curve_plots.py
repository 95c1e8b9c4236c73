"""Render sampled titration curves with equivalence and indicator guides.

Figures receive precomputed analysis results and never call the solver.
"""

from __future__ import annotations

import os
from typing import Dict, List, Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from ..chemistry.indicators import get_indicator
from ..schema import CurveColumns
from .style import (
    LINE_WIDTHS,
    MATH_LABELS,
    STYLE,
    clean_axis,
    draw_equivalence_guides,
    draw_indicator_band,
    sanitize_filename,
    save_figure,
    set_axis_labels,
    set_global_style,
)

COLUMNS = CurveColumns()
REQUIRED_KEYS = {"titration_id", "name", "curve", "equivalence_volumes"}


def _band_color(indicator) -> str:
    # Phenolphthalein is colourless in acid, so shade with the basic colour.
    if indicator.color_acidic == "transparent":
        return indicator.color_basic
    return indicator.color_acidic


def plot_titration_curve(
    result: Dict, output_dir: str = "output", indicator_id: Optional[str] = None
) -> str:
    """Render one pH-versus-volume figure and save it as a PNG/PDF/SVG bundle.

    Args:
        result (dict): Output of ``burette.analysis.analyze_titration``.
        output_dir (str): Root output directory; figures go to
            ``<output_dir>/figures/``.
        indicator_id (str, optional): Indicator whose transition interval is
            shaded. Defaults to the record's recommended indicator.

    Returns:
        str: PNG path of the saved figure.

    Raises:
        KeyError: If required result keys are missing or ``indicator_id``
            is not in the catalog.
    """
    missing = REQUIRED_KEYS - set(result.keys())
    if missing:
        raise KeyError(f"Result missing required keys: {sorted(missing)}")

    set_global_style()
    curve: pd.DataFrame = result["curve"]
    x = curve[COLUMNS.volume].to_numpy(dtype=float)
    y = curve[COLUMNS.ph].to_numpy(dtype=float)

    fig, ax = plt.subplots(figsize=STYLE.FIGSIZE_SINGLE)
    try:
        ax.plot(
            x,
            y,
            color="black",
            linewidth=LINE_WIDTHS["curve"],
            label="Computed pH",
            zorder=3,
        )
        draw_equivalence_guides(
            ax,
            result["equivalence_volumes"],
            result.get("half_equivalence_volumes", ()),
        )

        chosen = indicator_id or result.get("best_indicator")
        if chosen:
            indicator = get_indicator(chosen)
            draw_indicator_band(
                ax,
                indicator.low,
                indicator.high,
                _band_color(indicator),
                label=f"{indicator.name} ({indicator.low:g}-{indicator.high:g})",
            )

        ax.set_xlim(0.0, float(np.nanmax(x)) if len(x) else 1.0)
        ax.set_ylim(0.0, 14.0)
        set_axis_labels(ax, x=MATH_LABELS["x_volume"], y=MATH_LABELS["ph"])
        clean_axis(ax)
        ax.set_title(f"{result['titration_id']}. {result['name']}")
        ax.legend(loc="lower right")

        stem = f"{result['titration_id']}_{sanitize_filename(result['name'])}"
        png_path = save_figure(fig, os.path.join(output_dir, "figures", stem))
    finally:
        plt.close(fig)
    return str(png_path)


def plot_titration_curves(results: List[Dict], output_dir: str = "output") -> List[str]:
    """Render one figure per analysis result.

    Raises:
        ValueError: If ``results`` is empty.
    """
    if not results:
        raise ValueError("results list is empty; nothing to plot")
    return [plot_titration_curve(res, output_dir) for res in results]
