"""Shared plotting style, axis labels, guide lines and save helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.ticker import MaxNLocator

OUTPUT_FORMATS: tuple[str, ...] = ("png", "pdf", "svg")
FIGURE_DPI = 300
_STYLE_STATE = {"initialized": False}


@dataclass(frozen=True)
class StyleConfig:
    BASE_FONTSIZE: float = 12.0
    TITLE_FONTSIZE: float = 14.0
    LABEL_FONTSIZE: float = 12.0
    TICK_FONTSIZE: float = 11.0
    LEGEND_FONTSIZE: float = 10.0
    LINEWIDTH: float = 2.0
    LINEWIDTH_THIN: float = 1.2
    MARKERSIZE: float = 4.0
    ALPHA_BAND: float = 0.15
    GRID_ALPHA: float = 0.20
    FIGSIZE_SINGLE: tuple[float, float] = (7.0, 4.6)


STYLE = StyleConfig()

FONT_SIZES = {
    "base": STYLE.BASE_FONTSIZE,
    "title": STYLE.TITLE_FONTSIZE,
    "axis_label": STYLE.LABEL_FONTSIZE,
    "tick": STYLE.TICK_FONTSIZE,
    "legend": STYLE.LEGEND_FONTSIZE,
}

LINE_WIDTHS = {
    "curve": STYLE.LINEWIDTH,
    "guide": STYLE.LINEWIDTH_THIN,
    "band_edge": 0.0,
}

ALPHAS = {
    "indicator_band": STYLE.ALPHA_BAND,
    "guide": 0.8,
}

GUIDE_COLOR = "#4b5563"

_SUBSCRIPTS = str.maketrans("₀₁₂₃₄₅₆₇₈₉", "0123456789")

MATH_LABELS = {
    "veq": r"$V_{\mathrm{eq}}$",
    "vhalf": r"$V_{1/2}$",
    "x_volume": r"$V_{\mathrm{titrant}}\ \mathrm{added}\ /\ \mathrm{cm^3}$",
    "ph": r"$\mathrm{pH}$",
}


def apply_global_style(font_scale: float = 1.0) -> None:
    """Apply the project Matplotlib rcParams, scaled by ``font_scale``."""
    scale = float(font_scale)
    plt.rcParams.update(
        {
            "font.family": "STIXGeneral",
            "font.size": STYLE.BASE_FONTSIZE * scale,
            "axes.titlesize": STYLE.TITLE_FONTSIZE * scale,
            "axes.labelsize": STYLE.LABEL_FONTSIZE * scale,
            "xtick.labelsize": STYLE.TICK_FONTSIZE * scale,
            "ytick.labelsize": STYLE.TICK_FONTSIZE * scale,
            "legend.fontsize": STYLE.LEGEND_FONTSIZE * scale,
            "mathtext.fontset": "stix",
            "axes.linewidth": STYLE.LINEWIDTH_THIN,
            "axes.spines.top": False,
            "axes.spines.right": False,
            "legend.frameon": False,
            "lines.linewidth": STYLE.LINEWIDTH,
            "lines.markersize": STYLE.MARKERSIZE,
            "savefig.dpi": FIGURE_DPI,
            "savefig.bbox": "tight",
        }
    )


def set_global_style() -> None:
    """Apply global plotting style once per process."""
    if not _STYLE_STATE["initialized"]:
        apply_global_style()
        _STYLE_STATE["initialized"] = True


def clean_axis(ax: Axes, *, grid_axis: str = "y") -> None:
    """Apply consistent ticks and a light grid to one axis."""
    ax.tick_params(axis="both", which="major", labelsize=FONT_SIZES["tick"])
    ax.xaxis.set_major_locator(MaxNLocator(nbins=8, min_n_ticks=4))
    ax.yaxis.set_major_locator(MaxNLocator(nbins=8, integer=True))
    ax.grid(False)
    if grid_axis in {"x", "y", "both"}:
        ax.grid(
            True, axis=grid_axis, alpha=STYLE.GRID_ALPHA, linestyle=":", linewidth=0.7
        )


def set_axis_labels(ax: Axes, x: str | None = None, y: str | None = None) -> None:
    """Apply axis labels with project typography."""
    if x is not None:
        ax.set_xlabel(x, fontsize=FONT_SIZES["axis_label"], labelpad=6)
    if y is not None:
        ax.set_ylabel(y, fontsize=FONT_SIZES["axis_label"], labelpad=6)


def draw_equivalence_guides(
    ax: Axes,
    equivalence_volumes: Sequence[float],
    half_equivalence_volumes: Sequence[float] = (),
    color: str = GUIDE_COLOR,
) -> None:
    """Draw solid V_eq and dashed V_{1/2} vertical guides.

    Non-finite volumes are skipped. Only the first guide of each kind gets a
    legend label.
    """
    label = MATH_LABELS["veq"]
    for veq in equivalence_volumes:
        if np.isfinite(veq):
            ax.axvline(
                veq,
                color=color,
                linewidth=LINE_WIDTHS["guide"],
                linestyle="-",
                alpha=ALPHAS["guide"],
                label=label,
            )
            label = None

    label = MATH_LABELS["vhalf"]
    for vhalf in half_equivalence_volumes:
        if np.isfinite(vhalf):
            ax.axvline(
                vhalf,
                color=color,
                linewidth=LINE_WIDTHS["guide"],
                linestyle="--",
                alpha=ALPHAS["guide"],
                label=label,
            )
            label = None


def draw_indicator_band(
    ax: Axes, low: float, high: float, color: str, label: str | None = None
) -> None:
    """Shade the pH interval over which an indicator changes colour."""
    ax.axhspan(
        low,
        high,
        color=color,
        alpha=ALPHAS["indicator_band"],
        linewidth=LINE_WIDTHS["band_edge"],
        label=label,
    )


def save_figure(
    fig: Figure,
    savepath_base: str | Path,
    formats: Sequence[str] = OUTPUT_FORMATS,
    dpi: int = FIGURE_DPI,
) -> Path:
    """Save a figure to every format in ``formats`` from one extensionless base.

    Returns:
        pathlib.Path: Path of the PNG file.
    """
    base = Path(savepath_base)
    base.parent.mkdir(parents=True, exist_ok=True)
    for ext in formats:
        fig.savefig(
            str(base.with_suffix(f".{ext}")),
            dpi=dpi if ext == "png" else None,
            bbox_inches="tight",
            pad_inches=0.12,
        )
    return base.with_suffix(".png")


def sanitize_filename(name: str) -> str:
    """Normalize a filename component into a stable, filesystem-safe token.

    Subscript digits in formulas (``H₂SO₃``) are folded to ASCII first so
    they survive the character filter.
    """
    text = str(name).translate(_SUBSCRIPTS).replace("+", "and")
    text = re.sub(r"\s+", "_", text.strip())
    text = re.sub(r"[^A-Za-z0-9._-]+", "_", text)
    text = re.sub(r"_+", "_", text).strip("._")
    return text or "figure"
