"""
Report figures for simulated titrations.

All plotting functions accept precomputed analysis results and do not
perform chemistry calculations.

Modules:
    curve_plots:
        pH against titrant volume, with solid guides at equivalence volumes,
        dashed guides at half-equivalence volumes, and a shaded band for the
        chosen indicator's transition interval.

    style:
        Shared rcParams, axis helpers and multi-format figure export.

Styling:
    STIX serif fonts, 300 DPI PNG plus vector PDF/SVG, suppressed top/right
    spines.
"""

from .curve_plots import plot_titration_curve, plot_titration_curves
from .style import apply_global_style, save_figure

__all__ = [
    "plot_titration_curve",
    "plot_titration_curves",
    "apply_global_style",
    "save_figure",
]
