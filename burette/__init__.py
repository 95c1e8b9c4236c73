"""
A Python package for simulating acid-base titrations.

Computes pH as a function of titrant volume for strong and weak
monoprotic, diprotic and triprotic systems, samples whole titration curves,
and matches visual indicators to equivalence-point pH.

Modules:
    - chemistry: Titration records, the equilibrium solver and indicators.
    - catalog: The built-in titration scenarios and lookups.
    - curve: Sampling of pH-versus-volume curves.
    - analysis: Key-point pH values, inflection detection and summaries.
    - output: CSV export of curves and the summary table.
    - plotting: Report figures of sampled curves.
"""

__version__ = "1.0.0"

from .analysis import (
    analyze_titration,
    create_summary_dataframe,
    detect_inflections,
    nearest_equivalence,
)
from .catalog import get_titration_by_id, load_titration_catalog, random_titration
from .chemistry import is_indicator_appropriate, solve_ph
from .curve import CurvePoint, curve_to_dataframe, sample_curve
from .errors import DomainError, PreconditionViolation, UnreachableTopology
from .output import save_curves_to_csv, save_summary_to_csv

__all__ = [
    # Engine
    "solve_ph",
    "sample_curve",
    "CurvePoint",
    "curve_to_dataframe",
    "is_indicator_appropriate",
    # Catalog
    "load_titration_catalog",
    "get_titration_by_id",
    "random_titration",
    # Analysis
    "analyze_titration",
    "create_summary_dataframe",
    "detect_inflections",
    "nearest_equivalence",
    # Output
    "save_curves_to_csv",
    "save_summary_to_csv",
    # Errors
    "PreconditionViolation",
    "DomainError",
    "UnreachableTopology",
]
