"""
Chemistry models for acid-base titration simulation.

This subpackage implements the equilibrium engine: immutable titration
records, the piecewise pH model, and the indicator catalog.

Modules:
    records:
        Frozen dataclasses for the five titration topologies (strong-strong,
        weak-strong, strong-weak, diprotic, triprotic), each carrying its
        required dissociation constants as mandatory fields.

    equilibrium:
        pH as a function of titrant volume. Each topology is an ordered table
        of regimes (initial, buffer, half-equivalence, equivalence, excess)
        selected by comparing amounts in mol with an absolute tolerance.

    indicators:
        Indicator transition intervals, colour lookup, and the rule that an
        indicator is appropriate when its interval brackets the equivalence pH.

    validation:
        Load-time invariant checks shared by records and indicators.

Interpretation Guardrails:
    pH values are concentration-based 25 °C approximations (Kw = 1e-14):
    1. No activity coefficients or ionic-strength corrections
    2. Weak acid/base initial pH assumes Ka << C

    They are intended for teaching curves, not for analytical work.

Design Principle:
    This subpackage has no dependencies on plotting/ or pandas.
    It provides pure chemistry models that can be independently tested.
"""

from .equilibrium import EPSILON, KW, regime_name, solve_ph
from .indicators import (
    INDICATORS,
    Indicator,
    appropriate_indicators,
    get_indicator,
    indicator_color,
    is_indicator_appropriate,
    ph_color,
)
from .records import (
    ChemicalSpecies,
    Difficulty,
    DiproticTitration,
    StrongStrongTitration,
    StrongWeakTitration,
    TitrationRecord,
    Topology,
    TriproticTitration,
    WeakStrongTitration,
)

__all__ = [
    "EPSILON",
    "KW",
    "solve_ph",
    "regime_name",
    "INDICATORS",
    "Indicator",
    "appropriate_indicators",
    "get_indicator",
    "indicator_color",
    "is_indicator_appropriate",
    "ph_color",
    "ChemicalSpecies",
    "Difficulty",
    "DiproticTitration",
    "StrongStrongTitration",
    "StrongWeakTitration",
    "TitrationRecord",
    "Topology",
    "TriproticTitration",
    "WeakStrongTitration",
]
