"""Define standardized column names for curve and summary DataFrames."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CurveColumns:
    """Container for sampled-curve column labels.

    Attributes:
        volume: Titrant volume added, in cm^3 (numerically mL).
        ph: pH returned by the equilibrium solver for that volume.
        regime: Name of the solver regime that produced the pH, e.g.
            ``"buffer"`` or ``"equivalence_2"``. Useful when a curve shows
            an unexpected step, since every step coincides with a regime
            boundary.
    """

    volume: str = "Volume (cm³)"
    ph: str = "pH"
    regime: str = "Regime"


@dataclass(frozen=True)
class SummaryColumns:
    """Container for per-titration summary column labels.

    Attributes:
        titration_id: Catalog id of the titration.
        name: Display name, e.g. ``"HCl + NaOH"``.
        topology: Topology tag (``"weak-strong"``, ``"diprotic"``, ...).
        initial_ph: Computed pH before any titrant is added.
        equivalence_volumes: Tabulated equivalence volumes, cm^3.
        equivalence_phs: Computed pH at each equivalence volume.
        half_equivalence_phs: Computed pH at each half-equivalence volume.
        inflection_volumes: Volumes of the steep jumps detected on the
            sampled curve.
        best_indicator: Recommended indicator id from the catalog.
        indicator_ok: Whether that indicator brackets any tabulated
            equivalence pH.
        suitable_indicators: Indicator ids bracketing the last tabulated
            equivalence pH.
        max_eq_ph_deviation: Largest |computed - tabulated| equivalence pH.
    """

    titration_id: str = "Titration ID"
    name: str = "Titration"
    topology: str = "Topology"
    initial_ph: str = "Initial pH"
    equivalence_volumes: str = "Equivalence Volumes (cm³)"
    equivalence_phs: str = "Equivalence pH (computed)"
    half_equivalence_phs: str = "Half-equivalence pH (computed)"
    inflection_volumes: str = "Detected Inflections (cm³)"
    best_indicator: str = "Recommended Indicator"
    indicator_ok: str = "Indicator Brackets Equivalence pH"
    suitable_indicators: str = "Suitable Indicators"
    max_eq_ph_deviation: str = "Max |ΔpH| vs Catalog"
