"""
Per-titration analysis built on the equilibrium engine.

This module turns a catalog record into the numbers a lab report would quote:
- pH before any titrant, at every half-equivalence volume and at every
  equivalence volume, all computed by :func:`solve_ph`.
- Volumes of the steep jumps, located on the sampled curve from the maximum
  of |d(pH)/dV| exactly as one would read them off measured data.
- Whether the recommended indicator changes colour at a tabulated
  equivalence pH, and which catalog indicators would.

Catalog pH values are rounded textbook figures. A computed equivalence pH
that departs from the tabulated one by more than
:data:`EQUIVALENCE_PH_TOLERANCE` is logged as a warning rather than raised,
so a whole catalog can still be reported.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd
from scipy.signal import find_peaks

from .chemistry.equilibrium import solve_ph
from .chemistry.indicators import appropriate_indicators, is_indicator_appropriate
from .chemistry.records import TitrationRecord
from .curve import curve_to_dataframe, sample_curve
from .schema import CurveColumns, SummaryColumns

logger = logging.getLogger(__name__)

EQUIVALENCE_PH_TOLERANCE: float = 0.5
DEFAULT_MIN_SLOPE: float = 1.0
DEFAULT_MERGE_WITHIN_ML: float = 1.0

CURVE = CurveColumns()
SUMMARY = SummaryColumns()


def half_equivalence_volumes(record: TitrationRecord) -> List[float]:
    """Return the midpoint volume of every titration step.

    Step ``k`` runs from the previous equivalence volume (0 for the first
    step) to the ``k``-th one, so a diprotic record with equivalence volumes
    25 and 50 cm^3 gives ``[12.5, 37.5]``.
    """
    starts = (0.0,) + tuple(record.equivalence_volumes[:-1])
    return [0.5 * (s + e) for s, e in zip(starts, record.equivalence_volumes)]


def nearest_equivalence(record: TitrationRecord, volume: float) -> Tuple[float, float]:
    """Return the equivalence point closest to a delivered volume.

    Polyprotic titrations have several targets. A player who stops the
    burette is scored against whichever equivalence volume they are nearest.

    Args:
        record: Titration being performed.
        volume: Titrant volume delivered, cm^3.

    Returns:
        tuple[float, float]: ``(equivalence_volume, tabulated_equivalence_ph)``.
        Ties resolve to the earlier equivalence point.
    """
    volumes = np.asarray(record.equivalence_volumes, dtype=float)
    idx = int(np.argmin(np.abs(volumes - float(volume))))
    return float(volumes[idx]), float(record.equivalence_phs[idx])


def _prepare_xy(x: np.ndarray, y: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    mask = np.isfinite(x) & np.isfinite(y)
    x = x[mask]
    y = y[mask]
    if len(x) == 0:
        return x, y
    # Refinement offsets can land within float noise of a grid volume.
    x = np.round(x, 9)
    order = np.argsort(x, kind="stable")
    x = x[order]
    y = y[order]
    if len(np.unique(x)) < len(x):
        df = pd.DataFrame({"x": x, "y": y}).groupby("x", as_index=False).mean()
        x = df["x"].to_numpy(dtype=float)
        y = df["y"].to_numpy(dtype=float)
    return x, y


def _merge_close_peaks(
    volumes: np.ndarray, heights: np.ndarray, merge_within: float
) -> List[Tuple[float, float]]:
    clusters: List[Tuple[List[float], float]] = []
    for v, h in zip(volumes, heights):
        if clusters and v - clusters[-1][0][-1] <= merge_within:
            members, best = clusters[-1]
            members.append(float(v))
            clusters[-1] = (members, max(best, float(h)))
        else:
            clusters.append(([float(v)], float(h)))
    return [(float(np.mean(members)), best) for members, best in clusters]


def detect_inflections(
    curve_df: pd.DataFrame,
    min_slope: float = DEFAULT_MIN_SLOPE,
    merge_within: float = DEFAULT_MERGE_WITHIN_ML,
    max_peaks: Optional[int] = None,
) -> List[float]:
    """Locate the steep jumps of a sampled titration curve.

    The slope is ``|d(pH)/dV|`` from :func:`numpy.gradient` on the
    deduplicated, volume-sorted curve (uneven spacing is handled). Local
    maxima above ``min_slope`` are found with
    :func:`scipy.signal.find_peaks`.

    Args:
        curve_df: Curve with ``Volume (cm³)`` and ``pH`` columns.
        min_slope: Smallest slope, in pH per cm^3, treated as a jump.
        merge_within: Peaks closer than this many cm^3 belong to one jump
            and are reported at their mean volume.
        max_peaks: Keep only the steepest ``max_peaks`` jumps.

    Returns:
        list[float]: Jump volumes in ascending order. Empty when the curve
        has fewer than three distinct volumes or no jump is steep enough.

    Raises:
        KeyError: If a required column is missing.

    Note:
        A polyprotic step that ends on a flat anchor (for instance the
        equivalence pH of a very weak last proton) shows no jump and is not
        reported.
    """
    for col in (CURVE.volume, CURVE.ph):
        if col not in curve_df.columns:
            raise KeyError(f"Curve is missing required column {col!r}")

    x, y = _prepare_xy(
        curve_df[CURVE.volume].to_numpy(), curve_df[CURVE.ph].to_numpy()
    )
    if len(x) < 3:
        return []

    slope = np.abs(np.gradient(y, x))
    peaks, props = find_peaks(slope, height=float(min_slope))
    if len(peaks) == 0:
        return []

    merged = _merge_close_peaks(x[peaks], props["peak_heights"], float(merge_within))
    if max_peaks is not None:
        merged = sorted(merged, key=lambda item: item[1], reverse=True)[:max_peaks]
    return sorted(volume for volume, _ in merged)


def _indicator_brackets_any(indicator_id: str, phs: Iterable[float]) -> bool:
    return any(is_indicator_appropriate(indicator_id, ph) for ph in phs)


def analyze_titration(
    record: TitrationRecord, max_volume: Optional[float] = None
) -> Dict:
    """Compute the report quantities for one titration record.

    Args:
        record: Validated titration record.
        max_volume: Sampling limit in cm^3; defaults to twice the last
            equivalence volume.

    Returns:
        dict: Keys ``record``, ``titration_id``, ``name``, ``topology``,
        ``curve`` (DataFrame with volume, pH and regime columns),
        ``initial_ph``, ``equivalence_volumes``, ``equivalence_phs``,
        ``half_equivalence_volumes``, ``half_equivalence_phs``,
        ``inflection_volumes``, ``best_indicator``, ``indicator_ok``,
        ``suitable_indicators``, ``eq_ph_deviations`` and
        ``max_eq_ph_deviation``. Computed values come from the engine;
        ``record`` keeps the tabulated ones.
    """
    points = sample_curve(record, max_volume=max_volume)
    curve_df = curve_to_dataframe(points, record=record)

    eq_volumes = list(record.equivalence_volumes)
    eq_phs = [solve_ph(record, v) for v in eq_volumes]
    half_volumes = half_equivalence_volumes(record)
    half_phs = [solve_ph(record, v) for v in half_volumes]

    deviations = [
        abs(computed - tabulated)
        for computed, tabulated in zip(eq_phs, record.equivalence_phs)
    ]
    max_dev = float(max(deviations))
    if max_dev > EQUIVALENCE_PH_TOLERANCE:
        logger.warning(
            "Titration %s (%s): computed equivalence pH %s departs from "
            "catalog %s by up to %.2f",
            record.id,
            record.name,
            [round(ph, 2) for ph in eq_phs],
            list(record.equivalence_phs),
            max_dev,
        )

    indicator_ok = _indicator_brackets_any(
        record.best_indicator, record.equivalence_phs
    )
    if not indicator_ok:
        logger.warning(
            "Titration %s (%s): recommended indicator %s does not bracket any "
            "catalog equivalence pH %s",
            record.id,
            record.name,
            record.best_indicator,
            list(record.equivalence_phs),
        )

    return {
        "record": record,
        "titration_id": record.id,
        "name": record.name,
        "topology": record.topology.value,
        "curve": curve_df,
        "initial_ph": solve_ph(record, 0.0),
        "equivalence_volumes": eq_volumes,
        "equivalence_phs": eq_phs,
        "half_equivalence_volumes": half_volumes,
        "half_equivalence_phs": half_phs,
        "inflection_volumes": detect_inflections(curve_df),
        "best_indicator": record.best_indicator,
        "indicator_ok": indicator_ok,
        "suitable_indicators": appropriate_indicators(record.equivalence_phs[-1]),
        "eq_ph_deviations": deviations,
        "max_eq_ph_deviation": max_dev,
    }


def _fmt_values(values: Iterable[float], digits: int = 2) -> str:
    return ", ".join(f"{v:.{digits}f}" for v in values)


def create_summary_dataframe(results: Iterable[Dict]) -> pd.DataFrame:
    """Flatten analysis results into one summary row per titration.

    List-valued quantities are joined into comma-separated strings so the
    table stays one row per titration when written to CSV.
    """
    rows = []
    for res in results:
        rows.append(
            {
                SUMMARY.titration_id: res.get("titration_id"),
                SUMMARY.name: res.get("name", ""),
                SUMMARY.topology: res.get("topology", ""),
                SUMMARY.initial_ph: round(float(res.get("initial_ph", np.nan)), 2),
                SUMMARY.equivalence_volumes: _fmt_values(
                    res.get("equivalence_volumes", [])
                ),
                SUMMARY.equivalence_phs: _fmt_values(res.get("equivalence_phs", [])),
                SUMMARY.half_equivalence_phs: _fmt_values(
                    res.get("half_equivalence_phs", [])
                ),
                SUMMARY.inflection_volumes: _fmt_values(
                    res.get("inflection_volumes", [])
                ),
                SUMMARY.best_indicator: res.get("best_indicator", ""),
                SUMMARY.indicator_ok: bool(res.get("indicator_ok", False)),
                SUMMARY.suitable_indicators: ", ".join(
                    res.get("suitable_indicators", [])
                ),
                SUMMARY.max_eq_ph_deviation: round(
                    float(res.get("max_eq_ph_deviation", np.nan)), 3
                ),
            }
        )
    return pd.DataFrame(rows, columns=list(asdict(SUMMARY).values()))
