"""Sample titration curves from the equilibrium solver.

A curve is a uniform volume grid plus a few extra points hugging each
equivalence volume, where pH changes by several units over a fraction of a
drop. Every point is an independent :func:`solve_ph` call, so a sampled curve
and a live pH reading at the same volume are always identical.
"""

from __future__ import annotations

import math
from typing import Iterable, List, NamedTuple, Optional

import pandas as pd

from .chemistry.equilibrium import regime_name, solve_ph
from .chemistry.records import TitrationRecord
from .chemistry.validation import require_positive
from .schema import CurveColumns

DEFAULT_STEP_ML: float = 0.5
EQUIVALENCE_OFFSETS_ML: tuple[float, ...] = (-0.1, -0.05, -0.01, 0.01, 0.05, 0.1)

COLUMNS = CurveColumns()


class CurvePoint(NamedTuple):
    """One sampled point: titrant volume in cm^3 and the resulting pH."""

    volume: float
    ph: float


def default_max_volume(record: TitrationRecord) -> float:
    """Return twice the largest equivalence volume of ``record``."""
    return 2.0 * max(record.equivalence_volumes)


def _grid(max_volume: float, step: float) -> List[float]:
    # Index-based so that 0.5 cm^3 steps do not accumulate rounding error.
    n_steps = int(math.floor(max_volume / step + 1e-9))
    return [i * step for i in range(n_steps + 1)]


def _refinement(record: TitrationRecord, max_volume: float) -> List[float]:
    volumes = []
    for eq_volume in record.equivalence_volumes:
        for offset in EQUIVALENCE_OFFSETS_ML:
            v = eq_volume + offset
            if 0.0 < v <= max_volume:
                volumes.append(v)
    return volumes


def sample_volumes(
    record: TitrationRecord,
    max_volume: Optional[float] = None,
    step: float = DEFAULT_STEP_ML,
) -> List[float]:
    """Return the sorted sampling volumes for ``record``.

    Args:
        record: Titration to sample.
        max_volume: Last grid volume in cm^3. Defaults to
            :func:`default_max_volume`.
        step: Grid spacing in cm^3.

    Returns:
        list[float]: Grid volumes from 0 to ``max_volume`` plus the
        equivalence refinement offsets, ascending. Near-duplicates are kept.

    Raises:
        PreconditionViolation: If ``max_volume`` or ``step`` is not a
            positive finite number.
    """
    if max_volume is None:
        max_volume = default_max_volume(record)
    limit = require_positive(max_volume, "max_volume")
    spacing = require_positive(step, "step")
    return sorted(_grid(limit, spacing) + _refinement(record, limit))


def sample_curve(
    record: TitrationRecord,
    max_volume: Optional[float] = None,
    step: float = DEFAULT_STEP_ML,
) -> List[CurvePoint]:
    """Sample pH against titrant volume for a whole titration.

    Args:
        record: Titration to sample.
        max_volume: Largest volume in cm^3. Defaults to twice the largest
            equivalence volume.
        step: Uniform grid spacing in cm^3.

    Returns:
        list[CurvePoint]: Points sorted by ascending volume. Calling twice
        with the same arguments returns equal lists.
    """
    return [
        CurvePoint(volume, solve_ph(record, volume))
        for volume in sample_volumes(record, max_volume=max_volume, step=step)
    ]


def curve_to_dataframe(
    points: Iterable[CurvePoint], record: Optional[TitrationRecord] = None
) -> pd.DataFrame:
    """Convert sampled points into a tidy DataFrame.

    Args:
        points: Output of :func:`sample_curve`.
        record: When given, a regime column names the solver branch behind
            each point.

    Returns:
        pandas.DataFrame: Columns ``Volume (cm³)``, ``pH`` and optionally
        ``Regime``.
    """
    points = list(points)
    df = pd.DataFrame(
        {
            COLUMNS.volume: [p.volume for p in points],
            COLUMNS.ph: [p.ph for p in points],
        }
    )
    if record is not None:
        df[COLUMNS.regime] = [regime_name(record, p.volume) for p in points]
    return df
