"""Load-time checks for titration records and indicators.

Every check here runs when a catalog entry is constructed, so that the
equilibrium solver only ever sees chemically meaningful input. Failures raise
:class:`~burette.errors.PreconditionViolation` (a ``ValueError``) for bad
values and ``TypeError`` for values that are not numbers at all.
"""

from __future__ import annotations

import math
from typing import Sequence

from ..errors import PreconditionViolation


def require_number(value: object, name: str) -> float:
    """Return ``value`` as a float, rejecting non-numeric input.

    Args:
        value: Candidate numeric value.
        name: Field name used in the error message.

    Returns:
        float: The value converted to ``float``.

    Raises:
        TypeError: If ``value`` is not an ``int`` or ``float`` (``bool`` is
            rejected even though it subclasses ``int``).
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be numeric, got {type(value).__name__}")
    return float(value)


def require_finite(value: object, name: str) -> float:
    """Return ``value`` as a finite float."""
    v = require_number(value, name)
    if not math.isfinite(v):
        raise PreconditionViolation(f"{name} must be finite, got {v}")
    return v


def require_positive(value: object, name: str) -> float:
    """Return ``value`` as a strictly positive finite float.

    Raises:
        TypeError: If ``value`` is not numeric.
        PreconditionViolation: If ``value`` is non-finite, zero or negative.
    """
    v = require_finite(value, name)
    if v <= 0:
        raise PreconditionViolation(f"{name} must be positive, got {v}")
    return v


def require_non_negative(value: object, name: str) -> float:
    """Return ``value`` as a finite float that is ``>= 0``."""
    v = require_finite(value, name)
    if v < 0:
        raise PreconditionViolation(f"{name} cannot be negative, got {v}")
    return v


def require_count(values: Sequence[object], expected: int, name: str) -> None:
    """Check that a per-step sequence has one entry per protic step.

    Raises:
        PreconditionViolation: If the length differs from ``expected``.
    """
    if len(values) != expected:
        raise PreconditionViolation(
            f"{name} must have {expected} entries for this topology, "
            f"got {len(values)}"
        )


def require_increasing(values: Sequence[float], name: str) -> None:
    """Check that equivalence volumes are listed in strictly ascending order."""
    for prev, cur in zip(values, values[1:]):
        if not cur > prev:
            raise PreconditionViolation(
                f"{name} must be strictly increasing, got {tuple(values)}"
            )


def require_stoichiometric_volumes(
    equivalence_volumes: Sequence[float],
    analyte_volume: float,
    analyte_molarity: float,
    titrant_molarity: float,
    rel_tol: float = 1e-6,
) -> None:
    """Check tabulated equivalence volumes against reaction stoichiometry.

    Step ``k`` (1-based) of an n-protic analyte is reached when
    ``k * V_a * M_a / M_t`` cm^3 of titrant have been delivered.

    Args:
        equivalence_volumes: Tabulated equivalence volumes, cm^3.
        analyte_volume: Analyte volume, cm^3.
        analyte_molarity: Analyte concentration, mol dm^-3.
        titrant_molarity: Titrant concentration, mol dm^-3.
        rel_tol: Relative tolerance for the comparison.

    Raises:
        PreconditionViolation: If any tabulated volume is off.
    """
    step = analyte_volume * analyte_molarity / titrant_molarity
    for k, volume in enumerate(equivalence_volumes, start=1):
        expected = k * step
        if not math.isclose(volume, expected, rel_tol=rel_tol):
            raise PreconditionViolation(
                f"Equivalence volume {k} is {volume} cm^3 but stoichiometry "
                f"requires {expected:.6g} cm^3"
            )


def require_interval(low: object, high: object, name: str) -> tuple[float, float]:
    """Return a validated ``(low, high)`` pH interval with ``low < high``."""
    lo = require_finite(low, f"{name} lower bound")
    hi = require_finite(high, f"{name} upper bound")
    if not lo < hi:
        raise PreconditionViolation(
            f"{name} must satisfy low < high, got [{lo}, {hi}]"
        )
    return lo, hi
