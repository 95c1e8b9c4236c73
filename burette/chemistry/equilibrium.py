"""Compute solution pH as a function of titrant volume.

The model is the standard 25 °C, concentration-based treatment taught in
introductory chemistry: strong electrolytes dissociate fully, weak acids and
bases follow the square-root approximation, buffer regions follow the
Henderson-Hasselbalch equation, and ampholytes sit at the mean of their
adjacent pKa values. No activity corrections are applied.

Each topology is expressed as an ordered table of :class:`Regime` entries.
The first regime whose predicate accepts the current amounts of analyte and
titrant supplies the pH; the last entry of every table is a catch-all. Regime
boundaries compare amounts (mol) with an absolute tolerance
:data:`EPSILON`, never pH values, so the boundary test itself cannot put a
step into the curve.

Continuity:
    Henderson-Hasselbalch and excess-reagent formulas diverge as one
    component runs out. Each such branch is clamped between the pH at the
    start and the end of its step (initial pH, equivalence pH), so curves
    stay monotone. Anchor values themselves are never altered.

Notation used below:
    a: analyte amount, mol (``V_a * M_a / 1000``)
    b: titrant amount delivered, mol
    V: total solution volume, dm^3
"""

from __future__ import annotations

import math
from typing import Callable, NamedTuple, Tuple

from ..errors import DomainError, UnreachableTopology
from ..units import moles_delivered, total_volume_dm3
from .records import (
    DiproticTitration,
    StrongStrongTitration,
    StrongWeakTitration,
    TitrationRecord,
    TriproticTitration,
    WeakStrongTitration,
)
from .validation import require_non_negative

KW: float = 1e-14
PKW: float = 14.0
NEUTRAL_PH: float = 7.0
EPSILON: float = 1e-10


class MoleState(NamedTuple):
    """Amounts present after a given titrant volume has been delivered."""

    analyte: float
    titrant: float
    volume: float


class Regime(NamedTuple):
    """One region of a titration curve.

    Attributes:
        name: Short identifier, e.g. ``"buffer_2"``.
        applies: Predicate on a :class:`MoleState`.
        ph: pH formula valid while ``applies`` holds.
    """

    name: str
    applies: Callable[[MoleState], bool]
    ph: Callable[[MoleState], float]


def _log10(x: float, what: str) -> float:
    if not (math.isfinite(x) and x > 0):
        raise DomainError(f"log10 of non-positive {what}: {x!r}")
    return math.log10(x)


def weak_acid_ph(ka: float, concentration: float) -> float:
    """pH of a weak acid solution, ``-log10(sqrt(Ka * C))``.

    Assumes ``Ka << C`` (the dissociated fraction is neglected in the
    denominator); very weak or very dilute acids are not corrected.
    """
    return -_log10(math.sqrt(ka * concentration), "[H+] of weak acid")


def weak_base_ph(kb: float, concentration: float) -> float:
    """pH of a weak base solution via ``pOH = (pKb - log10 C) / 2``."""
    poh = 0.5 * (-_log10(kb, "Kb") - _log10(concentration, "base concentration"))
    return PKW - poh


def henderson_hasselbalch(pka: float, base: float, acid: float) -> float:
    """Buffer pH, ``pKa + log10([base]/[acid])``.

    Amounts or concentrations may be passed since only the ratio is used.
    """
    return pka + _log10(base / acid, "buffer ratio")


def _always(state: MoleState) -> bool:
    return True


def _titrant_near(multiple: float) -> Callable[[MoleState], bool]:
    def applies(state: MoleState) -> bool:
        return abs(state.titrant - multiple * state.analyte) <= EPSILON

    return applies


def _titrant_below(multiple: float) -> Callable[[MoleState], bool]:
    def applies(state: MoleState) -> bool:
        return state.titrant < multiple * state.analyte - EPSILON

    return applies


def _constant(value: float) -> Callable[[MoleState], float]:
    def ph(state: MoleState) -> float:
        return value

    return ph


def _excess_base_ph(steps: int) -> Callable[[MoleState], float]:
    def ph(state: MoleState) -> float:
        excess = (state.titrant - steps * state.analyte) / state.volume
        return PKW + _log10(excess, "excess [OH-]")

    return ph


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def _stoichiometric_state(record: TitrationRecord, steps: int) -> MoleState:
    # Titrant volume that delivers exactly ``steps`` mol of base per mol analyte.
    per_step = record.analyte.volume * record.analyte.molarity
    return mole_state(record, steps * per_step / record.titrant.molarity)


def _strong_strong_regimes(record: StrongStrongTitration) -> Tuple[Regime, ...]:
    def excess_acid(state: MoleState) -> float:
        excess = (state.analyte - state.titrant) / state.volume
        return min(NEUTRAL_PH, -_log10(excess, "excess [H+]"))

    def excess_base(state: MoleState) -> float:
        excess = (state.titrant - state.analyte) / state.volume
        poh = -_log10(excess, "excess [OH-]")
        return max(NEUTRAL_PH, PKW - poh)

    return (
        Regime("equivalence", _titrant_near(1.0), _constant(NEUTRAL_PH)),
        Regime("excess_analyte", lambda s: s.analyte > s.titrant, excess_acid),
        Regime("excess_titrant", _always, excess_base),
    )


def _weak_strong_regimes(record: WeakStrongTitration) -> Tuple[Regime, ...]:
    ka = record.ka
    pka = record.pka
    initial = weak_acid_ph(ka, record.analyte.molarity)
    eq_state = _stoichiometric_state(record, 1)
    eq_ph = weak_base_ph(KW / ka, eq_state.titrant / eq_state.volume)

    def buffer(state: MoleState) -> float:
        hh = henderson_hasselbalch(pka, state.titrant, state.analyte - state.titrant)
        return _clamp(hh, initial, eq_ph)

    def equivalence(state: MoleState) -> float:
        return weak_base_ph(KW / ka, state.titrant / state.volume)

    def excess_base(state: MoleState) -> float:
        return max(eq_ph, _excess_base_ph(1)(state))

    return (
        Regime("initial", _titrant_near(0.0), _constant(initial)),
        Regime("buffer", _titrant_below(1.0), buffer),
        Regime("equivalence", _titrant_near(1.0), equivalence),
        Regime("excess_titrant", _always, excess_base),
    )


def _strong_weak_regimes(record: StrongWeakTitration) -> Tuple[Regime, ...]:
    pka = record.pka
    ka = 10.0 ** (-pka)
    initial = weak_base_ph(KW / ka, record.analyte.molarity)
    eq_state = _stoichiometric_state(record, 1)
    eq_ph = weak_acid_ph(ka, eq_state.titrant / eq_state.volume)

    def buffer(state: MoleState) -> float:
        hh = henderson_hasselbalch(pka, state.analyte - state.titrant, state.titrant)
        return _clamp(hh, eq_ph, initial)

    def equivalence(state: MoleState) -> float:
        return weak_acid_ph(ka, state.titrant / state.volume)

    def excess_acid(state: MoleState) -> float:
        excess = (state.titrant - state.analyte) / state.volume
        return min(eq_ph, -_log10(excess, "excess [H+]"))

    return (
        Regime("initial", _titrant_near(0.0), _constant(initial)),
        Regime("buffer", _titrant_below(1.0), buffer),
        Regime("equivalence", _titrant_near(1.0), equivalence),
        Regime("excess_titrant", _always, excess_acid),
    )


def _polyprotic_regimes(
    record: DiproticTitration | TriproticTitration,
) -> Tuple[Regime, ...]:
    """Build the regime table for an n-protic acid titrated with strong base.

    Step ``k`` (1-based) runs from ``(k-1)·a`` to ``k·a`` mol of base and is
    split into: buffer up to the half-equivalence point, the half-equivalence
    point itself (pH = pKa_k), the approach to equivalence, and the
    equivalence point. Intermediate equivalence points hold the ampholyte
    (pH = mean of adjacent pKa values); the last one holds the fully
    deprotonated base. Only Ka1 matters before any base is added.

    Buffer and approach values are clamped between the pH at the start of
    the step (the initial pH, or the previous equivalence pH) and the pH at
    its end, so the sampled curve never runs backwards across a step
    boundary.
    """
    kas = record.dissociation_constants
    n = len(kas)
    pkas = [-_log10(ka, "Ka") for ka in kas]
    initial = weak_acid_ph(kas[0], record.analyte.molarity)
    final_state = _stoichiometric_state(record, n)
    equivalence_phs = [0.5 * (pkas[k] + pkas[k + 1]) for k in range(n - 1)]
    equivalence_phs.append(
        weak_base_ph(KW / kas[-1], final_state.titrant / final_state.volume)
    )

    def step_ph(k: int, low: float, high: float) -> Callable[[MoleState], float]:
        pka = pkas[k - 1]

        def ph(state: MoleState) -> float:
            base = state.titrant - (k - 1) * state.analyte
            acid = k * state.analyte - state.titrant
            return _clamp(henderson_hasselbalch(pka, base, acid), low, high)

        return ph

    def approach_ph(k: int, low: float, high: float) -> Callable[[MoleState], float]:
        pka = pkas[k - 1]

        def ph(state: MoleState) -> float:
            acid = k * state.analyte - state.titrant
            base = state.titrant - (k - 1) * state.analyte
            value = pka - _log10(acid / base, "remaining acid ratio")
            return _clamp(value, low, high)

        return ph

    def final_equivalence(state: MoleState) -> float:
        return weak_base_ph(KW / kas[-1], state.titrant / state.volume)

    def excess_base(state: MoleState) -> float:
        return max(equivalence_phs[-1], _excess_base_ph(n)(state))

    regimes = [Regime("initial", _titrant_near(0.0), _constant(initial))]
    for k in range(1, n + 1):
        half = k - 0.5
        low = initial if k == 1 else equivalence_phs[k - 2]
        high = equivalence_phs[k - 1]
        regimes.append(
            Regime(f"buffer_{k}", _titrant_below(half), step_ph(k, low, high))
        )
        regimes.append(
            Regime(
                f"half_equivalence_{k}", _titrant_near(half), _constant(pkas[k - 1])
            )
        )
        regimes.append(
            Regime(
                f"approach_{k}", _titrant_below(float(k)), approach_ph(k, low, high)
            )
        )
        eq_ph = _constant(high) if k < n else final_equivalence
        regimes.append(Regime(f"equivalence_{k}", _titrant_near(float(k)), eq_ph))
    regimes.append(Regime("excess_titrant", _always, excess_base))
    return tuple(regimes)


_REGIME_BUILDERS: dict[type, Callable[..., Tuple[Regime, ...]]] = {
    StrongStrongTitration: _strong_strong_regimes,
    WeakStrongTitration: _weak_strong_regimes,
    StrongWeakTitration: _strong_weak_regimes,
    DiproticTitration: _polyprotic_regimes,
    TriproticTitration: _polyprotic_regimes,
}


def regime_table(record: TitrationRecord) -> Tuple[Regime, ...]:
    """Return the ordered regime table for a record.

    Raises:
        UnreachableTopology: If ``record`` is not one of the five record
            types.
    """
    builder = _REGIME_BUILDERS.get(type(record))
    if builder is None:
        raise UnreachableTopology(
            f"No equilibrium model for {type(record).__name__}; "
            f"expected one of {sorted(t.__name__ for t in _REGIME_BUILDERS)}"
        )
    return builder(record)


def mole_state(record: TitrationRecord, volume_added: float) -> MoleState:
    """Return analyte/titrant amounts and total volume for a delivered volume."""
    analyte_volume = record.analyte.volume
    return MoleState(
        analyte=moles_delivered(analyte_volume, record.analyte.molarity),
        titrant=moles_delivered(volume_added, record.titrant.molarity),
        volume=total_volume_dm3(analyte_volume, volume_added),
    )


def _select(table: Tuple[Regime, ...], state: MoleState) -> Regime:
    for regime in table[:-1]:
        if regime.applies(state):
            return regime
    return table[-1]


def active_regime(record: TitrationRecord, volume_added: float) -> Regime:
    """Return the regime governing the pH at ``volume_added`` cm^3."""
    volume = require_non_negative(volume_added, "volume_added")
    table = regime_table(record)
    return _select(table, mole_state(record, volume))


def regime_name(record: TitrationRecord, volume_added: float) -> str:
    """Return the name of the regime governing ``volume_added`` cm^3."""
    return active_regime(record, volume_added).name


def solve_ph(record: TitrationRecord, volume_added: float) -> float:
    """Compute the pH after ``volume_added`` cm^3 of titrant.

    The function is pure: the same record and volume always give the same
    pH, so the live pH-meter reading and a bulk-sampled curve agree exactly.

    Buffer and excess-reagent values are clamped to the anchor pH values of
    their step. Where plain Henderson-Hasselbalch would fall outside that
    band the bound is returned instead: HF (Ka 6.8e-4) reads its initial pH,
    about 2.00, from 0 to roughly 2.8 cm^3 rather than the raw buffer value.
    Initial, half-equivalence and equivalence values are never clamped.

    Equivalence points take the conjugate concentration from the titrant
    delivered, ``b / V``; for an n-protic acid this is ``n·a / V``.

    Args:
        record: A validated titration record.
        volume_added: Titrant volume delivered, cm^3. Must be finite and
            ``>= 0``.

    Returns:
        float: pH of the mixed solution.

    Raises:
        PreconditionViolation: If ``volume_added`` is negative or non-finite.
        TypeError: If ``volume_added`` is not numeric.
        UnreachableTopology: If ``record`` is not a known record type.
    """
    volume = require_non_negative(volume_added, "volume_added")
    table = regime_table(record)
    state = mole_state(record, volume)
    return _select(table, state).ph(state)
