"""Immutable titration scenario records.

A titration is described by one of five frozen dataclasses, one per
topology. Each variant carries exactly the equilibrium constants its pH model
needs as mandatory fields, so a weak-acid record without ``ka`` cannot be
constructed and the solver never has to guess a default.

Topologies:
    strong-strong:
        Strong acid analyte titrated with a strong base. No constants.
    weak-strong:
        Weak monoprotic acid analyte titrated with a strong base. ``ka``.
    strong-weak:
        Weak base analyte titrated with a strong acid. ``kb`` and the
        conjugate-acid ``pka`` (the pH model uses ``pka`` directly).
    diprotic / triprotic:
        Polyprotic acid analyte titrated with a strong base. ``ka1``..``ka3``.

Tabulated values (``initial_ph``, ``equivalence_ph``, half-equivalence pH)
are the rounded figures shown to players. They are validated as finite
numbers but are not used by the solver, which always recomputes pH from the
constants.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Tuple, Union

from ..errors import PreconditionViolation
from .validation import (
    require_count,
    require_finite,
    require_increasing,
    require_positive,
    require_stoichiometric_volumes,
)


class Topology(str, Enum):
    """Tag naming the acid/base pairing of a titration."""

    STRONG_STRONG = "strong-strong"
    WEAK_STRONG = "weak-strong"
    STRONG_WEAK = "strong-weak"
    DIPROTIC = "diprotic"
    TRIPROTIC = "triprotic"


class Difficulty(str, Enum):
    """Difficulty tier a scenario is offered at."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


@dataclass(frozen=True)
class ChemicalSpecies:
    """One reagent in a titration.

    Attributes:
        formula: Formula used as an identifier, e.g. ``"CH₃COOH"``.
        name: Display name.
        molarity: Concentration in mol dm^-3. Must be positive.
        volume: Volume in cm^3. Only the analyte has one; the titrant volume
            is the independent variable of the titration.
    """

    formula: str
    name: str
    molarity: float
    volume: Optional[float] = None

    def __post_init__(self) -> None:
        require_positive(self.molarity, f"{self.formula} molarity")
        if self.volume is not None:
            require_positive(self.volume, f"{self.formula} volume")


def _pk(k: float) -> float:
    return -math.log10(k)


@dataclass(frozen=True)
class _TitrationBase:
    """Fields and load-time checks shared by every topology."""

    id: int
    name: str
    analyte: ChemicalSpecies
    titrant: ChemicalSpecies
    initial_ph: float
    best_indicator: str
    difficulty: Difficulty

    topology: ClassVar[Topology]
    protic_order: ClassVar[int]

    def __post_init__(self) -> None:
        if self.analyte.volume is None:
            raise PreconditionViolation(
                f"Titration {self.id}: analyte {self.analyte.formula} has no volume"
            )
        if not isinstance(self.difficulty, Difficulty):
            object.__setattr__(self, "difficulty", Difficulty(self.difficulty))
        require_finite(self.initial_ph, "initial_ph")
        self._validate_constants()

        volumes = self.equivalence_volumes
        require_count(volumes, self.protic_order, "equivalence_volumes")
        require_count(self.equivalence_phs, self.protic_order, "equivalence_phs")
        for v in volumes:
            require_positive(v, "equivalence volume")
        for ph in self.equivalence_phs:
            require_finite(ph, "equivalence pH")
        require_increasing(volumes, "equivalence_volumes")
        require_stoichiometric_volumes(
            volumes,
            self.analyte.volume,
            self.analyte.molarity,
            self.titrant.molarity,
        )

    def _validate_constants(self) -> None:
        pass


# Variants expose ``equivalence_volumes`` and ``equivalence_phs`` as tuples:
# monoprotic records via properties, polyprotic records as fields. The base
# class must not define them, or dataclasses would read the inherited
# property as a field default.
@dataclass(frozen=True)
class _MonoproticTitration(_TitrationBase):
    equivalence_volume: float
    equivalence_ph: float

    protic_order: ClassVar[int] = 1

    @property
    def equivalence_volumes(self) -> Tuple[float, ...]:
        return (self.equivalence_volume,)

    @property
    def equivalence_phs(self) -> Tuple[float, ...]:
        return (self.equivalence_ph,)


@dataclass(frozen=True)
class StrongStrongTitration(_MonoproticTitration):
    """Strong acid analyte + strong base titrant (e.g. HCl + NaOH)."""

    topology: ClassVar[Topology] = Topology.STRONG_STRONG


@dataclass(frozen=True)
class WeakStrongTitration(_MonoproticTitration):
    """Weak acid analyte + strong base titrant (e.g. CH₃COOH + NaOH)."""

    half_equivalence_ph: float
    ka: float

    topology: ClassVar[Topology] = Topology.WEAK_STRONG

    def _validate_constants(self) -> None:
        require_positive(self.ka, "ka")
        require_finite(self.half_equivalence_ph, "half_equivalence_ph")

    @property
    def pka(self) -> float:
        return _pk(self.ka)


@dataclass(frozen=True)
class StrongWeakTitration(_MonoproticTitration):
    """Weak base analyte + strong acid titrant (e.g. NH₃ + HCl).

    ``pka`` is the pKa of the conjugate acid (NH₄⁺ for ammonia). It is
    supplied rather than derived from ``kb`` because tabulated Kb values are
    rounded; the pH model uses ``pka`` throughout.
    """

    half_equivalence_ph: float
    kb: float
    pka: float

    topology: ClassVar[Topology] = Topology.STRONG_WEAK

    def _validate_constants(self) -> None:
        require_positive(self.kb, "kb")
        require_finite(self.pka, "pka")
        require_finite(self.half_equivalence_ph, "half_equivalence_ph")

    @property
    def pkb(self) -> float:
        return _pk(self.kb)


@dataclass(frozen=True)
class _PolyproticTitration(_TitrationBase, ABC):
    equivalence_volumes: Tuple[float, ...]
    equivalence_phs: Tuple[float, ...]
    half_equivalence_phs: Tuple[float, ...]

    def __post_init__(self) -> None:
        for field_name in (
            "equivalence_volumes",
            "equivalence_phs",
            "half_equivalence_phs",
        ):
            object.__setattr__(self, field_name, tuple(getattr(self, field_name)))
        require_count(
            self.half_equivalence_phs, self.protic_order, "half_equivalence_phs"
        )
        super().__post_init__()

    def _validate_constants(self) -> None:
        for i, ka in enumerate(self.dissociation_constants, start=1):
            require_positive(ka, f"ka{i}")

    @property
    @abstractmethod
    def dissociation_constants(self) -> Tuple[float, ...]:
        """Ka values in deprotonation order."""

    @property
    def pkas(self) -> Tuple[float, ...]:
        return tuple(_pk(ka) for ka in self.dissociation_constants)


@dataclass(frozen=True)
class DiproticTitration(_PolyproticTitration):
    """Diprotic acid analyte + strong base titrant (e.g. H₂C₂O₄ + NaOH)."""

    ka1: float
    ka2: float

    topology: ClassVar[Topology] = Topology.DIPROTIC
    protic_order: ClassVar[int] = 2

    @property
    def dissociation_constants(self) -> Tuple[float, ...]:
        return (self.ka1, self.ka2)

    @property
    def pka1(self) -> float:
        return _pk(self.ka1)

    @property
    def pka2(self) -> float:
        return _pk(self.ka2)


@dataclass(frozen=True)
class TriproticTitration(_PolyproticTitration):
    """Triprotic acid analyte + strong base titrant (e.g. H₃PO₄ + NaOH)."""

    ka1: float
    ka2: float
    ka3: float

    topology: ClassVar[Topology] = Topology.TRIPROTIC
    protic_order: ClassVar[int] = 3

    @property
    def dissociation_constants(self) -> Tuple[float, ...]:
        return (self.ka1, self.ka2, self.ka3)

    @property
    def pka1(self) -> float:
        return _pk(self.ka1)

    @property
    def pka2(self) -> float:
        return _pk(self.ka2)

    @property
    def pka3(self) -> float:
        return _pk(self.ka3)


TitrationRecord = Union[
    StrongStrongTitration,
    WeakStrongTitration,
    StrongWeakTitration,
    DiproticTitration,
    TriproticTitration,
]

RECORD_TYPES: dict[Topology, type] = {
    Topology.STRONG_STRONG: StrongStrongTitration,
    Topology.WEAK_STRONG: WeakStrongTitration,
    Topology.STRONG_WEAK: StrongWeakTitration,
    Topology.DIPROTIC: DiproticTitration,
    Topology.TRIPROTIC: TriproticTitration,
}
