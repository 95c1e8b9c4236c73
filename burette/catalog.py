"""Static catalog of titration scenarios.

``TITRATION_DATA`` holds the scenarios as plain mappings, the same shape a
JSON file would have. :func:`load_titration_catalog` turns them into
validated, immutable records; any malformed entry stops the load with a
:class:`~burette.errors.PreconditionViolation` naming the entry.

Tabulated pH values are the rounded figures shown to players and come from
standard textbook tables. They are kept as data and are not required to
agree exactly with the engine (see ``burette.analysis`` for the cross-check).
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .chemistry.records import (
    RECORD_TYPES,
    ChemicalSpecies,
    Difficulty,
    TitrationRecord,
    Topology,
)
from .errors import PreconditionViolation

_NAOH = {"formula": "NaOH", "name": "Sodium hydroxide", "molarity": 0.100}
_KOH = {"formula": "KOH", "name": "Potassium hydroxide", "molarity": 0.100}
_HCL = {"formula": "HCl", "name": "Hydrochloric acid", "molarity": 0.100}

TITRATION_DATA: Tuple[Dict[str, Any], ...] = (
    # Strong acid + strong base
    {
        "id": 1,
        "topology": "strong-strong",
        "name": "HCl + NaOH",
        "analyte": {
            "formula": "HCl",
            "name": "Hydrochloric acid",
            "volume": 25.0,
            "molarity": 0.100,
        },
        "titrant": _NAOH,
        "equivalence_volume": 25.0,
        "equivalence_ph": 7.00,
        "initial_ph": 1.00,
        "best_indicator": "bromothymol-blue",
        "difficulty": "beginner",
    },
    {
        "id": 2,
        "topology": "strong-strong",
        "name": "HNO₃ + KOH",
        "analyte": {
            "formula": "HNO₃",
            "name": "Nitric acid",
            "volume": 30.0,
            "molarity": 0.0500,
        },
        "titrant": _KOH,
        "equivalence_volume": 15.0,
        "equivalence_ph": 7.00,
        "initial_ph": 1.30,
        "best_indicator": "bromothymol-blue",
        "difficulty": "beginner",
    },
    {
        "id": 3,
        "topology": "strong-strong",
        "name": "HCl + NaOH",
        "analyte": {
            "formula": "HCl",
            "name": "Hydrochloric acid",
            "volume": 50.0,
            "molarity": 0.200,
        },
        "titrant": _NAOH,
        "equivalence_volume": 100.0,
        "equivalence_ph": 7.00,
        "initial_ph": 0.70,
        "best_indicator": "bromothymol-blue",
        "difficulty": "beginner",
    },
    {
        "id": 4,
        "topology": "strong-strong",
        "name": "HClO₄ + LiOH",
        "analyte": {
            "formula": "HClO₄",
            "name": "Perchloric acid",
            "volume": 15.0,
            "molarity": 0.125,
        },
        "titrant": {
            "formula": "LiOH",
            "name": "Lithium hydroxide",
            "molarity": 0.100,
        },
        "equivalence_volume": 18.75,
        "equivalence_ph": 7.00,
        "initial_ph": 0.90,
        "best_indicator": "phenolphthalein",
        "difficulty": "beginner",
    },
    # Weak acid + strong base
    {
        "id": 5,
        "topology": "weak-strong",
        "name": "CH₃COOH + NaOH",
        "analyte": {
            "formula": "CH₃COOH",
            "name": "Ethanoic acid",
            "volume": 25.0,
            "molarity": 0.100,
        },
        "titrant": _NAOH,
        "equivalence_volume": 25.0,
        "equivalence_ph": 8.72,
        "initial_ph": 2.87,
        "half_equivalence_ph": 4.74,
        "best_indicator": "phenolphthalein",
        "difficulty": "intermediate",
        "ka": 1.8e-5,
    },
    {
        "id": 6,
        "topology": "weak-strong",
        "name": "HF + NaOH",
        "analyte": {
            "formula": "HF",
            "name": "Hydrofluoric acid",
            "volume": 30.0,
            "molarity": 0.150,
        },
        "titrant": _NAOH,
        "equivalence_volume": 45.0,
        "equivalence_ph": 8.08,
        "initial_ph": 2.08,
        "half_equivalence_ph": 3.17,
        "best_indicator": "phenolphthalein",
        "difficulty": "intermediate",
        "ka": 6.8e-4,
    },
    {
        "id": 7,
        "topology": "weak-strong",
        "name": "HCOOH + KOH",
        "analyte": {
            "formula": "HCOOH",
            "name": "Methanoic acid",
            "volume": 20.0,
            "molarity": 0.200,
        },
        "titrant": _KOH,
        "equivalence_volume": 40.0,
        "equivalence_ph": 8.35,
        "initial_ph": 2.22,
        "half_equivalence_ph": 3.75,
        "best_indicator": "phenolphthalein",
        "difficulty": "intermediate",
        "ka": 1.8e-4,
    },
    {
        "id": 8,
        "topology": "weak-strong",
        "name": "C₆H₅COOH + NaOH",
        "analyte": {
            "formula": "C₆H₅COOH",
            "name": "Benzoic acid",
            "volume": 25.0,
            "molarity": 0.100,
        },
        "titrant": _NAOH,
        "equivalence_volume": 25.0,
        "equivalence_ph": 8.60,
        "initial_ph": 2.60,
        "half_equivalence_ph": 4.19,
        "best_indicator": "phenolphthalein",
        "difficulty": "intermediate",
        "ka": 6.5e-5,
    },
    # Weak base + strong acid
    {
        "id": 9,
        "topology": "strong-weak",
        "name": "NH₃ + HCl",
        "analyte": {
            "formula": "NH₃",
            "name": "Ammonia",
            "volume": 25.0,
            "molarity": 0.100,
        },
        "titrant": _HCL,
        "equivalence_volume": 25.0,
        "equivalence_ph": 5.28,
        "initial_ph": 11.13,
        "half_equivalence_ph": 9.26,
        "best_indicator": "methyl-red",
        "difficulty": "intermediate",
        "kb": 1.8e-5,
        "pka": 9.26,
    },
    {
        "id": 10,
        "topology": "strong-weak",
        "name": "CH₃NH₂ + HCl",
        "analyte": {
            "formula": "CH₃NH₂",
            "name": "Methylamine",
            "volume": 25.0,
            "molarity": 0.100,
        },
        "titrant": _HCL,
        "equivalence_volume": 25.0,
        "equivalence_ph": 5.82,
        "initial_ph": 11.82,
        "half_equivalence_ph": 10.64,
        "best_indicator": "methyl-red",
        "difficulty": "intermediate",
        "kb": 4.4e-4,
        "pka": 10.64,
    },
    # Polyprotic acids + strong base
    {
        "id": 11,
        "topology": "diprotic",
        "name": "H₂SO₃ + NaOH",
        "analyte": {
            "formula": "H₂SO₃",
            "name": "Sulfurous acid",
            "volume": 25.0,
            "molarity": 0.100,
        },
        "titrant": _NAOH,
        "equivalence_volumes": [25.0, 50.0],
        "equivalence_phs": [4.5, 9.0],
        "initial_ph": 1.5,
        "half_equivalence_phs": [1.9, 7.2],
        "best_indicator": "phenolphthalein",
        "difficulty": "advanced",
        "ka1": 1.3e-2,
        "ka2": 6.3e-8,
    },
    {
        "id": 12,
        "topology": "diprotic",
        "name": "H₂C₂O₄ + NaOH",
        "analyte": {
            "formula": "H₂C₂O₄",
            "name": "Oxalic acid",
            "volume": 30.0,
            "molarity": 0.0800,
        },
        "titrant": _NAOH,
        "equivalence_volumes": [24.0, 48.0],
        "equivalence_phs": [2.9, 8.4],
        "initial_ph": 1.3,
        "half_equivalence_phs": [1.3, 4.3],
        "best_indicator": "phenolphthalein",
        "difficulty": "advanced",
        "ka1": 5.9e-2,
        "ka2": 6.4e-5,
    },
    {
        "id": 13,
        "topology": "triprotic",
        "name": "H₃PO₄ + NaOH",
        "analyte": {
            "formula": "H₃PO₄",
            "name": "Phosphoric acid",
            "volume": 25.0,
            "molarity": 0.100,
        },
        "titrant": _NAOH,
        "equivalence_volumes": [25.0, 50.0, 75.0],
        "equivalence_phs": [4.7, 9.8, 12.4],
        "initial_ph": 1.6,
        "half_equivalence_phs": [2.15, 7.20, 12.35],
        "best_indicator": "phenolphthalein",
        "difficulty": "expert",
        "ka1": 7.1e-3,
        "ka2": 6.3e-8,
        "ka3": 4.5e-13,
    },
)


def build_titration(entry: Mapping[str, Any]) -> TitrationRecord:
    """Build one validated record from a catalog mapping.

    Args:
        entry: Mapping with a ``"topology"`` tag, ``"analyte"`` and
            ``"titrant"`` sub-mappings, and the fields of the matching record
            class.

    Returns:
        TitrationRecord: The constructed, validated record.

    Raises:
        PreconditionViolation: If the topology tag is unknown, a field is
            missing or unexpected, or any value breaks a record invariant.
    """
    fields = dict(entry)
    label = f"catalog entry {fields.get('id', '?')}"
    try:
        topology = Topology(fields.pop("topology"))
    except (KeyError, ValueError) as exc:
        raise PreconditionViolation(f"{label}: missing or unknown topology") from exc

    record_type = RECORD_TYPES[topology]
    try:
        fields["analyte"] = ChemicalSpecies(**fields["analyte"])
        fields["titrant"] = ChemicalSpecies(**fields["titrant"])
        return record_type(**fields)
    except PreconditionViolation as exc:
        raise PreconditionViolation(f"{label}: {exc}") from exc
    except (KeyError, TypeError, ValueError) as exc:
        raise PreconditionViolation(
            f"{label}: malformed {topology.value} record ({exc})"
        ) from exc


def load_titration_catalog(
    data: Optional[Sequence[Mapping[str, Any]]] = None,
) -> Tuple[TitrationRecord, ...]:
    """Build and validate every catalog entry.

    Args:
        data: Entries to load. Defaults to :data:`TITRATION_DATA`.

    Returns:
        tuple[TitrationRecord, ...]: Records in catalog order.

    Raises:
        PreconditionViolation: On the first malformed entry or a duplicate id.
    """
    entries = TITRATION_DATA if data is None else data
    records = tuple(build_titration(entry) for entry in entries)
    ids = [record.id for record in records]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise PreconditionViolation(f"Duplicate titration ids: {duplicates}")
    return records


def get_titration_by_id(
    titration_id: int, catalog: Optional[Sequence[TitrationRecord]] = None
) -> TitrationRecord:
    """Return the record with ``titration_id``.

    Raises:
        KeyError: If no record has that id.
    """
    records = load_titration_catalog() if catalog is None else catalog
    for record in records:
        if record.id == titration_id:
            return record
    raise KeyError(f"No titration with id {titration_id}")


def titrations_by_difficulty(
    difficulty: Difficulty | str,
    catalog: Optional[Sequence[TitrationRecord]] = None,
) -> List[TitrationRecord]:
    """Return every record offered at ``difficulty``."""
    level = Difficulty(difficulty)
    records = load_titration_catalog() if catalog is None else catalog
    return [record for record in records if record.difficulty is level]


def random_titration(
    rng: Optional[np.random.Generator] = None,
    catalog: Optional[Sequence[TitrationRecord]] = None,
) -> TitrationRecord:
    """Pick a record uniformly at random.

    Args:
        rng: Random generator; a fresh ``numpy.random.default_rng()`` when
            omitted. Pass a seeded generator for reproducible rounds.
        catalog: Records to choose from. Defaults to the full catalog.
    """
    records = load_titration_catalog() if catalog is None else catalog
    if not records:
        raise PreconditionViolation("Cannot pick from an empty catalog")
    generator = np.random.default_rng() if rng is None else rng
    return records[int(generator.integers(len(records)))]
