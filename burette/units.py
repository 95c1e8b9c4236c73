"""Volume and amount conversions for titration mixtures."""

from __future__ import annotations

CM3_PER_DM3: float = 1000.0


def cm3_to_dm3(volume_cm3: float) -> float:
    """Convert a delivered volume from cm^3 to dm^3.

    Args:
        volume_cm3 (float): Volume in cubic centimeters (cm^3, numerically
            equal to mL).

    Returns:
        float: Volume in cubic decimeters (dm^3, numerically equal to L).
    """
    return float(volume_cm3) / CM3_PER_DM3


def moles_delivered(volume_cm3: float, molarity: float) -> float:
    """Return the amount of solute in a volume of solution.

    The product is formed before the unit conversion (``V * M / 1000``) so
    that equal analyte and titrant amounts compare equal bit-for-bit in the
    common catalog cases (e.g. 25.0 cm^3 of 0.100 M on both sides).

    Args:
        volume_cm3 (float): Solution volume in cm^3.
        molarity (float): Concentration in mol dm^-3.

    Returns:
        float: Amount in mol.
    """
    return float(volume_cm3) * float(molarity) / CM3_PER_DM3


def total_volume_dm3(analyte_cm3: float, titrant_cm3: float) -> float:
    """Return the mixed solution volume in dm^3."""
    return cm3_to_dm3(float(analyte_cm3) + float(titrant_cm3))
