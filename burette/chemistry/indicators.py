"""Acid-base indicator catalog and matching rules.

An indicator is appropriate for a titration when its transition interval
brackets the equivalence-point pH, so that the colour change coincides with
the steep part of the curve.

Colour model:
    The flask colour is a teaching cue, not a measurement. Below the
    transition interval the acidic colour is shown, above it the basic
    colour, and inside the interval the basic colour as well (no blending).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .validation import require_finite, require_interval

TRANSPARENT = "transparent"


@dataclass(frozen=True)
class Indicator:
    """One acid-base indicator.

    Attributes:
        id: Catalog id, e.g. ``"phenolphthalein"``.
        name: Display name.
        ph_range: Transition interval ``(low, high)`` with ``low < high``.
        color_acidic: Colour below ``low``.
        color_basic: Colour above ``high``.
        description: Typical use.
    """

    id: str
    name: str
    ph_range: Tuple[float, float]
    color_acidic: str
    color_basic: str
    description: str = ""

    def __post_init__(self) -> None:
        low, high = self.ph_range
        object.__setattr__(
            self, "ph_range", require_interval(low, high, f"{self.id} pH range")
        )

    @property
    def low(self) -> float:
        return self.ph_range[0]

    @property
    def high(self) -> float:
        return self.ph_range[1]

    def brackets(self, ph: float) -> bool:
        """Return True if ``ph`` lies in the closed transition interval."""
        return self.low <= ph <= self.high


INDICATORS: Tuple[Indicator, ...] = (
    Indicator(
        id="methyl-orange",
        name="Methyl orange",
        ph_range=(3.1, 4.4),
        color_acidic="#ef4444",
        color_basic="#f97316",
        description="Strong acid titrations",
    ),
    Indicator(
        id="methyl-red",
        name="Methyl red",
        ph_range=(4.4, 6.2),
        color_acidic="#dc2626",
        color_basic="#fbbf24",
        description="Weak base + strong acid titrations",
    ),
    Indicator(
        id="bromothymol-blue",
        name="Bromothymol blue",
        ph_range=(6.0, 7.6),
        color_acidic="#fbbf24",
        color_basic="#3b82f6",
        description="Strong acid + strong base titrations",
    ),
    Indicator(
        id="phenolphthalein",
        name="Phenolphthalein",
        ph_range=(8.3, 10.0),
        color_acidic=TRANSPARENT,
        color_basic="#ec4899",
        description="Weak acid + strong base titrations",
    ),
    Indicator(
        id="thymol-blue",
        name="Thymol blue",
        ph_range=(8.0, 9.6),
        color_acidic="#fbbf24",
        color_basic="#3b82f6",
        description="Alternative for weak acid + strong base titrations",
    ),
)

_BY_ID = {indicator.id: indicator for indicator in INDICATORS}

# Universal indicator palette, one colour per whole pH unit 0..14.
PH_COLORS: Tuple[str, ...] = (
    "#8B0000",
    "#DC143C",
    "#FF0000",
    "#FF4500",
    "#FF6347",
    "#FFA500",
    "#FFD700",
    "#00FF00",
    "#00CED1",
    "#1E90FF",
    "#0000FF",
    "#4B0082",
    "#8B00FF",
    "#9400D3",
    "#800080",
)


def get_indicator(indicator_id: str) -> Indicator:
    """Return the catalog indicator with ``indicator_id``.

    Raises:
        KeyError: If no indicator has that id.
    """
    try:
        return _BY_ID[indicator_id]
    except KeyError:
        raise KeyError(
            f"Unknown indicator {indicator_id!r}; known: {sorted(_BY_ID)}"
        ) from None


def is_indicator_appropriate(indicator_id: str, equivalence_ph: float) -> bool:
    """Return True if the indicator's interval brackets ``equivalence_ph``.

    The interval is closed on both ends. An unknown id (including ``None``
    when nothing has been selected yet) is never appropriate.
    """
    indicator = _BY_ID.get(indicator_id)
    if indicator is None:
        return False
    return indicator.brackets(require_finite(equivalence_ph, "equivalence_ph"))


def indicator_color(indicator_id: str, ph: float) -> str:
    """Return the colour an indicator shows at ``ph``.

    Returns the acidic colour below the interval and the basic colour at or
    above its lower bound. Unknown ids give ``"transparent"``.
    """
    indicator = _BY_ID.get(indicator_id)
    if indicator is None:
        return TRANSPARENT
    if ph < indicator.low:
        return indicator.color_acidic
    return indicator.color_basic


def appropriate_indicators(equivalence_ph: float) -> List[str]:
    """Return ids of every catalog indicator that brackets ``equivalence_ph``."""
    ph = require_finite(equivalence_ph, "equivalence_ph")
    return [indicator.id for indicator in INDICATORS if indicator.brackets(ph)]


def ph_color(ph: float) -> str:
    """Return the universal-indicator colour for ``ph``, clamped to 0..14."""
    clamped = min(max(float(ph), 0.0), 14.0)
    return PH_COLORS[int(clamped)]
