"""Parsing of stored ratio values.

Catalog ratio cells hold either a plain number (``"0.25"``, ``"1,200"``) or a
percentage (``"23.5%"``). The parsed value is classified once: anything below
one is a share of the per-unit calories, anything from one upwards is an
absolute number of calories per unit of quantity.
"""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

ABSOLUTE_THRESHOLD = 1.0


class RatioKind(str, Enum):
    """Classification of a parsed ratio."""

    PERCENTAGE = "percentage"
    ABSOLUTE = "absolute"
    EMPTY = "empty"


def parse_ratio(raw: object) -> float | None:
    """Parse a stored ratio into a float, or None when empty or malformed."""
    if raw is None:
        return None
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int | float):
        return _finite(float(raw))
    text = str(raw).strip()
    if not text:
        return None
    if "%" in text:
        number = _to_float(text.replace("%", "").strip())
        return number / 100 if number is not None else None
    return _to_float(text.replace(",", ""))


def round_calories(value: float) -> int:
    """Round half away from zero, matching spreadsheet rounding."""
    if not math.isfinite(value):
        raise ValueError(f"Calorie value out of range: {value}")
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class Ratio:
    """A ratio value tagged with its classification."""

    kind: RatioKind
    value: float | None = None

    @classmethod
    def parse(cls, raw: object) -> "Ratio":
        """Parse and classify a stored ratio."""
        value = parse_ratio(raw)
        if value is None:
            return cls(RatioKind.EMPTY)
        if value < ABSOLUTE_THRESHOLD:
            return cls(RatioKind.PERCENTAGE, value)
        return cls(RatioKind.ABSOLUTE, value)

    @property
    def is_empty(self) -> bool:
        return self.kind is RatioKind.EMPTY

    def allocate(self, per_unit: float, quantity: float) -> int | None:
        """Return the calories this ratio allocates for a usage quantity."""
        if self.value is None:
            return None
        if self.kind is RatioKind.PERCENTAGE:
            return round_calories(self.value * per_unit * quantity)
        return round_calories(self.value * quantity)


EMPTY_RATIO = Ratio(RatioKind.EMPTY)


def _to_float(text: str) -> float | None:
    if not text:
        return None
    try:
        return _finite(float(text))
    except ValueError:
        return None


def _finite(value: float) -> float | None:
    return value if math.isfinite(value) else None
