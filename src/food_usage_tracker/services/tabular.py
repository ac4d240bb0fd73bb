"""Conversion helpers for raw spreadsheet cells."""

import math
from datetime import date, datetime

_INACTIVE_MARKERS = {"false", "0", "no", "inactive", "ngưng"}


def cell_text(cell: object) -> str | None:
    """Return trimmed cell text, or None for blank cells."""
    if cell is None:
        return None
    if isinstance(cell, float) and cell.is_integer():
        cell = int(cell)
    if isinstance(cell, datetime):
        cell = cell.date()
    if isinstance(cell, date):
        return cell.isoformat()
    text = str(cell).strip()
    return text or None


def cell_number(cell: object) -> float | None:
    """Return the numeric value of a cell, or None when it is not a number."""
    if cell is None or isinstance(cell, bool):
        return None
    if isinstance(cell, int | float):
        value = float(cell)
    else:
        text = str(cell).strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    return value if math.isfinite(value) else None


def cell_active(cell: object) -> bool:
    """Interpret an active-flag cell; blank cells mean active."""
    text = cell_text(cell)
    if text is None:
        return True
    return text.lower() not in _INACTIVE_MARKERS


def is_blank_row(row: list[object]) -> bool:
    """Return True when no cell in the row holds a value."""
    return all(cell_text(cell) is None for cell in row)
