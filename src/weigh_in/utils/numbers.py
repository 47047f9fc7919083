"""Numeric helpers for scale exports."""

import re

_NON_NUMERIC = re.compile(r"[^0-9.]")


def extract_number(value: str | None) -> float:
    """Pull the number out of a scale value such as ``"185.2 lb"`` or ``"18.5%"``.

    Missing values (empty or ``--``) become 0.
    """
    if not value or value.strip() == "--":
        return 0.0
    numeric = _NON_NUMERIC.sub("", value)
    try:
        return float(numeric)
    except ValueError:
        return 0.0


def is_number(value: object) -> bool:
    """True for ints and floats, but not bools."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def calculate_percentage(part: float, whole: float) -> float:
    """Percentage of ``part`` in ``whole``; 0 when ``whole`` is 0."""
    if whole == 0:
        return 0.0
    return part / whole * 100
