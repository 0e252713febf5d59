"""Month/year period labels used as the chart's horizontal axis keys."""

from __future__ import annotations

from typing import Tuple

MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_MONTH_BY_NAME = {name.lower(): idx + 1 for idx, name in enumerate(MONTH_NAMES)}


class InvalidPeriodError(ValueError):
    """Raised when a month/year pair (or label) cannot name a calendar period."""


def period_label(month: int, year: int) -> str:
    """Return a label like ``"January 2021"``.

    Out-of-range months are a data-integrity violation upstream, so they
    raise instead of producing a malformed label.
    """
    if isinstance(month, bool) or not isinstance(month, int):
        raise InvalidPeriodError(f"month must be an integer, got {month!r}")
    if isinstance(year, bool) or not isinstance(year, int):
        raise InvalidPeriodError(f"year must be an integer, got {year!r}")
    if not 1 <= month <= 12:
        raise InvalidPeriodError(f"month out of range 1..12: {month}")
    return f"{MONTH_NAMES[month - 1]} {year}"


def period_sort_key(label: str) -> Tuple[int, int]:
    """Return ``(year, month)`` for a label produced by `period_label`."""
    parts = str(label or "").strip().split()
    if len(parts) != 2:
        raise InvalidPeriodError(f"not a period label: {label!r}")
    month = _MONTH_BY_NAME.get(parts[0].lower())
    if month is None:
        raise InvalidPeriodError(f"unknown month name in {label!r}")
    try:
        year = int(parts[1])
    except ValueError as e:
        raise InvalidPeriodError(f"invalid year in {label!r}") from e
    return year, month
