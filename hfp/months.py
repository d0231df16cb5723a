"""Month-granularity date helpers."""

from __future__ import annotations

from datetime import date, datetime

MONTH_FORMATS = ("%Y-%m", "%Y-%m-%d")


def parse_month(value: str | None) -> date | None:
    """Parse ``YYYY-MM`` or ``YYYY-MM-DD`` into the first day of that month.

    Returns ``None`` for missing or malformed values.
    """
    if not isinstance(value, str):
        return None
    for fmt in MONTH_FORMATS:
        try:
            dt = datetime.strptime(value, fmt)
        except ValueError:
            continue
        return date(dt.year, dt.month, 1)
    return None


def month_start(value: date) -> date:
    return date(value.year, value.month, 1)


def month_index(value: date) -> int:
    return value.year * 12 + (value.month - 1)


def add_months(value: date, months: int) -> date:
    idx = month_index(value) + months
    return date(idx // 12, idx % 12 + 1, 1)


def format_month(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}"
