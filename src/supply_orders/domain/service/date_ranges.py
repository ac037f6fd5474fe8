"""Preset date ranges for the history filter.

Each preset returns an inclusive ``(date_from, date_to)`` pair of ISO date
strings, ready to hand to the history query.
"""

from __future__ import annotations

from datetime import date, timedelta


def _iso(d: date) -> str:
    return d.isoformat()


def one_year_before(today: date) -> date:
    try:
        return today.replace(year=today.year - 1)
    except ValueError:
        # Feb 29 has no counterpart in the previous year
        return today.replace(year=today.year - 1, day=28)


def default_range(today: date) -> tuple[str, str]:
    """Everything the retention window can still hold: a year ago to today."""
    return _iso(one_year_before(today)), _iso(today)


def this_week(today: date) -> tuple[str, str]:
    """Monday to Sunday of the current week."""
    monday = today - timedelta(days=today.weekday())
    return _iso(monday), _iso(monday + timedelta(days=6))


def this_month(today: date) -> tuple[str, str]:
    first = today.replace(day=1)
    next_first = (first + timedelta(days=32)).replace(day=1)
    return _iso(first), _iso(next_first - timedelta(days=1))


def last_month(today: date) -> tuple[str, str]:
    last_day = today.replace(day=1) - timedelta(days=1)
    return _iso(last_day.replace(day=1)), _iso(last_day)


PRESETS = {
    "week": this_week,
    "month": this_month,
    "last-month": last_month,
}


def format_month_day(iso_date: str) -> str:
    """'2025-06-03' -> '06/03'; anything unparseable is returned unchanged."""
    parts = iso_date.split("-") if iso_date else []
    if len(parts) != 3:
        return iso_date
    return f"{parts[1]}/{parts[2]}"
