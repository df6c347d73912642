"""
Report Periods

Week ranges (Monday to Sunday) and custom range resolution for payroll reports.
"""

from datetime import date, timedelta
from typing import Optional, Tuple


def get_week_range(anchor: date) -> Tuple[date, date]:
    """Monday and Sunday of the week containing anchor"""
    start = anchor - timedelta(days=anchor.weekday())
    return start, start + timedelta(days=6)


def shift_week(anchor: date, weeks: int) -> date:
    return anchor + timedelta(weeks=weeks)


def resolve_period(
    anchor: date,
    start: Optional[date] = None,
    end: Optional[date] = None
) -> Tuple[date, date]:
    """
    Resolve the report window.

    Explicit bounds win; a missing bound falls back to the anchor's week.
    """
    week_start, week_end = get_week_range(anchor)
    return start or week_start, end or week_end


def format_period_label(start: date, end: date) -> str:
    """e.g. 'Feb 2 - Feb 8, 2026' (year shown on both sides when they differ)"""
    if start.year != end.year:
        return f"{start:%b} {start.day}, {start.year} - {end:%b} {end.day}, {end.year}"
    return f"{start:%b} {start.day} - {end:%b} {end.day}, {end.year}"
