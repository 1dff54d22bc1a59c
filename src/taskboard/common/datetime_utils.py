from __future__ import annotations

from datetime import date, datetime, timedelta


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_date(value: date | None) -> str | None:
    return value.strftime("%Y-%m-%d") if value else None


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mock easier.
    """
    return date.today()


def date_filter_range(date_filter: str, *, today: date, custom_date: date | None = None) -> tuple[date, date]:
    """Inclusive (start, end) window for a named date filter.

    ``past_week`` is Monday to Saturday of the previous week and
    ``past_month`` the whole previous calendar month.
    """
    if date_filter == "today":
        return today, today
    if date_filter == "yesterday":
        day = today - timedelta(days=1)
        return day, day
    if date_filter == "custom":
        if custom_date is None:
            raise ValueError("custom filter needs a date")
        return custom_date, custom_date
    if date_filter == "past_week":
        week_ago = today - timedelta(days=7)
        monday = week_ago - timedelta(days=week_ago.weekday())
        return monday, monday + timedelta(days=5)
    if date_filter == "past_month":
        last = today.replace(day=1) - timedelta(days=1)
        return last.replace(day=1), last
    raise ValueError(f"unknown date filter: {date_filter}")
