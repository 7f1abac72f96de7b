"""Calendar date helpers."""

from datetime import date, datetime


def parse_calendar_date(value: str | date) -> date:
    """
    Parse a calendar date, dropping any time-of-day component.

    Accepts ``YYYY-MM-DD`` or a full ISO 8601 timestamp.

    Raises:
        ValueError: If the value is empty or not an ISO date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = value.strip()
    if not text:
        raise ValueError("Date is required")

    try:
        return date.fromisoformat(text)
    except ValueError:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()


def format_calendar_date(value: date) -> str:
    """Format a date as ``YYYY-MM-DD`` with no time-of-day component."""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()
