"""Parsing helpers for due date and due time options."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

from clarity_list.models import TaskValidationError

_RELATIVE_DAYS = {
    "today": 0,
    "tomorrow": 1,
}


def parse_due_date(value: str | None, *, today: date | None = None) -> date | None:
    """Parse ``today``, ``tomorrow`` or an ISO ``YYYY-MM-DD`` date.

    Raises:
        TaskValidationError: If the value is not a recognised date
    """
    if value is None or not value.strip():
        return None
    text = value.strip().lower()
    if text in _RELATIVE_DAYS:
        return (today or date.today()) + timedelta(days=_RELATIVE_DAYS[text])
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise TaskValidationError(
            f"Invalid date '{value}'. Use YYYY-MM-DD, 'today' or 'tomorrow'.",
            field="due_date",
        ) from None


def parse_due_time(value: str | None) -> time | None:
    """Parse a 24-hour ``HH:MM`` time of day.

    Raises:
        TaskValidationError: If the value is not a valid time
    """
    if value is None or not value.strip():
        return None
    try:
        return datetime.strptime(value.strip(), "%H:%M").time()
    except ValueError:
        raise TaskValidationError(
            f"Invalid time '{value}'. Use HH:MM (24-hour).", field="due_time"
        ) from None
