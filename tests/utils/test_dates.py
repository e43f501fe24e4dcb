"""Tests for due date and time option parsing."""

from datetime import date, time

import pytest

from clarity_list.models import TaskValidationError
from clarity_list.utils.dates import parse_due_date, parse_due_time

TODAY = date(2024, 5, 31)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, None),
        ("", None),
        ("today", TODAY),
        ("Tomorrow", date(2024, 6, 1)),
        ("2024-06-15", date(2024, 6, 15)),
    ],
)
def test_parse_due_date(value, expected):
    assert parse_due_date(value, today=TODAY) == expected


@pytest.mark.parametrize("value", ["someday", "yesterday", "2024-13-01", "06/01/2024"])
def test_parse_due_date_invalid(value):
    with pytest.raises(TaskValidationError) as exc_info:
        parse_due_date(value)
    assert exc_info.value.field == "due_date"


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, None), ("09:30", time(9, 30)), ("23:59", time(23, 59)), (" 7:05 ", time(7, 5))],
)
def test_parse_due_time(value, expected):
    assert parse_due_time(value) == expected


@pytest.mark.parametrize("value", ["24:00", "9am", "12:60"])
def test_parse_due_time_invalid(value):
    with pytest.raises(TaskValidationError):
        parse_due_time(value)
