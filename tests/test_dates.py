"""Calendar-date helpers."""

from datetime import date, datetime

import pytest

from clinicdesk.shared.dates import parse_local_date, today, week_bounds


def test_parse_local_date_keeps_calendar_day():
    assert parse_local_date("1990-08-22") == date(1990, 8, 22)


def test_parse_local_date_ignores_time_and_offset():
    # A late-evening timestamp with a negative offset is still the same day
    assert parse_local_date("1990-08-22T23:30:00-05:00") == date(1990, 8, 22)
    assert parse_local_date("2024-01-01T00:00:00Z") == date(2024, 1, 1)


@pytest.mark.parametrize("value", ["", "22/08/1990", "1990-13-01", "not-a-date"])
def test_parse_local_date_rejects_garbage(value):
    with pytest.raises(ValueError):
        parse_local_date(value)


def test_week_bounds_start_on_sunday():
    # Wednesday 15 May 2024
    assert week_bounds(date(2024, 5, 15)) == (date(2024, 5, 12), date(2024, 5, 18))


def test_week_bounds_on_sunday_and_saturday():
    assert week_bounds(date(2024, 5, 12)) == (date(2024, 5, 12), date(2024, 5, 18))
    assert week_bounds(date(2024, 5, 18)) == (date(2024, 5, 12), date(2024, 5, 18))


def test_week_bounds_across_month_end():
    # Thursday 1 February 2024
    assert week_bounds(date(2024, 2, 1)) == (date(2024, 1, 28), date(2024, 2, 3))


def test_today_uses_given_clock():
    assert today(datetime(2024, 5, 15, 23, 59, 59)) == date(2024, 5, 15)
