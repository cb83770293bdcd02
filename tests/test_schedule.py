"""
Tests for time slots and bookable dates.
"""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from conftest import TODAY
from salon_booking.application.utils.schedule import build_time_slots, is_bookable_date


def test_default_slots_cover_business_day():
    slots = build_time_slots()

    assert slots[0] == "09:00"
    assert slots[-1] == "17:30"
    assert len(slots) == 18
    assert "12:30" in slots
    assert "18:00" not in slots


def test_custom_interval():
    assert build_time_slots("10:00", "11:00", 20) == ["10:00", "10:20", "10:40", "11:00"]


def test_invalid_slot_configuration():
    with pytest.raises(ValueError):
        build_time_slots("17:00", "09:00", 30)
    with pytest.raises(ValueError):
        build_time_slots("09:00", "17:00", 0)


def test_past_dates_and_today_are_not_bookable():
    assert is_bookable_date(TODAY - timedelta(days=1), TODAY) is False
    assert is_bookable_date(TODAY, TODAY) is False
    assert is_bookable_date(TODAY + timedelta(days=1), TODAY) is True


def test_sunday_is_closed():
    sunday = date(2026, 10, 25)
    assert sunday.weekday() == 6

    assert is_bookable_date(sunday, TODAY) is False
    assert is_bookable_date(sunday - timedelta(days=1), TODAY) is True
    assert is_bookable_date(sunday, TODAY, closed_weekdays={0}) is True
