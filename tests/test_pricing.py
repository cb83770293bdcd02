"""
Tests for price and duration aggregation.
"""

from __future__ import annotations

from decimal import Decimal

from conftest import make_service
from salon_booking.application.utils.pricing import (
    format_duration,
    format_price,
    subtotal,
    summarize,
    total,
    total_duration,
    travel_fee,
)
from salon_booking.domain.entities.booking import ServiceLocation


def test_two_services_at_home():
    """$40/30m + $60/45m at home -> subtotal 100, fee 25, total 125, 75 minutes."""
    services = [make_service("a", "40", 30), make_service("b", "60", 45)]

    summary = summarize(services, ServiceLocation.at_home)

    assert summary.subtotal == Decimal("100")
    assert summary.travel_fee == Decimal("25")
    assert summary.total == Decimal("125")
    assert summary.total_duration == 75


def test_subtotal_ignores_order():
    services = [make_service("a", "19.99", 10), make_service("b", "5", 20), make_service("c", "120.50", 90)]

    assert subtotal(services) == subtotal(list(reversed(services))) == Decimal("145.49")
    assert total_duration(services) == total_duration(services[::-1]) == 120


def test_travel_fee_only_at_home():
    services = [make_service("a", "80", 60)]

    assert travel_fee(ServiceLocation.in_salon) == Decimal("0")
    assert total(services, ServiceLocation.in_salon) == Decimal("80")
    assert total(services, ServiceLocation.at_home) == Decimal("105")


def test_empty_selection():
    assert subtotal([]) == Decimal("0")
    assert total([], ServiceLocation.in_salon) == Decimal("0")
    assert total([], ServiceLocation.at_home) == Decimal("25")
    assert total_duration([]) == 0


def test_summarize_accepts_generators():
    services = (make_service(str(i), "10", 15) for i in range(3))

    summary = summarize(services, ServiceLocation.in_salon)

    assert summary.total == Decimal("30")
    assert summary.total_duration == 45


def test_format_duration():
    assert format_duration(45) == "45m"
    assert format_duration(60) == "1h"
    assert format_duration(75) == "1h 15m"
    assert format_duration(0) == "0m"


def test_format_price():
    assert format_price(Decimal("125")) == "$125.00"
    assert format_price(Decimal("19.5")) == "$19.50"
