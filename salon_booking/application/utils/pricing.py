from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from salon_booking.domain.entities.booking import ServiceLocation
from salon_booking.domain.entities.price_summary import PriceSummary
from salon_booking.domain.entities.service import Service

TRAVEL_FEE = Decimal("25")


def subtotal(services: Iterable[Service]) -> Decimal:
    return sum((Decimal(s.price) for s in services), Decimal("0"))


def travel_fee(location: ServiceLocation) -> Decimal:
    return TRAVEL_FEE if location == ServiceLocation.at_home else Decimal("0")


def total(services: Iterable[Service], location: ServiceLocation) -> Decimal:
    return subtotal(services) + travel_fee(location)


def total_duration(services: Iterable[Service]) -> int:
    return sum(s.duration for s in services)


def summarize(services: Iterable[Service], location: ServiceLocation) -> PriceSummary:
    services = list(services)
    sub = subtotal(services)
    fee = travel_fee(location)
    return PriceSummary(
        subtotal=sub,
        travel_fee=fee,
        total=sub + fee,
        total_duration=total_duration(services),
    )


def format_duration(minutes: int) -> str:
    """Format minutes as '45m', '1h' or '1h 15m'."""
    hours, mins = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {mins}m" if mins > 0 else f"{hours}h"
    return f"{mins}m"


def format_price(amount: Decimal) -> str:
    return f"${Decimal(amount):.2f}"
