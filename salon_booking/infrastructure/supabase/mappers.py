from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from salon_booking.application.exceptions import BackendError
from salon_booking.domain.entities.booking import (
    Booking,
    BookingStatus,
    CustomerInfo,
    ServiceLocation,
    ServiceSummary,
)
from salon_booking.domain.entities.service import Service, ServiceCategory

# ArithmeticError covers decimal.InvalidOperation from a non-numeric price.
_ROW_ERRORS = (KeyError, ValueError, TypeError, ArithmeticError)


def category_from_row(row: dict[str, Any]) -> ServiceCategory:
    try:
        return ServiceCategory(
            id=str(row["id"]),
            name=row.get("name") or "",
            description=row.get("description") or "",
            image_url=row.get("image_url"),
        )
    except _ROW_ERRORS as e:
        raise BackendError(f"malformed category row: {e}", details=row) from e


def service_from_row(row: dict[str, Any]) -> Service:
    try:
        return Service(
            id=str(row["id"]),
            category_id=str(row.get("category_id") or ""),
            name=row.get("name") or "",
            description=row.get("description") or "",
            duration=int(row.get("duration") or 0),
            price=_money(row.get("price")),
            image_url=row.get("image_url"),
        )
    except _ROW_ERRORS as e:
        raise BackendError(f"malformed service row: {e}", details=row) from e


def booking_from_row(row: dict[str, Any]) -> Booking:
    try:
        joined = row.get("services")
        service = None
        if isinstance(joined, dict):
            service = ServiceSummary(
                name=joined.get("name") or "",
                price=_money(joined.get("price")),
                duration=int(joined.get("duration") or 0),
            )
        return Booking(
            id=str(row["id"]),
            order_number=str(row.get("order_number") or ""),
            service_id=str(row.get("service_id") or ""),
            customer=CustomerInfo(
                name=row.get("customer_name") or "",
                email=row.get("customer_email") or "",
                phone=row.get("customer_phone") or "",
            ),
            booking_date=date.fromisoformat(row["booking_date"]),
            booking_time=str(row["booking_time"])[:5],  # Postgres time columns come back as HH:MM:SS
            service_location=ServiceLocation(row.get("service_location") or ServiceLocation.in_salon.value),
            status=BookingStatus(row.get("status") or BookingStatus.pending.value),
            notes=row.get("notes"),
            user_id=row.get("user_id"),
            created_at=_timestamp(row.get("created_at")),
            service=service,
        )
    except _ROW_ERRORS as e:
        raise BackendError(f"malformed booking row: {e}", details=row) from e


def _money(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    return Decimal(str(value))


def _timestamp(value: Any) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
