from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import replace
from datetime import datetime, timezone

from salon_booking.application.exceptions import BookingNotFoundError
from salon_booking.application.ports.booking_repository import BookingRepositoryPort
from salon_booking.application.ports.catalog import CatalogPort
from salon_booking.domain.entities.booking import (
    Booking,
    BookingRecord,
    BookingStatus,
    ServiceSummary,
)


class MockBookingRepository(BookingRepositoryPort):
    """In-memory bookings table. Assigns order numbers the way the hosted backend does."""

    def __init__(self, catalog: CatalogPort | None = None, first_order_number: int = 1001) -> None:
        self._catalog = catalog
        self._rows: dict[str, Booking] = {}
        self._next_order_number = first_order_number
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def create_booking(self, record: BookingRecord) -> Booking:
        with self._lock:
            booking = self._store(record)
        self._logger.info(
            "Mock booking created",
            extra={"booking_id": booking.id, "order_number": booking.order_number},
        )
        return booking

    def create_bookings(self, records: list[BookingRecord]) -> list[Booking]:
        with self._lock:
            return [self._store(record) for record in records]

    def update_booking_status(self, booking_id: str, status: BookingStatus) -> None:
        with self._lock:
            booking = self._rows.get(booking_id)
            if booking is None:
                raise BookingNotFoundError(booking_id)
            self._rows[booking_id] = replace(booking, status=status)

    def list_bookings(self) -> list[Booking]:
        with self._lock:
            rows = list(self._rows.values())
        return sorted(rows, key=lambda b: (b.booking_date, b.booking_time), reverse=True)

    def _store(self, record: BookingRecord) -> Booking:
        order_number = f"ORD-{self._next_order_number}"
        self._next_order_number += 1
        booking = Booking(
            id=uuid.uuid4().hex,
            order_number=order_number,
            service_id=record.service_id,
            customer=record.customer,
            booking_date=record.booking_date,
            booking_time=record.booking_time,
            service_location=record.service_location,
            status=BookingStatus.pending,
            notes=record.to_row()["notes"],
            user_id=record.user_id,
            created_at=datetime.now(timezone.utc),
            service=self._summary(record.service_id),
        )
        self._rows[booking.id] = booking
        return booking

    def _summary(self, service_id: str) -> ServiceSummary | None:
        if self._catalog is None:
            return None
        service = self._catalog.get_service(service_id)
        if service is None:
            return None
        return ServiceSummary(name=service.name, price=service.price, duration=service.duration)
