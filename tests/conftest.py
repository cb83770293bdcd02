from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from salon_booking.application.exceptions import BackendError
from salon_booking.application.ports.booking_repository import BookingRepositoryPort
from salon_booking.application.ports.catalog import CatalogPort
from salon_booking.domain.entities.booking import Booking, BookingRecord, BookingStatus
from salon_booking.domain.entities.service import Service
from salon_booking.infrastructure.mock.mock_bookings import MockBookingRepository

# A Monday. Bookings open from the next day (Tuesday); the closed Sunday is six days out.
TODAY = date(2026, 10, 19)


class RecordingBookingRepository(BookingRepositoryPort):
    """Wraps the mock repository, records calls and fails on demand."""

    def __init__(self, fail_primary: bool = False, fail_batch: bool = False, catalog: CatalogPort | None = None) -> None:
        self.inner = MockBookingRepository(catalog=catalog)
        self.fail_primary = fail_primary
        self.fail_batch = fail_batch
        self.created: list[BookingRecord] = []
        self.batches: list[list[BookingRecord]] = []
        self.calls = 0
        self.on_create = None

    def create_booking(self, record: BookingRecord) -> Booking:
        self.calls += 1
        if self.on_create is not None:
            self.on_create()
        if self.fail_primary:
            raise BackendError("duplicate key value violates unique constraint", status_code=409)
        self.created.append(record)
        return self.inner.create_booking(record)

    def create_bookings(self, records: list[BookingRecord]) -> list[Booking]:
        self.calls += 1
        if self.fail_batch:
            raise BackendError("connection reset", status_code=None)
        self.batches.append(list(records))
        return self.inner.create_bookings(records)

    def update_booking_status(self, booking_id: str, status: BookingStatus) -> None:
        self.calls += 1
        self.inner.update_booking_status(booking_id, status)

    def list_bookings(self) -> list[Booking]:
        return self.inner.list_bookings()


def make_service(service_id: str, price: str, duration: int, category_id: str = "cat-hair") -> Service:
    return Service(
        id=service_id,
        category_id=category_id,
        name=service_id.replace("-", " ").title(),
        description="",
        duration=duration,
        price=Decimal(price),
    )


@pytest.fixture
def cut() -> Service:
    return make_service("svc-cut", "40", 30)


@pytest.fixture
def colour() -> Service:
    return make_service("svc-colour", "60", 45)


@pytest.fixture
def recording_repo() -> RecordingBookingRepository:
    return RecordingBookingRepository()
