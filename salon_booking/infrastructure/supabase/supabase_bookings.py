from __future__ import annotations

from salon_booking.application.exceptions import BackendError, BookingNotFoundError
from salon_booking.application.ports.booking_repository import BookingRepositoryPort
from salon_booking.domain.entities.booking import Booking, BookingRecord, BookingStatus
from salon_booking.infrastructure.supabase.mappers import booking_from_row
from salon_booking.infrastructure.supabase.rest_client import SupabaseRestClient

BOOKINGS_TABLE = "bookings"
LIST_COLUMNS = "*,services(name,price,duration)"


class SupabaseBookingRepository(BookingRepositoryPort):
    def __init__(self, client: SupabaseRestClient) -> None:
        self._client = client

    def create_booking(self, record: BookingRecord) -> Booking:
        rows = self._client.insert(BOOKINGS_TABLE, record.to_row())
        if len(rows) != 1:
            raise BackendError(f"expected one created booking, got {len(rows)}")
        booking = booking_from_row(rows[0])
        if not booking.order_number:
            raise BackendError("backend did not assign an order number", details=rows[0])
        return booking

    def create_bookings(self, records: list[BookingRecord]) -> list[Booking]:
        if not records:
            return []
        rows = self._client.insert(BOOKINGS_TABLE, [record.to_row() for record in records])
        return [booking_from_row(row) for row in rows]

    def update_booking_status(self, booking_id: str, status: BookingStatus) -> None:
        rows = self._client.update(
            BOOKINGS_TABLE,
            {"status": status.value},
            filters={"id": f"eq.{booking_id}"},
        )
        if not rows:
            raise BookingNotFoundError(booking_id)

    def list_bookings(self) -> list[Booking]:
        rows = self._client.select(
            BOOKINGS_TABLE,
            columns=LIST_COLUMNS,
            order=[("booking_date", False), ("booking_time", False)],
        )
        return [booking_from_row(row) for row in rows]
