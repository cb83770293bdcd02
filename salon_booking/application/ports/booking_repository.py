from __future__ import annotations

from abc import ABC, abstractmethod

from salon_booking.domain.entities.booking import Booking, BookingRecord, BookingStatus


class BookingRepositoryPort(ABC):
    @abstractmethod
    def create_booking(self, record: BookingRecord) -> Booking:
        """Insert one booking. Returns the stored row including its order number."""
        raise NotImplementedError

    @abstractmethod
    def create_bookings(self, records: list[BookingRecord]) -> list[Booking]:
        """Insert several bookings in one call. Any error fails the whole batch."""
        raise NotImplementedError

    @abstractmethod
    def update_booking_status(self, booking_id: str, status: BookingStatus) -> None:
        """Update the status of one booking. Raises BookingNotFoundError for unknown ids."""
        raise NotImplementedError

    @abstractmethod
    def list_bookings(self) -> list[Booking]:
        """List all bookings with their service summary, newest date and time first."""
        raise NotImplementedError
