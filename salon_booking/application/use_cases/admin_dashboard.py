from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from decimal import Decimal

from salon_booking.application.exceptions import (
    BackendError,
    BookingNotFoundError,
    StatusTransitionError,
    UpdateInFlightError,
)
from salon_booking.application.ports.booking_repository import BookingRepositoryPort
from salon_booking.domain.entities.booking import (
    Booking,
    BookingStatus,
    StatusAction,
    apply_action,
    available_actions,
)


@dataclass(frozen=True)
class DashboardStats:
    total: int
    pending: int
    confirmed: int
    completed: int
    revenue: Decimal  # sum of service prices of completed bookings


@dataclass(frozen=True)
class BookingRow:
    booking: Booking
    actions: tuple[StatusAction, ...]


@dataclass(frozen=True)
class DashboardView:
    bookings: list[BookingRow]
    stats: DashboardStats


def compute_stats(bookings: list[Booking]) -> DashboardStats:
    completed = [b for b in bookings if b.status == BookingStatus.completed]
    return DashboardStats(
        total=len(bookings),
        pending=sum(1 for b in bookings if b.status == BookingStatus.pending),
        confirmed=sum(1 for b in bookings if b.status == BookingStatus.confirmed),
        completed=len(completed),
        revenue=sum((b.service.price for b in completed if b.service), Decimal("0")),
    )


class AdminDashboardUseCase:
    def __init__(self, bookings: BookingRepositoryPort) -> None:
        self._bookings = bookings
        self._in_flight: set[str] = set()
        self._in_flight_lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def load(self) -> DashboardView:
        try:
            bookings = self._bookings.list_bookings()
        except BackendError as e:
            self._logger.error("Error fetching bookings", extra={"error": str(e), "status": e.status_code})
            raise
        return DashboardView(
            bookings=[BookingRow(booking=b, actions=available_actions(b.status)) for b in bookings],
            stats=compute_stats(bookings),
        )

    def change_status(self, booking_id: str, action: StatusAction) -> DashboardView:
        """Apply one admin action and return the re-fetched dashboard.

        Only the actions offered for the booking's current status are accepted. The
        status is read after the per-booking guard is taken, so an action sent from a
        stale view is checked against the stored status.
        """
        with self._in_flight_lock:
            if booking_id in self._in_flight:
                raise UpdateInFlightError(booking_id)
            self._in_flight.add(booking_id)

        try:
            current = self._find(booking_id)
            target = apply_action(current.status, action)
            if target is None:
                raise StatusTransitionError(
                    f"cannot {action.value} a booking that is {current.status.value}"
                )
            self._bookings.update_booking_status(booking_id, target)
        except BackendError as e:
            self._logger.error(
                "Error updating booking",
                extra={"booking_id": booking_id, "status": action.value, "error": str(e)},
            )
            raise
        finally:
            with self._in_flight_lock:
                self._in_flight.discard(booking_id)

        self._logger.info("Booking status updated", extra={"booking_id": booking_id, "status": target.value})
        return self.load()

    def _find(self, booking_id: str) -> Booking:
        for booking in self._bookings.list_bookings():
            if booking.id == booking_id:
                return booking
        raise BookingNotFoundError(booking_id)
