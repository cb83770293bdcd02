from __future__ import annotations

import logging
from dataclasses import dataclass

from salon_booking.application.exceptions import BackendError, PartialSubmissionError
from salon_booking.application.ports.booking_repository import BookingRepositoryPort
from salon_booking.application.ports.identity import IdentityPort
from salon_booking.domain.entities.booking import Booking, BookingRecord
from salon_booking.domain.entities.wizard_state import BookingDraft


@dataclass(frozen=True)
class SubmissionResult:
    success: bool
    order_number: str | None = None
    bookings: tuple[Booking, ...] = ()
    error_kind: str | None = None  # "invalid", "persistence", "partial", "unexpected"
    message: str | None = None


GENERIC_FAILURE = "There was an error creating your booking. Please try again."


class SubmitBookingUseCase:
    """Persist a validated draft: one primary row, then one secondary row per extra service.

    Secondary rows point at the primary row's order number in their notes. If the
    secondary batch fails the primary row stays stored; nothing is rolled back.
    """

    def __init__(self, bookings: BookingRepositoryPort, identity: IdentityPort) -> None:
        self._bookings = bookings
        self._identity = identity
        self._logger = logging.getLogger(__name__)

    def execute(self, draft: BookingDraft, access_token: str | None = None) -> SubmissionResult:
        if not self._is_complete(draft):
            return SubmissionResult(
                success=False,
                error_kind="invalid",
                message="Please fill in all required fields.",
            )

        user_id = self._resolve_actor(access_token)

        try:
            primary = self._bookings.create_booking(self._build_record(draft, 0, user_id, notes=draft.notes))
        except BackendError as e:
            self._logger.error("Error creating booking", extra={"error": str(e), "status": e.status_code})
            return SubmissionResult(success=False, error_kind="persistence", message=GENERIC_FAILURE)

        created = [primary]
        if len(draft.selected_services) > 1:
            try:
                created.extend(self._create_additional(draft, primary, user_id))
            except PartialSubmissionError as e:
                self._logger.error(
                    "Additional services not stored; primary booking kept",
                    extra={"order_number": e.order_number, "error": str(e), "status": e.status_code},
                )
                return SubmissionResult(success=False, error_kind="partial", message=GENERIC_FAILURE)

        self._logger.info(
            "Booking created",
            extra={"order_number": primary.order_number, "service_count": len(created)},
        )
        return SubmissionResult(success=True, order_number=primary.order_number, bookings=tuple(created))

    def _create_additional(self, draft: BookingDraft, primary: Booking, user_id: str | None) -> list[Booking]:
        records = [
            self._build_record(
                draft,
                index,
                user_id,
                notes=f"Additional service for booking {primary.order_number}",
            )
            for index in range(1, len(draft.selected_services))
        ]
        try:
            return self._bookings.create_bookings(records)
        except BackendError as e:
            raise PartialSubmissionError(
                str(e),
                order_number=primary.order_number,
                status_code=e.status_code,
                details=e.details,
            ) from e

    def _build_record(self, draft: BookingDraft, index: int, user_id: str | None, notes: str | None) -> BookingRecord:
        return BookingRecord(
            service_id=draft.selected_services[index].id,
            customer=draft.customer,
            booking_date=draft.date,
            booking_time=draft.time,
            service_location=draft.service_location,
            notes=notes,
            user_id=user_id,
        )

    def _resolve_actor(self, access_token: str | None) -> str | None:
        if not access_token:
            return None
        try:
            return self._identity.get_current_actor_id(access_token)
        except BackendError as e:
            self._logger.warning("Could not resolve current user; booking anonymously", extra={"error": str(e)})
            return None

    def _is_complete(self, draft: BookingDraft) -> bool:
        return bool(
            draft.selected_services
            and draft.customer.is_complete()
            and draft.date is not None
            and draft.time
        )
