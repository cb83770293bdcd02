from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from salon_booking.application.exceptions import ServiceNotFoundError, WizardSessionNotFoundError
from salon_booking.application.ports.catalog import CatalogPort
from salon_booking.application.ports.wizard_session_store import WizardSessionStorePort
from salon_booking.application.use_cases.booking_wizard import (
    Back,
    BookingWizard,
    Next,
    RemoveService,
    SetDate,
    SetLocation,
    SetNotes,
    SetTime,
    SubmissionFailed,
    SubmissionStarted,
    SubmissionSucceeded,
    ToggleService,
    UpdateCustomer,
    WizardEvent,
    WizardResult,
)
from salon_booking.application.use_cases.submit_booking import GENERIC_FAILURE, SubmissionResult, SubmitBookingUseCase
from salon_booking.application.utils.schedule import today_in
from salon_booking.domain.entities.booking import ServiceLocation
from salon_booking.domain.entities.wizard_state import WizardState

_UNSET = object()


@dataclass(frozen=True)
class SessionResult:
    session_id: str
    result: WizardResult


@dataclass(frozen=True)
class SubmitOutcome:
    session_id: str
    action: str  # "confirmed", "failed", "rejected", "in_flight", "closed"
    state: WizardState | None
    submission: SubmissionResult | None = None
    reason: str | None = None


class WizardSessionUseCase:
    """Wizard entry point for the hosting app: one stored WizardState per session id."""

    def __init__(
        self,
        wizard: BookingWizard,
        catalog: CatalogPort,
        store: WizardSessionStorePort,
        submit_booking: SubmitBookingUseCase,
        timezone: str = "UTC",
    ) -> None:
        self._wizard = wizard
        self._catalog = catalog
        self._store = store
        self._submit_booking = submit_booking
        self._timezone = timezone
        self._logger = logging.getLogger(__name__)

    def open(self, service_id: str | None = None) -> tuple[str, WizardState]:
        service = None
        if service_id:
            service = self._catalog.get_service(service_id)
            if service is None:
                raise ServiceNotFoundError(service_id)
        state = self._wizard.open(service)
        session_id = self._store.create(state)
        self._logger.info("Wizard opened", extra={"session_id": session_id, "step": state.step.value})
        return session_id, state

    def get(self, session_id: str) -> WizardState:
        state = self._store.get(session_id)
        if state is None:
            raise WizardSessionNotFoundError(session_id)
        return state

    def toggle_service(self, session_id: str, service_id: str) -> SessionResult:
        service = self._catalog.get_service(service_id)
        if service is None:
            raise ServiceNotFoundError(service_id)
        return self._dispatch(session_id, ToggleService(service))

    def remove_service(self, session_id: str, service_id: str) -> SessionResult:
        return self._dispatch(session_id, RemoveService(service_id))

    def update_customer(
        self,
        session_id: str,
        name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        service_location: ServiceLocation | None = None,
    ) -> SessionResult:
        events: list[WizardEvent] = [UpdateCustomer(name=name, email=email, phone=phone)]
        if service_location is not None:
            events.append(SetLocation(service_location))
        return self._dispatch_all(session_id, events)

    def update_schedule(
        self,
        session_id: str,
        booking_date: date | None | object = _UNSET,
        time: str | None = None,
        notes: str | None = None,
    ) -> SessionResult:
        events: list[WizardEvent] = []
        if booking_date is not _UNSET:
            events.append(SetDate(booking_date))
        if time is not None:
            events.append(SetTime(time))
        if notes is not None:
            events.append(SetNotes(notes))
        return self._dispatch_all(session_id, events)

    def next(self, session_id: str) -> SessionResult:
        return self._dispatch(session_id, Next())

    def back(self, session_id: str) -> SessionResult:
        return self._dispatch(session_id, Back())

    def close(self, session_id: str) -> None:
        """Close the wizard. The draft is dropped; reopening starts from a fresh state."""
        with self._store.lock(session_id):
            state = self.get(session_id)
            self._store.delete(session_id)
        self._logger.info("Wizard closed", extra={"session_id": session_id, "step": state.step.value})

    def submit(self, session_id: str, access_token: str | None = None) -> SubmitOutcome:
        with self._store.lock(session_id):
            state = self.get(session_id)
            if state.submitting:
                return SubmitOutcome(
                    session_id=session_id,
                    action="in_flight",
                    state=state,
                    reason="submission in flight",
                )
            started = self._wizard.reduce(state, SubmissionStarted(), self._today())
            if not started.accepted:
                return SubmitOutcome(
                    session_id=session_id,
                    action="rejected",
                    state=state,
                    reason=started.reason,
                )
            self._store.set(session_id, started.updated_state)
            draft = started.updated_state.draft

        # Backend calls run outside the lock; the in-flight flag keeps other submits out.
        try:
            submission = self._submit_booking.execute(draft, access_token)
        except Exception as e:
            # The in-flight flag is cleared below on every path.
            self._logger.exception(
                "Unexpected error while submitting booking",
                extra={"session_id": session_id, "error": str(e)},
            )
            submission = SubmissionResult(success=False, error_kind="unexpected", message=GENERIC_FAILURE)

        with self._store.lock(session_id):
            current = self._store.get(session_id)
            if current is None:
                self._logger.warning(
                    "Wizard closed while submission was in flight",
                    extra={"session_id": session_id, "order_number": submission.order_number},
                )
                return SubmitOutcome(session_id=session_id, action="closed", state=None, submission=submission)

            if submission.success:
                event: WizardEvent = SubmissionSucceeded(submission.order_number or "")
            else:
                event = SubmissionFailed(submission.message or "Booking failed")
            finished = self._wizard.reduce(current, event, self._today())
            self._store.set(session_id, finished.updated_state)

        return SubmitOutcome(
            session_id=session_id,
            action=finished.action,
            state=finished.updated_state,
            submission=submission,
            reason=finished.reason if not submission.success else None,
        )

    def can_continue(self, state: WizardState) -> bool:
        return self._wizard.can_continue(state)

    @property
    def time_slots(self) -> list[str]:
        return self._wizard.time_slots

    def _dispatch(self, session_id: str, event: WizardEvent) -> SessionResult:
        return self._dispatch_all(session_id, [event])

    def _dispatch_all(self, session_id: str, events: list[WizardEvent]) -> SessionResult:
        """Apply events in order; stop at the first rejection and keep the state before it."""
        with self._store.lock(session_id):
            state = self.get(session_id)
            result = WizardResult(action="updated", accepted=True, reason=None, updated_state=state)
            today = self._today()
            for event in events:
                result = self._wizard.reduce(state, event, today)
                if not result.accepted:
                    break
                state = result.updated_state
            self._store.set(session_id, state)
        return SessionResult(session_id=session_id, result=result)

    def _today(self) -> date:
        return today_in(self._timezone)
