from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date

from salon_booking.application.utils.pricing import summarize
from salon_booking.application.utils.schedule import build_time_slots, is_bookable_date
from salon_booking.domain.entities.booking import CustomerInfo, ServiceLocation
from salon_booking.domain.entities.service import Service
from salon_booking.domain.entities.wizard_state import (
    BookingDraft,
    Confirmation,
    WizardState,
    WizardStep,
)


# ── Events ────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ToggleService:
    service: Service


@dataclass(frozen=True)
class RemoveService:
    service_id: str


@dataclass(frozen=True)
class UpdateCustomer:
    name: str | None = None
    email: str | None = None
    phone: str | None = None


@dataclass(frozen=True)
class SetLocation:
    location: ServiceLocation


@dataclass(frozen=True)
class SetDate:
    date: date | None


@dataclass(frozen=True)
class SetTime:
    time: str


@dataclass(frozen=True)
class SetNotes:
    notes: str


@dataclass(frozen=True)
class Next:
    pass


@dataclass(frozen=True)
class Back:
    pass


@dataclass(frozen=True)
class Close:
    pass


@dataclass(frozen=True)
class SubmissionStarted:
    pass


@dataclass(frozen=True)
class SubmissionSucceeded:
    order_number: str


@dataclass(frozen=True)
class SubmissionFailed:
    message: str


WizardEvent = (
    ToggleService
    | RemoveService
    | UpdateCustomer
    | SetLocation
    | SetDate
    | SetTime
    | SetNotes
    | Next
    | Back
    | Close
    | SubmissionStarted
    | SubmissionSucceeded
    | SubmissionFailed
)

_EDIT_EVENTS = (ToggleService, RemoveService, UpdateCustomer, SetLocation, SetDate, SetTime, SetNotes)

_FORWARD = {
    WizardStep.services: WizardStep.personal,
    WizardStep.personal: WizardStep.datetime,
    WizardStep.datetime: WizardStep.review,
}

_BACKWARD = {
    WizardStep.personal: WizardStep.services,
    WizardStep.datetime: WizardStep.personal,
    WizardStep.review: WizardStep.datetime,
}


@dataclass(frozen=True)
class WizardResult:
    action: str  # "updated", "advanced", "went_back", "reset", "submitting", "confirmed", "failed", "rejected"
    accepted: bool
    reason: str | None
    updated_state: WizardState


class BookingWizard:
    """Linear booking wizard: services -> personal -> datetime -> review -> confirmation.

    `reduce` is a pure function of (state, event, today); the only side effect
    in the whole flow is the backend call made between SubmissionStarted and
    SubmissionSucceeded/SubmissionFailed, which lives outside this class.
    """

    def __init__(
        self,
        time_slots: list[str] | None = None,
        closed_weekdays: frozenset[int] | set[int] = frozenset({6}),
    ) -> None:
        self._time_slots = list(time_slots) if time_slots is not None else build_time_slots()
        self._closed_weekdays = frozenset(closed_weekdays)
        self._logger = logging.getLogger(__name__)

    @property
    def time_slots(self) -> list[str]:
        return list(self._time_slots)

    def open(self, service: Service | None = None) -> WizardState:
        """Initial state. Opening bound to a service skips straight to personal details."""
        if service is not None:
            return WizardState(
                step=WizardStep.personal,
                draft=BookingDraft(selected_services=(service,)),
            )
        return WizardState()

    def can_continue(self, state: WizardState) -> bool:
        """Whether the guard for leaving the current step forward holds."""
        draft = state.draft
        if state.step == WizardStep.services:
            return len(draft.selected_services) > 0
        if state.step == WizardStep.personal:
            return draft.customer.is_complete()
        if state.step == WizardStep.datetime:
            return draft.date is not None and draft.time != ""
        if state.step == WizardStep.review:
            return self.missing_fields(draft) == []
        return False

    def missing_fields(self, draft: BookingDraft) -> list[str]:
        missing: list[str] = []
        if not draft.selected_services:
            missing.append("services")
        if not draft.customer.name.strip():
            missing.append("name")
        if not draft.customer.email.strip():
            missing.append("email")
        if not draft.customer.phone.strip():
            missing.append("phone")
        if draft.date is None:
            missing.append("date")
        if not draft.time:
            missing.append("time")
        return missing

    def reduce(self, state: WizardState, event: WizardEvent, today: date | None = None) -> WizardResult:
        today = today or date.today()

        if isinstance(event, Close):
            return WizardResult(action="reset", accepted=True, reason=None, updated_state=WizardState())

        if state.step == WizardStep.confirmation:
            return self._reject(state, "booking already confirmed")

        if isinstance(event, SubmissionSucceeded):
            return self._finish_submission(state, event.order_number)

        if isinstance(event, SubmissionFailed):
            if not state.submitting:
                return self._reject(state, "no submission in flight")
            return WizardResult(
                action="failed",
                accepted=True,
                reason=event.message,
                updated_state=replace(state, submitting=False, error=event.message),
            )

        if state.submitting:
            return self._reject(state, "submission in flight")

        if isinstance(event, SubmissionStarted):
            return self._start_submission(state)

        if isinstance(event, Next):
            return self._next(state)

        if isinstance(event, Back):
            previous = _BACKWARD.get(state.step)
            if previous is None:
                return self._reject(state, f"cannot go back from {state.step.value}")
            return WizardResult(
                action="went_back",
                accepted=True,
                reason=None,
                updated_state=replace(state, step=previous, error=None),
            )

        if isinstance(event, _EDIT_EVENTS):
            return self._edit(state, event, today)

        return self._reject(state, f"unknown event {type(event).__name__}")

    def _next(self, state: WizardState) -> WizardResult:
        following = _FORWARD.get(state.step)
        if following is None:
            return self._reject(state, f"cannot continue from {state.step.value}")
        if not self.can_continue(state):
            return self._reject(state, self._guard_reason(state))
        return WizardResult(
            action="advanced",
            accepted=True,
            reason=None,
            updated_state=replace(state, step=following),
        )

    def _guard_reason(self, state: WizardState) -> str:
        if state.step == WizardStep.services:
            return "select at least one service"
        if state.step == WizardStep.personal:
            return "name, email and phone are required"
        return "date and time are required"

    def _edit(self, state: WizardState, event: WizardEvent, today: date) -> WizardResult:
        draft = state.draft

        if isinstance(event, ToggleService):
            if draft.has_service(event.service.id):
                services = tuple(s for s in draft.selected_services if s.id != event.service.id)
            else:
                services = draft.selected_services + (event.service,)
            draft = replace(draft, selected_services=services)

        elif isinstance(event, RemoveService):
            if not draft.has_service(event.service_id):
                return self._reject(state, "service not selected")
            services = tuple(s for s in draft.selected_services if s.id != event.service_id)
            draft = replace(draft, selected_services=services)

        elif isinstance(event, UpdateCustomer):
            customer = draft.customer
            draft = replace(
                draft,
                customer=CustomerInfo(
                    name=customer.name if event.name is None else event.name,
                    email=customer.email if event.email is None else event.email,
                    phone=customer.phone if event.phone is None else event.phone,
                ),
            )

        elif isinstance(event, SetLocation):
            draft = replace(draft, service_location=ServiceLocation(event.location))

        elif isinstance(event, SetDate):
            if event.date is not None and not is_bookable_date(event.date, today, self._closed_weekdays):
                if event.date <= today:
                    return self._reject(state, "date must be after today")
                return self._reject(state, "the salon is closed on that day")
            draft = replace(draft, date=event.date)

        elif isinstance(event, SetTime):
            slot = event.time.strip()
            if slot and slot not in self._time_slots:
                return self._reject(state, f"{slot} is not an available time slot")
            draft = replace(draft, time=slot)

        elif isinstance(event, SetNotes):
            draft = replace(draft, notes=event.notes)

        return WizardResult(
            action="updated",
            accepted=True,
            reason=None,
            updated_state=replace(state, draft=draft),
        )

    def _start_submission(self, state: WizardState) -> WizardResult:
        if state.step != WizardStep.review:
            return self._reject(state, "bookings are submitted from the review step")
        missing = self.missing_fields(state.draft)
        if missing:
            return self._reject(state, "missing required fields: " + ", ".join(missing))
        return WizardResult(
            action="submitting",
            accepted=True,
            reason=None,
            updated_state=replace(state, submitting=True, error=None),
        )

    def _finish_submission(self, state: WizardState, order_number: str) -> WizardResult:
        if not state.submitting:
            return self._reject(state, "no submission in flight")
        draft = state.draft
        confirmation = Confirmation(
            order_number=order_number,
            services=draft.selected_services,
            summary=summarize(draft.selected_services, draft.service_location),
            customer_name=draft.customer.name.strip(),
            service_location=draft.service_location,
            date=draft.date,
            time=draft.time,
        )
        return WizardResult(
            action="confirmed",
            accepted=True,
            reason=None,
            updated_state=replace(
                state,
                step=WizardStep.confirmation,
                submitting=False,
                error=None,
                confirmation=confirmation,
            ),
        )

    def _reject(self, state: WizardState, reason: str) -> WizardResult:
        self._logger.debug("Wizard event rejected", extra={"step": state.step.value, "reason": reason})
        return WizardResult(action="rejected", accepted=False, reason=reason, updated_state=state)
