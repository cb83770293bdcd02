"""
Tests for wizard sessions: open/close, event dispatch and the single in-flight submission.
"""

from __future__ import annotations

from datetime import date, timedelta

import httpx
import pytest

from conftest import RecordingBookingRepository
from salon_booking.application.exceptions import ServiceNotFoundError, WizardSessionNotFoundError
from salon_booking.application.ports.identity import IdentityPort
from salon_booking.application.use_cases.booking_wizard import BookingWizard
from salon_booking.application.use_cases.submit_booking import SubmitBookingUseCase
from salon_booking.application.use_cases.wizard_session import WizardSessionUseCase
from salon_booking.application.utils.schedule import today_in
from salon_booking.domain.entities.booking import ServiceLocation
from salon_booking.domain.entities.wizard_state import WizardStep
from salon_booking.infrastructure.mock.mock_catalog import MockCatalog
from salon_booking.infrastructure.mock.mock_identity import MockIdentity
from salon_booking.infrastructure.store.memory_store import MemoryWizardSessionStore
from salon_booking.infrastructure.supabase.rest_client import SupabaseRestClient
from salon_booking.infrastructure.supabase.supabase_identity import SupabaseIdentity


def _next_open_day() -> date:
    day = today_in("UTC") + timedelta(days=1)
    while day.weekday() == 6:
        day += timedelta(days=1)
    return day


def _use_case(repo: RecordingBookingRepository, identity: IdentityPort | None = None) -> WizardSessionUseCase:
    return WizardSessionUseCase(
        wizard=BookingWizard(),
        catalog=MockCatalog(),
        store=MemoryWizardSessionStore(),
        submit_booking=SubmitBookingUseCase(bookings=repo, identity=identity or MockIdentity()),
        timezone="UTC",
    )


def _ready_for_review(uc: WizardSessionUseCase, *service_ids: str) -> str:
    session_id, _ = uc.open()
    for service_id in service_ids:
        uc.toggle_service(session_id, service_id)
    uc.next(session_id)
    uc.update_customer(session_id, name="Ana", email="ana@example.com", phone="555-0101")
    uc.next(session_id)
    uc.update_schedule(session_id, booking_date=_next_open_day(), time="10:00")
    result = uc.next(session_id)
    assert result.result.updated_state.step == WizardStep.review
    return session_id


def test_open_with_unknown_service_fails():
    uc = _use_case(RecordingBookingRepository())

    with pytest.raises(ServiceNotFoundError):
        uc.open("svc-missing")


def test_open_with_service_starts_at_personal():
    uc = _use_case(RecordingBookingRepository())

    session_id, state = uc.open("svc-facial")

    assert state.step == WizardStep.personal
    assert [s.id for s in uc.get(session_id).draft.selected_services] == ["svc-facial"]


def test_batched_updates_stop_at_first_rejection():
    uc = _use_case(RecordingBookingRepository())
    session_id, _ = uc.open("svc-facial")
    uc.next(session_id)

    outcome = uc.update_schedule(session_id, booking_date=_next_open_day(), time="23:00", notes="hi")

    assert outcome.result.accepted is False
    state = uc.get(session_id)
    assert state.draft.date == _next_open_day()
    assert state.draft.time == ""
    assert state.draft.notes == ""


def test_update_customer_sets_location():
    uc = _use_case(RecordingBookingRepository())
    session_id, _ = uc.open("svc-facial")

    uc.update_customer(session_id, name="Ana", service_location=ServiceLocation.at_home)

    state = uc.get(session_id)
    assert state.draft.customer.name == "Ana"
    assert state.draft.service_location == ServiceLocation.at_home


def test_submit_confirms_and_stores_booking():
    repo = RecordingBookingRepository()
    uc = _use_case(repo)
    session_id = _ready_for_review(uc, "svc-haircut", "svc-manicure")

    outcome = uc.submit(session_id)

    assert outcome.action == "confirmed"
    assert outcome.state.step == WizardStep.confirmation
    assert outcome.state.confirmation.order_number == "ORD-1001"
    assert len(repo.list_bookings()) == 2


def test_submit_failure_keeps_review_with_error():
    repo = RecordingBookingRepository(fail_primary=True)
    uc = _use_case(repo)
    session_id = _ready_for_review(uc, "svc-haircut")

    outcome = uc.submit(session_id)

    assert outcome.action == "failed"
    state = uc.get(session_id)
    assert state.step == WizardStep.review
    assert state.submitting is False
    assert state.error

    repo.fail_primary = False
    assert uc.submit(session_id).action == "confirmed"


def test_second_submit_while_in_flight_is_refused():
    repo = RecordingBookingRepository()
    uc = _use_case(repo)
    session_id = _ready_for_review(uc, "svc-haircut")
    seen: dict[str, object] = {}

    def reenter() -> None:
        seen["nested"] = uc.submit(session_id)
        seen["back"] = uc.back(session_id)

    repo.on_create = reenter

    outcome = uc.submit(session_id)

    assert outcome.action == "confirmed"
    assert seen["nested"].action == "in_flight"
    assert seen["back"].result.accepted is False
    assert len(repo.created) == 1


def test_close_mid_submission_does_not_recreate_session():
    repo = RecordingBookingRepository()
    uc = _use_case(repo)
    session_id = _ready_for_review(uc, "svc-haircut")
    repo.on_create = lambda: uc.close(session_id)

    outcome = uc.submit(session_id)

    assert outcome.action == "closed"
    with pytest.raises(WizardSessionNotFoundError):
        uc.get(session_id)


def test_close_then_reopen_is_fresh():
    uc = _use_case(RecordingBookingRepository())
    session_id, _ = uc.open("svc-facial")
    uc.update_customer(session_id, name="Ana", email="ana@example.com", phone="555")
    uc.next(session_id)

    uc.close(session_id)
    new_id, state = uc.open()

    assert new_id != session_id
    assert state.step == WizardStep.services
    assert state.draft.selected_services == ()
    assert state.draft.customer.name == ""
    assert state.draft.service_location == ServiceLocation.in_salon
    with pytest.raises(WizardSessionNotFoundError):
        uc.get(session_id)


class ExplodingIdentity(IdentityPort):
    def __init__(self) -> None:
        self.broken = True

    def get_current_actor_id(self, access_token: str | None) -> str | None:
        if self.broken:
            raise RuntimeError("identity lookup blew up")
        return "user-1"


def test_unexpected_submit_error_clears_in_flight_flag():
    """An error that is not a backend error still leaves the wizard usable."""
    repo = RecordingBookingRepository()
    identity = ExplodingIdentity()
    uc = _use_case(repo, identity)
    session_id = _ready_for_review(uc, "svc-haircut")

    outcome = uc.submit(session_id, access_token="tok")

    assert outcome.action == "failed"
    assert outcome.submission.error_kind == "unexpected"
    state = uc.get(session_id)
    assert state.submitting is False
    assert state.step == WizardStep.review
    assert state.error
    assert repo.calls == 0

    identity.broken = False
    retry = uc.submit(session_id, access_token="tok")
    assert retry.action == "confirmed"
    assert repo.created[0].user_id == "user-1"


def test_back_is_allowed_after_unexpected_submit_error():
    uc = _use_case(RecordingBookingRepository(), ExplodingIdentity())
    session_id = _ready_for_review(uc, "svc-haircut")

    uc.submit(session_id, access_token="tok")

    back = uc.back(session_id)
    assert back.result.accepted is True
    assert back.result.updated_state.step == WizardStep.datetime


def test_non_json_auth_reply_books_anonymously():
    """A 2xx auth reply with an HTML body is a backend error, so the booking goes through without a user."""
    transport = httpx.MockTransport(lambda r: httpx.Response(200, text="<html>maintenance</html>"))
    client = SupabaseRestClient("https://example.supabase.co", "anon-key", client=httpx.Client(transport=transport))
    repo = RecordingBookingRepository()
    uc = _use_case(repo, SupabaseIdentity(client))
    session_id = _ready_for_review(uc, "svc-haircut")

    outcome = uc.submit(session_id, access_token="tok")

    assert outcome.action == "confirmed"
    assert uc.get(session_id).submitting is False
    assert repo.created[0].user_id is None
