"""
Tests for the in-memory wizard session store: lock cleanup and idle expiry.
"""

from __future__ import annotations

from dataclasses import replace

from conftest import RecordingBookingRepository
from salon_booking.application.use_cases.booking_wizard import BookingWizard
from salon_booking.application.use_cases.submit_booking import SubmitBookingUseCase
from salon_booking.application.use_cases.wizard_session import WizardSessionUseCase
from salon_booking.domain.entities.wizard_state import WizardState
from salon_booking.infrastructure.mock.mock_catalog import MockCatalog
from salon_booking.infrastructure.mock.mock_identity import MockIdentity
from salon_booking.infrastructure.store.memory_store import MemoryWizardSessionStore


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_closed_sessions_leave_no_locks_behind():
    store = MemoryWizardSessionStore()
    uc = WizardSessionUseCase(
        wizard=BookingWizard(),
        catalog=MockCatalog(),
        store=store,
        submit_booking=SubmitBookingUseCase(bookings=RecordingBookingRepository(), identity=MockIdentity()),
        timezone="UTC",
    )

    for _ in range(1000):
        session_id, _ = uc.open("svc-facial")
        uc.next(session_id)
        uc.close(session_id)

    assert len(store) == 0
    assert store.lock_count == 0


def test_lock_for_unknown_session_is_not_kept():
    store = MemoryWizardSessionStore()

    with store.lock("no-such-session"):
        pass

    assert store.lock_count == 0


def test_delete_drops_lock():
    store = MemoryWizardSessionStore()
    session_id = store.create(WizardState())
    with store.lock(session_id):
        store.set(session_id, WizardState())
    assert store.lock_count == 1

    store.delete(session_id)

    assert store.get(session_id) is None
    assert store.lock_count == 0


def test_idle_sessions_expire():
    clock = FakeClock()
    store = MemoryWizardSessionStore(idle_ttl_seconds=60, clock=clock)
    stale = store.create(WizardState())
    clock.now = 30
    fresh = store.create(WizardState())

    clock.now = 75
    store.create(WizardState())

    assert store.get(stale) is None
    assert store.get(fresh) is not None
    assert len(store) == 2


def test_activity_keeps_session_alive():
    clock = FakeClock()
    store = MemoryWizardSessionStore(idle_ttl_seconds=60, clock=clock)
    session_id = store.create(WizardState())

    clock.now = 50
    store.set(session_id, WizardState())
    clock.now = 100

    assert store.get(session_id) is not None


def test_submitting_and_locked_sessions_are_not_purged():
    clock = FakeClock()
    store = MemoryWizardSessionStore(idle_ttl_seconds=60, clock=clock)
    submitting = store.create(replace(WizardState(), submitting=True))
    held = store.create(WizardState())

    clock.now = 120
    with store.lock(held):
        assert store.purge_expired() == 0

    assert store.get(submitting) is not None
    assert store.purge_expired() == 1
