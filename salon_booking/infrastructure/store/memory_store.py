from __future__ import annotations

import threading
import time
import uuid
from typing import Callable

from salon_booking.application.ports.wizard_session_store import WizardSessionStorePort
from salon_booking.domain.entities.wizard_state import WizardState


class MemoryWizardSessionStore(WizardSessionStorePort):
    """In-process wizard sessions.

    Sessions idle for longer than `idle_ttl_seconds` are dropped the next time a
    session is created or read. A deleted session's lock is dropped with it; ids are
    never reused, so a late holder of the old lock only ever sees a missing session.
    """

    def __init__(self, idle_ttl_seconds: float = 3600.0, clock: Callable[[], float] = time.monotonic) -> None:
        self._states: dict[str, WizardState] = {}
        self._touched: dict[str, float] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # Lock for managing locks dict
        self._idle_ttl_seconds = idle_ttl_seconds
        self._clock = clock

    def create(self, state: WizardState) -> str:
        self.purge_expired()
        session_id = uuid.uuid4().hex
        with self._lock_lock:
            self._states[session_id] = state
            self._touched[session_id] = self._clock()
        return session_id

    def get(self, session_id: str) -> WizardState | None:
        with self._lock_lock:
            state = self._states.get(session_id)
            if state is None:
                return None
            if self._is_expired(session_id) and not state.submitting:
                self._drop(session_id)
                return None
            return state

    def set(self, session_id: str, state: WizardState) -> None:
        with self._lock_lock:
            self._states[session_id] = state
            self._touched[session_id] = self._clock()

    def delete(self, session_id: str) -> None:
        with self._lock_lock:
            self._drop(session_id)

    def lock(self, session_id: str) -> threading.Lock:
        """Get or create the lock for a live session id.

        Unknown ids get a throwaway lock so lookups of closed or bogus sessions do not
        leave entries behind.
        """
        with self._lock_lock:
            if session_id not in self._states:
                return threading.Lock()
            if session_id not in self._locks:
                self._locks[session_id] = threading.Lock()
            return self._locks[session_id]

    def purge_expired(self) -> int:
        """Drop idle sessions whose lock is free. Returns how many were dropped."""
        with self._lock_lock:
            expired = [
                session_id
                for session_id in self._states
                if self._is_expired(session_id)
                and not self._states[session_id].submitting
                and not (session_id in self._locks and self._locks[session_id].locked())
            ]
            for session_id in expired:
                self._drop(session_id)
        return len(expired)

    def __len__(self) -> int:
        return len(self._states)

    @property
    def lock_count(self) -> int:
        return len(self._locks)

    def _is_expired(self, session_id: str) -> bool:
        return self._clock() - self._touched.get(session_id, 0.0) > self._idle_ttl_seconds

    def _drop(self, session_id: str) -> None:
        self._states.pop(session_id, None)
        self._touched.pop(session_id, None)
        self._locks.pop(session_id, None)
