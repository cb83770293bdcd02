from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from salon_booking.domain.entities.wizard_state import WizardState


class WizardSessionStorePort(ABC):
    @abstractmethod
    def create(self, state: WizardState) -> str:
        """Store a new wizard session. Returns its session id."""
        raise NotImplementedError

    @abstractmethod
    def get(self, session_id: str) -> WizardState | None:
        raise NotImplementedError

    @abstractmethod
    def set(self, session_id: str, state: WizardState) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, session_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def lock(self, session_id: str) -> AbstractContextManager:
        """Lock guarding read-modify-write of one session."""
        raise NotImplementedError
