from abc import ABC, abstractmethod


class IdentityPort(ABC):
    @abstractmethod
    def get_current_actor_id(self, access_token: str | None) -> str | None:
        """Resolve the signed-in user for an access token. None means anonymous."""
        raise NotImplementedError
