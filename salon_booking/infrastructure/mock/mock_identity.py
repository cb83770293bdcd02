from __future__ import annotations

from salon_booking.application.ports.identity import IdentityPort


class MockIdentity(IdentityPort):
    """Maps known tokens to user ids; every other caller is anonymous."""

    def __init__(self, users: dict[str, str] | None = None) -> None:
        self._users = dict(users or {})

    def get_current_actor_id(self, access_token: str | None) -> str | None:
        if not access_token:
            return None
        return self._users.get(access_token)
