from __future__ import annotations

from salon_booking.application.ports.identity import IdentityPort
from salon_booking.infrastructure.supabase.rest_client import SupabaseRestClient


class SupabaseIdentity(IdentityPort):
    def __init__(self, client: SupabaseRestClient) -> None:
        self._client = client

    def get_current_actor_id(self, access_token: str | None) -> str | None:
        if not access_token:
            return None
        user = self._client.get_user(access_token)
        if not user or not user.get("id"):
            return None
        return str(user["id"])
