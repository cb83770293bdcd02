from __future__ import annotations

from salon_booking.application.ports.catalog import CatalogPort
from salon_booking.domain.entities.service import Service, ServiceCategory
from salon_booking.infrastructure.supabase.mappers import category_from_row, service_from_row
from salon_booking.infrastructure.supabase.rest_client import SupabaseRestClient


class SupabaseCatalog(CatalogPort):
    def __init__(self, client: SupabaseRestClient) -> None:
        self._client = client

    def list_categories(self) -> list[ServiceCategory]:
        rows = self._client.select("service_categories", order=[("name", True)])
        return [category_from_row(row) for row in rows]

    def list_services(self, category_id: str) -> list[Service]:
        rows = self._client.select(
            "services",
            filters={"category_id": f"eq.{category_id}"},
            order=[("name", True)],
        )
        return [service_from_row(row) for row in rows]

    def get_service(self, service_id: str) -> Service | None:
        rows = self._client.select("services", filters={"id": f"eq.{service_id}"})
        if not rows:
            return None
        return service_from_row(rows[0])
