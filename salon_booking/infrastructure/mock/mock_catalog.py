from __future__ import annotations

from salon_booking.application.ports.catalog import CatalogPort
from salon_booking.domain.entities.service import Service, ServiceCategory
from salon_booking.infrastructure.mock.catalog_data import CATEGORIES, SERVICES


class MockCatalog(CatalogPort):
    def __init__(
        self,
        categories: list[ServiceCategory] | None = None,
        services: list[Service] | None = None,
    ) -> None:
        self._categories = list(categories if categories is not None else CATEGORIES)
        self._services = list(services if services is not None else SERVICES)

    def list_categories(self) -> list[ServiceCategory]:
        return sorted(self._categories, key=lambda c: c.name)

    def list_services(self, category_id: str) -> list[Service]:
        return sorted((s for s in self._services if s.category_id == category_id), key=lambda s: s.name)

    def get_service(self, service_id: str) -> Service | None:
        return next((s for s in self._services if s.id == service_id), None)
