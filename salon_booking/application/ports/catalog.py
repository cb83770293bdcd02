from __future__ import annotations

from abc import ABC, abstractmethod

from salon_booking.domain.entities.service import Service, ServiceCategory


class CatalogPort(ABC):
    @abstractmethod
    def list_categories(self) -> list[ServiceCategory]:
        """List service categories ordered by name."""
        raise NotImplementedError

    @abstractmethod
    def list_services(self, category_id: str) -> list[Service]:
        """List services of one category ordered by name."""
        raise NotImplementedError

    @abstractmethod
    def get_service(self, service_id: str) -> Service | None:
        """Get a single service by id."""
        raise NotImplementedError
