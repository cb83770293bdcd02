from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from salon_booking.domain.entities.booking import CustomerInfo, ServiceLocation
from salon_booking.domain.entities.price_summary import PriceSummary
from salon_booking.domain.entities.service import Service


class WizardStep(str, Enum):
    services = "services"
    personal = "personal"
    datetime = "datetime"
    review = "review"
    confirmation = "confirmation"


@dataclass(frozen=True)
class BookingDraft:
    selected_services: tuple[Service, ...] = ()  # selection order, unique by id
    customer: CustomerInfo = field(default_factory=CustomerInfo)
    service_location: ServiceLocation = ServiceLocation.in_salon
    date: date | None = None
    time: str = ""  # HH:MM, "" when unset
    notes: str = ""

    def has_service(self, service_id: str) -> bool:
        return any(s.id == service_id for s in self.selected_services)


@dataclass(frozen=True)
class Confirmation:
    order_number: str
    services: tuple[Service, ...]
    summary: PriceSummary
    customer_name: str
    service_location: ServiceLocation
    date: date
    time: str


@dataclass(frozen=True)
class WizardState:
    step: WizardStep = WizardStep.services
    draft: BookingDraft = field(default_factory=BookingDraft)
    submitting: bool = False  # a submission request is in flight
    error: str | None = None  # last submission failure shown on review
    confirmation: Confirmation | None = None
