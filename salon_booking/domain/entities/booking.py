from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any


class ServiceLocation(str, Enum):
    in_salon = "in-salon"
    at_home = "at-home"


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    completed = "completed"
    cancelled = "cancelled"


class StatusAction(str, Enum):
    confirm = "confirm"
    complete = "complete"
    cancel = "cancel"


# Legal admin actions per status, in display order. Terminal statuses map to nothing.
_TRANSITIONS: dict[BookingStatus, dict[StatusAction, BookingStatus]] = {
    BookingStatus.pending: {
        StatusAction.confirm: BookingStatus.confirmed,
        StatusAction.cancel: BookingStatus.cancelled,
    },
    BookingStatus.confirmed: {
        StatusAction.complete: BookingStatus.completed,
        StatusAction.cancel: BookingStatus.cancelled,
    },
    BookingStatus.completed: {},
    BookingStatus.cancelled: {},
}


def available_actions(status: BookingStatus) -> tuple[StatusAction, ...]:
    return tuple(_TRANSITIONS.get(status, {}))


def apply_action(status: BookingStatus, action: StatusAction) -> BookingStatus | None:
    """Return the status reached by `action`, or None if the action is not legal from `status`."""
    return _TRANSITIONS.get(status, {}).get(action)


@dataclass(frozen=True)
class CustomerInfo:
    name: str = ""
    email: str = ""
    phone: str = ""

    def is_complete(self) -> bool:
        return bool(self.name.strip() and self.email.strip() and self.phone.strip())


@dataclass(frozen=True)
class BookingRecord:
    """A booking row about to be inserted (one per selected service)."""

    service_id: str
    customer: CustomerInfo
    booking_date: date
    booking_time: str  # HH:MM
    service_location: ServiceLocation
    notes: str | None = None
    user_id: str | None = None

    def to_row(self) -> dict[str, Any]:
        notes = (self.notes or "").strip()
        return {
            "service_id": self.service_id,
            "customer_name": self.customer.name.strip(),
            "customer_email": self.customer.email.strip(),
            "customer_phone": self.customer.phone.strip(),
            "booking_date": self.booking_date.isoformat(),
            "booking_time": self.booking_time,
            "service_location": self.service_location.value,
            "notes": notes or None,
            "user_id": self.user_id,
        }


@dataclass(frozen=True)
class ServiceSummary:
    name: str
    price: Decimal
    duration: int


@dataclass(frozen=True)
class Booking:
    id: str
    order_number: str
    service_id: str
    customer: CustomerInfo
    booking_date: date
    booking_time: str
    service_location: ServiceLocation = ServiceLocation.in_salon
    status: BookingStatus = BookingStatus.pending
    notes: str | None = None
    user_id: str | None = None
    created_at: datetime | None = None
    service: ServiceSummary | None = None  # joined for the admin list
