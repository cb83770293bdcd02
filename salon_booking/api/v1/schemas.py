from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from salon_booking.application.use_cases.admin_dashboard import DashboardView
from salon_booking.application.utils.pricing import format_duration, format_price, summarize
from salon_booking.domain.entities.booking import BookingStatus, ServiceLocation, StatusAction
from salon_booking.domain.entities.price_summary import PriceSummary
from salon_booking.domain.entities.service import Service, ServiceCategory
from salon_booking.domain.entities.wizard_state import WizardState, WizardStep


class CategorySchema(BaseModel):
    id: str
    name: str
    description: str = ""
    image_url: str | None = None


class ServiceSchema(BaseModel):
    id: str
    category_id: str
    name: str
    description: str = ""
    duration: int
    duration_label: str
    price: Decimal
    image_url: str | None = None


class CustomerSchema(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""


class PriceSummarySchema(BaseModel):
    subtotal: Decimal
    travel_fee: Decimal
    total: Decimal
    total_label: str
    total_duration: int
    total_duration_label: str


class ConfirmationSchema(BaseModel):
    order_number: str
    services: list[ServiceSchema]
    summary: PriceSummarySchema
    customer_name: str
    service_location: ServiceLocation
    booking_date: date
    booking_time: str


class WizardStateSchema(BaseModel):
    session_id: str
    step: WizardStep
    can_continue: bool
    submitting: bool
    error: str | None = None
    selected_services: list[ServiceSchema] = Field(default_factory=list)
    customer: CustomerSchema
    service_location: ServiceLocation
    booking_date: date | None = None
    booking_time: str = ""
    notes: str = ""
    summary: PriceSummarySchema
    confirmation: ConfirmationSchema | None = None


class WizardEventResponseSchema(BaseModel):
    accepted: bool
    action: str
    reason: str | None = None
    wizard: WizardStateSchema


class OpenWizardRequestSchema(BaseModel):
    service_id: str | None = None


class CustomerUpdateSchema(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    service_location: ServiceLocation | None = None


class ScheduleUpdateSchema(BaseModel):
    booking_date: date | None = None  # explicit null clears the date
    booking_time: str | None = None
    notes: str | None = None


class TimeSlotsSchema(BaseModel):
    time_slots: list[str]


class ServiceSummarySchema(BaseModel):
    name: str
    price: Decimal
    duration: int
    duration_label: str


class BookingSchema(BaseModel):
    id: str
    order_number: str
    service_id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    booking_date: date
    booking_time: str
    service_location: ServiceLocation
    status: BookingStatus
    notes: str | None = None
    created_at: datetime | None = None
    service: ServiceSummarySchema | None = None
    actions: list[StatusAction] = Field(default_factory=list)


class DashboardStatsSchema(BaseModel):
    total: int
    pending: int
    confirmed: int
    completed: int
    revenue: Decimal


class DashboardSchema(BaseModel):
    stats: DashboardStatsSchema
    bookings: list[BookingSchema]


class StatusChangeRequestSchema(BaseModel):
    action: StatusAction


def category_schema(category: ServiceCategory) -> CategorySchema:
    return CategorySchema(
        id=category.id,
        name=category.name,
        description=category.description,
        image_url=category.image_url,
    )


def service_schema(service: Service) -> ServiceSchema:
    return ServiceSchema(
        id=service.id,
        category_id=service.category_id,
        name=service.name,
        description=service.description,
        duration=service.duration,
        duration_label=format_duration(service.duration),
        price=service.price,
        image_url=service.image_url,
    )


def summary_schema(summary: PriceSummary) -> PriceSummarySchema:
    return PriceSummarySchema(
        subtotal=summary.subtotal,
        travel_fee=summary.travel_fee,
        total=summary.total,
        total_label=format_price(summary.total),
        total_duration=summary.total_duration,
        total_duration_label=format_duration(summary.total_duration),
    )


def wizard_schema(session_id: str, state: WizardState, can_continue: bool) -> WizardStateSchema:
    draft = state.draft
    confirmation = None
    if state.confirmation is not None:
        c = state.confirmation
        confirmation = ConfirmationSchema(
            order_number=c.order_number,
            services=[service_schema(s) for s in c.services],
            summary=summary_schema(c.summary),
            customer_name=c.customer_name,
            service_location=c.service_location,
            booking_date=c.date,
            booking_time=c.time,
        )
    return WizardStateSchema(
        session_id=session_id,
        step=state.step,
        can_continue=can_continue,
        submitting=state.submitting,
        error=state.error,
        selected_services=[service_schema(s) for s in draft.selected_services],
        customer=CustomerSchema(
            name=draft.customer.name,
            email=draft.customer.email,
            phone=draft.customer.phone,
        ),
        service_location=draft.service_location,
        booking_date=draft.date,
        booking_time=draft.time,
        notes=draft.notes,
        summary=summary_schema(summarize(draft.selected_services, draft.service_location)),
        confirmation=confirmation,
    )


def dashboard_schema(view: DashboardView) -> DashboardSchema:
    bookings: list[BookingSchema] = []
    for row in view.bookings:
        b = row.booking
        service = None
        if b.service is not None:
            service = ServiceSummarySchema(
                name=b.service.name,
                price=b.service.price,
                duration=b.service.duration,
                duration_label=format_duration(b.service.duration),
            )
        bookings.append(
            BookingSchema(
                id=b.id,
                order_number=b.order_number,
                service_id=b.service_id,
                customer_name=b.customer.name,
                customer_email=b.customer.email,
                customer_phone=b.customer.phone,
                booking_date=b.booking_date,
                booking_time=b.booking_time,
                service_location=b.service_location,
                status=b.status,
                notes=b.notes,
                created_at=b.created_at,
                service=service,
                actions=list(row.actions),
            )
        )
    s = view.stats
    return DashboardSchema(
        stats=DashboardStatsSchema(
            total=s.total,
            pending=s.pending,
            confirmed=s.confirmed,
            completed=s.completed,
            revenue=s.revenue,
        ),
        bookings=bookings,
    )
