from functools import lru_cache
import logging

from salon_booking.core.config import settings
from salon_booking.application.ports.booking_repository import BookingRepositoryPort
from salon_booking.application.ports.catalog import CatalogPort
from salon_booking.application.ports.identity import IdentityPort
from salon_booking.application.use_cases.admin_dashboard import AdminDashboardUseCase
from salon_booking.application.use_cases.booking_wizard import BookingWizard
from salon_booking.application.use_cases.submit_booking import SubmitBookingUseCase
from salon_booking.application.use_cases.wizard_session import WizardSessionUseCase
from salon_booking.application.utils.schedule import build_time_slots
from salon_booking.infrastructure.mock.mock_bookings import MockBookingRepository
from salon_booking.infrastructure.mock.mock_catalog import MockCatalog
from salon_booking.infrastructure.mock.mock_identity import MockIdentity
from salon_booking.infrastructure.store.memory_store import MemoryWizardSessionStore
from salon_booking.infrastructure.supabase.rest_client import SupabaseRestClient
from salon_booking.infrastructure.supabase.supabase_bookings import SupabaseBookingRepository
from salon_booking.infrastructure.supabase.supabase_catalog import SupabaseCatalog
from salon_booking.infrastructure.supabase.supabase_identity import SupabaseIdentity

logger = logging.getLogger(__name__)


def _use_mock_backend() -> bool:
    if settings.SUPABASE_URL and settings.SUPABASE_ANON_KEY:
        return False
    if settings.ENV.lower() in {"dev", "local"}:
        return True
    raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY are required outside dev/local.")


@lru_cache
def get_supabase_client() -> SupabaseRestClient:
    logger.info("Using Supabase backend at %s", settings.SUPABASE_URL)
    return SupabaseRestClient(
        base_url=settings.SUPABASE_URL or "",
        api_key=settings.SUPABASE_ANON_KEY or "",
        timeout=settings.SUPABASE_TIMEOUT_SECONDS,
    )


@lru_cache
def get_catalog() -> CatalogPort:
    if _use_mock_backend():
        logger.info("Using MockCatalog (Supabase not configured, ENV=%s)", settings.ENV)
        return MockCatalog()
    return SupabaseCatalog(get_supabase_client())


@lru_cache
def get_booking_repository() -> BookingRepositoryPort:
    if _use_mock_backend():
        return MockBookingRepository(catalog=get_catalog())
    return SupabaseBookingRepository(get_supabase_client())


@lru_cache
def get_identity() -> IdentityPort:
    if _use_mock_backend():
        return MockIdentity()
    return SupabaseIdentity(get_supabase_client())


@lru_cache
def get_wizard_session_store() -> MemoryWizardSessionStore:
    return MemoryWizardSessionStore(idle_ttl_seconds=settings.WIZARD_SESSION_TTL_SECONDS)


@lru_cache
def get_booking_wizard() -> BookingWizard:
    return BookingWizard(
        time_slots=build_time_slots(settings.FIRST_SLOT, settings.LAST_SLOT, settings.SLOT_INTERVAL_MINUTES),
        closed_weekdays=frozenset(settings.CLOSED_WEEKDAYS),
    )


def get_submit_booking_use_case() -> SubmitBookingUseCase:
    return SubmitBookingUseCase(bookings=get_booking_repository(), identity=get_identity())


def get_wizard_session_use_case() -> WizardSessionUseCase:
    return WizardSessionUseCase(
        wizard=get_booking_wizard(),
        catalog=get_catalog(),
        store=get_wizard_session_store(),
        submit_booking=get_submit_booking_use_case(),
        timezone=settings.BUSINESS_TIMEZONE,
    )


@lru_cache
def get_admin_dashboard_use_case() -> AdminDashboardUseCase:
    # Cached so the per-booking in-flight guard is shared across requests.
    return AdminDashboardUseCase(bookings=get_booking_repository())
