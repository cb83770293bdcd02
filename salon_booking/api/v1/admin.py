from fastapi import APIRouter, Depends, HTTPException

from salon_booking.api.v1.schemas import DashboardSchema, StatusChangeRequestSchema, dashboard_schema
from salon_booking.application.exceptions import (
    BackendError,
    BookingNotFoundError,
    StatusTransitionError,
    UpdateInFlightError,
)
from salon_booking.application.use_cases.admin_dashboard import AdminDashboardUseCase
from salon_booking.wiring.dependencies import get_admin_dashboard_use_case

router = APIRouter(prefix="/admin")


@router.get("/bookings", response_model=DashboardSchema)
def list_bookings(uc: AdminDashboardUseCase = Depends(get_admin_dashboard_use_case)):
    try:
        view = uc.load()
    except BackendError:
        raise HTTPException(status_code=502, detail="Failed to fetch bookings.")
    return dashboard_schema(view)


@router.post("/bookings/{booking_id}/status", response_model=DashboardSchema)
def change_status(
    booking_id: str,
    req: StatusChangeRequestSchema,
    uc: AdminDashboardUseCase = Depends(get_admin_dashboard_use_case),
):
    try:
        view = uc.change_status(booking_id, req.action)
    except BookingNotFoundError:
        raise HTTPException(status_code=404, detail="Booking not found")
    except StatusTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except UpdateInFlightError:
        raise HTTPException(status_code=409, detail="A status update for this booking is already in progress.")
    except BackendError:
        raise HTTPException(status_code=502, detail="Failed to update booking status.")
    return dashboard_schema(view)
