from fastapi import APIRouter, Depends, Header, HTTPException, Response

from salon_booking.api.v1.schemas import (
    CustomerUpdateSchema,
    OpenWizardRequestSchema,
    ScheduleUpdateSchema,
    TimeSlotsSchema,
    WizardEventResponseSchema,
    WizardStateSchema,
    wizard_schema,
)
from salon_booking.application.exceptions import (
    BackendError,
    ServiceNotFoundError,
    WizardSessionNotFoundError,
)
from salon_booking.application.use_cases.wizard_session import SessionResult, WizardSessionUseCase
from salon_booking.wiring.dependencies import get_wizard_session_use_case

router = APIRouter(prefix="/wizard")


def _event_response(uc: WizardSessionUseCase, outcome: SessionResult) -> WizardEventResponseSchema:
    state = outcome.result.updated_state
    return WizardEventResponseSchema(
        accepted=outcome.result.accepted,
        action=outcome.result.action,
        reason=outcome.result.reason,
        wizard=wizard_schema(outcome.session_id, state, uc.can_continue(state)),
    )


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


@router.get("/time-slots", response_model=TimeSlotsSchema)
def time_slots(uc: WizardSessionUseCase = Depends(get_wizard_session_use_case)):
    return TimeSlotsSchema(time_slots=uc.time_slots)


@router.post("", response_model=WizardStateSchema, status_code=201)
def open_wizard(
    req: OpenWizardRequestSchema | None = None,
    uc: WizardSessionUseCase = Depends(get_wizard_session_use_case),
):
    try:
        session_id, state = uc.open(service_id=req.service_id if req else None)
    except ServiceNotFoundError as e:
        raise HTTPException(status_code=404, detail=f"Unknown service {e}")
    except BackendError:
        raise HTTPException(status_code=502, detail="Failed to load the selected service.")
    return wizard_schema(session_id, state, uc.can_continue(state))


@router.get("/{session_id}", response_model=WizardStateSchema)
def get_wizard(session_id: str, uc: WizardSessionUseCase = Depends(get_wizard_session_use_case)):
    try:
        state = uc.get(session_id)
    except WizardSessionNotFoundError:
        raise HTTPException(status_code=404, detail="Wizard session not found")
    return wizard_schema(session_id, state, uc.can_continue(state))


@router.post("/{session_id}/services/{service_id}/toggle", response_model=WizardEventResponseSchema)
def toggle_service(
    session_id: str,
    service_id: str,
    uc: WizardSessionUseCase = Depends(get_wizard_session_use_case),
):
    try:
        outcome = uc.toggle_service(session_id, service_id)
    except WizardSessionNotFoundError:
        raise HTTPException(status_code=404, detail="Wizard session not found")
    except ServiceNotFoundError as e:
        raise HTTPException(status_code=404, detail=f"Unknown service {e}")
    except BackendError:
        raise HTTPException(status_code=502, detail="Failed to load the selected service.")
    return _event_response(uc, outcome)


@router.delete("/{session_id}/services/{service_id}", response_model=WizardEventResponseSchema)
def remove_service(
    session_id: str,
    service_id: str,
    uc: WizardSessionUseCase = Depends(get_wizard_session_use_case),
):
    try:
        outcome = uc.remove_service(session_id, service_id)
    except WizardSessionNotFoundError:
        raise HTTPException(status_code=404, detail="Wizard session not found")
    return _event_response(uc, outcome)


@router.put("/{session_id}/customer", response_model=WizardEventResponseSchema)
def update_customer(
    session_id: str,
    req: CustomerUpdateSchema,
    uc: WizardSessionUseCase = Depends(get_wizard_session_use_case),
):
    try:
        outcome = uc.update_customer(
            session_id,
            name=req.name,
            email=req.email,
            phone=req.phone,
            service_location=req.service_location,
        )
    except WizardSessionNotFoundError:
        raise HTTPException(status_code=404, detail="Wizard session not found")
    return _event_response(uc, outcome)


@router.put("/{session_id}/schedule", response_model=WizardEventResponseSchema)
def update_schedule(
    session_id: str,
    req: ScheduleUpdateSchema,
    uc: WizardSessionUseCase = Depends(get_wizard_session_use_case),
):
    kwargs = {"time": req.booking_time, "notes": req.notes}
    if "booking_date" in req.model_fields_set:
        kwargs["booking_date"] = req.booking_date
    try:
        outcome = uc.update_schedule(session_id, **kwargs)
    except WizardSessionNotFoundError:
        raise HTTPException(status_code=404, detail="Wizard session not found")
    return _event_response(uc, outcome)


@router.post("/{session_id}/next", response_model=WizardEventResponseSchema)
def next_step(session_id: str, uc: WizardSessionUseCase = Depends(get_wizard_session_use_case)):
    try:
        outcome = uc.next(session_id)
    except WizardSessionNotFoundError:
        raise HTTPException(status_code=404, detail="Wizard session not found")
    return _event_response(uc, outcome)


@router.post("/{session_id}/back", response_model=WizardEventResponseSchema)
def previous_step(session_id: str, uc: WizardSessionUseCase = Depends(get_wizard_session_use_case)):
    try:
        outcome = uc.back(session_id)
    except WizardSessionNotFoundError:
        raise HTTPException(status_code=404, detail="Wizard session not found")
    return _event_response(uc, outcome)


@router.post("/{session_id}/submit", response_model=WizardEventResponseSchema)
def submit(
    session_id: str,
    authorization: str | None = Header(None),
    uc: WizardSessionUseCase = Depends(get_wizard_session_use_case),
):
    try:
        outcome = uc.submit(session_id, access_token=_bearer_token(authorization))
    except WizardSessionNotFoundError:
        raise HTTPException(status_code=404, detail="Wizard session not found")

    if outcome.action == "in_flight":
        raise HTTPException(status_code=409, detail="A booking submission is already in progress.")
    if outcome.action == "closed" or outcome.state is None:
        raise HTTPException(status_code=410, detail="Wizard was closed during submission.")
    if outcome.action == "failed":
        raise HTTPException(
            status_code=502,
            detail=outcome.reason or "There was an error creating your booking. Please try again.",
        )

    return WizardEventResponseSchema(
        accepted=outcome.action == "confirmed",
        action=outcome.action,
        reason=outcome.reason,
        wizard=wizard_schema(session_id, outcome.state, uc.can_continue(outcome.state)),
    )


@router.delete("/{session_id}", status_code=204)
def close_wizard(session_id: str, uc: WizardSessionUseCase = Depends(get_wizard_session_use_case)):
    try:
        uc.close(session_id)
    except WizardSessionNotFoundError:
        raise HTTPException(status_code=404, detail="Wizard session not found")
    return Response(status_code=204)
