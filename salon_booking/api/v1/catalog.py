import logging

from fastapi import APIRouter, Depends, HTTPException

from salon_booking.api.v1.schemas import CategorySchema, ServiceSchema, category_schema, service_schema
from salon_booking.application.exceptions import BackendError
from salon_booking.application.ports.catalog import CatalogPort
from salon_booking.wiring.dependencies import get_catalog

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/categories", response_model=list[CategorySchema])
def list_categories(catalog: CatalogPort = Depends(get_catalog)):
    try:
        categories = catalog.list_categories()
    except BackendError as e:
        logger.error("Error fetching categories", extra={"error": str(e)})
        raise HTTPException(status_code=502, detail="Failed to load service categories.")
    return [category_schema(c) for c in categories]


@router.get("/categories/{category_id}/services", response_model=list[ServiceSchema])
def list_services(category_id: str, catalog: CatalogPort = Depends(get_catalog)):
    try:
        services = catalog.list_services(category_id)
    except BackendError as e:
        logger.error("Error fetching services", extra={"error": str(e)})
        raise HTTPException(status_code=502, detail="Failed to load services.")
    return [service_schema(s) for s in services]
