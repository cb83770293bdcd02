from __future__ import annotations

from decimal import Decimal

from salon_booking.domain.entities.service import Service, ServiceCategory

CATEGORIES: list[ServiceCategory] = [
    ServiceCategory(id="cat-hair", name="Hair", description="Cuts, colour and styling"),
    ServiceCategory(id="cat-nails", name="Nails", description="Manicures and pedicures"),
    ServiceCategory(id="cat-skin", name="Skin", description="Facials and treatments"),
]

SERVICES: list[Service] = [
    Service(
        id="svc-haircut",
        category_id="cat-hair",
        name="Haircut & Style",
        description="Wash, cut and blow-dry",
        duration=45,
        price=Decimal("60"),
    ),
    Service(
        id="svc-colour",
        category_id="cat-hair",
        name="Full Colour",
        description="Single-process colour",
        duration=90,
        price=Decimal("120"),
    ),
    Service(
        id="svc-blowout",
        category_id="cat-hair",
        name="Blowout",
        description="Wash and blow-dry",
        duration=30,
        price=Decimal("40"),
    ),
    Service(
        id="svc-manicure",
        category_id="cat-nails",
        name="Classic Manicure",
        description="Shape, cuticle care and polish",
        duration=30,
        price=Decimal("35"),
    ),
    Service(
        id="svc-pedicure",
        category_id="cat-nails",
        name="Spa Pedicure",
        description="Soak, scrub and polish",
        duration=45,
        price=Decimal("50"),
    ),
    Service(
        id="svc-facial",
        category_id="cat-skin",
        name="Signature Facial",
        description="Cleanse, exfoliate and mask",
        duration=60,
        price=Decimal("85"),
    ),
]
