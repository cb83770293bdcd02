from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ServiceCategory:
    id: str
    name: str
    description: str = ""
    image_url: str | None = None


@dataclass(frozen=True)
class Service:
    id: str
    category_id: str
    name: str
    description: str = ""
    duration: int = 0  # minutes
    price: Decimal = Decimal("0")
    image_url: str | None = None
