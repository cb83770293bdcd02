from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class PriceSummary:
    subtotal: Decimal
    travel_fee: Decimal
    total: Decimal
    total_duration: int  # minutes
