from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class TourRecord(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    # Kept as plain strings: rows written outside the API may carry other values.
    type: str = "GROUP"
    status: str = "UPCOMING"
    start_date: datetime
    end_date: datetime
    max_guests: int = 0
    price: Decimal = Decimal("0")
    created_at: Optional[datetime] = None


class ExpenseRecord(BaseModel):
    id: str
    tour_id: str
    type: str
    amount: Decimal
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    tour: Optional[TourRecord] = None
