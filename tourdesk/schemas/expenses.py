from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from tourdesk.models.types import ExpenseType
from tourdesk.schemas.tours import Tour
from tourdesk.shared.base import BaseSchema, reject_null


class Expense(BaseSchema):
    id: str
    tour_id: str
    type: str
    amount: Decimal
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    tour: Optional[Tour] = None


class ExpenseCreateRequest(BaseSchema):
    tour_id: str = Field(..., min_length=1)
    type: ExpenseType
    amount: Decimal
    description: Optional[str] = None


class ExpenseUpdateRequest(BaseSchema):
    tour_id: Optional[str] = Field(default=None, min_length=1)
    type: Optional[ExpenseType] = None
    amount: Optional[Decimal] = None
    description: Optional[str] = None

    not_null = field_validator("tour_id", "type", "amount", mode="before")(reject_null)
