from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from tourdesk.models.types import TourType
from tourdesk.schemas.bookings import Booking, BookingServiceInput, GuestInput
from tourdesk.schemas.customers import Customer, CustomerCreateRequest
from tourdesk.schemas.tours import Tour
from tourdesk.shared.base import BaseSchema
from tourdesk.shared.time import ensure_utc


class OrderTourInput(BaseSchema):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    type: TourType = "GROUP"
    start_date: datetime
    end_date: datetime
    # Derived from the selected services when omitted.
    max_guests: Optional[int] = Field(default=None, ge=0)
    price: Optional[Decimal] = Field(default=None, ge=0)

    utc_dates = field_validator("start_date", "end_date")(ensure_utc)

    @model_validator(mode="after")
    def check_dates(self) -> "OrderTourInput":
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class OrderCreateRequest(BaseSchema):
    customer: CustomerCreateRequest
    tour: OrderTourInput
    services: List[BookingServiceInput] = Field(..., min_length=1)
    guests: List[GuestInput] = Field(default_factory=list)
    discount_percent: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    paid_amount: Decimal = Field(default=Decimal("0"), ge=0)
    notes: Optional[str] = None


class OrderResult(BaseSchema):
    customer: Customer
    tour: Tour
    booking: Booking
