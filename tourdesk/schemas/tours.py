from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from tourdesk.models.types import TourStatus, TourType
from tourdesk.shared.base import BaseSchema, reject_null
from tourdesk.shared.time import ensure_utc


class Tour(BaseSchema):
    id: str
    name: str
    description: Optional[str] = None
    type: str
    status: str
    start_date: datetime
    end_date: datetime
    max_guests: int
    price: Decimal
    created_at: Optional[datetime] = None


class TourFinancials(BaseSchema):
    booked_guests: int
    total_revenue: Decimal
    total_expenses: Decimal
    profit: Decimal
    payment_remainder: Decimal
    is_fully_paid: bool


class TourSummary(Tour, TourFinancials):
    pass


class TourBookingCustomer(BaseSchema):
    id: str
    code: Optional[str] = None
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None


class TourBookingGuest(BaseSchema):
    id: str
    name: str
    phone: Optional[str] = None
    service_id: Optional[str] = None


class TourBooking(BaseSchema):
    id: str
    customer_id: str
    deposit: Decimal
    total_price: Decimal
    status: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    customer: Optional[TourBookingCustomer] = None
    guests: List[TourBookingGuest] = Field(default_factory=list)


class TourExpense(BaseSchema):
    id: str
    type: str
    amount: Decimal
    description: Optional[str] = None
    created_at: Optional[datetime] = None


class TourDetail(TourSummary):
    bookings: List[TourBooking] = Field(default_factory=list)
    expenses: List[TourExpense] = Field(default_factory=list)


class CalendarTour(BaseSchema):
    id: str
    name: str
    type: str
    status: str
    start_date: datetime
    end_date: datetime
    max_guests: int
    booked_guests: int
    price: Decimal


class TourCreateRequest(BaseSchema):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    type: TourType = "GROUP"
    max_guests: int = Field(default=0, ge=0)
    price: Decimal = Field(default=Decimal("0"), ge=0)
    start_date: datetime
    end_date: datetime
    status: Optional[TourStatus] = None

    utc_dates = field_validator("start_date", "end_date")(ensure_utc)

    @model_validator(mode="after")
    def check_dates(self) -> "TourCreateRequest":
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class TourUpdateRequest(BaseSchema):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    type: Optional[TourType] = None
    status: Optional[TourStatus] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    max_guests: Optional[int] = Field(default=None, ge=0)

    utc_dates = field_validator("start_date", "end_date")(ensure_utc)
    not_null = field_validator(
        "name", "type", "status", "start_date", "end_date", "price", "max_guests", mode="before"
    )(reject_null)


class TourStatusUpdateRequest(BaseSchema):
    status: TourStatus


class DeletedResult(BaseSchema):
    id: str
    message: str
