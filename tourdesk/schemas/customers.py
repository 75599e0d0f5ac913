from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, field_validator

from tourdesk.models.types import Gender
from tourdesk.shared.base import BaseSchema, reject_null


class CustomerBookingTour(BaseSchema):
    id: str
    name: str
    type: str
    status: str
    start_date: datetime
    end_date: datetime


class CustomerBooking(BaseSchema):
    id: str
    tour_id: str
    deposit: Decimal
    total_price: Decimal
    status: str
    created_at: Optional[datetime] = None
    tour: Optional[CustomerBookingTour] = None


class Customer(BaseSchema):
    id: str
    code: Optional[str] = None
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    source: Optional[str] = None
    address: Optional[str] = None
    gender: Optional[str] = None
    title: Optional[str] = None
    country: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    created_at: Optional[datetime] = None


class CustomerDetail(Customer):
    bookings: List[CustomerBooking] = Field(default_factory=list)


class CustomerCreateRequest(BaseSchema):
    name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    email: Optional[str] = None
    source: Optional[str] = None
    address: Optional[str] = None
    gender: Optional[Gender] = None
    title: Optional[str] = None
    country: Optional[str] = None
    date_of_birth: Optional[datetime] = None


class CustomerUpdateRequest(BaseSchema):
    name: Optional[str] = Field(default=None, min_length=1)
    phone: Optional[str] = None
    email: Optional[str] = None
    source: Optional[str] = None
    address: Optional[str] = None
    gender: Optional[Gender] = None
    title: Optional[str] = None
    country: Optional[str] = None
    date_of_birth: Optional[datetime] = None

    not_null = field_validator("name", mode="before")(reject_null)
