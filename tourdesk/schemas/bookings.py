from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, field_validator

from tourdesk.models.types import BookingStatus
from tourdesk.schemas.customers import Customer
from tourdesk.schemas.tours import Tour
from tourdesk.shared.base import BaseSchema, reject_null


class Guest(BaseSchema):
    id: str
    booking_id: str
    name: str
    phone: Optional[str] = None
    service_id: Optional[str] = None


class BookingService(BaseSchema):
    id: str
    booking_id: str
    service_id: Optional[str] = None
    service_name: str
    price: Decimal
    quantity: int
    is_custom: bool


class Booking(BaseSchema):
    id: str
    customer_id: str
    tour_id: str
    deposit: Decimal
    total_price: Decimal
    status: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    customer: Optional[Customer] = None
    tour: Optional[Tour] = None
    guests: List[Guest] = Field(default_factory=list)
    services: List[BookingService] = Field(default_factory=list)


class GuestInput(BaseSchema):
    name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    service_id: Optional[str] = None


class BookingServiceInput(BaseSchema):
    service_id: Optional[str] = None
    service_name: str = Field(..., min_length=1)
    price: Decimal = Field(default=Decimal("0"), ge=0)
    quantity: int = Field(default=1, ge=1)
    is_custom: bool = False


class BookingCreateRequest(BaseSchema):
    customer_id: str = Field(..., min_length=1)
    tour_id: str = Field(..., min_length=1)
    deposit: Decimal = Field(default=Decimal("0"), ge=0)
    total_price: Decimal = Field(default=Decimal("0"), ge=0)
    status: BookingStatus = "PENDING"
    notes: Optional[str] = None
    guests: List[GuestInput] = Field(default_factory=list)
    services: List[BookingServiceInput] = Field(default_factory=list)


class BookingUpdateRequest(BaseSchema):
    deposit: Optional[Decimal] = Field(default=None, ge=0)
    total_price: Optional[Decimal] = Field(default=None, ge=0)
    status: Optional[BookingStatus] = None
    notes: Optional[str] = None
    # None keeps the current guests; a list (even empty) replaces them.
    guests: Optional[List[GuestInput]] = None

    not_null = field_validator("deposit", "total_price", "status", mode="before")(reject_null)
