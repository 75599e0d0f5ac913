from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from tourdesk.models.tours import TourRecord


class CustomerRecord(BaseModel):
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


class GuestRecord(BaseModel):
    id: str
    booking_id: str
    name: str
    phone: Optional[str] = None
    service_id: Optional[str] = None


class BookingServiceRecord(BaseModel):
    id: str
    booking_id: str
    service_id: Optional[str] = None
    service_name: str
    price: Decimal = Decimal("0")
    quantity: int = 1
    is_custom: bool = False


class BookingRecord(BaseModel):
    id: str
    customer_id: str
    tour_id: str
    deposit: Decimal = Decimal("0")
    total_price: Decimal = Decimal("0")
    status: str = "PENDING"
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    customer: Optional[CustomerRecord] = None
    tour: Optional[TourRecord] = None
    guests: List[GuestRecord] = Field(default_factory=list)
    services: List[BookingServiceRecord] = Field(default_factory=list)


class CustomerWithBookingsRecord(CustomerRecord):
    bookings: List[BookingRecord] = Field(default_factory=list)
