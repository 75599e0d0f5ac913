from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from tourdesk.shared.base import BaseSchema


class DashboardFilters(BaseSchema):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    leader_name: Optional[str] = None


class DashboardStats(BaseSchema):
    total_customers: int
    total_tours: int
    total_bookings: int
    unique_customers: int
    total_revenue: Decimal
    total_expenses: Decimal
    gross_profit: Decimal


class RecentBooking(BaseSchema):
    id: str
    customer_name: Optional[str] = None
    tour_name: Optional[str] = None
    total_price: Decimal
    deposit: Decimal
    status: str
    created_at: Optional[datetime] = None


class UpcomingTour(BaseSchema):
    id: str
    name: str
    type: str
    start_date: datetime
    end_date: datetime
    max_guests: int
    booked_guests: int
    price: Decimal


class TourStatusCounts(BaseSchema):
    upcoming: int = 0
    ongoing: int = 0
    completed: int = 0


class RevenueByType(BaseSchema):
    group: Decimal = Decimal("0")
    private: Decimal = Decimal("0")
    one_on_one: Decimal = Decimal("0")


class DashboardResponse(BaseSchema):
    stats: DashboardStats
    recent_bookings: List[RecentBooking]
    upcoming_tours: List[UpcomingTour]
    tour_status: TourStatusCounts
    revenue_by_type: RevenueByType
