from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from tourdesk.analytics.financials import (
    count_unique_customers,
    filter_bookings,
    gross_profit,
    revenue_by_type,
    total_expenses,
    total_revenue,
)
from tourdesk.analytics.tour_status import count_by_status
from tourdesk.models.bookings import BookingRecord
from tourdesk.models.tours import TourRecord
from tourdesk.repositories.bookings_repository import BookingsRepository
from tourdesk.repositories.customers_repository import CustomersRepository
from tourdesk.repositories.expenses_repository import ExpensesRepository
from tourdesk.repositories.tours_repository import ToursRepository
from tourdesk.schemas.dashboard import (
    DashboardFilters,
    DashboardResponse,
    DashboardStats,
    RecentBooking,
    RevenueByType,
    TourStatusCounts,
    UpcomingTour,
)
from tourdesk.services.tours_service import ToursService
from tourdesk.shared.time import now_utc, to_civil_wall_clock, to_stored_wall_clock, validate_date_window

RECENT_BOOKINGS_LIMIT = 5
UPCOMING_TOURS_LIMIT = 5


class DashboardService:
    def __init__(
        self,
        tours_service: ToursService,
        tours_repository: ToursRepository,
        bookings_repository: BookingsRepository,
        expenses_repository: ExpensesRepository,
        customers_repository: CustomersRepository,
    ) -> None:
        self.tours_service = tours_service
        self.tours_repository = tours_repository
        self.bookings_repository = bookings_repository
        self.expenses_repository = expenses_repository
        self.customers_repository = customers_repository

    def get_dashboard(
        self, filters: DashboardFilters, now: Optional[datetime] = None
    ) -> DashboardResponse:
        validate_date_window(filters.start_date, filters.end_date)
        current = now or now_utc()
        self.tours_service.refresh_statuses(current)

        tours = self.tours_repository.list_tours()
        bookings = self.bookings_repository.list_bookings()
        expenses = self.expenses_repository.list_expenses()
        guests = self.bookings_repository.list_guests()

        selected = filter_bookings(
            bookings,
            start_date=filters.start_date,
            end_date=filters.end_date,
            leader_name=filters.leader_name,
        )
        # Expenses follow the tours that the selected bookings belong to.
        tour_ids = {booking.tour_id for booking in selected}
        revenue = total_revenue(selected)
        spent = total_expenses(expenses, tour_ids)

        stats = DashboardStats(
            total_customers=self.customers_repository.count_customers(),
            total_tours=len(tours),
            total_bookings=len(selected),
            unique_customers=count_unique_customers(guests),
            total_revenue=revenue,
            total_expenses=spent,
            gross_profit=gross_profit(revenue, spent),
        )
        return DashboardResponse(
            stats=stats,
            recent_bookings=self._recent_bookings(selected),
            upcoming_tours=self._upcoming_tours(tours, bookings, current),
            tour_status=TourStatusCounts(**{k.lower(): v for k, v in count_by_status(tours).items()}),
            revenue_by_type=RevenueByType(**revenue_by_type(selected)),
        )

    @staticmethod
    def _recent_bookings(bookings: List[BookingRecord]) -> List[RecentBooking]:
        ordered = sorted(
            bookings,
            key=lambda booking: to_stored_wall_clock(booking.created_at or datetime.min),
            reverse=True,
        )
        return [
            RecentBooking(
                id=booking.id,
                customer_name=booking.customer.name if booking.customer else None,
                tour_name=booking.tour.name if booking.tour else None,
                total_price=booking.total_price,
                deposit=booking.deposit,
                status=booking.status,
                created_at=booking.created_at,
            )
            for booking in ordered[:RECENT_BOOKINGS_LIMIT]
        ]

    @staticmethod
    def _upcoming_tours(
        tours: List[TourRecord], bookings: List[BookingRecord], now: datetime
    ) -> List[UpcomingTour]:
        local_now = to_civil_wall_clock(now)
        booked: Dict[str, int] = {}
        for booking in bookings:
            booked[booking.tour_id] = booked.get(booking.tour_id, 0) + 1
        upcoming = sorted(
            (
                tour
                for tour in tours
                if tour.status == "UPCOMING" and to_stored_wall_clock(tour.start_date) >= local_now
            ),
            key=lambda tour: to_stored_wall_clock(tour.start_date),
        )
        return [
            UpcomingTour(
                id=tour.id,
                name=tour.name,
                type=tour.type,
                start_date=tour.start_date,
                end_date=tour.end_date,
                max_guests=tour.max_guests,
                booked_guests=booked.get(tour.id, 0),
                price=tour.price,
            )
            for tour in upcoming[:UPCOMING_TOURS_LIMIT]
        ]
