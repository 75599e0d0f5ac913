from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from tourdesk.analytics.financials import TourTotals, summarize_tour
from tourdesk.analytics.tour_status import plan_status_changes
from tourdesk.core.errors import BadRequestError, NotFoundError
from tourdesk.models.bookings import BookingRecord
from tourdesk.models.tours import ExpenseRecord, TourRecord
from tourdesk.repositories.bookings_repository import BookingsRepository
from tourdesk.repositories.expenses_repository import ExpensesRepository
from tourdesk.repositories.tours_repository import ToursRepository
from tourdesk.schemas.tours import (
    CalendarTour,
    DeletedResult,
    Tour,
    TourBooking,
    TourBookingCustomer,
    TourBookingGuest,
    TourCreateRequest,
    TourDetail,
    TourExpense,
    TourStatusUpdateRequest,
    TourSummary,
    TourUpdateRequest,
)
from tourdesk.shared.time import month_bounds, now_utc, to_civil_wall_clock, to_stored_wall_clock


logger = logging.getLogger(__name__)


class ToursService:
    def __init__(
        self,
        repository: ToursRepository,
        bookings_repository: BookingsRepository,
        expenses_repository: ExpensesRepository,
    ) -> None:
        self.repository = repository
        self.bookings_repository = bookings_repository
        self.expenses_repository = expenses_repository

    def refresh_statuses(self, now: Optional[datetime] = None) -> int:
        """Bring every stored tour status in line with the civil clock.

        Only changed tours are written, each on its own: a failed write is
        logged and skipped so the remaining tours are still brought up to date
        and the calling request carries on with whatever statuses are stored.
        """
        local_now = to_civil_wall_clock(now or now_utc())
        try:
            tours = self.repository.list_tours()
        except Exception:
            logger.exception("Could not load tours for status refresh")
            return 0

        written = 0
        for tour, status in plan_status_changes(tours, local_now):
            try:
                self.repository.update_tour(tour.id, {"status": status})
            except Exception:
                logger.exception("Error updating status of tour %s to %s", tour.id, status)
                continue
            written += 1
        if written:
            logger.info("Updated status of %d tour(s)", written)
        return written

    def list_tours(self) -> List[TourSummary]:
        self.refresh_statuses()
        tours = self.repository.list_tours()
        bookings = self.bookings_repository.list_bookings()
        expenses = self.expenses_repository.list_expenses()
        return [
            self._to_tour_summary(tour, summarize_tour(tour, bookings, expenses))
            for tour in tours
        ]

    def get_tour(self, tour_id: str) -> TourDetail:
        tour = self._require_tour(tour_id)
        return self._to_tour_detail(tour)

    def create_tour(self, request: TourCreateRequest) -> Tour:
        payload = request.model_dump(mode="json", exclude={"status"})
        payload["status"] = request.status or "UPCOMING"
        record = self.repository.create_tour(payload)
        return self._to_tour(record)

    def update_tour(self, tour_id: str, request: TourUpdateRequest) -> TourDetail:
        payload = request.model_dump(mode="json", exclude_unset=True)
        current = self._require_tour(tour_id)
        start = request.start_date or current.start_date
        end = request.end_date or current.end_date
        if to_stored_wall_clock(end) < to_stored_wall_clock(start):
            raise BadRequestError("endDate must not be before startDate")
        record = current
        if payload:
            record = self.repository.update_tour(tour_id, payload)
            if record is None:
                raise NotFoundError("Tour not found")
        return self._to_tour_detail(record)

    def update_status(self, tour_id: str, request: TourStatusUpdateRequest) -> Tour:
        # Overwritten by the next status refresh when it disagrees with the dates.
        record = self.repository.update_tour(tour_id, {"status": request.status})
        if record is None:
            raise NotFoundError("Tour not found")
        return self._to_tour(record)

    def delete_tour(self, tour_id: str) -> DeletedResult:
        self._require_tour(tour_id)
        bookings = self.bookings_repository.list_bookings(tour_id=tour_id)
        booking_ids = [booking.id for booking in bookings]
        self.bookings_repository.delete_guests(booking_ids)
        self.bookings_repository.delete_services(booking_ids)
        self.bookings_repository.delete_bookings_for_tour(tour_id)
        self.expenses_repository.delete_expenses_for_tour(tour_id)
        self.repository.delete_tour(tour_id)
        logger.info(
            "Deleted tour %s with %d booking(s) and its expenses", tour_id, len(booking_ids)
        )
        return DeletedResult(id=tour_id, message="Tour deleted successfully")

    def list_calendar(self, month: int, year: int) -> List[CalendarTour]:
        start, end = month_bounds(year, month)
        self.refresh_statuses()
        tours = self.repository.list_tours_in_window(start, end)
        bookings = self.bookings_repository.list_bookings()
        booked = {}
        for booking in bookings:
            booked[booking.tour_id] = booked.get(booking.tour_id, 0) + 1
        return [
            CalendarTour(
                id=tour.id,
                name=tour.name,
                type=tour.type,
                status=tour.status,
                start_date=tour.start_date,
                end_date=tour.end_date,
                max_guests=tour.max_guests,
                booked_guests=booked.get(tour.id, 0),
                price=tour.price,
            )
            for tour in tours
        ]

    def _require_tour(self, tour_id: str) -> TourRecord:
        record = self.repository.get_tour(tour_id)
        if record is None:
            raise NotFoundError("Tour not found")
        return record

    def _to_tour(self, record: TourRecord) -> Tour:
        return Tour(**record.model_dump())

    def _to_tour_summary(self, record: TourRecord, totals: TourTotals) -> TourSummary:
        return TourSummary(
            **record.model_dump(),
            booked_guests=totals.booked_guests,
            total_revenue=totals.total_revenue,
            total_expenses=totals.total_expenses,
            profit=totals.profit,
            payment_remainder=totals.payment_remainder,
            is_fully_paid=totals.is_fully_paid,
        )

    def _to_tour_detail(self, record: TourRecord) -> TourDetail:
        bookings = self.bookings_repository.list_bookings(tour_id=record.id)
        expenses = self.expenses_repository.list_expenses(tour_id=record.id)
        totals = summarize_tour(record, bookings, expenses)
        summary = self._to_tour_summary(record, totals)
        return TourDetail(
            **summary.model_dump(),
            bookings=[self._to_tour_booking(booking) for booking in bookings],
            expenses=[self._to_tour_expense(expense) for expense in expenses],
        )

    @staticmethod
    def _to_tour_booking(booking: BookingRecord) -> TourBooking:
        customer = None
        if booking.customer is not None:
            customer = TourBookingCustomer(
                id=booking.customer.id,
                code=booking.customer.code,
                name=booking.customer.name,
                phone=booking.customer.phone,
                email=booking.customer.email,
            )
        return TourBooking(
            id=booking.id,
            customer_id=booking.customer_id,
            deposit=booking.deposit,
            total_price=booking.total_price,
            status=booking.status,
            notes=booking.notes,
            created_at=booking.created_at,
            customer=customer,
            guests=[
                TourBookingGuest(
                    id=guest.id, name=guest.name, phone=guest.phone, service_id=guest.service_id
                )
                for guest in booking.guests
            ],
        )

    @staticmethod
    def _to_tour_expense(expense: ExpenseRecord) -> TourExpense:
        return TourExpense(
            id=expense.id,
            type=expense.type,
            amount=expense.amount,
            description=expense.description,
            created_at=expense.created_at,
        )
