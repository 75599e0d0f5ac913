from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Set

from tourdesk.models.bookings import BookingRecord, GuestRecord
from tourdesk.models.tours import ExpenseRecord, TourRecord
from tourdesk.shared.time import to_stored_wall_clock


logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Tour type -> revenue bucket name.
REVENUE_BUCKETS: Dict[str, str] = {
    "GROUP": "group",
    "PRIVATE": "private",
    "ONE_ON_ONE": "one_on_one",
}


@dataclass(frozen=True)
class TourTotals:
    booked_guests: int
    total_revenue: Decimal
    total_expenses: Decimal
    profit: Decimal
    payment_remainder: Decimal
    is_fully_paid: bool


def _tour_end_day(booking: BookingRecord) -> Optional[date]:
    if booking.tour is None:
        return None
    return to_stored_wall_clock(booking.tour.end_date).date()


def filter_bookings(
    bookings: Iterable[BookingRecord],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    leader_name: Optional[str] = None,
) -> List[BookingRecord]:
    """Apply the dashboard filters with AND semantics.

    The date window is inclusive and applies to the end date of the booking's
    tour; the leader filter is a case-insensitive substring of the customer name.
    """
    needle = (leader_name or "").strip().lower()
    selected: List[BookingRecord] = []
    for booking in bookings:
        if start_date or end_date:
            end_day = _tour_end_day(booking)
            if end_day is None:
                continue
            if start_date and end_day < start_date:
                continue
            if end_date and end_day > end_date:
                continue
        if needle:
            leader = booking.customer.name if booking.customer else ""
            if needle not in leader.lower():
                continue
        selected.append(booking)
    return selected


def total_revenue(bookings: Iterable[BookingRecord]) -> Decimal:
    return sum((booking.total_price for booking in bookings), ZERO)


def total_deposits(bookings: Iterable[BookingRecord]) -> Decimal:
    return sum((booking.deposit for booking in bookings), ZERO)


def total_expenses(
    expenses: Iterable[ExpenseRecord], tour_ids: Optional[Set[str]] = None
) -> Decimal:
    """Sum expense amounts, restricted to ``tour_ids`` when given."""
    return sum(
        (
            expense.amount
            for expense in expenses
            if tour_ids is None or expense.tour_id in tour_ids
        ),
        ZERO,
    )


def gross_profit(revenue: Decimal, expenses: Decimal) -> Decimal:
    return revenue - expenses


def revenue_by_type(bookings: Iterable[BookingRecord]) -> Dict[str, Decimal]:
    buckets = {bucket: ZERO for bucket in REVENUE_BUCKETS.values()}
    for booking in bookings:
        tour_type = booking.tour.type if booking.tour else None
        bucket = REVENUE_BUCKETS.get(tour_type or "")
        if bucket is None:
            logger.warning(
                "Booking %s has unknown tour type %r; left out of revenue by type",
                booking.id,
                tour_type,
            )
            continue
        buckets[bucket] += booking.total_price
    return buckets


def count_unique_customers(guests: Iterable[GuestRecord]) -> int:
    """Distinct people across guest rows, keyed on normalized name and phone."""
    seen = {
        (guest.name.strip().lower(), (guest.phone or "").strip())
        for guest in guests
    }
    return len(seen)


def payment_remainder(bookings: Sequence[BookingRecord]) -> Decimal:
    return total_revenue(bookings) - total_deposits(bookings)


def summarize_tour(
    tour: TourRecord,
    bookings: Iterable[BookingRecord],
    expenses: Iterable[ExpenseRecord],
) -> TourTotals:
    tour_bookings = [booking for booking in bookings if booking.tour_id == tour.id]
    revenue = total_revenue(tour_bookings)
    spent = total_expenses(expenses, {tour.id})
    remainder = payment_remainder(tour_bookings)
    return TourTotals(
        booked_guests=len(tour_bookings),
        total_revenue=revenue,
        total_expenses=spent,
        profit=gross_profit(revenue, spent),
        payment_remainder=remainder,
        is_fully_paid=remainder <= ZERO,
    )
