from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable, List, Tuple

from tourdesk.core.errors import AppError
from tourdesk.schemas.bookings import BookingCreateRequest, BookingServiceInput
from tourdesk.schemas.orders import OrderCreateRequest, OrderResult
from tourdesk.schemas.tours import TourCreateRequest
from tourdesk.services.bookings_service import BookingsService
from tourdesk.services.customers_service import CustomersService
from tourdesk.services.tours_service import ToursService


logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


class OrderStepError(AppError):
    def __init__(self, step: str, cause: Exception) -> None:
        status_code = cause.status_code if isinstance(cause, AppError) else 500
        detail = cause.message if isinstance(cause, AppError) else "unexpected error"
        super().__init__(message=f"Failed to create {step}: {detail}", status_code=status_code)
        self.step = step


def services_total(services: List[BookingServiceInput]) -> Decimal:
    return sum((service.price * service.quantity for service in services), Decimal("0"))


def services_headcount(services: List[BookingServiceInput]) -> int:
    return sum(service.quantity for service in services)


def apply_discount(total: Decimal, discount_percent: Decimal) -> Decimal:
    return total - total * discount_percent / HUNDRED


class OrdersService:
    """Creates customer, tour and booking in one go.

    The store offers no cross-table transaction, so when a later step fails the
    rows created by earlier steps are deleted again before the error is raised.
    """

    def __init__(
        self,
        customers_service: CustomersService,
        tours_service: ToursService,
        bookings_service: BookingsService,
    ) -> None:
        self.customers_service = customers_service
        self.tours_service = tours_service
        self.bookings_service = bookings_service

    def create_order(self, request: OrderCreateRequest) -> OrderResult:
        compensations: List[Tuple[str, Callable[[], object]]] = []

        try:
            customer = self.customers_service.create_customer(request.customer)
        except Exception as exc:
            raise self._fail("customer", exc, compensations) from exc
        compensations.append(
            ("customer", lambda: self.customers_service.delete_customer(customer.id))
        )

        tour_request = TourCreateRequest(
            name=request.tour.name,
            description=request.tour.description,
            type=request.tour.type,
            start_date=request.tour.start_date,
            end_date=request.tour.end_date,
            max_guests=(
                request.tour.max_guests
                if request.tour.max_guests is not None
                else services_headcount(request.services)
            ),
            price=(
                request.tour.price
                if request.tour.price is not None
                else services_total(request.services)
            ),
        )
        try:
            tour = self.tours_service.create_tour(tour_request)
        except Exception as exc:
            raise self._fail("tour", exc, compensations) from exc
        compensations.append(("tour", lambda: self.tours_service.delete_tour(tour.id)))

        final_price = apply_discount(services_total(request.services), request.discount_percent)
        booking_request = BookingCreateRequest(
            customer_id=customer.id,
            tour_id=tour.id,
            deposit=request.paid_amount,
            total_price=final_price,
            status="CONFIRMED" if request.paid_amount >= final_price else "PENDING",
            notes=request.notes if request.notes is not None else request.tour.description,
            guests=request.guests,
            services=request.services,
        )
        try:
            booking = self.bookings_service.create_booking(booking_request)
        except Exception as exc:
            raise self._fail("booking", exc, compensations) from exc

        logger.info("Created order: customer %s, tour %s, booking %s", customer.id, tour.id, booking.id)
        return OrderResult(customer=customer, tour=tour, booking=booking)

    @staticmethod
    def _fail(
        step: str, exc: Exception, compensations: List[Tuple[str, Callable[[], object]]]
    ) -> OrderStepError:
        logger.error("Order creation failed at %s step: %s", step, exc)
        for name, undo in reversed(compensations):
            try:
                undo()
                logger.info("Rolled back %s after failed %s step", name, step)
            except Exception:
                logger.exception("Could not roll back %s; manual cleanup needed", name)
        return OrderStepError(step, exc)
