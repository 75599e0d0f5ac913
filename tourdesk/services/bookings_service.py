from __future__ import annotations

import logging
from typing import Any, Dict, List

from tourdesk.core.errors import BadRequestError, NotFoundError
from tourdesk.models.bookings import BookingRecord
from tourdesk.repositories.bookings_repository import BookingsRepository
from tourdesk.repositories.customers_repository import CustomersRepository
from tourdesk.repositories.tours_repository import ToursRepository
from tourdesk.schemas.bookings import (
    Booking,
    BookingCreateRequest,
    BookingService,
    BookingServiceInput,
    BookingUpdateRequest,
    Guest,
    GuestInput,
)
from tourdesk.schemas.customers import Customer
from tourdesk.schemas.tours import DeletedResult, Tour


logger = logging.getLogger(__name__)


def _guest_rows(booking_id: str, guests: List[GuestInput]) -> List[Dict[str, Any]]:
    return [
        {
            "booking_id": booking_id,
            "name": guest.name,
            "phone": guest.phone,
            "service_id": guest.service_id or None,
        }
        for guest in guests
    ]


def _service_rows(booking_id: str, services: List[BookingServiceInput]) -> List[Dict[str, Any]]:
    rows = []
    for service in services:
        row = service.model_dump(mode="json")
        row["booking_id"] = booking_id
        row["service_id"] = service.service_id or None
        rows.append(row)
    return rows


class BookingsService:
    def __init__(
        self,
        repository: BookingsRepository,
        customers_repository: CustomersRepository,
        tours_repository: ToursRepository,
    ) -> None:
        self.repository = repository
        self.customers_repository = customers_repository
        self.tours_repository = tours_repository

    def list_bookings(self) -> List[Booking]:
        return [self._to_booking(record) for record in self.repository.list_bookings()]

    def get_booking(self, booking_id: str) -> Booking:
        record = self.repository.get_booking(booking_id)
        if record is None:
            raise NotFoundError("Booking not found")
        return self._to_booking(record)

    def create_booking(self, request: BookingCreateRequest) -> Booking:
        if self.customers_repository.get_customer(request.customer_id) is None:
            raise BadRequestError("Customer does not exist")
        if self.tours_repository.get_tour(request.tour_id) is None:
            raise BadRequestError("Tour does not exist")

        payload = request.model_dump(mode="json", exclude={"guests", "services"})
        created = self.repository.create_booking(payload)
        try:
            self.repository.create_guests(_guest_rows(created.id, request.guests))
            self.repository.create_services(_service_rows(created.id, request.services))
        except Exception:
            logger.exception("Failed to store guests/services of booking %s; removing it", created.id)
            self._remove_booking_rows(created.id)
            raise
        return self.get_booking(created.id)

    def update_booking(self, booking_id: str, request: BookingUpdateRequest) -> Booking:
        if self.repository.get_booking(booking_id) is None:
            raise NotFoundError("Booking not found")
        payload = request.model_dump(mode="json", exclude_unset=True, exclude={"guests"})
        if payload:
            self.repository.update_booking(booking_id, payload)
        if request.guests is not None:
            self.repository.delete_guests([booking_id])
            self.repository.create_guests(_guest_rows(booking_id, request.guests))
        return self.get_booking(booking_id)

    def delete_booking(self, booking_id: str) -> DeletedResult:
        if self.repository.get_booking(booking_id) is None:
            raise NotFoundError("Booking not found")
        self._remove_booking_rows(booking_id)
        return DeletedResult(id=booking_id, message="Booking deleted successfully")

    def _remove_booking_rows(self, booking_id: str) -> None:
        self.repository.delete_guests([booking_id])
        self.repository.delete_services([booking_id])
        self.repository.delete_booking(booking_id)

    def _to_booking(self, record: BookingRecord) -> Booking:
        customer = None
        if record.customer is not None:
            customer = Customer(**record.customer.model_dump(include=set(Customer.model_fields)))
        tour = Tour(**record.tour.model_dump()) if record.tour else None
        return Booking(
            id=record.id,
            customer_id=record.customer_id,
            tour_id=record.tour_id,
            deposit=record.deposit,
            total_price=record.total_price,
            status=record.status,
            notes=record.notes,
            created_at=record.created_at,
            customer=customer,
            tour=tour,
            guests=[Guest(**guest.model_dump()) for guest in record.guests],
            services=[BookingService(**service.model_dump()) for service in record.services],
        )
