from __future__ import annotations

from typing import List

from tourdesk.core.errors import NotFoundError
from tourdesk.models.bookings import CustomerRecord, CustomerWithBookingsRecord
from tourdesk.repositories.customers_repository import CustomersRepository
from tourdesk.schemas.customers import (
    Customer,
    CustomerBooking,
    CustomerBookingTour,
    CustomerCreateRequest,
    CustomerDetail,
    CustomerUpdateRequest,
)
from tourdesk.schemas.tours import DeletedResult

CUSTOMER_CODE_PREFIX = "KH"
CUSTOMER_CODE_WIDTH = 4


def format_customer_code(sequence: int) -> str:
    return f"{CUSTOMER_CODE_PREFIX}{sequence:0{CUSTOMER_CODE_WIDTH}d}"


class CustomersService:
    def __init__(self, repository: CustomersRepository) -> None:
        self.repository = repository

    def list_customers(self) -> List[CustomerDetail]:
        return [self._to_customer_detail(record) for record in self.repository.list_customers()]

    def create_customer(self, request: CustomerCreateRequest) -> Customer:
        # Sequential, count based; deleting customers can make codes repeat.
        code = format_customer_code(self.repository.count_customers() + 1)
        payload = request.model_dump(mode="json")
        payload["code"] = code
        record = self.repository.create_customer(payload)
        return self._to_customer(record)

    def update_customer(self, customer_id: str, request: CustomerUpdateRequest) -> Customer:
        payload = request.model_dump(mode="json", exclude_unset=True)
        if not payload:
            record = self.repository.get_customer(customer_id)
        else:
            record = self.repository.update_customer(customer_id, payload)
        if record is None:
            raise NotFoundError("Customer not found")
        return self._to_customer(record)

    def delete_customer(self, customer_id: str) -> DeletedResult:
        if not self.repository.delete_customer(customer_id):
            raise NotFoundError("Customer not found")
        return DeletedResult(id=customer_id, message="Customer deleted successfully")

    def _to_customer(self, record: CustomerRecord) -> Customer:
        return Customer(**record.model_dump(include=set(Customer.model_fields)))

    def _to_customer_detail(self, record: CustomerWithBookingsRecord) -> CustomerDetail:
        bookings = []
        for booking in record.bookings:
            tour = None
            if booking.tour is not None:
                tour = CustomerBookingTour(
                    id=booking.tour.id,
                    name=booking.tour.name,
                    type=booking.tour.type,
                    status=booking.tour.status,
                    start_date=booking.tour.start_date,
                    end_date=booking.tour.end_date,
                )
            bookings.append(
                CustomerBooking(
                    id=booking.id,
                    tour_id=booking.tour_id,
                    deposit=booking.deposit,
                    total_price=booking.total_price,
                    status=booking.status,
                    created_at=booking.created_at,
                    tour=tour,
                )
            )
        return CustomerDetail(
            **record.model_dump(include=set(Customer.model_fields)), bookings=bookings
        )
