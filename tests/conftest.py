from __future__ import annotations

import os

os.environ.setdefault("SUPABASE_URL", "http://supabase.test")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")

import itertools
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from tourdesk.api.dependencies import (
    get_bookings_service,
    get_customers_service,
    get_dashboard_service,
    get_expenses_service,
    get_orders_service,
    get_songs_service,
    get_tour_info_service,
    get_tours_service,
)
from tourdesk.main import create_app
from tourdesk.models.bookings import (
    BookingRecord,
    BookingServiceRecord,
    CustomerRecord,
    CustomerWithBookingsRecord,
    GuestRecord,
)
from tourdesk.models.catalog import TourInfoRecord
from tourdesk.models.tours import ExpenseRecord, TourRecord
from tourdesk.services.bookings_service import BookingsService
from tourdesk.services.customers_service import CustomersService
from tourdesk.services.dashboard_service import DashboardService
from tourdesk.services.expenses_service import ExpensesService
from tourdesk.services.orders_service import OrdersService
from tourdesk.services.songs_service import SongsService
from tourdesk.services.tour_info_service import TourInfoService
from tourdesk.services.tours_service import ToursService


class InMemoryStore:
    """Rows keyed by table, shaped like PostgREST responses."""

    def __init__(self) -> None:
        self.tables: Dict[str, Dict[str, Dict[str, Any]]] = {
            "customers": {},
            "tours": {},
            "bookings": {},
            "guests": {},
            "booking_services": {},
            "expenses": {},
            "tour_info": {},
        }
        self._ids = itertools.count(1)
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def insert(self, table: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        row_id = f"{table}-{next(self._ids)}"
        row = {"id": row_id, **payload}
        if table in {"customers", "tours", "bookings", "expenses"}:
            self._clock += timedelta(minutes=1)
            row.setdefault("created_at", self._clock.isoformat())
        self.tables[table][row_id] = row
        return row

    def rows(self, table: str) -> List[Dict[str, Any]]:
        return list(self.tables[table].values())


class FakeToursRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        self.status_writes: List[tuple[str, str]] = []
        self.fail_updates = False
        self.failing_ids: set[str] = set()

    def list_tours(self) -> List[TourRecord]:
        records = [TourRecord.model_validate(row) for row in self.store.rows("tours")]
        return sorted(records, key=lambda tour: tour.start_date)

    def list_tours_in_window(self, start: datetime, end: datetime) -> List[TourRecord]:
        return [
            tour
            for tour in self.list_tours()
            if start <= tour.start_date <= end
            or start <= tour.end_date <= end
            or (tour.start_date <= start and tour.end_date >= end)
        ]

    def get_tour(self, tour_id: str) -> Optional[TourRecord]:
        row = self.store.tables["tours"].get(tour_id)
        return TourRecord.model_validate(row) if row else None

    def create_tour(self, payload: Dict[str, Any]) -> TourRecord:
        return TourRecord.model_validate(self.store.insert("tours", payload))

    def update_tour(self, tour_id: str, payload: Dict[str, Any]) -> Optional[TourRecord]:
        if self.fail_updates or tour_id in self.failing_ids:
            raise RuntimeError("store unavailable")
        row = self.store.tables["tours"].get(tour_id)
        if row is None:
            return None
        if set(payload) == {"status"}:
            self.status_writes.append((tour_id, payload["status"]))
        row.update(payload)
        return TourRecord.model_validate(row)

    def delete_tour(self, tour_id: str) -> bool:
        return self.store.tables["tours"].pop(tour_id, None) is not None


class FakeCustomersRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        self.fail_create = False

    def list_customers(self) -> List[CustomerWithBookingsRecord]:
        customers = []
        for row in self.store.rows("customers"):
            bookings = [
                {**booking, "tour": self.store.tables["tours"].get(booking["tour_id"])}
                for booking in self.store.rows("bookings")
                if booking["customer_id"] == row["id"]
            ]
            customers.append(CustomerWithBookingsRecord.model_validate({**row, "bookings": bookings}))
        return sorted(customers, key=lambda customer: customer.created_at, reverse=True)

    def get_customer(self, customer_id: str) -> Optional[CustomerRecord]:
        row = self.store.tables["customers"].get(customer_id)
        return CustomerRecord.model_validate(row) if row else None

    def count_customers(self) -> int:
        return len(self.store.tables["customers"])

    def create_customer(self, payload: Dict[str, Any]) -> CustomerRecord:
        if self.fail_create:
            raise RuntimeError("insert failed")
        return CustomerRecord.model_validate(self.store.insert("customers", payload))

    def update_customer(self, customer_id: str, payload: Dict[str, Any]) -> Optional[CustomerRecord]:
        row = self.store.tables["customers"].get(customer_id)
        if row is None:
            return None
        row.update(payload)
        return CustomerRecord.model_validate(row)

    def delete_customer(self, customer_id: str) -> bool:
        return self.store.tables["customers"].pop(customer_id, None) is not None


class FakeBookingsRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        self.fail_create = False
        self.fail_services = False

    def _embed(self, row: Dict[str, Any]) -> BookingRecord:
        return BookingRecord.model_validate(
            {
                **row,
                "customer": self.store.tables["customers"].get(row["customer_id"]),
                "tour": self.store.tables["tours"].get(row["tour_id"]),
                "guests": [g for g in self.store.rows("guests") if g["booking_id"] == row["id"]],
                "services": [
                    s for s in self.store.rows("booking_services") if s["booking_id"] == row["id"]
                ],
            }
        )

    def list_bookings(self, tour_id: Optional[str] = None) -> List[BookingRecord]:
        records = [
            self._embed(row)
            for row in self.store.rows("bookings")
            if tour_id is None or row["tour_id"] == tour_id
        ]
        return sorted(records, key=lambda booking: booking.created_at, reverse=True)

    def get_booking(self, booking_id: str) -> Optional[BookingRecord]:
        row = self.store.tables["bookings"].get(booking_id)
        return self._embed(row) if row else None

    def create_booking(self, payload: Dict[str, Any]) -> BookingRecord:
        if self.fail_create:
            raise RuntimeError("insert failed")
        return BookingRecord.model_validate(self.store.insert("bookings", payload))

    def update_booking(self, booking_id: str, payload: Dict[str, Any]) -> Optional[BookingRecord]:
        row = self.store.tables["bookings"].get(booking_id)
        if row is None:
            return None
        row.update(payload)
        return BookingRecord.model_validate(row)

    def delete_booking(self, booking_id: str) -> bool:
        return self.store.tables["bookings"].pop(booking_id, None) is not None

    def list_guests(self) -> List[GuestRecord]:
        return [GuestRecord.model_validate(row) for row in self.store.rows("guests")]

    def create_guests(self, rows: List[Dict[str, Any]]) -> List[GuestRecord]:
        return [GuestRecord.model_validate(self.store.insert("guests", row)) for row in rows]

    def delete_guests(self, booking_ids: List[str]) -> int:
        return self._delete_children("guests", booking_ids)

    def create_services(self, rows: List[Dict[str, Any]]) -> List[BookingServiceRecord]:
        if self.fail_services and rows:
            raise RuntimeError("insert failed")
        return [
            BookingServiceRecord.model_validate(self.store.insert("booking_services", row))
            for row in rows
        ]

    def delete_services(self, booking_ids: List[str]) -> int:
        return self._delete_children("booking_services", booking_ids)

    def delete_bookings_for_tour(self, tour_id: str) -> int:
        doomed = [row["id"] for row in self.store.rows("bookings") if row["tour_id"] == tour_id]
        for booking_id in doomed:
            del self.store.tables["bookings"][booking_id]
        return len(doomed)

    def _delete_children(self, table: str, booking_ids: List[str]) -> int:
        doomed = [row["id"] for row in self.store.rows(table) if row["booking_id"] in booking_ids]
        for row_id in doomed:
            del self.store.tables[table][row_id]
        return len(doomed)


class FakeExpensesRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def _embed(self, row: Dict[str, Any]) -> ExpenseRecord:
        return ExpenseRecord.model_validate(
            {**row, "tour": self.store.tables["tours"].get(row["tour_id"])}
        )

    def list_expenses(self, tour_id: Optional[str] = None) -> List[ExpenseRecord]:
        records = [
            self._embed(row)
            for row in self.store.rows("expenses")
            if tour_id is None or row["tour_id"] == tour_id
        ]
        return sorted(records, key=lambda expense: expense.created_at, reverse=True)

    def get_expense(self, expense_id: str) -> Optional[ExpenseRecord]:
        row = self.store.tables["expenses"].get(expense_id)
        return self._embed(row) if row else None

    def create_expense(self, payload: Dict[str, Any]) -> ExpenseRecord:
        return self._embed(self.store.insert("expenses", payload))

    def update_expense(self, expense_id: str, payload: Dict[str, Any]) -> Optional[ExpenseRecord]:
        row = self.store.tables["expenses"].get(expense_id)
        if row is None:
            return None
        row.update(payload)
        return self._embed(row)

    def delete_expense(self, expense_id: str) -> bool:
        return self.store.tables["expenses"].pop(expense_id, None) is not None

    def delete_expenses_for_tour(self, tour_id: str) -> int:
        doomed = [row["id"] for row in self.store.rows("expenses") if row["tour_id"] == tour_id]
        for expense_id in doomed:
            del self.store.tables["expenses"][expense_id]
        return len(doomed)


class FakeTourInfoRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def list_tour_info(self) -> List[TourInfoRecord]:
        records = [TourInfoRecord.model_validate(row) for row in self.store.rows("tour_info")]
        return sorted(records, key=lambda item: (item.seq, item.tour_name))

    def delete_all(self) -> int:
        count = len(self.store.tables["tour_info"])
        self.store.tables["tour_info"].clear()
        return count

    def insert_row(self, payload: Dict[str, Any]) -> TourInfoRecord:
        return TourInfoRecord.model_validate(self.store.insert("tour_info", payload))


class Repositories:
    def __init__(self, store: InMemoryStore) -> None:
        self.store = store
        self.tours = FakeToursRepository(store)
        self.customers = FakeCustomersRepository(store)
        self.bookings = FakeBookingsRepository(store)
        self.expenses = FakeExpensesRepository(store)
        self.tour_info = FakeTourInfoRepository(store)

    def tours_service(self) -> ToursService:
        return ToursService(
            repository=self.tours,
            bookings_repository=self.bookings,
            expenses_repository=self.expenses,
        )

    def customers_service(self) -> CustomersService:
        return CustomersService(repository=self.customers)

    def bookings_service(self) -> BookingsService:
        return BookingsService(
            repository=self.bookings,
            customers_repository=self.customers,
            tours_repository=self.tours,
        )

    def expenses_service(self) -> ExpensesService:
        return ExpensesService(repository=self.expenses, tours_repository=self.tours)

    def dashboard_service(self) -> DashboardService:
        return DashboardService(
            tours_service=self.tours_service(),
            tours_repository=self.tours,
            bookings_repository=self.bookings,
            expenses_repository=self.expenses,
            customers_repository=self.customers,
        )

    def orders_service(self) -> OrdersService:
        return OrdersService(
            customers_service=self.customers_service(),
            tours_service=self.tours_service(),
            bookings_service=self.bookings_service(),
        )

    def tour_info_service(self) -> TourInfoService:
        return TourInfoService(repository=self.tour_info)

    # Seeding helpers write raw rows the way the store would hold them.
    def add_customer(self, name: str, phone: str = "0900000000", **fields: Any) -> str:
        return self.store.insert("customers", {"name": name, "phone": phone, **fields})["id"]

    def add_tour(
        self,
        name: str,
        start: str,
        end: str,
        tour_type: str = "GROUP",
        status: str = "UPCOMING",
        **fields: Any,
    ) -> str:
        payload = {
            "name": name,
            "type": tour_type,
            "status": status,
            "start_date": start,
            "end_date": end,
            "max_guests": 10,
            "price": "0",
            **fields,
        }
        return self.store.insert("tours", payload)["id"]

    def add_booking(
        self,
        customer_id: str,
        tour_id: str,
        total_price: str,
        deposit: str = "0",
        status: str = "PENDING",
    ) -> str:
        return self.store.insert(
            "bookings",
            {
                "customer_id": customer_id,
                "tour_id": tour_id,
                "total_price": total_price,
                "deposit": deposit,
                "status": status,
            },
        )["id"]

    def add_guest(self, booking_id: str, name: str, phone: str) -> str:
        return self.store.insert("guests", {"booking_id": booking_id, "name": name, "phone": phone})["id"]

    def add_expense(self, tour_id: str, amount: str, expense_type: str = "TOUR_COST") -> str:
        return self.store.insert(
            "expenses", {"tour_id": tour_id, "type": expense_type, "amount": amount}
        )["id"]


@pytest.fixture()
def repos() -> Repositories:
    return Repositories(InMemoryStore())


@pytest.fixture()
def music_dir(tmp_path):
    directory = tmp_path / "music"
    directory.mkdir()
    return directory


@pytest.fixture()
def client(repos: Repositories, music_dir) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_tours_service] = repos.tours_service
    app.dependency_overrides[get_customers_service] = repos.customers_service
    app.dependency_overrides[get_bookings_service] = repos.bookings_service
    app.dependency_overrides[get_expenses_service] = repos.expenses_service
    app.dependency_overrides[get_dashboard_service] = repos.dashboard_service
    app.dependency_overrides[get_orders_service] = repos.orders_service
    app.dependency_overrides[get_tour_info_service] = repos.tour_info_service
    app.dependency_overrides[get_songs_service] = lambda: SongsService(music_dir=str(music_dir))
    return TestClient(app, raise_server_exceptions=False)
