from __future__ import annotations

from functools import lru_cache

from tourdesk.core.config import get_settings
from tourdesk.repositories.bookings_repository import BookingsRepository
from tourdesk.repositories.customers_repository import CustomersRepository
from tourdesk.repositories.expenses_repository import ExpensesRepository
from tourdesk.repositories.tour_info_repository import TourInfoRepository
from tourdesk.repositories.tours_repository import ToursRepository
from tourdesk.services.bookings_service import BookingsService
from tourdesk.services.customers_service import CustomersService
from tourdesk.services.dashboard_service import DashboardService
from tourdesk.services.expenses_service import ExpensesService
from tourdesk.services.orders_service import OrdersService
from tourdesk.services.songs_service import SongsService
from tourdesk.services.tour_info_service import TourInfoService
from tourdesk.services.tours_service import ToursService


@lru_cache
def get_tours_repository() -> ToursRepository:
    return ToursRepository()


@lru_cache
def get_customers_repository() -> CustomersRepository:
    return CustomersRepository()


@lru_cache
def get_bookings_repository() -> BookingsRepository:
    return BookingsRepository()


@lru_cache
def get_expenses_repository() -> ExpensesRepository:
    return ExpensesRepository()


@lru_cache
def get_tour_info_repository() -> TourInfoRepository:
    return TourInfoRepository()


def get_tours_service() -> ToursService:
    return ToursService(
        repository=get_tours_repository(),
        bookings_repository=get_bookings_repository(),
        expenses_repository=get_expenses_repository(),
    )


def get_customers_service() -> CustomersService:
    return CustomersService(repository=get_customers_repository())


def get_bookings_service() -> BookingsService:
    return BookingsService(
        repository=get_bookings_repository(),
        customers_repository=get_customers_repository(),
        tours_repository=get_tours_repository(),
    )


def get_expenses_service() -> ExpensesService:
    return ExpensesService(
        repository=get_expenses_repository(),
        tours_repository=get_tours_repository(),
    )


def get_dashboard_service() -> DashboardService:
    return DashboardService(
        tours_service=get_tours_service(),
        tours_repository=get_tours_repository(),
        bookings_repository=get_bookings_repository(),
        expenses_repository=get_expenses_repository(),
        customers_repository=get_customers_repository(),
    )


def get_orders_service() -> OrdersService:
    return OrdersService(
        customers_service=get_customers_service(),
        tours_service=get_tours_service(),
        bookings_service=get_bookings_service(),
    )


def get_tour_info_service() -> TourInfoService:
    return TourInfoService(repository=get_tour_info_repository())


def get_songs_service() -> SongsService:
    settings = get_settings()
    return SongsService(music_dir=settings.music_dir, url_prefix=settings.music_url_prefix)
