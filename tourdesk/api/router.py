from __future__ import annotations

from fastapi import APIRouter

from tourdesk.api.bookings import router as bookings_router
from tourdesk.api.calendar import router as calendar_router
from tourdesk.api.catalog import router as catalog_router
from tourdesk.api.customers import router as customers_router
from tourdesk.api.dashboard import router as dashboard_router
from tourdesk.api.expenses import router as expenses_router
from tourdesk.api.health import router as health_router
from tourdesk.api.orders import router as orders_router
from tourdesk.api.tours import router as tours_router


api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(tours_router)
api_router.include_router(customers_router)
api_router.include_router(bookings_router)
api_router.include_router(expenses_router)
api_router.include_router(orders_router)
api_router.include_router(dashboard_router)
api_router.include_router(calendar_router)
api_router.include_router(catalog_router)
