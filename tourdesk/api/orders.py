from __future__ import annotations

from fastapi import APIRouter, Depends

from tourdesk.api.dependencies import get_orders_service
from tourdesk.schemas.orders import OrderCreateRequest, OrderResult
from tourdesk.services.orders_service import OrdersService
from tourdesk.shared.response import ResponseEnvelope, build_meta


router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", status_code=201)
def create_order(
    request: OrderCreateRequest,
    service: OrdersService = Depends(get_orders_service),
) -> ResponseEnvelope[OrderResult]:
    return ResponseEnvelope(data=service.create_order(request), meta=build_meta("orders"))
