from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from tourdesk.api.dependencies import get_customers_service
from tourdesk.schemas.customers import (
    Customer,
    CustomerCreateRequest,
    CustomerDetail,
    CustomerUpdateRequest,
)
from tourdesk.schemas.tours import DeletedResult
from tourdesk.services.customers_service import CustomersService
from tourdesk.shared.response import ResponseEnvelope, build_meta


router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("")
def list_customers(
    service: CustomersService = Depends(get_customers_service),
) -> ResponseEnvelope[List[CustomerDetail]]:
    data = service.list_customers()
    return ResponseEnvelope(data=data, meta=build_meta("customers", total_items=len(data)))


@router.post("")
def create_customer(
    request: CustomerCreateRequest,
    service: CustomersService = Depends(get_customers_service),
) -> ResponseEnvelope[Customer]:
    return ResponseEnvelope(data=service.create_customer(request), meta=build_meta("customers"))


@router.put("/{customer_id}")
def update_customer(
    customer_id: str,
    request: CustomerUpdateRequest,
    service: CustomersService = Depends(get_customers_service),
) -> ResponseEnvelope[Customer]:
    return ResponseEnvelope(
        data=service.update_customer(customer_id, request), meta=build_meta("customers")
    )


@router.delete("/{customer_id}")
def delete_customer(
    customer_id: str,
    service: CustomersService = Depends(get_customers_service),
) -> ResponseEnvelope[DeletedResult]:
    return ResponseEnvelope(data=service.delete_customer(customer_id), meta=build_meta("customers"))
