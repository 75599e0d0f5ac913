from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from tourdesk.api.dependencies import get_tours_service
from tourdesk.schemas.tours import (
    DeletedResult,
    Tour,
    TourCreateRequest,
    TourDetail,
    TourStatusUpdateRequest,
    TourSummary,
    TourUpdateRequest,
)
from tourdesk.services.tours_service import ToursService
from tourdesk.shared.response import ResponseEnvelope, build_meta


router = APIRouter(prefix="/tours", tags=["tours"])

CURRENCY = "VND"


@router.get("")
def list_tours(
    service: ToursService = Depends(get_tours_service),
) -> ResponseEnvelope[List[TourSummary]]:
    data = service.list_tours()
    return ResponseEnvelope(
        data=data, meta=build_meta("tours", currency=CURRENCY, total_items=len(data))
    )


@router.post("")
def create_tour(
    request: TourCreateRequest,
    service: ToursService = Depends(get_tours_service),
) -> ResponseEnvelope[Tour]:
    return ResponseEnvelope(data=service.create_tour(request), meta=build_meta("tours"))


@router.get("/{tour_id}")
def get_tour(
    tour_id: str,
    service: ToursService = Depends(get_tours_service),
) -> ResponseEnvelope[TourDetail]:
    return ResponseEnvelope(
        data=service.get_tour(tour_id), meta=build_meta("tours", currency=CURRENCY)
    )


@router.put("/{tour_id}")
def update_tour(
    tour_id: str,
    request: TourUpdateRequest,
    service: ToursService = Depends(get_tours_service),
) -> ResponseEnvelope[TourDetail]:
    return ResponseEnvelope(
        data=service.update_tour(tour_id, request), meta=build_meta("tours", currency=CURRENCY)
    )


@router.patch("/{tour_id}")
def update_tour_status(
    tour_id: str,
    request: TourStatusUpdateRequest,
    service: ToursService = Depends(get_tours_service),
) -> ResponseEnvelope[Tour]:
    return ResponseEnvelope(data=service.update_status(tour_id, request), meta=build_meta("tours"))


@router.delete("/{tour_id}")
def delete_tour(
    tour_id: str,
    service: ToursService = Depends(get_tours_service),
) -> ResponseEnvelope[DeletedResult]:
    return ResponseEnvelope(data=service.delete_tour(tour_id), meta=build_meta("tours"))
