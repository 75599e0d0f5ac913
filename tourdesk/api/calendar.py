from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query

from tourdesk.api.dependencies import get_tours_service
from tourdesk.schemas.tours import CalendarTour
from tourdesk.services.tours_service import ToursService
from tourdesk.shared.response import ResponseEnvelope, build_meta


router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("")
def calendar_tours(
    month: int = Query(...),
    year: int = Query(...),
    service: ToursService = Depends(get_tours_service),
) -> ResponseEnvelope[List[CalendarTour]]:
    data = service.list_calendar(month=month, year=year)
    return ResponseEnvelope(
        data=data,
        meta=build_meta(
            "tours", total_items=len(data), filters={"month": month, "year": year}
        ),
    )
