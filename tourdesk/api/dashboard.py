from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from tourdesk.api.dependencies import get_dashboard_service
from tourdesk.schemas.dashboard import DashboardFilters, DashboardResponse
from tourdesk.services.dashboard_service import DashboardService
from tourdesk.shared.response import ResponseEnvelope, build_meta


router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("")
def dashboard(
    start_date: Optional[date] = Query(default=None, alias="startDate"),
    end_date: Optional[date] = Query(default=None, alias="endDate"),
    leader_name: Optional[str] = Query(default=None, alias="leaderName"),
    service: DashboardService = Depends(get_dashboard_service),
) -> ResponseEnvelope[DashboardResponse]:
    filters = DashboardFilters(start_date=start_date, end_date=end_date, leader_name=leader_name)
    data = service.get_dashboard(filters)
    return ResponseEnvelope(
        data=data,
        meta=build_meta(
            "dashboard",
            currency="VND",
            filters=filters.model_dump(mode="json", by_alias=True, exclude_none=True),
        ),
    )
