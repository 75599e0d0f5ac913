from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from tourdesk.api.dependencies import get_songs_service, get_tour_info_service
from tourdesk.schemas.catalog import Song, TourInfo
from tourdesk.services.songs_service import SongsService
from tourdesk.services.tour_info_service import TourInfoService
from tourdesk.shared.response import ResponseEnvelope, build_meta


router = APIRouter(tags=["catalog"])


@router.get("/tour-info")
def list_tour_info(
    service: TourInfoService = Depends(get_tour_info_service),
) -> ResponseEnvelope[List[TourInfo]]:
    data = service.list_tour_info()
    return ResponseEnvelope(data=data, meta=build_meta("tour_info", total_items=len(data)))


@router.get("/songs")
def list_songs(
    service: SongsService = Depends(get_songs_service),
) -> ResponseEnvelope[List[Song]]:
    data = service.list_songs()
    return ResponseEnvelope(data=data, meta=build_meta("music_dir", total_items=len(data)))
