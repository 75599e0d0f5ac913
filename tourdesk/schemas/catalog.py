from __future__ import annotations

from typing import Optional

from tourdesk.shared.base import BaseSchema


class TourInfo(BaseSchema):
    id: str
    seq: int
    tour_name: str
    service_name: str
    price: str
    note: Optional[str] = None


class TourInfoImportResult(BaseSchema):
    total_rows: int
    imported: int
    skipped: int
    failed: int


class Song(BaseSchema):
    id: str
    title: str
    artist: str
    url: str
