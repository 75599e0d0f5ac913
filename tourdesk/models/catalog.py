from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class TourInfoRecord(BaseModel):
    id: str
    seq: int
    tour_name: str
    service_name: str
    price: str
    note: Optional[str] = None
