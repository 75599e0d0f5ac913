from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from tourdesk.core.supabase import SupabaseClient, eq
from tourdesk.models.tours import TourRecord

TOUR_COLUMNS = "id,name,description,type,status,start_date,end_date,max_guests,price,created_at"


class ToursRepository:
    def __init__(self) -> None:
        self.client = SupabaseClient()

    @staticmethod
    def _to_iso_utc(dt: datetime) -> str:
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc).isoformat()

    def list_tours(self) -> List[TourRecord]:
        rows, _ = self.client.select(table="tours", select=TOUR_COLUMNS, order="start_date.asc")
        return [TourRecord.model_validate(row) for row in rows]

    def list_tours_in_window(self, start: datetime, end: datetime) -> List[TourRecord]:
        """Tours starting or ending inside [start, end], or spanning the whole window."""
        lower = self._to_iso_utc(start)
        upper = self._to_iso_utc(end)
        rows, _ = self.client.select(
            table="tours",
            select=TOUR_COLUMNS,
            filters=[
                (
                    "or",
                    f"(and(start_date.gte.{lower},start_date.lte.{upper}),"
                    f"and(end_date.gte.{lower},end_date.lte.{upper}),"
                    f"and(start_date.lte.{lower},end_date.gte.{upper}))",
                )
            ],
            order="start_date.asc",
        )
        return [TourRecord.model_validate(row) for row in rows]

    def get_tour(self, tour_id: str) -> Optional[TourRecord]:
        rows, _ = self.client.select(
            table="tours",
            select=TOUR_COLUMNS,
            filters=[eq("id", tour_id)],
            limit=1,
        )
        if not rows:
            return None
        return TourRecord.model_validate(rows[0])

    def create_tour(self, payload: Dict[str, Any]) -> TourRecord:
        rows = self.client.insert(table="tours", payload=payload)
        return TourRecord.model_validate(rows[0])

    def update_tour(self, tour_id: str, payload: Dict[str, Any]) -> Optional[TourRecord]:
        rows = self.client.update(
            table="tours",
            payload=payload,
            filters=[eq("id", tour_id)],
        )
        if not rows:
            return None
        return TourRecord.model_validate(rows[0])

    def delete_tour(self, tour_id: str) -> bool:
        rows = self.client.delete(table="tours", filters=[eq("id", tour_id)])
        return bool(rows)
