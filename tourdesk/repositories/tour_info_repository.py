from __future__ import annotations

from typing import Any, Dict, List

from tourdesk.core.supabase import SupabaseClient
from tourdesk.models.catalog import TourInfoRecord


class TourInfoRepository:
    def __init__(self) -> None:
        self.client = SupabaseClient()

    def list_tour_info(self) -> List[TourInfoRecord]:
        rows, _ = self.client.select(
            table="tour_info",
            select="id,seq,tour_name,service_name,price,note",
            order="seq.asc,tour_name.asc",
        )
        return [TourInfoRecord.model_validate(row) for row in rows]

    def delete_all(self) -> int:
        deleted = self.client.delete(table="tour_info", filters=[("id", "not.is.null")])
        return len(deleted)

    def insert_row(self, payload: Dict[str, Any]) -> TourInfoRecord:
        rows = self.client.insert(table="tour_info", payload=payload)
        return TourInfoRecord.model_validate(rows[0])
