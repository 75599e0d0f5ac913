from __future__ import annotations

from typing import Any, Dict, List, Optional

from tourdesk.core.supabase import SupabaseClient, eq, in_list
from tourdesk.models.bookings import BookingRecord, BookingServiceRecord, GuestRecord

BOOKING_SELECT = "*,customer:customers(*),tour:tours(*),guests(*),services:booking_services(*)"


class BookingsRepository:
    def __init__(self) -> None:
        self.client = SupabaseClient()

    def list_bookings(self, tour_id: Optional[str] = None) -> List[BookingRecord]:
        filters = [eq("tour_id", tour_id)] if tour_id else None
        rows, _ = self.client.select(
            table="bookings",
            select=BOOKING_SELECT,
            filters=filters,
            order="created_at.desc",
        )
        return [BookingRecord.model_validate(row) for row in rows]

    def get_booking(self, booking_id: str) -> Optional[BookingRecord]:
        rows, _ = self.client.select(
            table="bookings",
            select=BOOKING_SELECT,
            filters=[eq("id", booking_id)],
            limit=1,
        )
        if not rows:
            return None
        return BookingRecord.model_validate(rows[0])

    def create_booking(self, payload: Dict[str, Any]) -> BookingRecord:
        rows = self.client.insert(table="bookings", payload=payload)
        return BookingRecord.model_validate(rows[0])

    def update_booking(self, booking_id: str, payload: Dict[str, Any]) -> Optional[BookingRecord]:
        rows = self.client.update(
            table="bookings",
            payload=payload,
            filters=[eq("id", booking_id)],
        )
        if not rows:
            return None
        return BookingRecord.model_validate(rows[0])

    def delete_booking(self, booking_id: str) -> bool:
        rows = self.client.delete(table="bookings", filters=[eq("id", booking_id)])
        return bool(rows)

    def list_guests(self) -> List[GuestRecord]:
        rows, _ = self.client.select(table="guests", select="id,booking_id,name,phone,service_id")
        return [GuestRecord.model_validate(row) for row in rows]

    def create_guests(self, rows: List[Dict[str, Any]]) -> List[GuestRecord]:
        if not rows:
            return []
        created = self.client.insert(table="guests", payload=rows)
        return [GuestRecord.model_validate(row) for row in created]

    def delete_guests(self, booking_ids: List[str]) -> int:
        if not booking_ids:
            return 0
        deleted = self.client.delete(table="guests", filters=[in_list("booking_id", booking_ids)])
        return len(deleted)

    def create_services(self, rows: List[Dict[str, Any]]) -> List[BookingServiceRecord]:
        if not rows:
            return []
        created = self.client.insert(table="booking_services", payload=rows)
        return [BookingServiceRecord.model_validate(row) for row in created]

    def delete_services(self, booking_ids: List[str]) -> int:
        if not booking_ids:
            return 0
        deleted = self.client.delete(table="booking_services", filters=[in_list("booking_id", booking_ids)])
        return len(deleted)

    def delete_bookings_for_tour(self, tour_id: str) -> int:
        deleted = self.client.delete(table="bookings", filters=[eq("tour_id", tour_id)])
        return len(deleted)
