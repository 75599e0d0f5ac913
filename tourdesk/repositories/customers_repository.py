from __future__ import annotations

from typing import Any, Dict, List, Optional

from tourdesk.core.supabase import SupabaseClient, eq
from tourdesk.models.bookings import CustomerRecord, CustomerWithBookingsRecord


class CustomersRepository:
    def __init__(self) -> None:
        self.client = SupabaseClient()

    def list_customers(self) -> List[CustomerWithBookingsRecord]:
        rows, _ = self.client.select(
            table="customers",
            select="*,bookings(*,tour:tours(*))",
            order="created_at.desc",
        )
        return [CustomerWithBookingsRecord.model_validate(row) for row in rows]

    def get_customer(self, customer_id: str) -> Optional[CustomerRecord]:
        rows, _ = self.client.select(
            table="customers",
            select="*",
            filters=[eq("id", customer_id)],
            limit=1,
        )
        if not rows:
            return None
        return CustomerRecord.model_validate(rows[0])

    def count_customers(self) -> int:
        return self.client.count("customers")

    def create_customer(self, payload: Dict[str, Any]) -> CustomerRecord:
        rows = self.client.insert(table="customers", payload=payload)
        return CustomerRecord.model_validate(rows[0])

    def update_customer(self, customer_id: str, payload: Dict[str, Any]) -> Optional[CustomerRecord]:
        rows = self.client.update(
            table="customers",
            payload=payload,
            filters=[eq("id", customer_id)],
        )
        if not rows:
            return None
        return CustomerRecord.model_validate(rows[0])

    def delete_customer(self, customer_id: str) -> bool:
        rows = self.client.delete(table="customers", filters=[eq("id", customer_id)])
        return bool(rows)
