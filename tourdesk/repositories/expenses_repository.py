from __future__ import annotations

from typing import Any, Dict, List, Optional

from tourdesk.core.supabase import SupabaseClient, eq
from tourdesk.models.tours import ExpenseRecord

EXPENSE_SELECT = "*,tour:tours(*)"


class ExpensesRepository:
    def __init__(self) -> None:
        self.client = SupabaseClient()

    def list_expenses(self, tour_id: Optional[str] = None) -> List[ExpenseRecord]:
        filters = [eq("tour_id", tour_id)] if tour_id else None
        rows, _ = self.client.select(
            table="expenses",
            select=EXPENSE_SELECT,
            filters=filters,
            order="created_at.desc",
        )
        return [ExpenseRecord.model_validate(row) for row in rows]

    def get_expense(self, expense_id: str) -> Optional[ExpenseRecord]:
        rows, _ = self.client.select(
            table="expenses",
            select=EXPENSE_SELECT,
            filters=[eq("id", expense_id)],
            limit=1,
        )
        if not rows:
            return None
        return ExpenseRecord.model_validate(rows[0])

    def create_expense(self, payload: Dict[str, Any]) -> ExpenseRecord:
        rows = self.client.insert(table="expenses", payload=payload, select=EXPENSE_SELECT)
        return ExpenseRecord.model_validate(rows[0])

    def update_expense(self, expense_id: str, payload: Dict[str, Any]) -> Optional[ExpenseRecord]:
        rows = self.client.update(
            table="expenses",
            payload=payload,
            filters=[eq("id", expense_id)],
            select=EXPENSE_SELECT,
        )
        if not rows:
            return None
        return ExpenseRecord.model_validate(rows[0])

    def delete_expense(self, expense_id: str) -> bool:
        rows = self.client.delete(table="expenses", filters=[eq("id", expense_id)])
        return bool(rows)

    def delete_expenses_for_tour(self, tour_id: str) -> int:
        deleted = self.client.delete(table="expenses", filters=[eq("tour_id", tour_id)])
        return len(deleted)
