from __future__ import annotations

from typing import List

from tourdesk.core.errors import BadRequestError, NotFoundError
from tourdesk.models.tours import ExpenseRecord
from tourdesk.repositories.expenses_repository import ExpensesRepository
from tourdesk.repositories.tours_repository import ToursRepository
from tourdesk.schemas.expenses import Expense, ExpenseCreateRequest, ExpenseUpdateRequest
from tourdesk.schemas.tours import DeletedResult, Tour


class ExpensesService:
    def __init__(
        self, repository: ExpensesRepository, tours_repository: ToursRepository
    ) -> None:
        self.repository = repository
        self.tours_repository = tours_repository

    def list_expenses(self) -> List[Expense]:
        return [self._to_expense(record) for record in self.repository.list_expenses()]

    def create_expense(self, request: ExpenseCreateRequest) -> Expense:
        self._require_tour(request.tour_id)
        record = self.repository.create_expense(request.model_dump(mode="json"))
        return self._to_expense(record)

    def update_expense(self, expense_id: str, request: ExpenseUpdateRequest) -> Expense:
        payload = request.model_dump(mode="json", exclude_unset=True)
        if request.tour_id is not None:
            self._require_tour(request.tour_id)
        if payload:
            record = self.repository.update_expense(expense_id, payload)
        else:
            record = self.repository.get_expense(expense_id)
        if record is None:
            raise NotFoundError("Expense not found")
        return self._to_expense(record)

    def delete_expense(self, expense_id: str) -> DeletedResult:
        if not self.repository.delete_expense(expense_id):
            raise NotFoundError("Expense not found")
        return DeletedResult(id=expense_id, message="Expense deleted successfully")

    def _require_tour(self, tour_id: str) -> None:
        if self.tours_repository.get_tour(tour_id) is None:
            raise BadRequestError("Tour does not exist")

    def _to_expense(self, record: ExpenseRecord) -> Expense:
        tour = Tour(**record.tour.model_dump()) if record.tour else None
        return Expense(
            id=record.id,
            tour_id=record.tour_id,
            type=record.type,
            amount=record.amount,
            description=record.description,
            created_at=record.created_at,
            tour=tour,
        )
