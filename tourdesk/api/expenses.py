from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from tourdesk.api.dependencies import get_expenses_service
from tourdesk.schemas.expenses import Expense, ExpenseCreateRequest, ExpenseUpdateRequest
from tourdesk.schemas.tours import DeletedResult
from tourdesk.services.expenses_service import ExpensesService
from tourdesk.shared.response import ResponseEnvelope, build_meta


router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.get("")
def list_expenses(
    service: ExpensesService = Depends(get_expenses_service),
) -> ResponseEnvelope[List[Expense]]:
    data = service.list_expenses()
    return ResponseEnvelope(data=data, meta=build_meta("expenses", total_items=len(data)))


@router.post("", status_code=201)
def create_expense(
    request: ExpenseCreateRequest,
    service: ExpensesService = Depends(get_expenses_service),
) -> ResponseEnvelope[Expense]:
    return ResponseEnvelope(data=service.create_expense(request), meta=build_meta("expenses"))


@router.put("/{expense_id}")
def update_expense(
    expense_id: str,
    request: ExpenseUpdateRequest,
    service: ExpensesService = Depends(get_expenses_service),
) -> ResponseEnvelope[Expense]:
    return ResponseEnvelope(
        data=service.update_expense(expense_id, request), meta=build_meta("expenses")
    )


@router.delete("/{expense_id}")
def delete_expense(
    expense_id: str,
    service: ExpensesService = Depends(get_expenses_service),
) -> ResponseEnvelope[DeletedResult]:
    return ResponseEnvelope(data=service.delete_expense(expense_id), meta=build_meta("expenses"))
