"""
Expense aggregation routes.
"""
from fastapi import APIRouter
from typing import List
from tripsettle.schemas.expense import (
    ExpenseList, ExpenseSplit, SplitRequest, ParticipantTotals, CategorySummary
)
from tripsettle.services.expense_service import (
    totals_by_participant, category_summary, equal_splits
)

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.post("/split", response_model=List[ExpenseSplit])
async def split_expense(request: SplitRequest):
    """Split an amount evenly between participants."""
    return equal_splits(request.amount, request.participant_ids)


@router.post("/totals/{participant_id}", response_model=ParticipantTotals)
async def get_participant_totals(participant_id: str, request: ExpenseList):
    """Get what a participant paid and owes."""
    return totals_by_participant(request.expenses, participant_id)


@router.post("/category-summary", response_model=CategorySummary)
async def get_category_summary(request: ExpenseList):
    """
    Get expense summary by category.
    Returns total amount spent in each category.
    """
    return category_summary(request.expenses)
