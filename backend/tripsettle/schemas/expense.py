"""
Pydantic schemas for Participant and Expense entities.
"""
from pydantic import BaseModel
from typing import List, Optional
from decimal import Decimal


class Participant(BaseModel):
    """A person taking part in the trip."""
    id: str
    name: str


class ExpenseSplit(BaseModel):
    """One participant's owed share of an expense."""
    participant_id: str
    amount: Decimal


class Expense(BaseModel):
    """A single cost paid in full by one participant."""
    id: str
    paid_by: str  # Participant ID of the payer
    amount: Decimal
    splits: List[ExpenseSplit]
    category: str = "other"
    description: Optional[str] = None


class ParticipantTotals(BaseModel):
    """What a participant paid, what they owe, and the difference."""
    paid: Decimal
    owed: Decimal
    net: Decimal


class CategoryExpenseItem(BaseModel):
    """Schema for category expense item in summary."""
    category: str
    total_amount: Decimal
    expense_count: int
    percentage: float  # Share of all expenses (0-100)


class CategorySummary(BaseModel):
    """Schema for category summary response."""
    total_expenses: Decimal
    categories: List[CategoryExpenseItem]  # Sorted by total_amount, largest first


class ExpenseList(BaseModel):
    """Request body carrying an expense snapshot."""
    expenses: List[Expense] = []


class SplitRequest(BaseModel):
    """Request body for an equal split."""
    amount: Decimal
    participant_ids: List[str]
