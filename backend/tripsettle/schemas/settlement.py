"""
Pydantic schemas for balances and settlements.
"""
from pydantic import BaseModel
from typing import List, Optional
from decimal import Decimal
from tripsettle.schemas.expense import Expense, Participant


class Balance(BaseModel):
    """Net position of one participant (positive = is owed, negative = owes)."""
    participant_id: str
    name: str
    balance: Decimal


class Settlement(BaseModel):
    """A single transfer from a debtor to a creditor."""
    id: str
    from_id: str  # Participant who pays
    to_id: str  # Participant who receives
    amount: Decimal  # Rounded to cents
    settled: bool = False


class SettlementSummary(BaseModel):
    """Schema for a full settlement report."""
    currency: str
    total_expenses: Decimal
    participant_count: int
    balances: List[Balance]
    settlements: List[Settlement]
    summary: str


class SettlementRequest(BaseModel):
    """Request body carrying an expense and participant snapshot."""
    expenses: List[Expense] = []
    participants: List[Participant] = []


class SummaryRequest(SettlementRequest):
    """Request body for a settlement report."""
    currency: Optional[str] = None  # Defaults to settings.BASE_CURRENCY


class ReconcileRequest(BaseModel):
    """Request body for carrying settled flags onto recomputed settlements."""
    previous: List[Settlement] = []
    current: List[Settlement] = []
    tolerance: Decimal = Decimal("0.01")
