"""
Settlement calculation routes.
"""
import logging
from fastapi import APIRouter
from typing import List
from tripsettle.core.config import settings
from tripsettle.schemas.settlement import (
    Balance, Settlement, SettlementSummary, SettlementRequest, SummaryRequest, ReconcileRequest
)
from tripsettle.services.settlement_service import (
    compute_balances, compute_settlements, carry_over_settled, build_settlement_summary
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settlement", tags=["settlement"])


@router.post("/balances", response_model=List[Balance])
async def get_balances(request: SettlementRequest):
    """Calculate the net balance of every participant."""
    return compute_balances(request.expenses, request.participants)


@router.post("/transfers", response_model=List[Settlement])
async def get_transfers(request: SettlementRequest):
    """Calculate the transfers that settle all balances."""
    settlements = compute_settlements(request.expenses, request.participants)
    logger.info(f"Settlement requested: {len(settlements)} transfers")
    return settlements


@router.post("/summary", response_model=SettlementSummary)
async def get_summary(request: SummaryRequest):
    """Calculate balances and transfers and render a text summary."""
    currency = request.currency or settings.BASE_CURRENCY
    return build_settlement_summary(request.expenses, request.participants, currency)


@router.post("/reconcile", response_model=List[Settlement])
async def reconcile_settlements(request: ReconcileRequest):
    """
    Carry settled flags from a previous run onto recomputed settlements.
    Matching is by (from_id, to_id) with an amount tolerance.
    """
    return carry_over_settled(request.previous, request.current, request.tolerance)
