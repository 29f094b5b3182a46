"""
Settlement service for balance calculation and debt simplification.

All functions are pure: they take an expense/participant snapshot and return
new objects. Nothing is validated and nothing is raised, so the same input
always produces the same output.
"""
import logging
from typing import Dict, List, Optional, Set
from decimal import Decimal
from tripsettle.core.utils import round_cents
from tripsettle.schemas.expense import Expense, Participant
from tripsettle.schemas.settlement import Balance, Settlement, SettlementSummary

logger = logging.getLogger(__name__)

# Balances closer to zero than this are treated as settled
EPSILON = Decimal("0.001")
SETTLEMENT_ID_PREFIX = "settlement-"


def compute_balances(expenses: List[Expense], participants: List[Participant]) -> List[Balance]:
    """
    Calculate the net balance of every participant.

    The payer is credited the full amount and each split participant is
    debited their share. Ids missing from ``participants`` are not attributed
    to anyone. One row is returned per participant, in input order.
    """
    net_balances: Dict[str, Decimal] = {p.id: Decimal(0) for p in participants}

    for expense in expenses:
        if expense.paid_by in net_balances:
            net_balances[expense.paid_by] += expense.amount

        for split in expense.splits:
            if split.participant_id in net_balances:
                net_balances[split.participant_id] -= split.amount

    return [
        Balance(participant_id=p.id, name=p.name, balance=net_balances[p.id])
        for p in participants
    ]


def compute_settlements(expenses: List[Expense], participants: List[Participant]) -> List[Settlement]:
    """Calculate the transfers that settle a trip."""
    balances = compute_balances(expenses, participants)
    settlements = minimize_transfers(balances)
    logger.debug(
        f"Computed {len(settlements)} settlements for {len(participants)} participants "
        f"and {len(expenses)} expenses"
    )
    return settlements


def minimize_transfers(balances: List[Balance]) -> List[Settlement]:
    """
    Minimize the number of transfers needed to settle debts.

    Greedy: the largest creditor is always matched against the largest debtor.
    Emitted amounts are rounded to cents but the running balances move by the
    exact amount, and anything left within EPSILON of zero is dropped.
    """
    # Mutable [participant_id, balance] pairs
    creditors = [[b.participant_id, b.balance] for b in balances if b.balance > EPSILON]
    debtors = [[b.participant_id, b.balance] for b in balances if b.balance < -EPSILON]

    transfers = []
    counter = 0

    while creditors and debtors:
        creditors.sort(key=lambda x: x[1], reverse=True)
        debtors.sort(key=lambda x: x[1])

        creditor = creditors[0]
        debtor = debtors[0]

        amount = min(creditor[1], abs(debtor[1]))
        rounded = round_cents(amount)

        if rounded > 0:
            counter += 1
            transfers.append(Settlement(
                id=f"{SETTLEMENT_ID_PREFIX}{counter}",
                from_id=debtor[0],
                to_id=creditor[0],
                amount=rounded,
                settled=False
            ))

        creditor[1] -= amount
        debtor[1] += amount

        if abs(creditor[1]) < EPSILON:
            creditors.pop(0)
        if abs(debtor[1]) < EPSILON:
            debtors.pop(0)

    return transfers


def mark_settled(settlements: List[Settlement], settlement_id: str) -> List[Settlement]:
    """Return a copy of ``settlements`` with one transfer flagged as paid."""
    return [
        s.model_copy(update={"settled": True}) if s.id == settlement_id else s
        for s in settlements
    ]


def carry_over_settled(
    previous: List[Settlement],
    current: List[Settlement],
    tolerance: Decimal = Decimal("0.01")
) -> List[Settlement]:
    """
    Re-apply settled flags from an earlier run to freshly computed settlements.

    A previously settled transfer matches a current one with the same
    (from_id, to_id) pair whose amount is within ``tolerance``. The match
    takes over the previous id and is marked settled. Each previous transfer
    is used at most once.
    """
    remaining = [s for s in previous if s.settled]
    matches: List[Optional[Settlement]] = []

    for settlement in current:
        match = next(
            (
                p for p in remaining
                if p.from_id == settlement.from_id
                and p.to_id == settlement.to_id
                and abs(p.amount - settlement.amount) <= tolerance
            ),
            None
        )
        if match is not None:
            remaining.remove(match)
        matches.append(match)

    carried_ids = {m.id for m in matches if m is not None}
    used_ids = carried_ids | {s.id for s, m in zip(current, matches) if m is None}

    result = []
    for settlement, match in zip(current, matches):
        if match is not None:
            result.append(settlement.model_copy(update={"id": match.id, "settled": True}))
        elif settlement.id in carried_ids:
            # Id now belongs to a carried-over transfer
            new_id = _next_free_id(used_ids)
            used_ids.add(new_id)
            result.append(settlement.model_copy(update={"id": new_id}))
        else:
            result.append(settlement)

    logger.debug(f"Carried over {len(carried_ids)} settled flags onto {len(current)} settlements")
    return result


def _next_free_id(used_ids: Set[str]) -> str:
    counter = 1
    while f"{SETTLEMENT_ID_PREFIX}{counter}" in used_ids:
        counter += 1
    return f"{SETTLEMENT_ID_PREFIX}{counter}"


def build_settlement_summary(
    expenses: List[Expense],
    participants: List[Participant],
    currency: str
) -> SettlementSummary:
    """
    Calculate balances and settlements and render them as a report.
    """
    balances = compute_balances(expenses, participants)
    settlements = minimize_transfers(balances)
    total_expenses = sum((e.amount for e in expenses), Decimal(0))
    names = {p.id: p.name for p in participants}

    # Create summary text
    summary_lines = []
    summary_lines.append(f"Total expenses: {total_expenses:.2f} {currency}")
    summary_lines.append(f"Participants: {len(participants)}")
    summary_lines.append("\nNet balances:")
    for balance in balances:
        summary_lines.append(f"  {balance.name}: {balance.balance:+.2f} {currency}")
    summary_lines.append("\nTransfers:")
    for settlement in settlements:
        summary_lines.append(
            f"  {names.get(settlement.from_id, settlement.from_id)} -> "
            f"{names.get(settlement.to_id, settlement.to_id)}: "
            f"{settlement.amount:.2f} {currency}"
        )

    return SettlementSummary(
        currency=currency,
        total_expenses=total_expenses,
        participant_count=len(participants),
        balances=balances,
        settlements=settlements,
        summary="\n".join(summary_lines)
    )
