"""
Expense aggregation and split helpers.
"""
from typing import Dict, List
from decimal import Decimal
from tripsettle.core.utils import round_cents
from tripsettle.schemas.expense import (
    Expense, ExpenseSplit, ParticipantTotals, CategoryExpenseItem, CategorySummary
)


def totals_by_participant(expenses: List[Expense], participant_id: str) -> ParticipantTotals:
    """Sum what a participant paid and what they owe across all expenses."""
    paid = Decimal(0)
    owed = Decimal(0)

    for expense in expenses:
        if expense.paid_by == participant_id:
            paid += expense.amount
        # Only the first split naming the participant counts
        split = next((s for s in expense.splits if s.participant_id == participant_id), None)
        if split is not None:
            owed += split.amount

    return ParticipantTotals(paid=paid, owed=owed, net=paid - owed)


def totals_by_category(expenses: List[Expense]) -> Dict[str, Decimal]:
    """Sum expense amounts per category label."""
    totals: Dict[str, Decimal] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, Decimal(0)) + expense.amount
    return totals


def category_summary(expenses: List[Expense]) -> CategorySummary:
    """
    Break expenses down by category with counts and percentages.
    Categories are sorted by total amount, largest first.
    """
    total_expenses = sum((e.amount for e in expenses), Decimal(0))
    category_totals = totals_by_category(expenses)

    category_counts: Dict[str, int] = {}
    for expense in expenses:
        category_counts[expense.category] = category_counts.get(expense.category, 0) + 1

    category_items = []
    for category, total_amount in category_totals.items():
        percentage = float((total_amount / total_expenses * 100) if total_expenses > 0 else 0)
        category_items.append(CategoryExpenseItem(
            category=category,
            total_amount=total_amount,
            expense_count=category_counts[category],
            percentage=percentage
        ))

    category_items.sort(key=lambda x: x.total_amount, reverse=True)

    return CategorySummary(total_expenses=total_expenses, categories=category_items)


def equal_splits(amount: Decimal, participant_ids: List[str]) -> List[ExpenseSplit]:
    """
    Split an amount evenly, rounded to cents.
    The last participant absorbs the rounding remainder so shares add up to ``amount``.
    """
    if not participant_ids:
        return []

    share = round_cents(amount / len(participant_ids))
    splits = [ExpenseSplit(participant_id=pid, amount=share) for pid in participant_ids[:-1]]
    remainder = amount - share * (len(participant_ids) - 1)
    splits.append(ExpenseSplit(participant_id=participant_ids[-1], amount=remainder))
    return splits
