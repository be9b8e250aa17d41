"""
Balance calculation for a trip's expense history.

Balances are derived, never stored: every call recomputes paid, consumed and
net for each participant from the full list of expenses. Malformed expenses
(payer sums not matching the total, adjustments larger than the total,
missing splitters) are not rejected here; they produce well-defined numbers.
Validation belongs to the expense entry boundary.
"""
import logging
from decimal import Decimal
from typing import Dict, List
from tripsplit.schemas.trip import Trip
from tripsplit.schemas.expense import Expense
from tripsplit.schemas.balance import Balance

logger = logging.getLogger(__name__)


class UnknownParticipantError(ValueError):
    """Raised in strict mode when an expense references a participant outside the trip."""
    def __init__(self, expense_id: str, participant_id: str, role: str):
        self.expense_id = expense_id
        self.participant_id = participant_id
        self.role = role
        super().__init__(
            f"Expense {expense_id} references unknown {role} '{participant_id}'"
        )


class Tally:
    """Running totals for one participant."""
    def __init__(self):
        self.paid = Decimal(0)
        self.consumed = Decimal(0)


def _check_references(trip: Trip) -> None:
    """Raise UnknownParticipantError for the first reference to a non-member."""
    known = {p.id for p in trip.participants}
    for expense in trip.expenses:
        for payer in expense.payers:
            if payer.participant_id not in known:
                raise UnknownParticipantError(expense.id, payer.participant_id, "payer")
        for participant_id in expense.splitters:
            if participant_id not in known:
                raise UnknownParticipantError(expense.id, participant_id, "splitter")
        for adjustment in expense.adjustments:
            if adjustment.participant_id not in known:
                raise UnknownParticipantError(expense.id, adjustment.participant_id, "adjustment")


def _apply_expense(expense: Expense, tallies: Dict[str, Tally]) -> None:
    """Add one expense's paid and consumed amounts to the tallies."""
    for payer in expense.payers:
        tally = tallies.get(payer.participant_id)
        if tally is None:
            logger.debug(f"Ignoring unknown payer {payer.participant_id} on expense {expense.id}")
            continue
        tally.paid += payer.amount
    
    split_count = len(expense.splitters)
    if split_count == 0:
        # Paid amounts still count; nobody consumes this expense
        logger.warning(f"Expense {expense.id} has no splitters; its cost is not shared")
        return
    
    # Adjustments to unknown participants still reduce the shared amount
    total_adjustment = sum((adj.amount for adj in expense.adjustments), Decimal(0))
    remaining_amount = expense.total_amount - total_adjustment
    base_share = remaining_amount / split_count
    
    for participant_id in expense.splitters:
        tally = tallies.get(participant_id)
        if tally is None:
            logger.debug(f"Ignoring unknown splitter {participant_id} on expense {expense.id}")
            continue
        tally.consumed += base_share
    
    for adjustment in expense.adjustments:
        tally = tallies.get(adjustment.participant_id)
        if tally is None:
            logger.warning(
                f"Adjustment of {adjustment.amount} on expense {expense.id} targets "
                f"unknown participant {adjustment.participant_id}; it is not charged to anyone"
            )
            continue
        tally.consumed += adjustment.amount


def compute_balances(trip: Trip, strict: bool = False) -> List[Balance]:
    """
    Compute one Balance per trip participant from the trip's expenses.
    
    For every expense:
        - each payer's amount is added to their paid total
        - the total minus all adjustments is divided evenly among the
          splitters (real division, no rounding) and added to their
          consumed totals
        - each adjustment is added to its participant's consumed total
    
    Participants without any activity get an all-zero balance. References
    to participant IDs outside the trip are ignored, unless strict is set,
    in which case UnknownParticipantError is raised before anything is
    computed.
    
    Args:
        trip: Trip snapshot with participants and expenses.
        strict: Reject expenses referencing unknown participants.
    
    Returns:
        List of balances in trip participant order.
    """
    if strict:
        _check_references(trip)
    
    tallies: Dict[str, Tally] = {p.id: Tally() for p in trip.participants}
    for expense in trip.expenses:
        _apply_expense(expense, tallies)
    
    balances = [
        Balance(
            participant_id=participant_id,
            paid=tally.paid,
            consumed=tally.consumed,
            net=tally.paid - tally.consumed
        )
        for participant_id, tally in tallies.items()
    ]
    logger.debug(f"Computed {len(balances)} balances from {len(trip.expenses)} expenses for trip {trip.id}")
    return balances


def total_spent(trip: Trip) -> Decimal:
    """Sum of every expense's total amount."""
    return sum((expense.total_amount for expense in trip.expenses), Decimal(0))
