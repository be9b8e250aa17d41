"""
Expense service for expense-related business logic.
"""
import logging
from datetime import date
from typing import Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from tripsplit.models.trip import Trip
from tripsplit.models.expense import Expense, ExpensePayer, ExpenseSplitter, ExpenseAdjustment
from tripsplit.schemas.expense import ExpenseCreate

logger = logging.getLogger(__name__)

MAX_POSITION_ATTEMPTS = 3


class ExpenseValidationError(ValueError):
    """Raised when an expense cannot be stored for a trip."""
    pass


def _check_members(trip: Trip, expense_data: ExpenseCreate) -> None:
    """Ensure every referenced participant belongs to the trip."""
    member_ids = {p.id for p in trip.participants}
    unknown = [pid for pid in expense_data.participant_ids() if pid not in member_ids]
    if unknown:
        raise ExpenseValidationError(
            f"Participants not in this trip: {', '.join(unknown)}"
        )


def _fill_expense(expense: Expense, expense_data: ExpenseCreate) -> None:
    """Copy entered fields and lists onto an expense, replacing existing ones."""
    expense.title = expense_data.title
    expense.total_amount = expense_data.total_amount
    expense.date = expense_data.date or expense.date or date.today()
    
    expense.payers = [
        ExpensePayer(participant_id=p.participant_id, amount=p.amount, position=position)
        for position, p in enumerate(expense_data.payers)
    ]
    expense.splitters = [
        ExpenseSplitter(participant_id=participant_id, position=position)
        for position, participant_id in enumerate(expense_data.splitters)
    ]
    expense.adjustments = [
        ExpenseAdjustment(participant_id=a.participant_id, amount=a.amount, position=position)
        for position, a in enumerate(expense_data.adjustments)
    ]


def _next_position(trip_id: str, db: Session) -> int:
    """Position after the trip's newest expense."""
    last_position = db.query(func.max(Expense.position)).filter(
        Expense.trip_id == trip_id
    ).scalar()
    return (last_position or 0) + 1


def create_expense(trip: Trip, expense_data: ExpenseCreate, db: Session) -> Expense:
    """
    Add an expense to a trip; it becomes the newest one.
    
    Positions are unique per trip. When a concurrent insert takes the same
    position first, the insert is retried with a fresh position.
    """
    _check_members(trip, expense_data)
    trip_id = trip.id
    
    for attempt in range(1, MAX_POSITION_ATTEMPTS + 1):
        expense = Expense(
            trip_id=trip_id,
            position=_next_position(trip_id, db)
        )
        _fill_expense(expense, expense_data)
        db.add(expense)
        try:
            db.commit()
            break
        except IntegrityError:
            db.rollback()
            if attempt == MAX_POSITION_ATTEMPTS:
                raise
            logger.warning(
                f"Expense position {expense.position} on trip {trip_id} already taken, "
                f"retrying ({attempt}/{MAX_POSITION_ATTEMPTS})"
            )
    db.refresh(expense)
    
    logger.info(f"Created expense {expense.id} '{expense.title}' ({expense.total_amount}) on trip {trip_id}")
    return expense


def get_expense(trip_id: str, expense_id: str, db: Session) -> Optional[Expense]:
    """Load an expense belonging to a trip, or None."""
    return db.query(Expense).filter(
        Expense.id == expense_id,
        Expense.trip_id == trip_id
    ).first()


def update_expense(trip: Trip, expense: Expense, expense_data: ExpenseCreate, db: Session) -> Expense:
    """Replace an expense's fields, payers, splitters and adjustments."""
    _check_members(trip, expense_data)
    
    _fill_expense(expense, expense_data)
    db.commit()
    db.refresh(expense)
    
    logger.info(f"Updated expense {expense.id} on trip {trip.id}")
    return expense


def delete_expense(expense: Expense, db: Session) -> None:
    """Delete an expense."""
    expense_id = expense.id
    db.delete(expense)
    db.commit()
    logger.info(f"Deleted expense {expense_id}")
