"""Models package - Import all models for SQLAlchemy registration."""
from tripsplit.models.trip import Trip, Participant
from tripsplit.models.expense import Expense, ExpensePayer, ExpenseSplitter, ExpenseAdjustment

__all__ = [
    "Trip",
    "Participant",
    "Expense",
    "ExpensePayer",
    "ExpenseSplitter",
    "ExpenseAdjustment",
]
