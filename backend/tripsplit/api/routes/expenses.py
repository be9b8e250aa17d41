"""
Expense management routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from tripsplit.db.session import get_db
from tripsplit.models.expense import Expense
from tripsplit.schemas.expense import ExpenseCreate, ExpenseUpdate, ExpenseResponse
from tripsplit.services import expense_service
from tripsplit.services.expense_service import ExpenseValidationError
from tripsplit.api.routes.trips import get_trip_or_404

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/expenses", tags=["expenses"])


def get_expense_or_404(trip_id: str, expense_id: str, db: Session) -> Expense:
    """Load an expense of the trip or raise 404."""
    expense = expense_service.get_expense(trip_id, expense_id, db)
    if not expense:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Expense not found"
        )
    return expense


@router.post("/{trip_id}", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    trip_id: str,
    expense_data: ExpenseCreate,
    db: Session = Depends(get_db)
):
    """Add an expense to the trip."""
    trip = get_trip_or_404(trip_id, db)
    try:
        return expense_service.create_expense(trip, expense_data, db)
    except ExpenseValidationError as e:
        logger.info(f"Rejected expense for trip {trip_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


@router.put("/{trip_id}/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    trip_id: str,
    expense_id: str,
    expense_data: ExpenseUpdate,
    db: Session = Depends(get_db)
):
    """Replace an existing expense."""
    trip = get_trip_or_404(trip_id, db)
    expense = get_expense_or_404(trip_id, expense_id, db)
    try:
        return expense_service.update_expense(trip, expense, expense_data, db)
    except ExpenseValidationError as e:
        logger.info(f"Rejected update of expense {expense_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


@router.delete("/{trip_id}/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    trip_id: str,
    expense_id: str,
    db: Session = Depends(get_db)
):
    """Delete an expense."""
    expense = get_expense_or_404(trip_id, expense_id, db)
    expense_service.delete_expense(expense, db)
