"""
Pydantic schemas for Settlement entity.
"""
from pydantic import BaseModel, Field
from typing import List
from decimal import Decimal
from tripsplit.schemas.balance import BalanceResponse


class Settlement(BaseModel):
    """A single suggested transfer between two participants."""
    from_name: str = Field(alias="from")  # Debtor who pays
    to_name: str = Field(alias="to")  # Creditor who receives
    amount: Decimal
    
    class Config:
        populate_by_name = True


class SettlementPlanResponse(BaseModel):
    """Schema for a trip's settlement plan."""
    trip_id: str
    total_spent: Decimal
    balances: List[BalanceResponse]
    transfers: List[Settlement]
    summary: str  # Plain-text balance listing for sharing
