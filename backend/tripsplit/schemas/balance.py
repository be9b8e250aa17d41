"""
Pydantic schemas for participant balances.
"""
from pydantic import BaseModel
from typing import List
from decimal import Decimal


class Balance(BaseModel):
    """Derived balance of one participant (net = paid - consumed)."""
    participant_id: str
    paid: Decimal  # Total out of pocket
    consumed: Decimal  # Total fair share
    net: Decimal  # Positive = owed to them, negative = they owe


class BalanceResponse(Balance):
    """Schema for balance response with display name."""
    name: str


class TripBalancesResponse(BaseModel):
    """Schema for a trip's balances."""
    trip_id: str
    total_spent: Decimal
    balances: List[BalanceResponse]
