"""
Pydantic schemas for Trip entity.
"""
from pydantic import BaseModel, field_validator
from typing import List
from datetime import datetime
from tripsplit.schemas.expense import Expense, ExpenseResponse


class Participant(BaseModel):
    """A named member of a trip's expense pool."""
    id: str
    name: str
    
    class Config:
        from_attributes = True
        frozen = True


class Trip(BaseModel):
    """
    Immutable snapshot of a trip fed to the balance calculator.
    
    Expenses are newest first; their order does not affect balances.
    """
    id: str
    name: str
    participants: List[Participant] = []
    expenses: List[Expense] = []
    created_at: datetime
    
    class Config:
        from_attributes = True
        frozen = True


def _clean_name(name: str) -> str:
    name = name.strip()
    if not name:
        raise ValueError("Participant name must not be empty")
    return name


class TripCreate(BaseModel):
    """Schema for trip creation."""
    name: str
    participant_names: List[str]
    
    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Trip name must not be empty")
        return v
    
    @field_validator("participant_names")
    @classmethod
    def at_least_one_participant(cls, v: List[str]) -> List[str]:
        names = [_clean_name(name) for name in v]
        if not names:
            raise ValueError("A trip needs at least one participant")
        return names


class ParticipantCreate(BaseModel):
    """Schema for adding a participant to an existing trip."""
    name: str
    
    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        return _clean_name(v)


class TripResponse(BaseModel):
    """Schema for trip list response."""
    id: str
    name: str
    created_at: datetime
    participants: List[Participant] = []
    
    class Config:
        from_attributes = True


class TripDetailResponse(TripResponse):
    """Schema for detailed trip response with expenses."""
    expenses: List[ExpenseResponse] = []
