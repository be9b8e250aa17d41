"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
from datetime import date as dt_date, datetime
from decimal import Decimal
from tripsplit.core.config import settings


class Payer(BaseModel):
    """Amount a participant fronted for an expense."""
    participant_id: str
    amount: Decimal
    
    class Config:
        from_attributes = True
        frozen = True


class Adjustment(BaseModel):
    """Extra amount charged to one participant on top of the base share."""
    participant_id: str
    amount: Decimal
    
    class Config:
        from_attributes = True
        frozen = True


class Expense(BaseModel):
    """Immutable view of an expense as seen by the balance calculator."""
    id: str
    title: str = ""
    total_amount: Decimal
    date: Optional[dt_date] = None
    payers: List[Payer] = []
    splitters: List[str] = []  # Participant IDs sharing the base cost
    adjustments: List[Adjustment] = []
    
    @field_validator("splitters", mode="before")
    @classmethod
    def splitter_ids(cls, v):
        """Accept stored splitter rows as well as plain participant IDs."""
        return [getattr(s, "participant_id", s) for s in v]
    
    class Config:
        from_attributes = True
        frozen = True


class PayerInput(BaseModel):
    """Payer as entered; amount may be omitted for a lone payer."""
    participant_id: str
    amount: Optional[Decimal] = Field(default=None, decimal_places=2)


class AdjustmentInput(BaseModel):
    """Adjustment as entered."""
    participant_id: str
    amount: Decimal = Field(decimal_places=2)


class ExpenseCreate(BaseModel):
    """
    Schema for expense creation.
    
    Normalizes the entered payers, splitters and adjustments into the lists
    stored for the expense:
        - payers with no or non-positive amount are dropped, except that a
          lone payer is assumed to have fronted the whole total
        - payer amounts must add up to the total within PAYER_SUM_TOLERANCE
        - at least one splitter is required; duplicates collapse
        - adjustments with non-positive amounts are dropped
        - amounts carry at most two decimal places, matching storage
    """
    title: str
    total_amount: Decimal = Field(decimal_places=2)  # Stored as Numeric(15, 2)
    date: Optional[dt_date] = None  # Defaults to today
    payers: List[PayerInput]
    splitters: List[str]
    adjustments: List[AdjustmentInput] = []
    
    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title must not be empty")
        return v
    
    @field_validator("total_amount")
    @classmethod
    def total_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Total amount must be positive")
        return v
    
    @model_validator(mode="after")
    def normalize_lists(self):
        """Resolve payers, splitters and adjustments into their stored form."""
        payer_ids = [p.participant_id for p in self.payers]
        if len(set(payer_ids)) != len(payer_ids):
            raise ValueError("Each participant can only be listed once as payer")
        
        payers = [p for p in self.payers if p.amount is not None and p.amount > 0]
        # A lone payer covers the whole bill
        if len(payer_ids) == 1 and (
            not payers or abs(payers[0].amount - self.total_amount) > settings.SETTLEMENT_EPSILON
        ):
            payers = [PayerInput(participant_id=payer_ids[0], amount=self.total_amount)]
        
        payer_sum = sum((p.amount for p in payers), Decimal(0))
        if abs(payer_sum - self.total_amount) > settings.PAYER_SUM_TOLERANCE:
            raise ValueError(
                f"Payer total ({payer_sum}) does not match expense total ({self.total_amount})"
            )
        self.payers = payers
        
        splitters = list(dict.fromkeys(self.splitters))
        if not splitters:
            raise ValueError("At least one participant must share the expense")
        self.splitters = splitters
        
        self.adjustments = [a for a in self.adjustments if a.amount > 0]
        return self
    
    def participant_ids(self) -> List[str]:
        """All participant IDs referenced by this expense."""
        ids = [p.participant_id for p in self.payers]
        ids.extend(self.splitters)
        ids.extend(a.participant_id for a in self.adjustments)
        return list(dict.fromkeys(ids))


class ExpenseUpdate(ExpenseCreate):
    """Schema for expense update (full replacement)."""
    pass


class ExpenseResponse(Expense):
    """Schema for expense response."""
    trip_id: str
    created_at: datetime
    updated_at: datetime
