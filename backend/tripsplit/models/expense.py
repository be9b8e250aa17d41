"""
Expense model for tracking spending.
"""
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from tripsplit.db.base import BaseModel


class Expense(BaseModel):
    """Expense model representing a single spending event."""
    __tablename__ = "expenses"
    __table_args__ = (
        UniqueConstraint("trip_id", "position", name="uq_expenses_trip_position"),
    )
    
    trip_id = Column(String(32), ForeignKey("trips.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    total_amount = Column(Numeric(15, 2), nullable=False)
    date = Column(Date, nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0, index=True)  # Insertion order; larger = newer
    
    # Relationships
    trip = relationship("Trip", back_populates="expenses")
    payers = relationship(
        "ExpensePayer", back_populates="expense",
        cascade="all, delete-orphan", order_by="ExpensePayer.position"
    )
    splitters = relationship(
        "ExpenseSplitter", back_populates="expense",
        cascade="all, delete-orphan", order_by="ExpenseSplitter.position"
    )
    adjustments = relationship(
        "ExpenseAdjustment", back_populates="expense",
        cascade="all, delete-orphan", order_by="ExpenseAdjustment.position"
    )


class ExpensePayer(BaseModel):
    """Amount a participant fronted for an expense."""
    __tablename__ = "expense_payers"
    
    expense_id = Column(String(32), ForeignKey("expenses.id"), nullable=False, index=True)
    participant_id = Column(String(32), nullable=False, index=True)
    amount = Column(Numeric(15, 2), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    
    # Relationships
    expense = relationship("Expense", back_populates="payers")


class ExpenseSplitter(BaseModel):
    """Participant sharing the base cost of an expense."""
    __tablename__ = "expense_splitters"
    
    expense_id = Column(String(32), ForeignKey("expenses.id"), nullable=False, index=True)
    participant_id = Column(String(32), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    
    # Relationships
    expense = relationship("Expense", back_populates="splitters")


class ExpenseAdjustment(BaseModel):
    """Extra amount charged to one participant on top of the base share."""
    __tablename__ = "expense_adjustments"
    
    expense_id = Column(String(32), ForeignKey("expenses.id"), nullable=False, index=True)
    participant_id = Column(String(32), nullable=False, index=True)
    amount = Column(Numeric(15, 2), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    
    # Relationships
    expense = relationship("Expense", back_populates="adjustments")
