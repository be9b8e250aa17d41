"""
Trip model for group expense tracking.
"""
from sqlalchemy import Column, String, ForeignKey, Integer
from sqlalchemy.orm import relationship
from tripsplit.db.base import BaseModel


class Trip(BaseModel):
    """Trip model owning its participants and expenses."""
    __tablename__ = "trips"
    
    name = Column(String(200), nullable=False)
    
    # Relationships
    participants = relationship(
        "Participant",
        back_populates="trip",
        cascade="all, delete-orphan",
        order_by="Participant.position"
    )
    expenses = relationship(
        "Expense",
        back_populates="trip",
        cascade="all, delete-orphan",
        order_by="Expense.position.desc()"  # Newest first
    )


class Participant(BaseModel):
    """A named member of a trip's expense pool."""
    __tablename__ = "participants"
    
    trip_id = Column(String(32), ForeignKey("trips.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    position = Column(Integer, nullable=False, default=0)  # Order of joining the trip
    
    # Relationships
    trip = relationship("Trip", back_populates="participants")
