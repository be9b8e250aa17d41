"""
Trip service for trip and participant bookkeeping.
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session, selectinload
from tripsplit.models.trip import Trip, Participant
from tripsplit.models.expense import Expense
from tripsplit.schemas import trip as trip_schemas

logger = logging.getLogger(__name__)


def create_trip(name: str, participant_names: List[str], db: Session) -> Trip:
    """Create a trip together with its initial participants."""
    trip = Trip(name=name)
    for position, participant_name in enumerate(participant_names):
        trip.participants.append(Participant(name=participant_name, position=position))
    db.add(trip)
    db.commit()
    db.refresh(trip)
    
    logger.info(f"Created trip {trip.id} '{trip.name}' with {len(participant_names)} participants")
    return trip


def get_trip(trip_id: str, db: Session) -> Optional[Trip]:
    """Load a trip with participants and expenses, or None."""
    return db.query(Trip).options(
        selectinload(Trip.participants),
        selectinload(Trip.expenses).selectinload(Expense.payers),
        selectinload(Trip.expenses).selectinload(Expense.splitters),
        selectinload(Trip.expenses).selectinload(Expense.adjustments)
    ).filter(Trip.id == trip_id).first()


def list_trips(db: Session) -> List[Trip]:
    """List all trips, newest first."""
    return db.query(Trip).options(
        selectinload(Trip.participants)
    ).order_by(Trip.created_at.desc()).all()


def add_participant(trip: Trip, name: str, db: Session) -> Participant:
    """Append a participant to an existing trip."""
    participant = Participant(
        trip_id=trip.id,
        name=name,
        position=len(trip.participants)
    )
    trip.participants.append(participant)
    db.commit()
    db.refresh(participant)
    
    logger.info(f"Added participant {participant.id} '{name}' to trip {trip.id}")
    return participant


def delete_trip(trip: Trip, db: Session) -> None:
    """End a trip, removing its participants and expenses."""
    trip_id = trip.id
    db.delete(trip)
    db.commit()
    logger.info(f"Deleted trip {trip_id}")


def to_snapshot(trip: Trip) -> trip_schemas.Trip:
    """Convert a stored trip into the immutable snapshot used for balances."""
    return trip_schemas.Trip.model_validate(trip, from_attributes=True)
