"""
Trip management routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from tripsplit.db.session import get_db
from tripsplit.models.trip import Trip
from tripsplit.schemas.trip import (
    TripCreate, TripResponse, TripDetailResponse,
    ParticipantCreate, Participant
)
from tripsplit.services import trip_service

router = APIRouter(prefix="/trips", tags=["trips"])


def get_trip_or_404(trip_id: str, db: Session) -> Trip:
    """Load a trip or raise 404."""
    trip = trip_service.get_trip(trip_id, db)
    if not trip:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Trip not found"
        )
    return trip


@router.post("", response_model=TripDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    db: Session = Depends(get_db)
):
    """Create a new trip with its participants."""
    return trip_service.create_trip(trip_data.name, trip_data.participant_names, db)


@router.get("", response_model=List[TripResponse])
async def list_trips(db: Session = Depends(get_db)):
    """List all trips."""
    return trip_service.list_trips(db)


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip(
    trip_id: str,
    db: Session = Depends(get_db)
):
    """Get trip details with participants and expenses (newest first)."""
    return get_trip_or_404(trip_id, db)


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def end_trip(
    trip_id: str,
    db: Session = Depends(get_db)
):
    """End a trip and clear all of its records."""
    trip = get_trip_or_404(trip_id, db)
    trip_service.delete_trip(trip, db)


@router.post("/{trip_id}/participants", response_model=Participant, status_code=status.HTTP_201_CREATED)
async def add_participant(
    trip_id: str,
    participant_data: ParticipantCreate,
    db: Session = Depends(get_db)
):
    """Add a participant to the trip."""
    trip = get_trip_or_404(trip_id, db)
    return trip_service.add_participant(trip, participant_data.name, db)
