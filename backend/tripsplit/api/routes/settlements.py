"""
Balance and settlement routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from tripsplit.core.utils import round_amount
from tripsplit.db.session import get_db
from tripsplit.schemas.balance import Balance, BalanceResponse, TripBalancesResponse
from tripsplit.schemas.settlement import Settlement, SettlementPlanResponse
from tripsplit.services import trip_service
from tripsplit.services.balance_service import compute_balances, total_spent
from tripsplit.services.settlement_service import (
    compute_settlements, build_balance_summary,
    participant_name_resolver, resolve_name
)
from tripsplit.api.routes.trips import get_trip_or_404

router = APIRouter(prefix="/settlement", tags=["settlement"])


def _balance_responses(balances: List[Balance], name_resolver) -> List[BalanceResponse]:
    """Attach names and round amounts for display."""
    return [
        BalanceResponse(
            participant_id=b.participant_id,
            name=resolve_name(name_resolver, b.participant_id),
            paid=round_amount(b.paid),
            consumed=round_amount(b.consumed),
            net=round_amount(b.net)
        )
        for b in balances
    ]


@router.get("/{trip_id}/balances", response_model=TripBalancesResponse)
async def get_balances(
    trip_id: str,
    db: Session = Depends(get_db)
):
    """Get every participant's paid, consumed and net amounts."""
    snapshot = trip_service.to_snapshot(get_trip_or_404(trip_id, db))
    name_resolver = participant_name_resolver(snapshot.participants)
    
    return TripBalancesResponse(
        trip_id=snapshot.id,
        total_spent=round_amount(total_spent(snapshot)),
        balances=_balance_responses(compute_balances(snapshot), name_resolver)
    )


@router.get("/{trip_id}/plan", response_model=SettlementPlanResponse)
async def get_settlement_plan(
    trip_id: str,
    db: Session = Depends(get_db)
):
    """Get the suggested transfers that settle the trip."""
    snapshot = trip_service.to_snapshot(get_trip_or_404(trip_id, db))
    name_resolver = participant_name_resolver(snapshot.participants)
    
    balances = compute_balances(snapshot)
    transfers = [
        Settlement(from_name=s.from_name, to_name=s.to_name, amount=round_amount(s.amount))
        for s in compute_settlements(balances, name_resolver)
    ]
    
    return SettlementPlanResponse(
        trip_id=snapshot.id,
        total_spent=round_amount(total_spent(snapshot)),
        balances=_balance_responses(balances, name_resolver),
        transfers=transfers,
        summary=build_balance_summary(snapshot.name, balances, name_resolver)
    )
