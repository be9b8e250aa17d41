"""
Settlement planning from participant balances.
"""
import logging
from decimal import Decimal
from typing import Callable, Iterable, List, Mapping, Optional, Union
from tripsplit.core.config import settings
from tripsplit.core.utils import format_signed_amount
from tripsplit.schemas.balance import Balance
from tripsplit.schemas.settlement import Settlement
from tripsplit.schemas.trip import Participant

logger = logging.getLogger(__name__)

NameResolver = Union[Callable[[str], Optional[str]], Mapping[str, str]]


def participant_name_resolver(participants: Iterable[Participant]) -> Callable[[str], Optional[str]]:
    """Build a participant ID -> name lookup from a participant list."""
    names = {p.id: p.name for p in participants}
    return names.get


def resolve_name(name_resolver: NameResolver, participant_id: str) -> str:
    """Resolve a display name, falling back to the unknown placeholder."""
    if isinstance(name_resolver, Mapping):
        name = name_resolver.get(participant_id)
    else:
        name = name_resolver(participant_id)
    return name or settings.UNKNOWN_PARTICIPANT_NAME


def compute_settlements(
    balances: List[Balance],
    name_resolver: NameResolver,
    epsilon: Optional[Decimal] = None
) -> List[Settlement]:
    """
    Turn net balances into a list of transfers that settles everyone.
    
    Uses a greedy algorithm:
        1. Split participants into debtors (net < -epsilon) and creditors
           (net > epsilon); anyone within epsilon of zero is settled
        2. Sort debtors most negative first, creditors most positive first
        3. Walk both lists, transferring min(|debt|, credit) from the current
           debtor to the current creditor, and move past whoever is settled
    
    The input balances are not modified. Any imbalance left when one side
    runs out is dropped.
    
    Args:
        balances: Balances as returned by compute_balances.
        name_resolver: Participant ID -> display name (callable or mapping).
        epsilon: Settled tolerance, defaults to SETTLEMENT_EPSILON.
    
    Returns:
        List of settlements, each with a strictly positive amount.
    """
    eps = settings.SETTLEMENT_EPSILON if epsilon is None else epsilon
    
    # [participant_id, remaining net]
    debtors = [[b.participant_id, b.net] for b in balances if b.net < -eps]
    creditors = [[b.participant_id, b.net] for b in balances if b.net > eps]
    
    debtors.sort(key=lambda x: x[1])
    creditors.sort(key=lambda x: x[1], reverse=True)
    
    settlements = []
    i = 0  # debtor index
    j = 0  # creditor index
    
    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]
        
        amount = min(abs(debtor[1]), creditor[1])
        
        if amount > 0:
            settlements.append(Settlement(
                from_name=resolve_name(name_resolver, debtor[0]),
                to_name=resolve_name(name_resolver, creditor[0]),
                amount=amount
            ))
        
        debtor[1] += amount
        creditor[1] -= amount
        
        if abs(debtor[1]) < eps:
            i += 1
        if creditor[1] < eps:
            j += 1
    
    logger.debug(
        f"Planned {len(settlements)} transfers for {len(debtors)} debtors and {len(creditors)} creditors"
    )
    return settlements


def build_balance_summary(
    trip_name: str,
    balances: List[Balance],
    name_resolver: NameResolver
) -> str:
    """
    Build a plain-text listing of everyone's net balance for sharing.
    
    Nets are rounded to whole units (halves toward +infinity); positive
    values carry a '+' sign.
    """
    lines = [
        f"{resolve_name(name_resolver, b.participant_id)}: {format_signed_amount(b.net)}"
        for b in balances
    ]
    return "\n".join([f"{trip_name} balances:", ""] + lines)
