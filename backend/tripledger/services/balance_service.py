"""
Balance service: net paid-versus-owed position of every trip member.
"""
import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Union
from tripledger.core.utils import to_decimal
from tripledger.models.balance import MemberBalance
from tripledger.models.expense import Expense, RecordId
from tripledger.models.trip import TripMember

logger = logging.getLogger(__name__)

Roster = Union[Iterable[TripMember], Mapping[RecordId, str]]


def _roster_lookup(members: Optional[Roster]) -> Dict[RecordId, TripMember]:
    """Normalize a member list or an id -> name mapping into TripMembers by id."""
    if members is None:
        return {}
    if isinstance(members, Mapping):
        return {
            user_id: TripMember(user_id=user_id, name=name)
            for user_id, name in members.items()
        }
    return {member.user_id: member for member in members}


def aggregate(expenses: Iterable[Expense], members: Optional[Roster] = None) -> List[MemberBalance]:
    """
    Compute one balance per member from a snapshot of expenses.

    The payer is credited with the full amount of each expense and every split
    participant (the payer included) is charged their share. The settled flag on
    splits is ignored: settling records a payment, it does not undo the
    allocation.

    Only members who paid or owe something appear. Results are ordered by net
    balance, creditors first; ties keep the order members were first seen.
    """
    paid: Dict[RecordId, Decimal] = {}
    owed: Dict[RecordId, Decimal] = {}
    seen: Dict[RecordId, None] = {}  # insertion-ordered set

    for expense in expenses:
        seen.setdefault(expense.paid_by)
        paid[expense.paid_by] = paid.get(expense.paid_by, Decimal(0)) + to_decimal(expense.amount)

        for split in expense.splits or []:
            seen.setdefault(split.user_id)
            owed[split.user_id] = owed.get(split.user_id, Decimal(0)) + to_decimal(split.amount)

    roster = _roster_lookup(members)
    balances = []
    for user_id in seen:
        member = roster.get(user_id)
        balances.append(MemberBalance(
            user_id=user_id,
            name=member.name if member else "Unknown",
            avatar_url=member.avatar_url if member else None,
            total_paid=paid.get(user_id, Decimal(0)),
            total_owed=owed.get(user_id, Decimal(0))
        ))

    balances.sort(key=lambda b: b.net_balance, reverse=True)
    logger.debug(f"Aggregated {len(balances)} member balances")
    return balances


def total_spent(expenses: Iterable[Expense]) -> Decimal:
    """Sum of every expense amount on the trip."""
    return sum((to_decimal(expense.amount) for expense in expenses), Decimal(0))


def budget_remaining(budget: Optional[Decimal], expenses: Iterable[Expense]) -> Optional[Decimal]:
    """Budget left after spending, negative when overspent. None without a budget."""
    if budget is None or to_decimal(budget) <= 0:
        return None
    return to_decimal(budget) - total_spent(expenses)


def budget_progress(budget: Optional[Decimal], expenses: Iterable[Expense]) -> Optional[Decimal]:
    """Fraction of the budget spent; exceeds 1 when overspent. None without a budget."""
    if budget is None or to_decimal(budget) <= 0:
        return None
    return total_spent(expenses) / to_decimal(budget)
