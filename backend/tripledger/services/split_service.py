"""
Split allocation service: divides an expense amount among participants.
"""
import logging
from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from typing import Dict, Iterable, List, NamedTuple, Optional
from tripledger.core.utils import lookup_by_id, to_decimal
from tripledger.models.expense import RecordId, SplitType

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


class SplitAllocation(NamedTuple):
    """A participant's owed share of one expense."""
    user_id: RecordId
    amount: Decimal


def _unique(participants: Iterable[RecordId]) -> List[RecordId]:
    """Deduplicate participants, keeping first-seen order."""
    seen = set()
    ordered = []
    for user_id in participants:
        if user_id not in seen:
            seen.add(user_id)
            ordered.append(user_id)
    return ordered


def allocate(
    amount: Decimal,
    mode: SplitType,
    participants: Iterable[RecordId],
    custom_amounts: Optional[Dict[RecordId, Decimal]] = None,
    distribute_remainder: bool = False
) -> List[SplitAllocation]:
    """
    Divide an expense amount into per-participant owed amounts.

    - full: nobody owes anything, the payer carries the whole amount.
    - equal: every participant gets amount / count. Shares are not rounded,
      so their sum can drift from the amount by a fraction of a cent. With
      distribute_remainder=True the amount is rounded half-up to cents, shares
      are cut to cents and the leftover cents go to the first participants so
      the shares sum exactly to the rounded amount.
    - custom: participants without a positive entry in custom_amounts are
      dropped. The sum is not checked against the amount.

    Invalid input (no participants) yields an empty list; callers validate
    before persisting.
    """
    mode = SplitType(mode)
    amount = to_decimal(amount)

    if mode == SplitType.FULL:
        return []

    members = _unique(participants)

    if mode == SplitType.EQUAL:
        if not members:
            return []
        if distribute_remainder:
            return _allocate_equal_exact(amount, members)
        share = amount / len(members)
        return [SplitAllocation(user_id, share) for user_id in members]

    custom_amounts = custom_amounts or {}
    allocations = []
    for user_id in members:
        value = lookup_by_id(custom_amounts, user_id)
        if value is None:
            continue
        value = to_decimal(value)
        if value <= 0:
            logger.debug(f"Dropping non-positive custom share {value} for {user_id}")
            continue
        allocations.append(SplitAllocation(user_id, value))
    return allocations


def _allocate_equal_exact(amount: Decimal, members: List[RecordId]) -> List[SplitAllocation]:
    """
    Equal split in whole cents.

    The amount is first rounded half-up to cents; the shares then sum exactly
    to that rounded amount.
    """
    amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    base = (amount / len(members)).quantize(CENT, rounding=ROUND_DOWN)
    leftover_cents = int((amount - base * len(members)) / CENT)
    return [
        SplitAllocation(user_id, base + CENT if index < leftover_cents else base)
        for index, user_id in enumerate(members)
    ]


def split_total(allocations: Iterable[SplitAllocation]) -> Decimal:
    """Sum of all allocated shares."""
    return sum((allocation.amount for allocation in allocations), Decimal(0))
