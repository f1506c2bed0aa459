"""
Expense service for building expense records and recording settled splits.

Nothing here talks to the data store. Functions return new records that the
caller writes back; the caller owns the cached snapshot.
"""
import logging
from datetime import datetime, timezone
from typing import Callable, Generic, List, Optional, TypeVar
from tripledger.core.config import settings
from tripledger.models.expense import Expense, ExpenseSplit, RecordId
from tripledger.schemas.expense import ExpenseCreate
from tripledger.services.split_service import allocate

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OptimisticUpdate(Generic[T]):
    """
    A locally projected state plus the way back to the state before it.

    Show `value` right away, perform the remote write, and call `revert()` to
    get the prior snapshot back if the write fails.
    """

    def __init__(self, value: T, previous: T, revert: Optional[Callable[[], T]] = None):
        self.value = value
        self.previous = previous
        self._revert = revert or (lambda: previous)

    def revert(self) -> T:
        return self._revert()


def _build_splits(expense_id: RecordId, data: ExpenseCreate, distribute_remainder: bool) -> List[ExpenseSplit]:
    allocations = allocate(
        data.amount,
        data.split_type,
        data.participant_ids,
        custom_amounts=data.custom_amounts,
        distribute_remainder=distribute_remainder
    )
    now = _utcnow()
    return [
        ExpenseSplit(expense_id=expense_id, user_id=allocation.user_id, amount=allocation.amount, created_at=now)
        for allocation in allocations
    ]


def build_expense(
    data: ExpenseCreate,
    paid_by: RecordId,
    trip_id: RecordId,
    distribute_remainder: bool = False
) -> Expense:
    """
    Create an expense together with its allocated splits.

    The expense and its splits form one record; the store must write them in a
    single transaction or roll both back.
    """
    now = _utcnow()
    expense = Expense(
        trip_id=trip_id,
        paid_by=paid_by,
        title=data.title,
        description=data.description,
        amount=data.amount,
        currency=data.currency or settings.DEFAULT_CURRENCY,
        category=data.category,
        date=data.date,
        split_type=data.split_type,
        created_at=now,
        updated_at=now
    )
    expense.splits = _build_splits(expense.id, data, distribute_remainder)
    logger.debug(f"Built expense {expense.id} with {len(expense.splits)} splits")
    return expense


def rebuild_expense(expense: Expense, data: ExpenseCreate, distribute_remainder: bool = False) -> Expense:
    """
    Apply an edit to an expense.

    Splits are recreated from scratch, never patched, so prior settled flags
    on the old splits are discarded.
    """
    updated = expense.model_copy(update={
        "title": data.title,
        "description": data.description,
        "amount": data.amount,
        "currency": data.currency or expense.currency,
        "category": data.category,
        "date": data.date,
        "split_type": data.split_type,
        "updated_at": _utcnow(),
    })
    updated.splits = _build_splits(expense.id, data, distribute_remainder)
    return updated


def settle_split(split: ExpenseSplit, at: Optional[datetime] = None) -> ExpenseSplit:
    """Mark a single split as settled."""
    return split.model_copy(update={"is_settled": True, "settled_at": at or _utcnow()})


def unsettle_split(split: ExpenseSplit) -> ExpenseSplit:
    """Mark a single split as unsettled."""
    return split.model_copy(update={"is_settled": False, "settled_at": None})


def toggle_split(
    expenses: List[Expense],
    split_id: RecordId,
    settled: bool,
    at: Optional[datetime] = None
) -> OptimisticUpdate[List[Expense]]:
    """
    Project a settle/unsettle of one split onto an expense snapshot.

    Returns the projected expenses and a revert action restoring the given
    snapshot. Raises LookupError when no expense holds the split.
    """
    for index, expense in enumerate(expenses):
        for split_index, split in enumerate(expense.splits or []):
            if str(split.id) != str(split_id):
                continue
            changed = settle_split(split, at) if settled else unsettle_split(split)
            splits = list(expense.splits)
            splits[split_index] = changed
            projected = list(expenses)
            projected[index] = expense.model_copy(update={"splits": splits})
            previous = list(expenses)
            return OptimisticUpdate(projected, previous)
    raise LookupError(f"Split {split_id} not found")
