"""
Expense and split records exchanged with the data store.
"""
import enum
from datetime import date as dt_date, datetime
from decimal import Decimal
from typing import List, Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

# Identifiers arrive as UUIDs from the store but tests and callers may use plain keys
RecordId = Union[UUID, int, str]


class ExpenseCategory(str, enum.Enum):
    """Expense category enumeration."""
    FOOD = "food"
    TRANSPORT = "transport"
    ACCOMMODATION = "accommodation"
    ACTIVITY = "activity"
    SHOPPING = "shopping"
    ENTERTAINMENT = "entertainment"
    OTHER = "other"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class SplitType(str, enum.Enum):
    """How an expense amount is divided among members."""
    EQUAL = "equal"
    CUSTOM = "custom"
    FULL = "full"

    @property
    def label(self) -> str:
        return _SPLIT_TYPE_LABELS[self]


_SPLIT_TYPE_LABELS = {
    SplitType.EQUAL: "Split Equally",
    SplitType.CUSTOM: "Custom Split",
    SplitType.FULL: "Full Amount",
}


class ExpenseSplit(BaseModel):
    """One member's share of an expense."""
    id: RecordId = Field(default_factory=uuid4)
    expense_id: Optional[RecordId] = None
    user_id: RecordId
    amount: Decimal
    is_settled: bool = False
    settled_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class Expense(BaseModel):
    """A single spending event paid by one trip member."""
    id: RecordId = Field(default_factory=uuid4)
    trip_id: Optional[RecordId] = None
    paid_by: RecordId
    title: str = ""
    description: Optional[str] = None
    amount: Decimal
    currency: Optional[str] = None
    category: ExpenseCategory = ExpenseCategory.OTHER
    date: Optional[dt_date] = None
    split_type: SplitType = SplitType.EQUAL
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    splits: Optional[List[ExpenseSplit]] = None  # None when the store did not join them

    model_config = {"from_attributes": True}
