"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel, field_validator, model_validator
from typing import Dict, List, Optional
from datetime import date as dt_date
from decimal import Decimal
from tripledger.core.utils import lookup_by_id
from tripledger.models.expense import Expense, ExpenseCategory, RecordId, SplitType


class ExpenseCreate(BaseModel):
    """
    Schema for expense creation and edits.

    Rejects input the split allocator would silently degrade on: a blank
    title, a non-positive amount, no participants for equal/custom splits,
    or a non-positive custom share.
    """
    title: str
    description: Optional[str] = None
    amount: Decimal
    currency: Optional[str] = None
    category: ExpenseCategory = ExpenseCategory.OTHER
    date: Optional[dt_date] = None
    split_type: SplitType = SplitType.EQUAL
    participant_ids: List[RecordId] = []  # Members who share this expense
    custom_amounts: Dict[RecordId, Decimal] = {}  # Custom split only

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title must not be blank")
        return v

    @field_validator("amount")
    @classmethod
    def amount_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Amount must be positive")
        return v

    @field_validator("currency")
    @classmethod
    def currency_upper(cls, v: Optional[str]) -> Optional[str]:
        return v.upper() if v else v

    @model_validator(mode="after")
    def check_participants(self):
        """Equal and custom splits need someone to split with."""
        if self.split_type == SplitType.FULL:
            return self
        if not self.participant_ids:
            raise ValueError("Select at least one member to split with")
        if self.split_type == SplitType.CUSTOM:
            for user_id in self.participant_ids:
                share = lookup_by_id(self.custom_amounts, user_id)
                if share is None or share <= 0:
                    raise ValueError(f"Custom split for {user_id} must be a positive amount")
        return self


class AllocationRequest(BaseModel):
    """Schema for a raw split allocation request."""
    amount: Decimal
    split_type: SplitType = SplitType.EQUAL
    participant_ids: List[RecordId] = []
    custom_amounts: Dict[RecordId, Decimal] = {}
    distribute_remainder: bool = False


class AllocationItem(BaseModel):
    """One participant's share."""
    user_id: RecordId
    amount: Decimal


class AllocationResponse(BaseModel):
    """Schema for split allocation response."""
    split_type: SplitType
    amount: Decimal
    splits: List[AllocationItem]
    split_total: Decimal


class ExpenseBuildRequest(BaseModel):
    """Schema for building an expense record together with its splits."""
    trip_id: RecordId
    paid_by: RecordId
    expense: ExpenseCreate
    distribute_remainder: bool = False


class SplitToggleRequest(BaseModel):
    """Schema for settling or unsettling one split within an expense snapshot."""
    expenses: List[Expense]
    settled: bool = True


class SplitToggleResponse(BaseModel):
    """Projected snapshot plus the snapshot to restore if the write fails."""
    expenses: List[Expense]
    previous: List[Expense]
