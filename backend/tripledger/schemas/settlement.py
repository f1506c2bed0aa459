"""
Pydantic schemas for balance and settlement requests.
"""
from pydantic import BaseModel
from typing import List, Optional
from decimal import Decimal
from tripledger.models.balance import MemberBalance, Settlement
from tripledger.models.expense import Expense
from tripledger.models.trip import TripMember


class LedgerSnapshot(BaseModel):
    """Expenses and roster of one trip, as fetched from the store."""
    expenses: List[Expense] = []
    members: List[TripMember] = []
    currency: Optional[str] = None
    strict: Optional[bool] = None  # Falls back to STRICT_BALANCE_CHECK


class SettlementSummary(BaseModel):
    """Schema for settlement summary."""
    currency: str
    balances: List[MemberBalance]
    transfers: List[Settlement]
    total_spent: Decimal
    participant_count: int
    summary: str
