"""
Derived balance and settlement records.

Neither is stored: both are regenerated from the expense snapshot on every call.
"""
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from tripledger.core.config import settings
from tripledger.models.expense import RecordId


class MemberBalance(BaseModel):
    """What one member paid and owes across a trip."""
    user_id: RecordId
    name: str = "Unknown"
    avatar_url: Optional[str] = None
    total_paid: Decimal = Decimal(0)
    total_owed: Decimal = Decimal(0)

    @computed_field
    @property
    def net_balance(self) -> Decimal:
        """Positive means others owe this member, negative means they owe others."""
        return self.total_paid - self.total_owed

    @computed_field
    @property
    def is_settled(self) -> bool:
        return abs(self.net_balance) < settings.SETTLEMENT_TOLERANCE


class Settlement(BaseModel):
    """A single proposed transfer from a debtor to a creditor."""
    from_member: MemberBalance = Field(alias="from")
    to_member: MemberBalance = Field(alias="to")
    amount: Decimal

    model_config = {"populate_by_name": True}

    @computed_field
    @property
    def id(self) -> str:
        return f"{self.from_member.user_id}-{self.to_member.user_id}"
