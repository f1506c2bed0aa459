"""
Trip roster and invite records.
"""
import enum
from datetime import datetime
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from tripledger.models.expense import RecordId


class MemberRole(str, enum.Enum):
    """Role granted to a member joining through an invite."""
    OWNER = "owner"
    EDITOR = "editor"
    VIEWER = "viewer"


class TripMember(BaseModel):
    """Roster entry used to resolve display names for balances."""
    user_id: RecordId
    name: str = "Unknown"
    avatar_url: Optional[str] = None

    model_config = {"from_attributes": True}


class TripInvite(BaseModel):
    """Shareable invite code granting access to a trip."""
    id: RecordId = Field(default_factory=uuid4)
    trip_id: RecordId
    created_by: RecordId
    code: str
    role: MemberRole = MemberRole.VIEWER
    expires_at: Optional[datetime] = None
    max_uses: int = 0  # 0 means unlimited
    use_count: int = 0
    is_active: bool = True
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
