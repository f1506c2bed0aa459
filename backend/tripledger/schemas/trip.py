"""
Pydantic schemas for trip invites.
"""
from pydantic import BaseModel


class InviteCodeResponse(BaseModel):
    """Schema for a freshly generated invite code."""
    code: str
    url: str
    share_text: str
