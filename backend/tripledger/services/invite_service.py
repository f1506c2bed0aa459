"""
Invite service for trip invite codes and links.
"""
import secrets
from datetime import datetime, timezone
from typing import Optional
from tripledger.core.config import settings
from tripledger.models.trip import TripInvite

# Letters and digits without the look-alikes 0, O, 1, I and l
INVITE_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz23456789"


def generate_invite_code(length: Optional[int] = None) -> str:
    """
    Generate a random invite code.

    Uniqueness is not checked here; the store rejects codes already in use and
    the caller retries.
    """
    if length is None:
        length = settings.INVITE_CODE_LENGTH
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(length))


def invite_url(code: str) -> str:
    """Deep link for an invite code."""
    return f"{settings.INVITE_URL_BASE}{code}"


def share_text(code: str) -> str:
    """Human-readable share message."""
    return f"Join my trip on {settings.APP_NAME}! {invite_url(code)}"


def is_invite_valid(invite: TripInvite, now: Optional[datetime] = None) -> bool:
    """Whether an invite is active, unexpired and under its use limit."""
    now = now or datetime.now(timezone.utc)
    if not invite.is_active:
        return False
    expires_at = invite.expires_at
    if expires_at is not None:
        # Naive timestamps from the store are UTC
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        if expires_at <= now:
            return False
    return invite.max_uses == 0 or invite.use_count < invite.max_uses
