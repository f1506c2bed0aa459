"""
Trip invite routes.
"""
from fastapi import APIRouter, status
from tripledger.core.utils import format_response
from tripledger.models.trip import TripInvite
from tripledger.schemas.trip import InviteCodeResponse
from tripledger.services.invite_service import generate_invite_code, invite_url, is_invite_valid, share_text

router = APIRouter(prefix="/invites", tags=["invites"])


@router.post("/code", response_model=InviteCodeResponse, status_code=status.HTTP_201_CREATED)
async def create_invite_code():
    """Generate a new invite code. The caller checks it against existing codes."""
    code = generate_invite_code()
    return InviteCodeResponse(code=code, url=invite_url(code), share_text=share_text(code))


@router.post("/validate")
async def validate_invite(invite: TripInvite):
    """Check whether an invite can still be used."""
    return format_response({"code": invite.code, "is_valid": is_invite_valid(invite)})
