"""
Settlement routes.
"""
from fastapi import APIRouter, HTTPException
from typing import List
from tripledger.core.utils import format_error
from tripledger.models.balance import MemberBalance
from tripledger.schemas.settlement import LedgerSnapshot, SettlementSummary
from tripledger.services.balance_service import aggregate
from tripledger.services.settlement_service import UnbalancedLedgerError, calculate_settlement

router = APIRouter(prefix="/settlement", tags=["settlement"])


@router.post("/balances", response_model=List[MemberBalance])
async def get_balances(snapshot: LedgerSnapshot):
    """Net balance per member, creditors first."""
    return aggregate(snapshot.expenses, snapshot.members)


@router.post("/plan", response_model=SettlementSummary)
async def plan_settlement(snapshot: LedgerSnapshot):
    """Calculate who pays whom to settle a trip."""
    try:
        return calculate_settlement(
            snapshot.expenses,
            snapshot.members,
            currency=snapshot.currency,
            strict=snapshot.strict
        )
    except UnbalancedLedgerError as e:
        raise HTTPException(
            status_code=422,
            detail=format_error(str(e), {"residual": str(e.residual)})
        )
