"""
Expense routes: split allocation, expense building and split settling.
"""
import logging
from fastapi import APIRouter, HTTPException, status
from tripledger.models.expense import Expense, ExpenseSplit
from tripledger.schemas.expense import (
    AllocationItem, AllocationRequest, AllocationResponse, ExpenseBuildRequest,
    SplitToggleRequest, SplitToggleResponse
)
from tripledger.services.expense_service import build_expense, settle_split, toggle_split, unsettle_split
from tripledger.services.split_service import allocate, split_total

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.post("/allocate", response_model=AllocationResponse)
async def allocate_splits(request: AllocationRequest):
    """Divide an amount among participants without validating the input."""
    allocations = allocate(
        request.amount,
        request.split_type,
        request.participant_ids,
        custom_amounts=request.custom_amounts,
        distribute_remainder=request.distribute_remainder
    )
    return AllocationResponse(
        split_type=request.split_type,
        amount=request.amount,
        splits=[AllocationItem(user_id=a.user_id, amount=a.amount) for a in allocations],
        split_total=split_total(allocations)
    )


@router.post("/build", response_model=Expense, status_code=status.HTTP_201_CREATED)
async def build_expense_record(request: ExpenseBuildRequest):
    """Build a validated expense with its splits, ready to be written in one transaction."""
    expense = build_expense(
        request.expense,
        paid_by=request.paid_by,
        trip_id=request.trip_id,
        distribute_remainder=request.distribute_remainder
    )
    logger.info(f"Built expense '{expense.title}' for trip {expense.trip_id}")
    return expense


@router.post("/splits/settle", response_model=ExpenseSplit)
async def settle(split: ExpenseSplit):
    """Mark a split as settled."""
    return settle_split(split)


@router.post("/splits/unsettle", response_model=ExpenseSplit)
async def unsettle(split: ExpenseSplit):
    """Mark a split as unsettled."""
    return unsettle_split(split)


@router.post("/splits/{split_id}/toggle", response_model=SplitToggleResponse)
async def toggle(split_id: str, request: SplitToggleRequest):
    """Project a settle/unsettle onto an expense snapshot, keeping the prior snapshot for rollback."""
    try:
        update = toggle_split(request.expenses, split_id, request.settled)
    except LookupError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    return SplitToggleResponse(expenses=update.value, previous=update.previous)
