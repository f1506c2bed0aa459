"""Models package - Import all records exchanged with the engine."""
from tripledger.models.expense import Expense, ExpenseSplit, ExpenseCategory, SplitType, RecordId
from tripledger.models.trip import TripMember, TripInvite, MemberRole
from tripledger.models.balance import MemberBalance, Settlement

__all__ = [
    "Expense",
    "ExpenseSplit",
    "ExpenseCategory",
    "SplitType",
    "RecordId",
    "TripMember",
    "TripInvite",
    "MemberRole",
    "MemberBalance",
    "Settlement",
]
