"""
Settlement service for debt minimization between trip members.
"""
import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional
from tripledger.core.config import settings
from tripledger.core.utils import format_balance, format_currency
from tripledger.models.balance import MemberBalance, Settlement
from tripledger.models.expense import Expense, RecordId
from tripledger.schemas.settlement import SettlementSummary
from tripledger.services.balance_service import Roster, aggregate, total_spent

logger = logging.getLogger(__name__)


class UnbalancedLedgerError(ValueError):
    """Raised when net balances do not sum to zero within tolerance."""

    def __init__(self, residual: Decimal):
        self.residual = residual
        super().__init__(f"Balances do not sum to zero (residual {residual})")


def check_balanced(balances: Iterable[MemberBalance]) -> Decimal:
    """Return the sum of all net balances; zero for a consistent ledger."""
    return sum((balance.net_balance for balance in balances), Decimal(0))


def plan(balances: List[MemberBalance], strict: Optional[bool] = None) -> List[Settlement]:
    """
    Minimize the number of transfers needed to settle debts.

    Greedy two-pointer matching over debtors and creditors, each sorted by
    amount descending. Members within the tolerance of zero are treated as
    settled and transfers at or below the tolerance are not recorded.

    The output is deterministic for a given balance list. A ledger whose
    balances do not sum to zero is logged and planned anyway, leaving some
    debt uncovered, unless strict is set, in which case UnbalancedLedgerError
    is raised.
    """
    epsilon = settings.SETTLEMENT_TOLERANCE
    if strict is None:
        strict = settings.STRICT_BALANCE_CHECK

    residual = check_balanced(balances)
    if abs(residual) > epsilon:
        if strict:
            raise UnbalancedLedgerError(residual)
        logger.warning(f"Planning settlements for unbalanced ledger (residual {residual}); result will be incomplete")

    # Remaining amounts are stored as positive numbers for easier calculation
    debtors = [[b, -b.net_balance] for b in balances if b.net_balance < -epsilon]
    creditors = [[b, b.net_balance] for b in balances if b.net_balance > epsilon]

    debtors.sort(key=lambda x: x[1], reverse=True)
    creditors.sort(key=lambda x: x[1], reverse=True)

    transfers = []
    debt_idx = 0
    cred_idx = 0

    while debt_idx < len(debtors) and cred_idx < len(creditors):
        debtor, debt_amount = debtors[debt_idx]
        creditor, cred_amount = creditors[cred_idx]

        # Transfer the minimum of what's owed and what's needed
        transfer_amount = min(debt_amount, cred_amount)
        if transfer_amount > epsilon:
            transfers.append(Settlement(from_member=debtor, to_member=creditor, amount=transfer_amount))

        debtors[debt_idx][1] = debt_amount - transfer_amount
        creditors[cred_idx][1] = cred_amount - transfer_amount

        if debtors[debt_idx][1] < epsilon:
            debt_idx += 1
        if creditors[cred_idx][1] < epsilon:
            cred_idx += 1

    logger.debug(f"Planned {len(transfers)} transfers for {len(debtors)} debtors and {len(creditors)} creditors")
    return transfers


def apply_settlements(
    balances: Iterable[MemberBalance],
    settlements: Iterable[Settlement]
) -> Dict[RecordId, Decimal]:
    """Project every member's net balance after all transfers are paid."""
    projected = {balance.user_id: balance.net_balance for balance in balances}
    for settlement in settlements:
        projected[settlement.from_member.user_id] += settlement.amount
        projected[settlement.to_member.user_id] -= settlement.amount
    return projected


def build_summary(
    balances: List[MemberBalance],
    settlements: List[Settlement],
    spent: Decimal,
    currency: str
) -> str:
    """Render balances and transfers as readable text."""
    summary_lines = []
    summary_lines.append(f"Total expenses: {format_currency(spent, currency)}")
    summary_lines.append(f"Participants: {len(balances)}")
    summary_lines.append("\nNet balances:")
    for balance in balances:
        summary_lines.append(f"  {balance.name}: {format_balance(balance.net_balance, currency)}")
    summary_lines.append("\nTransfers:")
    if not settlements:
        summary_lines.append("  All settled up")
    for settlement in settlements:
        summary_lines.append(
            f"  {settlement.from_member.name} -> {settlement.to_member.name}: "
            f"{format_currency(settlement.amount, currency)}"
        )
    return "\n".join(summary_lines)


def calculate_settlement(
    expenses: List[Expense],
    members: Optional[Roster] = None,
    currency: Optional[str] = None,
    strict: Optional[bool] = None
) -> SettlementSummary:
    """
    Calculate balances and settlement transfers for a trip snapshot.
    Returns SettlementSummary with calculation data and summary text.
    """
    currency = (currency or settings.DEFAULT_CURRENCY).upper()
    balances = aggregate(expenses, members)
    transfers = plan(balances, strict=strict)
    spent = total_spent(expenses)

    return SettlementSummary(
        currency=currency,
        balances=balances,
        transfers=transfers,
        total_spent=spent,
        participant_count=len(balances),
        summary=build_summary(balances, transfers, spent, currency)
    )
