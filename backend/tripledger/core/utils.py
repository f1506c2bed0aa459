"""
Utility functions for the application.
"""
from typing import Any, Dict, Optional
from decimal import Decimal
from tripledger.core.config import settings
from tripledger.models.expense import Expense, SplitType


def to_decimal(value: Any) -> Decimal:
    """Convert a number to Decimal without picking up float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def lookup_by_id(mapping: Dict[Any, Any], key: Any) -> Any:
    """
    Look up a value keyed by a record id.

    JSON object keys are always strings, so an integer or UUID id is also
    tried in its string form.
    """
    if key in mapping:
        return mapping[key]
    return mapping.get(str(key))


def format_response(data: Any, message: str = "Success") -> Dict[str, Any]:
    """Format API response."""
    return {
        "message": message,
        "data": data
    }


def format_error(message: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"error": message}
    if details:
        response["details"] = details
    return response


def format_currency(amount: Decimal, currency: Optional[str] = None) -> str:
    """Format a monetary amount as '1,234.50 USD'."""
    currency = (currency or settings.DEFAULT_CURRENCY).upper()
    return f"{Decimal(amount):,.2f} {currency}"


def format_balance(net_balance: Decimal, currency: Optional[str] = None) -> str:
    """
    Format a net balance with an explicit sign.

    Balances within the settlement tolerance of zero are shown unsigned.
    """
    formatted = format_currency(abs(net_balance), currency)
    if net_balance > settings.SETTLEMENT_TOLERANCE:
        return f"+{formatted}"
    if net_balance < -settings.SETTLEMENT_TOLERANCE:
        return f"-{formatted}"
    return formatted


def split_description(expense: Expense) -> str:
    """Describe how an expense was divided: 'Split 3 ways' or 'Paid in full'."""
    if expense.split_type == SplitType.FULL:
        return "Paid in full"
    count = len(expense.splits or [])
    if count == 0:
        return "Not split"
    return f"Split {count} way{'' if count == 1 else 's'}"
