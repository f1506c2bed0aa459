"""
Tests for balance aggregation.
"""
from decimal import Decimal
from tripledger.models.expense import Expense, ExpenseSplit, SplitType
from tripledger.models.trip import TripMember
from tripledger.services.balance_service import (
    aggregate, budget_progress, budget_remaining, total_spent
)
from tripledger.services.split_service import allocate


def make_expense(paid_by, amount, split_type=SplitType.EQUAL, participants=(), custom=None):
    """Build an expense whose splits come from the allocator."""
    amount = Decimal(str(amount))
    splits = [
        ExpenseSplit(user_id=a.user_id, amount=a.amount)
        for a in allocate(amount, split_type, participants, custom_amounts=custom)
    ]
    return Expense(paid_by=paid_by, title="Expense", amount=amount, split_type=split_type, splits=splits)


def by_user(balances):
    return {b.user_id: b for b in balances}


def test_payer_and_participant_balances():
    """Alice paid 100 split with Bob: Alice +50, Bob -50."""
    balances = by_user(aggregate([make_expense("alice", 100, participants=["alice", "bob"])]))
    assert len(balances) == 2
    assert balances["alice"].total_paid == Decimal("100")
    assert balances["alice"].total_owed == Decimal("50")
    assert balances["alice"].net_balance == Decimal("50")
    assert balances["bob"].total_paid == Decimal("0")
    assert balances["bob"].total_owed == Decimal("50")
    assert balances["bob"].net_balance == Decimal("-50")


def test_four_way_split():
    """Timmy pays 120 split four ways: Timmy +90, everyone else -30."""
    expense = make_expense("Timmy", 120, participants=["Trey", "Jason", "Sandra", "Timmy"])
    balances = aggregate([expense])
    assert balances[0].user_id == "Timmy"
    assert balances[0].net_balance == Decimal("90")
    assert [b.user_id for b in balances[1:]] == ["Trey", "Jason", "Sandra"]
    assert all(b.net_balance == Decimal("-30") for b in balances[1:])


def test_full_amount_expense():
    """A full-amount expense credits the payer and charges nobody."""
    balances = aggregate([make_expense("alice", 80, split_type=SplitType.FULL, participants=["bob"])])
    assert len(balances) == 1
    assert balances[0].user_id == "alice"
    assert balances[0].net_balance == Decimal("80")


def test_settled_flag_is_ignored():
    expense = Expense(
        paid_by="alice", title="Dinner", amount=Decimal("60"),
        splits=[
            ExpenseSplit(user_id="alice", amount=Decimal("30")),
            ExpenseSplit(user_id="bob", amount=Decimal("30"), is_settled=True),
        ]
    )
    balances = by_user(aggregate([expense]))
    assert balances["bob"].net_balance == Decimal("-30")


def test_only_members_with_activity_appear():
    members = [
        TripMember(user_id="alice", name="Alice", avatar_url="https://img/alice.png"),
        TripMember(user_id="bob", name="Bob"),
        TripMember(user_id="carol", name="Carol"),
    ]
    balances = aggregate([make_expense("alice", 40, participants=["alice", "bob"])], members)
    assert {b.user_id for b in balances} == {"alice", "bob"}
    alice = by_user(balances)["alice"]
    assert alice.name == "Alice"
    assert alice.avatar_url == "https://img/alice.png"


def test_names_from_mapping_and_unknown_default():
    balances = by_user(aggregate(
        [make_expense("alice", 40, participants=["alice", "dave"])],
        {"alice": "Alice"}
    ))
    assert balances["alice"].name == "Alice"
    assert balances["dave"].name == "Unknown"
    assert balances["dave"].avatar_url is None


def test_sorted_creditors_first():
    expenses = [
        make_expense("a", 30, participants=["a", "b", "c"]),
        make_expense("b", 90, participants=["a", "b", "c"]),
    ]
    balances = aggregate(expenses)
    nets = [b.net_balance for b in balances]
    assert nets == sorted(nets, reverse=True)
    assert balances[0].user_id == "b"


def test_balances_sum_to_zero():
    expenses = [
        make_expense("a", 10, participants=["a", "b", "c"]),
        make_expense("b", "47.35", participants=["a", "b", "c", "d"]),
        make_expense("c", 25, split_type=SplitType.CUSTOM, participants=["a", "d"],
                     custom={"a": Decimal("12.50"), "d": Decimal("12.50")}),
        make_expense("d", 19.99, participants=["a", "b", "c", "d"]),
    ]
    balances = aggregate(expenses)
    assert abs(sum(b.net_balance for b in balances)) < Decimal("0.01")


def test_empty_expenses():
    assert aggregate([]) == []


def test_is_settled_within_tolerance():
    expense = Expense(
        paid_by="a", amount=Decimal("10"),
        splits=[ExpenseSplit(user_id="a", amount=Decimal("9.995")), ExpenseSplit(user_id="b", amount=Decimal("0.005"))]
    )
    balances = by_user(aggregate([expense]))
    assert balances["a"].is_settled
    assert balances["b"].is_settled


def test_total_spent():
    expenses = [
        Expense(paid_by="u", title="A", amount=Decimal("25")),
        Expense(paid_by="u", title="B", amount=Decimal("30.50")),
        Expense(paid_by="u", title="C", amount=Decimal("44.50")),
    ]
    assert total_spent(expenses) == Decimal("100")


def test_budget_without_budget():
    expenses = [Expense(paid_by="u", title="A", amount=Decimal("25"))]
    assert budget_remaining(None, expenses) is None
    assert budget_progress(None, expenses) is None
    assert budget_remaining(Decimal("0"), expenses) is None


def test_budget_remaining_and_progress():
    expenses = [
        Expense(paid_by="u", title="A", amount=Decimal("300")),
        Expense(paid_by="u", title="B", amount=Decimal("200")),
    ]
    assert budget_remaining(Decimal("1000"), expenses) == Decimal("500")
    assert budget_progress(Decimal("1000"), expenses) == Decimal("0.5")


def test_budget_overspent():
    expenses = [Expense(paid_by="u", title="A", amount=Decimal("150"))]
    assert budget_remaining(Decimal("100"), expenses) == Decimal("-50")
    assert budget_progress(Decimal("100"), expenses) == Decimal("1.5")
