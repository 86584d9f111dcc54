"""Balance summary tests."""

from decimal import Decimal

from finance_tracker.models import Category, Transaction
from finance_tracker.services.summary import summarize


def _transaction(category_id, type_, amount):
    return Transaction(category_id=category_id, type=type_, amount=Decimal(amount))


def test_summary_totals():
    """Test overall income, expense and balance."""
    food = Category(id=1, name="Food", color="#3B82F6", icon="🍔")
    salary = Category(id=2, name="Salary", color="#10B981", icon="💼")
    summary = summarize(
        [food, salary],
        [
            _transaction(2, "income", "1000.00"),
            _transaction(1, "expense", "42.50"),
            _transaction(1, "expense", "7.50"),
        ],
    )

    assert summary.income == Decimal("1000.00")
    assert summary.expense == Decimal("50.00")
    assert summary.balance == Decimal("950.00")
    assert summary.transaction_count == 3

    by_name = {b.category.name: b for b in summary.categories}
    assert by_name["Food"].balance == Decimal("-50.00")
    assert by_name["Food"].transaction_count == 2
    assert by_name["Salary"].income == Decimal("1000.00")


def test_summary_includes_empty_categories():
    """Test that categories without transactions report zeros."""
    summary = summarize([Category(id=1, name="Travel", color="#000", icon="✈️")], [])

    assert summary.balance == Decimal("0")
    assert len(summary.categories) == 1
    assert summary.categories[0].transaction_count == 0
    assert summary.categories[0].balance == Decimal("0")


def test_summary_has_no_float_drift():
    """Test that many small amounts add up exactly."""
    category = Category(id=1, name="Coffee", color="#000", icon="☕")
    summary = summarize([category], [_transaction(1, "expense", "0.10") for _ in range(1000)])

    assert summary.expense == Decimal("100.00")
    assert summary.categories[0].expense == Decimal("100.00")
