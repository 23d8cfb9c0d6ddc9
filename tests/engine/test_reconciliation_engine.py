import pytest
from datetime import datetime, timezone
from crewledger.core.exceptions import InvalidAmountError, MissingIdentifierError
from crewledger.engine import reconciliation
from crewledger.models.apa import ApaEntry
from crewledger.models.expense import Expense, ExpenseCategory


def apa(amount):
    return ApaEntry(booking_id="b1", amount=amount, created_by="captain-1")


def expense(amount, category=ExpenseCategory.FOOD):
    return Expense(booking_id="b1", amount=amount, category=category)


def test_balanced_when_cash_matches():
    result = reconciliation.calculate(1000, 300, 700)

    assert result.expected_cash == 700
    assert result.difference == 0
    assert result.is_balanced


def test_surplus_is_positive_difference():
    result = reconciliation.calculate(1000, 300, 800)

    assert result.difference == 100
    assert not result.is_balanced


def test_shortfall_is_negative_difference():
    result = reconciliation.calculate(1000, 300, 650)

    assert result.difference == -50
    assert not result.is_balanced


def test_sub_cent_difference_is_balanced():
    result = reconciliation.calculate(1000, 300, 700.005)

    assert result.difference == pytest.approx(0.005)
    assert result.is_balanced


def test_custom_tolerance():
    assert reconciliation.calculate(1000, 300, 705, tolerance=10).is_balanced


def test_overspent_booking_expects_negative_cash():
    result = reconciliation.calculate(500, 650, -150)

    assert result.expected_cash == -150
    assert result.is_balanced


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), None, True])
def test_non_finite_amounts_are_rejected(bad):
    with pytest.raises(InvalidAmountError):
        reconciliation.calculate(1000, 300, bad)


def test_totals_are_summed_from_entries():
    result = reconciliation.calculate_from_entries(
        [apa(600), apa(500), apa(-100)],
        [expense(120), expense(180, ExpenseCategory.FUEL)],
        700,
    )

    assert result.apa_total == 1000
    assert result.expense_total == 300
    assert result.is_balanced


def test_no_entries_sum_to_zero():
    assert reconciliation.sum_apa([]) == 0.0
    assert reconciliation.sum_expenses([]) == 0.0


def test_build_record_requires_reconciler():
    result = reconciliation.calculate(1000, 300, 700)
    when = datetime(2026, 7, 20, tzinfo=timezone.utc)

    record = reconciliation.build_record(result, "captain-1", when)
    assert record.reconciled_by == "captain-1"
    assert record.expected_cash == 700

    with pytest.raises(MissingIdentifierError):
        reconciliation.build_record(result, "", when)
