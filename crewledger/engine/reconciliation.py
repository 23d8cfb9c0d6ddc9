"""
Reconciliation engine - APA vs. expenses at checkout.

    expected_cash = apa_total - expense_total
    difference    = actual_cash - expected_cash
    is_balanced   = |difference| < tolerance

The tolerance (0.01 by default) absorbs floating point noise from currency
arithmetic. Totals are summed from the entries on every call, never cached.
"""

import math
from datetime import datetime
from typing import Iterable, Optional

from pydantic import BaseModel

from crewledger.core.config import settings
from crewledger.core.exceptions import InvalidAmountError, MissingIdentifierError
from crewledger.models.apa import ApaEntry
from crewledger.models.booking import Reconciliation
from crewledger.models.expense import Expense


class ReconciliationResult(BaseModel):
    apa_total: float
    expense_total: float
    expected_cash: float
    actual_cash: float
    difference: float
    is_balanced: bool


def _check_amount(name: str, value: float) -> None:
    if value is None or isinstance(value, bool) or not math.isfinite(value):
        raise InvalidAmountError(f"{name} must be a finite number (got {value!r})")


def sum_apa(entries: Iterable[ApaEntry]) -> float:
    return sum((entry.amount for entry in entries), 0.0)


def sum_expenses(expenses: Iterable[Expense]) -> float:
    return sum((expense.amount for expense in expenses), 0.0)


def calculate(
    apa_total: float,
    expense_total: float,
    actual_cash: float,
    tolerance: Optional[float] = None,
) -> ReconciliationResult:
    _check_amount("apa_total", apa_total)
    _check_amount("expense_total", expense_total)
    _check_amount("actual_cash", actual_cash)
    if tolerance is None:
        tolerance = settings.RECONCILIATION_TOLERANCE

    expected_cash = apa_total - expense_total
    difference = actual_cash - expected_cash

    return ReconciliationResult(
        apa_total=apa_total,
        expense_total=expense_total,
        expected_cash=expected_cash,
        actual_cash=actual_cash,
        difference=difference,
        is_balanced=abs(difference) < tolerance,
    )


def calculate_from_entries(
    apa_entries: Iterable[ApaEntry],
    expenses: Iterable[Expense],
    actual_cash: float,
) -> ReconciliationResult:
    return calculate(sum_apa(apa_entries), sum_expenses(expenses), actual_cash)


def build_record(
    result: ReconciliationResult,
    reconciled_by: str,
    reconciled_at: datetime,
) -> Reconciliation:
    if not reconciled_by:
        raise MissingIdentifierError("reconciled_by")
    return Reconciliation(
        expected_cash=result.expected_cash,
        actual_cash=result.actual_cash,
        difference=result.difference,
        is_balanced=result.is_balanced,
        reconciled_by=reconciled_by,
        reconciled_at=reconciled_at,
    )
