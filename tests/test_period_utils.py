"""Tests for reporting period selection and navigation."""
from datetime import date, datetime
from decimal import Decimal

import pytest

from finengine.core.exceptions import InvalidPeriodError
from finengine.models.finance_schemas import OperatingExpense, ReportingPeriod
from finengine.services.financials.period_utils import (
    period_bounds,
    period_label,
    select_in_period,
)


def _expense(eid: str, day: date) -> OperatingExpense:
    return OperatingExpense(id=eid, amount=Decimal("100"), date=day)


def test_select_in_period_matches_month_and_year():
    records = [
        _expense("a", date(2024, 3, 1)),
        _expense("b", date(2024, 3, 31)),
        _expense("c", date(2023, 3, 15)),
        _expense("d", date(2024, 4, 1)),
    ]
    selected = select_in_period(records, "date", ReportingPeriod(month=2, year=2024))
    assert [r.id for r in selected] == ["a", "b"]


def test_select_in_period_returns_empty_list_when_nothing_matches():
    records = [_expense("a", date(2024, 3, 1))]
    assert select_in_period(records, "date", ReportingPeriod(month=0, year=2030)) == []


def test_select_in_period_accepts_datetimes():
    class Row:
        def __init__(self, when):
            self.when = when

    rows = [Row(datetime(2024, 12, 31, 23, 59)), Row(datetime(2025, 1, 1, 0, 0))]
    selected = select_in_period(rows, "when", ReportingPeriod(month=11, year=2024))
    assert selected == [rows[0]]


def test_period_bounds_and_label():
    period = ReportingPeriod(month=1, year=2024)
    assert period_bounds(period) == (date(2024, 2, 1), date(2024, 2, 29))
    assert period_label(period) == "Febrero 2024"


@pytest.mark.parametrize(
    "start, delta, expected",
    [
        ((11, 2024), 1, (0, 2025)),
        ((0, 2024), -1, (11, 2023)),
        ((5, 2024), 0, (5, 2024)),
        ((2, 2024), 25, (3, 2026)),
    ],
)
def test_period_shift_wraps_years(start, delta, expected):
    shifted = ReportingPeriod(month=start[0], year=start[1]).shift(delta)
    assert (shifted.month, shifted.year) == expected


def test_period_containing_date():
    assert ReportingPeriod.containing(date(2024, 1, 15)) == ReportingPeriod(month=0, year=2024)


@pytest.mark.parametrize("month", [-1, 12])
def test_invalid_month_is_rejected(month):
    with pytest.raises(InvalidPeriodError):
        ReportingPeriod(month=month, year=2024)
