"""Reporting period helpers.

Selects the records of a (month, year) window. Dates are compared on their own
calendar fields; callers pass dates already in the organisation's local
calendar.
"""
from collections.abc import Iterable
from datetime import date
from typing import Tuple, TypeVar

from finengine.models.finance_schemas import ReportingPeriod

T = TypeVar("T")


def in_period(value: date, period: ReportingPeriod) -> bool:
    """True when ``value`` (date or datetime) falls in ``period``."""
    return value.month - 1 == period.month and value.year == period.year


def select_in_period(records: Iterable[T], date_field: str, period: ReportingPeriod) -> list[T]:
    """
    Return the records whose ``date_field`` falls in the reporting period.

    Args:
        records: Any iterable of records
        date_field: Attribute holding the record's date
        period: Month/year window

    Returns:
        Matching records in input order (empty list when none match)
    """
    return [r for r in records if in_period(getattr(r, date_field), period)]


def period_bounds(period: ReportingPeriod) -> Tuple[date, date]:
    """First and last calendar day of the period, inclusive."""
    return period.start_date, period.end_date


def period_label(period: ReportingPeriod) -> str:
    """Spanish display label, e.g. "Marzo 2024"."""
    return period.label
