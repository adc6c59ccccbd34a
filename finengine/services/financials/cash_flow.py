"""Accumulated cash position (Flujo de Caja Acumulado).

Lifetime figure: opening balance plus every won deal ever, minus every expense
and purchase ever. Deliberately ignores the reporting period.
"""
from collections.abc import Iterable
from decimal import Decimal

from finengine.models.finance_schemas import (
    CashPosition,
    EquipmentPurchase,
    OperatingExpense,
    WonDeal,
)

from .income_statement import sum_amounts
from .revenue import sum_deal_revenue


def compute_cash_position(
    initial_balance: Decimal | None,
    all_won_deals: Iterable[WonDeal],
    all_expenses: Iterable[OperatingExpense],
    all_purchases: Iterable[EquipmentPurchase],
) -> CashPosition:
    opening = initial_balance or Decimal("0")
    all_income = sum_deal_revenue(all_won_deals)
    all_outflow = sum_amounts(all_expenses) + sum_amounts(all_purchases)
    return CashPosition(
        initial_balance=opening,
        all_income=all_income,
        all_outflow=all_outflow,
        current_balance=opening + all_income - all_outflow,
    )
