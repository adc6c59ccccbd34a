"""Income statement (Estado de Resultados) builder.

Turns one period's won deals, operating expenses and equipment purchases into
the management income statement, applying the tax engine for ISR and IVA.

Equipment purchases are capital outflow: they add to the VAT credit but never
to the operating expense line.
"""
from collections import defaultdict
from collections.abc import Iterable
from decimal import Decimal

from finengine.models.finance_schemas import (
    EquipmentPurchase,
    IncomeStatement,
    OperatingExpense,
    ReportingPeriod,
    TaxRegime,
    VatDetermination,
    WonDeal,
)

from .computations import (
    VAT_RATE,
    compute_income_tax,
    resolve_regime,
    split_gross,
    vat_position,
)
from .revenue import sum_deal_revenue


def deal_cost(deal: WonDeal) -> Decimal:
    quantity = deal.quantity if deal.quantity else Decimal("1")
    unit_cost = deal.unit_cost or Decimal("0")
    return quantity * unit_cost


def compute_cost_of_sales(deals: Iterable[WonDeal]) -> Decimal:
    """Direct cost of what was sold: each deal's own quantity × unit cost."""
    return sum((deal_cost(d) for d in deals), Decimal("0"))


def sum_amounts(records: Iterable[OperatingExpense | EquipmentPurchase]) -> Decimal:
    return sum((r.amount for r in records), Decimal("0"))


def expenses_by_category(expenses: Iterable[OperatingExpense]) -> dict[str, Decimal]:
    totals: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
    for expense in expenses:
        totals[expense.category] += expense.amount
    return dict(sorted(totals.items()))


def build_income_statement(
    period: ReportingPeriod,
    regime: TaxRegime | str,
    period_deals: list[WonDeal],
    period_expenses: list[OperatingExpense],
    period_purchases: list[EquipmentPurchase],
    vat_rate: Decimal = VAT_RATE,
) -> IncomeStatement:
    """
    Build the income statement for one period.

    Args:
        period: Reporting window (for labelling only; inputs are pre-filtered)
        regime: ISR regime for this report
        period_deals: Won deals of the period; their gross total is the revenue
        period_expenses: Operating expenses of the period (gross)
        period_purchases: Equipment purchases of the period (gross)
        vat_rate: IVA rate, 12% unless explicitly overridden

    Returns:
        IncomeStatement with every intermediate line and the IVA appendix

    Raises:
        InvalidConfigurationError: Unknown regime or non-positive VAT rate
    """
    resolved_regime = resolve_regime(regime)

    revenue_gross = sum_deal_revenue(period_deals)
    revenue_net, debit_vat = split_gross(revenue_gross, vat_rate)

    cost_of_sales = compute_cost_of_sales(period_deals)
    gross_profit = revenue_net - cost_of_sales

    expenses_gross = sum_amounts(period_expenses)
    purchases_gross = sum_amounts(period_purchases)
    outflow_gross = expenses_gross + purchases_gross
    outflow_net, credit_vat = split_gross(outflow_gross, vat_rate)

    operating_expenses_net, _ = split_gross(expenses_gross, vat_rate)
    operating_income = gross_profit - operating_expenses_net

    isr_amount = compute_income_tax(resolved_regime, revenue_net, operating_income)
    net_income = operating_income - isr_amount

    vat_net_result = debit_vat - credit_vat
    position, amount, label = vat_position(vat_net_result)

    return IncomeStatement(
        period=period,
        regime=resolved_regime,
        total_revenue_gross=revenue_gross,
        total_revenue_net=revenue_net,
        debit_vat=debit_vat,
        cost_of_sales=cost_of_sales,
        gross_profit=gross_profit,
        total_outflow_gross=outflow_gross,
        total_outflow_net=outflow_net,
        credit_vat=credit_vat,
        operating_expenses_net=operating_expenses_net,
        operating_income=operating_income,
        isr_amount=isr_amount,
        net_income=net_income,
        vat=VatDetermination(
            sales_base=revenue_net,
            purchases_base=outflow_net,
            debit_vat=debit_vat,
            credit_vat=credit_vat,
            amount=amount,
            position=position,
            label=label,
        ),
    )
