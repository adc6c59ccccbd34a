"""Financial Reporting Service.

Assembles the full period report from a record snapshot: revenue
reconciliation, income statement with IVA appendix, cost structure, profit
waterfall, lifetime cash position and inventory snapshot.
"""
import logging
from decimal import Decimal

from finengine.core.config import settings
from finengine.models.finance_schemas import (
    FinanceSnapshot,
    FinancialReport,
    IncomeStatement,
    ReportingPeriod,
    TaxRegime,
)

from .cash_flow import compute_cash_position
from .computations import VAT_RATE, resolve_regime, vat_factor
from .income_statement import build_income_statement, expenses_by_category
from .inventory_valuation import valuate_inventory
from .period_utils import period_bounds, select_in_period
from .revenue import reconcile_revenue

logger = logging.getLogger(__name__)


class FinancialReportService:
    """Service for generating period financial reports.

    Holds no state between calls; every report is recomputed from the
    snapshot it is given, so instances can be shared across threads.
    """

    def __init__(
        self,
        vat_rate: Decimal = VAT_RATE,
        reconciliation_threshold: Decimal | None = None,
    ):
        # Fail fast on a bad rate instead of on the first report
        vat_factor(vat_rate)
        self.vat_rate = vat_rate
        self.reconciliation_threshold = reconciliation_threshold

    def build_statement(
        self,
        snapshot: FinanceSnapshot,
        period: ReportingPeriod,
        regime: TaxRegime | str,
    ) -> IncomeStatement:
        """Income statement only, without the dashboard extras."""
        return build_income_statement(
            period=period,
            regime=regime,
            period_deals=select_in_period(snapshot.won_deals, "closed_at", period),
            period_expenses=select_in_period(snapshot.expenses, "date", period),
            period_purchases=select_in_period(snapshot.purchases, "date", period),
            vat_rate=self.vat_rate,
        )

    def generate_report(
        self,
        snapshot: FinanceSnapshot,
        period: ReportingPeriod,
        regime: TaxRegime | str | None = None,
    ) -> FinancialReport:
        """Generate the financial report for one month.

        Args:
            snapshot: Organisation-scoped records from the record feed
            period: Month/year to report on
            regime: ISR regime; defaults to settings.DEFAULT_TAX_REGIME

        Returns:
            FinancialReport

        Raises:
            InvalidConfigurationError: If the regime is unknown
        """
        resolved = resolve_regime(regime if regime is not None else settings.DEFAULT_TAX_REGIME)

        period_deals = select_in_period(snapshot.won_deals, "closed_at", period)
        period_invoices = select_in_period(snapshot.invoices, "issued_at", period)
        period_expenses = select_in_period(snapshot.expenses, "date", period)
        period_purchases = select_in_period(snapshot.purchases, "date", period)

        reconciliation = reconcile_revenue(
            period_deals, period_invoices, threshold=self.reconciliation_threshold
        )
        statement = build_income_statement(
            period=period,
            regime=resolved,
            period_deals=period_deals,
            period_expenses=period_expenses,
            period_purchases=period_purchases,
            vat_rate=self.vat_rate,
        )

        # Lifetime and snapshot figures use the unfiltered record set
        cash_position = compute_cash_position(
            snapshot.organization.initial_balance,
            snapshot.won_deals,
            snapshot.expenses,
            snapshot.purchases,
        )
        inventory = valuate_inventory(snapshot.inventory_items, snapshot.products)

        start_date, end_date = period_bounds(period)
        logger.info(
            "Financial report %s (%s): revenue=%s operating_income=%s isr=%s net_income=%s",
            period.label,
            resolved.value,
            statement.total_revenue_gross,
            statement.operating_income,
            statement.isr_amount,
            statement.net_income,
        )

        return FinancialReport(
            period_label=period.label,
            start_date=start_date,
            end_date=end_date,
            reconciliation=reconciliation,
            statement=statement,
            cost_structure={
                "cost_of_sales": statement.cost_of_sales,
                "operating_expenses": statement.operating_expenses_net,
                "income_tax": statement.isr_amount,
            },
            profit_waterfall={
                "net_sales": statement.total_revenue_net,
                "gross_profit": statement.gross_profit,
                "ebitda": statement.operating_income,
                "net_income": statement.net_income,
            },
            expenses_by_category=expenses_by_category(period_expenses),
            cash_position=cash_position,
            inventory=inventory,
        )
