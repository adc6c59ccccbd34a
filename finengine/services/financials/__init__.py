"""Financial Calculation Engine.

Pure, deterministic computations over an organisation's record snapshot.

Sub-modules:
- period_utils: Selecting records of a (month, year) window
- revenue: CRM vs. invoiced revenue reconciliation
- computations: IVA split and ISR under both regimes
- income_statement: Estado de Resultados builder
- cash_flow: Lifetime accumulated cash position
- inventory_valuation: Stock valuation snapshot
- reporting_service: FinancialReportService tying the above together
"""
from .cash_flow import compute_cash_position
from .computations import (
    PROFIT_TAX_RATE,
    SIMPLIFIED_BRACKET_LIMIT,
    VAT_RATE,
    compute_income_tax,
    resolve_regime,
    split_gross,
    vat_factor,
)
from .income_statement import build_income_statement, compute_cost_of_sales
from .inventory_valuation import valuate_inventory
from .period_utils import period_bounds, period_label, select_in_period
from .reporting_service import FinancialReportService
from .revenue import reconcile_revenue

__all__ = [
    # Constants
    "VAT_RATE",
    "SIMPLIFIED_BRACKET_LIMIT",
    "PROFIT_TAX_RATE",
    # Computation functions
    "compute_income_tax",
    "resolve_regime",
    "split_gross",
    "vat_factor",
    "reconcile_revenue",
    "build_income_statement",
    "compute_cost_of_sales",
    "compute_cash_position",
    "valuate_inventory",
    # Utilities
    "select_in_period",
    "period_bounds",
    "period_label",
    # Service class
    "FinancialReportService",
]
