"""Revenue reconciliation: CRM pipeline vs. formally invoiced revenue."""
import logging
from collections.abc import Iterable
from decimal import Decimal

from finengine.core.config import settings
from finengine.models.finance_schemas import (
    InvoiceStatus,
    IssuedInvoice,
    RevenueReconciliation,
    WonDeal,
)
from finengine.utils.currency import format_quetzales

logger = logging.getLogger(__name__)


def sum_deal_revenue(deals: Iterable[WonDeal]) -> Decimal:
    """Gross CRM revenue: the amounts of the won deals passed in."""
    return sum((d.amount for d in deals), Decimal("0"))


def billable_invoices(invoices: Iterable[IssuedInvoice]) -> list[IssuedInvoice]:
    """Drop voided invoices; they never count towards revenue."""
    return [i for i in invoices if i.status != InvoiceStatus.VOIDED]


def sum_invoiced_revenue(invoices: Iterable[IssuedInvoice]) -> Decimal:
    """Gross invoiced revenue over non-voided invoices."""
    return sum((i.amount for i in billable_invoices(invoices)), Decimal("0"))


def compute_divergence(revenue_crm: Decimal, revenue_invoiced: Decimal) -> Decimal:
    """Signed gap; positive when deals were won but not yet invoiced."""
    return revenue_crm - revenue_invoiced


def reconcile_revenue(
    period_deals: Iterable[WonDeal],
    period_invoices: Iterable[IssuedInvoice],
    threshold: Decimal | None = None,
) -> RevenueReconciliation:
    """
    Compare won-deal revenue with invoiced revenue for one period.

    Both inputs must already be filtered to the period. The statement is built
    from ``revenue_crm``; ``revenue_invoiced`` is only a reconciliation signal.

    Args:
        period_deals: Won deals closed in the period
        period_invoices: Invoices issued in the period (voided ones are ignored)
        threshold: Materiality limit; defaults to settings.RECONCILIATION_THRESHOLD

    Returns:
        RevenueReconciliation with divergence and the needs-reconciliation flag
    """
    limit = Decimal(settings.RECONCILIATION_THRESHOLD) if threshold is None else threshold
    revenue_crm = sum_deal_revenue(period_deals)
    revenue_invoiced = sum_invoiced_revenue(period_invoices)
    divergence = compute_divergence(revenue_crm, revenue_invoiced)
    needs_reconciliation = abs(divergence) > limit

    message = None
    if needs_reconciliation:
        message = (
            f"Existe una diferencia entre las Ventas Ganadas en CRM ({format_quetzales(revenue_crm)}) "
            f"y las Facturas Emitidas ({format_quetzales(revenue_invoiced)}). "
            "Este reporte utiliza los datos del CRM para la proyección."
        )
        logger.warning(
            "Revenue divergence above threshold: crm=%s invoiced=%s divergence=%s",
            revenue_crm, revenue_invoiced, divergence,
        )

    return RevenueReconciliation(
        revenue_crm=revenue_crm,
        revenue_invoiced=revenue_invoiced,
        divergence=divergence,
        needs_reconciliation=needs_reconciliation,
        message=message,
    )
