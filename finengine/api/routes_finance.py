"""
Financial report routes.

The caller posts the organisation's record snapshot; the engine computes the
requested view and returns it. Nothing here is persisted.
"""
from __future__ import annotations

import logging
from typing import Annotated, TypeAlias

from fastapi import APIRouter, Depends, Query

from finengine.models.finance_schemas import (
    CashPosition,
    FinanceSnapshot,
    FinancialReport,
    InventoryValuation,
    ReportingPeriod,
)
from finengine.services.financials import (
    FinancialReportService,
    compute_cash_position,
    valuate_inventory,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/finance", tags=["finance"])


def get_report_service() -> FinancialReportService:
    return FinancialReportService()


ReportServiceDep: TypeAlias = Annotated[FinancialReportService, Depends(get_report_service)]


@router.post("/statement", response_model=FinancialReport)
def generate_statement(
    snapshot: FinanceSnapshot,
    svc: ReportServiceDep,
    month: int = Query(..., description="Zero-based month (January = 0)"),
    year: int = Query(...),
    regime: str | None = Query(None, description="simplificado or utilidades"),
):
    """Income statement, IVA appendix and dashboard figures for one month."""
    period = ReportingPeriod(month=month, year=year)
    return svc.generate_report(snapshot, period, regime)


@router.post("/cash-position", response_model=CashPosition)
def cash_position(snapshot: FinanceSnapshot):
    """Lifetime accumulated cash balance (not scoped to a period)."""
    return compute_cash_position(
        snapshot.organization.initial_balance,
        snapshot.won_deals,
        snapshot.expenses,
        snapshot.purchases,
    )


@router.post("/inventory", response_model=InventoryValuation)
def inventory_valuation(snapshot: FinanceSnapshot):
    return valuate_inventory(snapshot.inventory_items, snapshot.products)
