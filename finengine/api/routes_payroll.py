from typing import Annotated, TypeAlias

from fastapi import APIRouter, Depends, Query

from finengine.models.finance_schemas import (
    Employee,
    OperatingExpense,
    PayrollCommitResult,
    PayrollProjection,
    ReportingPeriod,
)
from finengine.services.payroll_service import (
    PayrollService,
    get_payroll_service,
    project_payroll,
)

router = APIRouter(prefix="/payroll", tags=["payroll"])

PayrollServiceDep: TypeAlias = Annotated[PayrollService, Depends(get_payroll_service)]


@router.post("/projection", response_model=PayrollProjection)
def payroll_projection(employees: list[Employee]):
    """Projected employer cost for the active employees, without saving anything."""
    return project_payroll(employees)


@router.post("/commit", response_model=PayrollCommitResult)
def commit_payroll(
    employees: list[Employee],
    svc: PayrollServiceDep,
    month: int = Query(..., description="Zero-based month (January = 0)"),
    year: int = Query(...),
    organization_id: str | None = Query(None),
):
    """Confirm a month's payroll; re-running the same month updates in place."""
    period = ReportingPeriod(month=month, year=year)
    return svc.commit_payroll(employees, period, organization_id=organization_id)


@router.get("/expenses", response_model=list[OperatingExpense])
def list_payroll_expenses(
    svc: PayrollServiceDep,
    month: int = Query(...),
    year: int = Query(...),
    organization_id: str | None = Query(None),
):
    period = ReportingPeriod(month=month, year=year)
    return svc.list_payroll_expenses(period, organization_id=organization_id)
