"""
Payroll cost calculation and expense generation.

The cost projection is pure. Persisting the month's payroll as expenses is a
separate, explicit commit step keyed by a deterministic id per
(employee, month, year), so regenerating a month updates rows in place.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from finengine.core.config import settings
from finengine.core.exceptions import EmptyPayrollError, PayrollOwnershipError
from finengine.db.session import get_db
from finengine.models.finance_models import ExpenseRecord
from finengine.models.finance_schemas import (
    MONTH_NAMES,
    PAYROLL_EXPENSE_CATEGORY,
    ContractType,
    Employee,
    EmployerCost,
    OperatingExpense,
    PayrollCommitResult,
    PayrollProjection,
    ReportingPeriod,
)
from finengine.utils.currency import format_quetzales, quantize_money

logger = logging.getLogger(__name__)

# Bonificación Incentivo (Decreto 37-2001), paid on every payroll contract
LEGAL_BONUS = Decimal("250")

# Cuota patronal: IGSS 10.67% + IRTRA 1% + INTECAP 1%
EMPLOYER_INSURANCE_RATE = Decimal("0.1267")


def compute_employer_cost(employee: Employee) -> EmployerCost:
    """Monthly cost of one employee to the company, with readable line items."""
    base = employee.base_salary
    other = employee.other_insurance or Decimal("0")
    bonus = Decimal("0")
    employer_insurance = Decimal("0")
    line_items: list[str] = []

    if employee.contract_type == ContractType.PAYROLL:
        bonus = LEGAL_BONUS
        line_items.append(f"Salario Base: {format_quetzales(base)}")
        line_items.append(f"Bonif. Ley: {format_quetzales(bonus)}")
        if employee.pays_employer_insurance:
            employer_insurance = base * EMPLOYER_INSURANCE_RATE
            line_items.append(f"Cuota Patronal (12.67%): {format_quetzales(employer_insurance)}")
    else:
        # Invoice-based contractor: fees only
        line_items.append(f"Honorarios: {format_quetzales(base)}")

    if other > 0:
        line_items.append(f"Otros Seguros: {format_quetzales(other)}")

    return EmployerCost(
        employee_id=employee.id,
        employee_name=employee.name,
        contract_type=employee.contract_type,
        base_salary=base,
        legal_bonus=bonus,
        employer_insurance=employer_insurance,
        other_insurance=other,
        total_cost=base + bonus + employer_insurance + other,
        line_items=line_items,
    )


def active_employees(employees: Iterable[Employee]) -> list[Employee]:
    return [e for e in employees if e.active]


def project_payroll(employees: Iterable[Employee]) -> PayrollProjection:
    """Projected monthly payroll expense over active employees, in whole cents."""
    costs = [compute_employer_cost(e) for e in active_employees(employees)]
    return PayrollProjection(
        headcount=len(costs),
        total_cost=sum((quantize_money(c.total_cost) for c in costs), Decimal("0")),
        employees=costs,
    )


def payroll_expense_id(employee_id: str, period: ReportingPeriod) -> str:
    return f"pay-{employee_id}-{period.month}-{period.year}"


def build_payroll_expenses(employees: Iterable[Employee], period: ReportingPeriod) -> list[OperatingExpense]:
    """
    Materialise one payroll expense per active employee for ``period``.

    Pure: returns records for the caller to persist after confirmation.
    Amounts are rounded to cents, the precision the ledger stores.
    """
    payment_date = date(period.year, period.month + 1, settings.PAYROLL_PAYMENT_DAY)
    month_name = MONTH_NAMES[period.month]
    expenses = []
    for employee in active_employees(employees):
        cost = compute_employer_cost(employee)
        expenses.append(
            OperatingExpense(
                id=payroll_expense_id(employee.id, period),
                amount=quantize_money(cost.total_cost),
                date=payment_date,
                category=PAYROLL_EXPENSE_CATEGORY,
                description=f"Pago {month_name} - {employee.name} ({employee.contract_type.value})",
                supplier=employee.name,
            )
        )
    return expenses


class PayrollService:
    def __init__(self, db: Session):
        self.db = db

    def commit_payroll(
        self,
        employees: Iterable[Employee],
        period: ReportingPeriod,
        organization_id: str | None = None,
    ) -> PayrollCommitResult:
        """
        Persist the period's payroll expenses, upserting by deterministic id.

        Raises:
            EmptyPayrollError: If there is no active employee
            PayrollOwnershipError: If a row with the same id belongs to another organisation
        """
        employees = list(employees)
        expenses = build_payroll_expenses(employees, period)
        if not expenses:
            raise EmptyPayrollError(period.label)

        employee_ids = [e.id for e in active_employees(employees)]
        existing = {e.id: self.db.get(ExpenseRecord, e.id) for e in expenses}
        # All rows are checked before any is written
        for expense_id, record in existing.items():
            if record is not None and record.organization_id != organization_id:
                raise PayrollOwnershipError(expense_id, organization_id)

        created = updated = 0
        for employee_id, expense in zip(employee_ids, expenses):
            record = existing[expense.id]
            if record is None:
                record = ExpenseRecord(id=expense.id)
                self.db.add(record)
                created += 1
            else:
                updated += 1
            record.organization_id = organization_id
            record.amount = expense.amount
            record.date = expense.date
            record.category = expense.category
            record.description = expense.description
            record.supplier = expense.supplier
            record.employee_id = employee_id
            record.period_month = period.month
            record.period_year = period.year

        self.db.commit()
        total = sum((e.amount for e in expenses), Decimal("0"))
        logger.info(
            "Payroll committed for %s: created=%s updated=%s total=%s",
            period.label, created, updated, total,
            extra={"organization_id": organization_id, "expense_ids": [e.id for e in expenses]},
        )
        return PayrollCommitResult(
            period=period,
            period_label=period.label,
            created=created,
            updated=updated,
            total_cost=total,
            expense_ids=[e.id for e in expenses],
        )

    def list_payroll_expenses(
        self,
        period: ReportingPeriod,
        organization_id: str | None = None,
    ) -> list[OperatingExpense]:
        """Read a period's persisted payroll back as engine expense records."""
        query = self.db.query(ExpenseRecord).filter(
            ExpenseRecord.category == PAYROLL_EXPENSE_CATEGORY,
            ExpenseRecord.period_month == period.month,
            ExpenseRecord.period_year == period.year,
        )
        if organization_id is not None:
            query = query.filter(ExpenseRecord.organization_id == organization_id)
        return [
            OperatingExpense(
                id=r.id,
                amount=r.amount,
                date=r.date,
                category=r.category,
                description=r.description,
                supplier=r.supplier,
                project_id=r.project_id,
            )
            for r in query.order_by(ExpenseRecord.id).all()
        ]


def get_payroll_service(db: Annotated[Session, Depends(get_db)]) -> PayrollService:
    return PayrollService(db)
