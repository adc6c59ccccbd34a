"""
Pydantic schemas for the financial engine.

Input records are frozen snapshots handed over by the record feed; the engine
never mutates them. Result models keep full Decimal precision in Python and
round to cents only when serialised to JSON.
"""
from __future__ import annotations

import calendar
import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, model_validator

from finengine.core.exceptions import InvalidPeriodError
from finengine.utils.currency import money_str

MONTH_NAMES = [
    "Enero", "Febrero", "Marzo", "Abril", "Mayo", "Junio",
    "Julio", "Agosto", "Septiembre", "Octubre", "Noviembre", "Diciembre",
]

PAYROLL_EXPENSE_CATEGORY = "Salarios y Planilla"

Money = Annotated[Decimal, PlainSerializer(money_str, return_type=str, when_used="json")]


class ItemType(str, Enum):
    PRODUCT = "Producto"
    SERVICE = "Servicio"


class InvoiceStatus(str, Enum):
    PAID = "Pagada"
    PENDING = "Pendiente"
    VOIDED = "Anulada"


class InventoryCategory(str, Enum):
    SUPPLIES = "Insumos"
    OFFICE_EQUIPMENT = "Equipo de Oficina"
    TOOLS = "Herramientas"


class ContractType(str, Enum):
    PAYROLL = "Planilla"                                 # Salaried, statutory surcharges apply
    PROFESSIONAL_SERVICES = "Servicios Profesionales"  # Invoice-based contractor


class TaxRegime(str, Enum):
    """Income tax (ISR) regime chosen per report; never stored on a record."""
    SIMPLIFIED = "simplificado"  # 5% / 7% on net revenue
    PROFIT_BASED = "utilidades"  # 25% on operating income


class VatPosition(str, Enum):
    PAYABLE = "payable"
    CREDIT = "credit"


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------

class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class WonDeal(_Record):
    """Sales opportunity closed as won; revenue is recognised at close date."""
    id: str
    amount: Decimal
    quantity: Decimal | None = None
    unit_cost: Decimal | None = None
    closed_at: dt.date
    item_type: ItemType = ItemType.PRODUCT
    client_name: str | None = None


class IssuedInvoice(_Record):
    id: str
    number: str | None = None
    amount: Decimal
    issued_at: dt.date
    status: InvoiceStatus = InvoiceStatus.PENDING
    client_name: str | None = None


class OperatingExpense(_Record):
    id: str
    amount: Decimal
    date: dt.date
    category: str = "General"
    description: str | None = None
    supplier: str | None = None
    project_id: str | None = None


class EquipmentPurchase(_Record):
    """Capital outflow: counts for VAT credit and cash, not for the expense line."""
    id: str
    amount: Decimal
    date: dt.date
    supplier: str | None = None
    description: str | None = None


class InventoryItem(_Record):
    id: str
    name: str | None = None
    category: InventoryCategory
    quantity: Decimal
    unit_cost: Decimal | None = None


class Product(_Record):
    id: str
    name: str | None = None
    stock: Decimal
    cost: Decimal | None = None


class Employee(_Record):
    id: str
    name: str
    position: str = "Colaborador"
    contract_type: ContractType = ContractType.PAYROLL
    base_salary: Decimal
    pays_employer_insurance: bool = True
    other_insurance: Decimal | None = None
    active: bool = True


class OrganizationProfile(_Record):
    name: str | None = None
    initial_balance: Decimal | None = None


class ReportingPeriod(_Record):
    """Calendar month window. ``month`` is zero-based (January = 0)."""
    month: int
    year: int

    @model_validator(mode="after")
    def _check_range(self) -> ReportingPeriod:
        if not 0 <= self.month <= 11 or not 1 <= self.year <= 9999:
            raise InvalidPeriodError(self.month, self.year)
        return self

    @property
    def label(self) -> str:
        return f"{MONTH_NAMES[self.month]} {self.year}"

    @property
    def start_date(self) -> dt.date:
        return dt.date(self.year, self.month + 1, 1)

    @property
    def end_date(self) -> dt.date:
        last_day = calendar.monthrange(self.year, self.month + 1)[1]
        return dt.date(self.year, self.month + 1, last_day)

    def shift(self, delta: int) -> ReportingPeriod:
        """Move ``delta`` months forward (negative for backward), wrapping years."""
        year, month = divmod(self.year * 12 + self.month + delta, 12)
        return ReportingPeriod(month=month, year=year)

    @classmethod
    def containing(cls, day: dt.date) -> ReportingPeriod:
        return cls(month=day.month - 1, year=day.year)


class FinanceSnapshot(BaseModel):
    """Organisation-scoped record set supplied by the record feed."""
    organization: OrganizationProfile = Field(default_factory=OrganizationProfile)
    won_deals: list[WonDeal] = Field(default_factory=list)
    invoices: list[IssuedInvoice] = Field(default_factory=list)
    expenses: list[OperatingExpense] = Field(default_factory=list)
    purchases: list[EquipmentPurchase] = Field(default_factory=list)
    inventory_items: list[InventoryItem] = Field(default_factory=list)
    products: list[Product] = Field(default_factory=list)
    employees: list[Employee] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class RevenueReconciliation(BaseModel):
    revenue_crm: Money
    revenue_invoiced: Money
    divergence: Money
    needs_reconciliation: bool
    message: str | None = None


class VatDetermination(BaseModel):
    """IVA appendix: debit on sales minus credit on expenses and purchases."""
    sales_base: Money
    purchases_base: Money
    debit_vat: Money
    credit_vat: Money
    amount: Money  # absolute value of debit - credit
    position: VatPosition
    label: str


class IncomeStatement(BaseModel):
    period: ReportingPeriod
    regime: TaxRegime
    total_revenue_gross: Money
    total_revenue_net: Money
    debit_vat: Money
    cost_of_sales: Money
    gross_profit: Money
    total_outflow_gross: Money
    total_outflow_net: Money
    credit_vat: Money
    operating_expenses_net: Money
    operating_income: Money
    isr_amount: Money
    net_income: Money
    vat: VatDetermination

    @property
    def vat_net_result(self) -> Decimal:
        """Signed IVA result; positive is payable. Not serialised, consumers read ``vat``."""
        return self.debit_vat - self.credit_vat


class CashPosition(BaseModel):
    initial_balance: Money
    all_income: Money
    all_outflow: Money
    current_balance: Money


class InventoryValuation(BaseModel):
    insumos_value: Money
    products_value: Money
    office_equipment_value: Money
    total: Money


class EmployerCost(BaseModel):
    employee_id: str
    employee_name: str
    contract_type: ContractType
    base_salary: Money
    legal_bonus: Money
    employer_insurance: Money
    other_insurance: Money
    total_cost: Money
    line_items: list[str]


class PayrollProjection(BaseModel):
    headcount: int
    total_cost: Money
    employees: list[EmployerCost]


class PayrollCommitResult(BaseModel):
    period: ReportingPeriod
    period_label: str
    created: int
    updated: int
    total_cost: Money
    expense_ids: list[str]


class FinancialReport(BaseModel):
    period_label: str
    start_date: dt.date
    end_date: dt.date
    reconciliation: RevenueReconciliation
    statement: IncomeStatement
    cost_structure: dict[str, Money]
    profit_waterfall: dict[str, Money]
    expenses_by_category: dict[str, Money]
    cash_position: CashPosition
    inventory: InventoryValuation
