"""
Persisted expense ledger.

Only the payroll commit step writes here; every other record the engine reads
arrives as an in-memory snapshot. The primary key is the deterministic expense
id (``pay-{employee}-{month}-{year}`` for payroll), which makes regeneration of
the same month an update instead of a duplicate.
"""
import datetime as dt
from decimal import Decimal

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from finengine.db.base_class import Base


class ExpenseRecord(Base):
    """Operating expense row (gross, VAT-inclusive amount)."""
    __tablename__ = "expense_records"

    id: Mapped[str] = mapped_column(String(80), primary_key=True)
    organization_id: Mapped[str | None] = mapped_column(String(80), index=True)

    amount: Mapped[Decimal]
    date: Mapped[dt.date] = mapped_column(index=True)

    category: Mapped[str] = mapped_column(String(80), index=True)
    description: Mapped[str | None] = mapped_column(String(500))
    supplier: Mapped[str | None] = mapped_column(String(200))
    project_id: Mapped[str | None] = mapped_column(String(80))

    # Payroll bookkeeping
    employee_id: Mapped[str | None] = mapped_column(String(80), index=True)
    period_month: Mapped[int | None]
    period_year: Mapped[int | None]

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime, default=lambda: dt.datetime.now(dt.timezone.utc)
    )
    updated_at: Mapped[dt.datetime | None] = mapped_column(
        DateTime, onupdate=lambda: dt.datetime.now(dt.timezone.utc)
    )

    def __repr__(self):
        return f"<ExpenseRecord(id={self.id}, amount={self.amount}, category={self.category}, date={self.date})>"
