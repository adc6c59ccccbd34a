from __future__ import annotations

import os

os.environ.setdefault("APP_ENV", "test")

from datetime import date  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from finengine.db.base_class import Base  # noqa: E402
from finengine.db.session import SessionLocal, engine  # noqa: E402
from finengine.models import finance_models  # noqa: E402,F401
from finengine.models.finance_schemas import (  # noqa: E402
    ContractType,
    Employee,
    EquipmentPurchase,
    FinanceSnapshot,
    InventoryCategory,
    InventoryItem,
    InvoiceStatus,
    IssuedInvoice,
    OperatingExpense,
    OrganizationProfile,
    Product,
    ReportingPeriod,
    WonDeal,
)


@pytest.fixture(autouse=True)
def _reset_database_state():
    """Ensure each test sees a fresh database schema."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db_session():
    """Provide a database session for tests."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    """Provide a FastAPI TestClient whose requests share the test session."""
    from finengine.api.main import app
    from finengine.db.session import get_db

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def march_2024() -> ReportingPeriod:
    return ReportingPeriod(month=2, year=2024)


@pytest.fixture
def snapshot() -> FinanceSnapshot:
    """A small organisation with activity in February and March 2024."""
    return FinanceSnapshot(
        organization=OrganizationProfile(name="gtech", initial_balance=Decimal("5000")),
        won_deals=[
            WonDeal(id="d1", amount=Decimal("11200"), closed_at=date(2024, 3, 5),
                    quantity=Decimal("2"), unit_cost=Decimal("1500")),
            WonDeal(id="d2", amount=Decimal("22400"), closed_at=date(2024, 3, 20)),
            WonDeal(id="d3", amount=Decimal("5600"), closed_at=date(2024, 2, 11),
                    unit_cost=Decimal("1000")),
        ],
        invoices=[
            IssuedInvoice(id="i1", amount=Decimal("11200"), issued_at=date(2024, 3, 6),
                          status=InvoiceStatus.PAID),
            IssuedInvoice(id="i2", amount=Decimal("22400"), issued_at=date(2024, 3, 21)),
            IssuedInvoice(id="i3", amount=Decimal("9999"), issued_at=date(2024, 3, 22),
                          status=InvoiceStatus.VOIDED),
        ],
        expenses=[
            OperatingExpense(id="e1", amount=Decimal("2240"), date=date(2024, 3, 1), category="Alquiler"),
            OperatingExpense(id="e2", amount=Decimal("1120"), date=date(2024, 3, 15), category="Servicios"),
            OperatingExpense(id="e3", amount=Decimal("560"), date=date(2024, 2, 15), category="Servicios"),
        ],
        purchases=[
            EquipmentPurchase(id="p1", amount=Decimal("3360"), date=date(2024, 3, 10)),
        ],
        inventory_items=[
            InventoryItem(id="inv1", category=InventoryCategory.SUPPLIES,
                          quantity=Decimal("10"), unit_cost=Decimal("25")),
            InventoryItem(id="inv2", category=InventoryCategory.OFFICE_EQUIPMENT,
                          quantity=Decimal("2"), unit_cost=Decimal("4000")),
            InventoryItem(id="inv3", category=InventoryCategory.TOOLS,
                          quantity=Decimal("5"), unit_cost=Decimal("100")),
        ],
        products=[
            Product(id="prod1", stock=Decimal("4"), cost=Decimal("350")),
        ],
        employees=[
            Employee(id="emp1", name="Ana López", base_salary=Decimal("4000")),
            Employee(id="emp2", name="Luis Pérez", contract_type=ContractType.PROFESSIONAL_SERVICES,
                     base_salary=Decimal("6000"), pays_employer_insurance=False),
            Employee(id="emp3", name="Marta Ruiz", base_salary=Decimal("3500"), active=False),
        ],
    )
