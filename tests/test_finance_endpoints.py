"""API tests for finance and payroll routes."""
from __future__ import annotations


def _snapshot_payload() -> dict:
    return {
        "organization": {"name": "gtech", "initial_balance": "1000"},
        "won_deals": [
            {"id": "d1", "amount": "11200", "closed_at": "2024-03-14"},
            {"id": "d2", "amount": "2240", "closed_at": "2024-04-02"},
        ],
        "invoices": [
            {"id": "i1", "amount": "11200", "issued_at": "2024-03-15", "status": "Pagada"},
            {"id": "i2", "amount": "500", "issued_at": "2024-03-16", "status": "Anulada"},
        ],
        "expenses": [{"id": "e1", "amount": "560", "date": "2024-05-01", "category": "Servicios"}],
        "purchases": [],
        "inventory_items": [
            {"id": "x", "category": "Insumos", "quantity": "3", "unit_cost": "10"},
        ],
        "products": [{"id": "p", "stock": "2", "cost": "50"}],
    }


def test_statement_endpoint_simplified(client):
    r = client.post(
        "/finance/statement?month=2&year=2024&regime=simplificado",
        json=_snapshot_payload(),
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["period_label"] == "Marzo 2024"
    st = body["statement"]
    assert st["total_revenue_net"] == "10000.00"
    assert st["debit_vat"] == "1200.00"
    assert st["isr_amount"] == "500.00"
    assert st["net_income"] == "9500.00"
    assert st["vat"]["position"] == "payable"
    assert st["vat"]["label"] == "IMPUESTO A PAGAR"
    assert body["reconciliation"]["needs_reconciliation"] is False
    assert body["cash_position"]["current_balance"] == "13880.00"


def test_statement_endpoint_rejects_unknown_regime(client):
    r = client.post("/finance/statement?month=2&year=2024&regime=mixto", json=_snapshot_payload())
    assert r.status_code == 422
    assert r.json()["error"]["code"] == "CFG001"


def test_statement_endpoint_rejects_invalid_month(client):
    r = client.post("/finance/statement?month=12&year=2024", json=_snapshot_payload())
    assert r.status_code == 422
    assert r.json()["error"]["code"] == "PER100"


def test_cash_position_endpoint(client):
    r = client.post("/finance/cash-position", json=_snapshot_payload())
    assert r.status_code == 200, r.text
    assert r.json() == {
        "initial_balance": "1000.00",
        "all_income": "13440.00",
        "all_outflow": "560.00",
        "current_balance": "13880.00",
    }


def test_inventory_endpoint(client):
    r = client.post("/finance/inventory", json=_snapshot_payload())
    assert r.status_code == 200, r.text
    assert r.json()["total"] == "130.00"


def test_payroll_projection_endpoint(client):
    employees = [
        {"id": "e1", "name": "Ana", "base_salary": "4000"},
        {"id": "e2", "name": "Old", "base_salary": "9000", "active": False},
    ]
    r = client.post("/payroll/projection", json=employees)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["headcount"] == 1
    assert body["total_cost"] == "4756.80"


def test_payroll_commit_and_list(client):
    employees = [
        {"id": "e1", "name": "Ana", "base_salary": "4000"},
        {"id": "e2", "name": "Luis", "base_salary": "5000",
         "contract_type": "Servicios Profesionales"},
    ]
    first = client.post("/payroll/commit?month=0&year=2025", json=employees)
    assert first.status_code == 200, first.text
    assert first.json()["created"] == 2

    second = client.post("/payroll/commit?month=0&year=2025", json=employees)
    assert second.json()["created"] == 0
    assert second.json()["updated"] == 2

    listed = client.get("/payroll/expenses?month=0&year=2025")
    assert listed.status_code == 200, listed.text
    ids = [e["id"] for e in listed.json()]
    assert ids == ["pay-e1-0-2025", "pay-e2-0-2025"]


def test_payroll_commit_with_no_active_employee(client):
    r = client.post(
        "/payroll/commit?month=0&year=2025",
        json=[{"id": "x", "name": "Gone", "base_salary": "100", "active": False}],
    )
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "PAY200"


def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["database"] is True


def test_payroll_commit_for_another_organisation_conflicts(client):
    employees = [{"id": "e1", "name": "Ana", "base_salary": "4000"}]
    ok = client.post("/payroll/commit?month=0&year=2025&organization_id=orgA", json=employees)
    assert ok.status_code == 200, ok.text

    r = client.post("/payroll/commit?month=0&year=2025&organization_id=orgB", json=employees)
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "PAY201"

    listed = client.get("/payroll/expenses?month=0&year=2025&organization_id=orgA")
    assert [e["id"] for e in listed.json()] == ["pay-e1-0-2025"]
