"""Integration tests for API endpoints"""

import inspect
import pytest
from decimal import Decimal
from fastapi.testclient import TestClient
from household_ledger.api.v1.dashboard import create_insight, month_expenses


def expense(**overrides):
    body = {
        "day": 10,
        "month": 3,
        "year": 2025,
        "type": "expense",
        "description": "Groceries",
        "category": "food",
        "quantity": 1,
        "price_per_unit": "100",
        "owner": "puri",
        "payment_method": "cash",
    }
    body.update(overrides)
    return body


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/transactions", json=expense())
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "ledger_mutations_total" in response.text


def test_request_id_header(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


def test_create_transaction_computes_total(client: TestClient):
    response = client.post("/v1/transactions", json=expense(quantity=3, price_per_unit="12.50"))

    assert response.status_code == 201
    data = response.json()
    assert Decimal(data["total_price"]) == Decimal("37.50")
    assert data["id"]


def test_create_transaction_validation_error(client: TestClient):
    """Feb 30 passes schema checks but fails the calendar check"""
    response = client.post("/v1/transactions", json=expense(day=30, month=2))

    assert response.status_code == 422
    assert response.json()["category"] == "validation"


def test_expense_without_payment_method_rejected(client: TestClient):
    response = client.post("/v1/transactions", json=expense(payment_method=None))
    assert response.status_code == 422


def test_update_and_delete_transaction(client: TestClient):
    txn_id = client.post("/v1/transactions", json=expense()).json()["id"]

    response = client.patch(f"/v1/transactions/{txn_id}", json={"quantity": 2})
    assert response.status_code == 200
    assert Decimal(response.json()["total_price"]) == Decimal("200")

    assert client.delete(f"/v1/transactions/{txn_id}").status_code == 204
    assert client.get("/v1/transactions").json()["count"] == 0


def test_sub_cent_price_rejected_before_storing(client: TestClient):
    """NUMERIC(12, 2) would round 0.333 and break total = quantity x price"""
    response = client.post("/v1/transactions", json=expense(quantity=3, price_per_unit="0.333"))

    assert response.status_code == 422
    assert response.json()["category"] == "validation"
    assert client.get("/v1/transactions").json()["count"] == 0


def test_stored_total_matches_quantity_times_price(client: TestClient):
    client.post("/v1/transactions", json=expense(quantity=3, price_per_unit="0.33"))

    [listed] = client.get("/v1/transactions").json()["transactions"]
    assert Decimal(listed["total_price"]) == Decimal("0.99")
    assert Decimal(listed["price_per_unit"]) == Decimal("0.33")


def test_patch_null_date_field_rejected(client: TestClient):
    txn_id = client.post("/v1/transactions", json=expense()).json()["id"]

    response = client.patch(f"/v1/transactions/{txn_id}", json={"day": None})

    assert response.status_code == 422
    assert response.json()["category"] == "validation"
    assert client.get("/v1/transactions").json()["transactions"][0]["day"] == 10


def test_update_missing_transaction(client: TestClient):
    fake_uuid = "00000000-0000-0000-0000-000000000000"
    response = client.patch(f"/v1/transactions/{fake_uuid}", json={"quantity": 2})

    assert response.status_code == 404
    assert response.json()["category"] == "not_found"


def test_list_transactions_with_filters(client: TestClient):
    client.post("/v1/transactions", json=expense(owner="puri", price_per_unit="10"))
    client.post("/v1/transactions", json=expense(owner="phurita", price_per_unit="90"))
    client.post("/v1/transactions", json=expense(month=4))

    response = client.get("/v1/transactions", params={"month": 3, "year": 2025, "sort_by": "price_desc"})
    data = response.json()
    assert data["count"] == 2
    assert [t["owner"] for t in data["transactions"]] == ["phurita", "puri"]

    response = client.get("/v1/transactions", params={"owner": "puri"})
    assert {t["owner"] for t in response.json()["transactions"]} == {"puri"}

    assert client.get("/v1/transactions", params={"owner": "someone"}).status_code == 422


def test_dashboard_summary_and_daily(client: TestClient):
    client.post("/v1/transactions", json=expense(price_per_unit="500"))
    client.post("/v1/transactions", json=expense(day=11, price_per_unit="300"))
    client.post(
        "/v1/transactions",
        json=expense(type="income", category="salary", price_per_unit="1000", payment_method=None),
    )

    summary = client.get("/v1/dashboard/summary", params={"month": 3, "year": 2025}).json()
    assert Decimal(summary["totals"]["income"]) == Decimal("1000")
    assert Decimal(summary["totals"]["expense"]) == Decimal("800")
    assert Decimal(summary["totals"]["net"]) == Decimal("200")
    assert [c["category"] for c in summary["top_categories"]] == ["food"]
    assert summary["category_shares"][0]["share"] == 1.0

    daily = client.get("/v1/dashboard/daily", params={"month": 3, "year": 2025}).json()
    assert len(daily["days"]) == 31
    assert Decimal(daily["days"][9]["expense"]) == Decimal("500")
    assert Decimal(daily["days"][9]["income"]) == Decimal("1000")
    assert Decimal(daily["days"][10]["expense"]) == Decimal("300")


def test_budget_upsert_and_evaluation(client: TestClient):
    assert client.put("/v1/budgets", json={"owner": "puri", "category": "food", "monthly_limit": "0"}).status_code == 422

    client.put("/v1/budgets", json={"owner": "puri", "category": "food", "monthly_limit": "500"})
    response = client.put("/v1/budgets", json={"owner": "puri", "category": "food", "monthly_limit": "1000"})
    assert response.status_code == 200
    client.post("/v1/transactions", json=expense(price_per_unit="850"))

    data = client.get("/v1/budgets/evaluation", params={"month": 3, "year": 2025}).json()

    [budget] = data["budgets"]
    assert Decimal(budget["monthly_limit"]) == Decimal("1000")
    assert budget["percent"] == 85.0
    assert budget["near_limit"] is True


def test_installment_endpoints(client: TestClient):
    response = client.post(
        "/v1/installments",
        json={
            "owner": "puri",
            "title": "Phone",
            "total_amount": "2400",
            "monthly_amount": "200",
            "total_months": 12,
            "paid_months": 11,
            "start_month": 1,
            "start_year": 2025,
        },
    )
    assert response.status_code == 201
    plan_id = response.json()["id"]

    response = client.post(f"/v1/installments/{plan_id}/advance")
    assert response.status_code == 200
    assert response.json()["status"] == "completed"
    assert response.json()["paid_months"] == 12

    response = client.post(f"/v1/installments/{plan_id}/advance")
    assert response.status_code == 409
    assert response.json()["category"] == "invalid_state"

    views = client.get("/v1/installments", params={"status": "completed"}).json()["installments"]
    assert views[0]["remaining_months"] == 0
    assert views[0]["progress_percent"] == 100.0


def test_bill_and_obligation_endpoints(client: TestClient):
    client.post("/v1/transactions", json=expense(price_per_unit="300"))
    client.post("/v1/transactions", json=expense(price_per_unit="700", payment_method="credit_card"))
    bill_id = client.post(
        "/v1/bills", json={"owner": "puri", "amount": "700", "due_month": 3, "due_year": 2025}
    ).json()["id"]

    pending = client.get("/v1/bills/pending", params={"month": 3, "year": 2025}).json()
    assert Decimal(pending["total_due"]) == Decimal("700")

    obligation = client.get("/v1/dashboard/obligation", params={"month": 3, "year": 2025}).json()
    assert Decimal(obligation["total"]) == Decimal("1000")

    assert client.post(f"/v1/bills/{bill_id}/pay").json()["status"] == "paid"
    assert client.post(f"/v1/bills/{bill_id}/pay").status_code == 409

    obligation = client.get("/v1/dashboard/obligation", params={"month": 3, "year": 2025}).json()
    assert Decimal(obligation["card_bills_due"]) == Decimal("0")
    assert Decimal(obligation["total"]) == Decimal("300")


def test_template_endpoints(client: TestClient):
    response = client.post(
        "/v1/templates",
        json={
            "owner": "phurita",
            "name": "Internet",
            "type": "expense",
            "category": "home",
            "description": "Fiber",
            "price_per_unit": "599",
            "payment_method": "transfer",
        },
    )
    assert response.status_code == 201
    template_id = response.json()["id"]

    response = client.post(f"/v1/templates/{template_id}/apply", json={"day": 1, "month": 3, "year": 2025})

    assert response.status_code == 201
    assert response.json()["description"] == "Fiber"
    assert client.get("/v1/transactions").json()["count"] == 1
    assert len(client.get("/v1/templates").json()["templates"]) == 1


def test_insight_sends_expense_lines_only(client: TestClient, summary_client):
    client.post("/v1/transactions", json=expense(description="Noodles"))
    client.post(
        "/v1/transactions",
        json=expense(type="income", category="salary", price_per_unit="1000", payment_method=None),
    )

    response = client.post("/v1/dashboard/insight", params={"month": 3, "year": 2025})

    assert response.status_code == 200
    assert response.json()["summary"] == "Spent mostly on food."
    [(transactions, month, year)] = summary_client.calls
    assert [t.description for t in transactions] == ["Noodles"]
    assert (month, year) == (3, 2025)


def test_insight_reads_store_in_sync_dependency():
    """The store query must not run on the event loop"""
    assert not inspect.iscoroutinefunction(month_expenses)
    assert "expenses" in inspect.signature(create_insight).parameters
