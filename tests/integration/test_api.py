"""Integration tests for API endpoints"""

import pytest
from decimal import Decimal
from fastapi.testclient import TestClient


@pytest.fixture
def customer_id(client: TestClient) -> int:
    response = client.post(
        "/v1/customers",
        json={"name": "John", "surname": "Doe", "credit_limit": "10000"},
    )
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
def loan_id(client: TestClient, customer_id: int) -> int:
    """6 installments of 200.00 (1000 at 20%)"""
    response = client.post(
        "/v1/loans",
        json={
            "customer_id": customer_id,
            "loan_amount": "1000",
            "interest_rate": "0.2",
            "number_of_installment": 6,
        },
    )
    assert response.status_code == 201
    return response.json()["id"]


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "credit_payment_total" in response.text


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"
    assert client.get("/health").headers["X-Request-ID"]


def test_create_loan(client: TestClient, customer_id: int):
    response = client.post(
        "/v1/loans",
        json={
            "customer_id": customer_id,
            "loan_amount": "1000",
            "interest_rate": "0.2",
            "number_of_installment": 6,
        },
    )

    assert response.status_code == 201
    data = response.json()
    assert data["customer_id"] == customer_id
    assert Decimal(data["loan_amount"]) == Decimal("1000")
    assert data["number_of_installment"] == 6
    assert data["insert_date"] is not None

    customer = client.get(f"/v1/customers/{customer_id}").json()
    assert Decimal(customer["used_credit_limit"]) == Decimal("1200")


def test_create_loan_invalid_installment_count(client: TestClient, customer_id: int):
    response = client.post(
        "/v1/loans",
        json={
            "customer_id": customer_id,
            "loan_amount": "1000",
            "interest_rate": "0.2",
            "number_of_installment": 7,
        },
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid number of installments. Must be: [6, 9, 12, 24]"


@pytest.mark.parametrize("interest_rate", ["-0.2", "0.9", "0.05"])
def test_create_loan_rate_out_of_range_is_bad_request(client: TestClient, customer_id: int, interest_rate: str):
    """Negative rates fail schema validation, others fail the configured bounds; both are 400"""
    response = client.post(
        "/v1/loans",
        json={
            "customer_id": customer_id,
            "loan_amount": "1000",
            "interest_rate": interest_rate,
            "number_of_installment": 6,
        },
    )

    assert response.status_code == 400


def test_create_loan_rate_with_too_many_decimals(client: TestClient, customer_id: int):
    response = client.post(
        "/v1/loans",
        json={
            "customer_id": customer_id,
            "loan_amount": "1000",
            "interest_rate": "0.12345",
            "number_of_installment": 6,
        },
    )

    assert response.status_code == 400
    assert client.get("/v1/loans", params={"customer_id": customer_id}).json()["loans"] == []


def test_create_loan_over_credit_limit(client: TestClient, customer_id: int):
    response = client.post(
        "/v1/loans",
        json={
            "customer_id": customer_id,
            "loan_amount": "9000",
            "interest_rate": "0.2",
            "number_of_installment": 12,
        },
    )

    assert response.status_code == 422
    assert response.json()["detail"] == "Customer does not have enough credit limit for this loan"
    assert client.get("/v1/loans", params={"customer_id": customer_id}).json()["loans"] == []


def test_create_loan_unknown_customer(client: TestClient):
    response = client.post(
        "/v1/loans",
        json={"customer_id": 999, "loan_amount": "1000", "interest_rate": "0.2", "number_of_installment": 6},
    )

    assert response.status_code == 404


def test_list_loans(client: TestClient, customer_id: int, loan_id: int):
    response = client.get("/v1/loans", params={"customer_id": customer_id})

    assert response.status_code == 200
    data = response.json()
    assert [loan["id"] for loan in data["loans"]] == [loan_id]
    assert data["loans"][0]["is_paid"] is False
    assert data["paging"] == {"page": 0, "size": 10, "total_items": 1, "total_pages": 1}


def test_list_loan_installments(client: TestClient, loan_id: int):
    response = client.get(f"/v1/loans/{loan_id}/installments", params={"size": 4})

    assert response.status_code == 200
    data = response.json()
    assert data["loan_id"] == loan_id
    assert len(data["loan_installments"]) == 4
    assert all(Decimal(inst["amount"]) == Decimal("200") for inst in data["loan_installments"])
    assert all(inst["is_paid"] is False for inst in data["loan_installments"])
    due_dates = [inst["due_date"] for inst in data["loan_installments"]]
    assert due_dates == sorted(due_dates)
    assert data["paging"]["total_items"] == 6
    assert data["paging"]["total_pages"] == 2


def test_list_installments_unknown_loan(client: TestClient):
    assert client.get("/v1/loans/999/installments").status_code == 404


def test_get_installment(client: TestClient, loan_id: int):
    first = client.get(f"/v1/loans/{loan_id}/installments").json()["loan_installments"][0]

    response = client.get(f"/v1/installments/{first['id']}")

    assert response.status_code == 200
    assert response.json() == first
    assert client.get("/v1/installments/999").status_code == 404


def test_pay_loan_settles_installments_within_horizon(client: TestClient, customer_id: int, loan_id: int):
    """Only the 3 installments due within 3 months can be paid now"""
    response = client.post(f"/v1/loans/{loan_id}/payments", json={"amount": "1000"})

    assert response.status_code == 200
    data = response.json()
    assert data["loan_id"] == loan_id
    assert data["paid_installment_count"] == 3
    assert Decimal(data["total_amount_spent"]) == Decimal("600")
    assert data["loan_paid_completely"] is False

    installments = client.get(f"/v1/loans/{loan_id}/installments").json()["loan_installments"]
    assert [inst["is_paid"] for inst in installments] == [True] * 3 + [False] * 3
    assert all(Decimal(inst["paid_amount"]) == Decimal("200") for inst in installments[:3])

    customer = client.get(f"/v1/customers/{customer_id}").json()
    assert Decimal(customer["used_credit_limit"]) == Decimal("600")


def test_pay_loan_not_enough_for_one_installment(client: TestClient, customer_id: int, loan_id: int):
    response = client.post(f"/v1/loans/{loan_id}/payments", json={"amount": "150"})

    assert response.status_code == 422
    assert response.json()["detail"] == f"No installments are eligible for payment for loanId: {loan_id}"

    installments = client.get(f"/v1/loans/{loan_id}/installments").json()["loan_installments"]
    assert not any(inst["is_paid"] for inst in installments)
    customer = client.get(f"/v1/customers/{customer_id}").json()
    assert Decimal(customer["used_credit_limit"]) == Decimal("1200")


def test_pay_unknown_loan(client: TestClient):
    response = client.post("/v1/loans/999/payments", json={"amount": "100"})

    assert response.status_code == 404
    assert response.json()["detail"] == "Unpaid installment could not found for given loan id: 999"


def test_pay_loan_rejects_non_positive_amount(client: TestClient, loan_id: int):
    response = client.post(f"/v1/loans/{loan_id}/payments", json={"amount": "-100"})

    assert response.status_code == 400


def test_malformed_payment_and_business_rejection_have_distinct_statuses(client: TestClient, loan_id: int):
    malformed = client.post(f"/v1/loans/{loan_id}/payments", json={"amount": "-100"})
    too_small = client.post(f"/v1/loans/{loan_id}/payments", json={"amount": "150"})

    assert malformed.status_code == 400
    assert too_small.status_code == 422
