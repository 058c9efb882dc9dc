"""API endpoint tests.

Tests the FastAPI endpoints against an in-memory database.
"""

from decimal import Decimal
from uuid import uuid4

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

JANUARY = {"pay_period_start": "2024-01-01", "pay_period_end": "2024-01-31"}


class TestHealthEndpoints:
    """Test health check endpoints."""

    async def test_health_check(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"
        assert data["overtime_policy"] == "fixed_monthly_160"
        assert data["engine_version"]

    async def test_readiness_and_liveness(self, client: AsyncClient):
        assert (await client.get("/ready")).json()["status"] == "ready"
        assert (await client.get("/live")).json()["status"] == "alive"


class TestCalculatorEndpoints:
    """Test stateless calculation endpoints."""

    async def test_calculate_payslip(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/calculator/payslip",
            json={"base_salary": "20000", "other_deductions": "100", **JANUARY},
        )

        assert response.status_code == 200, response.text
        data = response.json()
        assert Decimal(data["gross_pay"]) == Decimal("20000")
        assert Decimal(data["social_security"]) == Decimal("750")
        assert Decimal(data["tax_deduction"]) == Decimal("375")
        assert Decimal(data["net_pay"]) == Decimal("18775")
        assert [line["code"] for line in data["lines"]] == ["BASE", "PIT", "SSO", "OTHER"]

    async def test_calculate_payslip_with_named_policy(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/calculator/payslip",
            json={
                "base_salary": 5000,
                "overtime_hours": 10,
                "overtime_policy": "daily_8x22",
                **JANUARY,
            },
        )

        assert response.status_code == 200, response.text
        assert Decimal(response.json()["overtime_pay"]) == Decimal("426.14")

    async def test_unknown_policy_is_invalid_input(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/calculator/payslip",
            json={"base_salary": 5000, "overtime_policy": "weekly", **JANUARY},
        )

        assert response.status_code == 422
        assert response.json()["code"] == "INVALID_INPUT"

    async def test_hours_and_amount_together_is_invalid_input(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/calculator/payslip",
            json={"base_salary": 5000, "overtime_hours": 1, "overtime_pay": 10, **JANUARY},
        )

        assert response.status_code == 422
        assert response.json()["code"] == "INVALID_INPUT"

    async def test_negative_salary_rejected(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/calculator/payslip",
            json={"base_salary": -1, **JANUARY},
        )
        assert response.status_code == 422

    async def test_inverted_period_rejected(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/calculator/payslip",
            json={
                "base_salary": 1000,
                "pay_period_start": "2024-02-01",
                "pay_period_end": "2024-01-01",
            },
        )
        assert response.status_code == 422

    async def test_calculate_tax_monthly(self, client: AsyncClient):
        response = await client.post("/api/v1/calculator/tax", json={"monthly_gross_pay": 25000})

        assert response.status_code == 200, response.text
        data = response.json()
        assert Decimal(data["annual_income"]) == Decimal("300000")
        assert Decimal(data["annual_tax"]) == Decimal("7500")
        assert Decimal(data["monthly_tax"]) == Decimal("625")
        assert Decimal(data["effective_rate"]) == Decimal("0.025")

    async def test_calculate_tax_custom_brackets(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/calculator/tax",
            json={
                "annual_income": 50000,
                "brackets": [
                    {"upper_bound": 10000, "rate": "0.10"},
                    {"upper_bound": 40000, "rate": "0.12"},
                    {"upper_bound": None, "rate": "0.22"},
                ],
            },
        )

        assert response.status_code == 200, response.text
        assert Decimal(response.json()["annual_tax"]) == Decimal("6800")
        assert response.json()["monthly_tax"] is None

    async def test_malformed_brackets_rejected(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/calculator/tax",
            json={
                "annual_income": 50000,
                "brackets": [
                    {"upper_bound": 40000, "rate": "0.10"},
                    {"upper_bound": 10000, "rate": "0.12"},
                ],
            },
        )

        assert response.status_code == 422
        assert response.json()["code"] == "INVALID_INPUT"

    async def test_empty_brackets_rejected(self, client: AsyncClient):
        """An empty schedule is an error, not a request for the default one."""
        response = await client.post(
            "/api/v1/calculator/tax",
            json={"annual_income": "300000", "brackets": []},
        )

        assert response.status_code == 422
        assert response.json()["code"] == "INVALID_INPUT"

    async def test_tax_requires_exactly_one_income(self, client: AsyncClient):
        response = await client.post("/api/v1/calculator/tax", json={})
        assert response.status_code == 422

    async def test_estimate(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/calculator/estimate",
            json={"base_salary": 5000, "overtime_hours": 10, "bonus": 500},
        )

        assert response.status_code == 200, response.text
        data = response.json()
        assert Decimal(data["overtime_rate"]) == Decimal("46.88")
        assert Decimal(data["gross_pay"]) == Decimal("5968.75")
        assert Decimal(data["net_pay"]) == Decimal("3599.02")


class TestPayrollFlow:
    """Salary → overtime → payslip → paid, over HTTP."""

    async def test_full_flow(self, client: AsyncClient):
        user_id = str(uuid4())

        response = await client.post(
            "/api/v1/salaries",
            json={
                "user_id": user_id,
                "base_salary": "20000",
                "housing_allowance": "1000",
                "transport_allowance": "500",
                "effective_date": "2024-01-01",
            },
        )
        assert response.status_code == 201, response.text

        response = await client.post(
            "/api/v1/overtime-requests",
            json={"user_id": user_id, "request_date": "2024-01-15", "hours": 10},
        )
        assert response.status_code == 201, response.text
        ot_request_id = response.json()["ot_request_id"]
        assert response.json()["status"] == "pending"

        response = await client.post(
            f"/api/v1/overtime-requests/{ot_request_id}/review", json={"approve": True}
        )
        assert response.status_code == 200, response.text
        assert response.json()["status"] == "approved"

        response = await client.post(
            "/api/v1/payslips",
            json={**JANUARY, "entries": [{"user_id": user_id}]},
        )
        assert response.status_code == 201, response.text
        data = response.json()
        assert data["errors"] == {}
        payslip = data["payslips"][0]
        assert payslip["status"] == "pending"
        assert Decimal(payslip["gross_pay"]) == Decimal("23375")
        assert Decimal(payslip["net_pay"]) == Decimal("22081")

        response = await client.get("/api/v1/reports/monthly", params={"year": 2024, "month": 1})
        assert response.status_code == 200, response.text
        assert response.json()["payslip_count"] == 1
        assert response.json()["employee_count"] == 1
        assert Decimal(response.json()["total_overtime_pay"]) == Decimal("1875")

        response = await client.post(f"/api/v1/payslips/{payslip['payslip_id']}/pay")
        assert response.status_code == 200, response.text
        assert response.json()["status"] == "paid"
        assert response.json()["paid_at"] is not None

        response = await client.post(f"/api/v1/payslips/{payslip['payslip_id']}/pay")
        assert response.status_code == 409
        assert response.json()["code"] == "INVALID_TRANSITION"

        response = await client.post(
            "/api/v1/payslips",
            json={**JANUARY, "entries": [{"user_id": user_id, "bonus": 10}]},
        )
        assert response.status_code == 201
        assert user_id in response.json()["errors"]

        response = await client.get("/api/v1/payslips", params={"user_id": user_id})
        assert response.json()["total"] == 1

    async def test_salary_history_and_effective(self, client: AsyncClient):
        user_id = str(uuid4())
        for base, effective in (("20000", "2024-01-01"), ("22000", "2024-06-01")):
            response = await client.post(
                "/api/v1/salaries",
                json={"user_id": user_id, "base_salary": base, "effective_date": effective},
            )
            assert response.status_code == 201

        history = (await client.get(f"/api/v1/salaries/{user_id}")).json()
        assert [Decimal(r["base_salary"]) for r in history] == [Decimal("22000"), Decimal("20000")]

        response = await client.get(
            f"/api/v1/salaries/{user_id}/effective", params={"as_of": "2024-05-31"}
        )
        assert Decimal(response.json()["base_salary"]) == Decimal("20000")

    async def test_effective_salary_not_found(self, client: AsyncClient):
        response = await client.get(
            f"/api/v1/salaries/{uuid4()}/effective", params={"as_of": "2024-05-31"}
        )
        assert response.status_code == 404
        assert response.json()["code"] == "SALARY_NOT_FOUND"

    async def test_payslip_not_found(self, client: AsyncClient):
        response = await client.get(f"/api/v1/payslips/{uuid4()}")
        assert response.status_code == 404
        assert response.json()["code"] == "PAYSLIP_NOT_FOUND"
