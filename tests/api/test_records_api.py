# tests/api/test_records_api.py
"""Tests for the protected record endpoints."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi import status

from farm_ledger.core.tokens import create_access_token

PROTECTED_PATHS = [
    "/api/income",
    "/api/expenses",
    "/api/projects",
    "/api/crops",
    "/api/inventory",
    "/api/summary",
    "/api/revenue-by-crop",
    "/api/monthly-financials",
]


@pytest.mark.parametrize("path", PROTECTED_PATHS)
def test_missing_token_is_unauthorized(client, path: str) -> None:
    response = client.get(path)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Access token required"


@pytest.mark.parametrize("path", PROTECTED_PATHS)
def test_invalid_token_is_forbidden(client, path: str) -> None:
    response = client.get(path, headers={"Authorization": "Bearer not.a.token"})
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["detail"] == "Invalid or expired token"


def test_expired_token_is_forbidden(client, admin_user) -> None:
    token = create_access_token(
        admin_user.id,
        admin_user.username,
        admin_user.role,
        now=datetime.now(UTC) - timedelta(hours=25),
    )
    response = client.get("/api/income", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_list_income_with_filters(client, auth_headers, ledger_rows) -> None:
    response = client.get(
        "/api/income",
        params={"project": "North Field", "fromDate": "2024-01-01", "toDate": "2024-02-28"},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    rows = response.json()
    assert [row["date"] for row in rows] == ["2024-02-05", "2024-01-10"]
    assert rows[0]["totalIncome"] == 200.0
    assert rows[0]["priceUnit"] == 20.0
    assert rows[0]["yield"] == 10.0


def test_all_projects_returns_everything(client, auth_headers, ledger_rows) -> None:
    response = client.get("/api/income", params={"project": "All Projects"}, headers=auth_headers)
    assert len(response.json()) == 4


def test_invalid_filter_date_is_rejected(client, auth_headers) -> None:
    response = client.get("/api/income", params={"fromDate": "last week"}, headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["errors"] == [
        {"field": "fromDate", "message": "fromDate must be a valid ISO-8601 date"}
    ]


def test_create_income(client, auth_headers) -> None:
    response = client.post(
        "/api/income",
        json={"date": "2024-05-01", "project": "North Field", "crop": "Wheat",
              "yield": 10, "priceUnit": 4.5},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["id"] > 0
    assert data["totalIncome"] == 45.0

    listed = client.get("/api/income", headers=auth_headers).json()
    assert [row["id"] for row in listed] == [data["id"]]


def test_create_income_escapes_markup(client, auth_headers) -> None:
    response = client.post(
        "/api/income",
        json={"date": "2024-05-01", "project": "<script>x</script>", "crop": "Wheat", "amount": 1},
        headers=auth_headers,
    )
    assert response.json()["project"] == "&lt;script&gt;x&lt;/script&gt;"


def test_create_income_validation(client, auth_headers) -> None:
    response = client.post(
        "/api/income",
        json={"date": "someday", "project": "", "crop": "Wheat", "amount": "many"},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    fields = sorted(error["field"] for error in response.json()["errors"])
    assert fields == ["amount", "date", "project"]


def test_create_expense(client, auth_headers) -> None:
    response = client.post(
        "/api/expenses",
        json={"date": "2024-05-02T08:00:00", "description": "Diesel", "category": "Fuel",
              "units": 20, "costPerUnit": 1.5},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["date"] == "2024-05-02"
    assert data["totalCost"] == 30.0
    assert data["project"] is None


def test_create_and_list_projects(client, auth_headers) -> None:
    response = client.post(
        "/api/projects",
        json={"name": "East Field", "crop": "Barley", "acreage": 12.5, "startDate": "2024-03-01"},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["status"] == "active"

    listed = client.get("/api/projects", params={"project": "East Field"}, headers=auth_headers)
    assert [row["name"] for row in listed.json()] == ["East Field"]
    assert listed.json()[0]["startDate"] == "2024-03-01"


def test_crops_and_inventory_start_empty(client, auth_headers) -> None:
    assert client.get("/api/crops", headers=auth_headers).json() == []
    assert client.get("/api/inventory", headers=auth_headers).json() == []


@pytest.mark.parametrize(("path", "payload", "field"), [
    ("/api/income", {"date": "2024-05-01", "project": "P", "crop": "Wheat", "amount": "Infinity"}, "amount"),
    ("/api/income", {"date": "2024-05-01", "project": "P", "crop": "Wheat", "yield": True}, "yield"),
    ("/api/income", {"date": "2024-05-01", "project": "P", "crop": "Wheat", "yield": "lots"}, "yield"),
    ("/api/expenses", {"date": "2024-05-01", "description": "Fuel", "category": "Fuel", "units": "NaN"}, "units"),
    ("/api/expenses", {"date": "2024-05-01", "description": "Fuel", "category": "Fuel", "costPerUnit": "cheap"}, "costPerUnit"),
    ("/api/projects", {"name": "East Field", "crop": "Barley", "acreage": "big"}, "acreage"),
    ("/api/projects", {"name": "East Field", "crop": "Barley", "acreage": "-Infinity"}, "acreage"),
])
def test_numeric_fields_must_be_finite_numbers(client, auth_headers, path, payload, field) -> None:
    response = client.post(path, json=payload, headers=auth_headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["errors"] == [{"field": field, "message": "Must be a valid number"}]
    assert client.get(path, headers=auth_headers).json() == []


def test_rejected_infinity_leaves_summary_numeric(client, auth_headers) -> None:
    client.post(
        "/api/income",
        json={"date": "2024-05-01", "project": "P", "crop": "Wheat", "amount": "Infinity"},
        headers=auth_headers,
    )
    client.post(
        "/api/income",
        json={"date": "2024-05-01", "project": "P", "crop": "Wheat", "amount": 25},
        headers=auth_headers,
    )
    summary = client.get("/api/summary", headers=auth_headers).json()
    assert summary == {"totalRevenue": 25.0, "totalExpenses": 0.0, "netProfit": 25.0}


def test_project_filter_matches_names_with_markup_characters(client, auth_headers) -> None:
    client.post(
        "/api/income",
        json={"date": "2024-05-01", "project": "Tom & Jerry", "crop": "Cheese", "amount": 5},
        headers=auth_headers,
    )
    rows = client.get("/api/income", params={"project": "Tom & Jerry"}, headers=auth_headers).json()
    assert [row["project"] for row in rows] == ["Tom &amp; Jerry"]
