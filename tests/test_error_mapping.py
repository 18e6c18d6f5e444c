"""HTTP-level tests: status codes and ``{"message"}`` bodies."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import OperationFailure, ServerSelectionTimeoutError

from dashboard import database
from dashboard.app import app


@pytest.fixture
def http(seeded_db):
    # No ``with`` block: the lifespan (real bootstrap) is not run.
    return TestClient(app)


def test_admins_ok(http):
    response = http.get("/management/admins")
    assert response.status_code == 200
    body = response.json()
    assert len(body) == 2
    assert all("password" not in u for u in body)


def test_empty_collection_is_200_with_empty_list(mongo_db):
    response = TestClient(app).get("/client/customers")
    assert response.status_code == 200
    assert response.json() == []


def test_store_unreachable_maps_to_503(http, seeded_db, monkeypatch):
    def _down(*_args, **_kwargs):
        raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    monkeypatch.setattr("dashboard.routers.management.find_users_by_role", _down)

    response = http.get("/management/admins")
    assert response.status_code == 503
    assert response.json()["message"]


def test_other_store_error_maps_to_500(http, monkeypatch):
    def _broken(*_args, **_kwargs):
        raise OperationFailure("unknown operator: $bogus")

    monkeypatch.setattr("dashboard.routers.management.find_users_by_role", _broken)

    response = http.get("/management/admins")
    assert response.status_code == 500
    assert "bogus" in response.json()["message"]


def test_uninitialised_store_maps_to_503(monkeypatch):
    monkeypatch.setattr(database, "_DB", None)
    response = TestClient(app).get("/sales/sales")
    assert response.status_code == 503
    assert response.json() == {"message": "Database has not been initialised"}


def test_not_found_maps_to_404(http):
    response = http.get("/general/user/63701cc1f03239c72c0000ff")
    assert response.status_code == 404
    assert "not found" in response.json()["message"]


def test_malformed_id_maps_to_400(http):
    response = http.get("/management/performance/zzz")
    assert response.status_code == 400
    assert response.json()["message"].startswith("Invalid id")


def test_bad_sort_maps_to_400(http):
    response = http.get("/client/transactions", params={"sort": "{oops"})
    assert response.status_code == 400


def test_transactions_query_aliases(http):
    response = http.get("/client/transactions", params={"page": 0, "pageSize": 2})
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 4
    assert len(body["transactions"]) == 2


def test_page_size_over_limit_is_rejected(http):
    response = http.get("/client/transactions", params={"pageSize": 10_000})
    assert response.status_code == 422


def test_dashboard_is_camel_case_on_the_wire(http):
    response = http.get("/general/dashboard")
    assert response.status_code == 200
    body = response.json()
    assert body["totalCustomers"] == 9035
    assert "thisMonthStats" in body and "todayStats" in body


def test_security_headers_present(http):
    response = http.get("/sales/sales")
    assert response.headers["Cross-Origin-Resource-Policy"] == "cross-origin"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
