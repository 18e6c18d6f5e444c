"""
Pytest configuration and shared fixtures.

Fixtures available to all tests:
  • mongo_db        — empty in-memory ``Database`` (mongomock) installed as
                      the shared store
  • fixtures        — the packaged fixture set, freshly loaded
  • seeded_db       — ``mongo_db`` after a swap-strategy seed
  • make_fixtures() — build a minimal valid fixture set with chosen sizes
"""

from __future__ import annotations

import os
import sys
from typing import Dict, List

import mongomock
import pytest
from bson import ObjectId

# Ensure the project root is on the path so all dashboard imports resolve.
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from dashboard import database
from dashboard.database import Database
from dashboard.seed import load_fixtures, seed_database


@pytest.fixture
def mongo_db(monkeypatch):
    db = Database(mongomock.MongoClient(), "dashboard_test")
    # mongomock has no server to ping
    monkeypatch.setattr(db, "ping", lambda: None)
    monkeypatch.setattr(database, "_DB", db)
    return db


@pytest.fixture
def fixtures():
    return load_fixtures()


@pytest.fixture
def seeded_db(mongo_db, fixtures):
    seed_database(mongo_db, fixtures, strategy="swap")
    return mongo_db


def _user(i: int, role: str) -> dict:
    return {
        "_id": ObjectId(),
        "name": f"User {i}",
        "email": f"user{i}@example.com",
        "password": f"secret-{i}",
        "country": "US",
        "role": role,
    }


@pytest.fixture
def make_fixtures():
    def _factory(
        users: int = 0,
        products: int = 0,
        product_stats: int = 0,
        transactions: int = 0,
        overall_stats: int = 0,
        affiliate_stats: int = 0,
        admins: int = 0,
    ) -> Dict[str, List[dict]]:
        user_docs = [_user(i, "admin" if i < admins else "user") for i in range(users)]
        product_docs = [
            {"_id": ObjectId(), "name": f"Product {i}", "price": 10.0 + i, "category": "shoes"}
            for i in range(products)
        ]
        return {
            "users": user_docs,
            "products": product_docs,
            "productstats": [
                {"productId": str(ObjectId()), "year": 2021, "yearlySalesTotal": 100}
                for _ in range(product_stats)
            ],
            "transactions": [
                {"userId": str(ObjectId()), "cost": f"{i}.50", "products": []}
                for i in range(transactions)
            ],
            "overallstats": [
                {"year": 2020 + i, "totalCustomers": 10 * i} for i in range(overall_stats)
            ],
            "affiliatestats": [
                {"userId": ObjectId(), "affiliateSales": []} for _ in range(affiliate_stats)
            ],
        }
    return _factory
