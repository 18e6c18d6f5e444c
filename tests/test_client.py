"""Tests for /client routes."""

from __future__ import annotations

import json

import pytest

from dashboard.core.errors import InvalidRequestError
from dashboard.routers import client


async def _transactions(page=0, page_size=20, sort=None, search=""):
    return await client.get_transactions(page=page, page_size=page_size, sort=sort, search=search)


@pytest.mark.asyncio
async def test_products_carry_their_stats(seeded_db):
    products = await client.get_products()
    assert len(products) == 3
    for product in products:
        assert len(product["stat"]) == 1
        assert product["stat"][0]["productId"] == product["_id"]


@pytest.mark.asyncio
async def test_products_empty_collection(mongo_db):
    assert await client.get_products() == []


@pytest.mark.asyncio
async def test_customers_are_role_user_without_password(seeded_db):
    customers = await client.get_customers()
    assert len(customers) == 2
    assert {c["role"] for c in customers} == {"user"}
    assert all("password" not in c for c in customers)


@pytest.mark.asyncio
async def test_transactions_paging(seeded_db):
    first = await _transactions(page=0, page_size=3)
    second = await _transactions(page=1, page_size=3)
    assert first["total"] == 4
    assert len(first["transactions"]) == 3
    assert len(second["transactions"]) == 1
    ids = {t["_id"] for t in first["transactions"] + second["transactions"]}
    assert len(ids) == 4


@pytest.mark.asyncio
async def test_transactions_sorted_by_created_at_desc(seeded_db):
    sort = json.dumps({"field": "createdAt", "sort": "desc"})
    page = await _transactions(sort=sort)
    stamps = [t["createdAt"] for t in page["transactions"]]
    assert stamps == sorted(stamps, reverse=True)


@pytest.mark.asyncio
async def test_transactions_search_matches_user_or_cost(seeded_db):
    by_user = await _transactions(search="63701cc1f03239c72c000180")
    assert by_user["total"] == 2
    by_cost = await _transactions(search="77.25")
    assert [t["cost"] for t in by_cost["transactions"]] == ["77.25"]


@pytest.mark.asyncio
async def test_transactions_search_is_literal(seeded_db):
    page = await _transactions(search=".*")
    assert page["total"] == 0


@pytest.mark.parametrize("raw", [
    "{bad json",
    json.dumps({"field": "password", "sort": "asc"}),
    json.dumps({"field": "cost", "sort": "sideways"}),
    json.dumps(["cost"]),
])
@pytest.mark.asyncio
async def test_transactions_bad_sort_rejected(seeded_db, raw):
    with pytest.raises(InvalidRequestError):
        await _transactions(sort=raw)


@pytest.mark.asyncio
async def test_geography_counts_per_country(seeded_db):
    geography = await client.get_geography()
    assert geography == [
        {"id": "BR", "value": 1},
        {"id": "CN", "value": 2},
        {"id": "FR", "value": 1},
        {"id": "US", "value": 1},
    ]
