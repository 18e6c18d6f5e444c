"""Tests for /general and /sales routes."""

from __future__ import annotations

import pytest

from dashboard.core.errors import InvalidRequestError, NotFoundError
from dashboard.routers import general, sales


async def _dashboard(year=None, month=None, day=None):
    return await general.get_dashboard_stats(year=year, month=month, day=day)


@pytest.mark.asyncio
async def test_user_by_id_excludes_password(seeded_db):
    user = await general.get_user_route("63701cc1f03239c72c00017f")
    assert user["name"] == "Shelby"
    assert "password" not in user


@pytest.mark.asyncio
async def test_user_missing_is_not_found(seeded_db):
    with pytest.raises(NotFoundError):
        await general.get_user_route("63701cc1f03239c72c0000ff")


@pytest.mark.asyncio
async def test_user_bad_id_is_invalid(seeded_db):
    with pytest.raises(InvalidRequestError):
        await general.get_user_route("123")


@pytest.mark.asyncio
async def test_dashboard_defaults_to_latest_entries(seeded_db):
    stats = await _dashboard()
    assert stats["totalCustomers"] == 9035
    assert stats["thisMonthStats"]["month"] == "November"
    assert stats["todayStats"]["date"] == "2021-11-15"
    assert stats["salesByCategory"]["shoes"] == 29286
    assert len(stats["transactions"]) == 4
    assert stats["transactions"][0]["_id"] == "63701d74f03239c72c00019c"


@pytest.mark.asyncio
async def test_dashboard_explicit_month_and_day(seeded_db):
    stats = await _dashboard(year=2021, month="October", day="2021-11-14")
    assert stats["thisMonthStats"]["totalSales"] == 25410
    assert stats["todayStats"]["totalUnits"] == 1020


@pytest.mark.asyncio
async def test_dashboard_unknown_month_rejected(seeded_db):
    with pytest.raises(InvalidRequestError):
        await _dashboard(month="Smarch")


@pytest.mark.asyncio
async def test_dashboard_day_rejected_when_daily_series_empty(seeded_db):
    seeded_db.overall_stats.update_many({}, {"$set": {"dailyData": []}})
    with pytest.raises(InvalidRequestError):
        await _dashboard(day="2021-11-14")


@pytest.mark.asyncio
async def test_dashboard_empty_daily_series_defaults_to_none(seeded_db):
    seeded_db.overall_stats.update_many({}, {"$set": {"dailyData": []}})
    stats = await _dashboard()
    assert stats["todayStats"] is None
    assert stats["thisMonthStats"]["month"] == "November"


@pytest.mark.asyncio
async def test_dashboard_unknown_year_not_found(seeded_db):
    with pytest.raises(NotFoundError):
        await _dashboard(year=1999)


@pytest.mark.asyncio
async def test_sales_returns_overall_stat(seeded_db):
    stat = await sales.get_sales()
    assert stat["year"] == 2021
    assert len(stat["monthlyData"]) == 2


@pytest.mark.asyncio
async def test_sales_without_stats_is_not_found(mongo_db):
    with pytest.raises(NotFoundError):
        await sales.get_sales()
