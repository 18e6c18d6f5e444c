"""
General Endpoints for the Admin Dashboard

GET /general/user/{id}    - one user (password excluded)
GET /general/dashboard    - headline stats for the dashboard landing page
"""

import asyncio
from typing import Optional

from fastapi import APIRouter, Query

from dashboard import config
from dashboard.api.schemas import DashboardStats
from dashboard.core.errors import InvalidRequestError
from dashboard.core.utils import to_json
from dashboard.database import find_recent_transactions, get_db, get_overall_stat, get_user

router = APIRouter(prefix="/general", tags=["general"])


@router.get("/user/{user_id}")
async def get_user_route(user_id: str):
    user = await asyncio.to_thread(get_user, get_db(), user_id)
    return to_json(user)


def _pick(entries: list, key: str, wanted: Optional[str], label: str) -> Optional[dict]:
    """Entry whose ``key`` equals ``wanted``; the last entry when ``wanted`` is None.

    An explicit ``wanted`` with no matching entry is rejected, even when the
    series is empty.
    """
    if wanted is None:
        return entries[-1] if entries else None
    for entry in entries:
        if entry.get(key) == wanted:
            return entry
    raise InvalidRequestError(f"No {label} data for {wanted!r}")


@router.get("/dashboard", response_model=DashboardStats)
async def get_dashboard_stats(
    year: Optional[int] = Query(None, description="Stats year (default: latest)"),
    month: Optional[str] = Query(None, description="Month name, e.g. November (default: latest)"),
    day: Optional[str] = Query(None, description="YYYY-MM-DD (default: latest)"),
):
    """Overall stats for one year plus the most recent transactions.

    ``thisMonthStats`` / ``todayStats`` are taken from the stat's monthly and
    daily series.
    """
    def _sync():
        db = get_db()
        stat = get_overall_stat(db, year)
        transactions = find_recent_transactions(db, config.DASHBOARD_RECENT_TRANSACTIONS)
        return stat, transactions

    stat, transactions = await asyncio.to_thread(_sync)
    monthly = stat.get("monthlyData", [])
    return to_json({
        "totalCustomers": stat.get("totalCustomers", 0),
        "yearlyTotalSoldUnits": stat.get("yearlyTotalSoldUnits", 0),
        "yearlySalesTotal": stat.get("yearlySalesTotal", 0),
        "monthlyData": monthly,
        "salesByCategory": stat.get("salesByCategory", {}),
        "thisMonthStats": _pick(monthly, "month", month, "month"),
        "todayStats": _pick(stat.get("dailyData", []), "date", day, "day"),
        "transactions": transactions,
    })
