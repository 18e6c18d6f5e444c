"""
Sales Endpoints for the Admin Dashboard

GET /sales/sales   - the overall sales statistics document
"""

import asyncio

from fastapi import APIRouter

from dashboard.core.utils import to_json
from dashboard.database import get_db, get_first_overall_stat

router = APIRouter(prefix="/sales", tags=["sales"])


@router.get("/sales")
async def get_sales():
    stat = await asyncio.to_thread(get_first_overall_stat, get_db())
    return to_json(stat)
