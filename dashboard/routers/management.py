"""
Management Endpoints for the Admin Dashboard

GET /management/admins             - every admin user (password excluded)
GET /management/performance/{id}   - affiliate user with its credited sales
"""

import asyncio

from fastapi import APIRouter

from dashboard.api.schemas import PerformanceResponse
from dashboard.core.utils import to_json
from dashboard.database import find_users_by_role, get_db, get_user_performance
from dashboard.domain.enums import Role

router = APIRouter(prefix="/management", tags=["management"])


@router.get("/admins")
async def get_admins():
    """Return all users whose role is ``admin``."""
    admins = await asyncio.to_thread(find_users_by_role, get_db(), Role.ADMIN)
    return to_json(admins)


@router.get("/performance/{user_id}", response_model=PerformanceResponse)
async def get_user_performance_route(user_id: str):
    """Return the affiliate user and the transactions credited to them."""
    performance = await asyncio.to_thread(get_user_performance, get_db(), user_id)
    return to_json(performance)
