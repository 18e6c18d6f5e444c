"""
Client Endpoints for the Admin Dashboard

GET /client/products       - products with their yearly stats attached
GET /client/customers      - every customer (role "user", password excluded)
GET /client/transactions   - paged / sorted / searched transactions
GET /client/geography      - customer counts per country
"""

import asyncio
import json
from typing import Optional, Tuple

from fastapi import APIRouter, Query

from dashboard import config
from dashboard.api.schemas import TransactionsPage
from dashboard.core.errors import InvalidRequestError
from dashboard.core.utils import to_json
from dashboard.database import (
    count_users_by_country,
    find_products_with_stats,
    find_transactions_page,
    find_users_by_role,
    get_db,
)
from dashboard.domain.enums import Role, SortDirection

router = APIRouter(prefix="/client", tags=["client"])

# Fields the frontend grid can sort on, mapped to stored names.
_SORTABLE = {
    "_id": "_id",
    "userId": "userId",
    "createdAt": "createdAt",
    "products": "products",
    "cost": "cost",
}


def _parse_sort(raw: Optional[str]) -> Optional[Tuple[str, int]]:
    """Parse ``{"field": "cost", "sort": "desc"}`` into a pymongo sort key."""
    if not raw:
        return None
    try:
        parsed = json.loads(raw)
        field = _SORTABLE[parsed["field"]]
        direction = SortDirection(parsed.get("sort", "asc"))
    except (ValueError, KeyError, TypeError):
        raise InvalidRequestError(f"Invalid sort: {raw}")
    return field, direction.pymongo


@router.get("/products")
async def get_products():
    products = await asyncio.to_thread(find_products_with_stats, get_db())
    return to_json(products)


@router.get("/customers")
async def get_customers():
    customers = await asyncio.to_thread(find_users_by_role, get_db(), Role.USER)
    return to_json(customers)


@router.get("/transactions", response_model=TransactionsPage)
async def get_transactions(
    page: int = Query(0, ge=0),
    page_size: int = Query(
        config.TRANSACTIONS_PAGE_SIZE_DEFAULT,
        alias="pageSize",
        ge=1,
        le=config.TRANSACTIONS_PAGE_SIZE_MAX,
    ),
    sort: Optional[str] = Query(None, description='JSON, e.g. {"field":"cost","sort":"desc"}'),
    search: str = Query(""),
):
    sort_key = _parse_sort(sort)
    items, total = await asyncio.to_thread(
        find_transactions_page, get_db(), page, page_size, sort_key, search,
    )
    return {"transactions": to_json(items), "total": total}


@router.get("/geography")
async def get_geography():
    return await asyncio.to_thread(count_users_by_country, get_db())
