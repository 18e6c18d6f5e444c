"""
Admin Dashboard API — centralised router registration.

This module is the single place where every APIRouter is mounted onto the
FastAPI application.  Import and call ``register_routes(app)`` once in
``dashboard.app``.

  /client/*       products, customers, transactions, geography
  /general/*      single user, dashboard stats
  /management/*   admins, affiliate performance
  /sales/*        overall sales
  GET /health     store ping + bootstrap/seed status
"""

from __future__ import annotations

import asyncio
import logging
import time

from fastapi import APIRouter, FastAPI, Request
from pymongo.errors import PyMongoError

from dashboard.api.schemas import HealthResponse
from dashboard.core.errors import DashboardError
from dashboard.metrics import metrics_snapshot

logger = logging.getLogger(__name__)

_START_TIME: float = time.time()


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

system_router = APIRouter(tags=["system"])


@system_router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    db_status = "ok"
    try:
        from dashboard.database import get_db
        await asyncio.to_thread(get_db().ping)
    except (DashboardError, PyMongoError) as exc:
        db_status = f"error: {exc}"

    bootstrap = getattr(request.app.state, "bootstrap", None)
    seed_status = bootstrap.seed_status.value if bootstrap is not None else "skipped"
    seed_counts = (
        bootstrap.seed_report.counts
        if bootstrap is not None and bootstrap.seed_report is not None
        else {}
    )
    degraded = db_status != "ok" or seed_status == "failed"

    return HealthResponse(
        status="degraded" if degraded else "ok",
        db=db_status,
        seed=seed_status,
        seed_counts=seed_counts,
        uptime_seconds=round(time.time() - _START_TIME, 1),
        **metrics_snapshot(),
    )


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

def register_routes(app: FastAPI) -> None:
    """Mount all routers onto ``app``."""
    from dashboard.routers import client, general, management, sales

    app.include_router(client.router)
    app.include_router(general.router)
    app.include_router(management.router)
    app.include_router(sales.router)
    app.include_router(system_router)

    logger.info(
        "Routes registered: %d total endpoints",
        sum(1 for r in app.routes if hasattr(r, "methods")),
    )
