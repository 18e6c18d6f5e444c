"""
Admin Dashboard API - FastAPI Application
Main entry point for the backend server.

Run with:
    uvicorn dashboard.app:app --host 0.0.0.0 --port 9000
"""

import asyncio
import json
import logging
import time
import traceback
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import ConnectionFailure, PyMongoError

from dashboard import __version__, config
from dashboard.api.routes import register_routes
from dashboard.bootstrap import Bootstrap
from dashboard.core.errors import DashboardError
from dashboard.core.logging import configure_logging
from dashboard.metrics import record_error, record_request

configure_logging()
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lifespan (startup / shutdown)
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect (and optionally reseed) before serving; close on shutdown.

    A ``StoreConnectionError`` raised here aborts startup, so the server
    never begins listening without a reachable store.
    """
    bootstrap = Bootstrap.from_config()
    app.state.bootstrap = bootstrap
    await asyncio.to_thread(bootstrap.start)
    bootstrap.mark_listening()
    logger.info("Server Port: %s", config.PORT)

    yield  # Application is running

    bootstrap.shutdown()


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Admin Dashboard API",
    version=__version__,
    description="Users, products, transactions and sales statistics for the admin dashboard",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Exception handlers -- every error body is {"message": ...}
# ---------------------------------------------------------------------------

@app.exception_handler(DashboardError)
async def dashboard_error_handler(request: Request, exc: DashboardError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(PyMongoError)
async def store_error_handler(request: Request, exc: PyMongoError):
    # ConnectionFailure covers AutoReconnect, NetworkTimeout and
    # ServerSelectionTimeoutError.
    status = 503 if isinstance(exc, ConnectionFailure) else 500
    logger.error("Store error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"message": str(exc) or type(exc).__name__})


def _unhandled_response(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception on %s %s: %s\n%s",
        request.method, request.url.path, exc, traceback.format_exc(),
    )
    return JSONResponse(status_code=500, content={"message": str(exc) or type(exc).__name__})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    return _unhandled_response(request, exc)


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

_SECURITY_HEADERS = {
    "Cross-Origin-Resource-Policy": "cross-origin",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
}


async def security_headers_middleware(request: Request, call_next):
    response = await call_next(request)
    for name, value in _SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


async def request_logging_middleware(request: Request, call_next):
    """One structured ``request_log {...}`` line per request."""
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as exc:
        # Unhandled exceptions reach the Exception handler only outside this
        # middleware; turn them into the 500 body here.
        response = _unhandled_response(request, exc)
    duration_ms = round((time.perf_counter() - started) * 1000.0, 2)

    record_request()
    if response.status_code >= 500:
        record_error()

    response.headers["X-Request-ID"] = request_id
    logger.info("request_log %s", json.dumps({
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "status": response.status_code,
        "duration_ms": duration_ms,
        "client": request.client.host if request.client else None,
    }))
    return response


app.middleware("http")(security_headers_middleware)
app.middleware("http")(request_logging_middleware)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

register_routes(app)


# ---------------------------------------------------------------------------
# Development entry-point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("dashboard.app:app", host=config.HOST, port=config.PORT)
