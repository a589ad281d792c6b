"""FastAPI application entry point."""

import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy import text

from freelancehub.core.config import settings
from freelancehub.core.rate_limit import limiter
from freelancehub.core.structured_logging import build_log_context, configure_logging
from freelancehub.db.session import engine

configure_logging()
logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="FreelanceHub API",
    description="Time tracking, clients, projects, invoices and quotes for freelancers",
    version=settings.VERSION,
    docs_url="/docs" if settings.ENV == "dev" else None,
    redoc_url="/redoc" if settings.ENV == "dev" else None,
)

# Rate limiting (default limit applied to every route by the middleware)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# CORS middleware - must be added before routers
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,  # Required for cookies
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    expose_headers=[REQUEST_ID_HEADER],
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """Tag each request with an id (propagated from the client when present)."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


# ============================================================================
# Error handlers
# ============================================================================

def _request_context(request: Request) -> dict:
    return build_log_context(
        user_id=getattr(request.state, "user_id", None),
        request_id=getattr(request.state, "request_id", None),
        route=request.url.path,
        method=request.method,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Body/query validation failures are 400 with a generic message."""
    logger.info(
        "Request validation failed: %s",
        [{"loc": err.get("loc"), "type": err.get("type")} for err in exc.errors()],
        extra=_request_context(request),
    )
    return JSONResponse(status_code=400, content={"detail": "Invalid request data"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error", extra=_request_context(request))
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ============================================================================
# Routers
# ============================================================================

from freelancehub.routers import (  # noqa: E402
    ab_tests,
    admin,
    auth,
    cashfree,
    clients,
    dashboard,
    documents,
    invoices,
    projects,
    quotes,
    time_entries,
)

app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(clients.router, prefix="/api/clients", tags=["clients"])
app.include_router(projects.router, prefix="/api/projects", tags=["projects"])
app.include_router(time_entries.router, prefix="/api/time-entries", tags=["time-entries"])
app.include_router(invoices.router, prefix="/api/invoices", tags=["invoices"])
app.include_router(quotes.router, prefix="/api/quotes", tags=["quotes"])
app.include_router(documents.router, prefix="/api/documents", tags=["documents"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])

# A/B testing (admin, except result recording)
app.include_router(ab_tests.router, prefix="/api/ab-tests", tags=["ab-tests"])

# Admin console (users, payment keys, activity log)
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])

# Payment gateway (webhook is unauthenticated)
app.include_router(cashfree.router, prefix="/api/cashfree", tags=["cashfree"])


# ============================================================================
# Health Check
# ============================================================================

@app.get("/health")
def health():
    """
    Health check endpoint.

    Verifies database connectivity and returns environment info.
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return {"status": "ok", "env": settings.ENV, "version": settings.VERSION}
