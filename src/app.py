"""Storefront FastAPI application.

Processes commands synchronously via HTTP. Every API request runs inside the
storefront domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay of domain.toml is applied:
#   - "development" → local SQLite file
#   - "test"        → separate SQLite file
#   - "production"  → PostgreSQL, JSON logs
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import DomainContextMiddleware

from storefront.domain import storefront
from storefront.utils.logging import add_context, clear_context, configure_logging

configure_logging(storefront)
storefront.init()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/products": storefront,
    "/categories": storefront,
    "/cart": storefront,
    "/wishlist": storefront,
    "/checkout": storefront,
    "/orders": storefront,
    "/reviews": storefront,
    "/admin": storefront,
}

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Catalogue, cart, checkout, wishlist and reviews",
)

app.add_middleware(DomainContextMiddleware, route_domain_map=_ROUTE_DOMAIN_MAP)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def logging_context_middleware(request: Request, call_next):
    """Bind request id and path to every log line emitted while serving the request."""
    clear_context()
    add_context(
        request_id=request.headers.get("X-Request-Id") or uuid4().hex,
        method=request.method,
        path=request.url.path,
    )
    try:
        return await call_next(request)
    finally:
        clear_context()


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from storefront.api import ROUTERS, register_error_handlers  # noqa: E402

register_error_handlers(app)
for router in ROUTERS:
    app.include_router(router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domain": storefront.name,
            "env": storefront.config["env"],
        }
    )
