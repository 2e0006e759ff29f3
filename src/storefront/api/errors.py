"""HTTP status mapping for domain errors.

Protean's handlers cover validation (400), not-found (404), invalid state
(409) and invalid operation (422). On top of those:

    Unauthenticated       → 401
    PaymentDeclined       → 402
    ExpectedVersionError  → 409
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError
from protean.integrations.fastapi import register_exception_handlers

from storefront.domain import logger
from storefront.shared.errors import PaymentDeclined, Unauthenticated


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)

    @app.exception_handler(Unauthenticated)
    async def unauthenticated_handler(request: Request, exc: Unauthenticated) -> JSONResponse:
        return JSONResponse(status_code=401, content={"error": exc.messages})

    @app.exception_handler(PaymentDeclined)
    async def payment_declined_handler(request: Request, exc: PaymentDeclined) -> JSONResponse:
        return JSONResponse(status_code=402, content={"error": exc.messages})

    @app.exception_handler(ExpectedVersionError)
    async def version_conflict_handler(request: Request, exc: ExpectedVersionError) -> JSONResponse:
        logger.info("concurrent_update_rejected", path=request.url.path, detail=str(exc))
        return JSONResponse(
            status_code=409,
            content={"error": "The resource was changed by another request; reload and retry"},
        )
