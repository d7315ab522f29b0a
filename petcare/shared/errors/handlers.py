"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses.
No stack traces or internal details are exposed to clients.
All error responses use the ErrorResponse schema.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from petcare.domain.pets.errors import (
    AnimalNotFoundError,
    ConflictError,
    DomainValidationError,
    NotFoundError,
    OwnerNotFoundError,
    PetDomainError,
    StaleAggregateError,
)

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_404 = 404
HTTP_409 = 409
HTTP_500 = 500


def _error_response(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, str | None] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(DomainValidationError)
    async def handle_validation(
        _request: Request, exc: DomainValidationError
    ) -> JSONResponse:
        """Handle field constraint violations raised by the domain."""
        logger.warning("Validation failed on field=%s", exc.field)
        return _error_response(HTTP_400, "Validation failed", exc.message)

    @app.exception_handler(AnimalNotFoundError)
    async def handle_animal_not_found(
        _request: Request, exc: AnimalNotFoundError
    ) -> JSONResponse:
        """Handle missing animal errors."""
        logger.warning("Animal not found: %s", exc.animal_id)
        return _error_response(HTTP_404, "Animal not found", exc.message)

    @app.exception_handler(OwnerNotFoundError)
    async def handle_owner_not_found(
        _request: Request, exc: OwnerNotFoundError
    ) -> JSONResponse:
        """Handle missing owner errors."""
        logger.warning("Owner not found: %s", exc.owner_id)
        return _error_response(HTTP_404, "Owner not found", exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(
        _request: Request, exc: NotFoundError
    ) -> JSONResponse:
        """Handle any other missing resource."""
        logger.warning("Resource not found")
        return _error_response(HTTP_404, "Not found", exc.message)

    @app.exception_handler(StaleAggregateError)
    async def handle_stale_aggregate(
        _request: Request, exc: StaleAggregateError
    ) -> JSONResponse:
        """Handle lost optimistic concurrency checks."""
        logger.warning("Concurrent modification of %s id=%s", exc.kind, exc.entity_id)
        return _error_response(HTTP_409, "Concurrent modification", exc.message)

    @app.exception_handler(ConflictError)
    async def handle_conflict(
        _request: Request, exc: ConflictError
    ) -> JSONResponse:
        """Handle duplicate keys and business limits."""
        logger.warning("Conflict: %s", type(exc).__name__)
        return _error_response(HTTP_409, "Conflict", exc.message)

    @app.exception_handler(PetDomainError)
    async def handle_pet_domain(
        _request: Request, exc: PetDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled pets domain errors."""
        logger.error("Unhandled pets domain error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
