"""Exception handlers translating failures into structured JSON responses."""
from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from salary_countdown.core.exceptions import (
    InvalidConfigurationError,
    NotFoundError,
    PersistenceError,
)
from salary_countdown.core.logger import get_logger
from salary_countdown.schemas import ErrorDetail, ErrorResponse

LOGGER = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _error_response(status_code: int, message: str, errors: list[ErrorDetail] | None = None) -> JSONResponse:
    payload = ErrorResponse(message=message, errors=errors)
    return JSONResponse(status_code=status_code, content=payload.model_dump(exclude_none=True))


def register_exception_handlers(app: FastAPI) -> None:
    """Register the handlers shared by every router."""

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        response = _error_response(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [
            ErrorDetail(
                path=[str(part) for part in error.get("loc", ()) if part != "body"],
                message=str(error.get("msg", "")),
            )
            for error in exc.errors()
        ]
        return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid input", errors)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(InvalidConfigurationError)
    async def invalid_configuration_handler(
        request: Request, exc: InvalidConfigurationError
    ) -> JSONResponse:
        LOGGER.warning("Rejected salary settings: %s", exc)
        return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc))

    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
        LOGGER.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        LOGGER.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)
