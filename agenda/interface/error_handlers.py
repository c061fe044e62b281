"""Translate service exceptions into JSON error responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from agenda.core.db_client import DatabaseError
from agenda.core.errors import classify_error_with_response, http_status_for


logger = logging.getLogger(__name__)


async def handle_service_error(request: Request, exc: Exception) -> JSONResponse:
    """Classify a service failure and return it as an `ErrorResponse` body."""
    error_response = classify_error_with_response(exc)
    status_code = http_status_for(error_response)

    logger.warning(
        "Request failed with %s",
        error_response.code,
        extra={
            "path": request.url.path,
            "error_code": error_response.code,
            "severity": error_response.severity.value,
            "error": str(exc),
        },
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": error_response.model_dump(mode="json"), "detail": str(exc)},
    )


async def handle_validation_error(request: Request, exc: Exception) -> JSONResponse:
    """Report merged-record validation failures like request validation failures."""
    errors = exc.errors() if isinstance(exc, ValidationError) else []
    logger.info("Rejected invalid record", extra={"path": request.url.path, "errors": len(errors)})
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": [{"loc": list(error["loc"]), "msg": error["msg"]} for error in errors]},
    )


def register_error_handlers(app: FastAPI) -> None:
    # Most specific class wins, so ValidationError is not treated as a plain ValueError
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(DatabaseError, handle_service_error)
    app.add_exception_handler(PermissionError, handle_service_error)
    app.add_exception_handler(ValueError, handle_service_error)
