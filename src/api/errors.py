"""
Exception handlers - Translate domain errors into HTTP responses.

Domain errors become structured 4xx bodies. Anything else is logged and
returned as a generic 500 without internal detail.
"""

import logging
from datetime import datetime, timezone
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.api.models import ErrorResponse, ValidationFailureResponse
from src.domain.exceptions import (
    ApplicationAlreadySubmitted,
    CustomerError,
    CustomerNotFound,
    FieldValidationError,
    InvalidRegistration,
)

logger = logging.getLogger(__name__)

VALIDATION_ERROR = "VALIDATION_ERROR"
FORBIDDEN_ERROR = "FORBIDDEN_ERROR"
NOT_FOUND_ERROR = "NOT_FOUND_ERROR"
INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


def error_response(
    request: Request,
    status_code: int,
    code: str,
    errors: list[ValidationFailureResponse],
) -> JSONResponse:
    """Build an ErrorResponse body for the request path."""
    body = ErrorResponse(
        timestamp=datetime.now(timezone.utc),
        status=status_code,
        error=HTTPStatus(status_code).phrase,
        code=code,
        errors=errors,
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def handle_field_validation(request: Request, exc: FieldValidationError) -> JSONResponse:
    failure = ValidationFailureResponse(error=exc.message, field=exc.field)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=failure.model_dump())


async def handle_invalid_registration(request: Request, exc: InvalidRegistration) -> JSONResponse:
    errors = [ValidationFailureResponse(error=message, field=field) for field, message in exc.violations]
    return error_response(request, status.HTTP_400_BAD_REQUEST, VALIDATION_ERROR, errors)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies like domain validation failures."""
    errors = []
    for error in exc.errors():
        # loc is ("body", "address", "postalCode") etc.
        field = ".".join(str(part) for part in error["loc"][1:])
        message = "must not be null" if error["type"] == "missing" else error["msg"]
        errors.append(ValidationFailureResponse(error=message, field=field))
    return error_response(request, status.HTTP_400_BAD_REQUEST, VALIDATION_ERROR, errors)


async def handle_customer_error(request: Request, exc: CustomerError) -> JSONResponse:
    if isinstance(exc, CustomerNotFound):
        status_code, code = status.HTTP_404_NOT_FOUND, NOT_FOUND_ERROR
    elif isinstance(exc, ApplicationAlreadySubmitted):
        status_code, code = status.HTTP_403_FORBIDDEN, FORBIDDEN_ERROR
    else:
        status_code, code = status.HTTP_400_BAD_REQUEST, VALIDATION_ERROR
    errors = [ValidationFailureResponse(error=exc.message, field=exc.value)]
    return error_response(request, status_code, code, errors)


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    errors = [ValidationFailureResponse(error="Internal server error", field="")]
    return error_response(
        request, status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_SERVER_ERROR, errors
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the domain error handlers on the application."""
    app.add_exception_handler(FieldValidationError, handle_field_validation)
    app.add_exception_handler(InvalidRegistration, handle_invalid_registration)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(CustomerError, handle_customer_error)
    app.add_exception_handler(Exception, handle_unexpected)
