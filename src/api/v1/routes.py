"""
API v1 routes.

Defines REST endpoints for the account opening API. Domain errors raised
by the services are translated by the handlers in src.api.errors.
"""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_account_opening_service, get_field_validator
from src.api.models import (
    CustomerRequest,
    CustomerResponse,
    ErrorResponse,
    ValidateRequest,
    ValidationFailureResponse,
    ValidationSuccessResponse,
)
from src.domain.exceptions import FieldValidationError
from src.domain.registration import AccountOpeningService
from src.domain.validation import FieldValidator

router = APIRouter(prefix="/api/customers", tags=["v1"])


@router.post(
    "/start",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse, "description": "Validation error"}},
    summary="Start an account registration",
    description="Create a new registration in IN_PROGRESS and return its request id.",
)
def start_registration(
    request_data: CustomerRequest,
    service: AccountOpeningService = Depends(get_account_opening_service),
) -> CustomerResponse:
    customer = service.start(request_data.to_details())
    return CustomerResponse.from_customer(customer)


@router.put(
    "/{request_id}/pause",
    response_model=CustomerResponse,
    status_code=status.HTTP_202_ACCEPTED,
    responses={
        403: {"model": ErrorResponse, "description": "Application already submitted"},
        404: {"model": ErrorResponse, "description": "Registration not found"},
    },
    summary="Pause an account registration",
)
def pause_registration(
    request_id: str,
    service: AccountOpeningService = Depends(get_account_opening_service),
) -> CustomerResponse:
    return CustomerResponse.from_customer(service.pause(request_id))


@router.put(
    "/{request_id}/resume",
    response_model=CustomerResponse,
    status_code=status.HTTP_202_ACCEPTED,
    responses={
        400: {"model": ErrorResponse, "description": "Not paused or validation error"},
        404: {"model": ErrorResponse, "description": "Registration not found"},
    },
    summary="Resume and submit a paused account registration",
    description="Replaces the account and contact details and submits the application. "
    "Name, address and date of birth are not changed.",
)
def resume_registration(
    request_id: str,
    request_data: CustomerRequest,
    service: AccountOpeningService = Depends(get_account_opening_service),
) -> CustomerResponse:
    customer = service.resume(request_id, request_data.to_details())
    return CustomerResponse.from_customer(customer)


@router.get(
    "/{request_id}",
    response_model=CustomerResponse,
    responses={404: {"model": ErrorResponse, "description": "Registration not found"}},
    summary="Get an account registration",
)
def get_registration(
    request_id: str,
    service: AccountOpeningService = Depends(get_account_opening_service),
) -> CustomerResponse:
    return CustomerResponse.from_customer(service.get_by_request_id(request_id))


@router.post(
    "/validate",
    response_model=ValidationSuccessResponse,
    responses={400: {"model": ValidationFailureResponse, "description": "Invalid value"}},
    summary="Validate a single customer field",
    description="Check one field value against the customer constraints before submission.",
)
def validate_field(
    request_data: ValidateRequest,
    validator: FieldValidator = Depends(get_field_validator),
) -> ValidationSuccessResponse:
    field = request_data.field
    if field is None:
        raise FieldValidationError("", "Field is required")
    if request_data.value is None:
        raise FieldValidationError(field, f"Value is required for field: {field}")

    validator.validate_field(field, request_data.value)
    return ValidationSuccessResponse(message=f"The {field} is valid.")
