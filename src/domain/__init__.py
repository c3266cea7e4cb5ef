"""
Domain layer - Pure business logic with zero framework imports.

This package contains the account opening registration state machine,
field validation and the expiry sweep. It defines its own port interfaces
for infrastructure abstraction, keeping the domain decoupled from the
web framework and the database driver.
"""

from .customer import AccountType, Address, Customer, CustomerDetails, RequestStatus
from .exceptions import (
    AccountOpeningError,
    ApplicationAlreadySubmitted,
    ConstraintViolation,
    ConversionFailure,
    CustomerError,
    CustomerNotFound,
    FieldValidationError,
    InvalidRegistration,
    RequestNotPaused,
    UnknownField,
)
from .expiry import ExpirySweeper
from .ports import Clock, CustomerRepository, RequestIdGenerator
from .registration import AccountOpeningService
from .validation import FieldValidator

__all__ = [
    "AccountOpeningError",
    "AccountOpeningService",
    "AccountType",
    "Address",
    "ApplicationAlreadySubmitted",
    "Clock",
    "ConstraintViolation",
    "ConversionFailure",
    "Customer",
    "CustomerDetails",
    "CustomerError",
    "CustomerNotFound",
    "CustomerRepository",
    "ExpirySweeper",
    "FieldValidationError",
    "FieldValidator",
    "InvalidRegistration",
    "RequestIdGenerator",
    "RequestNotPaused",
    "RequestStatus",
    "UnknownField",
]
