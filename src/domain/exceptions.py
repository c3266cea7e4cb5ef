"""
Domain exceptions - Semantic error types for account opening.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""


class AccountOpeningError(Exception):
    """Base class for account opening domain errors."""

    pass


class CustomerError(AccountOpeningError):
    """
    Error scoped to a single registration.

    Attributes:
        value: The offending value (usually the request id)
        message: Human-readable description
    """

    def __init__(self, value: str, message: str) -> None:
        super().__init__(message)
        self.value = value
        self.message = message


class CustomerNotFound(CustomerError):
    """No registration exists for the request id."""

    def __init__(self, request_id: str) -> None:
        super().__init__(request_id, f"Customer with request id [{request_id}] not found.")


class ApplicationAlreadySubmitted(CustomerError):
    """Registration is SUBMITTED and can no longer be paused or resumed."""

    def __init__(self, request_id: str) -> None:
        super().__init__(
            request_id,
            f"Customer application for request id [{request_id}] cannot be paused / resumed, "
            "it is already submitted.",
        )


class RequestNotPaused(CustomerError):
    """Resume attempted on a registration that is not PAUSED."""

    def __init__(self, request_id: str) -> None:
        super().__init__(
            request_id,
            f"Customer application for request id [{request_id}] cannot be resumed, "
            "because its not in paused status",
        )


class FieldValidationError(AccountOpeningError):
    """Single-field validation failure."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class UnknownField(FieldValidationError):
    """Field name is not an attribute of the customer record."""

    def __init__(self, field: str) -> None:
        super().__init__(field, f"Invalid field: {field}")


class ConversionFailure(FieldValidationError):
    """Raw text could not be converted to the field's type."""

    pass


class ConstraintViolation(FieldValidationError):
    """Converted value breaks one of the field's constraints."""

    pass


class InvalidRegistration(AccountOpeningError):
    """
    Whole-record validation failure.

    Attributes:
        violations: (field, message) pairs, in field declaration order
    """

    def __init__(self, violations: list[tuple[str, str]]) -> None:
        super().__init__("; ".join(f"{field}: {message}" for field, message in violations))
        self.violations = violations
