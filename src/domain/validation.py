"""
Field validation - Constraint checks for customer attributes.

Each known field is described by a FieldRule: the kind its raw text is
converted to and the ordered constraints applied to the converted value.
The same table serves single-field checks (pre-submission UI validation)
and whole-record checks on start and resume.

Constraints follow bean-validation semantics: an absent value passes every
constraint except not_null and adult.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum

from email_validator import EmailNotValidError, validate_email

from .customer import AccountType, Customer, RequestStatus
from .exceptions import ConstraintViolation, ConversionFailure, UnknownField
from .ports import Clock

logger = logging.getLogger(__name__)

ADULT_AGE = 18

INTEGER_MIN, INTEGER_MAX = -(2**31), 2**31 - 1

# Accepted text forms; int(), Decimal() and date.fromisoformat() alone also
# take whitespace, underscores, NaN and compact dates.
_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")
_DECIMAL_TEXT = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")
_DATE_TEXT = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

# A constraint returns its message when violated, None otherwise.
Constraint = Callable[[object, date], str | None]


class FieldKind(Enum):
    """Semantic type a raw field value is converted to."""

    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATE = "date"
    TEXT = "text"


def not_null(message: str = "must not be null") -> Constraint:
    def check(value: object, today: date) -> str | None:
        return message if value is None else None

    return check


def size(minimum: int = 0, maximum: int = 2**31 - 1, message: str | None = None) -> Constraint:
    text = message or f"size must be between {minimum} and {maximum}"

    def check(value: object, today: date) -> str | None:
        if value is None:
            return None
        return None if minimum <= len(str(value)) <= maximum else text

    return check


def pattern(regex: str, message: str) -> Constraint:
    compiled = re.compile(regex)

    def check(value: object, today: date) -> str | None:
        if value is None:
            return None
        return None if compiled.fullmatch(str(value)) else message

    return check


def greater_than(minimum: Decimal) -> Constraint:
    text = f"must be greater than {minimum}"

    def check(value: object, today: date) -> str | None:
        if value is None:
            return None
        return None if Decimal(value) > minimum else text

    return check


def past(message: str = "must be a past date") -> Constraint:
    def check(value: object, today: date) -> str | None:
        if value is None:
            return None
        return None if value < today else message

    return check


def adult(message: str = "Customer must be at least 18 years old.") -> Constraint:
    def check(value: object, today: date) -> str | None:
        if value is None:
            return message
        return None if age_in_years(value, today) >= ADULT_AGE else message

    return check


def one_of(choices: type[Enum]) -> Constraint:
    allowed = [member.value for member in choices]
    text = f"must be one of: {', '.join(allowed)}"

    def check(value: object, today: date) -> str | None:
        if value is None:
            return None
        raw = value.value if isinstance(value, Enum) else value
        return None if raw in allowed else text

    return check


def well_formed_email(message: str = "must be a well-formed email address") -> Constraint:
    # Syntax only: dotless and .test domains pass, no DNS lookups.
    def check(value: object, today: date) -> str | None:
        if value is None or value == "":
            return None
        try:
            validate_email(
                str(value),
                check_deliverability=False,
                globally_deliverable=False,
                test_environment=True,
            )
        except EmailNotValidError:
            return message
        return None

    return check


def age_in_years(born: date, today: date) -> int:
    """Whole calendar years elapsed between born and today."""
    before_birthday = (today.month, today.day) < (born.month, born.day)
    return today.year - born.year - int(before_birthday)


@dataclass(frozen=True)
class FieldRule:
    kind: FieldKind
    constraints: tuple[Constraint, ...] = ()


_AMOUNT = FieldRule(FieldKind.DECIMAL, (greater_than(Decimal("0.0")),))

FIELD_RULES: dict[str, FieldRule] = {
    "id": FieldRule(FieldKind.INTEGER),
    "requestId": FieldRule(FieldKind.TEXT, (not_null(),)),
    "name": FieldRule(
        FieldKind.TEXT,
        (size(2, 100, "Name must be between 2 and 100 characters."),),
    ),
    "dateOfBirth": FieldRule(FieldKind.DATE, (not_null(), past(), adult())),
    "idDocument": FieldRule(FieldKind.TEXT, (size(1, 20),)),
    "accountType": FieldRule(FieldKind.TEXT, (one_of(AccountType),)),
    "startingBalance": _AMOUNT,
    "monthlySalary": _AMOUNT,
    "interestedInOtherProducts": FieldRule(FieldKind.BOOLEAN),
    "email": FieldRule(FieldKind.TEXT, (well_formed_email(), size(maximum=100))),
    "streetName": FieldRule(FieldKind.TEXT, (not_null(), size(2, 100))),
    "houseNumber": FieldRule(FieldKind.TEXT, (not_null(), size(1, 6))),
    "postalCode": FieldRule(
        FieldKind.TEXT,
        (
            not_null(),
            size(maximum=10),
            pattern(r"^\d{4} [A-Z]{2}$", "Postcode must be in the format '1234 AB'."),
        ),
    ),
    "city": FieldRule(FieldKind.TEXT, (not_null(), size(2, 100))),
}

_ADDRESS_FIELDS = ("streetName", "houseNumber", "postalCode", "city")

# Mandatory once the application is submitted.
_SUBMITTED_REQUIRED = ("name", "dateOfBirth")


def convert(field: str, kind: FieldKind, raw: str) -> object:
    """
    Convert raw text to the field's semantic type.

    Booleans are lenient: anything but a case-insensitive "true" is False.
    Integers must fit in 32 bits, decimals must be plain or exponent
    notation and dates must be YYYY-MM-DD.

    Raises:
        ConversionFailure: If integer, decimal or date text cannot be parsed
    """
    if kind is FieldKind.BOOLEAN:
        return raw.lower() == "true"
    try:
        if kind is FieldKind.INTEGER:
            if not _INTEGER_TEXT.fullmatch(raw):
                raise ValueError(raw)
            number = int(raw)
            if not INTEGER_MIN <= number <= INTEGER_MAX:
                raise ValueError(raw)
            return number
        if kind is FieldKind.DECIMAL:
            if not _DECIMAL_TEXT.fullmatch(raw):
                raise InvalidOperation(raw)
            return Decimal(raw)
        if kind is FieldKind.DATE:
            if not _DATE_TEXT.fullmatch(raw):
                raise ValueError(raw)
            return date.fromisoformat(raw)
    except (ValueError, InvalidOperation):
        raise ConversionFailure(field, f"Invalid value for field {field}: {raw}") from None
    return raw


def _first_violation(rule: FieldRule, value: object, today: date) -> str | None:
    for constraint in rule.constraints:
        message = constraint(value, today)
        if message is not None:
            return message
    return None


@dataclass
class FieldValidator:
    """
    Validates customer attributes against FIELD_RULES.

    Today's date for past/adult checks comes from the injected clock.
    """

    clock: Clock

    def validate_field(self, field: str, value: str) -> None:
        """
        Validate a single named field's raw value in isolation.

        Args:
            field: Wire name of the attribute (e.g. "dateOfBirth")
            value: Raw text value

        Raises:
            UnknownField: If field is not a customer attribute
            ConversionFailure: If value cannot be converted to the field's type
            ConstraintViolation: With the first violated constraint's message
        """
        logger.debug("Validating field %s with value %s", field, value)
        rule = FIELD_RULES.get(field)
        if rule is None:
            raise UnknownField(field)

        converted = convert(field, rule.kind, value)
        message = _first_violation(rule, converted, self._today())
        if message is not None:
            raise ConstraintViolation(field, message)

    def validate_customer(self, customer: Customer) -> list[tuple[str, str]]:
        """
        Validate every populated attribute of a full record.

        Address parts are only checked when an address is present.
        name and dateOfBirth must be present on a SUBMITTED record.

        Returns:
            (field, message) pairs, empty when the record is valid
        """
        today = self._today()
        violations = []
        for field, value in _customer_values(customer).items():
            if value is None:
                if customer.status is RequestStatus.SUBMITTED and field in _SUBMITTED_REQUIRED:
                    violations.append((field, "must not be null"))
                continue
            message = _first_violation(FIELD_RULES[field], value, today)
            if message is not None:
                violations.append((field, message))
        return violations

    def _today(self) -> date:
        return self.clock.now().date()


def _customer_values(customer: Customer) -> dict[str, object]:
    values: dict[str, object] = {
        "requestId": customer.request_id,
        "name": customer.name,
        "dateOfBirth": customer.date_of_birth,
        "idDocument": customer.id_document,
        "accountType": customer.account_type,
        "startingBalance": customer.starting_balance,
        "monthlySalary": customer.monthly_salary,
        "email": customer.email,
    }
    address = customer.address
    if address is not None:
        parts = (address.street_name, address.house_number, address.postal_code, address.city)
        values.update(zip(_ADDRESS_FIELDS, parts, strict=True))
    return values
