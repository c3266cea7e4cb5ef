"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
JSON field names are camelCase; Python attributes stay snake_case.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.domain.customer import AccountType, Address, Customer, CustomerDetails, RequestStatus


class ApiModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AddressModel(ApiModel):
    """Postal address."""

    street_name: str
    house_number: str
    postal_code: str
    city: str

    @classmethod
    def from_address(cls, address: Address | None) -> "AddressModel | None":
        if address is None:
            return None
        return cls(
            street_name=address.street_name,
            house_number=address.house_number,
            postal_code=address.postal_code,
            city=address.city,
        )


class CustomerRequest(ApiModel):
    """Request model for starting or resuming a registration."""

    name: str
    address: AddressModel | None = None
    date_of_birth: date
    id_document: str | None = None
    account_type: AccountType | None = None
    starting_balance: Decimal | None = None
    monthly_salary: Decimal | None = None
    interested_in_other_products: bool | None = None
    email: str | None = None

    def to_details(self) -> CustomerDetails:
        address = None
        if self.address is not None:
            address = Address(
                street_name=self.address.street_name,
                house_number=self.address.house_number,
                postal_code=self.address.postal_code,
                city=self.address.city,
            )
        return CustomerDetails(
            name=self.name,
            address=address,
            date_of_birth=self.date_of_birth,
            id_document=self.id_document,
            account_type=self.account_type,
            starting_balance=self.starting_balance,
            monthly_salary=self.monthly_salary,
            interested_in_other_products=self.interested_in_other_products,
            email=self.email,
        )


class CustomerResponse(ApiModel):
    """Response model for a registration."""

    request_id: str
    name: str | None = None
    address: AddressModel | None = None
    date_of_birth: date | None = None
    id_document: str | None = None
    account_type: AccountType | None = None
    starting_balance: float | None = None
    monthly_salary: float | None = None
    interested_in_other_products: bool | None = None
    email: str | None = None
    status: RequestStatus
    paused_at: datetime | None = None

    @classmethod
    def from_customer(cls, customer: Customer) -> "CustomerResponse":
        return cls(
            request_id=customer.request_id,
            name=customer.name,
            address=AddressModel.from_address(customer.address),
            date_of_birth=customer.date_of_birth,
            id_document=customer.id_document,
            account_type=customer.account_type,
            starting_balance=_as_float(customer.starting_balance),
            monthly_salary=_as_float(customer.monthly_salary),
            interested_in_other_products=customer.interested_in_other_products,
            email=customer.email,
            status=customer.status,
            paused_at=customer.paused_at,
        )


def _as_float(amount: Decimal | None) -> float | None:
    return float(amount) if amount is not None else None


class ValidateRequest(ApiModel):
    """Request model for single-field validation."""

    field: str | None = Field(None, description="Field name, e.g. dateOfBirth")
    value: str | None = Field(None, description="Raw field value")


class ValidationSuccessResponse(BaseModel):
    """Response model for a valid field."""

    valid: bool = True
    message: str


class ValidationFailureResponse(BaseModel):
    """A single validation failure."""

    valid: bool = False
    error: str
    field: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    timestamp: datetime
    status: int
    error: str
    code: str
    errors: list[ValidationFailureResponse]
    path: str
