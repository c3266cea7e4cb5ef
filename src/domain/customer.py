"""
Customer model - The account opening registration record.

Customer Registration State Machine
===================================

States:
- IN_PROGRESS: Initial state after start
- PAUSED: Customer paused the application (paused_at is set)
- SUBMITTED: Customer resumed and submitted the application
- EXPIRED: Paused for longer than the expiry window

Valid Transitions:
    IN_PROGRESS -> PAUSED     (pause)
    PAUSED      -> PAUSED     (pause again, refreshes paused_at)
    EXPIRED     -> PAUSED     (pause; only SUBMITTED blocks pausing)
    PAUSED      -> SUBMITTED  (resume)
    PAUSED      -> EXPIRED    (daily sweep, paused_at kept)

Invalid Transitions:
    SUBMITTED -> any          (pause and resume are refused)
    IN_PROGRESS -> SUBMITTED  (resume requires PAUSED)
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


class RequestStatus(str, Enum):
    """Registration lifecycle states."""

    IN_PROGRESS = "IN_PROGRESS"
    PAUSED = "PAUSED"
    SUBMITTED = "SUBMITTED"
    EXPIRED = "EXPIRED"


class AccountType(str, Enum):
    """Account products a customer can open."""

    CURRENT = "CURRENT"
    SAVINGS = "SAVINGS"


@dataclass
class Address:
    """Postal address of the customer."""

    street_name: str
    house_number: str
    postal_code: str
    city: str


@dataclass
class CustomerDetails:
    """
    Customer-supplied attributes for start and resume.

    Unset optional attributes are None.
    """

    name: str | None = None
    address: Address | None = None
    date_of_birth: date | None = None
    id_document: str | None = None
    account_type: AccountType | None = None
    starting_balance: Decimal | None = None
    monthly_salary: Decimal | None = None
    interested_in_other_products: bool | None = None
    email: str | None = None


@dataclass
class Customer:
    """
    A single account opening registration.

    id is assigned by the store on first save. request_id is the
    client-facing key and never changes once set.
    """

    request_id: str
    status: RequestStatus = RequestStatus.IN_PROGRESS
    id: int | None = None
    name: str | None = None
    address: Address | None = None
    date_of_birth: date | None = None
    id_document: str | None = None
    account_type: AccountType | None = None
    starting_balance: Decimal | None = None
    monthly_salary: Decimal | None = None
    interested_in_other_products: bool | None = None
    email: str | None = None
    paused_at: datetime | None = None

    @classmethod
    def start(cls, request_id: str, details: CustomerDetails) -> "Customer":
        """Create an IN_PROGRESS registration from the supplied details."""
        return cls(
            request_id=request_id,
            status=RequestStatus.IN_PROGRESS,
            name=details.name,
            address=details.address,
            date_of_birth=details.date_of_birth,
            id_document=details.id_document,
            account_type=details.account_type,
            starting_balance=details.starting_balance,
            monthly_salary=details.monthly_salary,
            interested_in_other_products=details.interested_in_other_products,
            email=details.email,
        )

    def pause(self, now: datetime) -> None:
        self.status = RequestStatus.PAUSED
        self.paused_at = now

    def resume(self, details: CustomerDetails) -> None:
        """
        Submit the registration with the resumed details.

        Only the product and contact attributes are replaced, absent ones
        become None. name, address and date_of_birth keep their values.
        """
        self.account_type = details.account_type
        self.email = details.email
        self.id_document = details.id_document
        self.monthly_salary = details.monthly_salary
        self.interested_in_other_products = details.interested_in_other_products
        self.starting_balance = details.starting_balance
        self.paused_at = None
        self.status = RequestStatus.SUBMITTED

    def expire(self) -> None:
        self.status = RequestStatus.EXPIRED
