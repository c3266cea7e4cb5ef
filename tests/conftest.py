"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory fakes for the repository, clock and request id ports
- Domain services wired against those fakes
- Sample customer details
"""

import copy
from datetime import date, datetime, timedelta
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from src.domain.customer import AccountType, Address, Customer, CustomerDetails, RequestStatus
from src.domain.expiry import ExpirySweeper
from src.domain.registration import AccountOpeningService
from src.domain.validation import FieldValidator

AMSTERDAM = ZoneInfo("Europe/Amsterdam")


class InMemoryCustomerRepository:
    """CustomerRepository fake storing copies, like a real database would."""

    def __init__(self) -> None:
        self._rows: dict[int, Customer] = {}
        self._next_id = 1
        self.save_calls = 0
        self.expire_calls = 0

    def save(self, customer: Customer) -> Customer:
        self.save_calls += 1
        if customer.id is None:
            customer.id = self._next_id
            self._next_id += 1
        self._rows[customer.id] = copy.deepcopy(customer)
        return customer

    def find_by_request_id(self, request_id: str) -> Customer | None:
        for customer in self._rows.values():
            if customer.request_id == request_id:
                return copy.deepcopy(customer)
        return None

    def find_by_status_and_paused_before(
        self, status: RequestStatus, timestamp: datetime
    ) -> list[Customer]:
        return [
            copy.deepcopy(customer)
            for customer in self._rows.values()
            if customer.status is status
            and customer.paused_at is not None
            and customer.paused_at < timestamp
        ]

    def expire_paused_before(self, customer: Customer, timestamp: datetime) -> bool:
        self.expire_calls += 1
        row = self._rows.get(customer.id)
        if (
            row is None
            or row.status is not RequestStatus.PAUSED
            or row.paused_at is None
            or not row.paused_at < timestamp
        ):
            return False
        row.expire()
        return True

    def stored(self, request_id: str) -> Customer:
        """Return the stored copy of a registration (test helper)."""
        customer = self.find_by_request_id(request_id)
        assert customer is not None
        return customer


class FixedClock:
    """Clock fake returning a settable time."""

    def __init__(self, now: datetime) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current = self.current + timedelta(**kwargs)


class SequentialRequestIdGenerator:
    """RequestIdGenerator fake producing req0001, req0002, ..."""

    def __init__(self) -> None:
        self._count = 0

    def generate(self) -> str:
        self._count += 1
        return f"req{self._count:04d}"


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 10, 19, 12, 0, tzinfo=AMSTERDAM)


@pytest.fixture
def clock(now: datetime) -> FixedClock:
    return FixedClock(now)


@pytest.fixture
def repository() -> InMemoryCustomerRepository:
    return InMemoryCustomerRepository()


@pytest.fixture
def request_ids() -> SequentialRequestIdGenerator:
    return SequentialRequestIdGenerator()


@pytest.fixture
def validator(clock: FixedClock) -> FieldValidator:
    return FieldValidator(clock=clock)


@pytest.fixture
def service(
    repository: InMemoryCustomerRepository,
    request_ids: SequentialRequestIdGenerator,
    clock: FixedClock,
    validator: FieldValidator,
) -> AccountOpeningService:
    return AccountOpeningService(
        repository=repository,
        request_ids=request_ids,
        clock=clock,
        validator=validator,
    )


@pytest.fixture
def sweeper(repository: InMemoryCustomerRepository, clock: FixedClock) -> ExpirySweeper:
    return ExpirySweeper(repository=repository, clock=clock)


@pytest.fixture
def start_details() -> CustomerDetails:
    """Details sent when a registration is started."""
    return CustomerDetails(
        name="John Doe",
        address=Address(street_name="Street 1", house_number="2", postal_code="9499 CV", city="City"),
        date_of_birth=date(1990, 5, 20),
    )


@pytest.fixture
def resume_details() -> CustomerDetails:
    """Details sent when a paused registration is resumed."""
    return CustomerDetails(
        name="John Updated",
        address=Address(street_name="Street 2", house_number="4", postal_code="1234 AB", city="Town"),
        date_of_birth=date(1985, 1, 1),
        id_document="12345678",
        account_type=AccountType.CURRENT,
        starting_balance=Decimal("100.00"),
        monthly_salary=Decimal("1000.00"),
        interested_in_other_products=True,
        email="john.doe@example.com",
    )
