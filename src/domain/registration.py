"""
Account opening domain service - Registration state machine.

This module orchestrates the registration lifecycle (see customer.py for
the state diagram): start, pause, resume and lookup by request id.

Guards run before any mutation, so a refused transition leaves the
stored record untouched:
- pause is refused for SUBMITTED registrations
- resume is refused unless the registration is PAUSED
"""

import logging
from dataclasses import dataclass, replace

from .customer import Customer, CustomerDetails, RequestStatus
from .exceptions import (
    ApplicationAlreadySubmitted,
    CustomerNotFound,
    InvalidRegistration,
    RequestNotPaused,
)
from .ports import Clock, CustomerRepository, RequestIdGenerator
from .validation import FieldValidator

logger = logging.getLogger(__name__)


@dataclass
class AccountOpeningService:
    """
    Domain service for account opening registrations.

    Every transition is persisted through the repository before returning.
    """

    repository: CustomerRepository
    request_ids: RequestIdGenerator
    clock: Clock
    validator: FieldValidator

    def start(self, details: CustomerDetails) -> Customer:
        """
        Start a new registration in IN_PROGRESS.

        Args:
            details: Customer-supplied attributes

        Returns:
            The persisted registration with its new request id

        Raises:
            InvalidRegistration: If a supplied attribute breaks its constraints
        """
        logger.info("Starting account registration")
        customer = Customer.start(self.request_ids.generate(), details)
        self._check(customer)
        customer = self.repository.save(customer)
        logger.info("Created account registration %s", customer.request_id)
        return customer

    def pause(self, request_id: str) -> Customer:
        """
        Pause a registration and stamp paused_at with the current time.

        Raises:
            CustomerNotFound: If no registration has this request id
            ApplicationAlreadySubmitted: If the registration is SUBMITTED
        """
        logger.info("Pausing account registration %s", request_id)
        customer = self._find(request_id)
        if customer.status is RequestStatus.SUBMITTED:
            raise ApplicationAlreadySubmitted(request_id)

        customer.pause(self.clock.now())
        return self.repository.save(customer)

    def resume(self, request_id: str, details: CustomerDetails) -> Customer:
        """
        Resume a paused registration and submit it.

        Replaces account type, email, id document, monthly salary,
        product interest and starting balance with the given details.
        name, address and date of birth are left as they were.

        Raises:
            CustomerNotFound: If no registration has this request id
            RequestNotPaused: If the registration is not PAUSED
            InvalidRegistration: If the submitted record breaks its constraints
        """
        logger.info("Resuming account registration %s", request_id)
        customer = self._find(request_id)
        if customer.status is not RequestStatus.PAUSED:
            raise RequestNotPaused(request_id)

        submitted = replace(customer)
        submitted.resume(details)
        self._check(submitted)
        return self.repository.save(submitted)

    def get_by_request_id(self, request_id: str) -> Customer:
        """
        Fetch a registration without changing it.

        Raises:
            CustomerNotFound: If no registration has this request id
        """
        return self._find(request_id)

    def _find(self, request_id: str) -> Customer:
        customer = self.repository.find_by_request_id(request_id)
        if customer is None:
            raise CustomerNotFound(request_id)
        return customer

    def _check(self, customer: Customer) -> None:
        violations = self.validator.validate_customer(customer)
        if violations:
            raise InvalidRegistration(violations)
