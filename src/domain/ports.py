"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from datetime import datetime
from typing import Protocol

from .customer import Customer, RequestStatus


class CustomerRepository(Protocol):
    """Port interface for registration persistence."""

    def save(self, customer: Customer) -> Customer:
        """
        Persist the whole record.

        Inserts when customer.id is None (and assigns the id),
        otherwise overwrites the stored row with the same id.

        Args:
            customer: Record to persist

        Returns:
            The persisted record
        """
        ...

    def find_by_request_id(self, request_id: str) -> Customer | None:
        """
        Look up a registration by its client-facing request id.

        Returns:
            The stored record, or None if no registration has that id
        """
        ...

    def find_by_status_and_paused_before(
        self, status: RequestStatus, timestamp: datetime
    ) -> list[Customer]:
        """
        Find registrations in a status whose paused_at is strictly before timestamp.

        Args:
            status: Status to match
            timestamp: Exclusive upper bound for paused_at

        Returns:
            Matching records (possibly empty)
        """
        ...

    def expire_paused_before(self, customer: Customer, timestamp: datetime) -> bool:
        """
        Mark a stored registration EXPIRED if it is still PAUSED with paused_at before timestamp.

        The check and the write are one atomic step, so a registration
        resumed or paused again since it was read is left untouched.
        Only the status changes; paused_at is kept.

        Args:
            customer: Record previously read from the store
            timestamp: Exclusive upper bound for paused_at

        Returns:
            True if the stored registration was expired
        """
        ...


class RequestIdGenerator(Protocol):
    """Port interface for request id generation."""

    def generate(self) -> str:
        """Return a new unique, opaque request id."""
        ...


class Clock(Protocol):
    """Port interface for the current time in the configured zone."""

    def now(self) -> datetime:
        """Return the current timezone-aware time."""
        ...
