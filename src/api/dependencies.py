"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from functools import lru_cache

from fastapi import Depends, Request
from psycopg_pool import ConnectionPool

from src.adapters.clock import ZoneClock
from src.adapters.repository.postgres import PostgresCustomerRepository
from src.adapters.request_id import RandomHexRequestIdGenerator
from src.config.settings import get_settings
from src.domain.registration import AccountOpeningService
from src.domain.validation import FieldValidator

# Module-level singleton - the generator is stateless
_request_ids = RandomHexRequestIdGenerator()


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> PostgresCustomerRepository:
    """Create repository with connection pool from app state."""
    pool = get_pool(request)
    return PostgresCustomerRepository(pool)


@lru_cache
def get_clock() -> ZoneClock:
    """Get clock in the configured time zone (singleton)."""
    return ZoneClock(get_settings().timezone)


def get_request_id_generator() -> RandomHexRequestIdGenerator:
    """Get request id generator (singleton)."""
    return _request_ids


def get_field_validator(clock: ZoneClock = Depends(get_clock)) -> FieldValidator:
    return FieldValidator(clock=clock)


def get_account_opening_service(
    request: Request,
    validator: FieldValidator = Depends(get_field_validator),
) -> AccountOpeningService:
    """
    Create account opening service with injected dependencies.

    Wires together the repository, request id generator, clock and validator.
    """
    return AccountOpeningService(
        repository=get_repository(request),
        request_ids=get_request_id_generator(),
        clock=validator.clock,
        validator=validator,
    )
