"""
Shared fixtures for integration tests.

Database-backed integration tests run against the PostgreSQL database
configured in settings and are skipped when it cannot be reached.
"""

from collections.abc import Generator

import psycopg
import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresCustomerRepository, run_migrations
from src.config.settings import get_settings

# Module-level marker for all integration tests
pytestmark = pytest.mark.integration


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool for integration tests, running migrations once."""
    settings = get_settings()
    try:
        with psycopg.connect(settings.database_url, connect_timeout=2):
            pass
    except psycopg.OperationalError:
        pytest.skip("PostgreSQL is not reachable")

    pool = ConnectionPool(conninfo=settings.database_url, min_size=1, max_size=10, open=True)
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def pg_repository(pool: ConnectionPool, clean_database: None) -> PostgresCustomerRepository:
    """Create repository instance for each test."""
    return PostgresCustomerRepository(pool)


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Clean customers table before each database test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM customers")
        conn.commit()
    yield
