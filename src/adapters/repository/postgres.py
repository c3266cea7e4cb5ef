"""
PostgreSQL repository adapter - Implements CustomerRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

The address is stored inline on the customers row. Whole records are
read and written; the request_id column carries a UNIQUE constraint.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from src.domain.customer import AccountType, Address, Customer, RequestStatus

logger = logging.getLogger(__name__)

_COLUMNS = """
    id, request_id, name, street_name, house_number, postal_code, city,
    date_of_birth, id_document, account_type, starting_balance, monthly_salary,
    interested_in_other_products, email, status, paused_at
"""


class PostgresCustomerRepository:
    """
    Implements CustomerRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def save(self, customer: Customer) -> Customer:
        """
        Insert a new registration or overwrite an existing one.

        New records (id is None) get their id from the database.

        Args:
            customer: Record to persist

        Returns:
            The same record, with id assigned on insert
        """
        insert_sql = """
            INSERT INTO customers (
                request_id, name, street_name, house_number, postal_code, city,
                date_of_birth, id_document, account_type, starting_balance, monthly_salary,
                interested_in_other_products, email, status, paused_at
            )
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING id
        """

        # request_id is immutable and never part of the update
        update_sql = """
            UPDATE customers
            SET name = %s, street_name = %s, house_number = %s, postal_code = %s, city = %s,
                date_of_birth = %s, id_document = %s, account_type = %s,
                starting_balance = %s, monthly_salary = %s,
                interested_in_other_products = %s, email = %s, status = %s, paused_at = %s
            WHERE id = %s
        """

        values = _to_row(customer)
        with self._pool.connection() as conn, conn.cursor() as cursor:
            if customer.id is None:
                cursor.execute(insert_sql, (customer.request_id, *values))
                row = cursor.fetchone()
                customer.id = row[0]
            else:
                cursor.execute(update_sql, (*values, customer.id))
            conn.commit()
        return customer

    def find_by_request_id(self, request_id: str) -> Customer | None:
        """Fetch a registration by request id, or None."""
        sql = f"SELECT {_COLUMNS} FROM customers WHERE request_id = %s"

        with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
            cursor.execute(sql, (request_id,))
            row = cursor.fetchone()

        return _from_row(row) if row is not None else None

    def find_by_status_and_paused_before(
        self, status: RequestStatus, timestamp: datetime
    ) -> list[Customer]:
        """Fetch registrations in status whose paused_at < timestamp."""
        sql = f"""
            SELECT {_COLUMNS} FROM customers
            WHERE status = %s AND paused_at < %s
            ORDER BY id
        """

        with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
            cursor.execute(sql, (status.value, timestamp))
            rows = cursor.fetchall()

        return [_from_row(row) for row in rows]

    def expire_paused_before(self, customer: Customer, timestamp: datetime) -> bool:
        """
        Expire the row only while it is still PAUSED with paused_at < timestamp.

        The condition is evaluated by the UPDATE itself, so a concurrent
        resume that committed first makes this a no-op.

        Returns:
            True if a row was expired
        """
        sql = """
            UPDATE customers
            SET status = %s
            WHERE id = %s AND status = %s AND paused_at < %s
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(
                sql,
                (RequestStatus.EXPIRED.value, customer.id, RequestStatus.PAUSED.value, timestamp),
            )
            changed = cursor.rowcount == 1
            conn.commit()
        return changed


def _to_row(customer: Customer) -> tuple[Any, ...]:
    """Column values in the order shared by the insert and update statements."""
    address = customer.address
    return (
        customer.name,
        address.street_name if address else None,
        address.house_number if address else None,
        address.postal_code if address else None,
        address.city if address else None,
        customer.date_of_birth,
        customer.id_document,
        customer.account_type.value if customer.account_type else None,
        customer.starting_balance,
        customer.monthly_salary,
        customer.interested_in_other_products,
        customer.email,
        customer.status.value,
        customer.paused_at,
    )


def _from_row(row: dict[str, Any]) -> Customer:
    address = None
    if row["street_name"] is not None:
        address = Address(
            street_name=row["street_name"],
            house_number=row["house_number"],
            postal_code=row["postal_code"],
            city=row["city"],
        )
    account_type = row["account_type"]
    return Customer(
        id=row["id"],
        request_id=row["request_id"],
        status=RequestStatus(row["status"]),
        name=row["name"],
        address=address,
        date_of_birth=row["date_of_birth"],
        id_document=row["id_document"],
        account_type=AccountType(account_type) if account_type is not None else None,
        starting_balance=row["starting_balance"],
        monthly_salary=row["monthly_salary"],
        interested_in_other_products=row["interested_in_other_products"],
        email=row["email"],
        paused_at=row["paused_at"],
    )


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
