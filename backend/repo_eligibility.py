"""
Repository: read-only lookups against the reference tables.

`ip_blacklist`, `ua_blacklist` and `customer` are owned by whoever curates
them; this service only reads. `EligibilityStore` is the contract the
validator depends on, `EligibilityRepo` answers it from PostgreSQL.
"""

import ipaddress
from typing import Callable, Protocol

import psycopg

from db import get_conn
from errors import CustomerNotFound, StoreError


class EligibilityStore(Protocol):
    def is_ip_blacklisted(self, ip: str) -> bool: ...

    def is_user_agent_blacklisted(self, user_agent: str) -> bool: ...

    def is_customer_active(self, customer_id: int) -> bool:
        """Raises `CustomerNotFound` for an unknown id."""
        ...


def normalize_ip(raw: str) -> str:
    """Canonical text form of an address, or the input if it is not one."""

    try:
        return ipaddress.ip_address(raw.strip()).compressed
    except ValueError:
        return raw.strip()


class EligibilityRepo:
    """DB access only. A missing row means "not listed", except for
    customers, where it raises `CustomerNotFound`."""

    def __init__(self, connect: Callable[[], psycopg.Connection] = get_conn):
        self.connect = connect

    def _fetch_one(self, query: str, params: tuple):
        try:
            with self.connect() as conn:
                with conn.cursor() as cur:
                    cur.execute(query, params)
                    return cur.fetchone()
        except psycopg.Error as e:
            raise StoreError(f"eligibility lookup failed: {e}") from e

    def is_ip_blacklisted(self, ip: str) -> bool:
        row = self._fetch_one(
            "SELECT 1 FROM ip_blacklist WHERE ip = %s", (normalize_ip(ip),)
        )
        return row is not None

    def is_user_agent_blacklisted(self, user_agent: str) -> bool:
        row = self._fetch_one("SELECT 1 FROM ua_blacklist WHERE ua = %s", (user_agent,))
        return row is not None

    def is_customer_active(self, customer_id: int) -> bool:
        row = self._fetch_one("SELECT active FROM customer WHERE id = %s", (customer_id,))
        if row is None:
            raise CustomerNotFound(customer_id)
        return bool(row[0])
