"""
Repository: SQL operations for `hourly_stats`.

This file contains only DB interaction code. Each row holds the valid and
invalid request counts of one customer for one hour; the primary key
(customer_id, hour_start) guarantees at most one row per bucket.

Important notes:
- `record_outcome` is a locking read-modify-write inside one transaction.
  Concurrent calls for the same bucket queue on the row lock; different
  buckets never touch each other's rows.
- The very first event of a bucket has no row to lock. The insert uses
  `ON CONFLICT DO NOTHING`, and when a concurrent transaction created the
  row first we lock that row and increment it instead.
- Driver errors surface as `StoreError`. Nothing is retried here.
"""

from typing import Callable, List

import psycopg

from db import get_conn
from errors import InvariantViolation, StoreError
from models import HourBucket
from timebuckets import day_bounds, hour_start

SELECT_BUCKET_FOR_UPDATE = (
    "SELECT request_count, invalid_count FROM hourly_stats "
    "WHERE customer_id = %s AND hour_start = %s FOR UPDATE"
)

INSERT_BUCKET = (
    "INSERT INTO hourly_stats (customer_id, hour_start, request_count, invalid_count) "
    "VALUES (%s, %s, %s, %s) ON CONFLICT (customer_id, hour_start) DO NOTHING"
)

UPDATE_BUCKET = (
    "UPDATE hourly_stats SET request_count = %s, invalid_count = %s "
    "WHERE customer_id = %s AND hour_start = %s"
)


class CounterRepo:
    """DB access only. No business logic here.

    Responsibilities:
    - Increment-or-create one hour bucket atomically
    - Read back the buckets that fall inside a time range
    - Keep transaction/commit boundaries local and explicit
    """

    def __init__(self, connect: Callable[[], psycopg.Connection] = get_conn):
        self.connect = connect

    def record_outcome(self, customer_id: int, timestamp: int, accepted: bool) -> None:
        """Count one event in the bucket derived from its own timestamp.

        Raises `StoreError` on any driver failure and `InvariantViolation`
        if the update does not hit exactly one row. The transaction is
        rolled back in both cases, so nothing is half-written.
        """

        bucket = hour_start(timestamp)
        valid, invalid = (1, 0) if accepted else (0, 1)

        try:
            with self.connect() as conn:
                with conn.transaction():
                    with conn.cursor() as cur:
                        cur.execute(SELECT_BUCKET_FOR_UPDATE, (customer_id, bucket))
                        row = cur.fetchone()

                        if row is None:
                            cur.execute(INSERT_BUCKET, (customer_id, bucket, valid, invalid))
                            if cur.rowcount == 1:
                                return
                            # lost the creation race; the row is committed now
                            cur.execute(SELECT_BUCKET_FOR_UPDATE, (customer_id, bucket))
                            row = cur.fetchone()
                            if row is None:
                                raise StoreError(
                                    f"bucket {customer_id}/{bucket} vanished during insert"
                                )

                        cur.execute(
                            UPDATE_BUCKET,
                            (row[0] + valid, row[1] + invalid, customer_id, bucket),
                        )
                        if cur.rowcount != 1:
                            raise InvariantViolation(
                                f"update of bucket {customer_id}/{bucket} "
                                f"affected {cur.rowcount} rows"
                            )
        except psycopg.Error as e:
            raise StoreError(f"recording outcome failed: {e}") from e

    def range_read(self, customer_id: int, day_start: int, day_end: int) -> List[HourBucket]:
        """Fetch all buckets with `day_start <= hour_start <= day_end`.

        No ordering is applied; callers sort if they need to.
        """

        try:
            with self.connect() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        "SELECT request_count, invalid_count, hour_start FROM hourly_stats "
                        "WHERE customer_id = %s AND hour_start >= %s AND hour_start <= %s",
                        (customer_id, day_start, day_end),
                    )
                    return [
                        HourBucket(
                            customer_id=customer_id,
                            hour_start=r[2],
                            valid_count=r[0],
                            invalid_count=r[1],
                        )
                        for r in cur.fetchall()
                    ]
        except psycopg.Error as e:
            raise StoreError(f"reading buckets failed: {e}") from e

    def day_bounds(self, timestamp: int) -> tuple[int, int]:
        return day_bounds(timestamp)

    def ping(self) -> None:
        """Lightweight DB health check. Raises `StoreError` on error."""

        try:
            with self.connect() as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT 1;")
        except psycopg.Error as e:
            raise StoreError(f"database unreachable: {e}") from e
