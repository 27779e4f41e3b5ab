"""
Error types shared by the repositories and services.

Repositories translate `psycopg.Error` into `StoreError` so the service
layer never depends on the driver. `main.py` maps these to status codes.
"""


class StatsError(Exception):
    """Base class for errors raised by this service."""


class CustomerNotFound(StatsError):
    """The customer id has no row in the customer table."""

    def __init__(self, customer_id: int):
        super().__init__(f"customer not found: {customer_id}")
        self.customer_id = customer_id


class StoreError(StatsError):
    """Connectivity or transaction failure in a backing store."""


class InvariantViolation(StatsError):
    """A single-key update touched more than one row.

    The (customer_id, hour_start) key is supposed to be unique; seeing this
    means the table was changed outside this service. The current operation
    is aborted and the error is returned to the caller.
    """
