"""
Database connection helper.

This module centralizes how connections are created. Right now we use
`psycopg.connect(settings.db_url)` which opens a new connection per call,
so every inbound request works on its own connection and the only shared
state is what lives in PostgreSQL.

Usage:
    from db import get_conn
    with get_conn() as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT 1;")

Repositories take the factory as a constructor argument, so switching to
a pool only changes what gets passed in.
"""

import psycopg
from settings import settings


def get_conn(db_url: str | None = None):
    """Return a new psycopg connection using `settings.db_url`.

    `connect_timeout` keeps HTTP requests from hanging indefinitely if the
    database is unreachable.
    """

    return psycopg.connect(
        db_url or settings.db_url, connect_timeout=settings.db_connect_timeout
    )
