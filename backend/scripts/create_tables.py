import os
import sys

import psycopg

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)) + '/..')

from settings import settings

DDL = '''
CREATE TABLE IF NOT EXISTS customer (
    id BIGINT PRIMARY KEY,
    name TEXT NOT NULL DEFAULT '',
    active BOOLEAN NOT NULL DEFAULT TRUE
);

CREATE TABLE IF NOT EXISTS ip_blacklist (
    ip TEXT PRIMARY KEY
);

CREATE TABLE IF NOT EXISTS ua_blacklist (
    ua TEXT PRIMARY KEY
);

CREATE TABLE IF NOT EXISTS hourly_stats (
    customer_id BIGINT NOT NULL,
    hour_start BIGINT NOT NULL,
    request_count BIGINT NOT NULL DEFAULT 0 CHECK (request_count >= 0),
    invalid_count BIGINT NOT NULL DEFAULT 0 CHECK (invalid_count >= 0),
    PRIMARY KEY (customer_id, hour_start)
);
'''


def apply(db_url: str) -> None:
    with psycopg.connect(db_url, connect_timeout=settings.db_connect_timeout) as conn:
        with conn.cursor() as cur:
            cur.execute(DDL)
        conn.commit()


if __name__ == "__main__":
    print('Connecting to', settings.db_url)
    apply(settings.db_url)
    print('DDL applied')
