#!/usr/bin/env python3
"""
Load demo rows into the reference tables.

Usage:
    python scripts/seed_reference.py

Prerequisites:
    - create_tables.py already applied

Customers 1 and 2 are active, 3 is inactive. The blacklists hold a few
crawler user agents and addresses so every rejection path can be hit
over HTTP.
"""

import os
import sys

import psycopg

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)) + '/..')

from repo_eligibility import normalize_ip
from settings import settings

CUSTOMERS = [
    (1, "Big News Media Corp", True),
    (2, "Online Mega Store", True),
    (3, "Nachoroo Delivery", False),
]

BLACKLISTED_USER_AGENTS = ["A6-Indexer", "Googlebot-News", "Googlebot"]

BLACKLISTED_IPS = ["0.0.0.0", "213.70.64.33"]


def seed(conn) -> None:
    with conn.cursor() as cur:
        cur.executemany(
            "INSERT INTO customer (id, name, active) VALUES (%s, %s, %s) "
            "ON CONFLICT (id) DO UPDATE SET name = EXCLUDED.name, active = EXCLUDED.active",
            CUSTOMERS,
        )
        cur.executemany(
            "INSERT INTO ua_blacklist (ua) VALUES (%s) ON CONFLICT DO NOTHING",
            [(ua,) for ua in BLACKLISTED_USER_AGENTS],
        )
        cur.executemany(
            "INSERT INTO ip_blacklist (ip) VALUES (%s) ON CONFLICT DO NOTHING",
            [(normalize_ip(ip),) for ip in BLACKLISTED_IPS],
        )
    conn.commit()


if __name__ == "__main__":
    with psycopg.connect(settings.db_url, connect_timeout=settings.db_connect_timeout) as conn:
        seed(conn)
    print(f"Seeded {len(CUSTOMERS)} customers, "
          f"{len(BLACKLISTED_USER_AGENTS)} user agents, {len(BLACKLISTED_IPS)} ips")
