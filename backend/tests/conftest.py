import threading

import pytest

from errors import CustomerNotFound, StoreError
from models import ActivityEvent, HourBucket
from timebuckets import day_bounds, hour_start


class FakeEligibility:
    """In-memory stand-in for `EligibilityRepo`."""

    def __init__(self, customers=None, ips=(), user_agents=(), broken=False):
        self.customers = {1: True} if customers is None else customers
        self.ips = set(ips)
        self.user_agents = set(user_agents)
        self.broken = broken
        self.calls = []

    def _lookup(self, name):
        self.calls.append(name)
        if self.broken:
            raise StoreError("connection refused")

    def is_ip_blacklisted(self, ip):
        self._lookup("ip")
        return ip in self.ips

    def is_user_agent_blacklisted(self, user_agent):
        self._lookup("user_agent")
        return user_agent in self.user_agents

    def is_customer_active(self, customer_id):
        self._lookup("customer")
        if customer_id not in self.customers:
            raise CustomerNotFound(customer_id)
        return self.customers[customer_id]


class FakeCounters:
    """In-memory stand-in for `CounterRepo`, keyed like `hourly_stats`."""

    def __init__(self, record_error=None):
        self.buckets = {}
        self.record_error = record_error
        self.lock = threading.Lock()

    def record_outcome(self, customer_id, timestamp, accepted):
        if self.record_error is not None:
            raise self.record_error
        key = (customer_id, hour_start(timestamp))
        with self.lock:
            valid, invalid = self.buckets.get(key, (0, 0))
            self.buckets[key] = (valid + 1, invalid) if accepted else (valid, invalid + 1)

    def range_read(self, customer_id, day_start, day_end):
        return [
            HourBucket(customer_id=cid, hour_start=h, valid_count=v, invalid_count=i)
            for (cid, h), (v, i) in self.buckets.items()
            if cid == customer_id and day_start <= h <= day_end
        ]

    def day_bounds(self, timestamp):
        return day_bounds(timestamp)

    def ping(self):
        pass

    def counts(self, customer_id, timestamp):
        return self.buckets.get((customer_id, hour_start(timestamp)), (0, 0))


@pytest.fixture
def eligibility():
    return FakeEligibility(
        customers={1: True, 2: True, 3: False},
        ips={"213.70.64.33"},
        user_agents={"Googlebot-News"},
    )


@pytest.fixture
def counters():
    return FakeCounters()


def make_event(**overrides):
    fields = dict(
        customer_id=1,
        tag_id=2,
        user_id="aaaaaaaa-bbbb-cccc-1111-222222222222",
        remote_ip="123.234.56.78",
        timestamp=1500000000,
        user_agent="Mozilla/5.0",
    )
    fields.update(overrides)
    return ActivityEvent(**fields)
