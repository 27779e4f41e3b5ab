import pytest

from conftest import FakeCounters
from errors import StoreError
from service_stats import StatsService
from timebuckets import day_bounds

DAY = 1500000000


def test_day_total_and_bucket_order(counters):
    begin, _ = day_bounds(DAY)
    late, early = begin + 5 * 3600, begin + 3600
    for _ in range(3):
        counters.record_outcome(7, late + 10, True)
    counters.record_outcome(7, late + 20, False)
    counters.record_outcome(7, early, False)
    counters.record_outcome(7, early + 3599, False)

    summary = StatsService(counters).get_day_statistics(7, DAY)

    assert summary.total_requests == 6
    assert [b.hour_start for b in summary.hour_buckets] == [early, late]
    assert [(b.valid_count, b.invalid_count) for b in summary.hour_buckets] == [(0, 2), (3, 1)]


def test_empty_day_is_zero(counters):
    summary = StatsService(counters).get_day_statistics(7, DAY)
    assert summary.hour_buckets == []
    assert summary.total_requests == 0


def test_other_days_and_customers_are_excluded(counters):
    begin, end = day_bounds(DAY)
    counters.record_outcome(7, begin, True)
    counters.record_outcome(7, end, True)
    counters.record_outcome(7, begin - 1, True)
    counters.record_outcome(7, end + 1, True)
    counters.record_outcome(8, begin, True)

    summary = StatsService(counters).get_day_statistics(7, DAY)
    assert summary.total_requests == 2


def test_store_error_propagates():
    class Broken(FakeCounters):
        def range_read(self, customer_id, day_start, day_end):
            raise StoreError("timeout")

    with pytest.raises(StoreError):
        StatsService(Broken()).get_day_statistics(7, DAY)
