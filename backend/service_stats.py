"""Day statistics: folds the hour buckets of one calendar day."""

from models import DaySummary
from repo_counters import CounterRepo


class StatsService:
    def __init__(self, counters: CounterRepo):
        self.counters = counters

    def get_day_statistics(self, customer_id: int, day_timestamp: int) -> DaySummary:
        """Return the buckets of the day containing `day_timestamp`, oldest first.

        A day without activity is an empty summary, not an error. Store
        failures propagate as `StoreError`.
        """

        day_start, day_end = self.counters.day_bounds(day_timestamp)
        buckets = sorted(
            self.counters.range_read(customer_id, day_start, day_end),
            key=lambda b: b.hour_start,
        )
        return DaySummary(
            customer_id=customer_id,
            hour_buckets=buckets,
            total_requests=sum(b.total for b in buckets),
        )

    def health_check(self) -> None:
        """Perform a lightweight DB ping via the repository."""

        self.counters.ping()
