"""
Pydantic models used across the backend.

`ActivityEvent` is the input shape of `POST /customer/stats` and flows
unchanged through the validator and the orchestrator. Bucket and summary
models are what the counter repository and the day aggregator hand back;
the `*Out` models are the JSON shape of the day statistics route.

Guidelines:
- JSON keys follow the public wire format (`customerID`, ...); Python code
    uses the snake_case attribute names.
- Missing body fields default to zero/empty so they reach the structural
    check instead of being bounced by FastAPI.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List

# One day inside 0001-01-01 .. 9999-12-31 UTC, so every zone offset
# still lands on a representable local date.
MIN_TIMESTAMP = -62135510400
MAX_TIMESTAMP = 253402214399

# hourly_stats.customer_id is BIGINT
MAX_CUSTOMER_ID = 2**63 - 1


class ActivityEvent(BaseModel):
        """One inbound activity record.

        Fields:
        - `customer_id`, `tag_id`: positive integers.
        - `user_id`: opaque identifier of the end user.
        - `remote_ip`: client address as sent by the caller.
        - `timestamp`: epoch seconds; decides the hour bucket.
        - `user_agent`: never read from the body, copied from the header.
        """

        model_config = ConfigDict(frozen=True, populate_by_name=True)

        customer_id: int = Field(0, alias="customerID", ge=-MAX_CUSTOMER_ID, le=MAX_CUSTOMER_ID)
        tag_id: int = Field(0, alias="tagID")
        user_id: str = Field("", alias="userID")
        remote_ip: str = Field("", alias="remoteIP")
        timestamp: int = Field(0, ge=MIN_TIMESTAMP, le=MAX_TIMESTAMP)
        user_agent: str = Field("", exclude=True)


class HourBucket(BaseModel):
        model_config = ConfigDict(frozen=True)

        customer_id: int
        hour_start: int
        valid_count: int = 0
        invalid_count: int = 0

        @property
        def total(self) -> int:
                return self.valid_count + self.invalid_count


class DaySummary(BaseModel):
        customer_id: int
        hour_buckets: List[HourBucket] = Field(default_factory=list)
        total_requests: int = 0


class HourStatisticsOut(BaseModel):
        request_count: int
        invalid_count: int
        time: int


class DayStatisticsOut(BaseModel):
        customer_hour_statistics: List[HourStatisticsOut]
        total_requests_per_day: int

        @classmethod
        def from_summary(cls, summary: DaySummary) -> "DayStatisticsOut":
                return cls(
                        customer_hour_statistics=[
                                HourStatisticsOut(
                                        request_count=b.valid_count,
                                        invalid_count=b.invalid_count,
                                        time=b.hour_start,
                                )
                                for b in summary.hour_buckets
                        ],
                        total_requests_per_day=summary.total_requests,
                )
