"""Hour and day boundaries in the configured reference timezone."""

from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo

from settings import settings


def reference_zone() -> tzinfo:
    return ZoneInfo(settings.stats_timezone)


def hour_start(timestamp: int, tz: tzinfo | None = None) -> int:
    """Truncate an epoch timestamp to the start of its hour."""

    t = datetime.fromtimestamp(timestamp, tz or reference_zone())
    return int(t.replace(minute=0, second=0, microsecond=0).timestamp())


def day_bounds(timestamp: int, tz: tzinfo | None = None) -> tuple[int, int]:
    """Return epoch seconds of 00:00:00 and 23:59:59 of the timestamp's day.

    Both ends are inclusive, matching `CounterRepo.range_read`.
    """

    zone = tz or reference_zone()
    t = datetime.fromtimestamp(timestamp, zone)
    begin = datetime(t.year, t.month, t.day, 0, 0, 0, tzinfo=zone)
    end = datetime(t.year, t.month, t.day, 23, 59, 59, tzinfo=zone)
    return int(begin.timestamp()), int(end.timestamp())
