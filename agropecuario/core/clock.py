"""Wall clock pinned to the service's regional timezone."""

from collections.abc import Callable
from datetime import datetime
from zoneinfo import ZoneInfo

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"

Clock = Callable[[], datetime]


def regional_clock(timezone: str) -> Clock:
    """Build a clock returning naive local datetimes in ``timezone``.

    Values are truncated to whole seconds, matching the wire format.
    """
    zone = ZoneInfo(timezone)

    def now() -> datetime:
        return datetime.now(zone).replace(tzinfo=None, microsecond=0)

    return now


def to_local(value: datetime, timezone: str) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(timezone)).replace(tzinfo=None)


def format_timestamp(value: datetime) -> str:
    """Render ``value`` as ``yyyy-MM-ddTHH:mm:ss``."""
    return value.strftime(TIMESTAMP_FORMAT)
