"""
Reply Deadlines
===============

replyBy is an absolute deadline in epoch milliseconds.
Peers must answer before it passes.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

DEFAULT_REPLY_MINUTES = 10

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def reply_by(minutes: Optional[float] = None, clock: Optional[Clock] = None) -> int:
    """
    Deadline `minutes` from now, as epoch milliseconds.

    Precision is whole seconds, the sub-second part is dropped.

    Example:
        fixed = lambda: datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert reply_by(10, clock=fixed) == 1704067800000
    """
    if minutes is None:
        minutes = DEFAULT_REPLY_MINUTES
    now = (clock or utc_now)()
    deadline = now + timedelta(minutes=minutes)
    return int(deadline.timestamp()) * 1000
