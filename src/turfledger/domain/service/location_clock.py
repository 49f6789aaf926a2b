"""Server-side clock for movement timestamps.

Timestamps handed out for the same location strictly increase, so
movements recorded in the same microsecond still have a total order.
"""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from typing import Callable

_TICK = timedelta(microseconds=1)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LocationClock:

    def __init__(self, now: Callable[[], datetime] = _utc_now) -> None:
        self._now = now
        self._lock = threading.Lock()
        self._last: dict[str, datetime] = {}

    def tick(self, location_id: str, after: datetime | None = None) -> datetime:
        """Return a UTC timestamp later than any previous one for the location.

        ``after`` lets the caller raise the floor, e.g. to the item's last
        persisted movement when this process has not seen it yet.
        """
        with self._lock:
            moment = self._now()
            floor = self._last.get(location_id)
            if after is not None and (floor is None or after > floor):
                floor = after
            if floor is not None and moment <= floor:
                moment = floor + _TICK
            self._last[location_id] = moment
            return moment
