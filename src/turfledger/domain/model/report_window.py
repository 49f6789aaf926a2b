"""Reporting window: an inclusive range of calendar dates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from turfledger.domain.exceptions import ValidationError


def resolve_timezone(name: str) -> tzinfo:
    """Map an IANA zone name to a tzinfo; ``UTC`` never needs tz data."""
    if not name or name.strip().upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValidationError(f"Unknown timezone '{name}'") from exc


@dataclass(frozen=True)
class ReportWindow:
    """``[start, end]`` in the location's reporting timezone, both inclusive."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValidationError(
                f"Report window start {self.start} is after end {self.end}"
            )

    @staticmethod
    def trailing(days: int, today: date) -> ReportWindow:
        """The last ``days`` days up to and including ``today``."""
        if days < 0:
            raise ValidationError("Report window length cannot be negative")
        return ReportWindow(start=today - timedelta(days=days), end=today)

    def local_date(self, moment: datetime, tz: tzinfo) -> date:
        return moment.astimezone(tz).date()

    def contains(self, moment: datetime, tz: tzinfo) -> bool:
        return self.start <= self.local_date(moment, tz) <= self.end


class ReportingCalendar:
    """Resolves each location's reporting timezone and default window."""

    def __init__(
        self,
        default_timezone: str = "UTC",
        location_timezones: dict[str, str] | None = None,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._default = resolve_timezone(default_timezone)
        self._zones = {
            location: resolve_timezone(name)
            for location, name in (location_timezones or {}).items()
        }
        self._now = now or (lambda: datetime.now(timezone.utc))

    def timezone_for(self, location_id: str) -> tzinfo:
        return self._zones.get(location_id, self._default)

    def today(self, location_id: str) -> date:
        return self._now().astimezone(self.timezone_for(location_id)).date()

    def trailing_window(self, location_id: str, days: int) -> ReportWindow:
        return ReportWindow.trailing(days, self.today(location_id))

    def bounds(self, location_id: str, window: ReportWindow) -> tuple[datetime, datetime]:
        """Aware datetimes covering the first and last instant of the window."""
        tz = self.timezone_for(location_id)
        return (
            datetime.combine(window.start, time.min, tzinfo=tz),
            datetime.combine(window.end, time.max, tzinfo=tz),
        )
