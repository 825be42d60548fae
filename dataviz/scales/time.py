from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
import logging
import math
from typing import Any, Literal, Sequence

from dataviz.errors import ScaleDomainError
from dataviz.scales.base import DEFAULT_TICK_COUNT, Scale, clamp_unit, nice_step
from dataviz.units import Length, LengthLike


LOGGER = logging.getLogger(__name__)

IntervalUnit = Literal["second", "day", "week", "month", "year"]

_DAY = 86400.0


@dataclass(frozen=True)
class TimeInterval:
    name: str
    unit: IntervalUnit
    step: int
    approx_seconds: float

    def floor(self, wall: datetime) -> datetime:
        """Largest aligned instant <= `wall` (naive wall-clock time)."""

        if self.unit == "second":
            midnight = wall.replace(hour=0, minute=0, second=0, microsecond=0)
            elapsed = (wall - midnight).total_seconds()
            return midnight + timedelta(seconds=math.floor(elapsed / self.step) * self.step)
        if self.unit == "day":
            return wall.replace(hour=0, minute=0, second=0, microsecond=0)
        if self.unit == "week":
            midnight = wall.replace(hour=0, minute=0, second=0, microsecond=0)
            return midnight - timedelta(days=midnight.weekday())
        if self.unit == "month":
            month = (wall.month - 1) // self.step * self.step + 1
            return datetime(wall.year, month, 1)
        year = wall.year // self.step * self.step
        return datetime(max(1, year), 1, 1)

    def offset(self, wall: datetime, k: int = 1) -> datetime:
        if self.unit == "second":
            return wall + timedelta(seconds=self.step * k)
        if self.unit == "day":
            return wall + timedelta(days=self.step * k)
        if self.unit == "week":
            return wall + timedelta(weeks=self.step * k)
        if self.unit == "month":
            months = wall.year * 12 + (wall.month - 1) + self.step * k
            return wall.replace(year=months // 12, month=months % 12 + 1)
        return wall.replace(year=wall.year + self.step * k)

    def range(self, start: datetime, stop: datetime) -> list[datetime]:
        """Aligned instants inside `[start, stop]`."""

        current: datetime | None = self.floor(start)
        if current < start:
            current = self._next(current)
        out: list[datetime] = []
        while current is not None and current <= stop:
            out.append(current)
            current = self._next(current)
        return out

    def _next(self, wall: datetime) -> datetime | None:
        try:
            return self.offset(wall)
        except (OverflowError, ValueError):
            # Stepped past datetime.max.
            return None


TICK_INTERVALS: tuple[TimeInterval, ...] = (
    TimeInterval("1s", "second", 1, 1.0),
    TimeInterval("5s", "second", 5, 5.0),
    TimeInterval("15s", "second", 15, 15.0),
    TimeInterval("30s", "second", 30, 30.0),
    TimeInterval("1m", "second", 60, 60.0),
    TimeInterval("5m", "second", 300, 300.0),
    TimeInterval("15m", "second", 900, 900.0),
    TimeInterval("30m", "second", 1800, 1800.0),
    TimeInterval("1h", "second", 3600, 3600.0),
    TimeInterval("3h", "second", 10800, 10800.0),
    TimeInterval("6h", "second", 21600, 21600.0),
    TimeInterval("12h", "second", 43200, 43200.0),
    TimeInterval("1d", "day", 1, _DAY),
    TimeInterval("1w", "week", 1, 7 * _DAY),
    TimeInterval("1mo", "month", 1, 30 * _DAY),
    TimeInterval("3mo", "month", 3, 91 * _DAY),
    TimeInterval("1y", "year", 1, 365 * _DAY),
    TimeInterval("5y", "year", 5, 5 * 365 * _DAY),
    TimeInterval("10y", "year", 10, 10 * 365 * _DAY),
)

INTERVALS_BY_NAME = {interval.name: interval for interval in TICK_INTERVALS}


class TimeScale(Scale):
    """Scale over instants; positions are linear in POSIX seconds.

    Naive datetimes are read as UTC and results come back naive; aware
    domains produce instants in the tz of the domain start.
    """

    kind = "time"

    def __init__(self, domain: Sequence[datetime], range_: Sequence[LengthLike], *, clamp: bool = False) -> None:
        super().__init__(range_)
        if len(domain) != 2:
            raise ValueError("time domain must have exactly two endpoints")
        t0 = _coerce_instant(domain[0])
        t1 = _coerce_instant(domain[1])
        if (t0.tzinfo is None) != (t1.tzinfo is None):
            raise ScaleDomainError("time domain endpoints must both be naive or both be aware")
        self._t0 = t0
        self._t1 = t1
        self._s0 = _seconds(t0)
        self._s1 = _seconds(t1)
        self._clamp = clamp

    def domain(self) -> tuple[datetime, datetime]:
        return (self._t0, self._t1)

    def apply(self, value: Any) -> Length:
        s = _seconds(_coerce_instant(value))
        if self._s0 == self._s1:
            return self._out(self._r0)
        if s == self._s0:
            t = 0.0
        elif s == self._s1:
            t = 1.0
        else:
            t = (s - self._s0) / (self._s1 - self._s0)
        if self._clamp:
            t = clamp_unit(t)
        return self._out(self._lerp_range(t))

    def invert(self, position: LengthLike) -> datetime:
        t = self._range_fraction(position)
        if self._clamp:
            t = clamp_unit(t)
        if t == 0.0:
            return self._t0
        if t == 1.0:
            return self._t1
        return self._from_seconds((1.0 - t) * self._s0 + t * self._s1)

    def ticks(self, count: int = DEFAULT_TICK_COUNT) -> list[datetime]:
        if count <= 0:
            count = DEFAULT_TICK_COUNT
        lo, hi = sorted((self._wall(self._t0), self._wall(self._t1)))
        if lo == hi:
            return [self._t0]
        interval = self.select_interval(count)
        if interval is None:
            return [self._attach(w) for w in self._year_ticks(lo, hi, count)]
        return [self._attach(w) for w in interval.range(lo, hi)]

    def select_interval(self, count: int = DEFAULT_TICK_COUNT) -> TimeInterval | None:
        """Finest interval with at most `count` aligned instants, or None when only stepped years fit."""

        if count <= 0:
            count = DEFAULT_TICK_COUNT
        lo, hi = sorted((self._wall(self._t0), self._wall(self._t1)))
        span = (hi - lo).total_seconds()
        for interval in TICK_INTERVALS:
            if span / interval.approx_seconds > count + 2:
                continue
            if len(interval.range(lo, hi)) <= count:
                return interval
        return None

    def nice(self, interval: str | TimeInterval) -> "TimeScale":
        if isinstance(interval, str):
            try:
                interval = INTERVALS_BY_NAME[interval]
            except KeyError:
                raise ValueError(f"unknown time interval: {interval}") from None
        reverse = self._t0 > self._t1
        lo, hi = sorted((self._wall(self._t0), self._wall(self._t1)))
        lo = interval.floor(lo)
        floored_hi = interval.floor(hi)
        hi = floored_hi if floored_hi == hi else interval.offset(floored_hi)
        domain = (self._attach(hi), self._attach(lo)) if reverse else (self._attach(lo), self._attach(hi))
        return TimeScale(domain, self._range, clamp=self._clamp)

    def with_clamp(self, enabled: bool = True) -> "TimeScale":
        return TimeScale((self._t0, self._t1), self._range, clamp=enabled)

    def _year_ticks(self, lo: datetime, hi: datetime, count: int) -> list[datetime]:
        step = max(10, int(round(nice_step(hi.year - lo.year, count))))
        LOGGER.debug("time span %s..%s too wide for interval ladder; stepping %d years", lo, hi, step)
        interval = TimeInterval(f"{step}y", "year", step, step * 365 * _DAY)
        return interval.range(lo, hi)

    def _wall(self, instant: datetime) -> datetime:
        if instant.tzinfo is None:
            return instant
        return instant.astimezone(self._t0.tzinfo).replace(tzinfo=None)

    def _attach(self, wall: datetime) -> datetime:
        if self._t0.tzinfo is None:
            return wall
        return wall.replace(tzinfo=self._t0.tzinfo)

    def _from_seconds(self, seconds: float) -> datetime:
        instant = datetime.fromtimestamp(seconds, tz=timezone.utc)
        if self._t0.tzinfo is None:
            return instant.replace(tzinfo=None)
        return instant.astimezone(self._t0.tzinfo)


def _coerce_instant(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise ScaleDomainError(f"expected a datetime, got {type(value).__name__}")


def _seconds(instant: datetime) -> float:
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.timestamp()


def time_scale(domain: Sequence[datetime], range_: Sequence[LengthLike], *, clamp: bool = False) -> TimeScale:
    return TimeScale(domain, range_, clamp=clamp)
