# dashboard/scales.py — axis scales for the trends chart
# What it does:
# - TimeScale: calendar instants -> horizontal pixels
# - LinearScale: values -> vertical pixels, with d3-style "nice" rounding
# - build_scales(): temporal domain from the first series (or a year override),
#   value domain [0, max over every point]

from __future__ import annotations
import math
from dataclasses import dataclass
from datetime import datetime

from dashboard.errors import EmptySelection, InvalidYearSelection

# Chart body inside the 800x450 frame (margins 20/30/40/40)
CHART_WIDTH = 800 - 40 - 30
CHART_HEIGHT = 450 - 20 - 40

# Thresholds between 1/2/5/10 step multipliers
_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def _tick_increment(start: float, stop: float, count: int) -> float:
    """
    Step between ticks as a power of ten times 1, 2 or 5.
    Negative results mean "divide by" (used for steps below 1).
    """
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
    if power >= 0:
        return factor * 10 ** power
    return -(10 ** -power) / factor


def _interpolate(t: float, r0: float, r1: float) -> float:
    return r0 + t * (r1 - r0)


@dataclass(frozen=True)
class LinearScale:
    domain: tuple[float, float]
    range: tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        span = d1 - d0
        t = (value - d0) / span if span else 0.5
        return _interpolate(t, *self.range)

    def nice(self, count: int = 10) -> "LinearScale":
        """Extend the domain outward to round tick multiples."""
        start, stop = self.domain
        if start == stop:
            return LinearScale((start, start + 1), self.range)
        prestep = None
        for _ in range(10):
            step = _tick_increment(start, stop, count)
            if step == prestep:
                break
            if step > 0:
                start = math.floor(start / step) * step
                stop = math.ceil(stop / step) * step
            else:
                start = math.ceil(start * step) / step
                stop = math.floor(stop * step) / step
            prestep = step
        return LinearScale((start, stop), self.range)

    def ticks(self, count: int = 10) -> list[float]:
        start, stop = self.domain
        if start == stop:
            return [start]
        step = _tick_increment(start, stop, count)
        if step > 0:
            lo, hi = math.ceil(start / step), math.floor(stop / step)
            return [i * step for i in range(lo, hi + 1)]
        inc = -step
        lo, hi = math.ceil(start * inc), math.floor(stop * inc)
        return [i / inc for i in range(lo, hi + 1)]


@dataclass(frozen=True)
class TimeScale:
    domain: tuple[datetime, datetime]
    range: tuple[float, float]

    def __call__(self, when: datetime) -> float:
        d0, d1 = self.domain
        span = (d1 - d0).total_seconds()
        t = (when - d0).total_seconds() / span if span else 0.5
        return _interpolate(t, *self.range)

    def ticks(self) -> list[datetime]:
        """January 1st of every year inside the domain."""
        d0, d1 = self.domain
        first = d0.year if d0 == datetime(d0.year, 1, 1) else d0.year + 1
        return [datetime(y, 1, 1) for y in range(first, d1.year + 1)]


@dataclass(frozen=True)
class ScalePair:
    temporal: TimeScale
    value: LinearScale


def year_override(token: str) -> tuple[datetime, datetime]:
    """
    One-year temporal domain [Jan 1 of year, Jan 1 of year+1].
    Raises InvalidYearSelection unless the token is exactly four digits.
    """
    token = (token or "").strip()
    if len(token) != 4 or not token.isdigit():
        raise InvalidYearSelection(f"invalid year selected: {token!r}")
    try:
        start = datetime.strptime(token, "%Y")
        end = datetime.strptime(str(int(token) + 1), "%Y")
    except ValueError as exc:
        raise InvalidYearSelection(f"invalid year selected: {token!r}") from exc
    return start, end


def build_scales(series, override=None, width=CHART_WIDTH, height=CHART_HEIGHT) -> ScalePair:
    """
    Temporal domain: override if given, else [min, max] year of the FIRST series
    (all series share one year set). Value domain: [0, max value], niced.
    """
    if override is not None:
        domain = tuple(override)
    else:
        if not series or not series[0].values:
            raise EmptySelection("no series points to derive a temporal domain from")
        years = series[0].years()
        domain = (min(years), max(years))
    temporal = TimeScale(domain=domain, range=(0, width))

    top = max((p.value for s in series for p in s.values), default=0.0)
    top = max(top, 0.0)
    value = LinearScale(domain=(0, top), range=(height, 0)).nice()
    return ScalePair(temporal=temporal, value=value)
