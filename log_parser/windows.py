"""
Window resolution for the threshold detector.

A window is the half-open interval ``[start, start + 1 unit)``. Units are
plain durations; no calendar or daylight-saving adjustment is applied.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from .exceptions import UnsupportedDurationError


class Duration(Enum):
    """Window granularity, keyed by its command line token."""

    HOURLY = ('hourly', 'HOUR', timedelta(hours=1))
    DAILY = ('daily', 'DAY', timedelta(days=1))

    def __init__(self, token, unit, delta):
        self.token = token
        self.unit = unit
        self.delta = delta

    @classmethod
    def from_token(cls, token):
        for duration in cls:
            if duration.token == token:
                return duration
        supported = ', '.join(duration.token for duration in cls)
        raise UnsupportedDurationError(
            f"Unsupported duration {token!r}, expected one of: {supported}",
            details={'duration': token},
        )


@dataclass(frozen=True)
class WindowSpec:
    start: datetime
    end: datetime
    duration: Duration

    def __post_init__(self):
        if self.end <= self.start:
            raise ValueError(f"Window end {self.end} must be after start {self.start}")

    def __contains__(self, timestamp):
        return self.start <= timestamp < self.end

    @property
    def unit(self):
        return self.duration.unit


class WindowResolver:
    """Computes window bounds from a start timestamp and a duration unit"""

    def resolve(self, start, unit):
        if isinstance(unit, Duration):
            duration = unit
        elif isinstance(unit, str):
            duration = Duration.from_token(unit)
        else:
            raise UnsupportedDurationError(
                f"Unsupported duration {unit!r}",
                details={'duration': repr(unit)},
            )
        return WindowSpec(start=start, end=start + duration.delta, duration=duration)
