"""
Fixed pause between retry attempts.

A Duration is a non-negative magnitude paired with a TimeUnit. The retry
engine asks it to block the calling thread before every retry.
"""

import math
import threading
import time
from dataclasses import dataclass
from enum import Enum

from retryer.exceptions import InvalidArgument


class TimeUnit(str, Enum):
    """Time units accepted by the retry policy."""

    NANOSECONDS = "nanoseconds"
    MICROSECONDS = "microseconds"
    MILLISECONDS = "milliseconds"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"

    @property
    def seconds(self) -> float:
        """Length of one unit in seconds."""
        return _SECONDS_PER_UNIT[self]

    @classmethod
    def parse(cls, unit: "TimeUnit | str | None") -> "TimeUnit":
        """
        Coerce a unit argument to a TimeUnit.

        Raises:
            InvalidArgument: If unit is None or not a known unit name
        """
        if unit is None:
            raise InvalidArgument("unit must not be None", argument="unit")
        if isinstance(unit, cls):
            return unit
        try:
            return cls(str(unit).lower())
        except ValueError:
            raise InvalidArgument(f"unknown time unit '{unit}'", argument="unit") from None


_SECONDS_PER_UNIT = {
    TimeUnit.NANOSECONDS: 1e-9,
    TimeUnit.MICROSECONDS: 1e-6,
    TimeUnit.MILLISECONDS: 1e-3,
    TimeUnit.SECONDS: 1.0,
    TimeUnit.MINUTES: 60.0,
    TimeUnit.HOURS: 3600.0,
    TimeUnit.DAYS: 86400.0,
}


@dataclass(frozen=True)
class Duration:
    """
    Immutable pause length.

    Attributes:
        magnitude: Non-negative amount of `unit`
        unit: Time unit of the magnitude
    """

    magnitude: float
    unit: TimeUnit = TimeUnit.SECONDS

    def __post_init__(self) -> None:
        """Validate duration invariants."""
        if isinstance(self.magnitude, bool) or not isinstance(self.magnitude, (int, float)):
            raise InvalidArgument(
                f"magnitude must be a number, got {type(self.magnitude).__name__}",
                argument="magnitude",
            )
        if isinstance(self.magnitude, float) and not math.isfinite(self.magnitude):
            raise InvalidArgument(f"magnitude '{self.magnitude}' must be finite", argument="magnitude")
        if self.magnitude < 0:
            raise InvalidArgument(f"magnitude '{self.magnitude}' must be >= 0", argument="magnitude")
        object.__setattr__(self, "unit", TimeUnit.parse(self.unit))
        if self.magnitude > threading.TIMEOUT_MAX / self.unit.seconds:
            raise InvalidArgument(f"duration '{self}' exceeds the longest supported pause", argument="magnitude")

    @classmethod
    def zero(cls) -> "Duration":
        return cls(0, TimeUnit.SECONDS)

    @property
    def seconds(self) -> float:
        return self.magnitude * self.unit.seconds

    def sleep(self) -> None:
        """Block the calling thread for this duration (no-op when zero)."""
        if self.magnitude > 0:
            time.sleep(self.seconds)

    def __str__(self) -> str:
        return f"{self.magnitude} {self.unit.value}"
