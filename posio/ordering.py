"""
Time-order policy for record streams.

Interpolation assumes every stream is strictly increasing in time. A
duplicated timestamp makes a zero-length bracket (factor = inf/nan) and an
out-of-order one sends the bracket search back and forth. Neither can be
repaired after the fact, so each stream is checked as records are taken from
it, and the configured policy decides what happens on a violation:

    raise  -> NonMonotonicTimeError (default)
    warn   -> UserWarning, the record is used as-is
    ignore -> no check
"""

import warnings
from enum import Enum
from typing import Optional, Union

from posio.errors import NonMonotonicTimeError


class TimeOrder(Enum):
    """Policy applied when a record is not strictly later than its predecessor."""

    RAISE = "raise"
    WARN = "warn"
    IGNORE = "ignore"

    @classmethod
    def coerce(cls, value: Union["TimeOrder", str]) -> "TimeOrder":
        """Accept either a TimeOrder or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(
                f"time_order must be one of {choices}, got {value!r}"
            ) from None


class TimeOrderCheck:
    """
    Track the last time seen on one stream and apply a TimeOrder policy.

    Args:
        stream: Stream name used in messages ('point', 'accuracy').
        policy: TimeOrder or its string value.
    """

    def __init__(self, stream: str, policy: Union[TimeOrder, str] = TimeOrder.RAISE):
        self.stream = stream
        self.policy = TimeOrder.coerce(policy)
        self.last_time: Optional[float] = None

    def __call__(self, time: float) -> None:
        if self.policy is TimeOrder.IGNORE:
            return
        previous = self.last_time
        if previous is not None and time <= previous:
            # a rejected record never becomes the reference time
            if self.policy is TimeOrder.RAISE:
                raise NonMonotonicTimeError(self.stream, previous, time)
            self._warn(previous, time)
        self.last_time = time

    def _warn(self, previous: float, time: float) -> None:
        warnings.warn(
            f"Non-monotonic time in {self.stream} stream: "
            f"{time!r} follows {previous!r}",
            UserWarning,
            stacklevel=4,
        )
