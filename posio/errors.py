"""
Exceptions raised by posio.

Underlying read failures are not wrapped: an ``OSError`` raised by a file
object reaches the caller unchanged. Everything else derives from
``PosError`` and, where it describes a bad value, also from ``ValueError``
so that generic handlers keep working.
"""

from typing import Optional


class PosError(Exception):
    """Base class for all posio errors."""


class ParseNumericError(PosError, ValueError):
    """Malformed numeric text in an ASCII record."""

    def __init__(self, text: str, line_number: Optional[int] = None, reason: str = ""):
        self.text = text
        self.line_number = line_number
        where = f" on line {line_number}" if line_number is not None else ""
        detail = f": {reason}" if reason else ""
        super().__init__(f"Cannot parse {text!r}{where}{detail}")


class InvalidEnumCodeError(PosError, ValueError):
    """Out-of-range discriminant for a coded header field."""

    def __init__(self, name: str, code: int):
        self.name = name
        self.code = code
        super().__init__(f"Invalid {name} code: {code}")


class TruncatedRecordError(PosError, EOFError):
    """The stream ended in the middle of a record or header."""

    def __init__(self, expected: int, received: int, what: str = "record"):
        self.expected = expected
        self.received = received
        super().__init__(
            f"Truncated {what}: expected {expected} bytes, got {received}"
        )


class OnePointError(PosError, ValueError):
    """Fewer than two points were available to build an interpolator."""

    def __init__(self, count: int = 1):
        self.count = count
        super().__init__(
            f"Interpolation needs at least two points, source yielded {count}"
        )


class TimeBelowMinimumError(PosError, ValueError):
    """Query time precedes the first record ever read."""

    def __init__(self, time: float, minimum: float):
        self.time = time
        self.minimum = minimum
        super().__init__(
            f"Time {time!r} is below the first available time {minimum!r}"
        )


class TimeAboveMaximumError(PosError, ValueError):
    """Query time exceeds the last record of an exhausted source."""

    def __init__(self, time: float, maximum: float):
        self.time = time
        self.maximum = maximum
        super().__init__(
            f"Time {time!r} is above the last available time {maximum!r}"
        )


class NonMonotonicTimeError(PosError, ValueError):
    """A record's time is not strictly greater than its predecessor's."""

    def __init__(self, stream: str, previous: float, current: float):
        self.stream = stream
        self.previous = previous
        self.current = current
        super().__init__(
            f"Non-monotonic time in {stream} stream: {current!r} follows {previous!r}"
        )
