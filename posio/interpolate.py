"""
Point interpolation against a lazily-read source.

The ``Interpolator`` answers "where was the platform at time t" for query
times that need not coincide with recorded samples. It reads its source only
as far forward as the queries require and keeps every point it has read, so
a query that goes back in time is answered from the buffer without touching
the source again.

Bracket search:
    The current bracket is (buffer[i-1], buffer[i]). For a query time t:
        t <  buffer[i-1].time -> move left (error if already leftmost)
        t >  buffer[i].time   -> move right, reading a new point if needed
                                 (error if the source is exhausted)
        otherwise             -> bracket found, blend the two points

For increasing query times each source record is read at most once.
"""

import logging
from typing import Iterable, List, Union

from posio.errors import OnePointError, TimeAboveMaximumError, TimeBelowMinimumError
from posio.ordering import TimeOrder, TimeOrderCheck
from posio.point import Point
from posio.source import Source

logger = logging.getLogger(__name__)


class Interpolator:
    """
    Interpolate points from a source at arbitrary times.

    Args:
        source: Point source (owned, closed by ``close``).
        time_order: Policy for non-increasing times in the source.

    Raises:
        OnePointError: If the source yields fewer than two points.

    Example:
        >>> interpolator = Interpolator(sbet.Reader.from_path('2-points.sbet'))
        >>> point = interpolator.interpolate(151631.0048)
        >>> point.latitude.to_degrees()
    """

    def __init__(
        self,
        source: Source,
        time_order: Union[TimeOrder, str] = TimeOrder.RAISE,
    ):
        self.source = source
        self._check = TimeOrderCheck("point", time_order)
        self._exhausted = False
        self.points: List[Point] = []
        for _ in range(2):
            point = source.next()
            if point is None:
                raise OnePointError(len(self.points))
            self._check(point.time)
            self.points.append(point)
        self.index = 1
        logger.debug(
            "Interpolator ready, first bracket [%r, %r]",
            self.points[0].time,
            self.points[1].time,
        )

    @property
    def start_time(self) -> float:
        """Time of the first point ever read."""
        return self.points[0].time

    @property
    def end_time(self) -> float:
        """Time of the last point read so far."""
        return self.points[-1].time

    @property
    def buffered(self) -> int:
        """Number of points read from the source."""
        return len(self.points)

    @property
    def exhausted(self) -> bool:
        """Whether the source has reported end of stream."""
        return self._exhausted

    def _read_forward(self) -> bool:
        if self._exhausted:
            return False
        point = self.source.next()
        if point is None:
            self._exhausted = True
            logger.debug("Point source exhausted after %d points", len(self.points))
            return False
        self._check(point.time)
        self.points.append(point)
        return True

    def interpolate(self, time: float) -> Point:
        """
        Interpolate a point at ``time``.

        Args:
            time: Query time in seconds.

        Returns:
            Point linearly interpolated between the two bracketing points.

        Raises:
            TimeBelowMinimumError: If time precedes the first point read.
            TimeAboveMaximumError: If time follows the last point and the
                source is exhausted.
        """
        points = self.points
        while True:
            if time < points[self.index - 1].time:
                if self.index == 1:
                    raise TimeBelowMinimumError(time, points[0].time)
                self.index -= 1
            elif time > points[self.index].time:
                if self.index < len(points) - 1 or self._read_forward():
                    self.index += 1
                else:
                    raise TimeAboveMaximumError(time, points[-1].time)
            else:
                break
        return points[self.index - 1].interpolate(points[self.index], time)

    def interpolate_many(self, times: Iterable[float]) -> List[Point]:
        """Interpolate a point at each of ``times``, in order."""
        return [self.interpolate(time) for time in times]

    def close(self) -> None:
        """Close the underlying source."""
        self.source.close()

    def __enter__(self) -> "Interpolator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
