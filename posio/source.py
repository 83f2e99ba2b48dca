"""
Record sources and stream merging.

A source hands out one record per call:

    next() -> record   a record was read, the cursor advanced by one
    next() -> None     end of stream (not an error)
    next() raises      decode/IO failure, the source is unusable afterward

``Source`` yields ``Point`` records and ``AccuracySource`` yields ``Accuracy``
records. Every decoder in ``posio.formats`` implements one of the two, and
``CombinedSource`` is itself a ``Source`` built from one of each.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterator, Optional, Union

from posio.ordering import TimeOrder, TimeOrderCheck
from posio.point import Accuracy, Point

logger = logging.getLogger(__name__)


class _Closeable:
    """Context manager support for sources that own a file."""

    def close(self) -> None:
        """Release any resources held by this source."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class Source(_Closeable, ABC):
    """Abstract source of points."""

    @abstractmethod
    def next(self) -> Optional[Point]:
        """
        Read one point.

        Returns:
            The next point, or None at end of stream.
        """

    def __iter__(self) -> Iterator[Point]:
        while True:
            point = self.next()
            if point is None:
                return
            yield point


class AccuracySource(_Closeable, ABC):
    """Abstract source of accuracy records."""

    @abstractmethod
    def next(self) -> Optional[Accuracy]:
        """
        Read one accuracy record.

        Returns:
            The next accuracy record, or None at end of stream.
        """

    def __iter__(self) -> Iterator[Accuracy]:
        while True:
            accuracy = self.next()
            if accuracy is None:
                return
            yield accuracy


class CombinedSource(Source):
    """
    A source of points enriched with accuracy from a second stream.

    The accuracy stream is sampled independently of the point stream, so
    each point gets an accuracy interpolated between the two accuracy
    records that bracket it. Both streams are read forward only, in a single
    pass, through a two-slot window ``(prev, next)``.

    For each point:
        1. No window yet, or point before ``prev``: emit without accuracy.
        2. Slide the window forward while the point is after ``next``.
           If the accuracy stream runs out, emit without accuracy; every
           later point is emitted without accuracy too.
        3. ``prev.time <= point.time <= next.time``: attach
           ``prev.interpolate(next, point.time)``.

    The combined stream ends when the point stream ends.

    Args:
        source: Point source (owned, closed by ``close``).
        accuracy_source: Accuracy source (owned, closed by ``close``).
        time_order: Policy for non-increasing times on either stream.

    Example:
        >>> with CombinedSource(pof.Reader.from_path('mission.pof'),
        ...                     poq.Reader.from_path('mission.poq')) as source:
        ...     for point in source:
        ...         print(point.time, point.accuracy)
    """

    def __init__(
        self,
        source: Source,
        accuracy_source: AccuracySource,
        time_order: Union[TimeOrder, str] = TimeOrder.RAISE,
    ):
        self.source = source
        self.accuracy_source = accuracy_source
        self._check_point = TimeOrderCheck("point", time_order)
        self._check_accuracy = TimeOrderCheck("accuracy", time_order)
        self.prev_accuracy: Optional[Accuracy] = self._next_accuracy()
        self.next_accuracy: Optional[Accuracy] = self._next_accuracy()
        if self.next_accuracy is None:
            logger.debug("Accuracy stream has fewer than two records, no enrichment")

    def _next_accuracy(self) -> Optional[Accuracy]:
        accuracy = self.accuracy_source.next()
        if accuracy is not None:
            self._check_accuracy(accuracy.time)
        return accuracy

    @property
    def bracketing(self) -> bool:
        """Whether the window holds two accuracy records."""
        return self.prev_accuracy is not None and self.next_accuracy is not None

    def next(self) -> Optional[Point]:
        point = self.source.next()
        if point is None:
            return None
        self._check_point(point.time)

        if not self.bracketing or point.time < self.prev_accuracy.time:
            return point

        while point.time > self.next_accuracy.time:
            # shift only after the read succeeds
            accuracy = self._next_accuracy()
            self.prev_accuracy, self.next_accuracy = self.next_accuracy, accuracy
            if accuracy is None:
                logger.debug(
                    "Accuracy stream exhausted at point time %r", point.time
                )
                return point

        return point.with_accuracy(
            self.prev_accuracy.interpolate(self.next_accuracy, point.time)
        )

    def close(self) -> None:
        try:
            self.source.close()
        finally:
            self.accuracy_source.close()
