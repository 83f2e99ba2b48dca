"""Unit tests for posio.interpolate.

Tests the Interpolator bracket search: forward and backward excursions,
range errors, source read counts and the time-order policy.
"""

import unittest
import warnings

import numpy as np

from posio.errors import (
    NonMonotonicTimeError,
    OnePointError,
    TimeAboveMaximumError,
    TimeBelowMinimumError,
)
from posio.interpolate import Interpolator
from posio.point import Point
from posio.source import Source
from posio.units import Radians


class CountingSource(Source):
    """In-memory point source that counts calls to next()."""

    def __init__(self, points):
        self.points = list(points)
        self.calls = 0
        self.closed = False

    def next(self):
        self.calls += 1
        if self.calls > len(self.points):
            return None
        return self.points[self.calls - 1]

    def close(self):
        self.closed = True


def make_points(times, latitudes=None):
    latitudes = times if latitudes is None else latitudes
    return [
        Point(time=float(t), latitude=Radians(float(lat)), altitude=10.0 * float(t))
        for t, lat in zip(times, latitudes)
    ]


class TestInterpolatorConstruction(unittest.TestCase):
    """Test construction from short and normal sources."""

    def test_empty_source_raises_one_point(self) -> None:
        """Test that an empty source is rejected."""
        with self.assertRaises(OnePointError) as cm:
            Interpolator(CountingSource([]))
        self.assertEqual(cm.exception.count, 0)

    def test_single_point_raises_one_point(self) -> None:
        """Test that a single point is rejected."""
        with self.assertRaises(OnePointError) as cm:
            Interpolator(CountingSource(make_points([0.0])))
        self.assertEqual(cm.exception.count, 1)

    def test_two_points_reads_exactly_two(self) -> None:
        """Test that construction reads exactly two points."""
        source = CountingSource(make_points([0.0, 1.0, 2.0]))
        interpolator = Interpolator(source)
        self.assertEqual(source.calls, 2)
        self.assertEqual(interpolator.buffered, 2)
        self.assertEqual(interpolator.index, 1)
        self.assertEqual(interpolator.start_time, 0.0)
        self.assertEqual(interpolator.end_time, 1.0)
        self.assertFalse(interpolator.exhausted)


class TestTwoPointScenario(unittest.TestCase):
    """Points at t=0 (lat=0) and t=10 (lat=10)."""

    def setUp(self) -> None:
        self.interpolator = Interpolator(CountingSource(make_points([0.0, 10.0])))

    def test_midpoint(self) -> None:
        """Test a query halfway between the first two points."""
        point = self.interpolator.interpolate(5.0)
        self.assertEqual(point.latitude, Radians(5.0))
        self.assertEqual(point.time, 5.0)

    def test_below_minimum(self) -> None:
        """Test a query before the first point."""
        with self.assertRaises(TimeBelowMinimumError) as cm:
            self.interpolator.interpolate(-1.0)
        self.assertEqual(cm.exception.time, -1.0)

    def test_above_maximum(self) -> None:
        """Test a query past the last point."""
        with self.assertRaises(TimeAboveMaximumError) as cm:
            self.interpolator.interpolate(11.0)
        self.assertEqual(cm.exception.time, 11.0)
        self.assertTrue(self.interpolator.exhausted)

    def test_errors_are_value_errors(self) -> None:
        """Test that range errors are ValueErrors."""
        with self.assertRaises(ValueError):
            self.interpolator.interpolate(-1.0)


class TestBracketSearch(unittest.TestCase):
    """Test bracket movement over a longer source."""

    def setUp(self) -> None:
        self.times = [0.0, 1.0, 2.0, 3.0, 4.0, 5.0]
        self.source = CountingSource(make_points(self.times))
        self.interpolator = Interpolator(self.source)

    def test_recorded_times_are_exact(self) -> None:
        """Test that recorded times reproduce the records."""
        for t in self.times:
            point = self.interpolator.interpolate(t)
            self.assertEqual(point.time, t)
            self.assertEqual(point.latitude, Radians(t))
            self.assertEqual(point.altitude, 10.0 * t)

    def test_forward_reads_lazily(self) -> None:
        """Test that the source is read only as far as needed."""
        self.interpolator.interpolate(2.5)
        self.assertEqual(self.source.calls, 4)
        self.assertEqual(self.interpolator.buffered, 4)
        self.assertEqual(self.interpolator.index, 3)

    def test_increasing_queries_read_each_record_once(self) -> None:
        """N records are fetched with at most N calls."""
        for t in np.linspace(0.0, 5.0, 41):
            self.interpolator.interpolate(float(t))
        self.assertEqual(self.interpolator.buffered, len(self.times))
        self.assertLessEqual(self.source.calls, len(self.times))

    def test_backward_excursion_uses_buffer(self) -> None:
        """Test that going back in time does not read the source."""
        self.interpolator.interpolate(4.5)
        calls = self.source.calls
        point = self.interpolator.interpolate(0.25)
        self.assertAlmostEqual(point.latitude.value, 0.25)
        self.assertEqual(self.interpolator.index, 1)
        self.assertEqual(self.source.calls, calls)
        # and forward again through buffered points
        point = self.interpolator.interpolate(3.5)
        self.assertAlmostEqual(point.altitude, 35.0)
        self.assertEqual(self.source.calls, calls)

    def test_below_minimum_after_advancing(self) -> None:
        """Test that the first point stays the lower bound."""
        self.interpolator.interpolate(4.0)
        with self.assertRaises(TimeBelowMinimumError):
            self.interpolator.interpolate(-0.5)

    def test_exhausted_source_not_read_again(self) -> None:
        """Test that an exhausted source is not polled again."""
        with self.assertRaises(TimeAboveMaximumError):
            self.interpolator.interpolate(6.0)
        calls = self.source.calls
        self.assertEqual(calls, len(self.times) + 1)
        with self.assertRaises(TimeAboveMaximumError):
            self.interpolator.interpolate(6.0)
        self.assertEqual(self.source.calls, calls)
        # buffered data stays usable after the failure
        self.assertAlmostEqual(self.interpolator.interpolate(4.5).altitude, 45.0)
        self.assertEqual(self.interpolator.interpolate(5.0).time, 5.0)

    def test_interpolate_many(self) -> None:
        """Test interpolating a sequence of times."""
        points = self.interpolator.interpolate_many([0.5, 1.5, 0.5])
        self.assertEqual([p.time for p in points], [0.5, 1.5, 0.5])
        self.assertAlmostEqual(points[1].altitude, 15.0)

    def test_piecewise_linear_continuity(self) -> None:
        """Values approach a recorded sample from both sides."""
        left = self.interpolator.interpolate(2.0 - 1e-9).altitude
        at = self.interpolator.interpolate(2.0).altitude
        right = self.interpolator.interpolate(2.0 + 1e-9).altitude
        self.assertAlmostEqual(left, at, places=6)
        self.assertAlmostEqual(right, at, places=6)

    def test_close_closes_source(self) -> None:
        """Test that close releases the source."""
        with self.interpolator:
            pass
        self.assertTrue(self.source.closed)


class TestSourceErrors(unittest.TestCase):
    """Test propagation of source failures."""

    def test_decode_error_propagates(self) -> None:
        """Test that a read error leaves the bracket usable."""
        class FailingSource(CountingSource):
            def next(self):
                if self.calls == 2:
                    self.calls += 1
                    raise OSError("disk gone")
                return super().next()

        interpolator = Interpolator(FailingSource(make_points([0.0, 1.0, 2.0])))
        with self.assertRaises(OSError):
            interpolator.interpolate(1.5)
        # the bracket is intact after the failure
        self.assertAlmostEqual(interpolator.interpolate(0.5).altitude, 5.0)


class TestTimeOrderPolicy(unittest.TestCase):
    """Test handling of non-increasing source times."""

    def test_duplicate_time_raises_by_default(self) -> None:
        """Test the default policy on a repeated time."""
        source = CountingSource(make_points([0.0, 1.0, 1.0, 2.0]))
        interpolator = Interpolator(source)
        with self.assertRaises(NonMonotonicTimeError) as cm:
            interpolator.interpolate(1.5)
        self.assertEqual(cm.exception.previous, 1.0)
        self.assertEqual(cm.exception.current, 1.0)

    def test_retry_after_rejection_keeps_buffer_increasing(self) -> None:
        """Rejected points never become the reference for later points."""
        source = CountingSource(make_points([0.0, 5.0, 1.0, 2.0, 6.0]))
        interpolator = Interpolator(source)
        with self.assertRaises(NonMonotonicTimeError):
            interpolator.interpolate(5.5)
        with self.assertRaises(NonMonotonicTimeError) as cm:
            interpolator.interpolate(5.5)
        self.assertEqual(cm.exception.previous, 5.0)
        self.assertEqual(cm.exception.current, 2.0)

        point = interpolator.interpolate(5.5)
        self.assertEqual([p.time for p in interpolator.points], [0.0, 5.0, 6.0])
        self.assertAlmostEqual(point.altitude, 55.0)

    def test_out_of_order_at_construction(self) -> None:
        """Test the policy on the first two points."""
        with self.assertRaises(NonMonotonicTimeError):
            Interpolator(CountingSource(make_points([1.0, 0.0])))

    def test_warn_policy(self) -> None:
        """Test that the warn policy keeps going."""
        source = CountingSource(make_points([0.0, 2.0, 1.0, 3.0]))
        interpolator = Interpolator(source, time_order="warn")
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            point = interpolator.interpolate(2.5)
        self.assertTrue(any(issubclass(w.category, UserWarning) for w in caught))
        self.assertEqual(point.time, 2.5)

    def test_ignore_policy(self) -> None:
        """Test that the ignore policy stays silent."""
        source = CountingSource(make_points([1.0, 0.0]))
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            interpolator = Interpolator(source, time_order="ignore")
        self.assertEqual(interpolator.buffered, 2)

    def test_invalid_policy(self) -> None:
        """Test that an unknown policy name is rejected."""
        with self.assertRaises(ValueError):
            Interpolator(CountingSource(make_points([0.0, 1.0])), time_order="sometimes")


if __name__ == "__main__":
    unittest.main()
