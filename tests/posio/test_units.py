"""Unit tests for posio.units.

Tests the Radians unit-tagged angle: conversions at the degree boundary and
arithmetic that stays in the radians domain.
"""

import unittest

import numpy as np

from posio.units import Radians


class TestRadiansConversions(unittest.TestCase):
    """Test degree/radian conversion boundaries."""

    def test_from_degrees(self) -> None:
        """180 degrees is pi radians."""
        self.assertAlmostEqual(Radians.from_degrees(180.0).value, np.pi, places=15)

    def test_to_degrees(self) -> None:
        """Test conversion back to degrees."""
        self.assertAlmostEqual(Radians(np.pi / 2).to_degrees(), 90.0, places=12)

    def test_roundtrip_known_value(self) -> None:
        """Degrees survive a conversion to radians and back."""
        degrees = -107.8941420696491
        self.assertAlmostEqual(
            Radians.from_degrees(degrees).to_degrees(), degrees, places=10
        )

    def test_value_is_plain_float(self) -> None:
        """Test that from_degrees stores a Python float."""
        self.assertIs(type(Radians.from_degrees(45.0).value), float)
        self.assertIs(type(Radians(1.0).to_degrees()), float)


class TestRadiansArithmetic(unittest.TestCase):
    """Test arithmetic within the radians domain."""

    def test_add_and_subtract(self) -> None:
        """Test adding and subtracting angles."""
        a = Radians(1.0)
        b = Radians(0.25)
        self.assertEqual(a + b, Radians(1.25))
        self.assertEqual(a - b, Radians(0.75))

    def test_scalar_multiply_both_sides(self) -> None:
        """Test scaling by a number from either side."""
        a = Radians(2.0)
        self.assertEqual(0.5 * a, Radians(1.0))
        self.assertEqual(a * 0.5, Radians(1.0))

    def test_negate_and_float(self) -> None:
        """Test negation and float conversion."""
        self.assertEqual(-Radians(0.5), Radians(-0.5))
        self.assertEqual(float(Radians(0.5)), 0.5)

    def test_ordering(self) -> None:
        """Test that angles compare by value."""
        self.assertLess(Radians(0.1), Radians(0.2))

    def test_adding_plain_number_is_rejected(self) -> None:
        """A bare float has no unit, so it cannot be added to an angle."""
        with self.assertRaises(TypeError):
            Radians(1.0) + 1.0
        with self.assertRaises(TypeError):
            1.0 + Radians(1.0)

    def test_multiplying_two_angles_is_rejected(self) -> None:
        """Test that angle times angle is a TypeError."""
        with self.assertRaises(TypeError):
            Radians(1.0) * Radians(2.0)


if __name__ == "__main__":
    unittest.main()
