"""
Unit-tagged angular values.

Angles in position files come in both degrees and radians depending on the
format. To keep the two from being mixed silently, every angular field inside
posio is a ``Radians`` value rather than a bare float.

Conversion happens only at the edges:
    - decode boundary: ``Radians.from_degrees`` (pos, pof, poq readers)
    - presentation boundary: ``Radians.to_degrees`` (printing, export)

Arithmetic stays in the radians domain:
    Radians + Radians -> Radians
    Radians - Radians -> Radians
    float * Radians   -> Radians

Adding a plain number to a ``Radians`` is rejected, since the number's unit
is unknown.
"""

from dataclasses import dataclass
from typing import Union

import numpy as np


@dataclass(frozen=True, order=True)
class Radians:
    """
    An angle in radians.

    Attributes:
        value: Angle in radians.

    Example:
        >>> yaw = Radians.from_degrees(180.0)
        >>> float(yaw)
        3.141592653589793
        >>> (yaw - Radians.from_degrees(90.0)).to_degrees()
        90.0
    """

    value: float

    @classmethod
    def from_degrees(cls, degrees: float) -> "Radians":
        """Create a radian value from a degree value."""
        return cls(float(np.deg2rad(degrees)))

    def to_degrees(self) -> float:
        """Convert this value to degrees."""
        return float(np.rad2deg(self.value))

    def __add__(self, other: "Radians") -> "Radians":
        if not isinstance(other, Radians):
            return NotImplemented
        return Radians(self.value + other.value)

    def __sub__(self, other: "Radians") -> "Radians":
        if not isinstance(other, Radians):
            return NotImplemented
        return Radians(self.value - other.value)

    def __mul__(self, factor: Union[int, float]) -> "Radians":
        if isinstance(factor, Radians) or not isinstance(factor, (int, float, np.floating)):
            return NotImplemented
        return Radians(self.value * factor)

    __rmul__ = __mul__

    def __neg__(self) -> "Radians":
        return Radians(-self.value)

    def __float__(self) -> float:
        return float(self.value)

    def __repr__(self) -> str:
        return f"Radians({self.value!r})"
