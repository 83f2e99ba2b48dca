"""
Position and accuracy records.

This module defines the immutable value records produced by the decoders and
consumed by the interpolation engine:
    - Point: position, attitude and optional dynamics at one instant
    - Accuracy: position/attitude error estimates at one instant
    - SatelliteCount: Unspecified(count) or Specified(gps, glonass)

Both records interpolate with the same field-wise linear rule:

    f = (t - t0) / (t1 - t0)
    v = (1 - f) * v0 + f * v1

Mandatory fields are always blended. An optional field is blended only when
both endpoints carry it, otherwise the result lacks it. A nested accuracy is
blended recursively under the same rule. Satellite counts are never blended.

Time Base Convention:
    All timestamps are float seconds, increasing within one stream.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional, Sequence, Union

import numpy as np

from posio.units import Radians

Scalar = Union[float, Radians]


@dataclass(frozen=True)
class Unspecified:
    """Satellite count without a constellation breakdown (poq < 1.1)."""

    count: int

    @property
    def total(self) -> int:
        return self.count


@dataclass(frozen=True)
class Specified:
    """Satellite count split into GPS and GLONASS (poq >= 1.1)."""

    gps: int
    glonass: int

    @property
    def total(self) -> int:
        return self.gps + self.glonass


SatelliteCount = Union[Unspecified, Specified]


def interpolation_factor(t0: float, t1: float, time: float) -> float:
    """
    Compute f = (time - t0) / (t1 - t0).

    A zero-length bracket (t1 == t0) yields inf or nan rather than raising;
    guarding against it is the job of the time-order policy.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.divide(np.float64(time) - t0, np.float64(t1) - t0))


def lerp(v0: Scalar, v1: Scalar, factor: float) -> Scalar:
    """Blend two floats or two Radians values, exact at factor 0 and 1."""
    return (1.0 - factor) * v0 + factor * v1


def interpolate_fields(
    lhs: Any,
    rhs: Any,
    factor: float,
    mandatory: Sequence[str],
    optional: Sequence[str],
) -> Dict[str, Any]:
    """
    Blend the named fields of two records.

    Args:
        lhs: Record at the start of the bracket (f = 0).
        rhs: Record at the end of the bracket (f = 1).
        factor: Interpolation factor.
        mandatory: Field names always present on both records.
        optional: Field names that may be None on either record.

    Returns:
        Dict of field name to blended value, suitable as constructor kwargs.
    """
    values = {
        name: lerp(getattr(lhs, name), getattr(rhs, name), factor)
        for name in mandatory
    }
    for name in optional:
        v0 = getattr(lhs, name)
        v1 = getattr(rhs, name)
        values[name] = None if v0 is None or v1 is None else lerp(v0, v1, factor)
    return values


def _degrees_dict(record: Any) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for f in fields(record):
        value = getattr(record, f.name)
        if isinstance(value, Radians):
            value = value.to_degrees()
        elif isinstance(value, Accuracy):
            value = value.to_degrees()
        elif isinstance(value, Unspecified):
            value = {"count": value.count}
        elif isinstance(value, Specified):
            value = {"gps": value.gps, "glonass": value.glonass}
        out[f.name] = value
    return out


@dataclass(frozen=True)
class Accuracy:
    """
    Accuracy of a position solution at one instant.

    Attributes:
        time: Timestamp in seconds.
        x: Position error along x (east for poq files).
        y: Position error along y (north for poq files).
        z: Position error along z (down for poq files).
        roll: Roll error.
        pitch: Pitch error.
        yaw: Yaw (heading) error.
        pdop: Position dilution of precision.
        satellite_count: Satellites used, if the source reports it.
    """

    time: float
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    roll: Radians = Radians(0.0)
    pitch: Radians = Radians(0.0)
    yaw: Radians = Radians(0.0)
    pdop: float = 0.0
    satellite_count: Optional[SatelliteCount] = None

    MANDATORY_FIELDS = ("x", "y", "z", "roll", "pitch", "yaw", "pdop")

    def interpolate(self, other: "Accuracy", time: float) -> "Accuracy":
        """
        Linearly interpolate an accuracy between this one and ``other``.

        The result never carries a satellite count.

        Example:
            >>> a = Accuracy(time=0.0, x=0.0)
            >>> b = Accuracy(time=2.0, x=20.0)
            >>> a.interpolate(b, 1.0).x
            10.0
        """
        factor = interpolation_factor(self.time, other.time, time)
        values = interpolate_fields(self, other, factor, self.MANDATORY_FIELDS, ())
        return Accuracy(time=time, satellite_count=None, **values)

    def to_degrees(self) -> Dict[str, Any]:
        """Return the fields as a dict with angles in degrees."""
        return _degrees_dict(self)


@dataclass(frozen=True)
class Point:
    """
    A position point.

    Always carries position and attitude; dynamics and accuracy depend on the
    file format the point was read from (sbet has full dynamics, pos has
    none, pof has distance from version 1.1).

    Attributes:
        time: Timestamp in seconds.
        latitude, longitude: Geodetic position.
        altitude: Height, in the linear unit of the source.
        roll, pitch, yaw: Attitude.
        distance: Distance travelled.
        x_velocity, y_velocity, z_velocity: Velocity components.
        wander_angle: Wander angle of the navigation frame.
        x_acceleration, y_acceleration, z_acceleration: Acceleration.
        x_angular_rate, y_angular_rate, z_angular_rate: Body angular rates.
        accuracy: Accuracy attached by ``CombinedSource``.
    """

    time: float
    latitude: Radians = Radians(0.0)
    longitude: Radians = Radians(0.0)
    altitude: float = 0.0
    roll: Radians = Radians(0.0)
    pitch: Radians = Radians(0.0)
    yaw: Radians = Radians(0.0)
    distance: Optional[float] = None
    x_velocity: Optional[float] = None
    y_velocity: Optional[float] = None
    z_velocity: Optional[float] = None
    wander_angle: Optional[Radians] = None
    x_acceleration: Optional[float] = None
    y_acceleration: Optional[float] = None
    z_acceleration: Optional[float] = None
    x_angular_rate: Optional[Radians] = None
    y_angular_rate: Optional[Radians] = None
    z_angular_rate: Optional[Radians] = None
    accuracy: Optional[Accuracy] = field(default=None)

    MANDATORY_FIELDS = ("latitude", "longitude", "altitude", "roll", "pitch", "yaw")
    OPTIONAL_FIELDS = (
        "distance",
        "x_velocity",
        "y_velocity",
        "z_velocity",
        "wander_angle",
        "x_acceleration",
        "y_acceleration",
        "z_acceleration",
        "x_angular_rate",
        "y_angular_rate",
        "z_angular_rate",
    )

    def interpolate(self, other: "Point", time: float) -> "Point":
        """
        Linearly interpolate a new point between this one and ``other``.

        Args:
            other: Point at the end of the bracket.
            time: Query time, normally within [self.time, other.time].

        Returns:
            Interpolated point with ``time`` set to the query time.

        Example:
            >>> p0 = Point(time=10.0, altitude=100.0)
            >>> p1 = Point(time=20.0, altitude=200.0)
            >>> p0.interpolate(p1, 15.0).altitude
            150.0
        """
        factor = interpolation_factor(self.time, other.time, time)
        values = interpolate_fields(
            self, other, factor, self.MANDATORY_FIELDS, self.OPTIONAL_FIELDS
        )
        if self.accuracy is not None and other.accuracy is not None:
            accuracy = self.accuracy.interpolate(other.accuracy, time)
        else:
            accuracy = None
        return Point(time=time, accuracy=accuracy, **values)

    def with_accuracy(self, accuracy: Optional[Accuracy]) -> "Point":
        """Return a copy of this point carrying ``accuracy``."""
        return replace(self, accuracy=accuracy)

    def to_degrees(self) -> Dict[str, Any]:
        """Return the fields as a dict with angles in degrees."""
        return _degrees_dict(self)
