"""
SBET (smoothed best estimate of trajectory) files.

An SBET file has no header and no record count: it is a flat sequence of
136-byte records, each 17 little-endian float64 values. Angles are stored in
radians and every record carries full dynamics, so points read from SBET
files populate all optional fields except ``distance``.
"""

from typing import Optional

import numpy as np

from posio.formats._io import FileReader, read_struct
from posio.point import Point
from posio.source import Source
from posio.units import Radians

RECORD_FIELDS = (
    "time",
    "latitude",
    "longitude",
    "altitude",
    "x_velocity",
    "y_velocity",
    "z_velocity",
    "roll",
    "pitch",
    "yaw",
    "wander_angle",
    "x_acceleration",
    "y_acceleration",
    "z_acceleration",
    "x_angular_rate",
    "y_angular_rate",
    "z_angular_rate",
)

RECORD_DTYPE = np.dtype([(name, "<f8") for name in RECORD_FIELDS])

ANGULAR_FIELDS = frozenset(
    (
        "latitude",
        "longitude",
        "roll",
        "pitch",
        "yaw",
        "wander_angle",
        "x_angular_rate",
        "y_angular_rate",
        "z_angular_rate",
    )
)


def record_to_point(record: np.void) -> Point:
    """Convert one decoded SBET record into a Point."""
    values = {}
    for name in RECORD_FIELDS:
        value = float(record[name])
        values[name] = Radians(value) if name in ANGULAR_FIELDS else value
    return Point(**values)


class Reader(FileReader, Source):
    """
    SBET reader.

    Args:
        stream: Binary file object positioned at the first record.

    Example:
        >>> with Reader.from_path('data/2-points.sbet') as reader:
        ...     points = list(reader)
    """

    def read_point(self) -> Optional[Point]:
        """Read one point, or None at end of file."""
        record = read_struct(self.stream, RECORD_DTYPE)
        if record is None:
            return None
        return record_to_point(record)

    def next(self) -> Optional[Point]:
        return self.read_point()
