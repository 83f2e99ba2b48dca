"""
Riegl POF (position and orientation file) files.

Layout:
    header  fixed 315 bytes, little-endian
            preamble, version, data offset, date, entry count,
            lon/lat/alt bounds, interval statistics, time unit and time
            info codes, text fields
    data    starts at ``data_offset``; ``entries`` records of
            time, longitude, latitude, altitude, roll, pitch, yaw
            (+ distance from version x.1), all float64, angles in degrees

The record count comes from the header, so the stream ends after
``entries`` points even if the file has trailing bytes.
"""

import logging
from enum import IntEnum
from typing import IO, NamedTuple, Optional

import numpy as np

from posio.errors import InvalidEnumCodeError, TruncatedRecordError
from posio.formats._io import FileReader, decode_text, read_struct
from posio.point import Point
from posio.source import Source
from posio.units import Radians

logger = logging.getLogger(__name__)

HEADER_DTYPE = np.dtype(
    [
        ("preamble", "S27"),
        ("major", "<u2"),
        ("minor", "<u2"),
        ("data_offset", "<u4"),
        ("year", "<u2"),
        ("month", "<u2"),
        ("day", "<u2"),
        ("entries", "<i8"),
        ("minlon", "<f8"),
        ("maxlon", "<f8"),
        ("minlat", "<f8"),
        ("maxlat", "<f8"),
        ("minalt", "<f8"),
        ("maxalt", "<f8"),
        ("avgint", "<f8"),
        ("maxint", "<f8"),
        ("devint", "<f8"),
        ("timeunit", "u1"),
        ("timeinfo", "u1"),
        ("timezone", "S16"),
        ("location", "S16"),
        ("device", "S32"),
        ("reserved", "S32"),
        ("project", "S32"),
        ("company", "S32"),
        ("reserved2", "S32"),
    ]
)

_BASE_RECORD = [
    ("time", "<f8"),
    ("longitude", "<f8"),
    ("latitude", "<f8"),
    ("altitude", "<f8"),
    ("roll", "<f8"),
    ("pitch", "<f8"),
    ("yaw", "<f8"),
]

RECORD_DTYPE_V0 = np.dtype(_BASE_RECORD)
RECORD_DTYPE_V1 = np.dtype(_BASE_RECORD + [("distance", "<f8")])


class Version(NamedTuple):
    """POF format version."""

    major: int
    minor: int

    @property
    def has_distance(self) -> bool:
        return self.minor >= 1


class TimeUnit(IntEnum):
    """Seconds format of the record timestamps."""

    NORMALIZED = 0
    DAY = 1
    WEEK = 2

    @classmethod
    def from_code(cls, code: int) -> "TimeUnit":
        try:
            return cls(code)
        except ValueError:
            raise InvalidEnumCodeError("time unit", code) from None


class TimeInfo(IntEnum):
    """Time system of the record timestamps."""

    GPS = 0
    UTC = 1
    UNKNOWN = 2

    @classmethod
    def from_code(cls, code: int) -> "TimeInfo":
        try:
            return cls(code)
        except ValueError:
            raise InvalidEnumCodeError("time info", code) from None


class Reader(FileReader, Source):
    """
    POF reader.

    The header is parsed on construction and exposed as attributes
    (``version``, ``year``, ``month``, ``day``, ``entries``, the bounds
    ``minlon`` .. ``maxalt``, ``avgint``/``maxint``/``devint``,
    ``timeunit``, ``timeinfo`` and the text fields).

    Args:
        stream: Seekable binary file object positioned at the start of the
            file.

    Raises:
        TruncatedRecordError: If the header is incomplete.
        InvalidEnumCodeError: If the time unit or time info code is invalid.
    """

    def __init__(self, stream: IO[bytes]):
        super().__init__(stream)
        header = read_struct(stream, HEADER_DTYPE, what="pof header")
        if header is None:
            raise TruncatedRecordError(HEADER_DTYPE.itemsize, 0, "pof header")

        self.version = Version(int(header["major"]), int(header["minor"]))
        self.data_offset = int(header["data_offset"])
        self.year = int(header["year"])
        self.month = int(header["month"])
        self.day = int(header["day"])
        self.entries = int(header["entries"])
        for name in (
            "minlon", "maxlon", "minlat", "maxlat", "minalt", "maxalt",
            "avgint", "maxint", "devint",
        ):
            setattr(self, name, float(header[name]))
        self.timeunit = TimeUnit.from_code(int(header["timeunit"]))
        self.timeinfo = TimeInfo.from_code(int(header["timeinfo"]))
        self.timezone = decode_text(header["timezone"])
        self.location = decode_text(header["location"])
        self.device = decode_text(header["device"])
        self.project = decode_text(header["project"])
        self.company = decode_text(header["company"])

        self.record_dtype = (
            RECORD_DTYPE_V1 if self.version.has_distance else RECORD_DTYPE_V0
        )
        self.position = 0
        stream.seek(self.data_offset)
        logger.debug(
            "pof %d.%d, %d entries, data at byte %d",
            self.version.major,
            self.version.minor,
            self.entries,
            self.data_offset,
        )

    def read_point(self) -> Optional[Point]:
        """Read one point, or None once ``entries`` points have been read."""
        if self.position >= self.entries:
            return None
        record = read_struct(self.stream, self.record_dtype)
        if record is None:
            raise TruncatedRecordError(self.record_dtype.itemsize, 0)
        self.position += 1
        return Point(
            time=float(record["time"]),
            longitude=Radians.from_degrees(float(record["longitude"])),
            latitude=Radians.from_degrees(float(record["latitude"])),
            altitude=float(record["altitude"]),
            roll=Radians.from_degrees(float(record["roll"])),
            pitch=Radians.from_degrees(float(record["pitch"])),
            yaw=Radians.from_degrees(float(record["yaw"])),
            distance=float(record["distance"]) if self.version.has_distance else None,
        )

    def next(self) -> Optional[Point]:
        return self.read_point()
