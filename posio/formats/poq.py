"""
Riegl POQ (position and orientation quality) files.

The accuracy companion of a POF file. A 63-byte header (preamble, version,
interval statistics) is followed by records until end of file:

    time, north, east, down, roll, pitch, yaw, pdop   float64
    satellites                                         uint16      (x.0)
    gps, glonass                                       2 x uint16  (x.1+)

North/east/down errors map to ``y``/``x``/``z`` of ``Accuracy``; angular
errors are stored in degrees.
"""

import logging
from typing import IO, NamedTuple, Optional

import numpy as np

from posio.errors import TruncatedRecordError
from posio.formats._io import FileReader, read_struct
from posio.point import Accuracy, Specified, Unspecified
from posio.source import AccuracySource
from posio.units import Radians

logger = logging.getLogger(__name__)

HEADER_DTYPE = np.dtype(
    [
        ("preamble", "S35"),
        ("major", "<u2"),
        ("minor", "<u2"),
        ("avgint", "<f8"),
        ("maxint", "<f8"),
        ("devint", "<f8"),
    ]
)

_BASE_RECORD = [
    ("time", "<f8"),
    ("north", "<f8"),
    ("east", "<f8"),
    ("down", "<f8"),
    ("roll", "<f8"),
    ("pitch", "<f8"),
    ("yaw", "<f8"),
    ("pdop", "<f8"),
]

RECORD_DTYPE_V0 = np.dtype(_BASE_RECORD + [("satellites", "<u2")])
RECORD_DTYPE_V1 = np.dtype(_BASE_RECORD + [("gps", "<u2"), ("glonass", "<u2")])


class Version(NamedTuple):
    """POQ format version."""

    major: int
    minor: int

    @property
    def specifies_satellite_count(self) -> bool:
        return self.minor >= 1


class Reader(FileReader, AccuracySource):
    """
    POQ reader.

    Args:
        stream: Binary file object positioned at the start of the file.

    Raises:
        TruncatedRecordError: If the header is incomplete.
    """

    def __init__(self, stream: IO[bytes]):
        super().__init__(stream)
        header = read_struct(stream, HEADER_DTYPE, what="poq header")
        if header is None:
            raise TruncatedRecordError(HEADER_DTYPE.itemsize, 0, "poq header")
        self.version = Version(int(header["major"]), int(header["minor"]))
        self.avgint = float(header["avgint"])
        self.maxint = float(header["maxint"])
        self.devint = float(header["devint"])
        self.record_dtype = (
            RECORD_DTYPE_V1
            if self.version.specifies_satellite_count
            else RECORD_DTYPE_V0
        )
        logger.debug("poq %d.%d", self.version.major, self.version.minor)

    def read_accuracy(self) -> Optional[Accuracy]:
        """Read one accuracy record, or None at end of file."""
        record = read_struct(self.stream, self.record_dtype)
        if record is None:
            return None
        if self.version.specifies_satellite_count:
            satellite_count = Specified(
                gps=int(record["gps"]), glonass=int(record["glonass"])
            )
        else:
            satellite_count = Unspecified(int(record["satellites"]))
        return Accuracy(
            time=float(record["time"]),
            x=float(record["east"]),
            y=float(record["north"]),
            z=float(record["down"]),
            roll=Radians.from_degrees(float(record["roll"])),
            pitch=Radians.from_degrees(float(record["pitch"])),
            yaw=Radians.from_degrees(float(record["yaw"])),
            pdop=float(record["pdop"]),
            satellite_count=satellite_count,
        )

    def next(self) -> Optional[Accuracy]:
        return self.read_accuracy()
