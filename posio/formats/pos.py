"""
ASCII pos files.

One header line followed by whitespace-separated rows:

    time  latitude  longitude  altitude  roll  pitch  yaw

with all angles in degrees. Columns beyond the seventh are ignored. A blank
line ends the stream, as does the end of the file.
"""

from typing import IO, List, Optional

from posio.errors import ParseNumericError
from posio.formats._io import FileReader
from posio.point import Point
from posio.source import Source
from posio.units import Radians

COLUMNS = ("time", "latitude", "longitude", "altitude", "roll", "pitch", "yaw")


def _parse_row(line: str, line_number: int) -> List[float]:
    values = line.split()
    if len(values) < len(COLUMNS):
        raise ParseNumericError(
            line.strip(),
            line_number,
            f"expected {len(COLUMNS)} columns, got {len(values)}",
        )
    parsed = []
    for text in values[: len(COLUMNS)]:
        try:
            parsed.append(float(text))
        except ValueError:
            raise ParseNumericError(text, line_number, "not a number") from None
    return parsed


class Reader(FileReader, Source):
    """
    Pos reader.

    Args:
        stream: Text file object positioned at the start of the file.
        header_lines: Number of header lines to skip.
    """

    open_mode = "r"
    encoding = "utf-8"

    def __init__(self, stream: IO[str], header_lines: int = 1):
        super().__init__(stream)
        if header_lines < 0:
            raise ValueError(f"header_lines must be >= 0, got {header_lines}")
        self.line_number = 0
        self._done = False
        for _ in range(header_lines):
            stream.readline()
            self.line_number += 1

    def read_point(self) -> Optional[Point]:
        """Read one point, or None at a blank line or end of file."""
        if self._done:
            return None
        line = self.stream.readline()
        self.line_number += 1
        if not line.strip():
            self._done = True
            return None
        time, latitude, longitude, altitude, roll, pitch, yaw = _parse_row(
            line, self.line_number
        )
        return Point(
            time=time,
            latitude=Radians.from_degrees(latitude),
            longitude=Radians.from_degrees(longitude),
            altitude=altitude,
            roll=Radians.from_degrees(roll),
            pitch=Radians.from_degrees(pitch),
            yaw=Radians.from_degrees(yaw),
        )

    def next(self) -> Optional[Point]:
        return self.read_point()
