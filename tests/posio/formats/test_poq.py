"""Unit tests for posio.formats.poq."""

import io

import numpy as np
import pytest

from posio.errors import TruncatedRecordError
from posio.formats import poq
from posio.point import Specified, Unspecified


def build_poq(times, minor: int = 1) -> bytes:
    header = np.zeros(1, dtype=poq.HEADER_DTYPE)
    header["preamble"] = b"POSITION AND ORIENTATION QUALITY"
    header["major"] = 1
    header["minor"] = minor
    header["avgint"] = 1.0
    header["maxint"] = 1.5
    header["devint"] = 0.01

    dtype = poq.RECORD_DTYPE_V1 if minor >= 1 else poq.RECORD_DTYPE_V0
    records = np.zeros(len(times), dtype=dtype)
    records["time"] = times
    records["north"] = 0.02
    records["east"] = 0.03
    records["down"] = 0.05
    records["roll"] = 0.1
    records["pitch"] = 0.2
    records["yaw"] = 0.5
    records["pdop"] = 1.8
    if minor >= 1:
        records["gps"] = 9
        records["glonass"] = 6
    else:
        records["satellites"] = 12
    return header.tobytes() + records.tobytes()


class TestPoqReader:
    """Test suite for the poq accuracy reader."""

    def test_header(self) -> None:
        """Test header decoding."""
        reader = poq.Reader(io.BytesIO(build_poq([])))
        assert poq.HEADER_DTYPE.itemsize == 63
        assert reader.version == poq.Version(1, 1)
        assert reader.avgint == 1.0
        assert reader.maxint == 1.5
        assert reader.devint == 0.01

    def test_axes_and_units(self) -> None:
        """Test the east/north/down axis mapping and degree conversion."""
        reader = poq.Reader(io.BytesIO(build_poq([100.0])))
        accuracy = reader.read_accuracy()
        assert accuracy.time == 100.0
        assert accuracy.x == 0.03  # east
        assert accuracy.y == 0.02  # north
        assert accuracy.z == 0.05  # down
        assert accuracy.roll.to_degrees() == pytest.approx(0.1)
        assert accuracy.yaw.to_degrees() == pytest.approx(0.5)
        assert accuracy.pdop == 1.8
        assert reader.read_accuracy() is None

    def test_specified_satellite_count(self) -> None:
        """Test GPS/GLONASS counts from version 1.1 records."""
        accuracy = poq.Reader(io.BytesIO(build_poq([1.0], minor=1))).next()
        assert accuracy.satellite_count == Specified(gps=9, glonass=6)

    def test_unspecified_satellite_count(self) -> None:
        """Test single satellite counts from version 1.0 records."""
        reader = poq.Reader(io.BytesIO(build_poq([1.0, 2.0], minor=0)))
        accuracies = list(reader)
        assert len(accuracies) == 2
        assert accuracies[0].satellite_count == Unspecified(12)
        assert poq.RECORD_DTYPE_V0.itemsize == 66
        assert poq.RECORD_DTYPE_V1.itemsize == 68

    def test_truncated_record(self) -> None:
        """Test that a partial record raises."""
        data = build_poq([1.0, 2.0])[:-3]
        reader = poq.Reader(io.BytesIO(data))
        reader.next()
        with pytest.raises(TruncatedRecordError):
            reader.next()

    def test_truncated_header(self) -> None:
        """Test that a partial header raises."""
        with pytest.raises(TruncatedRecordError):
            poq.Reader(io.BytesIO(b"\x00" * 40))
