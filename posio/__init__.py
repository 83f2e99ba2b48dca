"""Read and interpolate IMU/GNSS position data files.

This package reads time-stamped position records from several file formats
and exposes them as a uniform, queryable stream:
- units: Radians unit-tagged angles
- point: Point and Accuracy records and their linear interpolation
- source: Source/AccuracySource contracts and CombinedSource stream merging
- interpolate: Interpolator for point-in-time queries
- formats: pos, sbet, pof and poq decoders
"""

from posio.config import PRESETS, StreamConfig
from posio.errors import (
    InvalidEnumCodeError,
    NonMonotonicTimeError,
    OnePointError,
    ParseNumericError,
    PosError,
    TimeAboveMaximumError,
    TimeBelowMinimumError,
    TruncatedRecordError,
)
from posio.interpolate import Interpolator
from posio.ordering import TimeOrder
from posio.point import Accuracy, Point, SatelliteCount, Specified, Unspecified
from posio.source import AccuracySource, CombinedSource, Source
from posio.units import Radians
from posio.formats import open_accuracy_source, open_source

__version__ = "0.1.0"

__all__ = [
    # Records
    "Point",
    "Accuracy",
    "SatelliteCount",
    "Specified",
    "Unspecified",
    "Radians",
    # Engine
    "Source",
    "AccuracySource",
    "CombinedSource",
    "Interpolator",
    "TimeOrder",
    # Files
    "open_source",
    "open_accuracy_source",
    "StreamConfig",
    "PRESETS",
    # Errors
    "PosError",
    "ParseNumericError",
    "InvalidEnumCodeError",
    "TruncatedRecordError",
    "OnePointError",
    "TimeBelowMinimumError",
    "TimeAboveMaximumError",
    "NonMonotonicTimeError",
]
