"""
Record decoders for IMU/GNSS position files.

Modules:
    pos: ASCII position files (degrees, no dynamics)
    sbet: Binary SBET trajectories (radians, full dynamics)
    pof: Riegl position and orientation files
    poq: Riegl position and orientation quality files (accuracy)

``open_source`` and ``open_accuracy_source`` pick a reader from an explicit
format name or from the file suffix.
"""

from pathlib import Path
from typing import Dict, Optional, Type

from posio.config import StreamConfig
from posio.formats import pof, poq, pos, sbet
from posio.formats._io import PathLike
from posio.source import AccuracySource, Source

POINT_FORMATS: Dict[str, Type[Source]] = {
    "pos": pos.Reader,
    "sbet": sbet.Reader,
    "pof": pof.Reader,
}

ACCURACY_FORMATS: Dict[str, Type[AccuracySource]] = {
    "poq": poq.Reader,
}

SUFFIXES: Dict[str, str] = {
    ".pos": "pos",
    ".sbet": "sbet",
    ".out": "sbet",
    ".pof": "pof",
    ".poq": "poq",
}


def _resolve_format(path: PathLike, format: Optional[str], known: Dict) -> str:
    if format is None:
        suffix = Path(path).suffix.lower()
        if suffix not in SUFFIXES:
            raise ValueError(
                f"Cannot infer format from suffix {suffix!r} of {path}. "
                f"Use one of {sorted(known)}."
            )
        format = SUFFIXES[suffix]
    if format not in known:
        raise ValueError(f"Unsupported format: {format}. Use one of {sorted(known)}.")
    return format


def open_source(
    path: PathLike,
    format: Optional[str] = None,
    config: Optional[StreamConfig] = None,
) -> Source:
    """
    Open a point file.

    Args:
        path: File path.
        format: 'pos', 'sbet' or 'pof'. Defaults to ``config.point_format``,
                then to the file suffix.
        config: Stream options (pos header lines, format override).

    Returns:
        A reader that owns the opened file.

    Raises:
        ValueError: If the format is unknown or cannot be inferred.
    """
    config = config or StreamConfig()
    name = _resolve_format(path, format or config.point_format, POINT_FORMATS)
    if name == "pos":
        return pos.Reader.from_path(path, header_lines=config.pos_header_lines)
    return POINT_FORMATS[name].from_path(path)


def open_accuracy_source(
    path: PathLike,
    format: Optional[str] = None,
    config: Optional[StreamConfig] = None,
) -> AccuracySource:
    """
    Open an accuracy file.

    Args:
        path: File path.
        format: 'poq'. Defaults to ``config.accuracy_format``, then to the
                file suffix.
        config: Stream options.

    Returns:
        A reader that owns the opened file.
    """
    config = config or StreamConfig()
    name = _resolve_format(path, format or config.accuracy_format, ACCURACY_FORMATS)
    return ACCURACY_FORMATS[name].from_path(path)


__all__ = [
    "pos",
    "sbet",
    "pof",
    "poq",
    "POINT_FORMATS",
    "ACCURACY_FORMATS",
    "open_source",
    "open_accuracy_source",
]
