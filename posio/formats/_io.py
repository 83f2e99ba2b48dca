"""Shared file handling for the record decoders."""

import logging
from pathlib import Path
from typing import IO, Optional, Union

import numpy as np

from posio.errors import TruncatedRecordError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_exact(stream: IO[bytes], size: int) -> bytes:
    """Read up to ``size`` bytes, retrying short reads until EOF."""
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def read_struct(
    stream: IO[bytes], dtype: np.dtype, what: str = "record"
) -> Optional[np.void]:
    """
    Decode one fixed-size structure from a binary stream.

    Args:
        stream: Binary file object.
        dtype: Little-endian numpy structured dtype describing the layout.
        what: Name used in the truncation message.

    Returns:
        The decoded structure, or None if the stream was already at EOF.

    Raises:
        TruncatedRecordError: If EOF falls inside the structure.
    """
    data = read_exact(stream, dtype.itemsize)
    if not data:
        return None
    if len(data) < dtype.itemsize:
        raise TruncatedRecordError(dtype.itemsize, len(data), what)
    return np.frombuffer(data, dtype=dtype, count=1)[0]


def decode_text(raw: bytes) -> str:
    """Decode a fixed-width, NUL-padded header text field."""
    return raw.rstrip(b"\x00").decode("ascii", errors="replace").strip()


class FileReader:
    """
    Base for decoders that read from a file object.

    Readers built with ``from_path`` own their file and close it in
    ``close``; readers built on a caller's file object leave it open.
    """

    open_mode = "rb"
    encoding: Optional[str] = None

    def __init__(self, stream: IO):
        self.stream = stream
        self._owns_stream = False

    @classmethod
    def from_path(cls, path: PathLike, **kwargs):
        """Open ``path`` and build a reader that owns the file."""
        stream = open(path, cls.open_mode, encoding=cls.encoding)
        try:
            reader = cls(stream, **kwargs)
        except BaseException:
            stream.close()
            raise
        reader._owns_stream = True
        logger.debug("Opened %s for %s", path, cls.__module__)
        return reader

    def close(self) -> None:
        if self._owns_stream:
            self.stream.close()
