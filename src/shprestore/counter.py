"""Walk the variable-length record sequence of a geometry stream."""
from __future__ import annotations

import logging
import struct
from typing import Iterator

from .errors import TruncatedRecordError
from .headers import MAIN_HEADER_SIZE, RECORD_HEADER_SIZE, GeometryStreamHeader

logger = logging.getLogger(__name__)

_RECORD_HEADER = struct.Struct(">II")


def iter_geometry_records(
    buf: bytes, header: GeometryStreamHeader
) -> Iterator[tuple[int, int, int]]:
    """Yield ``(offset, record_number, content_length_words)`` per record.

    The walk is bounded by the header's declared file length, not by
    ``len(buf)``. A record header that would straddle the bound ends the walk
    silently; one that fits the bound but not the buffer is an error.
    """
    bound = header.file_length_bytes
    offset = MAIN_HEADER_SIZE
    while offset + RECORD_HEADER_SIZE <= bound:
        if offset + RECORD_HEADER_SIZE > len(buf):
            raise TruncatedRecordError(offset, bound, len(buf))
        record_number, content_words = _RECORD_HEADER.unpack_from(buf, offset)
        yield offset, record_number, content_words
        offset += RECORD_HEADER_SIZE + content_words * 2


def count_geometry_records(buf: bytes, header: GeometryStreamHeader) -> tuple[int, int]:
    """Count geometry records. Returns ``(count, bound_bytes)``."""
    count = sum(1 for _ in iter_geometry_records(buf, header))
    bound = header.file_length_bytes
    logger.debug("counted %d geometry records within %d bytes", count, bound)
    return count, bound
