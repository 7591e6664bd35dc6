"""Fixed-offset header readers for the .shp, .dbf and .shx streams.

Layout reference (offsets in bytes):

    .shp / .shx (100-byte header)
        24  file length in 16-bit words   u32 big-endian
        32  shape type                    u32 little-endian

    .dbf
         4  record count                  u32 little-endian
         8  header length                 u16 little-endian
        10  record length                 u16 little-endian

Headers that are long enough are read as-is; no plausibility checks.
"""
from __future__ import annotations

import logging
import struct
from dataclasses import dataclass

from .errors import TruncatedHeaderError

logger = logging.getLogger(__name__)

# Geometry / index streams
MAIN_HEADER_SIZE = 100
FILE_LENGTH_OFFSET = 24
SHAPE_TYPE_OFFSET = 32
RECORD_HEADER_SIZE = 8
INDEX_RECORD_SIZE = 8

# Attribute stream
ATTRIBUTE_HEADER_MIN_SIZE = 12
RECORD_COUNT_OFFSET = 4
HEADER_LENGTH_OFFSET = 8
RECORD_LENGTH_OFFSET = 10

_U32_BE = struct.Struct(">I")
_U32_LE = struct.Struct("<I")
_U16_LE = struct.Struct("<H")

SHAPE_TYPE_NAMES = {
    0: "Null",
    1: "Point",
    3: "PolyLine",
    5: "Polygon",
    8: "MultiPoint",
    11: "PointZ",
    13: "PolyLineZ",
    15: "PolygonZ",
    18: "MultiPointZ",
    21: "PointM",
    23: "PolyLineM",
    25: "PolygonM",
    28: "MultiPointM",
    31: "MultiPatch",
}


@dataclass(frozen=True)
class GeometryStreamHeader:
    file_length_words: int
    shape_type: int

    @property
    def file_length_bytes(self) -> int:
        return self.file_length_words * 2

    @property
    def shape_type_name(self) -> str:
        return SHAPE_TYPE_NAMES.get(self.shape_type, f"Unknown({self.shape_type})")


@dataclass(frozen=True)
class AttributeStreamHeader:
    record_count: int
    header_length: int
    record_length: int

    @property
    def records_end(self) -> int:
        """Offset one past the last declared record."""
        return self.header_length + self.record_count * self.record_length


@dataclass(frozen=True)
class IndexStreamHeader:
    file_length_words: int

    @property
    def file_length_bytes(self) -> int:
        return self.file_length_words * 2

    @property
    def record_count(self) -> int:
        return (self.file_length_bytes - MAIN_HEADER_SIZE) // INDEX_RECORD_SIZE


def _require(buf: bytes, size: int, stream: str) -> None:
    if len(buf) < size:
        raise TruncatedHeaderError(stream, size, len(buf))


def read_geometry_header(buf: bytes) -> GeometryStreamHeader:
    """Read the main header of a geometry (.shp) stream."""
    _require(buf, MAIN_HEADER_SIZE, "geometry")
    header = GeometryStreamHeader(
        file_length_words=_U32_BE.unpack_from(buf, FILE_LENGTH_OFFSET)[0],
        shape_type=_U32_LE.unpack_from(buf, SHAPE_TYPE_OFFSET)[0],
    )
    logger.debug(
        "geometry header: file_length=%d bytes, shape_type=%d",
        header.file_length_bytes,
        header.shape_type,
    )
    return header


def read_attribute_header(buf: bytes) -> AttributeStreamHeader:
    """Read the record count and layout fields of an attribute (.dbf) stream."""
    _require(buf, ATTRIBUTE_HEADER_MIN_SIZE, "attributes")
    header = AttributeStreamHeader(
        record_count=_U32_LE.unpack_from(buf, RECORD_COUNT_OFFSET)[0],
        header_length=_U16_LE.unpack_from(buf, HEADER_LENGTH_OFFSET)[0],
        record_length=_U16_LE.unpack_from(buf, RECORD_LENGTH_OFFSET)[0],
    )
    logger.debug(
        "attribute header: records=%d, header_length=%d, record_length=%d",
        header.record_count,
        header.header_length,
        header.record_length,
    )
    return header


def read_index_header(buf: bytes) -> IndexStreamHeader:
    """Read the main header of an index (.shx) stream."""
    _require(buf, MAIN_HEADER_SIZE, "index")
    header = IndexStreamHeader(
        file_length_words=_U32_BE.unpack_from(buf, FILE_LENGTH_OFFSET)[0],
    )
    logger.debug("index header: file_length=%d bytes", header.file_length_bytes)
    return header


def write_file_length(buf: bytearray, length_bytes: int) -> None:
    """Store a byte length as 16-bit words at the main-header length field."""
    _U32_BE.pack_into(buf, FILE_LENGTH_OFFSET, length_bytes // 2)


def write_record_count(buf: bytearray, count: int) -> None:
    """Store the attribute record count field."""
    _U32_LE.pack_into(buf, RECORD_COUNT_OFFSET, count)
