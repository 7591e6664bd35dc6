"""Pytest configuration and fixtures: synthetic .shp/.dbf/.shx/.prj buffers."""
from __future__ import annotations

import struct
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT / "src"))

POINT = 1


def build_shp(
    record_words: list[int],
    shape_type: int = POINT,
    file_length_words: int | None = None,
) -> bytes:
    """Geometry stream with one record per entry of ``record_words``.

    Each entry is the record's content length in 16-bit words.
    """
    body = bytearray()
    for number, words in enumerate(record_words, start=1):
        body += struct.pack(">II", number, words)
        payload = bytearray(words * 2)
        if words >= 2:
            struct.pack_into("<I", payload, 0, shape_type)
        body += payload

    header = bytearray(100)
    struct.pack_into(">I", header, 0, 9994)
    total = 100 + len(body)
    struct.pack_into(">I", header, 24, file_length_words if file_length_words is not None else total // 2)
    struct.pack_into("<I", header, 28, 1000)
    struct.pack_into("<I", header, 32, shape_type)
    return bytes(header + body)


def build_dbf(
    record_count: int,
    record_length: int = 32,
    header_length: int = 65,
    eof_marker: bool = False,
) -> bytes:
    """Attribute table whose records are distinguishable byte patterns."""
    header = bytearray(header_length)
    header[0] = 0x03
    struct.pack_into("<I", header, 4, record_count)
    struct.pack_into("<H", header, 8, header_length)
    struct.pack_into("<H", header, 10, record_length)
    header[header_length - 1] = 0x0D

    records = bytearray()
    for i in range(record_count):
        records += b" " + bytes([0x41 + i % 26]) * (record_length - 1)
    tail = b"\x1a" if eof_marker else b""
    return bytes(header + records + tail)


def build_shx(record_count: int, record_words: int = 10) -> bytes:
    """Index stream with ``record_count`` 8-byte entries."""
    header = bytearray(100)
    struct.pack_into(">I", header, 0, 9994)
    struct.pack_into(">I", header, 24, (100 + record_count * 8) // 2)
    struct.pack_into("<I", header, 28, 1000)
    struct.pack_into("<I", header, 32, POINT)
    entries = bytearray()
    offset = 50
    for _ in range(record_count):
        entries += struct.pack(">II", offset, record_words)
        offset += 4 + record_words
    return bytes(header + entries)


PRJ = b'GEOGCS["GCS_WGS_1984",DATUM["D_WGS_1984",SPHEROID["WGS_1984",6378137.0,298.257223563]]]'


@pytest.fixture
def make_shp():
    return build_shp


@pytest.fixture
def make_dbf():
    return build_dbf


@pytest.fixture
def make_shx():
    return build_shx


@pytest.fixture
def prj_bytes():
    return PRJ


@pytest.fixture
def shapefile_dir(tmp_path):
    """Write a mismatched set (7 geometry, 5 attribute records) to disk."""
    def _write(geometry: int = 7, attributes: int = 5, index: int | None = None, prj: bool = True) -> Path:
        folder = tmp_path / "data"
        folder.mkdir(exist_ok=True)
        (folder / "roads.shp").write_bytes(build_shp([10] * geometry))
        (folder / "roads.dbf").write_bytes(build_dbf(attributes))
        (folder / "roads.shx").write_bytes(build_shx(geometry if index is None else index))
        if prj:
            (folder / "roads.prj").write_bytes(PRJ)
        return folder
    return _write
