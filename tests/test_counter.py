"""Tests for the geometry record walk."""
from __future__ import annotations

import pytest

from shprestore.counter import count_geometry_records, iter_geometry_records
from shprestore.errors import TruncatedRecordError
from shprestore.headers import read_geometry_header


def test_counts_variable_length_records(make_shp):
    buf = make_shp([10, 2, 28, 0, 6])
    count, bound = count_geometry_records(buf, read_geometry_header(buf))
    assert count == 5
    assert bound == len(buf)


def test_empty_stream_has_no_records(make_shp):
    buf = make_shp([])
    assert count_geometry_records(buf, read_geometry_header(buf)) == (0, 100)


def test_count_is_deterministic(make_shp):
    buf = make_shp([10] * 9)
    header = read_geometry_header(buf)
    assert count_geometry_records(buf, header) == count_geometry_records(buf, header)


def test_record_offsets_and_numbers(make_shp):
    buf = make_shp([10, 4])
    records = list(iter_geometry_records(buf, read_geometry_header(buf)))
    assert records == [(100, 1, 10), (128, 2, 4)]


def test_partial_trailing_header_is_not_a_record(make_shp):
    # Declared length leaves 4 bytes after the last record: not enough for a header
    full = make_shp([10, 10])
    buf = full + b"\x00" * 4
    header = read_geometry_header(make_shp([10, 10], file_length_words=(len(full) + 4) // 2))
    count, _ = count_geometry_records(buf, header)
    assert count == 2


def test_declared_length_is_trusted_over_buffer_length(make_shp):
    # Three records on disk but the header only covers two
    buf = bytearray(make_shp([10, 10, 10]))
    buf[24:28] = ((100 + 2 * 28) // 2).to_bytes(4, "big")
    count, bound = count_geometry_records(bytes(buf), read_geometry_header(bytes(buf)))
    assert count == 2
    assert bound == 156


def test_bound_past_buffer_end_raises(make_shp):
    buf = make_shp([10, 10], file_length_words=500)
    with pytest.raises(TruncatedRecordError) as exc:
        count_geometry_records(buf, read_geometry_header(buf))
    assert exc.value.bound == 1000
    assert exc.value.offset == len(buf)
