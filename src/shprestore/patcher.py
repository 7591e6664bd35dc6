"""Apply a RepairPlan to each stream of a shapefile set.

Every function returns a new ``bytes`` object and leaves its input alone.
"""
from __future__ import annotations

import logging

from .headers import (
    INDEX_RECORD_SIZE,
    MAIN_HEADER_SIZE,
    RECORD_COUNT_OFFSET,
    AttributeStreamHeader,
    IndexStreamHeader,
    write_file_length,
    write_record_count,
)
from .planner import AddAttributeRecords, NoRepair, RemoveAttributeRecords, RepairPlan

logger = logging.getLogger(__name__)

# dBASE deletion flag: a leading space marks a live record
PADDING_BYTE = 0x20


def patch_geometry(buf: bytes, plan: RepairPlan) -> bytes:
    """Geometry records are never added or removed; always a copy."""
    if isinstance(plan, RemoveAttributeRecords):
        logger.debug("geometry stream left unchanged; record removal is not supported")
    return bytes(buf)


def patch_attributes(buf: bytes, header: AttributeStreamHeader, plan: RepairPlan) -> bytes:
    if isinstance(plan, AddAttributeRecords):
        return _append_attribute_records(buf, header, plan.count)
    if isinstance(plan, RemoveAttributeRecords):
        return _drop_attribute_records(buf, header, plan.count)
    return bytes(buf)


def _copy_into(out: bytearray, offset: int, chunk: bytes) -> None:
    """Copy ``chunk`` to ``offset`` without growing or shrinking ``out``."""
    chunk = chunk[: max(0, len(out) - offset)]
    out[offset : offset + len(chunk)] = chunk


def _append_attribute_records(buf: bytes, header: AttributeStreamHeader, n: int) -> bytes:
    out = bytearray(len(buf) + n * header.record_length)
    out[: len(buf)] = buf
    start = header.records_end
    _copy_into(out, start, bytes([PADDING_BYTE]) * (n * header.record_length))
    write_record_count(out, header.record_count + n)
    logger.debug("appended %d attribute records at offset %d", n, start)
    return bytes(out)


def _drop_attribute_records(buf: bytes, header: AttributeStreamHeader, n: int) -> bytes:
    keep = header.record_count - n
    # never shrink below the record count field
    out = bytearray(max(RECORD_COUNT_OFFSET + 4, len(buf) - n * header.record_length))
    kept_end = header.header_length + keep * header.record_length
    _copy_into(out, 0, buf[:kept_end])
    write_record_count(out, keep)
    logger.debug("kept %d attribute records, dropped %d", keep, n)
    return bytes(out)


def patch_index(
    buf: bytes,
    header: IndexStreamHeader,
    plan: RepairPlan,
    target_count: int,
) -> bytes:
    """Truncate the index to ``target_count`` entries when attributes shrink.

    The index is only cut back when it holds more entries than
    ``target_count``; it is never padded.
    """
    if isinstance(plan, (NoRepair, AddAttributeRecords)):
        return bytes(buf)

    current = header.record_count
    if current <= target_count:
        return bytes(buf)

    new_length = MAIN_HEADER_SIZE + target_count * INDEX_RECORD_SIZE
    out = bytearray(new_length)
    _copy_into(out, 0, buf[:new_length])
    write_file_length(out, new_length)
    logger.debug("index truncated from %d to %d entries", current, target_count)
    return bytes(out)


def patch_projection(buf: bytes) -> bytes:
    return bytes(buf)
