"""Run a full reconciliation over a set of named byte buffers.

    inputs {role: bytes}
        -> headers + geometry record walk
        -> plan_repair(geometry_count, attribute_count)
        -> patch_* per role
        -> RepairResult(outputs, diagnostics)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Union

from .counter import count_geometry_records
from .errors import GeometryRemovalUnsupportedError, MissingRequiredInputError
from .headers import read_attribute_header, read_geometry_header, read_index_header
from .patcher import patch_attributes, patch_geometry, patch_index, patch_projection
from .planner import (
    AddAttributeRecords,
    NoRepair,
    RemoveAttributeRecords,
    RepairPlan,
    describe_plan,
    plan_repair,
)

logger = logging.getLogger(__name__)


class Role(Enum):
    """Logical role of a stream within a shapefile set."""
    GEOMETRY = "geometry"
    ATTRIBUTES = "attributes"
    INDEX = "index"
    PROJECTION = "projection"

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]


_EXTENSIONS = {
    Role.GEOMETRY: "shp",
    Role.ATTRIBUTES: "dbf",
    Role.INDEX: "shx",
    Role.PROJECTION: "prj",
}

REQUIRED_ROLES = (Role.GEOMETRY, Role.ATTRIBUTES)


class Severity(Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    text: str

    def to_dict(self) -> dict[str, str]:
        return {"severity": self.severity.value, "text": self.text}


@dataclass
class RepairResult:
    """Patched streams plus the messages explaining what happened."""
    outputs: dict[Role, bytes]
    diagnostics: list[Diagnostic] = field(default_factory=list)
    geometry_count: int = 0
    attribute_count: int = 0
    plan: RepairPlan = field(default_factory=NoRepair)

    @property
    def needs_repair(self) -> bool:
        return not isinstance(self.plan, NoRepair)

    def to_dict(self) -> dict[str, Any]:
        plan: dict[str, Any] = {"kind": self.plan.kind}
        if not isinstance(self.plan, NoRepair):
            plan["count"] = self.plan.count
        return {
            "geometry_count": self.geometry_count,
            "attribute_count": self.attribute_count,
            "plan": plan,
            "needs_repair": self.needs_repair,
            "outputs": {role.value: len(data) for role, data in self.outputs.items()},
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


def _normalize_inputs(inputs: Mapping[Union[Role, str], bytes]) -> dict[Role, bytes]:
    normalized: dict[Role, bytes] = {}
    for key, data in inputs.items():
        role = key if isinstance(key, Role) else Role(key)
        normalized[role] = data
    return normalized


def repair(inputs: Mapping[Union[Role, str], bytes], *, strict: bool = False) -> RepairResult:
    """Reconcile geometry, attribute and index record counts.

    Args:
        inputs: Mapping of role (``Role`` or its string value) to raw bytes.
            ``geometry`` and ``attributes`` are required.
        strict: Raise instead of warning when the attribute table holds more
            records than the geometry stream.

    Raises:
        MissingRequiredInputError: geometry or attributes absent.
        TruncatedHeaderError: a stream is shorter than its fixed header.
        TruncatedRecordError: the geometry walk ran past the buffer.
        GeometryRemovalUnsupportedError: strict mode and excess attributes.
    """
    streams = _normalize_inputs(inputs)
    missing = [role.value for role in REQUIRED_ROLES if role not in streams]
    if missing:
        raise MissingRequiredInputError(missing)

    diagnostics: list[Diagnostic] = []

    geometry = streams[Role.GEOMETRY]
    geometry_header = read_geometry_header(geometry)
    attributes = streams[Role.ATTRIBUTES]
    attribute_header = read_attribute_header(attributes)
    index_header = read_index_header(streams[Role.INDEX]) if Role.INDEX in streams else None

    geometry_count, bound = count_geometry_records(geometry, geometry_header)
    diagnostics.append(Diagnostic(
        Severity.INFO,
        f"geometry: {geometry_count} record(s) "
        f"(declared length {bound} bytes, shape type {geometry_header.shape_type})",
    ))
    attribute_count = attribute_header.record_count
    diagnostics.append(Diagnostic(
        Severity.INFO,
        f"attributes: {attribute_count} record(s) "
        f"(header length {attribute_header.header_length} bytes, "
        f"record length {attribute_header.record_length} bytes)",
    ))

    plan = plan_repair(geometry_count, attribute_count)
    logger.info("plan: %s", describe_plan(plan))

    if isinstance(plan, NoRepair):
        diagnostics.append(Diagnostic(
            Severity.SUCCESS, "geometry and attribute record counts match; no repair needed",
        ))
    elif isinstance(plan, AddAttributeRecords):
        diagnostics.append(Diagnostic(
            Severity.WARNING,
            f"geometry has {plan.count} more record(s) than attributes; "
            f"blank attribute records will be added",
        ))
    else:
        diagnostics.append(Diagnostic(
            Severity.WARNING,
            f"attributes have {plan.count} more record(s) than geometry; "
            f"excess attribute records will be removed",
        ))
        if strict:
            raise GeometryRemovalUnsupportedError(
                f"attribute table has {plan.count} record(s) more than the geometry "
                f"stream and geometry records are never removed"
            )
        diagnostics.append(Diagnostic(
            Severity.WARNING,
            "geometry stream left unchanged: removing geometry records is not supported",
        ))

    outputs: dict[Role, bytes] = {
        Role.GEOMETRY: patch_geometry(geometry, plan),
        Role.ATTRIBUTES: patch_attributes(attributes, attribute_header, plan),
    }
    if index_header is not None:
        outputs[Role.INDEX] = patch_index(
            streams[Role.INDEX], index_header, plan, target_count=attribute_count,
        )
        if isinstance(plan, RemoveAttributeRecords) and index_header.record_count > attribute_count:
            diagnostics.append(Diagnostic(
                Severity.INFO,
                f"index: truncated from {index_header.record_count} "
                f"to {attribute_count} entries",
            ))
    if Role.PROJECTION in streams:
        outputs[Role.PROJECTION] = patch_projection(streams[Role.PROJECTION])

    return RepairResult(
        outputs=outputs,
        diagnostics=diagnostics,
        geometry_count=geometry_count,
        attribute_count=attribute_count,
        plan=plan,
    )
