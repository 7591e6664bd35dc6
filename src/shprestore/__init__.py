"""shprestore - shapefile record-count reconciliation.

Submodules:
    headers       - Fixed-offset header readers (.shp, .dbf, .shx)
    counter       - Geometry record walk
    planner       - RepairPlan variants and plan_repair()
    patcher       - Buffer rewriting per stream
    orchestrator  - repair() over a {role: bytes} mapping
    fileset       - Role detection, loading and writing file sets
    cli           - Command-line interface

Public API:
    from shprestore import repair, Role
    result = repair({"geometry": shp_bytes, "attributes": dbf_bytes})
"""
from __future__ import annotations

__version__ = "0.1.0"

from shprestore.errors import (
    FileSetError,
    GeometryRemovalUnsupportedError,
    MissingRequiredInputError,
    ShpRestoreError,
    TruncatedHeaderError,
    TruncatedRecordError,
)
from shprestore.orchestrator import Diagnostic, RepairResult, Role, Severity, repair
from shprestore.planner import (
    AddAttributeRecords,
    NoRepair,
    RemoveAttributeRecords,
    RepairPlan,
    plan_repair,
)


__all__ = [
    "__version__",
    # Core
    "repair",
    "plan_repair",
    "Role",
    "Severity",
    "Diagnostic",
    "RepairResult",
    "RepairPlan",
    "NoRepair",
    "AddAttributeRecords",
    "RemoveAttributeRecords",
    # Errors
    "ShpRestoreError",
    "TruncatedHeaderError",
    "TruncatedRecordError",
    "MissingRequiredInputError",
    "GeometryRemovalUnsupportedError",
    "FileSetError",
]
