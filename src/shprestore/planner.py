"""Reconciliation plans: what to do when record counts disagree."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class NoRepair:
    kind = "none"


@dataclass(frozen=True)
class AddAttributeRecords:
    """Append ``count`` blank attribute records."""
    count: int
    kind = "add_attribute_records"


@dataclass(frozen=True)
class RemoveAttributeRecords:
    """Drop the trailing ``count`` attribute records."""
    count: int
    kind = "remove_attribute_records"


RepairPlan = Union[NoRepair, AddAttributeRecords, RemoveAttributeRecords]


def plan_repair(geometry_count: int, attribute_count: int) -> RepairPlan:
    """Decide how to bring the attribute table in line with the geometry."""
    if geometry_count == attribute_count:
        return NoRepair()
    if geometry_count > attribute_count:
        return AddAttributeRecords(geometry_count - attribute_count)
    return RemoveAttributeRecords(attribute_count - geometry_count)


def describe_plan(plan: RepairPlan) -> str:
    if isinstance(plan, AddAttributeRecords):
        return f"append {plan.count} blank attribute record(s) to match the geometry count"
    if isinstance(plan, RemoveAttributeRecords):
        return f"drop {plan.count} trailing attribute record(s) to match the geometry count"
    return "no repair needed"
