"""shprestore inspect: show header fields and record counts.

Usage:
    shprestore inspect roads.shp roads.dbf roads.shx [--json]
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click

from ..counter import count_geometry_records
from ..fileset import format_size, load_file_set
from ..headers import read_attribute_header, read_geometry_header, read_index_header
from ..orchestrator import Role
from ..planner import describe_plan, plan_repair
from .utils import fatal_errors


def _inspect_streams(paths: dict[Role, Path], inputs: dict[Role, bytes]) -> dict[str, Any]:
    info: dict[str, Any] = {"files": {}}
    for role, data in inputs.items():
        info["files"][role.value] = {"path": str(paths[role]), "size": len(data)}

    geometry = inputs[Role.GEOMETRY]
    header = read_geometry_header(geometry)
    count, bound = count_geometry_records(geometry, header)
    info["geometry"] = {
        "file_length_bytes": bound,
        "actual_bytes": len(geometry),
        "shape_type": header.shape_type,
        "shape_type_name": header.shape_type_name,
        "record_count": count,
    }

    if Role.ATTRIBUTES in inputs:
        dbf = read_attribute_header(inputs[Role.ATTRIBUTES])
        info["attributes"] = {
            "record_count": dbf.record_count,
            "header_length": dbf.header_length,
            "record_length": dbf.record_length,
            "actual_bytes": len(inputs[Role.ATTRIBUTES]),
        }
        info["plan"] = describe_plan(plan_repair(count, dbf.record_count))

    if Role.INDEX in inputs:
        shx = read_index_header(inputs[Role.INDEX])
        info["index"] = {
            "file_length_bytes": shx.file_length_bytes,
            "record_count": shx.record_count,
        }
    return info


@click.command("inspect")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def inspect_command(paths: tuple[Path, ...], output_json: bool) -> None:
    """Display header fields and record counts without writing anything."""
    with fatal_errors():
        fileset = load_file_set(paths)
        info = _inspect_streams(fileset.paths, fileset.inputs)

    if output_json:
        click.echo(json.dumps(info, indent=2))
        return

    for role_name, f in info["files"].items():
        click.echo(f"{role_name + ':':<12}{f['path']} ({format_size(f['size'])})")

    g = info["geometry"]
    click.echo("Geometry:")
    click.echo(f"  Shape type:   {g['shape_type_name']} ({g['shape_type']})")
    click.echo(f"  File length:  {g['file_length_bytes']} bytes declared, {g['actual_bytes']} on disk")
    click.echo(f"  Records:      {g['record_count']}")

    if "attributes" in info:
        a = info["attributes"]
        click.echo("Attributes:")
        click.echo(f"  Records:      {a['record_count']}")
        click.echo(f"  Header:       {a['header_length']} bytes")
        click.echo(f"  Record size:  {a['record_length']} bytes")

    if "index" in info:
        x = info["index"]
        click.echo("Index:")
        click.echo(f"  Records:      {x['record_count']}")

    if "plan" in info:
        click.echo(f"Repair:         {info['plan']}")
