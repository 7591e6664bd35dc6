"""shprestore repair: reconcile a shapefile set and write *_restore files.

Usage:
    shprestore repair roads.shp roads.dbf roads.shx
    shprestore repair data/ -o fixed/
    shprestore repair data/ --dry-run --json
"""
from __future__ import annotations

import json
from pathlib import Path

import click

from ..config import load_config
from ..fileset import format_size, load_file_set, output_name, write_outputs
from ..orchestrator import RepairResult, Role, repair
from ..planner import describe_plan
from .utils import fatal_errors, print_diagnostics


@click.command("repair")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
@click.option(
    "--output-dir", "-o",
    type=click.Path(file_okay=False, path_type=Path),
    help="Where to write repaired files (default: next to the .shp file)",
)
@click.option("--json", "output_json", is_flag=True, help="Output JSON for scripting")
@click.option("--dry-run", is_flag=True, help="Analyse and plan, but write nothing")
@click.option("--strict", is_flag=True, help="Fail if geometry records would need removing")
@click.option("--always-write", is_flag=True, help="Write outputs even when no repair is needed")
@click.pass_context
def repair_command(
    ctx: click.Context,
    paths: tuple[Path, ...],
    output_dir: Path | None,
    output_json: bool,
    dry_run: bool,
    strict: bool,
    always_write: bool,
) -> None:
    """Make .shp, .dbf and .shx record counts agree.

    Extra geometry records get blank attribute rows. Extra attribute rows
    are dropped, and a longer .shx index is cut back to the old row
    count. The .shp itself is never modified.

    \b
    Examples:
        shprestore repair roads.shp roads.dbf
        shprestore repair data/ -o fixed/ --strict
    """
    cfg = ctx.obj.get("config") if ctx.obj else None
    if cfg is None:
        cfg = load_config()
    strict = strict or bool(cfg.get("strict", False))
    always_write = always_write or bool(cfg.get("always_write", False))
    suffix = cfg.get("output_suffix", "_restore")

    with fatal_errors():
        fileset = load_file_set(paths)
        result = repair(fileset.inputs, strict=strict)

    if output_dir is None:
        output_dir = Path(cfg["output_dir"]) if cfg.get("output_dir") else fileset.directory

    written: list[Path] = []
    if not dry_run and (result.needs_repair or always_write):
        written = write_outputs(result, fileset.base_name, output_dir, suffix)

    if output_json:
        payload = result.to_dict()
        payload["base_name"] = fileset.base_name
        payload["written"] = [str(p) for p in written]
        click.echo(json.dumps(payload, indent=2))
        return

    _print_summary(result, fileset.base_name, suffix, written, dry_run)


def _print_summary(
    result: RepairResult,
    base_name: str,
    suffix: str,
    written: list[Path],
    dry_run: bool,
) -> None:
    from rich.console import Console
    from rich.panel import Panel

    console = Console()
    console.print()
    console.print(Panel(
        f"  Geometry records:  {result.geometry_count}\n"
        f"  Attribute records: {result.attribute_count}\n"
        f"  Repair:            {describe_plan(result.plan)}",
        title=f"[bold cyan]{base_name}[/bold cyan]",
        border_style="cyan",
        expand=False,
    ))
    print_diagnostics(result.diagnostics)
    console.print()

    if written:
        console.print("[green]Written:[/green]")
        for path in written:
            console.print(f"  {path}  ({format_size(path.stat().st_size)})", highlight=False)
    elif dry_run and result.needs_repair:
        names = [output_name(base_name, role, suffix) for role in Role if role in result.outputs]
        console.print(f"[yellow]Dry run:[/yellow] would write {', '.join(names)}", highlight=False)
    elif not result.needs_repair:
        console.print("[green]Nothing to write.[/green]")
