"""shprestore CLI - reconcile shapefile record counts.

Commands:
    repair   - Write *_restore files with matching record counts
    inspect  - Show header fields and record counts
    check    - Report which files of a set are present or missing
"""
from __future__ import annotations

import logging
from pathlib import Path

import click

from .. import __version__
from ..config import load_config
from ..fileset import validate_file_set
from ..logging_config import setup_logging
from .inspect_cmd import inspect_command
from .repair_cmd import repair_command
from .utils import ExitCode


@click.group()
@click.version_option(version=__version__, prog_name="shprestore")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Config file (default: ~/.shprestore/config.json)",
)
@click.option(
    "--workspace", "-w",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory whose .shprestore/config.json overrides the user config",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write log output to this file",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    config_path: Path | None,
    workspace: Path | None,
    log_file: Path | None,
) -> None:
    """shprestore: fix .shp/.dbf/.shx record count mismatches

    \b
    Quick start:
      shprestore check data/         Is the set complete?
      shprestore inspect data/       What do the headers say?
      shprestore repair data/        Write *_restore files
    """
    setup_logging(
        logging.DEBUG if verbose else logging.WARNING,
        log_file=str(log_file) if log_file else None,
    )
    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config(config_path, workspace)


cli.add_command(repair_command, name="repair")
cli.add_command(inspect_command, name="inspect")


@cli.command("check")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
def check_command(paths: tuple[Path, ...]) -> None:
    """Report which files of a shapefile set are present.

    Exits with status 2 when the .shp or .dbf file is missing.
    """
    status = validate_file_set(paths)
    click.echo(f"present: {', '.join(status.present) or 'none'}")
    if status.is_valid:
        click.echo("ok: set can be repaired")
        return
    click.echo(f"missing: {', '.join(status.missing)}", err=True)
    raise SystemExit(ExitCode.INVALID_SET.value)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
