"""Common CLI utilities - exit codes, error mapping, diagnostic rendering."""
from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from typing import Iterator

import click

from ..errors import (
    FileSetError,
    GeometryRemovalUnsupportedError,
    MissingRequiredInputError,
    ShpRestoreError,
)
from ..orchestrator import Diagnostic, Severity


class ExitCode(Enum):
    """
    Stable exit codes for scripted use.

    Existing codes must not change; new codes may be added.
    """
    OK = 0
    INVALID_SET = 2         # Missing .shp/.dbf or conflicting files
    MALFORMED = 20          # Truncated header or record
    UNSUPPORTED = 21        # Strict mode refused to leave geometry mismatched


SEVERITY_STYLES = {
    Severity.INFO: ("INFO", "cyan"),
    Severity.SUCCESS: ("OK", "green"),
    Severity.WARNING: ("WARN", "yellow"),
}


def exit_code_for(error: ShpRestoreError) -> ExitCode:
    if isinstance(error, (MissingRequiredInputError, FileSetError)):
        return ExitCode.INVALID_SET
    if isinstance(error, GeometryRemovalUnsupportedError):
        return ExitCode.UNSUPPORTED
    return ExitCode.MALFORMED


@contextmanager
def fatal_errors() -> Iterator[None]:
    """Turn core errors into a single message and a stable exit code."""
    try:
        yield
    except ShpRestoreError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(exit_code_for(e).value)


def print_diagnostics(diagnostics: list[Diagnostic]) -> None:
    from rich.console import Console

    console = Console()
    for diagnostic in diagnostics:
        label, style = SEVERITY_STYLES[diagnostic.severity]
        console.print(f"  [{style}]{label:<5}[/{style}] {diagnostic.text}", highlight=False)
