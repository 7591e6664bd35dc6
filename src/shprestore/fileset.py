"""Map files on disk to repair roles and write repaired sets back out."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from .errors import FileSetError
from .orchestrator import REQUIRED_ROLES, RepairResult, Role

logger = logging.getLogger(__name__)

_ROLE_BY_EXTENSION = {role.extension: role for role in Role}


def role_for_path(path: Path) -> Role | None:
    """Role implied by a file's extension, or None for unrelated files."""
    return _ROLE_BY_EXTENSION.get(Path(path).suffix.lower().lstrip("."))


def _expand(paths: Iterable[Path]) -> list[Path]:
    """Replace directories with the shapefile members they contain."""
    expanded: list[Path] = []
    for path in paths:
        path = Path(path)
        if path.is_dir():
            expanded.extend(
                sorted(p for p in path.iterdir() if p.is_file() and role_for_path(p))
            )
        else:
            expanded.append(path)
    return expanded


@dataclass
class FileSetStatus:
    is_valid: bool
    missing: list[str] = field(default_factory=list)
    present: list[str] = field(default_factory=list)


def validate_file_set(paths: Iterable[Path]) -> FileSetStatus:
    """Check that the geometry and attribute files are both present."""
    roles = {role_for_path(p) for p in _expand(paths)}
    present = [role.extension for role in Role if role in roles]
    missing = [role.extension for role in REQUIRED_ROLES if role not in roles]
    return FileSetStatus(is_valid=not missing, missing=missing, present=present)


@dataclass
class LoadedFileSet:
    base_name: str
    paths: dict[Role, Path]
    inputs: dict[Role, bytes]

    @property
    def directory(self) -> Path:
        return self.paths[Role.GEOMETRY].parent


def load_file_set(paths: Iterable[Path]) -> LoadedFileSet:
    """Read every recognised file into memory, keyed by role.

    Files with unrelated extensions are skipped. Two different files for the
    same role are rejected.
    """
    found: dict[Role, Path] = {}
    for path in _expand(paths):
        role = role_for_path(path)
        if role is None:
            logger.debug("skipping %s: not part of a shapefile set", path)
            continue
        if role in found and found[role].resolve() != path.resolve():
            raise FileSetError(
                f"two {role.extension} files given: {found[role]} and {path}"
            )
        found[role] = path

    if Role.GEOMETRY not in found:
        raise FileSetError("no .shp file found")

    inputs = {role: path.read_bytes() for role, path in found.items()}
    return LoadedFileSet(
        base_name=found[Role.GEOMETRY].stem,
        paths=found,
        inputs=inputs,
    )


def output_name(base_name: str, role: Role, suffix: str = "_restore") -> str:
    return f"{base_name}{suffix}.{role.extension}"


def write_outputs(
    result: RepairResult,
    base_name: str,
    output_dir: Path,
    suffix: str = "_restore",
) -> list[Path]:
    """Write one file per populated output role. Returns the written paths."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for role in Role:
        data = result.outputs.get(role)
        if data is None:
            continue
        dest = output_dir / output_name(base_name, role, suffix)
        dest.write_bytes(data)
        logger.debug("wrote %s (%d bytes)", dest, len(data))
        written.append(dest)
    return written


def format_size(size: int) -> str:
    """Format byte size in human-readable form."""
    if size < 1024:
        return f"{size} B"
    elif size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    elif size < 1024 * 1024 * 1024:
        return f"{size / (1024 * 1024):.1f} MB"
    else:
        return f"{size / (1024 * 1024 * 1024):.2f} GB"
