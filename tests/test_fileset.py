"""Tests for role detection, loading and output naming."""
from __future__ import annotations

from pathlib import Path

import pytest

from shprestore import FileSetError, Role, repair
from shprestore.fileset import (
    format_size,
    load_file_set,
    output_name,
    role_for_path,
    validate_file_set,
    write_outputs,
)


@pytest.mark.parametrize("name, role", [
    ("roads.shp", Role.GEOMETRY),
    ("roads.DBF", Role.ATTRIBUTES),
    ("roads.shx", Role.INDEX),
    ("roads.prj", Role.PROJECTION),
    ("roads.cpg", None),
    ("README", None),
])
def test_role_for_path(name, role):
    assert role_for_path(Path(name)) is role


def test_output_name():
    assert output_name("roads", Role.ATTRIBUTES) == "roads_restore.dbf"
    assert output_name("roads", Role.INDEX, "_fixed") == "roads_fixed.shx"


class TestValidateFileSet:

    def test_complete_set(self, shapefile_dir):
        status = validate_file_set([shapefile_dir()])
        assert status.is_valid
        assert status.present == ["shp", "dbf", "shx", "prj"]
        assert status.missing == []

    def test_missing_attributes(self, tmp_path):
        status = validate_file_set([tmp_path / "roads.shp", tmp_path / "roads.prj"])
        assert not status.is_valid
        assert status.missing == ["dbf"]


class TestLoadFileSet:

    def test_directory_expands_to_members(self, shapefile_dir):
        folder = shapefile_dir()
        (folder / "notes.txt").write_text("ignored")
        loaded = load_file_set([folder])
        assert loaded.base_name == "roads"
        assert set(loaded.inputs) == set(Role)
        assert loaded.directory == folder

    def test_requires_geometry(self, tmp_path, make_dbf):
        dbf = tmp_path / "roads.dbf"
        dbf.write_bytes(make_dbf(1))
        with pytest.raises(FileSetError):
            load_file_set([dbf])

    def test_rejects_two_files_for_one_role(self, shapefile_dir, make_dbf):
        folder = shapefile_dir()
        other = folder / "other.dbf"
        other.write_bytes(make_dbf(1))
        with pytest.raises(FileSetError, match="two dbf files"):
            load_file_set([folder / "roads.shp", folder / "roads.dbf", other])

    def test_same_file_twice_is_fine(self, shapefile_dir):
        folder = shapefile_dir()
        loaded = load_file_set([folder / "roads.shp", folder / "roads.dbf", folder / "roads.dbf"])
        assert set(loaded.inputs) == {Role.GEOMETRY, Role.ATTRIBUTES}


def test_write_outputs(shapefile_dir, tmp_path):
    loaded = load_file_set([shapefile_dir()])
    result = repair(loaded.inputs)
    written = write_outputs(result, loaded.base_name, tmp_path / "out")

    assert [p.name for p in written] == [
        "roads_restore.shp",
        "roads_restore.dbf",
        "roads_restore.shx",
        "roads_restore.prj",
    ]
    assert written[1].read_bytes() == result.outputs[Role.ATTRIBUTES]


def test_format_size():
    assert format_size(512) == "512 B"
    assert format_size(2048) == "2.0 KB"
    assert format_size(5 * 1024 * 1024) == "5.0 MB"
