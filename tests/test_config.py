"""Tests for layered configuration."""
from __future__ import annotations

import json

from shprestore.config import DEFAULT_CONFIG, load_config


def test_defaults_without_files(monkeypatch):
    monkeypatch.delenv("SHPRESTORE_STRICT", raising=False)
    monkeypatch.delenv("SHPRESTORE_OUTPUT_SUFFIX", raising=False)
    monkeypatch.delenv("SHPRESTORE_OUTPUT_DIR", raising=False)
    assert load_config() == DEFAULT_CONFIG


def test_workspace_overrides_user_config(tmp_path, monkeypatch):
    monkeypatch.delenv("SHPRESTORE_STRICT", raising=False)
    monkeypatch.delenv("SHPRESTORE_OUTPUT_SUFFIX", raising=False)
    user = tmp_path / "user.json"
    user.write_text(json.dumps({"output_suffix": "_user", "strict": True}))
    ws = tmp_path / "ws"
    (ws / ".shprestore").mkdir(parents=True)
    (ws / ".shprestore" / "config.json").write_text(json.dumps({"output_suffix": "_ws"}))

    cfg = load_config(user, ws)
    assert cfg["output_suffix"] == "_ws"
    assert cfg["strict"] is True


def test_env_overrides_files(tmp_path, monkeypatch):
    user = tmp_path / "user.json"
    user.write_text(json.dumps({"strict": True}))
    monkeypatch.setenv("SHPRESTORE_STRICT", "no")
    monkeypatch.setenv("SHPRESTORE_OUTPUT_SUFFIX", "_env")
    cfg = load_config(user)
    assert cfg["strict"] is False
    assert cfg["output_suffix"] == "_env"


def test_unreadable_config_falls_back_to_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("SHPRESTORE_OUTPUT_SUFFIX", raising=False)
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    assert load_config(bad)["output_suffix"] == "_restore"
