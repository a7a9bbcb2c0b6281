"""Unit tests for the settings migration runner."""

from __future__ import annotations

import json

import pytest

from seerr.core.settings.migrator import SettingsMigrationError, run_migrations, write_settings_file


def _rename_title(settings):
    settings.setdefault("main", {})["applicationTitle"] = "Renamed"
    return settings


def _noop(settings):
    return settings


def _boom(settings):
    raise ValueError("broken")


def test_changed_document_is_written_with_backup(tmp_path):
    path = tmp_path / "settings.json"
    write_settings_file(path, {"main": {"applicationTitle": "Old"}})

    migrated = run_migrations(json.loads(path.read_text()), path, [("rename", _rename_title)])

    assert migrated["main"]["applicationTitle"] == "Renamed"
    assert json.loads(path.read_text())["main"]["applicationTitle"] == "Renamed"
    assert json.loads((tmp_path / "settings.json.bak").read_text())["main"]["applicationTitle"] == "Old"


def test_unchanged_document_is_left_alone(tmp_path):
    path = tmp_path / "settings.json"
    write_settings_file(path, {"main": {}})

    run_migrations(json.loads(path.read_text()), path, [("noop", _noop)])

    assert not (tmp_path / "settings.json.bak").exists()


def test_without_path_only_returns_document():
    assert run_migrations({}, None, [("rename", _rename_title)]) == {"main": {"applicationTitle": "Renamed"}}


def test_failure_names_the_migration(tmp_path):
    path = tmp_path / "settings.json"
    write_settings_file(path, {"main": {}})

    with pytest.raises(SettingsMigrationError) as exc_info:
        run_migrations({"main": {}}, path, [("noop", _noop), ("broken", _boom)])

    assert exc_info.value.migration_id == "broken"
    assert isinstance(exc_info.value.__cause__, ValueError)
    assert not (tmp_path / "settings.json.bak").exists()


def test_default_chain_is_idempotent():
    once = run_migrations({"main": {"hideBlacklisted": True}})
    twice = run_migrations(json.loads(json.dumps(once)))

    assert twice == once


def test_write_settings_file_creates_directories(tmp_path):
    path = tmp_path / "nested" / "settings.json"

    write_settings_file(path, {"a": 1})

    assert json.loads(path.read_text()) == {"a": 1}
    assert not (tmp_path / "nested" / "settings.json.tmp").exists()
