"""Unit tests for services/config_service.py.

Uses a real ConfigService pointed at a tmp_path directory.
"""

from __future__ import annotations

import json
import logging
import stat

import pytest
from pydantic import ValidationError

from pathly_cli.models import TimePeriod
from pathly_cli.services.config_service import ConfigService, get_config_service


@pytest.fixture()
def svc(tmp_path) -> ConfigService:
    """ConfigService backed by a temporary directory."""
    return ConfigService(config_dir=tmp_path / "config", data_dir=tmp_path / "data")


def test_defaults_on_first_run(svc, tmp_path):
    assert svc.config.output.format == "pretty"
    assert svc.config.goals.default_points == 10
    assert svc.db_path == tmp_path / "data" / "vault.db"
    assert not svc.config_path.exists()


def test_set_persists_and_coerces(svc):
    svc.set("output.color", "false")
    svc.set("goals.default_period", "weekly")

    saved = json.loads(svc.config_path.read_text())
    assert saved["output"]["color"] is False
    assert ConfigService(svc.config_dir, svc.data_dir).config.goals.default_period == TimePeriod.WEEKLY


def test_saved_file_is_private(svc):
    svc.save_config()
    assert stat.S_IMODE(svc.config_path.stat().st_mode) == 0o600


def test_set_unknown_key(svc):
    with pytest.raises(KeyError):
        svc.set("output.colour", "true")
    with pytest.raises(KeyError):
        svc.set("output", "json")


def test_set_invalid_value(svc):
    with pytest.raises(ValidationError):
        svc.set("output.format", "xml")
    assert svc.get("output.format") == "pretty"


def test_log_level_is_normalized(svc):
    svc.set("logging.level", " debug ")
    assert svc.get("logging.level") == "DEBUG"


def test_db_path_override(svc, tmp_path):
    svc.set("storage.db_path", str(tmp_path / "elsewhere.db"))
    assert svc.db_path == tmp_path / "elsewhere.db"


def test_reset_single_key(svc):
    svc.set("goals.default_points", "25")
    svc.set("output.format", "json")

    svc.reset_config("goals.default_points")

    assert svc.get("goals.default_points") == 10
    assert svc.get("output.format") == "json"


def test_reset_all(svc):
    svc.set("output.format", "yaml")
    svc.reset_config()
    assert svc.get("output.format") == "pretty"


def test_corrupt_config_falls_back_to_defaults(svc, caplog):
    svc.config_dir.mkdir(parents=True)
    svc.config_path.write_text("{not json")

    with caplog.at_level(logging.WARNING):
        config = svc.load_config()

    assert config.output.format == "pretty"
    assert "ignoring unreadable config" in caplog.text


def test_list_settings_uses_dotted_keys(svc):
    settings = svc.list_settings()
    assert settings["output.format"] == "pretty"
    assert settings["goals.default_period"] == "ongoing"
    assert "storage.db_path" in settings


def test_get_config_service_is_cached(isolated_dirs):
    first = get_config_service()
    assert first is get_config_service()
    assert first.config_dir == isolated_dirs
