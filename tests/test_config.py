import logging

import pytest

from collab_primitives.core.config import Config, _parse_int
from collab_primitives.main import main
from collab_primitives.services.fixtures import random_text


def test_defaults_validate():
    Config.validate()
    assert isinstance(Config.log_level(), int)


def test_parse_int():
    assert _parse_int("SOME_LIMIT", "12", 3) == 12
    assert _parse_int("SOME_LIMIT", "  ", 3) == 3
    assert _parse_int("SOME_LIMIT", "", 3) == 3
    with pytest.raises(ValueError, match="SOME_LIMIT") as exc_info:
        _parse_int("SOME_LIMIT", "many", 3)
    assert exc_info.value.__cause__ is None


def test_empty_settings_fall_back_to_defaults(monkeypatch):
    monkeypatch.setattr(Config, "FIXTURE_SEED_ENV", "")
    monkeypatch.setattr(Config, "FIXTURE_LENGTH_ENV", "")
    monkeypatch.setattr(Config, "DEFAULT_MERGE_LIMIT_ENV", "")
    assert Config.fixture_seed() == 0
    assert Config.fixture_length() == 64
    assert Config.default_merge_limit() == 100


def test_non_integer_setting_fails_in_validate(monkeypatch):
    monkeypatch.setattr(Config, "FIXTURE_LENGTH_ENV", "lots")
    with pytest.raises(ValueError, match="FIXTURE_LENGTH"):
        Config.validate()


def test_negative_settings_rejected(monkeypatch):
    monkeypatch.setattr(Config, "DEFAULT_MERGE_LIMIT_ENV", "-1")
    with pytest.raises(ValueError, match="DEFAULT_MERGE_LIMIT"):
        Config.validate()


def test_unknown_log_level_rejected(monkeypatch):
    monkeypatch.setattr(Config, "LOG_LEVEL", "CHATTY")
    with pytest.raises(ValueError, match="LOG_LEVEL"):
        Config.validate()


def test_log_level_lookup(monkeypatch):
    monkeypatch.setattr(Config, "LOG_LEVEL", "DEBUG")
    assert Config.log_level() == logging.DEBUG


def test_main_prints_fixture_text(monkeypatch, capsys):
    monkeypatch.setattr(Config, "FIXTURE_SEED_ENV", "5")
    assert main(["16"]) == 0
    out = capsys.readouterr().out
    assert out[:-1] == random_text(5, 16)


def test_main_rejects_bad_length(capsys):
    assert main(["lots"]) == 2
    assert main(["-3"]) == 2


def test_main_reports_invalid_configuration(monkeypatch, capsys):
    monkeypatch.setattr(Config, "FIXTURE_SEED_ENV", "seven")
    assert main([]) == 2
    assert "FIXTURE_SEED" in capsys.readouterr().err
