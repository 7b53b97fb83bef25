import logging

import pytest

from dispatchbot.config.core import Core
from dispatchbot.config.http import Http
from dispatchbot.config.loader import load_raw_config, resolve_config_path


def test_toml_values_override_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("BOT_TOKEN", "from-env")
    monkeypatch.setenv("HTTP_PORT", "9000")
    path = tmp_path / "config.toml"
    path.write_text(
        '[dispatchbot]\nlog_level = "debug"\n'
        '[dispatchbot.discord]\ntoken_env = "BOT_TOKEN"\n'
        '[dispatchbot.http]\nport = 8181\nenable_http = false\n',
        encoding="utf-8",
    )

    raw = load_raw_config(path)
    core, http = Core(raw), Http(raw)

    assert core.DISCORD_API_TOKEN == "from-env"
    assert core.LOG_LEVEL == logging.DEBUG
    assert http.HTTP_PORT == 8181
    assert http.ENABLE_HTTP is False


def test_environment_fallbacks(monkeypatch, tmp_path):
    monkeypatch.setenv("HTTP_PORT", "9000")
    monkeypatch.setenv("ENABLE_HTTP", "yes")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("DISPATCHBOT_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)

    raw = load_raw_config()
    http = Http(raw)

    assert raw == {}
    assert http.HTTP_PORT == 9000
    assert http.ENABLE_HTTP is True
    assert Core(raw).LOG_LEVEL == logging.INFO


def test_unknown_log_level_is_rejected(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(ValueError, match="LOG_LEVEL"):
        Core({})


def test_config_path_from_environment(monkeypatch, tmp_path):
    path = tmp_path / "bot.toml"
    path.write_text("[dispatchbot.http]\nport = 7000\n", encoding="utf-8")
    monkeypatch.setenv("DISPATCHBOT_CONFIG", str(path))
    monkeypatch.chdir(tmp_path)

    assert resolve_config_path() == path
    assert resolve_config_path("other.toml").name == "other.toml"
    assert Http(load_raw_config()).HTTP_PORT == 7000


def test_named_config_file_must_exist(monkeypatch, tmp_path):
    monkeypatch.setenv("DISPATCHBOT_CONFIG", str(tmp_path / "missing.toml"))

    with pytest.raises(FileNotFoundError, match="missing.toml"):
        load_raw_config()

    with pytest.raises(FileNotFoundError):
        load_raw_config(tmp_path / "also-missing.toml")
