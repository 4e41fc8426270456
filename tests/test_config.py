"""Tests for backlog.lib.config module."""

from pathlib import Path
from unittest.mock import patch

import pytest

from backlog.lib.config import (
    BacklogConfig,
    apply_cli_overrides,
    config_from_env,
    load_config,
)


class TestConfigFromEnv:
    def test_defaults(self):
        assert config_from_env({}) == BacklogConfig()

    def test_values(self):
        config = config_from_env({
            "DB_PATH": "work.json",
            "LOG_LEVEL": "info",
            "LOG_FILE": "logs/backlog.log",
            "LOCK_TIMEOUT": "10",
            "CLEAR_SCREEN": "false",
        })
        assert config.db_path == Path("work.json")
        assert config.log_level == "INFO"
        assert config.log_file == Path("logs/backlog.log")
        assert config.lock_timeout == 10
        assert config.clear_screen is False

    def test_invalid_log_level_defaults_with_warning(self, caplog):
        config = config_from_env({"LOG_LEVEL": "chatty"})
        assert config.log_level == "WARNING"
        assert "Unknown LOG_LEVEL 'chatty'" in caplog.text

    @pytest.mark.parametrize("value", ["soon", "-1"])
    def test_invalid_timeout_defaults_with_warning(self, value, caplog):
        config = config_from_env({"LOCK_TIMEOUT": value})
        assert config.lock_timeout == 5
        assert "LOCK_TIMEOUT" in caplog.text


class TestLoadConfig:
    def test_explicit_file(self, tmp_path):
        path = tmp_path / "backlog.env"
        path.write_text("DB_PATH=from_file.json\n")
        assert load_config(path, environ={}).db_path == Path("from_file.json")

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.env", environ={})

    def test_missing_default_file_is_fine(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_config(environ={}) == BacklogConfig()

    def test_default_file_in_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "backlog.env").write_text("LOG_LEVEL=ERROR\n")
        assert load_config(environ={}).log_level == "ERROR"

    def test_environment_overrides_file(self, tmp_path):
        path = tmp_path / "backlog.env"
        path.write_text("DB_PATH=from_file.json\n")
        config = load_config(path, environ={"BACKLOG_DB_PATH": "from_env.json"})
        assert config.db_path == Path("from_env.json")

    @patch("backlog.lib.config.envparse.load_env")
    def test_uses_envparse(self, mock_load_env, tmp_path):
        mock_load_env.return_value = {"LOCK_TIMEOUT": "1"}
        assert load_config(tmp_path / "x.env", environ={}).lock_timeout == 1


class TestCliOverrides:
    def test_db_and_verbose(self):
        config = apply_cli_overrides(BacklogConfig(), db_path="cli.json", verbose=True)
        assert config.db_path == Path("cli.json")
        assert config.log_level == "DEBUG"

    def test_no_flags_keeps_config(self):
        base = BacklogConfig(log_level="ERROR")
        assert apply_cli_overrides(base) == base
