# Area: Shared Tests
# PRD: docs/prd-turnflow.md
"""Tests for session config loading and validation."""

import json
import logging
from unittest.mock import patch

import pytest

from turnflow._config import ENV_MAPPINGS, SessionConfig, load_config, validate_config
from turnflow._match.enums import QuitExclusion
from turnflow.errors import ConfigError


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV_MAPPINGS:
        monkeypatch.delenv(key, raising=False)
    with patch("turnflow._config.load_dotenv") as mock_dotenv:
        yield mock_dotenv


class TestValidateConfig:
    """Tests for validate_config()."""

    def test_defaults(self):
        """Test only the local player is required."""
        config = validate_config({"local_player_id": "me"})
        assert isinstance(config, SessionConfig)
        assert config.turn_timeout_seconds == 600
        assert config.exchange_timeout_seconds == 120
        assert config.quit_exclusion is QuitExclusion.ON_CONFIRMATION
        assert config.reminder_throttle_ratio == 0.5

    def test_missing_local_player(self):
        """Test a missing local player id is reported by name."""
        with pytest.raises(ConfigError, match="local_player_id"):
            validate_config({"turn_timeout_seconds": 60})

    def test_invalid_values(self):
        """Test out-of-range values become a ConfigError."""
        with pytest.raises(ConfigError, match="turn_timeout_seconds"):
            validate_config({"local_player_id": "me", "turn_timeout_seconds": 0})
        with pytest.raises(ConfigError, match="reminder_throttle_ratio"):
            validate_config({"local_player_id": "me", "reminder_throttle_ratio": 2})

    def test_strings_are_coerced(self):
        """Test values read from the environment validate as strings."""
        config = validate_config({
            "local_player_id": "me",
            "turn_timeout_seconds": "30",
            "quit_exclusion": "immediate",
            "log_level": "debug",
        })
        assert config.turn_timeout_seconds == 30
        assert config.quit_exclusion is QuitExclusion.IMMEDIATE
        assert config.log_level == "DEBUG"
        assert config.logging_level == logging.DEBUG

    def test_unknown_log_level(self):
        """Test an unknown log level is rejected."""
        with pytest.raises(ConfigError, match="log_level"):
            validate_config({"local_player_id": "me", "log_level": "LOUD"})


class TestLoadConfig:
    """Tests for load_config()."""

    def test_reads_json_file(self, tmp_path, clean_env):
        """Test values come from the JSON config file."""
        path = tmp_path / "turnflow.json"
        path.write_text(json.dumps({"local_player_id": "alice", "turn_timeout_seconds": 90}))

        config = load_config(path)

        assert config == {"local_player_id": "alice", "turn_timeout_seconds": 90}
        clean_env.assert_called_once()

    def test_environment_overrides_file(self, tmp_path, clean_env, monkeypatch):
        """Test TURNFLOW_* variables win over the file."""
        path = tmp_path / "turnflow.json"
        path.write_text(json.dumps({"local_player_id": "alice"}))
        monkeypatch.setenv("TURNFLOW_LOCAL_PLAYER_ID", "bob")
        monkeypatch.setenv("TURNFLOW_QUIT_EXCLUSION", "immediate")

        config = load_config(path)

        assert config["local_player_id"] == "bob"
        assert config["quit_exclusion"] == "immediate"

    def test_missing_file_is_logged(self, tmp_path, clean_env):
        """Test a missing config file falls back to the environment."""
        with patch("turnflow._config.logger") as mock_logger:
            assert load_config(tmp_path / "absent.json") == {}
            mock_logger.warning.assert_called_once()
