"""Tests for waypoint.config — AppConfig and environment overrides."""

import pytest

from waypoint.config import AppConfig
from waypoint.errors import ConfigurationError


class TestAppConfig:
    def test_defaults(self) -> None:
        cfg = AppConfig()
        assert cfg.host == "localhost"
        assert cfg.port == 8000
        assert cfg.debug is False
        assert cfg.log_level == "info"

    def test_override(self) -> None:
        cfg = AppConfig(host="0.0.0.0", port=3000, debug=True)
        assert cfg.host == "0.0.0.0"
        assert cfg.port == 3000

    def test_frozen(self) -> None:
        cfg = AppConfig()
        with pytest.raises(AttributeError):
            cfg.debug = True  # type: ignore[misc]


class TestFromEnv:
    def test_fallbacks(self) -> None:
        cfg = AppConfig.from_env({})
        assert cfg.host == "localhost"
        assert cfg.port == 8000

    def test_prefixed_variables(self) -> None:
        cfg = AppConfig.from_env({"WAYPOINT_HOST": "0.0.0.0", "WAYPOINT_PORT": "9000"})
        assert cfg.host == "0.0.0.0"
        assert cfg.port == 9000

    def test_generic_variables(self) -> None:
        cfg = AppConfig.from_env({"HOST": "127.0.0.1", "PORT": "5000"})
        assert cfg.host == "127.0.0.1"
        assert cfg.port == 5000

    def test_prefixed_wins_over_generic(self) -> None:
        cfg = AppConfig.from_env({"WAYPOINT_PORT": "9000", "PORT": "5000"})
        assert cfg.port == 9000

    def test_empty_value_falls_back(self) -> None:
        assert AppConfig.from_env({"HOST": ""}).host == "localhost"

    def test_reads_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WAYPOINT_PORT", "8123")
        assert AppConfig.from_env().port == 8123

    def test_extra_overrides(self) -> None:
        cfg = AppConfig.from_env({}, debug=True, log_level="debug")
        assert cfg.debug is True
        assert cfg.log_level == "debug"

    def test_host_keyword_wins_over_environment(self) -> None:
        cfg = AppConfig.from_env({"HOST": "127.0.0.1"}, host="0.0.0.0")
        assert cfg.host == "0.0.0.0"

    def test_host_keyword_without_environment(self) -> None:
        assert AppConfig.from_env({}, host="0.0.0.0").host == "0.0.0.0"

    def test_port_keyword_skips_environment_parsing(self) -> None:
        cfg = AppConfig.from_env({"PORT": "eighty"}, port=0)
        assert cfg.port == 0

    def test_invalid_port(self) -> None:
        with pytest.raises(ConfigurationError, match="expected an integer"):
            AppConfig.from_env({"PORT": "eighty"})

    def test_out_of_range_port(self) -> None:
        with pytest.raises(ConfigurationError, match="between 0 and 65535"):
            AppConfig.from_env({"PORT": "70000"})


class TestEffectiveLogLevel:
    def test_uses_log_level(self) -> None:
        assert AppConfig(log_level="warning").effective_log_level == "warning"

    def test_debug_forces_debug_level(self) -> None:
        assert AppConfig(debug=True, log_level="warning").effective_log_level == "debug"
