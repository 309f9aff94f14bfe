"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, no
string-key dict lookups.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from waypoint.errors import ConfigurationError

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8000

# Checked in order; the first variable that is set wins
HOST_ENV_VARS = ("WAYPOINT_HOST", "HOST")
PORT_ENV_VARS = ("WAYPOINT_PORT", "PORT")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    Override what you need::

        config = AppConfig(port=3000, debug=True)

    or read the bind address from the environment::

        config = AppConfig.from_env()
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    debug: bool = False
    log_level: str = "info"

    @property
    def effective_log_level(self) -> str:
        """``debug`` when debug mode is on, otherwise ``log_level``."""
        return "debug" if self.debug else self.log_level

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: object,
    ) -> AppConfig:
        """Build a config whose host and port honour environment overrides.

        Falls back to ``localhost`` and ``8000`` when no variable is set.
        Keyword *overrides*, ``host`` and ``port`` included, win over the
        environment. Raises ``ConfigurationError`` if the port is not a
        valid integer.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {"host": _first(env, HOST_ENV_VARS) or DEFAULT_HOST}
        if "port" not in overrides:
            raw_port = _first(env, PORT_ENV_VARS)
            values["port"] = DEFAULT_PORT if raw_port is None else _parse_port(raw_port)
        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]


def _first(env: Mapping[str, str], names: tuple[str, ...]) -> str | None:
    for name in names:
        value = env.get(name)
        if value:
            return value
    return None


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        msg = f"Invalid port {raw!r}: expected an integer."
        raise ConfigurationError(msg) from None
    if not 0 <= port <= 65535:
        msg = f"Invalid port {port}: must be between 0 and 65535."
        raise ConfigurationError(msg)
    return port
