"""Configuration loader for the socket chat client."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Mapping

import voluptuous as vol
import yaml

from .const import (
    DEFAULT_BACKOFF_BASE_MS,
    DEFAULT_CONNECT_TIMEOUT_MS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MODE,
    DEFAULT_SERVER_URL,
    DEFAULT_SIMULATED_LATENCY_MS,
)
from .domain.exceptions import ConfigurationError

_LOGGER = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional("server_url", default=DEFAULT_SERVER_URL): vol.All(
            str, vol.Strip, vol.Length(min=1)
        ),
        vol.Optional("max_retries", default=DEFAULT_MAX_RETRIES): vol.All(
            vol.Coerce(int), vol.Range(min=1)
        ),
        vol.Optional("connect_timeout_ms", default=DEFAULT_CONNECT_TIMEOUT_MS): vol.All(
            vol.Coerce(int), vol.Range(min=1)
        ),
        vol.Optional("backoff_base_ms", default=DEFAULT_BACKOFF_BASE_MS): vol.All(
            vol.Coerce(int), vol.Range(min=0)
        ),
        vol.Optional(
            "simulated_latency_ms", default=DEFAULT_SIMULATED_LATENCY_MS
        ): vol.All(vol.Coerce(int), vol.Range(min=0)),
        vol.Optional("mode", default=DEFAULT_MODE): vol.All(
            vol.Lower, vol.In(["simulated", "live"])
        ),
        vol.Optional("log_level", default=DEFAULT_LOG_LEVEL): vol.All(
            vol.Upper, vol.In(LOG_LEVELS)
        ),
    }
)


@dataclass(frozen=True)
class ClientConfig:
    """Immutable client configuration.

    Constructed once at startup and passed to the container.

    Attributes:
        server_url: WebSocket endpoint used in live mode
        max_retries: Maximum automatic retries after a failure
        connect_timeout_ms: Time allowed for the transport to open
        backoff_base_ms: Retry k waits backoff_base_ms * k
        simulated_latency_ms: Artificial reply delay in simulated mode
        mode: "simulated" or "live"
        log_level: Logging level name
    """

    server_url: str = DEFAULT_SERVER_URL
    max_retries: int = DEFAULT_MAX_RETRIES
    connect_timeout_ms: int = DEFAULT_CONNECT_TIMEOUT_MS
    backoff_base_ms: int = DEFAULT_BACKOFF_BASE_MS
    simulated_latency_ms: int = DEFAULT_SIMULATED_LATENCY_MS
    mode: str = DEFAULT_MODE
    log_level: str = DEFAULT_LOG_LEVEL

    def as_dict(self) -> dict[str, Any]:
        """Return the configuration as a plain dict."""
        return asdict(self)


def load_client_config(
    path: str | Path | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> ClientConfig:
    """Load and validate client configuration.

    Values come from the optional YAML file, then from overrides (for
    example command line options). Keys set to None in overrides are
    ignored. Anything missing falls back to the defaults.

    Args:
        path: YAML file to read (optional)
        overrides: Values taking precedence over the file

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    raw: dict[str, Any] = {}

    if path is not None:
        config_file = Path(path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_file}")

        try:
            loaded = yaml.safe_load(config_file.read_text(encoding="utf-8"))
        except yaml.YAMLError as err:
            raise ConfigurationError(f"Invalid YAML: {err}") from err

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigurationError(
                f"Configuration must be a mapping, got {type(loaded).__name__}"
            )
        # Accept an optional top-level "client" section
        section = loaded.get("client", loaded)
        if section is None:
            section = {}
        if not isinstance(section, dict):
            raise ConfigurationError(
                f"Client section must be a mapping, got {type(section).__name__}"
            )
        raw.update(section)

    if overrides:
        raw.update({key: value for key, value in overrides.items() if value is not None})

    try:
        validated = CONFIG_SCHEMA(raw)
    except vol.Invalid as err:
        raise ConfigurationError(f"Invalid configuration: {err}") from err

    config = ClientConfig(**validated)
    _LOGGER.debug("Loaded client configuration: %s", config)
    return config
