"""
Configuration management for spotify-web.

This module handles loading, validating, and providing access to the
library configuration stored in config.yaml, with sensitive values
overridable from environment variables (or a .env file).

The configuration file contains:
    - Spotify application credentials (client_id, client_secret)
    - Optional redirect URI for the authorization-code flow
    - HTTP timeout used for token requests
    - Serialization strictness
    - Logging level and optional log file

Configuration File Location:
    An explicit path may be given; otherwise config.yaml is looked up in
    the current working directory. The default file is optional as long as
    the credentials come from the environment.

Environment Overrides:
    SPOTIFY_CLIENT_ID, SPOTIFY_CLIENT_SECRET, SPOTIFY_REDIRECT_URI

Example config.yaml:
    spotify:
      client_id: "your_client_id_here"
      client_secret: "your_client_secret_here"
      redirect_uri: "http://127.0.0.1:8888/callback"

    http:
      timeout: 30

    serialization:
      strict: false

    logging:
      level: INFO
      file: null
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from spotify_web.core.exceptions import ConfigError


# Default configuration file name (looked up in current working directory)
CONFIG_FILENAME = "config.yaml"

DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_LOG_LEVEL = "INFO"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "SPOTIFY_CLIENT_ID": ("spotify", "client_id"),
    "SPOTIFY_CLIENT_SECRET": ("spotify", "client_secret"),
    "SPOTIFY_REDIRECT_URI": ("spotify", "redirect_uri"),
}


@dataclass(frozen=True)
class SpotifyConfig:
    """
    Spotify application credentials.

    These credentials are obtained from the Spotify Developer Dashboard:
    https://developer.spotify.com/dashboard

    Attributes:
        client_id: The Spotify application client ID.
        client_secret: The Spotify application client secret.
        redirect_uri: Redirect URI registered for the application, required
                      only by the authorization-code flow.
    """
    client_id: str
    client_secret: str
    redirect_uri: str | None = None


@dataclass(frozen=True)
class HttpConfig:
    """
    HTTP behavior configuration.

    Attributes:
        timeout: Seconds to wait for the accounts service before giving up.
    """
    timeout: float = DEFAULT_HTTP_TIMEOUT


@dataclass(frozen=True)
class SerializationConfig:
    """
    Attributes:
        strict: When True, objects missing required fields (id, uri) fail to
                decode instead of receiving default values.
    """
    strict: bool = False


@dataclass(frozen=True)
class LoggingConfig:
    """
    Attributes:
        level: Console log level name.
        file: Optional path of a log file receiving DEBUG and above.
    """
    level: str = DEFAULT_LOG_LEVEL
    file: Path | None = None


@dataclass(frozen=True)
class Config:
    """
    Complete library configuration.

    Created by load_config() and treated as immutable.

    Attributes:
        spotify: Application credentials.
        http: HTTP settings for token requests.
        serialization: Converter settings.
        logging: Logging settings.

    Example:
        config = load_config()
        flow = ClientCredentialsFlow.from_config(config)
    """
    spotify: SpotifyConfig
    http: HttpConfig
    serialization: SerializationConfig
    logging: LoggingConfig


def load_config(config_path: Path | None = None) -> Config:
    """
    Load and validate configuration from config.yaml and the environment.

    Args:
        config_path: Optional explicit path to config file.
                     If None, looks for config.yaml in current working directory.

    Returns:
        Config: A frozen dataclass containing all configuration values.

    Raises:
        ConfigError: If an explicit config file is not found, the YAML is
                     invalid, credentials are missing, or a value is invalid.

    Behavior:
        1. Load .env into the process environment (existing variables win)
        2. Read and parse the YAML file if present
        3. Apply environment overrides
        4. Validate each section and build the frozen Config
    """
    load_dotenv()

    explicit = config_path is not None
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        raw_config = _read_yaml(config_path)
    elif explicit:
        raise ConfigError(
            f"Configuration file not found: {config_path}",
            details={"file_path": str(config_path)}
        )
    else:
        raw_config = {}

    for section in ("spotify", "http", "serialization", "logging"):
        value = raw_config.get(section)
        if value is not None and not isinstance(value, dict):
            raise ConfigError(
                f"Section '{section}' must be a dictionary",
                details={"section": section}
            )

    spotify_section = _apply_env_overrides(dict(raw_config.get("spotify") or {}))

    return Config(
        spotify=_parse_spotify_config(spotify_section),
        http=_parse_http_config(raw_config.get("http")),
        serialization=_parse_serialization_config(raw_config.get("serialization")),
        logging=_parse_logging_config(raw_config.get("logging")),
    )


def _read_yaml(config_path: Path) -> dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    try:
        raw_config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    # An empty file parses to None
    if raw_config is None:
        return {}

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )

    return raw_config


def _apply_env_overrides(spotify_section: dict[str, Any]) -> dict[str, Any]:
    """Overlay non-empty environment variables onto the spotify section."""
    for env_var, (_, key) in ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value:
            spotify_section[key] = value
    return spotify_section


def _parse_spotify_config(spotify_section: dict[str, Any]) -> SpotifyConfig:
    """
    Parse and validate the Spotify configuration section.

    Raises:
        ConfigError: If client_id or client_secret is missing or empty,
                     or redirect_uri is present but not a string.
    """
    client_id = spotify_section.get("client_id", "")
    client_secret = spotify_section.get("client_secret", "")
    redirect_uri = spotify_section.get("redirect_uri")

    if not isinstance(client_id, str) or not client_id.strip():
        raise ConfigError(
            "'spotify.client_id' must be a non-empty string",
            details={"field": "spotify.client_id"}
        )

    if not isinstance(client_secret, str) or not client_secret.strip():
        raise ConfigError(
            "'spotify.client_secret' must be a non-empty string",
            details={"field": "spotify.client_secret"}
        )

    if redirect_uri is not None:
        if not isinstance(redirect_uri, str) or not redirect_uri.strip():
            raise ConfigError(
                "'spotify.redirect_uri' must be a non-empty string or null",
                details={"field": "spotify.redirect_uri"}
            )
        redirect_uri = redirect_uri.strip()

    return SpotifyConfig(
        client_id=client_id.strip(),
        client_secret=client_secret.strip(),
        redirect_uri=redirect_uri,
    )


def _parse_http_config(http_section: dict[str, Any] | None) -> HttpConfig:
    if not http_section:
        return HttpConfig()

    timeout = http_section.get("timeout", DEFAULT_HTTP_TIMEOUT)
    # bool is an int subclass, reject it explicitly
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(
            "'http.timeout' must be a positive number",
            details={"field": "http.timeout", "value": timeout}
        )
    return HttpConfig(timeout=float(timeout))


def _parse_serialization_config(section: dict[str, Any] | None) -> SerializationConfig:
    if not section:
        return SerializationConfig()

    strict = section.get("strict", False)
    if not isinstance(strict, bool):
        raise ConfigError(
            "'serialization.strict' must be true or false",
            details={"field": "serialization.strict", "value": strict}
        )
    return SerializationConfig(strict=strict)


def _parse_logging_config(logging_section: dict[str, Any] | None) -> LoggingConfig:
    """
    Parse and validate the logging configuration section.

    Applies defaults if the section is missing. The log file path has ~
    expanded but the file is not created here.
    """
    if not logging_section:
        return LoggingConfig()

    level = logging_section.get("level", DEFAULT_LOG_LEVEL)
    if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
        raise ConfigError(
            f"'logging.level' must be one of {', '.join(VALID_LOG_LEVELS)}",
            details={"field": "logging.level", "value": level}
        )

    raw_file = logging_section.get("file")
    log_file = None
    if raw_file is not None:
        if not isinstance(raw_file, str) or not raw_file.strip():
            raise ConfigError(
                "'logging.file' must be a string path or null",
                details={"field": "logging.file"}
            )
        log_file = Path(raw_file.strip()).expanduser()

    return LoggingConfig(level=level.upper(), file=log_file)
