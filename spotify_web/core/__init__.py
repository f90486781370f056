"""
Core module for spotify-web.

This module provides the foundational components used throughout the library:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading and validation
    - logger: Logging setup with colored console output

Usage:
    from spotify_web.core import (
        Config, load_config,
        setup_logging, get_logger,
        SpotifyWebError, ConfigError
    )
"""

from spotify_web.core.config import (
    Config,
    HttpConfig,
    LoggingConfig,
    SerializationConfig,
    SpotifyConfig,
    load_config,
)
from spotify_web.core.exceptions import (
    AuthorizationError,
    ConfigError,
    FormatError,
    InvalidEnumValueError,
    InvalidOperationError,
    MissingFieldError,
    NotSupportedError,
    OperationCancelledError,
    ReleaseDateFormatError,
    SerializationError,
    SpotifyApiError,
    SpotifyWebError,
    StructuralJsonError,
)
from spotify_web.core.logger import get_logger, setup_logging, shutdown_logging

__all__ = [
    # Config
    "Config",
    "SpotifyConfig",
    "HttpConfig",
    "SerializationConfig",
    "LoggingConfig",
    "load_config",
    # Exceptions
    "SpotifyWebError",
    "ConfigError",
    "SerializationError",
    "StructuralJsonError",
    "MissingFieldError",
    "InvalidEnumValueError",
    "FormatError",
    "ReleaseDateFormatError",
    "NotSupportedError",
    "AuthorizationError",
    "InvalidOperationError",
    "OperationCancelledError",
    "SpotifyApiError",
    # Logging
    "setup_logging",
    "get_logger",
    "shutdown_logging",
]
