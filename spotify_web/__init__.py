"""
spotify-web: typed Spotify Web API object model, JSON converters and OAuth2 flows.

This package turns Spotify Web API payloads into immutable, typed objects
and back, and obtains the access tokens needed to call the API.

Modules:
    core/           - Configuration, logging, exceptions
    objectmodel/    - Enumerations and frozen dataclasses for API resources
    serialization/  - Streaming JSON reader/writer and the converters
    authorization/  - Access tokens, client credentials and authorization code flows
    cli.py          - Developer command-line interface

Usage:
    Command Line:
        spotify-web authorize-url --scope user-read-email --state xyz
        spotify-web token
        spotify-web decode track track.json

    Python API:
        from spotify_web import ClientCredentialsFlow, Track, deserialize_response, load_config

        config = load_config()
        flow = ClientCredentialsFlow.from_config(config)
        response = requests.get(
            "https://api.spotify.com/v1/tracks/11dFghVXANMlKmJXsNCbNl", auth=flow
        )
        track = deserialize_response(response, Track)

Configuration:
    Reads config.yaml from the current directory (or --config), with
    SPOTIFY_CLIENT_ID / SPOTIFY_CLIENT_SECRET / SPOTIFY_REDIRECT_URI
    overriding it from the environment or a .env file:

        spotify:
          client_id: "your_client_id"
          client_secret: "your_client_secret"
          redirect_uri: "http://127.0.0.1:8888/callback"

Dependencies:
    - requests: Token endpoint HTTP calls
    - click: CLI framework
    - colorama: Colored console logging
    - pyyaml: Configuration file parsing
    - python-dotenv: .env support for credentials
"""

__version__ = "0.1.0"
__author__ = "spotify-web"
__license__ = "MIT"

# Convenience imports for common usage
from spotify_web.authorization import (
    AccessToken,
    AuthorizationCodeFlow,
    ClientCredentialsFlow,
)
from spotify_web.core import (
    AuthorizationError,
    Config,
    ConfigError,
    SerializationError,
    SpotifyWebError,
    get_logger,
    load_config,
    setup_logging,
)
from spotify_web.objectmodel import (
    Album,
    Artist,
    AuthorizationScopes,
    Episode,
    Paging,
    PrivateUser,
    PublicUser,
    Track,
)
from spotify_web.serialization import deserialize, deserialize_response, serialize

__all__ = [
    # Version
    "__version__",
    # Core
    "Config",
    "load_config",
    "setup_logging",
    "get_logger",
    # Exceptions
    "SpotifyWebError",
    "ConfigError",
    "SerializationError",
    "AuthorizationError",
    # Authorization
    "AccessToken",
    "ClientCredentialsFlow",
    "AuthorizationCodeFlow",
    # Models
    "Album",
    "Artist",
    "AuthorizationScopes",
    "Episode",
    "Paging",
    "PrivateUser",
    "PublicUser",
    "Track",
    # Serialization
    "deserialize",
    "deserialize_response",
    "serialize",
]
