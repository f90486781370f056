"""
Access tokens and the token endpoint's response shapes.

Token endpoint success body:
    {"access_token": "...", "token_type": "Bearer", "scope": "a b",
     "expires_in": 3600, "refresh_token": "..."}

Token endpoint error body:
    {"error": "invalid_client", "error_description": "Invalid client"}

The expiry of an AccessToken is fixed when it is created: issued_at is the
wall-clock time of construction and expires_in the lifetime the service
granted. has_expired is a pure function of that and the current time.
"""

import time
from dataclasses import dataclass, field

from spotify_web.objectmodel.enums import AuthorizationScopes
from spotify_web.serialization.converter import ObjectConverter, nullable, read_int, read_string
from spotify_web.serialization.enum_converters import AUTHORIZATION_SCOPES_CONVERTER
from spotify_web.serialization.options import SerializerOptions, create_default_options


@dataclass(frozen=True)
class AccessToken:
    """
    Bearer token for Web API requests.

    Attributes:
        value: The token itself. Excluded from repr so it does not end up in logs.
        scope: Scopes the user granted (empty for client-credentials tokens).
        expires_in: Lifetime in seconds, as granted by the accounts service.
        issued_at: Epoch seconds at which the token was received.
        token_type: Always "Bearer" for Spotify.
    """
    value: str = field(repr=False)
    scope: AuthorizationScopes = AuthorizationScopes(0)
    expires_in: int = 0
    issued_at: float = field(default_factory=time.time)
    token_type: str = "Bearer"

    @property
    def expires_at(self) -> float:
        return self.issued_at + self.expires_in

    def has_expired_at(self, now: float) -> bool:
        return now >= self.expires_at

    @property
    def has_expired(self) -> bool:
        return self.has_expired_at(time.time())

    @property
    def authorization_header(self) -> str:
        return f"{self.token_type} {self.value}"


@dataclass(frozen=True)
class AccessRefreshToken:
    """Access token plus the refresh token issued alongside it, if any."""
    access_token: AccessToken
    refresh_token: str | None = field(default=None, repr=False)


@dataclass(frozen=True)
class AuthenticationErrorResponse:
    error: str = ""
    error_description: str = ""


def _read_scope(reader):
    return AUTHORIZATION_SCOPES_CONVERTER.decode_set(reader.get_string().split())


class AccessRefreshTokenConverter(ObjectConverter[AccessRefreshToken]):
    model = AccessRefreshToken
    required_fields = ("access_token", "expires_in")

    def field_readers(self, options):
        return {
            "access_token": read_string,
            "token_type": read_string,
            "scope": nullable(_read_scope),
            "expires_in": read_int,
            "refresh_token": nullable(read_string),
        }

    def create(self, fields):
        access_token = AccessToken(
            value=fields.get("access_token", ""),
            scope=fields.get("scope") or AuthorizationScopes(0),
            expires_in=fields.get("expires_in", 0),
            token_type=fields.get("token_type", "Bearer"),
        )
        return AccessRefreshToken(access_token, fields.get("refresh_token"))


class AuthenticationErrorConverter(ObjectConverter[AuthenticationErrorResponse]):
    model = AuthenticationErrorResponse
    required_fields = ("error",)

    def field_readers(self, options):
        return {
            "error": read_string,
            "error_description": read_string,
        }


def create_token_options() -> SerializerOptions:
    """Strict options understanding both token endpoint bodies."""
    options = create_default_options(strict=True)
    options.add_converter(AccessRefreshToken, AccessRefreshTokenConverter())
    options.add_converter(AuthenticationErrorResponse, AuthenticationErrorConverter())
    return options


TOKEN_OPTIONS = create_token_options()
