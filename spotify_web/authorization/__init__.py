"""
OAuth2 authorization for the Spotify accounts service.

    - tokens: Access tokens and token endpoint response shapes
    - flows: Client-credentials and authorization-code flows

Usage:
    from spotify_web.authorization import ClientCredentialsFlow

    flow = ClientCredentialsFlow(client_id, client_secret)
    token = flow.get_access_token()
"""

from spotify_web.authorization.flows import (
    AUTHORIZE_URL,
    TOKEN_URL,
    AuthorizationCodeFlow,
    AuthorizationFlow,
    ClientCredentialsFlow,
)
from spotify_web.authorization.tokens import (
    AccessRefreshToken,
    AccessToken,
    AuthenticationErrorResponse,
)

__all__ = [
    "AUTHORIZE_URL",
    "TOKEN_URL",
    "AuthorizationCodeFlow",
    "AuthorizationFlow",
    "ClientCredentialsFlow",
    "AccessRefreshToken",
    "AccessToken",
    "AuthenticationErrorResponse",
]
