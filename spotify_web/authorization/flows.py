"""
OAuth2 authorization flows for the Spotify accounts service.

Both flows hold the most recent access token and hand it out until it
expires, then obtain a new one:

    ClientCredentialsFlow
        NoToken/Expired --client_credentials grant--> Valid

    AuthorizationCodeFlow
        NoToken --authorization_code grant--> Valid
        Expired --refresh_token grant--> Valid
        (Expired without a refresh token raises InvalidOperationError)

Token requests are HTTP POSTs to the token endpoint with a form body and
an HTTP Basic header built from the client ID and secret. Failures are
never retried: non-2xx answers raise AuthorizationError, network errors
from requests propagate unchanged.

Each flow serializes its check-then-request sequence with a lock, so
concurrent callers during an expiry window share a single token request.

Flows are also requests auth objects:

    flow = ClientCredentialsFlow(client_id, client_secret)
    requests.get("https://api.spotify.com/v1/tracks/...", auth=flow)
"""

import base64
import threading
from abc import ABCMeta, abstractmethod
from urllib.parse import quote, urlencode

import requests
from requests.auth import AuthBase

from spotify_web.authorization.tokens import (
    TOKEN_OPTIONS,
    AccessRefreshToken,
    AccessToken,
    AuthenticationErrorResponse,
)
from spotify_web.core.config import Config
from spotify_web.core.exceptions import (
    AuthorizationError,
    ConfigError,
    InvalidOperationError,
    OperationCancelledError,
    SerializationError,
)
from spotify_web.core.logger import get_logger
from spotify_web.objectmodel.enums import AuthorizationScopes
from spotify_web.serialization.enum_converters import AUTHORIZATION_SCOPES_CONVERTER
from spotify_web.serialization.options import deserialize


logger = get_logger(__name__)

TOKEN_URL = "https://accounts.spotify.com/api/token"
AUTHORIZE_URL = "https://accounts.spotify.com/authorize"
DEFAULT_TIMEOUT = 30.0


def _raise_if_cancelled(cancel_event: threading.Event | None) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise OperationCancelledError("Token request was cancelled")


class AuthorizationFlow(AuthBase, metaclass=ABCMeta):
    """
    Abstract base holding the common state of the authorization flows.

    Subclasses implement get_access_token().

    Args:
        client_id: Spotify application client ID.
        client_secret: Spotify application client secret.
        http_client: Object with a requests-compatible post() method.
                     Defaults to a new requests.Session.
        timeout: Seconds to wait for the accounts service.

    Attributes:
        current_access_token: Most recently obtained token, None until the
                              first successful request.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        http_client: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.client_id = client_id
        self._client_secret = client_secret
        self.http_client = http_client if http_client is not None else requests.Session()
        self.timeout = timeout
        self.current_access_token: AccessToken | None = None
        self._lock = threading.RLock()

    @property
    def basic_authentication_header(self) -> str:
        credentials = f"{self.client_id}:{self._client_secret}".encode("utf-8")
        return "Basic " + base64.b64encode(credentials).decode("ascii")

    @abstractmethod
    def get_access_token(self, cancel_event: threading.Event | None = None) -> AccessToken:
        """
        Return a valid access token, requesting a new one when needed.

        Args:
            cancel_event: Optional event, checked twice: before the request
                          is sent and after the response arrives. When it is
                          set at either point the call raises
                          OperationCancelledError and the held token is left
                          unchanged. A request already in flight is not
                          interrupted; it runs until the response arrives or
                          the timeout expires, and its result is then
                          discarded.

        Raises:
            AuthorizationError: The accounts service rejected the request.
            OperationCancelledError: cancel_event was set.
            requests.RequestException: Network failure.
        """
        raise NotImplementedError

    def __call__(self, request):
        request.headers["Authorization"] = self.get_access_token().authorization_header
        return request

    def _request_token(
        self,
        form: dict[str, str],
        cancel_event: threading.Event | None,
    ) -> AccessRefreshToken:
        _raise_if_cancelled(cancel_event)
        logger.debug("Requesting access token (grant_type=%s)", form["grant_type"])

        response = self.http_client.post(
            TOKEN_URL,
            data=form,
            headers={"Authorization": self.basic_authentication_header},
            timeout=self.timeout,
        )
        try:
            _raise_if_cancelled(cancel_event)
            if 200 <= response.status_code < 300:
                token = deserialize(response.content, AccessRefreshToken, TOKEN_OPTIONS)
                logger.debug("Access token received, expires in %ss", token.access_token.expires_in)
                return token
            self._raise_authorization_error(response)
        finally:
            response.close()

    @staticmethod
    def _raise_authorization_error(response) -> None:
        try:
            body = deserialize(response.content, AuthenticationErrorResponse, TOKEN_OPTIONS)
        except SerializationError as e:
            raise AuthorizationError(
                response.status_code,
                "invalid_response",
                response.text[:200],
            ) from e

        logger.debug("Token request failed: HTTP %s %s", response.status_code, body.error)
        raise AuthorizationError(response.status_code, body.error, body.error_description)


class ClientCredentialsFlow(AuthorizationFlow):
    """
    Application-only authorization; grants access to public data only.

    Example:
        flow = ClientCredentialsFlow.from_config(load_config())
        token = flow.get_access_token()
    """

    @classmethod
    def from_config(
        cls,
        config: Config,
        http_client: requests.Session | None = None,
    ) -> "ClientCredentialsFlow":
        return cls(
            config.spotify.client_id,
            config.spotify.client_secret,
            http_client=http_client,
            timeout=config.http.timeout,
        )

    def get_access_token(self, cancel_event: threading.Event | None = None) -> AccessToken:
        with self._lock:
            token = self.current_access_token
            if token is not None and not token.has_expired:
                return token

            logger.info("Requesting client credentials token")
            result = self._request_token({"grant_type": "client_credentials"}, cancel_event)
            self.current_access_token = result.access_token
            return result.access_token


class AuthorizationCodeFlow(AuthorizationFlow):
    """
    User authorization through the authorization-code grant.

    The user first visits the URL from create_authorization_url() and is
    redirected back with a one-time code; the flow exchanges that code for
    an access token and a refresh token, then refreshes on expiry.

    Args:
        code: Authorization code from the redirect.
        redirect_uri: The redirect URI used to obtain the code.

    Attributes:
        refresh_token: Latest refresh token; kept when a refresh response
                       does not carry a new one.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        code: str,
        redirect_uri: str,
        http_client: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        super().__init__(client_id, client_secret, http_client=http_client, timeout=timeout)
        self.code = code
        self.redirect_uri = redirect_uri
        self.refresh_token: str | None = None

    @classmethod
    def from_config(
        cls,
        config: Config,
        code: str,
        http_client: requests.Session | None = None,
    ) -> "AuthorizationCodeFlow":
        """
        Raises:
            ConfigError: If the configuration has no redirect URI.
        """
        if not config.spotify.redirect_uri:
            raise ConfigError(
                "'spotify.redirect_uri' is required for the authorization code flow",
                details={"field": "spotify.redirect_uri"}
            )
        return cls(
            config.spotify.client_id,
            config.spotify.client_secret,
            code,
            config.spotify.redirect_uri,
            http_client=http_client,
            timeout=config.http.timeout,
        )

    @staticmethod
    def create_authorization_url(
        client_id: str,
        redirect_uri: str,
        state: str | None = None,
        scopes: AuthorizationScopes | None = None,
        show_dialog: bool | None = None,
    ) -> str:
        """
        Build the URL the user must visit to authorize the application.

        Args:
            client_id: Spotify application client ID.
            redirect_uri: URI the user is sent back to with the code.
            state: Opaque value echoed back in the redirect (CSRF protection).
            scopes: Scopes to request; omitted when None or empty.
            show_dialog: Force the consent dialog even if already approved.

        Returns:
            https://accounts.spotify.com/authorize?client_id=...&response_type=code&...
            with every value percent-encoded (spaces as %20).
        """
        params = [
            ("client_id", client_id),
            ("response_type", "code"),
            ("redirect_uri", redirect_uri),
        ]
        if state is not None:
            params.append(("state", state))
        if scopes:
            params.append(("scope", " ".join(AUTHORIZATION_SCOPES_CONVERTER.encode_set(scopes))))
        if show_dialog is not None:
            params.append(("show_dialog", "true" if show_dialog else "false"))

        return f"{AUTHORIZE_URL}?{urlencode(params, safe='', quote_via=quote)}"

    def get_access_token(self, cancel_event: threading.Event | None = None) -> AccessToken:
        """
        Raises:
            InvalidOperationError: If the token expired and no refresh token
                                   was ever issued.
        """
        with self._lock:
            token = self.current_access_token
            if token is None:
                logger.info("Exchanging authorization code for an access token")
                form = {
                    "grant_type": "authorization_code",
                    "code": self.code,
                    "redirect_uri": self.redirect_uri,
                }
            elif token.has_expired:
                if self.refresh_token is None:
                    raise InvalidOperationError(
                        "Access token expired and no refresh token is available"
                    )
                logger.info("Access token expired, refreshing")
                form = {"grant_type": "refresh_token", "refresh_token": self.refresh_token}
            else:
                return token

            result = self._request_token(form, cancel_event)
            if result.refresh_token is not None:
                self.refresh_token = result.refresh_token
            self.current_access_token = result.access_token
            return result.access_token
