"""
Exception classes for spotify-web.

This module defines all custom exceptions used throughout the library.
Each exception is designed to provide a clear, actionable error message
and to distinguish between the different failure modes of decoding
payloads, building requests and talking to the accounts service.

Exception Hierarchy:
    SpotifyWebError (base)
        ConfigError - Configuration file / environment issues
        SerializationError - JSON payload issues
            StructuralJsonError - Malformed or truncated JSON, wrong token kind
                MissingFieldError - Required field absent (strict mode only)
            InvalidEnumValueError - Unknown enum token or unencodable value
            FormatError - String with the wrong shape (URL, date)
                ReleaseDateFormatError - Release date not matching its precision
            NotSupportedError - Converter cannot handle the requested direction
        AuthorizationError - Token endpoint answered with an error
        InvalidOperationError - Operation not valid in the current state
        OperationCancelledError - Caller cancelled a pending operation
        SpotifyApiError - Regular API endpoint answered with an error object
"""


class SpotifyWebError(Exception):
    """
    Base exception for all spotify-web errors.

    All custom exceptions in this library inherit from this class,
    allowing callers to catch every library error with a single
    except clause if desired.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., field name, offset).

    Example:
        try:
            track = deserialize(payload, Track)
        except SpotifyWebError as e:
            logger.error(f"Decoding failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description that will be shown to the user.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'field': JSON key or config field involved in the error
                     - 'offset': character offset in the JSON document
                     - 'value': the offending value
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(SpotifyWebError):
    """
    Raised when there's an issue with the configuration.

    Common causes:
        - Explicit config file path does not exist
        - config.yaml has invalid YAML syntax
        - Credentials missing from both config.yaml and the environment
        - Invalid field values (e.g., negative HTTP timeout)

    Example:
        raise ConfigError(
            "'spotify.client_id' must be a non-empty string",
            details={'field': 'spotify.client_id'}
        )
    """
    pass


class SerializationError(SpotifyWebError):
    """
    Base class for failures while converting between JSON and objects.

    Catch this to handle every decoding/encoding problem at once.
    """
    pass


class StructuralJsonError(SerializationError):
    """
    Raised when the JSON token stream does not have the expected shape.

    Common causes:
        - Malformed JSON (bad literal, missing colon, mismatched bracket)
        - Input ends before the closing '}' or ']' of the value being read
        - A converter finds a token of the wrong kind (e.g. a number where
          an object was expected)
    """
    pass


class MissingFieldError(StructuralJsonError):
    """
    Raised in strict mode when an object lacks one of its required fields.

    Lenient mode (the default) substitutes the field's default value instead.

    Attributes:
        details['field']: Name of the missing JSON key.
        details['type']: Name of the object type being decoded.
    """
    pass


class InvalidEnumValueError(SerializationError):
    """
    Raised when an enum token is not recognized, or when a value cannot be
    encoded because it is not one of the enum's single discriminants.

    Example:
        raise InvalidEnumValueError(
            "Invalid AlbumType string value: 'ep'",
            details={'enum': 'AlbumType', 'value': 'ep'}
        )
    """
    pass


class FormatError(SerializationError):
    """Raised when a string value does not have the required format."""
    pass


class ReleaseDateFormatError(FormatError):
    """
    Raised when a release date does not match its declared precision.

    Attributes:
        details['value']: The raw release date string.
        details['precision']: The precision it was parsed with.
    """
    pass


class NotSupportedError(SerializationError):
    """
    Raised when a conversion direction or type is not supported.

    Several converters are read-only (tracks, albums, nullable arrays);
    calling their writer raises this error instead of producing partial output.
    """
    pass


class AuthorizationError(SpotifyWebError):
    """
    Raised when the accounts service rejects a token request.

    Attributes:
        status_code: HTTP status code of the response.
        error: OAuth2 error code (e.g. 'invalid_client', 'invalid_grant').
        error_description: Human-readable description sent by the service.

    Example:
        raise AuthorizationError(400, "invalid_grant", "Invalid authorization code")
    """

    def __init__(self, status_code: int, error: str, error_description: str) -> None:
        super().__init__(
            f"Authorization failed with HTTP {status_code}: {error} ({error_description})",
            details={
                "status_code": status_code,
                "error": error,
                "error_description": error_description,
            },
        )
        self.status_code = status_code
        self.error = error
        self.error_description = error_description


class InvalidOperationError(SpotifyWebError):
    """
    Raised when an operation is not valid for the object's current state.

    For example, refreshing an expired authorization-code token when no
    refresh token was ever issued.
    """
    pass


class OperationCancelledError(SpotifyWebError):
    """Raised when a caller-provided cancellation event is set mid-operation."""
    pass


class SpotifyApiError(SpotifyWebError):
    """
    Raised for error objects returned by the regular Web API endpoints.

    Attributes:
        status_code: HTTP status code reported inside the error object.
        api_message: Message reported inside the error object.
    """

    def __init__(self, status_code: int, api_message: str) -> None:
        super().__init__(
            f"Spotify API error {status_code}: {api_message}",
            details={"status_code": status_code, "message": api_message},
        )
        self.status_code = status_code
        self.api_message = api_message
