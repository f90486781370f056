"""
String converters for the object model enumerations.

Every enumeration travels as a fixed lowercase token on the wire
("appears_on", "user-read-email", ...). EnumStringConverter maps single
members to tokens and back; FlagStringConverter adds set semantics for
Flag enumerations: decoding a token sequence ORs the members together,
encoding a set yields one token per set bit in ascending bit order.

Only single members are encodable. Composite flag values, the empty flag
and foreign values raise InvalidEnumValueError, use encode_set() for sets.

Example:
    ALBUM_GROUPS_CONVERTER.decode_set(["album", "single"])
    # AlbumGroups.ALBUM | AlbumGroups.SINGLE
    AUTHORIZATION_SCOPES_CONVERTER.encode_set(
        AuthorizationScopes.USER_READ_EMAIL | AuthorizationScopes.STREAMING
    )
    # ["streaming", "user-read-email"]
"""

from enum import Enum, Flag
from functools import reduce
from typing import Iterable, Mapping, TypeVar

from spotify_web.core.exceptions import InvalidEnumValueError
from spotify_web.objectmodel.enums import (
    AlbumGroups,
    AlbumType,
    AuthorizationScopes,
    CopyrightType,
    Product,
    ReleaseDatePrecision,
    TimeRange,
)
from spotify_web.serialization.converter import JsonConverter
from spotify_web.serialization.json_reader import JsonTokenType


E = TypeVar("E", bound=Enum)
F = TypeVar("F", bound=Flag)


class EnumStringConverter(JsonConverter[E]):
    """
    Bidirectional mapping between enum members and wire tokens.

    Args:
        enum_type: The enumeration class.
        tokens: Token of every member; must cover the whole enumeration.
    """

    def __init__(self, enum_type: type[E], tokens: Mapping[E, str]) -> None:
        missing = [member.name for member in self._members(enum_type) if member not in tokens]
        if missing:
            raise ValueError(f"No token for {enum_type.__name__} members: {', '.join(missing)}")
        self.enum_type = enum_type
        self._to_token = dict(tokens)
        self._from_token = {token: member for member, token in tokens.items()}

    @staticmethod
    def _members(enum_type: type[E]) -> list[E]:
        return list(enum_type.__members__.values())

    def decode(self, token: str) -> E:
        """Return the member for token; unknown tokens raise InvalidEnumValueError."""
        try:
            return self._from_token[token]
        except (KeyError, TypeError):
            raise InvalidEnumValueError(
                f"Invalid {self.enum_type.__name__} string value: {token!r}",
                details={"enum": self.enum_type.__name__, "value": token}
            ) from None

    def encode(self, value: E) -> str:
        """Return the token of a single member; anything else raises InvalidEnumValueError."""
        try:
            return self._to_token[value]
        except (KeyError, TypeError):
            raise InvalidEnumValueError(
                f"Invalid {self.enum_type.__name__} value: {value!r}",
                details={"enum": self.enum_type.__name__, "value": repr(value)}
            ) from None

    def read(self, reader, options):
        return self.decode(reader.get_string())

    def write(self, writer, value, options):
        writer.write_string_value(self.encode(value))


class FlagStringConverter(EnumStringConverter[F]):
    """
    Token converter for Flag enumerations with set operations.

    As a JSON converter it reads and writes arrays of tokens.
    """

    @staticmethod
    def _members(enum_type: type[F]) -> list[F]:
        # Single-bit members only; zero and combined aliases have no token
        return [
            member for member in enum_type.__members__.values()
            if member.value and member.value & (member.value - 1) == 0
        ]

    def decode_set(self, tokens: Iterable[str]) -> F:
        """OR together the members of all tokens; no tokens yields the empty set."""
        return reduce(
            lambda flags, token: flags | self.decode(token),
            tokens,
            self.enum_type(0),
        )

    def encode_set(self, flags: F) -> list[str]:
        """Tokens of every member contained in flags, in ascending bit order."""
        if not isinstance(flags, self.enum_type):
            raise InvalidEnumValueError(
                f"Invalid {self.enum_type.__name__} value: {flags!r}",
                details={"enum": self.enum_type.__name__, "value": repr(flags)}
            )
        members = sorted(self._members(self.enum_type), key=lambda member: member.value)
        return [self._to_token[member] for member in members if member in flags]

    def read(self, reader, options):
        reader.expect(JsonTokenType.START_ARRAY)
        tokens = []
        while True:
            reader.read_or_fail(self.enum_type.__name__)
            if reader.token_type is JsonTokenType.END_ARRAY:
                break
            tokens.append(reader.get_string())
        return self.decode_set(tokens)

    def write(self, writer, value, options):
        writer.write_start_array()
        for token in self.encode_set(value):
            writer.write_string_value(token)
        writer.write_end_array()


ALBUM_TYPE_CONVERTER = EnumStringConverter(AlbumType, {
    AlbumType.ALBUM: "album",
    AlbumType.SINGLE: "single",
    AlbumType.COMPILATION: "compilation",
})

ALBUM_GROUPS_CONVERTER = FlagStringConverter(AlbumGroups, {
    AlbumGroups.ALBUM: "album",
    AlbumGroups.SINGLE: "single",
    AlbumGroups.COMPILATION: "compilation",
    AlbumGroups.APPEARS_ON: "appears_on",
})

RELEASE_DATE_PRECISION_CONVERTER = EnumStringConverter(ReleaseDatePrecision, {
    ReleaseDatePrecision.YEAR: "year",
    ReleaseDatePrecision.MONTH: "month",
    ReleaseDatePrecision.DAY: "day",
})

PRODUCT_CONVERTER = EnumStringConverter(Product, {
    Product.FREE: "free",
    Product.OPEN: "open",
    Product.PREMIUM: "premium",
})

TIME_RANGE_CONVERTER = EnumStringConverter(TimeRange, {
    TimeRange.SHORT_TERM: "short_term",
    TimeRange.MEDIUM_TERM: "medium_term",
    TimeRange.LONG_TERM: "long_term",
})

COPYRIGHT_TYPE_CONVERTER = EnumStringConverter(CopyrightType, {
    CopyrightType.COPYRIGHT: "C",
    CopyrightType.PERFORMANCE: "P",
})

AUTHORIZATION_SCOPES_CONVERTER = FlagStringConverter(AuthorizationScopes, {
    AuthorizationScopes.UGC_IMAGE_UPLOAD: "ugc-image-upload",
    AuthorizationScopes.USER_READ_PLAYBACK_STATE: "user-read-playback-state",
    AuthorizationScopes.USER_MODIFY_PLAYBACK_STATE: "user-modify-playback-state",
    AuthorizationScopes.USER_READ_CURRENTLY_PLAYING: "user-read-currently-playing",
    AuthorizationScopes.STREAMING: "streaming",
    AuthorizationScopes.APP_REMOTE_CONTROL: "app-remote-control",
    AuthorizationScopes.USER_READ_EMAIL: "user-read-email",
    AuthorizationScopes.USER_READ_PRIVATE: "user-read-private",
    AuthorizationScopes.PLAYLIST_READ_COLLABORATIVE: "playlist-read-collaborative",
    AuthorizationScopes.PLAYLIST_MODIFY_PUBLIC: "playlist-modify-public",
    AuthorizationScopes.PLAYLIST_READ_PRIVATE: "playlist-read-private",
    AuthorizationScopes.PLAYLIST_MODIFY_PRIVATE: "playlist-modify-private",
    AuthorizationScopes.USER_LIBRARY_MODIFY: "user-library-modify",
    AuthorizationScopes.USER_LIBRARY_READ: "user-library-read",
    AuthorizationScopes.USER_TOP_READ: "user-top-read",
    AuthorizationScopes.USER_READ_PLAYBACK_POSITION: "user-read-playback-position",
    AuthorizationScopes.USER_READ_RECENTLY_PLAYED: "user-read-recently-played",
    AuthorizationScopes.USER_FOLLOW_READ: "user-follow-read",
    AuthorizationScopes.USER_FOLLOW_MODIFY: "user-follow-modify",
})

# Converters registered by default, keyed by enumeration
ENUM_CONVERTERS: dict[type, EnumStringConverter] = {
    converter.enum_type: converter
    for converter in (
        ALBUM_TYPE_CONVERTER,
        ALBUM_GROUPS_CONVERTER,
        RELEASE_DATE_PRECISION_CONVERTER,
        PRODUCT_CONVERTER,
        TIME_RANGE_CONVERTER,
        COPYRIGHT_TYPE_CONVERTER,
        AUTHORIZATION_SCOPES_CONVERTER,
    )
}
