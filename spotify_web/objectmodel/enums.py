"""
Enumerations of the Spotify object model.

Plain enumerations carry a single discriminant; the Flag enumerations
(AlbumGroups, AuthorizationScopes) are bitmask sets whose members are
single bits, combined with the | operator. Wire tokens live with the
converters in spotify_web.serialization.enum_converters.
"""

from enum import Enum, Flag, auto


class AlbumType(Enum):
    ALBUM = auto()
    SINGLE = auto()
    COMPILATION = auto()


class AlbumGroups(Flag):
    """
    Relationship groups between an artist and an album.

    Used both as a set (e.g. filtering artist albums by several groups)
    and as the single-valued `album_group` of a simplified album.
    """
    ALBUM = auto()
    SINGLE = auto()
    COMPILATION = auto()
    APPEARS_ON = auto()


class ReleaseDatePrecision(Enum):
    """How precise a release date is: year only, year and month, or full day."""
    YEAR = auto()
    MONTH = auto()
    DAY = auto()


class Product(Enum):
    """Subscription level of a private user."""
    FREE = auto()
    OPEN = auto()
    PREMIUM = auto()


class TimeRange(Enum):
    """Time frame over which a user's top artists and tracks are computed."""
    SHORT_TERM = auto()
    MEDIUM_TERM = auto()
    LONG_TERM = auto()


class CopyrightType(Enum):
    COPYRIGHT = auto()
    PERFORMANCE = auto()


class AuthorizationScopes(Flag):
    """
    OAuth2 scopes an application may request from a user.

    Bit order follows the order of the Spotify authorization guide, which
    is also the order tokens are emitted in when a set is encoded.
    """
    UGC_IMAGE_UPLOAD = auto()
    USER_READ_PLAYBACK_STATE = auto()
    USER_MODIFY_PLAYBACK_STATE = auto()
    USER_READ_CURRENTLY_PLAYING = auto()
    STREAMING = auto()
    APP_REMOTE_CONTROL = auto()
    USER_READ_EMAIL = auto()
    USER_READ_PRIVATE = auto()
    PLAYLIST_READ_COLLABORATIVE = auto()
    PLAYLIST_MODIFY_PUBLIC = auto()
    PLAYLIST_READ_PRIVATE = auto()
    PLAYLIST_MODIFY_PRIVATE = auto()
    USER_LIBRARY_MODIFY = auto()
    USER_LIBRARY_READ = auto()
    USER_TOP_READ = auto()
    USER_READ_PLAYBACK_POSITION = auto()
    USER_READ_RECENTLY_PLAYED = auto()
    USER_FOLLOW_READ = auto()
    USER_FOLLOW_MODIFY = auto()
