"""
Object model for spotify-web.

    - enums: Plain and flag enumerations (album types, scopes, ...)
    - models: Frozen dataclasses for tracks, albums, artists, shows,
      episodes, users and paging envelopes
"""

from spotify_web.objectmodel.enums import (
    AlbumGroups,
    AlbumType,
    AuthorizationScopes,
    CopyrightType,
    Product,
    ReleaseDatePrecision,
    TimeRange,
)
from spotify_web.objectmodel.models import (
    Album,
    ApiError,
    Artist,
    Copyright,
    Episode,
    Followers,
    Image,
    Paging,
    PrivateUser,
    PublicUser,
    ResumePoint,
    SimplifiedAlbum,
    SimplifiedArtist,
    SimplifiedShow,
    SimplifiedTrack,
    Track,
    Url,
)

__all__ = [
    "AlbumGroups",
    "AlbumType",
    "AuthorizationScopes",
    "CopyrightType",
    "Product",
    "ReleaseDatePrecision",
    "TimeRange",
    "Album",
    "ApiError",
    "Artist",
    "Copyright",
    "Episode",
    "Followers",
    "Image",
    "Paging",
    "PrivateUser",
    "PublicUser",
    "ResumePoint",
    "SimplifiedAlbum",
    "SimplifiedArtist",
    "SimplifiedShow",
    "SimplifiedTrack",
    "Track",
    "Url",
]
