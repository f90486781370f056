"""
Data models for Spotify Web API resources.

This module defines immutable dataclasses mirroring the JSON objects returned
by the Spotify Web API. They are produced by the converters in
spotify_web.serialization and never talk to the network themselves.

Design Decisions:
    - All dataclasses are frozen (immutable) and compare by value
    - Attribute names match the JSON keys, so converters map keys 1:1
    - Every field has a default (empty string, empty tuple, empty dict,
      0, False or None); lenient decoding leaves absent keys at these
      defaults
    - Sequences are tuples; string-keyed maps (external_urls, external_ids)
      are dicts
    - Full and simplified variants (Track/SimplifiedTrack, ...) are separate
      flat classes; the full variant can project itself with simplified()
    - PrivateUser embeds the PublicUser it extends

Usage:
    from spotify_web.objectmodel.models import Track
    from spotify_web.serialization import deserialize

    track = deserialize(payload, Track)
    print(track.name, track.album.release_date)
"""

from dataclasses import dataclass, field, fields
from datetime import date
from typing import Generic, NewType, TypeVar

from spotify_web.objectmodel.enums import (
    AlbumGroups,
    AlbumType,
    CopyrightType,
    Product,
    ReleaseDatePrecision,
)


T = TypeVar("T")

# URI reference string, absolute or relative
Url = NewType("Url", str)


def _project(source: object, target_cls: type) -> object:
    """Build target_cls from the same-named attributes of source."""
    return target_cls(**{f.name: getattr(source, f.name) for f in fields(target_cls)})


@dataclass(frozen=True)
class Image:
    """
    Cover art or profile picture in one size.

    Attributes:
        url: Source URL of the image.
        width: Width in pixels, None when unknown.
        height: Height in pixels, None when unknown.
    """
    url: Url = Url("")
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True)
class Followers:
    """
    Attributes:
        href: Always None in current API responses, reserved by Spotify.
        total: Number of followers.
    """
    href: Url | None = None
    total: int = 0


@dataclass(frozen=True)
class ResumePoint:
    """User's playback position within an episode."""
    fully_played: bool = False
    resume_position_ms: int = 0


@dataclass(frozen=True)
class Copyright:
    text: str = ""
    type: CopyrightType = CopyrightType.COPYRIGHT


@dataclass(frozen=True)
class ApiError:
    """
    Error object returned by the regular (non-authorization) endpoints.

    Wire shape: {"error": {"status": 404, "message": "Not found"}}
    """
    status_code: int = 0
    message: str = ""


@dataclass(frozen=True)
class Paging(Generic[T]):
    """
    Bounded slice of a larger result set with navigation metadata.

    Attributes:
        href: Endpoint URL returning this page.
        items: Items of this page.
        limit: Maximum number of items requested.
        next: URL of the next page, None on the last page.
        offset: Index of the first item of this page.
        previous: URL of the previous page, None on the first page.
        total: Total number of items available.
    """
    href: Url = Url("")
    items: tuple[T, ...] = ()
    limit: int = 0
    next: Url | None = None
    offset: int = 0
    previous: Url | None = None
    total: int = 0


@dataclass(frozen=True)
class SimplifiedArtist:
    id: str = ""
    uri: str = ""
    href: Url = Url("")
    name: str = ""
    external_urls: dict[str, Url] = field(default_factory=dict)


@dataclass(frozen=True)
class Artist:
    """
    Full artist object.

    Carries every SimplifiedArtist attribute plus genres, images,
    popularity (0-100) and followers.
    """
    id: str = ""
    uri: str = ""
    href: Url = Url("")
    name: str = ""
    external_urls: dict[str, Url] = field(default_factory=dict)
    genres: tuple[str, ...] = ()
    images: tuple[Image, ...] = ()
    popularity: int = 0
    followers: Followers | None = None

    def simplified(self) -> SimplifiedArtist:
        return _project(self, SimplifiedArtist)


@dataclass(frozen=True)
class SimplifiedTrack:
    """
    Track as embedded in albums and track pages.

    Attributes:
        duration_ms: Track length in milliseconds.
        is_local: True for local files added to playlists.
        available_markets: ISO 3166-1 alpha-2 country codes.
        preview_url: 30 second preview, None when not available.
    """
    id: str = ""
    uri: str = ""
    href: Url = Url("")
    name: str = ""
    artists: tuple[SimplifiedArtist, ...] = ()
    duration_ms: int = 0
    disc_number: int = 0
    track_number: int = 0
    explicit: bool = False
    is_local: bool = False
    available_markets: tuple[str, ...] = ()
    preview_url: Url | None = None
    external_urls: dict[str, Url] = field(default_factory=dict)


@dataclass(frozen=True)
class SimplifiedAlbum:
    """
    Album as embedded in tracks and artist album listings.

    Attributes:
        album_group: Relationship to the artist whose albums were listed,
                     None outside artist album listings.
        release_date: First day of the release year/month when the
                      precision is coarser than a day; None when absent.
        release_date_precision: Precision release_date was given with.
    """
    id: str = ""
    uri: str = ""
    href: Url = Url("")
    name: str = ""
    album_type: AlbumType = AlbumType.ALBUM
    album_group: AlbumGroups | None = None
    artists: tuple[SimplifiedArtist, ...] = ()
    release_date: date | None = None
    release_date_precision: ReleaseDatePrecision = ReleaseDatePrecision.DAY
    total_tracks: int = 0
    available_markets: tuple[str, ...] = ()
    images: tuple[Image, ...] = ()
    external_urls: dict[str, Url] = field(default_factory=dict)


@dataclass(frozen=True)
class Track:
    """Full track object: every SimplifiedTrack attribute plus album, IDs and popularity."""
    id: str = ""
    uri: str = ""
    href: Url = Url("")
    name: str = ""
    artists: tuple[SimplifiedArtist, ...] = ()
    duration_ms: int = 0
    disc_number: int = 0
    track_number: int = 0
    explicit: bool = False
    is_local: bool = False
    available_markets: tuple[str, ...] = ()
    preview_url: Url | None = None
    external_urls: dict[str, Url] = field(default_factory=dict)
    album: SimplifiedAlbum | None = None
    external_ids: dict[str, str] = field(default_factory=dict)
    popularity: int = 0

    def simplified(self) -> SimplifiedTrack:
        return _project(self, SimplifiedTrack)


@dataclass(frozen=True)
class Album:
    """
    Full album object: every SimplifiedAlbum attribute plus the first page
    of its tracks, genres, label, popularity, copyrights and external IDs.
    """
    id: str = ""
    uri: str = ""
    href: Url = Url("")
    name: str = ""
    album_type: AlbumType = AlbumType.ALBUM
    album_group: AlbumGroups | None = None
    artists: tuple[SimplifiedArtist, ...] = ()
    release_date: date | None = None
    release_date_precision: ReleaseDatePrecision = ReleaseDatePrecision.DAY
    total_tracks: int = 0
    available_markets: tuple[str, ...] = ()
    images: tuple[Image, ...] = ()
    external_urls: dict[str, Url] = field(default_factory=dict)
    tracks: Paging[SimplifiedTrack] | None = None
    genres: tuple[str, ...] = ()
    label: str = ""
    popularity: int = 0
    copyrights: tuple[Copyright, ...] = ()
    external_ids: dict[str, str] = field(default_factory=dict)

    def simplified(self) -> SimplifiedAlbum:
        return _project(self, SimplifiedAlbum)


@dataclass(frozen=True)
class SimplifiedShow:
    """
    Podcast show as embedded in episodes.

    Attributes:
        languages: BCP 47 language codes used in the show.
        media_type: "audio", "video" or "mixed".
    """
    id: str = ""
    uri: str = ""
    href: Url = Url("")
    name: str = ""
    description: str = ""
    publisher: str = ""
    images: tuple[Image, ...] = ()
    explicit: bool = False
    is_externally_hosted: bool = False
    languages: tuple[str, ...] = ()
    media_type: str = ""
    available_markets: tuple[str, ...] = ()
    external_urls: dict[str, Url] = field(default_factory=dict)


@dataclass(frozen=True)
class Episode:
    """
    Podcast episode.

    Attributes:
        show: Show the episode belongs to, None when the payload omits it.
        audio_preview_url: 30 second preview, None when not available.
        resume_point: Playback position of the current user, None unless
                      the token carries user-read-playback-position.
    """
    id: str = ""
    uri: str = ""
    href: Url = Url("")
    name: str = ""
    description: str = ""
    images: tuple[Image, ...] = ()
    show: SimplifiedShow | None = None
    duration_ms: int = 0
    release_date: date | None = None
    release_date_precision: ReleaseDatePrecision = ReleaseDatePrecision.DAY
    explicit: bool = False
    is_playable: bool = False
    is_externally_hosted: bool = False
    languages: tuple[str, ...] = ()
    audio_preview_url: Url | None = None
    external_urls: dict[str, Url] = field(default_factory=dict)
    resume_point: ResumePoint | None = None


@dataclass(frozen=True)
class PublicUser:
    """Profile information anyone can see."""
    id: str = ""
    uri: str = ""
    href: Url = Url("")
    display_name: str | None = None
    images: tuple[Image, ...] = ()
    followers: Followers | None = None
    external_urls: dict[str, Url] = field(default_factory=dict)


@dataclass(frozen=True)
class PrivateUser:
    """
    Profile of the current user, including private details.

    The public part is embedded rather than inherited; on the wire both
    parts share one flat JSON object.

    Attributes:
        public: Publicly visible profile.
        email: Requires the user-read-email scope.
        country: ISO 3166-1 alpha-2 code, requires user-read-private.
        product: Subscription level, requires user-read-private.
    """
    public: PublicUser = field(default_factory=PublicUser)
    email: str | None = None
    country: str | None = None
    product: Product | None = None

    @property
    def id(self) -> str:
        return self.public.id

    @property
    def display_name(self) -> str | None:
        return self.public.display_name
