"""
Converters for the composite Spotify objects.

Every converter builds on ObjectConverter: it declares which JSON keys it
understands and how to read each one; unknown keys are skipped and absent
keys keep the model's defaults.

Writable: Image, Followers, ResumePoint, SimplifiedArtist, Artist,
SimplifiedShow, Episode, PublicUser, PrivateUser. Writers emit the resource
type tag first (where the resource has one), then the full key set in a
fixed order with None written as an explicit null.

Read-only: Copyright, SimplifiedTrack, Track, SimplifiedAlbum, Album, ApiError.
"""

from spotify_web.objectmodel.enums import (
    AlbumType,
    CopyrightType,
    Product,
    ReleaseDatePrecision,
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
from spotify_web.serialization.converter import (
    ObjectConverter,
    nullable,
    read_bool,
    read_int,
    read_string,
    write_nullable_number,
    write_nullable_string,
    write_property,
)
from spotify_web.serialization.dates import apply_release_date, format_release_date
from spotify_web.serialization.enum_converters import (
    ALBUM_GROUPS_CONVERTER,
    RELEASE_DATE_PRECISION_CONVERTER,
)


EXTERNAL_URLS = dict[str, Url]
EXTERNAL_IDS = dict[str, str]
IMAGES = tuple[Image, ...]
STRINGS = tuple[str, ...]
ARTISTS = tuple[SimplifiedArtist, ...]
COPYRIGHTS = tuple[Copyright, ...]

IDENTITY_FIELDS = ("id", "uri")


def _identity_readers(options) -> dict:
    """Readers for the keys shared by every identifiable resource."""
    return {
        "id": read_string,
        "uri": read_string,
        "href": options.reader_for(Url),
        "external_urls": options.reader_for(EXTERNAL_URLS),
    }


def _read_album_group(reader):
    # album_group holds a single group, not a set
    return ALBUM_GROUPS_CONVERTER.decode(reader.get_string())


def _write_identity(writer, value, type_tag: str) -> None:
    writer.write_string("type", type_tag)
    writer.write_string("id", value.id)
    writer.write_string("uri", value.uri)
    writer.write_string("href", value.href)


def _write_release_date(writer, value, options) -> None:
    if value.release_date is None:
        writer.write_null("release_date")
    else:
        writer.write_string(
            "release_date",
            format_release_date(value.release_date, value.release_date_precision),
        )
    write_property(
        writer,
        "release_date_precision",
        ReleaseDatePrecision,
        value.release_date_precision,
        options,
    )


class ImageConverter(ObjectConverter[Image]):
    model = Image
    required_fields = ("url",)

    def field_readers(self, options):
        return {
            "url": options.reader_for(Url),
            "width": nullable(read_int),
            "height": nullable(read_int),
        }

    def write(self, writer, value, options):
        writer.write_start_object()
        writer.write_string("url", value.url)
        write_nullable_number(writer, "width", value.width)
        write_nullable_number(writer, "height", value.height)
        writer.write_end_object()


class FollowersConverter(ObjectConverter[Followers]):
    model = Followers

    def field_readers(self, options):
        return {
            "href": nullable(options.reader_for(Url)),
            "total": read_int,
        }

    def write(self, writer, value, options):
        writer.write_start_object()
        write_nullable_string(writer, "href", value.href)
        writer.write_number("total", value.total)
        writer.write_end_object()


class ResumePointConverter(ObjectConverter[ResumePoint]):
    model = ResumePoint

    def field_readers(self, options):
        return {
            "fully_played": read_bool,
            "resume_position_ms": read_int,
        }

    def write(self, writer, value, options):
        writer.write_start_object()
        writer.write_boolean("fully_played", value.fully_played)
        writer.write_number("resume_position_ms", value.resume_position_ms)
        writer.write_end_object()


class CopyrightConverter(ObjectConverter[Copyright]):
    model = Copyright

    def field_readers(self, options):
        return {
            "text": read_string,
            "type": options.reader_for(CopyrightType),
        }


class ApiErrorConverter(ObjectConverter[ApiError]):
    """
    Regular endpoint error: {"error": {"status": 401, "message": "..."}}.

    The wrapper object is unwrapped into a single ApiError.
    """

    model = ApiError
    required_fields = ("error",)

    def field_readers(self, options):
        body = _ApiErrorBodyConverter()
        return {"error": lambda reader: body.read(reader, options)}

    def create(self, fields):
        return fields.get("error", ApiError())


class _ApiErrorBodyConverter(ObjectConverter[ApiError]):
    model = ApiError

    def field_readers(self, options):
        return {
            "status": read_int,
            "message": read_string,
        }

    def create(self, fields):
        return ApiError(
            status_code=fields.get("status", 0),
            message=fields.get("message", ""),
        )


class SimplifiedArtistConverter(ObjectConverter[SimplifiedArtist]):
    model = SimplifiedArtist
    required_fields = IDENTITY_FIELDS

    def field_readers(self, options):
        return {
            **_identity_readers(options),
            "name": read_string,
        }

    def write(self, writer, value, options):
        writer.write_start_object()
        _write_identity(writer, value, "artist")
        writer.write_string("name", value.name)
        write_property(writer, "external_urls", EXTERNAL_URLS, value.external_urls, options)
        writer.write_end_object()


class ArtistConverter(ObjectConverter[Artist]):
    model = Artist
    required_fields = IDENTITY_FIELDS

    def field_readers(self, options):
        return {
            **_identity_readers(options),
            "name": read_string,
            "genres": options.reader_for(STRINGS),
            "images": options.reader_for(IMAGES),
            "popularity": read_int,
            "followers": nullable(options.reader_for(Followers)),
        }

    def write(self, writer, value, options):
        writer.write_start_object()
        _write_identity(writer, value, "artist")
        writer.write_string("name", value.name)
        write_property(writer, "genres", STRINGS, value.genres, options)
        write_property(writer, "images", IMAGES, value.images, options)
        writer.write_number("popularity", value.popularity)
        write_property(writer, "followers", Followers, value.followers, options)
        write_property(writer, "external_urls", EXTERNAL_URLS, value.external_urls, options)
        writer.write_end_object()


def _simplified_track_readers(options) -> dict:
    return {
        **_identity_readers(options),
        "name": read_string,
        "artists": options.reader_for(ARTISTS),
        "duration_ms": read_int,
        "disc_number": read_int,
        "track_number": read_int,
        "explicit": read_bool,
        "is_local": read_bool,
        "available_markets": options.reader_for(STRINGS),
        "preview_url": nullable(options.reader_for(Url)),
    }


class SimplifiedTrackConverter(ObjectConverter[SimplifiedTrack]):
    model = SimplifiedTrack
    required_fields = IDENTITY_FIELDS

    def field_readers(self, options):
        return _simplified_track_readers(options)


class TrackConverter(ObjectConverter[Track]):
    model = Track
    required_fields = IDENTITY_FIELDS

    def field_readers(self, options):
        return {
            **_simplified_track_readers(options),
            "album": nullable(options.reader_for(SimplifiedAlbum)),
            "external_ids": options.reader_for(EXTERNAL_IDS),
            "popularity": read_int,
        }


def _simplified_album_readers(options) -> dict:
    return {
        **_identity_readers(options),
        "name": read_string,
        "album_type": options.reader_for(AlbumType),
        "album_group": nullable(_read_album_group),
        "artists": options.reader_for(ARTISTS),
        "release_date": nullable(read_string),
        "release_date_precision": options.reader_for(ReleaseDatePrecision),
        "total_tracks": read_int,
        "available_markets": options.reader_for(STRINGS),
        "images": options.reader_for(IMAGES),
    }


class SimplifiedAlbumConverter(ObjectConverter[SimplifiedAlbum]):
    model = SimplifiedAlbum
    required_fields = IDENTITY_FIELDS

    def field_readers(self, options):
        return _simplified_album_readers(options)

    def create(self, fields):
        return SimplifiedAlbum(**apply_release_date(fields))


class AlbumConverter(ObjectConverter[Album]):
    model = Album
    required_fields = IDENTITY_FIELDS

    def field_readers(self, options):
        return {
            **_simplified_album_readers(options),
            "tracks": nullable(options.reader_for(Paging[SimplifiedTrack])),
            "genres": options.reader_for(STRINGS),
            "label": read_string,
            "popularity": read_int,
            "copyrights": options.reader_for(COPYRIGHTS),
            "external_ids": options.reader_for(EXTERNAL_IDS),
        }

    def create(self, fields):
        return Album(**apply_release_date(fields))


class SimplifiedShowConverter(ObjectConverter[SimplifiedShow]):
    model = SimplifiedShow
    required_fields = IDENTITY_FIELDS

    def field_readers(self, options):
        return {
            **_identity_readers(options),
            "name": read_string,
            "description": read_string,
            "publisher": read_string,
            "images": options.reader_for(IMAGES),
            "explicit": read_bool,
            "is_externally_hosted": nullable(read_bool),
            "languages": options.reader_for(STRINGS),
            "media_type": read_string,
            "available_markets": options.reader_for(STRINGS),
        }

    def create(self, fields):
        # is_externally_hosted is null for shows hosted by Spotify
        if fields.get("is_externally_hosted", False) is None:
            fields["is_externally_hosted"] = False
        return SimplifiedShow(**fields)

    def write(self, writer, value, options):
        writer.write_start_object()
        _write_identity(writer, value, "show")
        writer.write_string("name", value.name)
        writer.write_string("description", value.description)
        writer.write_string("publisher", value.publisher)
        write_property(writer, "images", IMAGES, value.images, options)
        writer.write_boolean("explicit", value.explicit)
        writer.write_boolean("is_externally_hosted", value.is_externally_hosted)
        write_property(writer, "languages", STRINGS, value.languages, options)
        writer.write_string("media_type", value.media_type)
        write_property(writer, "available_markets", STRINGS, value.available_markets, options)
        write_property(writer, "external_urls", EXTERNAL_URLS, value.external_urls, options)
        writer.write_end_object()


class EpisodeConverter(ObjectConverter[Episode]):
    model = Episode
    required_fields = IDENTITY_FIELDS

    def field_readers(self, options):
        return {
            **_identity_readers(options),
            "name": read_string,
            "description": read_string,
            "images": options.reader_for(IMAGES),
            "show": nullable(options.reader_for(SimplifiedShow)),
            "duration_ms": read_int,
            "release_date": nullable(read_string),
            "release_date_precision": options.reader_for(ReleaseDatePrecision),
            "explicit": read_bool,
            "is_playable": read_bool,
            "is_externally_hosted": read_bool,
            "languages": options.reader_for(STRINGS),
            "audio_preview_url": nullable(options.reader_for(Url)),
            "resume_point": nullable(options.reader_for(ResumePoint)),
        }

    def create(self, fields):
        return Episode(**apply_release_date(fields))

    def write(self, writer, value, options):
        writer.write_start_object()
        _write_identity(writer, value, "episode")
        writer.write_string("name", value.name)
        writer.write_string("description", value.description)
        write_property(writer, "images", IMAGES, value.images, options)
        write_property(writer, "show", SimplifiedShow, value.show, options)
        writer.write_number("duration_ms", value.duration_ms)
        _write_release_date(writer, value, options)
        writer.write_boolean("explicit", value.explicit)
        writer.write_boolean("is_playable", value.is_playable)
        writer.write_boolean("is_externally_hosted", value.is_externally_hosted)
        write_property(writer, "languages", STRINGS, value.languages, options)
        write_nullable_string(writer, "audio_preview_url", value.audio_preview_url)
        write_property(writer, "external_urls", EXTERNAL_URLS, value.external_urls, options)
        write_property(writer, "resume_point", ResumePoint, value.resume_point, options)
        writer.write_end_object()


def _public_user_readers(options) -> dict:
    return {
        **_identity_readers(options),
        "display_name": nullable(read_string),
        "images": options.reader_for(IMAGES),
        "followers": nullable(options.reader_for(Followers)),
    }


def _write_public_user(writer, user, options) -> None:
    _write_identity(writer, user, "user")
    write_nullable_string(writer, "display_name", user.display_name)
    write_property(writer, "images", IMAGES, user.images, options)
    write_property(writer, "followers", Followers, user.followers, options)
    write_property(writer, "external_urls", EXTERNAL_URLS, user.external_urls, options)


class PublicUserConverter(ObjectConverter[PublicUser]):
    model = PublicUser
    required_fields = IDENTITY_FIELDS

    def field_readers(self, options):
        return _public_user_readers(options)

    def write(self, writer, value, options):
        writer.write_start_object()
        _write_public_user(writer, value, options)
        writer.write_end_object()


class PrivateUserConverter(ObjectConverter[PrivateUser]):
    """Flat wire object split into the embedded PublicUser and the private fields."""

    model = PrivateUser
    required_fields = IDENTITY_FIELDS

    PRIVATE_FIELDS = ("email", "country", "product")

    def field_readers(self, options):
        return {
            **_public_user_readers(options),
            "email": nullable(read_string),
            "country": nullable(read_string),
            "product": nullable(options.reader_for(Product)),
        }

    def create(self, fields):
        private = {name: fields.pop(name) for name in self.PRIVATE_FIELDS if name in fields}
        return PrivateUser(public=PublicUser(**fields), **private)

    def write(self, writer, value, options):
        writer.write_start_object()
        _write_public_user(writer, value.public, options)
        write_nullable_string(writer, "email", value.email)
        write_nullable_string(writer, "country", value.country)
        write_property(writer, "product", Product, value.product, options)
        writer.write_end_object()


# Converters registered by default, keyed by model
OBJECT_CONVERTERS = {
    converter.model: converter
    for converter in (
        ImageConverter(),
        FollowersConverter(),
        ResumePointConverter(),
        CopyrightConverter(),
        ApiErrorConverter(),
        SimplifiedArtistConverter(),
        ArtistConverter(),
        SimplifiedTrackConverter(),
        TrackConverter(),
        SimplifiedAlbumConverter(),
        AlbumConverter(),
        SimplifiedShowConverter(),
        EpisodeConverter(),
        PublicUserConverter(),
        PrivateUserConverter(),
    )
}
