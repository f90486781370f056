"""
JSON serialization for the Spotify object model.

    - json_reader: Token reader and compact writer
    - converter: Converter contract and the ObjectConverter base
    - primitives / enum_converters / dates: Scalar conversions
    - collection_converters / paging: Arrays, maps and paging envelopes
    - objects: Tracks, albums, artists, shows, episodes, users
    - options: Converter registry plus serialize()/deserialize()

Usage:
    from spotify_web.serialization import deserialize, serialize

    episode = deserialize(payload, Episode)
    text = serialize(episode, Episode)
"""

from spotify_web.serialization.converter import JsonConverter, JsonConverterFactory, ObjectConverter
from spotify_web.serialization.dates import (
    format_release_date,
    infer_release_date_precision,
    parse_release_date,
)
from spotify_web.serialization.enum_converters import (
    ALBUM_GROUPS_CONVERTER,
    ALBUM_TYPE_CONVERTER,
    AUTHORIZATION_SCOPES_CONVERTER,
    COPYRIGHT_TYPE_CONVERTER,
    PRODUCT_CONVERTER,
    RELEASE_DATE_PRECISION_CONVERTER,
    TIME_RANGE_CONVERTER,
    EnumStringConverter,
    FlagStringConverter,
)
from spotify_web.serialization.json_reader import JsonReader, JsonTokenType, JsonWriter
from spotify_web.serialization.options import (
    DEFAULT_OPTIONS,
    SerializerOptions,
    create_default_options,
    deserialize,
    deserialize_response,
    serialize,
)

__all__ = [
    "JsonConverter",
    "JsonConverterFactory",
    "ObjectConverter",
    "format_release_date",
    "infer_release_date_precision",
    "parse_release_date",
    "ALBUM_GROUPS_CONVERTER",
    "ALBUM_TYPE_CONVERTER",
    "AUTHORIZATION_SCOPES_CONVERTER",
    "COPYRIGHT_TYPE_CONVERTER",
    "PRODUCT_CONVERTER",
    "RELEASE_DATE_PRECISION_CONVERTER",
    "TIME_RANGE_CONVERTER",
    "EnumStringConverter",
    "FlagStringConverter",
    "JsonReader",
    "JsonTokenType",
    "JsonWriter",
    "DEFAULT_OPTIONS",
    "SerializerOptions",
    "create_default_options",
    "deserialize",
    "deserialize_response",
    "serialize",
]
