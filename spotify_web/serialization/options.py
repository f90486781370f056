"""
Converter registry and the top-level serialize/deserialize helpers.

SerializerOptions maps type objects to converters. Keys may be classes
(Track), NewTypes (Url) or parameterized generics (tuple[Image, ...],
dict[str, Url], Paging[Track]). Lookups check explicitly registered
converters first, then ask each factory in registration order; converters
created by factories are cached.

Usage:
    from spotify_web.objectmodel import Paging, Track
    from spotify_web.serialization import deserialize

    page = deserialize(response.content, Paging[Track])

    # or, raising SpotifyApiError for error responses:
    page = deserialize_response(response, Paging[Track])
"""

import threading
from typing import Any, Callable

from spotify_web.core.exceptions import NotSupportedError, SerializationError, SpotifyApiError
from spotify_web.core.logger import get_logger
from spotify_web.objectmodel.models import ApiError, Url
from spotify_web.serialization.collection_converters import CollectionConverterFactory
from spotify_web.serialization.converter import JsonConverter, JsonConverterFactory
from spotify_web.serialization.enum_converters import ENUM_CONVERTERS
from spotify_web.serialization.json_reader import JsonReader, JsonWriter
from spotify_web.serialization.objects import OBJECT_CONVERTERS
from spotify_web.serialization.paging import PagingConverterFactory
from spotify_web.serialization.primitives import (
    BoolConverter,
    FloatConverter,
    IntConverter,
    StringConverter,
    UrlConverter,
)


logger = get_logger(__name__)


class SerializerOptions:
    """
    Registry of converters plus decoding settings.

    Attributes:
        strict: When True, object converters raise MissingFieldError for
                absent required fields instead of using defaults.
    """

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict
        self._converters: dict[Any, JsonConverter] = {}
        self._factories: list[JsonConverterFactory] = []
        self._created: dict[Any, JsonConverter] = {}
        self._lock = threading.Lock()

    def add_converter(self, type_: Any, converter: JsonConverter) -> None:
        self._converters[type_] = converter

    def add_factory(self, factory: JsonConverterFactory) -> None:
        self._factories.append(factory)

    def get_converter(self, type_: Any) -> JsonConverter:
        """
        Resolve the converter for type_.

        Raises:
            NotSupportedError: If neither a registered converter nor a
                               factory handles the type.
        """
        converter = self._converters.get(type_) or self._created.get(type_)
        if converter is not None:
            return converter

        for factory in self._factories:
            if factory.can_convert(type_):
                converter = factory.create_converter(type_, self)
                with self._lock:
                    return self._created.setdefault(type_, converter)

        raise NotSupportedError(
            f"No converter registered for {type_!r}",
            details={"type": repr(type_)}
        )

    def reader_for(self, type_: Any) -> Callable[[JsonReader], Any]:
        """Field reader delegating to the converter of type_, resolved lazily."""
        def read(reader: JsonReader) -> Any:
            return self.get_converter(type_).read(reader, self)
        return read

    def copy(self, strict: bool | None = None) -> "SerializerOptions":
        """Copy of these options, optionally with a different strictness."""
        clone = SerializerOptions(self.strict if strict is None else strict)
        clone._converters = dict(self._converters)
        clone._factories = list(self._factories)
        return clone


def create_default_options(strict: bool = False) -> SerializerOptions:
    """Options with every built-in converter and factory registered."""
    options = SerializerOptions(strict=strict)

    options.add_converter(str, StringConverter())
    options.add_converter(int, IntConverter())
    options.add_converter(float, FloatConverter())
    options.add_converter(bool, BoolConverter())
    options.add_converter(Url, UrlConverter())

    for enum_type, converter in ENUM_CONVERTERS.items():
        options.add_converter(enum_type, converter)
    for model, converter in OBJECT_CONVERTERS.items():
        options.add_converter(model, converter)

    options.add_factory(CollectionConverterFactory())
    options.add_factory(PagingConverterFactory())
    return options


DEFAULT_OPTIONS = create_default_options()


def deserialize(data: str | bytes, type_: Any, options: SerializerOptions | None = None) -> Any:
    """
    Decode exactly one JSON value of type_ from data.

    Raises:
        StructuralJsonError: If data is malformed, truncated, of the wrong
                             shape, or has content after the value.
        SerializationError: For the other conversion failures.
    """
    options = options or DEFAULT_OPTIONS
    converter = options.get_converter(type_)

    reader = JsonReader(data)
    reader.read_or_fail(getattr(type_, "__name__", repr(type_)))
    value = converter.read(reader, options)

    # Only whitespace may follow the root value; the reader raises otherwise
    reader.read()
    logger.debug("Decoded %s", getattr(type_, "__name__", repr(type_)))
    return value


def deserialize_response(response, type_: Any, options: SerializerOptions | None = None) -> Any:
    """
    Decode the body of a Web API response.

    Args:
        response: requests.Response (or anything with status_code, content
                  and text).
        type_: Type of the body of a successful response.

    Raises:
        SpotifyApiError: If the status is not 2xx. The status and message
                         come from the error object when the body has one.
    """
    if 200 <= response.status_code < 300:
        return deserialize(response.content, type_, options)

    try:
        error = deserialize(response.content, ApiError, options)
    except SerializationError as e:
        raise SpotifyApiError(response.status_code, response.text[:200]) from e

    logger.debug("API request failed: HTTP %s", response.status_code)
    raise SpotifyApiError(error.status_code or response.status_code, error.message)


def serialize(value: Any, type_: Any, options: SerializerOptions | None = None) -> str:
    """
    Encode value as JSON through the converter of type_.

    Raises:
        NotSupportedError: If the converter is read-only.
    """
    options = options or DEFAULT_OPTIONS
    writer = JsonWriter()
    options.get_converter(type_).write(writer, value, options)
    return writer.getvalue()
