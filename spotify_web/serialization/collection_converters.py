"""
Converters for JSON arrays and string-keyed objects.

Type keys understood by CollectionConverterFactory:
    tuple[X, ...] / list[X]    -> ArrayConverter
    tuple[X | None, ...]       -> NullableArrayConverter (read-only)
    dict[str, X]               -> StringKeyedDictConverter

Arrays are always decoded into tuples.
"""

import types
from typing import Any, Union, get_args, get_origin

from spotify_web.serialization.converter import JsonConverter, JsonConverterFactory
from spotify_web.serialization.json_reader import JsonTokenType


class ArrayConverter(JsonConverter[tuple]):
    """JSON array whose elements are all read by one element converter."""

    def __init__(self, element_converter: JsonConverter) -> None:
        self.element_converter = element_converter

    def read(self, reader, options):
        reader.expect(JsonTokenType.START_ARRAY)
        items = []
        while True:
            reader.read_or_fail("array")
            if reader.token_type is JsonTokenType.END_ARRAY:
                return tuple(items)
            items.append(self.element_converter.read(reader, options))

    def write(self, writer, value, options):
        writer.write_start_array()
        for item in value:
            self.element_converter.write(writer, item, options)
        writer.write_end_array()


class NullableArrayConverter(JsonConverter[tuple]):
    """
    JSON array that may contain null literals, e.g. the tracks of a
    "get several tracks" response when some IDs are unknown.

    Nulls become None, other elements go through the element converter.
    Writing is not supported.
    """

    def __init__(self, element_converter: JsonConverter) -> None:
        self.element_converter = element_converter

    def read(self, reader, options):
        reader.expect(JsonTokenType.START_ARRAY)
        items = []
        while True:
            reader.read_or_fail("array")
            if reader.token_type is JsonTokenType.END_ARRAY:
                return tuple(items)
            if reader.is_null:
                items.append(None)
            else:
                items.append(self.element_converter.read(reader, options))


class StringKeyedDictConverter(JsonConverter[dict]):
    """JSON object with arbitrary keys, every value read by one converter; key order is kept."""

    def __init__(self, value_converter: JsonConverter) -> None:
        self.value_converter = value_converter

    def read(self, reader, options):
        reader.expect(JsonTokenType.START_OBJECT)
        result = {}
        while True:
            reader.read_or_fail("object")
            if reader.token_type is JsonTokenType.END_OBJECT:
                return result
            key = reader.get_property_name()
            reader.read_or_fail("object")
            result[key] = self.value_converter.read(reader, options)

    def write(self, writer, value, options):
        writer.write_start_object()
        for key, item in value.items():
            writer.write_property_name(key)
            self.value_converter.write(writer, item, options)
        writer.write_end_object()


def _optional_inner(type_: Any) -> Any | None:
    """Return X for X | None (or Optional[X]), otherwise None."""
    if get_origin(type_) not in (Union, types.UnionType):
        return None
    members = [arg for arg in get_args(type_) if arg is not type(None)]
    if len(members) != 1 or len(members) == len(get_args(type_)):
        return None
    return members[0]


class CollectionConverterFactory(JsonConverterFactory):
    def can_convert(self, type_to_convert):
        origin = get_origin(type_to_convert)
        args = get_args(type_to_convert)
        if origin is tuple:
            return len(args) == 2 and args[1] is Ellipsis
        if origin is list:
            return len(args) == 1
        if origin is dict:
            return len(args) == 2 and args[0] is str
        return False

    def create_converter(self, type_to_convert, options):
        if not self.can_convert(type_to_convert):
            raise TypeError(f"{type_to_convert!r} is not a supported collection type")

        origin = get_origin(type_to_convert)
        args = get_args(type_to_convert)

        if origin is dict:
            return StringKeyedDictConverter(options.get_converter(args[1]))

        element_type = args[0]
        inner = _optional_inner(element_type)
        if inner is not None:
            return NullableArrayConverter(options.get_converter(inner))
        return ArrayConverter(options.get_converter(element_type))
