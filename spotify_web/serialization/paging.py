"""
Paging envelope converter.

PagingConverterFactory serves every parameterized Paging[T]: it extracts T,
resolves the converter of tuple[T, ...] for the items, and builds a
PagingConverter bound to it. Whether a page can be written depends on
whether T's converter can.
"""

from typing import Any, get_args, get_origin

from spotify_web.objectmodel.models import Paging, Url
from spotify_web.serialization.converter import (
    JsonConverter,
    JsonConverterFactory,
    ObjectConverter,
    nullable,
    read_int,
    write_nullable_string,
)


class PagingConverter(ObjectConverter[Paging]):
    model = Paging
    required_fields = ("items",)

    def __init__(self, item_type: Any, items_converter: JsonConverter) -> None:
        self.item_type = item_type
        self.items_converter = items_converter

    def field_readers(self, options):
        url = options.reader_for(Url)
        return {
            "href": url,
            "items": lambda reader: self.items_converter.read(reader, options),
            "limit": read_int,
            "next": nullable(url),
            "offset": read_int,
            "previous": nullable(url),
            "total": read_int,
        }

    def create(self, fields):
        return Paging(**fields)

    def write(self, writer, value, options):
        writer.write_start_object()
        writer.write_string("href", value.href)
        writer.write_property_name("items")
        self.items_converter.write(writer, value.items, options)
        writer.write_number("limit", value.limit)
        write_nullable_string(writer, "next", value.next)
        writer.write_number("offset", value.offset)
        write_nullable_string(writer, "previous", value.previous)
        writer.write_number("total", value.total)
        writer.write_end_object()


class PagingConverterFactory(JsonConverterFactory):
    def can_convert(self, type_to_convert):
        return get_origin(type_to_convert) is Paging and len(get_args(type_to_convert)) == 1

    def create_converter(self, type_to_convert, options):
        if not self.can_convert(type_to_convert):
            raise TypeError(f"{type_to_convert!r} is not a parameterized Paging type")

        (item_type,) = get_args(type_to_convert)
        return PagingConverter(item_type, options.get_converter(tuple[item_type, ...]))
