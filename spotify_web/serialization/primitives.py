"""Converters for JSON scalars: strings, numbers, booleans and URLs."""

from urllib.parse import urlsplit

from spotify_web.core.exceptions import FormatError
from spotify_web.objectmodel.models import Url
from spotify_web.serialization.converter import JsonConverter


class StringConverter(JsonConverter[str]):
    def read(self, reader, options):
        return reader.get_string()

    def write(self, writer, value, options):
        writer.write_string_value(value)


class IntConverter(JsonConverter[int]):
    def read(self, reader, options):
        return reader.get_int()

    def write(self, writer, value, options):
        writer.write_number_value(value)


class FloatConverter(JsonConverter[float]):
    def read(self, reader, options):
        return reader.get_float()

    def write(self, writer, value, options):
        writer.write_number_value(value)


class BoolConverter(JsonConverter[bool]):
    def read(self, reader, options):
        return reader.get_bool()

    def write(self, writer, value, options):
        writer.write_boolean_value(value)


class UrlConverter(JsonConverter[Url]):
    """
    URI reference carried as a JSON string.

    Absolute URLs and relative references (including the empty string the
    models use as their default) are both accepted. Values are kept as
    strings; reading and writing both reject strings that cannot be parsed
    as a URI reference, such as an unterminated IPv6 host.
    """

    def read(self, reader, options):
        return Url(self.validate(reader.get_string()))

    def write(self, writer, value, options):
        writer.write_string_value(self.validate(value))

    @staticmethod
    def validate(value: str) -> str:
        try:
            urlsplit(value)
        except ValueError as e:
            raise FormatError(
                f"Invalid URL: {value!r}",
                details={"value": value, "original_error": str(e)}
            ) from e
        return value
