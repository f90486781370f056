"""
Converter contract shared by every JSON converter.

    - JsonConverter: reads one value of a type from a JsonReader and writes
      it to a JsonWriter. Writing is unsupported unless overridden.
    - JsonConverterFactory: creates converters for families of types
      (parameterized collections, Paging[T]).
    - ObjectConverter: base for JSON objects with a fixed set of known keys.
      It dispatches each key to a field reader, skips unknown keys, and
      builds the model in one step once the closing brace is reached.

Converters keep no per-read state, so one instance may serve any number of
concurrent reads.
"""

from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from spotify_web.core.exceptions import MissingFieldError, NotSupportedError
from spotify_web.serialization.json_reader import JsonReader, JsonTokenType, JsonWriter

if TYPE_CHECKING:
    from spotify_web.serialization.options import SerializerOptions


T = TypeVar("T")

FieldReader = Callable[[JsonReader], Any]


class JsonConverter(Generic[T]):
    """Reads and writes values of one type as JSON."""

    def read(self, reader: JsonReader, options: "SerializerOptions") -> T:
        """
        Read one value starting at the reader's current token.

        On return the reader is positioned on the value's last token.
        """
        raise NotImplementedError

    def write(self, writer: JsonWriter, value: T, options: "SerializerOptions") -> None:
        raise NotSupportedError(
            f"{type(self).__name__} does not support writing",
            details={"converter": type(self).__name__}
        )


class JsonConverterFactory:
    """Creates converters for a family of related types."""

    def can_convert(self, type_to_convert: Any) -> bool:
        raise NotImplementedError

    def create_converter(self, type_to_convert: Any, options: "SerializerOptions") -> JsonConverter:
        raise NotImplementedError


class ObjectConverter(JsonConverter[T]):
    """
    Base for converters of JSON objects with a known key set.

    Subclasses provide:
        model: Class constructed from the collected fields.
        required_fields: Keys that must be present when options.strict is set.
        field_readers(): Mapping of JSON key to a callable reading that key's
                         value; the callable is invoked with the reader
                         positioned on the value's first token.

    Values are collected into a dict keyed by JSON key and passed to
    create(), which by default calls model(**fields). Absent keys therefore
    keep the model's defaults. Subclasses override create() when the wire
    shape differs from the model's attributes.
    """

    model: type
    required_fields: tuple[str, ...] = ()

    def field_readers(self, options: "SerializerOptions") -> dict[str, FieldReader]:
        raise NotImplementedError

    def create(self, fields: dict[str, Any]) -> T:
        return self.model(**fields)

    def read(self, reader: JsonReader, options: "SerializerOptions") -> T:
        reader.expect(JsonTokenType.START_OBJECT)
        readers = self.field_readers(options)
        context = self.model.__name__
        fields: dict[str, Any] = {}

        while True:
            reader.read_or_fail(context)
            if reader.token_type is JsonTokenType.END_OBJECT:
                break

            name = reader.get_property_name()
            reader.read_or_fail(context)
            field_reader = readers.get(name)
            if field_reader is None:
                reader.skip()
            else:
                fields[name] = field_reader(reader)

        if options.strict:
            for name in self.required_fields:
                if name not in fields:
                    raise MissingFieldError(
                        f"Missing required field '{name}' in {context}",
                        details={"field": name, "type": context}
                    )

        return self.create(fields)


def read_string(reader: JsonReader) -> str:
    return reader.get_string()


def read_int(reader: JsonReader) -> int:
    return reader.get_int()


def read_bool(reader: JsonReader) -> bool:
    return reader.get_bool()


def nullable(field_reader: FieldReader) -> FieldReader:
    """Wrap a field reader so that a JSON null yields None."""
    def read(reader: JsonReader) -> Any:
        if reader.is_null:
            return None
        return field_reader(reader)
    return read


def write_property(
    writer: JsonWriter,
    name: str,
    type_: Any,
    value: Any,
    options: "SerializerOptions",
) -> None:
    """Write name and value through the converter registered for type_; None becomes null."""
    writer.write_property_name(name)
    if value is None:
        writer.write_null_value()
    else:
        options.get_converter(type_).write(writer, value, options)


def write_nullable_string(writer: JsonWriter, name: str, value: str | None) -> None:
    if value is None:
        writer.write_null(name)
    else:
        writer.write_string(name, value)


def write_nullable_number(writer: JsonWriter, name: str, value: int | float | None) -> None:
    if value is None:
        writer.write_null(name)
    else:
        writer.write_number(name, value)
