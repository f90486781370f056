"""
Streaming JSON token reader and compact JSON writer.

The converters in this package walk a JSON document token by token rather
than materializing a dict first, so they can skip unknown subtrees, detect
truncated documents and report the offset of structural problems.

JsonReader produces the tokens START_OBJECT, END_OBJECT, START_ARRAY,
END_ARRAY, PROPERTY_NAME, STRING, NUMBER, TRUE, FALSE and NULL. Grammar
violations raise StructuralJsonError immediately; a document that simply
stops early ends the token stream (read() returns False), which converters
report as "unexpected end of input".

JsonWriter is the mirror image: converters push structural tokens and
values, and getvalue() returns compact JSON text.

Example:
    reader = JsonReader('{"name": "Blackstar", "total_tracks": 7}')
    while reader.read():
        print(reader.token_type, reader.value)
"""

import json
import re
from enum import Enum, auto
from json.decoder import scanstring
from typing import Any

from spotify_web.core.exceptions import StructuralJsonError


class JsonTokenType(Enum):
    NONE = auto()
    START_OBJECT = auto()
    END_OBJECT = auto()
    START_ARRAY = auto()
    END_ARRAY = auto()
    PROPERTY_NAME = auto()
    STRING = auto()
    NUMBER = auto()
    TRUE = auto()
    FALSE = auto()
    NULL = auto()


_WHITESPACE = re.compile(r"[ \t\n\r]*")
_NUMBER = re.compile(r"-?(?:0|[1-9]\d*)(\.\d+)?([eE][-+]?\d+)?")
_LITERALS = (
    ("true", JsonTokenType.TRUE, True),
    ("false", JsonTokenType.FALSE, False),
    ("null", JsonTokenType.NULL, None),
)

# What the reader accepts next
_VALUE = "value"
_VALUE_OR_END = "value_or_end"      # right after '['
_NAME = "name"                      # after ',' inside an object
_NAME_OR_END = "name_or_end"        # right after '{'
_SEPARATOR = "separator"            # after a complete value inside a container
_DONE = "done"                      # after the root value


class JsonReader:
    """
    Pull-style tokenizer over one JSON document.

    Attributes:
        token_type: Type of the current token (NONE before the first read
                    and after the end of input).
        value: Payload of the current token: the decoded string for STRING
               and PROPERTY_NAME, int or float for NUMBER, True/False/None
               for the literals, None for structural tokens.
    """

    def __init__(self, data: str | bytes | bytearray) -> None:
        if isinstance(data, (bytes, bytearray)):
            try:
                data = bytes(data).decode("utf-8-sig")
            except UnicodeDecodeError as e:
                raise StructuralJsonError(
                    "JSON input is not valid UTF-8",
                    details={"offset": e.start}
                ) from e
        self._text = data
        self._pos = 0
        self._stack: list[str] = []
        self._state = _VALUE
        self.token_type = JsonTokenType.NONE
        self.value: Any = None

    @property
    def depth(self) -> int:
        """Number of currently open objects and arrays."""
        return len(self._stack)

    @property
    def is_null(self) -> bool:
        return self.token_type is JsonTokenType.NULL

    def read(self) -> bool:
        """
        Advance to the next token.

        Returns:
            True if a token was read, False at the end of the input.

        Raises:
            StructuralJsonError: If the input violates the JSON grammar.
        """
        text = self._text
        pos = _WHITESPACE.match(text, self._pos).end()
        if pos >= len(text):
            self._pos = pos
            self._set_token(JsonTokenType.NONE)
            return False

        char = text[pos]
        state = self._state

        if state == _DONE:
            raise self._error("Unexpected content after the end of the JSON document", pos)

        if state == _SEPARATOR and char == ",":
            self._state = _NAME if self._stack[-1] == "{" else _VALUE
            self._pos = pos + 1
            return self.read()

        if char in "}]":
            return self._read_end(char, pos)

        if state == _SEPARATOR:
            closer = "}" if self._stack[-1] == "{" else "]"
            raise self._error(f"Expected ',' or '{closer}', found {char!r}", pos)

        if state in (_NAME, _NAME_OR_END):
            return self._read_property_name(char, pos)

        return self._read_value(char, pos)

    def read_or_fail(self, context: str | None = None) -> None:
        """
        Advance to the next token, treating the end of input as an error.

        Args:
            context: Optional name of what is being read, used in the message.
        """
        if not self.read():
            message = "Unexpected end of JSON input"
            if context:
                message += f" while reading {context}"
            raise self._error(message, self._pos)

    def expect(self, token_type: JsonTokenType) -> None:
        """Raise StructuralJsonError unless the current token is token_type."""
        if self.token_type is not token_type:
            raise self._error(
                f"Expected {token_type.name}, found {self.token_type.name}", self._pos
            )

    def get_string(self) -> str:
        self.expect(JsonTokenType.STRING)
        return self.value

    def get_property_name(self) -> str:
        self.expect(JsonTokenType.PROPERTY_NAME)
        return self.value

    def get_int(self) -> int:
        self.expect(JsonTokenType.NUMBER)
        if isinstance(self.value, float):
            if not self.value.is_integer():
                raise self._error(f"Expected an integer, found {self.value}", self._pos)
            return int(self.value)
        return self.value

    def get_float(self) -> float:
        self.expect(JsonTokenType.NUMBER)
        return float(self.value)

    def get_bool(self) -> bool:
        if self.token_type not in (JsonTokenType.TRUE, JsonTokenType.FALSE):
            raise self._error(f"Expected a boolean, found {self.token_type.name}", self._pos)
        return self.value

    def skip(self) -> None:
        """
        Skip the current value including all of its children.

        When positioned on a property name, the property's value is skipped.
        Afterwards the reader is positioned on the last token of the skipped
        value (its END_OBJECT/END_ARRAY for containers).
        """
        if self.token_type is JsonTokenType.PROPERTY_NAME:
            self.read_or_fail()
        if self.token_type not in (JsonTokenType.START_OBJECT, JsonTokenType.START_ARRAY):
            return

        depth = 1
        while depth:
            self.read_or_fail()
            if self.token_type in (JsonTokenType.START_OBJECT, JsonTokenType.START_ARRAY):
                depth += 1
            elif self.token_type in (JsonTokenType.END_OBJECT, JsonTokenType.END_ARRAY):
                depth -= 1

    def _read_end(self, char: str, pos: int) -> bool:
        opener = "{" if char == "}" else "["
        allowed = (
            self._state == _SEPARATOR
            or (self._state == _NAME_OR_END and char == "}")
            or (self._state == _VALUE_OR_END and char == "]")
        )
        if not allowed or not self._stack or self._stack[-1] != opener:
            raise self._error(f"Unexpected {char!r}", pos)

        self._stack.pop()
        self._pos = pos + 1
        self._after_value()
        self._set_token(JsonTokenType.END_OBJECT if char == "}" else JsonTokenType.END_ARRAY)
        return True

    def _read_property_name(self, char: str, pos: int) -> bool:
        if char != '"':
            raise self._error(f"Expected a property name, found {char!r}", pos)

        name, end = self._scan_string(pos)
        end = _WHITESPACE.match(self._text, end).end()
        # A document cut right after the name still yields the name token
        if end < len(self._text):
            if self._text[end] != ":":
                raise self._error(f"Expected ':' after property name {name!r}", end)
            end += 1

        self._pos = end
        self._state = _VALUE
        self._set_token(JsonTokenType.PROPERTY_NAME, name)
        return True

    def _read_value(self, char: str, pos: int) -> bool:
        if char == "{":
            self._stack.append("{")
            self._state = _NAME_OR_END
            self._pos = pos + 1
            self._set_token(JsonTokenType.START_OBJECT)
            return True

        if char == "[":
            self._stack.append("[")
            self._state = _VALUE_OR_END
            self._pos = pos + 1
            self._set_token(JsonTokenType.START_ARRAY)
            return True

        if char == '"':
            value, end = self._scan_string(pos)
            self._pos = end
            self._after_value()
            self._set_token(JsonTokenType.STRING, value)
            return True

        match = _NUMBER.match(self._text, pos)
        if match:
            literal = match.group()
            is_float = match.group(1) is not None or match.group(2) is not None
            self._pos = match.end()
            self._after_value()
            self._set_token(JsonTokenType.NUMBER, float(literal) if is_float else int(literal))
            return True

        for word, token_type, value in _LITERALS:
            if self._text.startswith(word, pos):
                self._pos = pos + len(word)
                self._after_value()
                self._set_token(token_type, value)
                return True

        raise self._error(f"Unexpected character {char!r}", pos)

    def _scan_string(self, pos: int) -> tuple[str, int]:
        try:
            return scanstring(self._text, pos + 1, True)
        except json.JSONDecodeError as e:
            raise StructuralJsonError(
                f"Invalid JSON string: {e.msg}",
                details={"offset": e.pos}
            ) from e

    def _after_value(self) -> None:
        self._state = _SEPARATOR if self._stack else _DONE

    def _set_token(self, token_type: JsonTokenType, value: Any = None) -> None:
        self.token_type = token_type
        self.value = value

    def _error(self, message: str, offset: int) -> StructuralJsonError:
        return StructuralJsonError(message, details={"offset": offset})


class JsonWriter:
    """
    Minimal compact JSON writer.

    Commas and colons are inserted automatically; callers only push the
    structure. Strings are escaped with json.dumps.

    Example:
        writer = JsonWriter()
        writer.write_start_object()
        writer.write_string("type", "episode")
        writer.write_null("resume_point")
        writer.write_end_object()
        writer.getvalue()  # '{"type":"episode","resume_point":null}'
    """

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._first = [True]
        self._after_name = False

    def getvalue(self) -> str:
        return "".join(self._parts)

    def write_start_object(self) -> None:
        self._begin_value()
        self._parts.append("{")
        self._first.append(True)

    def write_end_object(self) -> None:
        self._first.pop()
        self._parts.append("}")

    def write_start_array(self) -> None:
        self._begin_value()
        self._parts.append("[")
        self._first.append(True)

    def write_end_array(self) -> None:
        self._first.pop()
        self._parts.append("]")

    def write_property_name(self, name: str) -> None:
        self._begin_value()
        self._parts.append(json.dumps(name, ensure_ascii=False))
        self._parts.append(":")
        self._after_name = True

    def write_string_value(self, value: str) -> None:
        self._begin_value()
        self._parts.append(json.dumps(value, ensure_ascii=False))

    def write_number_value(self, value: int | float) -> None:
        self._begin_value()
        self._parts.append(json.dumps(value, allow_nan=False))

    def write_boolean_value(self, value: bool) -> None:
        self._begin_value()
        self._parts.append("true" if value else "false")

    def write_null_value(self) -> None:
        self._begin_value()
        self._parts.append("null")

    def write_string(self, name: str, value: str) -> None:
        self.write_property_name(name)
        self.write_string_value(value)

    def write_number(self, name: str, value: int | float) -> None:
        self.write_property_name(name)
        self.write_number_value(value)

    def write_boolean(self, name: str, value: bool) -> None:
        self.write_property_name(name)
        self.write_boolean_value(value)

    def write_null(self, name: str) -> None:
        self.write_property_name(name)
        self.write_null_value()

    def _begin_value(self) -> None:
        # A value directly after its property name needs no separator
        if self._after_name:
            self._after_name = False
            return
        if not self._first[-1]:
            self._parts.append(",")
        self._first[-1] = False
