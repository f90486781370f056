"""Test array, nullable array and map converters"""

import pytest

from spotify_web.core.exceptions import NotSupportedError, StructuralJsonError
from spotify_web.objectmodel.models import Image, Url
from spotify_web.serialization import create_default_options, deserialize, serialize
from spotify_web.serialization.collection_converters import (
    ArrayConverter,
    CollectionConverterFactory,
    NullableArrayConverter,
    StringKeyedDictConverter,
)
from spotify_web.serialization.primitives import StringConverter


class TestArrayConverter:
    """Test plain arrays"""

    def test_read_as_tuple(self):
        """Test arrays decode into tuples"""
        assert deserialize('["GB", "IT"]', tuple[str, ...]) == ("GB", "IT")
        assert deserialize('[]', list[int]) == ()

    def test_read_objects(self):
        """Test elements go through the element converter"""
        images = deserialize('[{"url": "https://i.scdn.co/a", "width": 64, "height": null}]',
                             tuple[Image, ...])
        assert images == (Image(url="https://i.scdn.co/a", width=64, height=None),)

    def test_null_element_rejected(self):
        """Test a plain array does not accept null elements"""
        with pytest.raises(StructuralJsonError):
            deserialize('["a", null]', tuple[str, ...])

    def test_write(self):
        """Test arrays are written element by element"""
        assert serialize(("a", "b"), tuple[str, ...]) == '["a","b"]'


class TestNullableArrayConverter:
    """Test arrays with null slots"""

    def test_nulls_become_none(self):
        """Test null literals keep their position as None"""
        value = deserialize('[null, {"url": "https://i.scdn.co/a"}, null]', tuple[Image | None, ...])
        assert value == (None, Image(url="https://i.scdn.co/a"), None)

    def test_truncated_input(self):
        """Test end of input inside the array raises"""
        with pytest.raises(StructuralJsonError) as exc_info:
            deserialize('[null, "a"', tuple[str | None, ...])
        assert "Unexpected end of JSON input" in str(exc_info.value)

    def test_not_an_array(self):
        """Test an object where an array belongs raises"""
        with pytest.raises(StructuralJsonError):
            deserialize('{"a": 1}', tuple[str | None, ...])

    def test_write_not_supported(self):
        """Test writing raises NotSupportedError"""
        with pytest.raises(NotSupportedError):
            serialize((None, "a"), tuple[str | None, ...])


class TestStringKeyedDictConverter:
    """Test string-keyed maps"""

    def test_read_keeps_order(self):
        """Test keys come back in document order"""
        value = deserialize('{"spotify": "https://open.spotify.com/x", "web": "https://example.com"}',
                            dict[str, Url])
        assert list(value.items()) == [
            ("spotify", "https://open.spotify.com/x"),
            ("web", "https://example.com"),
        ]

    def test_empty_object(self):
        """Test an empty object decodes to an empty dict"""
        assert deserialize("{}", dict[str, str]) == {}

    def test_not_an_object(self):
        """Test an array where a map belongs raises"""
        with pytest.raises(StructuralJsonError):
            deserialize('["isrc"]', dict[str, str])

    def test_write(self):
        """Test maps are written in insertion order"""
        assert serialize({"b": "2", "a": "1"}, dict[str, str]) == '{"b":"2","a":"1"}'


class TestCollectionConverterFactory:
    """Test converter selection by type shape"""

    @pytest.fixture
    def factory(self):
        return CollectionConverterFactory()

    @pytest.fixture
    def options(self):
        return create_default_options()

    def test_can_convert(self, factory):
        """Test supported and unsupported shapes"""
        assert factory.can_convert(tuple[str, ...])
        assert factory.can_convert(list[str])
        assert factory.can_convert(dict[str, int])
        assert not factory.can_convert(dict[int, str])
        assert not factory.can_convert(tuple[str, int])
        assert not factory.can_convert(str)

    def test_created_types(self, factory, options):
        """Test each shape gets its converter"""
        assert isinstance(factory.create_converter(tuple[str, ...], options), ArrayConverter)
        assert isinstance(
            factory.create_converter(tuple[str | None, ...], options), NullableArrayConverter
        )
        converter = factory.create_converter(dict[str, str], options)
        assert isinstance(converter, StringKeyedDictConverter)
        assert isinstance(converter.value_converter, StringConverter)

    def test_unsupported_type_raises(self, factory, options):
        """Test asking for an unsupported shape is a programming error"""
        with pytest.raises(TypeError):
            factory.create_converter(set[str], options)

    def test_options_cache_created_converters(self, options):
        """Test the registry returns the same converter for repeated lookups"""
        assert options.get_converter(tuple[str, ...]) is options.get_converter(tuple[str, ...])

    def test_unknown_element_type(self, options):
        """Test unknown element types are reported as not supported"""
        with pytest.raises(NotSupportedError):
            options.get_converter(tuple[complex, ...])
