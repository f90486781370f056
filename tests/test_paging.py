"""Test paging envelope conversion"""

import json

import pytest

from conftest import SIMPLIFIED_ARTIST

from spotify_web.core.exceptions import NotSupportedError, StructuralJsonError
from spotify_web.objectmodel.models import Artist, Paging, SimplifiedArtist, Track
from spotify_web.serialization import create_default_options, deserialize, serialize
from spotify_web.serialization.paging import PagingConverter, PagingConverterFactory


def page_of(items, **overrides):
    page = {
        "href": "https://api.spotify.com/v1/me/tracks?offset=0&limit=20",
        "items": items,
        "limit": 20,
        "next": "https://api.spotify.com/v1/me/tracks?offset=20&limit=20",
        "offset": 0,
        "previous": None,
        "total": 41,
    }
    page.update(overrides)
    return json.dumps(page)


class TestPagingConverter:
    """Test reading and writing pages"""

    def test_read_track_page(self, track_data):
        """Test a page of full tracks is decoded with all envelope fields"""
        page = deserialize(page_of([track_data, track_data]), Paging[Track])

        assert isinstance(page, Paging)
        assert len(page.items) == 2
        assert page.items[0].name == "Blackstar"
        assert page.items[0].album.total_tracks == 7
        assert page.limit == 20
        assert page.offset == 0
        assert page.total == 41
        assert page.next.endswith("offset=20&limit=20")
        assert page.previous is None

    def test_unknown_keys_skipped(self):
        """Test extra envelope keys are ignored"""
        text = page_of([SIMPLIFIED_ARTIST], cursors={"after": "abc", "nested": [1, {"x": 2}]})
        page = deserialize(text, Paging[SimplifiedArtist])
        assert page.items[0].name == "David Bowie"

    def test_minimal_empty_page(self):
        """Test a page with a relative href and no items"""
        page = deserialize(
            '{"href":"h","items":[],"limit":20,"next":null,"offset":0,"previous":null,"total":0}',
            Paging[Track],
        )
        assert page == Paging(href="h", items=(), limit=20, offset=0, total=0)

    def test_empty_page(self):
        """Test a page without items"""
        page = deserialize(page_of([], next=None, total=0), Paging[Artist])
        assert page.items == ()
        assert page.next is None

    def test_not_an_object(self):
        """Test an array where a page belongs raises"""
        with pytest.raises(StructuralJsonError):
            deserialize("[]", Paging[Track])

    def test_truncated(self):
        """Test a page cut inside its items raises"""
        text = page_of([SIMPLIFIED_ARTIST])
        with pytest.raises(StructuralJsonError) as exc_info:
            deserialize(text[:text.index('"name"')], Paging[SimplifiedArtist])
        assert "Unexpected end of JSON input" in str(exc_info.value)

    def test_write_artist_page(self):
        """Test writable item types make the page writable in fixed key order"""
        artist = Artist(
            id="0oSGxfWSnnOXhD2fKuz2Gy",
            uri="spotify:artist:0oSGxfWSnnOXhD2fKuz2Gy",
            href="https://api.spotify.com/v1/artists/0oSGxfWSnnOXhD2fKuz2Gy",
            name="David Bowie",
        )
        page = Paging(
            href="https://api.spotify.com/v1/me/following",
            items=(artist,),
            limit=1,
            offset=0,
            total=1,
        )

        text = serialize(page, Paging[Artist])

        assert list(json.loads(text)) == [
            "href", "items", "limit", "next", "offset", "previous", "total",
        ]
        assert json.loads(text)["next"] is None
        assert deserialize(text, Paging[Artist]) == page

    def test_write_track_page_not_supported(self, track_data):
        """Test pages of read-only items cannot be written"""
        page = deserialize(page_of([track_data]), Paging[Track])
        with pytest.raises(NotSupportedError):
            serialize(page, Paging[Track])


class TestPagingConverterFactory:
    """Test Paging[T] resolution"""

    def test_can_convert(self):
        """Test only parameterized pages are accepted"""
        factory = PagingConverterFactory()
        assert factory.can_convert(Paging[Track])
        assert not factory.can_convert(Paging)
        assert not factory.can_convert(tuple[Track, ...])

    def test_non_paging_type_raises(self):
        """Test asking for a converter of another type is rejected"""
        with pytest.raises(TypeError):
            PagingConverterFactory().create_converter(Track, create_default_options())

    def test_converter_bound_to_item_type(self):
        """Test the created converter knows its item type"""
        converter = create_default_options().get_converter(Paging[Track])
        assert isinstance(converter, PagingConverter)
        assert converter.item_type is Track
