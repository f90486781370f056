"""Test composite object converters"""

import json
from datetime import date

import pytest

from conftest import IMAGE, SIMPLIFIED_ARTIST, make_response

from spotify_web.core.exceptions import (
    FormatError,
    InvalidEnumValueError,
    MissingFieldError,
    NotSupportedError,
    SpotifyApiError,
    StructuralJsonError,
)
from spotify_web.objectmodel.enums import AlbumGroups, AlbumType, CopyrightType, Product, ReleaseDatePrecision
from spotify_web.objectmodel.models import (
    Album,
    ApiError,
    Artist,
    Episode,
    Followers,
    Image,
    PrivateUser,
    PublicUser,
    SimplifiedAlbum,
    SimplifiedArtist,
    SimplifiedShow,
    SimplifiedTrack,
    Track,
)
from spotify_web.serialization import (
    create_default_options,
    deserialize,
    deserialize_response,
    serialize,
)


class TestTrackConverter:
    """Test track decoding"""

    def test_read_full_track(self, track_data):
        """Test every field of a full track"""
        track = deserialize(json.dumps(track_data), Track)

        assert track.id == "3dzfuZtMRyOqO4SKdkpVU7"
        assert track.uri == "spotify:track:3dzfuZtMRyOqO4SKdkpVU7"
        assert track.name == "Blackstar"
        assert track.duration_ms == 597013
        assert track.disc_number == 1
        assert track.track_number == 1
        assert track.explicit is False
        assert track.is_local is False
        assert track.preview_url is None
        assert track.popularity == 61
        assert track.available_markets == ("GB", "IT")
        assert track.external_ids == {"isrc": "USRC11502937"}
        assert track.artists == (SimplifiedArtist(
            id="0oSGxfWSnnOXhD2fKuz2Gy",
            uri="spotify:artist:0oSGxfWSnnOXhD2fKuz2Gy",
            href="https://api.spotify.com/v1/artists/0oSGxfWSnnOXhD2fKuz2Gy",
            name="David Bowie",
            external_urls={"spotify": "https://open.spotify.com/artist/0oSGxfWSnnOXhD2fKuz2Gy"},
        ),)

        album = track.album
        assert album.album_type is AlbumType.ALBUM
        assert album.release_date == date(2016, 1, 8)
        assert album.release_date_precision is ReleaseDatePrecision.DAY
        assert album.images == (Image(url=IMAGE["url"], width=640, height=640),)

    def test_read_from_bytes(self, track_data):
        """Test raw response bytes are accepted"""
        track = deserialize(json.dumps(track_data).encode("utf-8"), Track)
        assert track.name == "Blackstar"

    def test_unknown_keys_skipped(self, track_data):
        """Test unknown keys of any shape do not change the result"""
        expected = deserialize(json.dumps(track_data), Track)
        track_data["linked_from"] = {"id": "x", "external_urls": {"a": "b"}}
        track_data["restrictions"] = [{"reason": "market"}, None, 1.5]
        track_data["is_playable"] = True

        assert deserialize(json.dumps(track_data), Track) == expected

    def test_absent_keys_take_defaults(self):
        """Test lenient decoding fills in defaults"""
        track = deserialize('{"id": "t", "uri": "spotify:track:t"}', Track)
        assert track.album is None
        assert track.artists == ()
        assert track.duration_ms == 0

    def test_strict_missing_required_field(self, track_data):
        """Test strict decoding reports the missing field"""
        del track_data["id"]
        with pytest.raises(MissingFieldError) as exc_info:
            deserialize(json.dumps(track_data), Track, create_default_options(strict=True))
        assert str(exc_info.value) == "Missing required field 'id' in Track"
        assert exc_info.value.details == {"field": "id", "type": "Track"}

    def test_wrong_value_shape(self, track_data):
        """Test a string where a number belongs raises"""
        track_data["duration_ms"] = "long"
        with pytest.raises(StructuralJsonError):
            deserialize(json.dumps(track_data), Track)

    def test_non_integral_number(self, track_data):
        """Test fractional integers are rejected"""
        track_data["popularity"] = 61.5
        with pytest.raises(StructuralJsonError):
            deserialize(json.dumps(track_data), Track)

    def test_invalid_url(self, track_data):
        """Test unparseable URLs are rejected"""
        track_data["href"] = "https://[::1/v1/tracks"
        with pytest.raises(FormatError) as exc_info:
            deserialize(json.dumps(track_data), Track)
        assert exc_info.value.details["value"] == "https://[::1/v1/tracks"

    def test_relative_url(self, track_data):
        """Test relative references are kept as given"""
        track_data["href"] = "/v1/tracks/3dzfuZtMRyOqO4SKdkpVU7"
        track_data["preview_url"] = "preview"
        track = deserialize(json.dumps(track_data), Track)
        assert track.href == "/v1/tracks/3dzfuZtMRyOqO4SKdkpVU7"
        assert track.preview_url == "preview"

    def test_trailing_content(self, track_data):
        """Test content after the root object raises"""
        with pytest.raises(StructuralJsonError):
            deserialize(json.dumps(track_data) + " {}", Track)

    def test_write_not_supported(self, track_data):
        """Test tracks are read-only"""
        track = deserialize(json.dumps(track_data), Track)
        with pytest.raises(NotSupportedError):
            serialize(track, Track)

    def test_simplified_projection(self, track_data):
        """Test the full track projects onto the simplified shape"""
        track = deserialize(json.dumps(track_data), Track)
        del track_data["album"], track_data["external_ids"], track_data["popularity"]
        assert track.simplified() == deserialize(json.dumps(track_data), SimplifiedTrack)


class TestAlbumConverter:
    """Test album decoding"""

    @pytest.fixture
    def album_data(self, simplified_album_data):
        return {
            **simplified_album_data,
            "album_group": "appears_on",
            "copyrights": [
                {"text": "(C) 2016 ISO Records", "type": "C"},
                {"text": "(P) 2016 ISO Records", "type": "P"},
            ],
            "external_ids": {"upc": "888751738720"},
            "genres": [],
            "label": "Columbia",
            "popularity": 70,
            "tracks": {
                "href": "https://api.spotify.com/v1/albums/2w1YJXWMIco9EurWpeyd9T/tracks",
                "items": [],
                "limit": 50,
                "next": None,
                "offset": 0,
                "previous": None,
                "total": 7,
            },
        }

    def test_read_album(self, album_data):
        """Test album specific fields"""
        album = deserialize(json.dumps(album_data), Album)

        assert album.album_group is AlbumGroups.APPEARS_ON
        assert album.label == "Columbia"
        assert [c.type for c in album.copyrights] == [CopyrightType.COPYRIGHT, CopyrightType.PERFORMANCE]
        assert album.tracks.total == 7
        assert album.tracks.items == ()
        assert album.simplified().name == "Blackstar"

    def test_release_date_before_precision(self, album_data):
        """Test key order does not matter for the release date"""
        ordered = {"release_date": "1972", "release_date_precision": "year", "id": "a", "uri": "u"}
        reversed_ = {"release_date_precision": "year", "id": "a", "uri": "u", "release_date": "1972"}
        first = deserialize(json.dumps(ordered), SimplifiedAlbum)
        second = deserialize(json.dumps(reversed_), SimplifiedAlbum)

        assert first == second
        assert first.release_date == date(1972, 1, 1)
        assert first.release_date_precision is ReleaseDatePrecision.YEAR

    def test_release_date_precision_mismatch(self, album_data):
        """Test a date not matching its precision raises"""
        album_data["release_date_precision"] = "month"
        with pytest.raises(FormatError):
            deserialize(json.dumps(album_data), Album)

    def test_unknown_album_type(self, album_data):
        """Test unknown enum tokens raise"""
        album_data["album_type"] = "ep"
        with pytest.raises(InvalidEnumValueError):
            deserialize(json.dumps(album_data), Album)


class TestArtistConverter:
    """Test artist round trips"""

    def test_read_and_write(self):
        """Test a full artist survives a write and a read"""
        data = {
            **SIMPLIFIED_ARTIST,
            "followers": {"href": None, "total": 9000},
            "genres": ["art rock"],
            "images": [IMAGE],
            "popularity": 80,
        }
        artist = deserialize(json.dumps(data), Artist)

        assert artist.followers == Followers(total=9000)
        assert json.loads(serialize(artist, Artist))["type"] == "artist"
        assert deserialize(serialize(artist, Artist), Artist) == artist
        assert artist.simplified() == deserialize(json.dumps(SIMPLIFIED_ARTIST), SimplifiedArtist)


class TestEpisodeConverter:
    """Test episode reading and writing"""

    def test_read(self, episode_data):
        """Test episode fields including the month precision date"""
        episode = deserialize(json.dumps(episode_data), Episode)

        assert episode.release_date == date(2016, 3, 1)
        assert episode.release_date_precision is ReleaseDatePrecision.MONTH
        assert episode.show.publisher == "Hrishikesh Hirway"
        assert episode.resume_point.fully_played is False
        assert episode.is_playable is True

    def test_show_externally_hosted_null(self, show_data):
        """Test null is_externally_hosted reads as False"""
        show_data["is_externally_hosted"] = None
        assert deserialize(json.dumps(show_data), SimplifiedShow).is_externally_hosted is False

    def test_write_key_order(self, episode_data):
        """Test the writer emits the type tag first and a fixed key order"""
        episode = deserialize(json.dumps(episode_data), Episode)
        written = json.loads(serialize(episode, Episode))

        assert list(written) == [
            "type", "id", "uri", "href", "name", "description", "images", "show",
            "duration_ms", "release_date", "release_date_precision", "explicit",
            "is_playable", "is_externally_hosted", "languages", "audio_preview_url",
            "external_urls", "resume_point",
        ]
        assert written["type"] == "episode"
        assert written["show"]["type"] == "show"
        assert written["release_date"] == "2016-03"
        assert written["release_date_precision"] == "month"

    def test_write_nulls(self):
        """Test None values are written as explicit nulls"""
        written = json.loads(serialize(Episode(id="e", uri="spotify:episode:e",
                                               href="https://api.spotify.com/v1/episodes/e"),
                                       Episode))

        assert written["show"] is None
        assert written["release_date"] is None
        assert written["audio_preview_url"] is None
        assert written["resume_point"] is None

    def test_round_trip(self, episode_data):
        """Test decode(encode(x)) == x"""
        episode = deserialize(json.dumps(episode_data), Episode)
        assert deserialize(serialize(episode, Episode), Episode) == episode

    def test_sparse_round_trip(self):
        """Test an episode decoded with defaults survives a write and a read"""
        episode = deserialize('{"id": "x", "uri": "spotify:episode:x"}', Episode)
        text = serialize(episode, Episode)

        assert json.loads(text)["href"] == ""
        assert deserialize(text, Episode) == episode

    def test_sparse_image_round_trip(self):
        """Test an image without a URL survives a write and a read"""
        image = deserialize("{}", Image)
        assert deserialize(serialize(image, Image), Image) == image


class TestUserConverters:
    """Test public and private user profiles"""

    def test_read_private_user(self, private_user_data):
        """Test the flat object is split into public and private parts"""
        user = deserialize(json.dumps(private_user_data), PrivateUser)

        assert user.id == "testuser"
        assert user.display_name == "Test User"
        assert user.email == "test@example.com"
        assert user.country == "IT"
        assert user.product is Product.PREMIUM
        assert user.public.followers == Followers(total=12)

    def test_private_user_round_trip(self, private_user_data):
        """Test writing produces the flat wire object again"""
        user = deserialize(json.dumps(private_user_data), PrivateUser)
        written = json.loads(serialize(user, PrivateUser))

        assert written == private_user_data
        assert list(written)[0] == "type"
        assert list(written)[-3:] == ["email", "country", "product"]

    def test_public_user_ignores_private_fields(self, private_user_data):
        """Test private keys are skipped when reading a public profile"""
        user = deserialize(json.dumps(private_user_data), PublicUser)
        assert user.display_name == "Test User"
        assert "email" not in json.loads(serialize(user, PublicUser))

    def test_null_display_name(self, private_user_data):
        """Test users without a display name"""
        private_user_data["display_name"] = None
        private_user_data["product"] = None
        user = deserialize(json.dumps(private_user_data), PrivateUser)
        assert user.display_name is None
        assert json.loads(serialize(user, PrivateUser))["product"] is None


class TestApiErrorConverter:
    """Test the regular error envelope"""

    def test_read(self):
        """Test the wrapper object is unwrapped"""
        error = deserialize('{"error": {"status": 401, "message": "The access token expired"}}',
                            ApiError)
        assert error == ApiError(status_code=401, message="The access token expired")

    def test_strict_requires_error(self):
        """Test strict mode rejects a body without the error object"""
        with pytest.raises(MissingFieldError):
            deserialize('{"status": 401}', ApiError, create_default_options(strict=True))


class TestDeserializeResponse:
    """Test decoding of Web API responses"""

    def test_success(self, track_data):
        """Test 2xx bodies are decoded as the requested type"""
        track = deserialize_response(make_response(200, track_data), Track)
        assert track.name == "Blackstar"

    def test_error_object(self):
        """Test error statuses raise with the body's status and message"""
        response = make_response(401, {"error": {"status": 401, "message": "The access token expired"}})
        with pytest.raises(SpotifyApiError) as exc_info:
            deserialize_response(response, Track)
        assert exc_info.value.status_code == 401
        assert exc_info.value.api_message == "The access token expired"

    def test_undecodable_error_body(self):
        """Test error statuses without a JSON body keep the raw text"""
        with pytest.raises(SpotifyApiError) as exc_info:
            deserialize_response(make_response(503, "Service Unavailable"), Track)
        assert exc_info.value.status_code == 503
        assert exc_info.value.api_message == "Service Unavailable"
