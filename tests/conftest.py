"""Test configuration and fixtures"""

import json
import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest


SIMPLIFIED_ARTIST = {
    "external_urls": {"spotify": "https://open.spotify.com/artist/0oSGxfWSnnOXhD2fKuz2Gy"},
    "href": "https://api.spotify.com/v1/artists/0oSGxfWSnnOXhD2fKuz2Gy",
    "id": "0oSGxfWSnnOXhD2fKuz2Gy",
    "name": "David Bowie",
    "type": "artist",
    "uri": "spotify:artist:0oSGxfWSnnOXhD2fKuz2Gy",
}

IMAGE = {"height": 640, "url": "https://i.scdn.co/image/ab67616d0000b273", "width": 640}


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def simplified_album_data():
    """Album object as embedded in a track"""
    return {
        "album_type": "album",
        "artists": [SIMPLIFIED_ARTIST],
        "available_markets": ["GB", "IT"],
        "external_urls": {"spotify": "https://open.spotify.com/album/2w1YJXWMIco9EurWpeyd9T"},
        "href": "https://api.spotify.com/v1/albums/2w1YJXWMIco9EurWpeyd9T",
        "id": "2w1YJXWMIco9EurWpeyd9T",
        "images": [IMAGE],
        "name": "Blackstar",
        "release_date": "2016-01-08",
        "release_date_precision": "day",
        "total_tracks": 7,
        "type": "album",
        "uri": "spotify:album:2w1YJXWMIco9EurWpeyd9T",
    }


@pytest.fixture
def track_data(simplified_album_data):
    """Full track object"""
    return {
        "album": simplified_album_data,
        "artists": [SIMPLIFIED_ARTIST],
        "available_markets": ["GB", "IT"],
        "disc_number": 1,
        "duration_ms": 597013,
        "explicit": False,
        "external_ids": {"isrc": "USRC11502937"},
        "external_urls": {"spotify": "https://open.spotify.com/track/3dzfuZtMRyOqO4SKdkpVU7"},
        "href": "https://api.spotify.com/v1/tracks/3dzfuZtMRyOqO4SKdkpVU7",
        "id": "3dzfuZtMRyOqO4SKdkpVU7",
        "is_local": False,
        "name": "Blackstar",
        "popularity": 61,
        "preview_url": None,
        "track_number": 1,
        "type": "track",
        "uri": "spotify:track:3dzfuZtMRyOqO4SKdkpVU7",
    }


@pytest.fixture
def show_data():
    """Simplified show object"""
    return {
        "available_markets": ["US"],
        "description": "Conversations about music.",
        "explicit": False,
        "external_urls": {"spotify": "https://open.spotify.com/show/38bS44xjbVVZ3No3ByF1dJ"},
        "href": "https://api.spotify.com/v1/shows/38bS44xjbVVZ3No3ByF1dJ",
        "id": "38bS44xjbVVZ3No3ByF1dJ",
        "images": [IMAGE],
        "is_externally_hosted": False,
        "languages": ["en"],
        "media_type": "audio",
        "name": "Song Exploder",
        "publisher": "Hrishikesh Hirway",
        "type": "show",
        "uri": "spotify:show:38bS44xjbVVZ3No3ByF1dJ",
    }


@pytest.fixture
def episode_data(show_data):
    """Episode object"""
    return {
        "audio_preview_url": "https://p.scdn.co/mp3-preview/2f37da1d4221f40b",
        "description": "The making of a song.",
        "duration_ms": 1502795,
        "explicit": False,
        "external_urls": {"spotify": "https://open.spotify.com/episode/512ojhOuo1ktJprKbVcKyQ"},
        "href": "https://api.spotify.com/v1/episodes/512ojhOuo1ktJprKbVcKyQ",
        "id": "512ojhOuo1ktJprKbVcKyQ",
        "images": [IMAGE],
        "is_externally_hosted": False,
        "is_playable": True,
        "languages": ["en"],
        "name": "Blackstar",
        "release_date": "2016-03",
        "release_date_precision": "month",
        "resume_point": {"fully_played": False, "resume_position_ms": 0},
        "show": show_data,
        "type": "episode",
        "uri": "spotify:episode:512ojhOuo1ktJprKbVcKyQ",
    }


@pytest.fixture
def private_user_data():
    """Current user's profile"""
    return {
        "country": "IT",
        "display_name": "Test User",
        "email": "test@example.com",
        "external_urls": {"spotify": "https://open.spotify.com/user/testuser"},
        "followers": {"href": None, "total": 12},
        "href": "https://api.spotify.com/v1/users/testuser",
        "id": "testuser",
        "images": [],
        "product": "premium",
        "type": "user",
        "uri": "spotify:user:testuser",
    }


def make_response(status_code: int, body) -> Mock:
    """Mock requests.Response with a JSON (or raw text) body"""
    text = body if isinstance(body, str) else json.dumps(body)
    response = Mock()
    response.status_code = status_code
    response.text = text
    response.content = text.encode("utf-8")
    return response


def token_body(access_token: str = "access-1", expires_in: int = 3600, **extra) -> dict:
    body = {"access_token": access_token, "token_type": "Bearer", "expires_in": expires_in}
    body.update(extra)
    return body


@pytest.fixture
def mock_session():
    """HTTP client whose post() answers with queued responses"""
    session = Mock()
    session.post.return_value = make_response(200, token_body())
    return session
