"""Spotify remote service mapping and error translation."""

import pytest
import requests
from spotipy import SpotifyException

from pickify.adapters.spotify.remote_service import SpotipyRemoteService
from pickify.domain.errors import TransportError
from pickify.domain.model import Album, Artist, ItemKind, Playlist, Track


def _track(i: int) -> dict:
    return {
        "id": f"track-{i}",
        "name": f"Song {i}",
        "uri": f"spotify:track:track-{i}",
        "artists": [{"name": "Bruno Mars"}, {"name": "Anderson .Paak"}],
        "album": {"name": "An Evening"},
    }


class FakeSpotify:
    def __init__(self, saved_total: int = 0):
        self.saved_total = saved_total
        self.calls = []

    def search(self, q, limit, type):
        self.calls.append(("search", q, limit, type))
        return {
            "tracks": {"items": [_track(1), None, _track(2)]},
            "albums": {"items": [{"id": "al", "name": "An Evening", "artists": [{"name": "Silk Sonic"}], "uri": "spotify:album:al"}]},
            "artists": {"items": [{"id": "ar", "name": "Silk Sonic", "uri": "spotify:artist:ar"}]},
            "playlists": {"items": [None, {"id": "pl", "name": "Soul", "owner": {"id": "bob", "display_name": None}}]},
        }

    def current_user_playlists(self, limit):
        self.calls.append(("current_user_playlists", limit))
        return {"items": [{"id": "pl", "name": "Mine", "owner": {"display_name": "Alice"}, "uri": "spotify:playlist:pl"}]}

    def current_user_saved_tracks(self, limit, offset):
        self.calls.append(("current_user_saved_tracks", limit, offset))
        end = min(offset + limit, self.saved_total)
        return {"total": self.saved_total, "items": [{"track": _track(i)} for i in range(offset, end)]}

    def devices(self):
        return {"devices": [{"id": "d1", "name": "Kitchen", "type": "Speaker", "is_active": True}]}

    def current_playback(self, additional_types=None):
        self.calls.append(("current_playback", additional_types))
        return self.playback

    def start_playback(self, device_id=None, context_uri=None, uris=None):
        self.calls.append(("start_playback", device_id, context_uri, uris))


class TestSearchMapping:
    def test_tracks_are_mapped_and_null_items_skipped(self):
        sp = FakeSpotify()

        results = SpotipyRemoteService(sp).search("silk", ItemKind.TRACK, 25)

        assert sp.calls == [("search", "silk", 25, "track")]
        assert results == [
            Track(id="track-1", name="Song 1", album="An Evening", artists=["Bruno Mars", "Anderson .Paak"], uri="spotify:track:track-1"),
            Track(id="track-2", name="Song 2", album="An Evening", artists=["Bruno Mars", "Anderson .Paak"], uri="spotify:track:track-2"),
        ]
        assert results[0].display_line(0) == "0: Song 1 | An Evening | Bruno Mars, Anderson .Paak"

    def test_other_kinds_are_mapped(self):
        service = SpotipyRemoteService(FakeSpotify())

        assert service.search("x", ItemKind.ALBUM, 5) == [Album(id="al", name="An Evening", artists=["Silk Sonic"], uri="spotify:album:al")]
        assert service.search("x", ItemKind.ARTIST, 5) == [Artist(id="ar", name="Silk Sonic", uri="spotify:artist:ar")]
        assert service.search("x", ItemKind.PLAYLIST, 5) == [Playlist(id="pl", name="Soul", owner="bob")]

    def test_playlist_without_uri_plays_by_id(self):
        playlist = SpotipyRemoteService(FakeSpotify()).search("x", ItemKind.PLAYLIST, 5)[0]

        assert playlist.playable_uri() == "spotify:playlist:pl"


class TestLibrary:
    def test_liked_songs_are_paged_up_to_the_limit(self):
        sp = FakeSpotify(saved_total=130)

        tracks = SpotipyRemoteService(sp).saved_tracks(100)

        assert len(tracks) == 100
        assert tracks[-1].id == "track-99"
        assert [c for c in sp.calls if c[0] == "current_user_saved_tracks"] == [
            ("current_user_saved_tracks", 50, 0),
            ("current_user_saved_tracks", 50, 50),
        ]

    def test_liked_songs_stop_at_the_library_size(self):
        tracks = SpotipyRemoteService(FakeSpotify(saved_total=3)).saved_tracks(100)

        assert [t.id for t in tracks] == ["track-0", "track-1", "track-2"]

    def test_playlist_owner_uses_display_name(self):
        playlists = SpotipyRemoteService(FakeSpotify()).current_user_playlists(50)

        assert playlists[0].display_line(0) == "0: Mine | Alice"

    def test_devices_are_mapped(self):
        device = SpotipyRemoteService(FakeSpotify()).devices()[0]

        assert (device.id, device.name, device.is_active) == ("d1", "Kitchen", True)


class TestPlayback:
    def test_nothing_playing_is_none(self):
        sp = FakeSpotify()
        sp.playback = None

        assert SpotipyRemoteService(sp).current_playback() is None

    def test_episode_has_no_track_item(self):
        sp = FakeSpotify()
        sp.playback = {"is_playing": True, "currently_playing_type": "episode", "item": {"id": "ep", "name": "Pod"}}

        state = SpotipyRemoteService(sp).current_playback()

        assert state.item_type == "episode"
        assert state.item is None

    def test_track_playback_is_mapped(self):
        sp = FakeSpotify()
        sp.playback = {
            "is_playing": False,
            "shuffle_state": True,
            "repeat_state": "context",
            "currently_playing_type": "track",
            "item": _track(7),
            "device": {"id": "d1", "name": "Kitchen"},
        }

        state = SpotipyRemoteService(sp).current_playback()

        assert state.is_playing is False
        assert state.shuffle_state is True
        assert state.repeat_state == "context"
        assert state.item.id == "track-7"
        assert state.device.name == "Kitchen"

    def test_resume_targets_the_device(self):
        sp = FakeSpotify()

        SpotipyRemoteService(sp).resume("d1")

        assert sp.calls == [("start_playback", "d1", None, None)]


class TestErrorTranslation:
    def test_api_errors_become_transport_errors(self):
        class Failing(FakeSpotify):
            def devices(self):
                raise SpotifyException(404, -1, "Device not found")

        with pytest.raises(TransportError, match="Failed to get devices: Device not found"):
            SpotipyRemoteService(Failing()).devices()

    def test_network_errors_become_transport_errors(self):
        class Offline(FakeSpotify):
            def start_playback(self, device_id=None, context_uri=None, uris=None):
                raise requests.ConnectionError("connection refused")

        with pytest.raises(TransportError, match="Failed to start playback"):
            SpotipyRemoteService(Offline()).start_track_playback(["spotify:track:x"], None)
