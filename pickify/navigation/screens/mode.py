"""Top-level menu: what the user wants to do."""

from enum import Enum

from pickify.config import LIKED_SONGS_LIMIT, PLAYLISTS_LIMIT
from pickify.domain.errors import PickifyError
from pickify.domain.model import ItemKind
from pickify.navigation.results import NavigateTo, SelectionResult
from pickify.navigation.screens.base import IndexedScreen
from pickify.navigation.screens.device import DeviceSelectionScreen
from pickify.navigation.screens.playback import PlaybackSelectionScreen
from pickify.navigation.screens.search import SearchScreen


class Mode(Enum):
    ARTIST_SEARCH = "Artist Search"
    ALBUM_SEARCH = "Album Search"
    TRACK_SEARCH = "Track Search"
    PLAYLIST_SEARCH = "Playlist Search"
    MY_PLAYLISTS = "My Playlists"
    LIKED_SONGS = "Liked Songs"
    DEVICE = "Device"


_SEARCH_KINDS = {
    Mode.ARTIST_SEARCH: ItemKind.ARTIST,
    Mode.ALBUM_SEARCH: ItemKind.ALBUM,
    Mode.TRACK_SEARCH: ItemKind.TRACK,
    Mode.PLAYLIST_SEARCH: ItemKind.PLAYLIST,
}


class ModeScreen(IndexedScreen[Mode]):
    """Lists the modes; nothing is fetched until one is chosen."""

    def __init__(self, context):
        super().__init__(context, list(Mode))

    def render_items(self) -> list[str]:
        return [f"{i}: {mode.value}" for i, mode in enumerate(self.entries)]

    def on_select(self, index: int, mode: Mode) -> SelectionResult:
        if mode in _SEARCH_KINDS:
            return NavigateTo(SearchScreen(self.context, _SEARCH_KINDS[mode]))

        service = self.context.require_service()
        if mode is Mode.MY_PLAYLISTS:
            try:
                playlists = service.current_user_playlists(PLAYLISTS_LIMIT)
            except PickifyError as exc:
                return self.fail(f"Failed to get playlists: {exc}")
            return NavigateTo(PlaybackSelectionScreen(self.context, playlists))

        if mode is Mode.LIKED_SONGS:
            try:
                tracks = service.saved_tracks(LIKED_SONGS_LIMIT)
            except PickifyError as exc:
                return self.fail(f"Failed to get liked songs: {exc}")
            return NavigateTo(PlaybackSelectionScreen(self.context, tracks))

        try:
            devices = service.devices()
        except PickifyError as exc:
            return self.fail(f"Failed to get devices: {exc}")
        return NavigateTo(DeviceSelectionScreen(self.context, devices))
