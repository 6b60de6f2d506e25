"""Shared in-memory adapters and fixtures for all bounded contexts."""

from typing import Optional

import pytest

from pickify.context import AppContext
from pickify.domain.errors import ConfigIOError, TransportError
from pickify.domain.model import (
    Album,
    Artist,
    Device,
    ItemKind,
    Playable,
    PlaybackState,
    Playlist,
    Settings,
    Token,
    Track,
)
from pickify.domain.ports import (
    ConfigPort,
    MenuLauncherPort,
    NotifierPort,
    RemoteServicePort,
    TokenStorePort,
)


# ── In-memory adapters ──────────────────────────────────────────────


class InMemoryRemoteService(RemoteServicePort):
    """Records every call; methods named in ``failing`` raise TransportError."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.failing: set[str] = set()
        self.search_results: dict[ItemKind, list[Playable]] = {}
        self.playlists: list[Playlist] = []
        self.liked: list[Track] = []
        self.device_list: list[Device] = []
        self.playback: Optional[PlaybackState] = None
        self.saved_ids: set[str] = set()

    def _record(self, name: str, *args) -> None:
        self.calls.append((name, *args))
        if name in self.failing:
            raise TransportError(f"{name} failed")

    def calls_to(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]

    def search(self, query, kind, limit):
        self._record("search", query, kind, limit)
        return list(self.search_results.get(kind, []))

    def current_user_playlists(self, limit):
        self._record("current_user_playlists", limit)
        return list(self.playlists)

    def saved_tracks(self, limit):
        self._record("saved_tracks", limit)
        return list(self.liked[:limit])

    def devices(self):
        self._record("devices")
        return list(self.device_list)

    def start_context_playback(self, context_uri, device_id):
        self._record("start_context_playback", context_uri, device_id)

    def start_track_playback(self, uris, device_id):
        self._record("start_track_playback", list(uris), device_id)

    def transfer_playback(self, device_id):
        self._record("transfer_playback", device_id)

    def current_playback(self):
        self._record("current_playback")
        return self.playback

    def pause(self, device_id):
        self._record("pause", device_id)

    def resume(self, device_id):
        self._record("resume", device_id)

    def next_track(self, device_id):
        self._record("next_track", device_id)

    def previous_track(self, device_id):
        self._record("previous_track", device_id)

    def set_shuffle(self, state, device_id):
        self._record("set_shuffle", state, device_id)

    def set_repeat(self, state, device_id):
        self._record("set_repeat", state, device_id)

    def saved_tracks_contains(self, track_ids):
        self._record("saved_tracks_contains", list(track_ids))
        return [track_id in self.saved_ids for track_id in track_ids]

    def saved_tracks_add(self, track_ids):
        self._record("saved_tracks_add", list(track_ids))
        self.saved_ids.update(track_ids)


class ScriptedLauncher(MenuLauncherPort):
    """Answers picker prompts from a script; an exhausted script cancels."""

    def __init__(self, responses: Optional[list[str]] = None):
        self.responses = list(responses or [])
        self.shown: list[tuple[list[str], str]] = []

    def pick(self, items, prompt):
        self.shown.append((list(items), prompt))
        if not self.responses:
            return ""
        return self.responses.pop(0)


class RecordingNotifier(NotifierPort):
    def __init__(self):
        self.notifications: list[tuple[str, str]] = []

    def notify(self, summary, body=""):
        self.notifications.append((summary, body))

    @property
    def errors(self) -> list[str]:
        return [body for summary, body in self.notifications if summary == "Error"]


class InMemoryConfig(ConfigPort):
    def __init__(self, data: Optional[dict] = None):
        self._data = data or {}
        self.fail_save = False
        self.saves = 0

    def load(self) -> dict:
        return dict(self._data)

    def save(self, cfg: dict) -> None:
        if self.fail_save:
            raise ConfigIOError("disk full")
        self.saves += 1
        self._data = dict(cfg)


class InMemoryTokenStore(TokenStorePort):
    def __init__(self, token: Optional[Token] = None):
        self.token = token
        self.saved: list[Token] = []

    def load(self) -> Optional[Token]:
        return self.token

    def save(self, token: Token) -> None:
        self.saved.append(token)
        self.token = token

    def clear(self) -> None:
        self.token = None


# ── Shared fixtures ─────────────────────────────────────────────────


@pytest.fixture
def service():
    return InMemoryRemoteService()


@pytest.fixture
def launcher():
    return ScriptedLauncher()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def config():
    return InMemoryConfig({"device_id": "dev-desk", "program": "rofi"})


@pytest.fixture
def context(service, launcher, notifier, config):
    return AppContext(
        settings=Settings(device_id="dev-desk"),
        config=config,
        launcher=launcher,
        notifier=notifier,
        service=service,
    )


@pytest.fixture
def track_a():
    return Track(id="t1", name="Chill Vibes", album="Late Night", artists=["DJ Smooth"], uri="spotify:track:t1")


@pytest.fixture
def track_b():
    return Track(id="t2", name="Party Starter", album="Friday Night", artists=["MC Hype", "DJ Smooth"])


@pytest.fixture
def track_c():
    return Track(id="t3", name="Slow Motion", album="Sunset", artists=["The Drifters"], uri="spotify:track:t3")


@pytest.fixture
def search_tracks(track_a, track_b, track_c):
    return [track_a, track_b, track_c]


@pytest.fixture
def album():
    return Album(id="al1", name="Late Night", artists=["DJ Smooth"], uri="spotify:album:al1")


@pytest.fixture
def playlist():
    return Playlist(id="pl1", name="Road Trip", owner="alice", uri="spotify:playlist:pl1")


@pytest.fixture
def artist():
    return Artist(id="ar1", name="DJ Smooth", uri="spotify:artist:ar1")


@pytest.fixture
def devices():
    return [
        Device(id="dev-desk", name="Desk Speaker", type="Speaker", is_active=True),
        Device(id="dev-phone", name="Phone", type="Smartphone"),
    ]


@pytest.fixture
def token_store_factory():
    return InMemoryTokenStore
