"""Ports (interfaces) for the hexagonal architecture."""

from abc import ABC, abstractmethod
from typing import Optional

from pickify.domain.model import (
    AuthorizationRequest,
    AuthorizationResponse,
    Device,
    ItemKind,
    Playable,
    PlaybackState,
    Playlist,
    Token,
    Track,
)


class RemoteServicePort(ABC):
    @abstractmethod
    def search(self, query: str, kind: ItemKind, limit: int) -> list[Playable]:
        ...

    @abstractmethod
    def current_user_playlists(self, limit: int) -> list[Playlist]:
        ...

    @abstractmethod
    def saved_tracks(self, limit: int) -> list[Track]:
        ...

    @abstractmethod
    def devices(self) -> list[Device]:
        ...

    @abstractmethod
    def start_context_playback(self, context_uri: str, device_id: Optional[str]) -> None:
        ...

    @abstractmethod
    def start_track_playback(self, uris: list[str], device_id: Optional[str]) -> None:
        ...

    @abstractmethod
    def transfer_playback(self, device_id: str) -> None:
        ...

    @abstractmethod
    def current_playback(self) -> Optional[PlaybackState]:
        ...

    @abstractmethod
    def pause(self, device_id: Optional[str]) -> None:
        ...

    @abstractmethod
    def resume(self, device_id: Optional[str]) -> None:
        ...

    @abstractmethod
    def next_track(self, device_id: Optional[str]) -> None:
        ...

    @abstractmethod
    def previous_track(self, device_id: Optional[str]) -> None:
        ...

    @abstractmethod
    def set_shuffle(self, state: bool, device_id: Optional[str]) -> None:
        ...

    @abstractmethod
    def set_repeat(self, state: str, device_id: Optional[str]) -> None:
        ...

    @abstractmethod
    def saved_tracks_contains(self, track_ids: list[str]) -> list[bool]:
        ...

    @abstractmethod
    def saved_tracks_add(self, track_ids: list[str]) -> None:
        ...


class MenuLauncherPort(ABC):
    @abstractmethod
    def pick(self, items: list[str], prompt: str) -> str:
        """Show ``items`` and return the trimmed selected line, empty on cancel."""


class NotifierPort(ABC):
    @abstractmethod
    def notify(self, summary: str, body: str = "") -> None:
        ...

    def error(self, body: str) -> None:
        self.notify("Error", body)


class ConfigPort(ABC):
    @abstractmethod
    def load(self) -> dict:
        ...

    @abstractmethod
    def save(self, cfg: dict) -> None:
        ...


class TokenStorePort(ABC):
    @abstractmethod
    def load(self) -> Optional[Token]:
        ...

    @abstractmethod
    def save(self, token: Token) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


class OAuthPort(ABC):
    @abstractmethod
    def begin(self) -> tuple[AuthorizationRequest, str]:
        """Start a fresh authorization attempt; returns the request and its URL."""

    @abstractmethod
    def parse_redirect(self, redirect_url: str) -> AuthorizationResponse:
        """Read the code, state or error out of a pasted redirect URL."""

    @abstractmethod
    def exchange_code(self, request: AuthorizationRequest, code: str) -> Token:
        ...

    @abstractmethod
    def refresh(self, token: Token) -> Token:
        ...
