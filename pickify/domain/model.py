"""Pure domain objects with no framework dependency."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Optional

from pickify.config import (
    CALLBACK_PATH,
    DEFAULT_CALLBACK_TIMEOUT,
    DEFAULT_CLIENT_ID,
    DEFAULT_PROGRAM,
    DEFAULT_REDIRECT_URI_PORT,
    REDIRECT_HOST,
    TOKEN_EXPIRY_SKEW,
)
from pickify.domain.errors import MissingIdentifierError

if TYPE_CHECKING:
    from pickify.domain.ports import RemoteServicePort


class ItemKind(str, Enum):
    ARTIST = "artist"
    ALBUM = "album"
    TRACK = "track"
    PLAYLIST = "playlist"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Playable(ABC):
    """Something a picker line can be built from and played on a device."""

    prompt_message: ClassVar[str] = "Select Item"
    kind: ClassVar[ItemKind]

    id: Optional[str]
    name: str
    uri: Optional[str]

    @abstractmethod
    def display_line(self, index: int) -> str:
        ...

    @abstractmethod
    def start_playback(self, service: RemoteServicePort, device_id: Optional[str]) -> None:
        ...

    def playable_uri(self) -> str:
        if self.uri:
            return self.uri
        if self.id:
            return f"spotify:{self.kind.value}:{self.id}"
        raise MissingIdentifierError(self.name)


@dataclass
class Track(Playable):
    id: Optional[str]
    name: str
    album: str = ""
    artists: list[str] = field(default_factory=list)
    uri: Optional[str] = None

    prompt_message: ClassVar[str] = "Select Track"
    kind: ClassVar[ItemKind] = ItemKind.TRACK

    def describe(self) -> str:
        return f"{self.name} | {self.album} | {', '.join(self.artists)}"

    def display_line(self, index: int) -> str:
        return f"{index}: {self.describe()}"

    def start_playback(self, service: RemoteServicePort, device_id: Optional[str]) -> None:
        service.start_track_playback([self.playable_uri()], device_id)


@dataclass
class Album(Playable):
    id: Optional[str]
    name: str
    artists: list[str] = field(default_factory=list)
    uri: Optional[str] = None

    prompt_message: ClassVar[str] = "Select Album"
    kind: ClassVar[ItemKind] = ItemKind.ALBUM

    def display_line(self, index: int) -> str:
        return f"{index}: {self.name} | {', '.join(self.artists)}"

    def start_playback(self, service: RemoteServicePort, device_id: Optional[str]) -> None:
        service.start_context_playback(self.playable_uri(), device_id)


@dataclass
class Playlist(Playable):
    id: Optional[str]
    name: str
    owner: str = ""
    uri: Optional[str] = None

    prompt_message: ClassVar[str] = "Select Playlist"
    kind: ClassVar[ItemKind] = ItemKind.PLAYLIST

    def display_line(self, index: int) -> str:
        return f"{index}: {self.name} | {self.owner}"

    def start_playback(self, service: RemoteServicePort, device_id: Optional[str]) -> None:
        service.start_context_playback(self.playable_uri(), device_id)


@dataclass
class Artist(Playable):
    id: Optional[str]
    name: str
    uri: Optional[str] = None

    prompt_message: ClassVar[str] = "Select Artist"
    kind: ClassVar[ItemKind] = ItemKind.ARTIST

    def display_line(self, index: int) -> str:
        return f"{index}: {self.name}"

    def start_playback(self, service: RemoteServicePort, device_id: Optional[str]) -> None:
        service.start_context_playback(self.playable_uri(), device_id)


@dataclass
class Device:
    id: Optional[str]
    name: str
    type: str = ""
    is_active: bool = False

    def display_line(self, index: int) -> str:
        return f"{index}: {self.name}"


@dataclass
class PlaybackState:
    is_playing: bool
    shuffle_state: bool = False
    repeat_state: str = "off"
    item_type: str = "track"
    item: Optional[Track] = None
    device: Optional[Device] = None


@dataclass(frozen=True)
class Token:
    access_token: str
    expires_at: int
    refresh_token: Optional[str] = None
    token_type: str = "Bearer"
    scope: str = ""

    def is_expired(self, now: Optional[float] = None, skew: int = TOKEN_EXPIRY_SKEW) -> bool:
        current = time.time() if now is None else now
        return self.expires_at - current < skew

    def to_token_info(self) -> dict:
        """Serialize in the shape spotipy keeps in its token cache."""
        return {
            "access_token": self.access_token,
            "token_type": self.token_type,
            "expires_in": max(int(self.expires_at - time.time()), 0),
            "expires_at": self.expires_at,
            "refresh_token": self.refresh_token,
            "scope": self.scope,
        }

    @classmethod
    def from_token_info(cls, info: dict) -> "Token":
        access_token = info["access_token"]
        if not access_token:
            raise ValueError("token info has an empty access_token")
        return cls(
            access_token=str(access_token),
            expires_at=int(info["expires_at"]),
            refresh_token=info.get("refresh_token") or None,
            token_type=str(info.get("token_type") or "Bearer"),
            scope=str(info.get("scope") or ""),
        )


@dataclass(frozen=True)
class AuthorizationRequest:
    client_id: str
    redirect_uri: str
    scopes: tuple[str, ...]
    code_verifier: str
    code_challenge: str
    state: str


@dataclass(frozen=True)
class AuthorizationResponse:
    """What the login redirect carried back: a code or an error, plus state."""

    code: Optional[str] = None
    state: Optional[str] = None
    error: Optional[str] = None


@dataclass
class Settings:
    device_id: Optional[str] = None
    program: str = DEFAULT_PROGRAM
    redirect_uri_port: int = DEFAULT_REDIRECT_URI_PORT
    client_id: str = DEFAULT_CLIENT_ID
    callback_timeout: float = DEFAULT_CALLBACK_TIMEOUT

    @property
    def redirect_uri(self) -> str:
        return f"http://{REDIRECT_HOST}:{self.redirect_uri_port}{CALLBACK_PATH}"

    @classmethod
    def from_dict(cls, cfg: dict) -> "Settings":
        """Build settings from a config document; raises ValueError on bad values."""
        port = cfg.get("redirect_uri_port")
        timeout = cfg.get("callback_timeout")
        return cls(
            device_id=cfg.get("device_id") or None,
            program=str(cfg.get("program") or DEFAULT_PROGRAM),
            redirect_uri_port=DEFAULT_REDIRECT_URI_PORT if port is None else int(port),
            client_id=str(cfg.get("client_id") or DEFAULT_CLIENT_ID),
            callback_timeout=DEFAULT_CALLBACK_TIMEOUT if timeout is None else float(timeout),
        )
