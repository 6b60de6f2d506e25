"""Spotify adapter for search, library, devices and playback control."""

import logging
from contextlib import contextmanager
from typing import Optional

import requests
import spotipy
from spotipy.oauth2 import SpotifyOauthError

from pickify.domain.errors import PickifyError, TransportError
from pickify.domain.model import (
    Album,
    Artist,
    Device,
    ItemKind,
    Playable,
    PlaybackState,
    Playlist,
    Track,
)
from pickify.domain.ports import RemoteServicePort

logger = logging.getLogger("pickify.spotify")

_PAGE_SIZE = 50


def _artist_names(data: dict) -> list[str]:
    return [a.get("name", "") for a in data.get("artists") or [] if a]


def track_from_api(data: dict) -> Track:
    album = data.get("album") or {}
    return Track(
        id=data.get("id"),
        name=data.get("name", ""),
        album=album.get("name", ""),
        artists=_artist_names(data),
        uri=data.get("uri"),
    )


def album_from_api(data: dict) -> Album:
    return Album(id=data.get("id"), name=data.get("name", ""), artists=_artist_names(data), uri=data.get("uri"))


def playlist_from_api(data: dict) -> Playlist:
    owner = data.get("owner") or {}
    return Playlist(
        id=data.get("id"),
        name=data.get("name", ""),
        owner=owner.get("display_name") or owner.get("id") or "",
        uri=data.get("uri"),
    )


def artist_from_api(data: dict) -> Artist:
    return Artist(id=data.get("id"), name=data.get("name", ""), uri=data.get("uri"))


def device_from_api(data: dict) -> Device:
    return Device(
        id=data.get("id"),
        name=data.get("name", ""),
        type=data.get("type", ""),
        is_active=bool(data.get("is_active", False)),
    )


_ITEM_MAPPERS = {
    ItemKind.TRACK: track_from_api,
    ItemKind.ALBUM: album_from_api,
    ItemKind.PLAYLIST: playlist_from_api,
    ItemKind.ARTIST: artist_from_api,
}


def playback_from_api(data: dict) -> PlaybackState:
    item_type = data.get("currently_playing_type") or "unknown"
    item = data.get("item")
    device = data.get("device")
    return PlaybackState(
        is_playing=bool(data.get("is_playing", False)),
        shuffle_state=bool(data.get("shuffle_state", False)),
        repeat_state=data.get("repeat_state") or "off",
        item_type=item_type,
        item=track_from_api(item) if item and item_type == "track" else None,
        device=device_from_api(device) if device else None,
    )


@contextmanager
def _translate_errors(action: str):
    try:
        yield
    except PickifyError:
        raise
    except spotipy.SpotifyException as exc:
        raise TransportError(f"Failed to {action}: {exc.msg or exc}") from exc
    except (SpotifyOauthError, requests.RequestException) as exc:
        raise TransportError(f"Failed to {action}: {exc}") from exc


class SpotipyRemoteService(RemoteServicePort):

    def __init__(self, sp: spotipy.Spotify):
        self.sp = sp

    def search(self, query: str, kind: ItemKind, limit: int) -> list[Playable]:
        with _translate_errors(f"search {kind.value}s"):
            results = self.sp.search(q=query, limit=limit, type=kind.value)
        page = (results or {}).get(f"{kind.value}s") or {}
        mapper = _ITEM_MAPPERS[kind]
        # Spotify pads some result pages with nulls
        return [mapper(item) for item in page.get("items") or [] if item]

    def current_user_playlists(self, limit: int) -> list[Playlist]:
        with _translate_errors("get playlists"):
            results = self.sp.current_user_playlists(limit=min(limit, _PAGE_SIZE))
        return [playlist_from_api(item) for item in results.get("items") or [] if item]

    def saved_tracks(self, limit: int) -> list[Track]:
        tracks: list[Track] = []
        offset = 0

        with _translate_errors("get liked songs"):
            while len(tracks) < limit:
                page_size = min(_PAGE_SIZE, limit - len(tracks))
                results = self.sp.current_user_saved_tracks(limit=page_size, offset=offset)
                items = results.get("items") or []
                if not items:
                    break
                for item in items:
                    if item and item.get("track"):
                        tracks.append(track_from_api(item["track"]))
                offset += page_size
                if offset >= results.get("total", 0):
                    break

        return tracks[:limit]

    def devices(self) -> list[Device]:
        with _translate_errors("get devices"):
            results = self.sp.devices()
        return [device_from_api(d) for d in (results or {}).get("devices") or []]

    def start_context_playback(self, context_uri: str, device_id: Optional[str]) -> None:
        logger.info("Starting context playback %s on device=%s", context_uri, device_id)
        with _translate_errors("start playback"):
            self.sp.start_playback(device_id=device_id, context_uri=context_uri)

    def start_track_playback(self, uris: list[str], device_id: Optional[str]) -> None:
        logger.info("Starting playback of %s tracks on device=%s", len(uris), device_id)
        with _translate_errors("start playback"):
            self.sp.start_playback(device_id=device_id, uris=uris)

    def transfer_playback(self, device_id: str) -> None:
        with _translate_errors("transfer playback"):
            self.sp.transfer_playback(device_id=device_id, force_play=True)

    def current_playback(self) -> Optional[PlaybackState]:
        with _translate_errors("get current playback"):
            data = self.sp.current_playback(additional_types="episode")
        return playback_from_api(data) if data else None

    def pause(self, device_id: Optional[str]) -> None:
        with _translate_errors("pause playback"):
            self.sp.pause_playback(device_id=device_id)

    def resume(self, device_id: Optional[str]) -> None:
        with _translate_errors("resume playback"):
            self.sp.start_playback(device_id=device_id)

    def next_track(self, device_id: Optional[str]) -> None:
        with _translate_errors("skip to next track"):
            self.sp.next_track(device_id=device_id)

    def previous_track(self, device_id: Optional[str]) -> None:
        with _translate_errors("skip to previous track"):
            self.sp.previous_track(device_id=device_id)

    def set_shuffle(self, state: bool, device_id: Optional[str]) -> None:
        with _translate_errors("set shuffle"):
            self.sp.shuffle(state, device_id=device_id)

    def set_repeat(self, state: str, device_id: Optional[str]) -> None:
        with _translate_errors("set repeat"):
            self.sp.repeat(state, device_id=device_id)

    def saved_tracks_contains(self, track_ids: list[str]) -> list[bool]:
        with _translate_errors("check liked songs"):
            return list(self.sp.current_user_saved_tracks_contains(tracks=track_ids))

    def saved_tracks_add(self, track_ids: list[str]) -> None:
        with _translate_errors("add to liked songs"):
            self.sp.current_user_saved_tracks_add(tracks=track_ids)
