"""Use case: one-shot transport actions (play/pause, skip, like, shuffle, repeat)."""

import logging
from enum import Enum
from typing import Callable, Optional

from pickify.domain.errors import MissingIdentifierError, NoPlaybackContextError, NotATrackError
from pickify.domain.model import PlaybackState, Track
from pickify.domain.ports import NotifierPort, RemoteServicePort

logger = logging.getLogger("pickify.control")

REPEAT_CYCLE = {"off": "context", "context": "track", "track": "off"}
REPEAT_LABELS = {"off": "disabled", "context": "playlist", "track": "track"}


class Action(Enum):
    PLAY_PAUSE = "play-pause"
    NEXT = "next"
    PREVIOUS = "previous"
    LIKE = "like"
    SHUFFLE = "shuffle"
    REPEAT = "repeat"
    ON_CHANGE = "on-change"

    def __str__(self) -> str:
        return self.value


class ControlUseCase:

    def __init__(
        self,
        service: RemoteServicePort,
        notifier: NotifierPort,
        resolve_device: Callable[[], Optional[str]],
    ):
        self.service = service
        self.notifier = notifier
        self.resolve_device = resolve_device

    def execute(self, action: Action) -> None:
        logger.info("Control action: %s", action)
        handler = {
            Action.PLAY_PAUSE: self.play_pause,
            Action.NEXT: self.next,
            Action.PREVIOUS: self.previous,
            Action.LIKE: self.like,
            Action.SHUFFLE: self.shuffle,
            Action.REPEAT: self.repeat,
            Action.ON_CHANGE: self.on_change,
        }[action]
        handler()

    def play_pause(self) -> None:
        playback = self.service.current_playback()
        device_id = self.resolve_device()
        if playback is not None and playback.is_playing:
            self.service.pause(device_id)
        else:
            self.service.resume(device_id)

    def next(self) -> None:
        self.service.next_track(self.resolve_device())

    def previous(self) -> None:
        self.service.previous_track(self.resolve_device())

    def like(self) -> None:
        track = self._current_track()
        if not track.id:
            raise MissingIdentifierError(track.name)

        if self.service.saved_tracks_contains([track.id])[0]:
            self.notifier.notify("Already in liked songs:", track.describe())
            return
        self.service.saved_tracks_add([track.id])
        self.notifier.notify("Added to liked songs:", track.describe())

    def shuffle(self) -> None:
        playback = self._require_playback()
        enabled = not playback.shuffle_state
        self.service.set_shuffle(enabled, self.resolve_device())
        self.notifier.notify("Shuffle", "enabled" if enabled else "disabled")

    def repeat(self) -> None:
        playback = self._require_playback()
        next_state = REPEAT_CYCLE.get(playback.repeat_state, "off")
        self.service.set_repeat(next_state, self.resolve_device())
        self.notifier.notify("Repeat", REPEAT_LABELS[next_state])

    def on_change(self) -> None:
        playback = self.service.current_playback()
        if playback is None or playback.item is None:
            logger.info("Player changed but nothing is playing")
            return
        summary = "Now playing" if playback.is_playing else "Paused"
        self.notifier.notify(summary, playback.item.describe())

    def _require_playback(self) -> PlaybackState:
        playback = self.service.current_playback()
        if playback is None:
            raise NoPlaybackContextError()
        return playback

    def _current_track(self) -> Track:
        playback = self._require_playback()
        if playback.item_type != "track" or playback.item is None:
            raise NotATrackError()
        return playback.item
