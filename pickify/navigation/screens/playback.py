"""Choose an album, track, playlist or artist and start playing it."""

from typing import Sequence

from pickify.context import AppContext
from pickify.domain.errors import PickifyError
from pickify.domain.model import Playable
from pickify.navigation.results import Exit, SelectionResult
from pickify.navigation.screens.base import IndexedScreen
from pickify.navigation.screens.device import resolve_device_id


class PlaybackSelectionScreen(IndexedScreen[Playable]):

    def __init__(self, context: AppContext, items: Sequence[Playable]):
        super().__init__(context, items)
        if self.entries:
            self.prompt = self.entries[0].prompt_message

    def render_items(self) -> list[str]:
        return [item.display_line(i) for i, item in enumerate(self.entries)]

    def on_select(self, index: int, item: Playable) -> SelectionResult:
        try:
            device_id = resolve_device_id(self.context)
            item.start_playback(self.context.require_service(), device_id)
        except PickifyError as exc:
            return self.fail(f"Failed to start playback: {exc}")
        return Exit()
