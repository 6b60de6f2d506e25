"""Free-text search of one item kind."""

import logging

from pickify.config import SEARCH_LIMIT
from pickify.context import AppContext
from pickify.domain.errors import PickifyError
from pickify.domain.model import ItemKind
from pickify.navigation.results import Back, NavigateTo, SelectionResult
from pickify.navigation.screens.base import Screen
from pickify.navigation.screens.playback import PlaybackSelectionScreen

logger = logging.getLogger("pickify.navigation.search")


class SearchScreen(Screen):

    def __init__(self, context: AppContext, kind: ItemKind):
        super().__init__(context)
        self.kind = kind
        self.prompt = f"{kind.label} Search"

    def render_items(self) -> list[str]:
        return []

    def select(self) -> SelectionResult:
        query = self.ask()
        if not query:
            return Back()

        try:
            results = self.context.require_service().search(query, self.kind, SEARCH_LIMIT)
        except PickifyError as exc:
            return self.fail(f"Failed to get results for search {query!r}: {exc}")

        logger.info("Search %s %r returned %s results", self.kind.value, query, len(results))
        if not results:
            self.context.notifier.notify("No results", f"Nothing found for {query!r}")
            return Back()
        return NavigateTo(PlaybackSelectionScreen(self.context, results))
