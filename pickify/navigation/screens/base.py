"""Screen abstraction: an item list shown in the picker plus a selection handler."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Sequence, TypeVar

from pickify.config import MODE_PROMPT
from pickify.context import AppContext
from pickify.domain.errors import SelectionOutOfRange, SelectionParseError
from pickify.navigation.results import Back, SelectionResult

T = TypeVar("T")


def parse_selection_index(selection: str) -> int:
    """Parse the ``<index>`` of a ``"<index>: ..."`` picker line."""
    prefix = selection.split(":", 1)[0].strip()
    if not (prefix.isascii() and prefix.isdigit()):
        raise SelectionParseError(selection)
    return int(prefix)


class Screen(ABC):
    prompt: str = MODE_PROMPT

    def __init__(self, context: AppContext):
        self.context = context

    @abstractmethod
    def render_items(self) -> list[str]:
        ...

    @abstractmethod
    def select(self) -> SelectionResult:
        ...

    def ask(self) -> str:
        return self.context.launcher.pick(self.render_items(), self.prompt)

    def fail(self, message: str) -> Back:
        self.context.notifier.error(message)
        return Back()

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


class IndexedScreen(Screen, Generic[T]):
    """A screen whose lines start with ``"<index>: "`` into ``entries``.

    Empty selection means the user cancelled and yields Back silently. An
    index outside ``entries`` raises SelectionOutOfRange.
    """

    def __init__(self, context: AppContext, entries: Sequence[T]):
        super().__init__(context)
        self.entries = list(entries)

    def select(self) -> SelectionResult:
        selection = self.ask()
        if not selection:
            return Back()
        try:
            index = parse_selection_index(selection)
        except SelectionParseError as exc:
            return self.fail(str(exc))
        if not 0 <= index < len(self.entries):
            raise SelectionOutOfRange(index, len(self.entries))
        return self.on_select(index, self.entries[index])

    @abstractmethod
    def on_select(self, index: int, entry: T) -> SelectionResult:
        ...
