"""Push-down navigation over screens."""

import logging
from typing import Optional

from pickify.context import AppContext
from pickify.navigation.results import Back, Exit, NavigateTo, SelectionResult, TextInput
from pickify.navigation.screens.base import Screen
from pickify.navigation.screens.text_input import TextInputScreen

logger = logging.getLogger("pickify.navigation")


class NavigationEngine:
    """Run screens off a LIFO stack until it empties or a screen exits.

    ``NavigateTo`` keeps the current screen underneath the new one so that
    ``Back`` from the new screen resumes it.
    """

    def __init__(self):
        self.stack: list[Screen] = []

    def run(self, initial: Screen) -> Optional[SelectionResult]:
        self.stack = [initial]
        while self.stack:
            screen = self.stack.pop()
            result = screen.select()
            logger.debug("%r -> %s (depth=%s)", screen, type(result).__name__, len(self.stack))

            if isinstance(result, NavigateTo):
                self.stack.append(screen)
                self.stack.append(result.screen)
            elif isinstance(result, Back):
                continue
            elif isinstance(result, (Exit, TextInput)):
                self.stack.clear()
                return result
            else:
                raise TypeError(f"{screen!r} returned {result!r}, not a SelectionResult")
        return None

    def prompt_text(self, context: AppContext, prompt: str) -> str:
        """Ask for one line of free text through a TextInputScreen."""
        result = self.run(TextInputScreen(context, prompt))
        if isinstance(result, TextInput):
            return result.value
        return ""
