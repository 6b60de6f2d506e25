"""Free-text prompt screen."""

from pickify.context import AppContext
from pickify.navigation.results import SelectionResult, TextInput
from pickify.navigation.screens.base import Screen


class TextInputScreen(Screen):

    def __init__(self, context: AppContext, prompt: str):
        super().__init__(context)
        self.prompt = prompt

    def render_items(self) -> list[str]:
        return []

    def select(self) -> SelectionResult:
        return TextInput(self.ask())
