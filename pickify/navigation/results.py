"""Outcomes of a screen selection, interpreted by the navigation engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from pickify.navigation.screens.base import Screen


@dataclass(frozen=True)
class NavigateTo:
    screen: Screen


@dataclass(frozen=True)
class Back:
    pass


@dataclass(frozen=True)
class Exit:
    pass


@dataclass(frozen=True)
class TextInput:
    value: str


SelectionResult = Union[NavigateTo, Back, Exit, TextInput]
