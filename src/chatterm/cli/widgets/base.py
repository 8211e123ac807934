"""Base widget protocol and common functionality."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from chatterm.cli.core.events import Event


@dataclass
class Rect:
    """Rectangle bounds for widget positioning."""
    x: int
    y: int
    width: int
    height: int


@runtime_checkable
class TextEditor(Protocol):
    """What the chat session needs from its input editor."""

    @property
    def value(self) -> str:
        ...

    def set_focus(self, focused: bool) -> None:
        ...

    def clear(self) -> None:
        ...

    def handle_event(self, event: Event) -> bool:
        ...

    def render(self, bounds: Rect) -> list[str]:
        ...


@runtime_checkable
class ScrollableList(Protocol):
    """What the chat session needs from its message viewport."""

    width: int
    height: int
    y_offset: int

    def set_content(self, content: str) -> None:
        ...

    def scroll_to_bottom(self) -> None:
        ...

    def handle_event(self, event: Event) -> bool:
        ...

    def render(self, bounds: Rect) -> list[str]:
        ...


class BaseWidget(ABC):
    """Base class with common widget functionality."""

    def __init__(self) -> None:
        self._focused = False

    @property
    def focused(self) -> bool:
        return self._focused

    @focused.setter
    def focused(self, value: bool) -> None:
        self._focused = value

    @abstractmethod
    def render(self, bounds: Rect) -> list[str]:
        """Subclasses must implement rendering."""
        pass

    def handle_event(self, event: Event) -> bool:
        """Default: don't consume events."""
        return False
