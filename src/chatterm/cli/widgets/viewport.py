"""Scrollable text region for the message log."""

from __future__ import annotations

from chatterm.cli.core.ansi_text import truncate
from chatterm.cli.core.events import Event
from chatterm.cli.core.input import Key, KeyEvent
from chatterm.cli.widgets.base import BaseWidget, Rect


class ViewportWidget(BaseWidget):
    """
    Displays pre-rendered lines with vertical scrolling.

    ``width`` and ``height`` are assigned by the layout; ``y_offset`` is the
    screen row the viewport starts on. ``scroll_y`` is the first content
    line shown and always stays within ``0..max_scroll``.
    """

    def __init__(self, width: int = 0, height: int = 0, y_offset: int = 0) -> None:
        super().__init__()
        self.width = width
        self.height = height
        self.y_offset = y_offset
        self._lines: list[str] = []
        self._scroll_y: int = 0

    def set_content(self, content: str) -> None:
        """Replace the content, keeping the scroll position where possible."""
        self._lines = content.split('\n') if content else []
        self._clamp()

    def scroll_to_bottom(self) -> None:
        self._scroll_y = self.max_scroll

    def scroll_to_top(self) -> None:
        self._scroll_y = 0

    def scroll_by(self, delta: int) -> None:
        self._scroll_y += delta
        self._clamp()

    def _clamp(self) -> None:
        self._scroll_y = max(0, min(self.max_scroll, self._scroll_y))

    def handle_event(self, event: Event) -> bool:
        if not isinstance(event, KeyEvent) or not self._lines:
            return False

        if event.key == Key.UP or event.char == 'k':
            self.scroll_by(-1)
            return True
        elif event.key == Key.DOWN or event.char == 'j':
            self.scroll_by(1)
            return True
        elif event.key == Key.PAGE_UP:
            self.scroll_by(-max(1, self.height))
            return True
        elif event.key == Key.PAGE_DOWN:
            self.scroll_by(max(1, self.height))
            return True
        elif event.key == Key.HOME or event.char == 'g':
            self.scroll_to_top()
            return True
        elif event.key == Key.END or event.char == 'G':
            self.scroll_to_bottom()
            return True

        return False

    def render(self, bounds: Rect | None = None) -> list[str]:
        """Render the visible slice, clipped to width and padded to height."""
        width = self.width if bounds is None else bounds.width
        height = self.height if bounds is None else bounds.height

        visible = [
            truncate(line, width)
            for line in self._lines[self._scroll_y:self._scroll_y + height]
        ]

        # Pad to fill height
        while len(visible) < height:
            visible.append("")

        return visible

    @property
    def scroll_y(self) -> int:
        return self._scroll_y

    @property
    def max_scroll(self) -> int:
        return max(0, len(self._lines) - self.height)
