"""Multi-line text input with a bounded buffer and blinking cursor."""

from __future__ import annotations

from chatterm.cli.core.events import BlinkEvent, Event
from chatterm.cli.core.input import Key, KeyEvent
from chatterm.cli.widgets.base import BaseWidget, Rect

_CURSOR_ON = "\x1b[7m"
_RESET = "\x1b[0m"
_DIM = "\x1b[90m"


class TextAreaWidget(BaseWidget):
    """
    Text editor for composing messages.

    Keyboard shortcuts (while focused):
        ←/→         Move cursor
        ↑/↓         Move between lines
        Home/End    Start/end of line
        Backspace   Delete before cursor
        Del         Delete at cursor
        Enter       Insert line break (the session only forwards Alt+Enter)
    """

    def __init__(
        self,
        char_limit: int = 280,
        height: int = 3,
        placeholder: str = "",
        prompt: str = "┃ ",
    ) -> None:
        super().__init__()
        self.char_limit = char_limit
        self.height = height
        self.placeholder = placeholder
        self.prompt = prompt

        self._text: str = ""
        self._cursor: int = 0
        self._cursor_visible: bool = True

    @property
    def value(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def cursor_visible(self) -> bool:
        return self._cursor_visible

    def set_focus(self, focused: bool) -> None:
        self.focused = focused
        self._cursor_visible = True

    def clear(self) -> None:
        self._text = ""
        self._cursor = 0

    def insert(self, text: str) -> int:
        """Insert at the cursor. Returns how many characters fit."""
        room = self.char_limit - len(self._text)
        if room <= 0:
            return 0
        text = text[:room]
        self._text = self._text[:self._cursor] + text + self._text[self._cursor:]
        self._cursor += len(text)
        return len(text)

    def handle_event(self, event: Event) -> bool:
        if isinstance(event, BlinkEvent):
            if self.focused:
                self._cursor_visible = not self._cursor_visible
            return True

        if not isinstance(event, KeyEvent) or not self.focused:
            return False

        # Typing always shows the cursor
        self._cursor_visible = True

        if event.is_char and not event.alt:
            self.insert(event.char or "")
            return True
        elif event.key == Key.ENTER:
            self.insert("\n")
            return True
        elif event.key == Key.BACKSPACE:
            if self._cursor > 0:
                self._text = self._text[:self._cursor - 1] + self._text[self._cursor:]
                self._cursor -= 1
            return True
        elif event.key == Key.DELETE:
            self._text = self._text[:self._cursor] + self._text[self._cursor + 1:]
            return True
        elif event.key == Key.LEFT:
            self._cursor = max(0, self._cursor - 1)
            return True
        elif event.key == Key.RIGHT:
            self._cursor = min(len(self._text), self._cursor + 1)
            return True
        elif event.key == Key.HOME:
            row, _ = self._cursor_position()
            self._move_to(row, 0)
            return True
        elif event.key == Key.END:
            row, _ = self._cursor_position()
            self._move_to(row, len(self._lines()[row]))
            return True
        elif event.key == Key.UP:
            row, col = self._cursor_position()
            if row > 0:
                self._move_to(row - 1, col)
            return True
        elif event.key == Key.DOWN:
            row, col = self._cursor_position()
            if row < len(self._lines()) - 1:
                self._move_to(row + 1, col)
            return True

        return False

    def _lines(self) -> list[str]:
        return self._text.split('\n')

    def _cursor_position(self) -> tuple[int, int]:
        """Cursor as (row, column)."""
        before = self._text[:self._cursor]
        row = before.count('\n')
        col = self._cursor - (before.rfind('\n') + 1)
        return row, col

    def _move_to(self, row: int, col: int) -> None:
        lines = self._lines()
        col = min(col, len(lines[row]))
        self._cursor = sum(len(line) + 1 for line in lines[:row]) + col

    def render(self, bounds: Rect) -> list[str]:
        """Render the visible rows, keeping the cursor row on screen."""
        avail = max(1, bounds.width - len(self.prompt))
        show_cursor = self.focused and self._cursor_visible
        prompt = self.prompt if self.focused else f"{_DIM}{self.prompt}{_RESET}"

        if not self._text:
            first = self._render_placeholder(avail, show_cursor)
            rows = [prompt + first] + [prompt for _ in range(self.height - 1)]
            return rows[:bounds.height]

        lines = self._lines()
        cursor_row, cursor_col = self._cursor_position()
        first_row = max(0, cursor_row - self.height + 1)

        rows: list[str] = []
        for index in range(first_row, first_row + self.height):
            if index >= len(lines):
                rows.append(prompt)
                continue
            line = lines[index]
            if index == cursor_row:
                rows.append(prompt + self._render_cursor_line(line, cursor_col, avail, show_cursor))
            else:
                rows.append(prompt + line[:avail])

        return rows[:bounds.height]

    def _render_placeholder(self, avail: int, show_cursor: bool) -> str:
        text = self.placeholder[:avail]
        if not text:
            return f"{_CURSOR_ON} {_RESET}" if show_cursor else ""
        if show_cursor:
            return f"{_CURSOR_ON}{text[0]}{_RESET}{_DIM}{text[1:]}{_RESET}"
        return f"{_DIM}{text}{_RESET}"

    @staticmethod
    def _render_cursor_line(line: str, col: int, avail: int, show_cursor: bool) -> str:
        # Scroll horizontally so the cursor stays inside the row
        start = max(0, col - avail + 1)
        visible = line[start:start + avail]
        col -= start
        if not show_cursor:
            return visible
        under = visible[col] if col < len(visible) else " "
        return f"{visible[:col]}{_CURSOR_ON}{under}{_RESET}{visible[col + 1:]}"
