"""Status bar widget for displaying info and shortcuts."""

from __future__ import annotations

from dataclasses import dataclass

from chatterm.cli.core.ansi_text import visible_len
from chatterm.cli.widgets.base import BaseWidget, Rect


@dataclass(frozen=True)
class Shortcut:
    """A keyboard shortcut to display."""
    key: str
    label: str


class StatusBarWidget(BaseWidget):
    """Help line showing a label on the left and keyboard shortcuts."""

    def __init__(self) -> None:
        super().__init__()
        self._left_text: str = ""
        self._shortcuts: list[Shortcut] = []

    def set_left(self, text: str) -> None:
        """Set left-aligned text."""
        self._left_text = text

    def set_shortcuts(self, shortcuts: list[Shortcut]) -> None:
        """Set keyboard shortcuts to display."""
        self._shortcuts = list(shortcuts)

    def render(self, bounds: Rect) -> list[str]:
        """Render the status bar, dropping shortcuts that don't fit."""
        width = bounds.width

        left = f" {self._left_text} " if self._left_text else ""
        left_part = f"\x1b[1;7m{left}\x1b[0m" if left else ""
        used = len(left)

        parts: list[str] = []
        for sc in self._shortcuts:
            part = f" \x1b[1m{sc.key}\x1b[0;90m {sc.label}\x1b[0m"
            part_len = visible_len(part)
            if used + part_len > width:
                break
            parts.append(part)
            used += part_len

        return [left_part + "".join(parts)]
