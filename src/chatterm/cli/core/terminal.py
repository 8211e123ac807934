"""Low-level terminal operations - platform-independent abstraction."""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, TextIO


@dataclass(frozen=True)
class TerminalSize:
    """Terminal dimensions."""
    rows: int
    cols: int


class Terminal:
    """Terminal I/O abstraction for TUI applications."""

    @staticmethod
    def size() -> TerminalSize:
        """Get current terminal dimensions."""
        try:
            size = os.get_terminal_size(sys.stdout.fileno())
            return TerminalSize(size.lines, size.columns)
        except (OSError, ValueError):
            return TerminalSize(24, 80)

    @staticmethod
    def write(text: str, stream: TextIO | None = None) -> None:
        """Write text to terminal."""
        out = stream or sys.stdout
        out.write(text)
        out.flush()

    @staticmethod
    def frame(lines: list[str]) -> str:
        """
        Build one full-screen frame.

        Homes the cursor instead of clearing to avoid flicker; each line ends
        with an erase-to-end-of-line and the tail of the screen is erased.
        """
        return '\x1b[H' + '\x1b[K\r\n'.join(lines) + '\x1b[K\x1b[J'

    @staticmethod
    def reset() -> None:
        """Reset all terminal attributes."""
        Terminal.write('\x1b[0m')

    @staticmethod
    def hide_cursor() -> None:
        Terminal.write('\x1b[?25l')

    @staticmethod
    def show_cursor() -> None:
        Terminal.write('\x1b[?25h')

    @staticmethod
    @contextmanager
    def raw_mode() -> Iterator[None]:
        """Context manager for raw terminal mode (Unix only)."""
        try:
            import termios
            import tty
        except ImportError:
            # Windows or no termios - just yield
            yield
            return

        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    @staticmethod
    @contextmanager
    def alternate_screen() -> Iterator[None]:
        """Use alternate screen buffer (preserves scrollback)."""
        Terminal.write('\x1b[?1049h')
        try:
            yield
        finally:
            Terminal.write('\x1b[?1049l')

    @staticmethod
    @contextmanager
    def managed_mode() -> Iterator[None]:
        """Full TUI mode: alternate screen, hidden cursor, raw input."""
        with Terminal.alternate_screen():
            Terminal.hide_cursor()
            try:
                with Terminal.raw_mode():
                    yield
            finally:
                Terminal.show_cursor()
                Terminal.reset()
