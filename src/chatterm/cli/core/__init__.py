"""Core TUI infrastructure - terminal I/O, input handling, layout, event loop."""

from chatterm.cli.core.terminal import Terminal, TerminalSize
from chatterm.cli.core.input import InputReader, KeyEvent, Key
from chatterm.cli.core.layout import (
    Layout,
    LayoutManager,
    ViewportGeometry,
    calculate_layout,
)
from chatterm.cli.core.events import (
    BlinkEvent,
    Command,
    Event,
    FatalEvent,
    QUIT,
    ResizeEvent,
    blink,
    is_quit_key,
)
from chatterm.cli.core.program import Program

__all__ = [
    "Terminal",
    "TerminalSize",
    "InputReader",
    "KeyEvent",
    "Key",
    "Layout",
    "LayoutManager",
    "ViewportGeometry",
    "calculate_layout",
    "BlinkEvent",
    "Command",
    "Event",
    "FatalEvent",
    "QUIT",
    "ResizeEvent",
    "blink",
    "is_quit_key",
    "Program",
]
