"""Interactive chat session."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable, Optional

from chatterm.cli.core.ansi_text import truncate
from chatterm.cli.core.events import (
    QUIT,
    BlinkEvent,
    Command,
    Event,
    ResizeEvent,
    blink,
    is_quit_key,
)
from chatterm.cli.core.input import Key, KeyEvent
from chatterm.cli.core.layout import Layout, LayoutManager, ViewportGeometry
from chatterm.cli.core.program import Program
from chatterm.cli.core.style import BlockStyle, render_block, styled
from chatterm.cli.widgets.base import Rect, ScrollableList, TextEditor
from chatterm.cli.widgets.status_bar import Shortcut, StatusBarWidget
from chatterm.cli.widgets.text_area import TextAreaWidget
from chatterm.cli.widgets.viewport import ViewportWidget
from chatterm.core.config import ChatConfig
from chatterm.core.focus import FocusMode, FocusState
from chatterm.core.message import Message, MessageStore
from chatterm.core.responder import EchoResponder, Responder

logger = logging.getLogger(__name__)

EDITOR_FRAME_ROWS = 2  # Top and bottom border around the editor

MODE_LABELS = {
    FocusMode.EDITING: "EDIT",
    FocusMode.SCROLLING: "SCROLL",
    FocusMode.SELECTING: "SELECT",
}

MODE_STYLES = {
    FocusMode.EDITING: "bold black on cyan",
    FocusMode.SCROLLING: "bold black on green",
    FocusMode.SELECTING: "bold black on yellow",
}

SHORTCUTS = {
    FocusMode.EDITING: [
        Shortcut("Enter", "Send"),
        Shortcut("Alt+Enter", "Newline"),
        Shortcut("Tab", "Next"),
        Shortcut("Esc", "Quit"),
    ],
    FocusMode.SCROLLING: [
        Shortcut("↑↓", "Scroll"),
        Shortcut("PgUp/PgDn", "Page"),
        Shortcut("Tab", "Next"),
        Shortcut("Esc", "Quit"),
    ],
    FocusMode.SELECTING: [
        Shortcut("↑↓", "Select"),
        Shortcut("Tab", "Next"),
        Shortcut("Esc", "Quit"),
    ],
}

ViewportFactory = Callable[[int, int, int], ScrollableList]


@lru_cache(maxsize=1024)
def _message_block(
    content: str,
    title: str,
    border: str,
    border_color: str,
    width: int,
    color: bool,
) -> tuple[str, ...]:
    # Messages never change, so a rendered block can be reused until the width does
    style = BlockStyle(border=border, border_color=border_color, title=title)
    return tuple(render_block(content, style, width, color=color))


class ChatSession:
    """
    Chat screen model: a header, the scrollable message log and the editor.

    Tab cycles focus between typing, scrolling the log and selecting a
    message. Enter sends the editor contents; the responder's reply is
    appended right after. Esc or Ctrl+C quits from anywhere.
    """

    def __init__(
        self,
        config: Optional[ChatConfig] = None,
        responder: Optional[Responder] = None,
        editor: Optional[TextEditor] = None,
        viewport_factory: Optional[ViewportFactory] = None,
    ) -> None:
        self.config = config or ChatConfig()
        self.responder = responder if responder is not None else EchoResponder(self.config.reply_prefix)

        # State
        self.messages = MessageStore()
        self.focus = FocusState()

        # Widgets
        self.editor: TextEditor = editor if editor is not None else TextAreaWidget(
            char_limit=self.config.char_limit,
            height=self.config.editor_height,
            placeholder=self.config.placeholder,
            prompt=self.config.prompt,
        )
        self.editor.set_focus(True)
        self._viewport_factory: ViewportFactory = viewport_factory or ViewportWidget
        self.viewport: Optional[ScrollableList] = None
        self.status_bar = StatusBarWidget()

        self.layout_mgr = LayoutManager()

    # -------------------------------------------------------------------------
    # Program interface
    # -------------------------------------------------------------------------

    def init(self) -> list[Command]:
        return [blink(self.config.blink_interval)]

    def update(self, event: Event) -> list[Command]:
        """Handle one event completely and return follow-up commands."""
        commands: list[Command] = []

        if isinstance(event, ResizeEvent):
            self._handle_resize(event.width, event.height)
        elif isinstance(event, KeyEvent):
            if is_quit_key(event):
                return [QUIT]
            self._handle_key(event)
        elif isinstance(event, BlinkEvent):
            self.editor.handle_event(event)
            commands.append(blink(self.config.blink_interval))
        else:
            logger.debug("Ignoring event %r", event)

        self._refresh_content()
        return commands

    def view(self) -> str:
        """Render the whole screen from current state."""
        layout = self.layout_mgr.layout
        if not self.ready or layout is None or self.viewport is None:
            return "\n  Initializing..."

        geo = layout.viewport
        lines: list[str] = []
        lines.extend(self.render_header())
        lines.extend(self.viewport.render(Rect(0, geo.y_offset, geo.width, geo.height)))
        lines.extend(self.render_footer(layout.term_width))

        return "\n".join(truncate(line, layout.term_width) for line in lines[:layout.term_height])

    # -------------------------------------------------------------------------
    # Event handling
    # -------------------------------------------------------------------------

    def _handle_resize(self, width: int, height: int) -> None:
        layout = self._apply_layout(width, height)
        logger.debug(
            "resize %dx%d -> viewport %dx%d at row %d",
            width, height, layout.viewport.width, layout.viewport.height, layout.viewport.y_offset,
        )

    def _apply_layout(self, width: int, height: int) -> Layout:
        layout = self.layout_mgr.calculate(width, height, self.header_height, self.footer_height)
        self._apply_geometry(layout.viewport)
        return layout

    def _apply_geometry(self, geo: ViewportGeometry) -> None:
        if self.viewport is None:
            self.viewport = self._viewport_factory(geo.width, geo.height, geo.y_offset)
        else:
            self.viewport.width = geo.width
            self.viewport.height = geo.height
            self.viewport.y_offset = geo.y_offset

    def _handle_key(self, event: KeyEvent) -> None:
        if event.key == Key.TAB:
            self._cycle_focus()
            return

        mode = self.focus.mode
        if mode is FocusMode.EDITING:
            if event.key == Key.ENTER and not event.alt:
                self._submit()
            else:
                self.editor.handle_event(event)
        elif mode is FocusMode.SCROLLING:
            if self.viewport is not None:
                self.viewport.handle_event(event)
        elif mode is FocusMode.SELECTING:
            if event.key == Key.UP or event.char == 'k':
                self.focus.move_up()
            elif event.key == Key.DOWN or event.char == 'j':
                self.focus.move_down(len(self.messages))
            # Everything else is dropped while selecting
        else:
            raise ValueError(f"Unknown focus mode: {mode}")

    def _cycle_focus(self) -> None:
        mode = self.focus.cycle(len(self.messages))
        self.editor.set_focus(mode is FocusMode.EDITING)

        # Chrome is derived from the focus mode, so lay out again
        layout = self.layout_mgr.recalculate(self.header_height, self.footer_height)
        if layout is not None:
            self._apply_geometry(layout.viewport)

    def _submit(self) -> None:
        text = self.editor.value.strip()
        if not text:
            return

        self.messages.add_user(text)
        reply = self.responder.respond(text)
        self.messages.add_reply(reply)
        logger.debug("submitted %d chars, log now %d messages", len(text), len(self.messages))

        self._refresh_content()
        if self.viewport is not None:
            self.viewport.scroll_to_bottom()
        self.editor.clear()

    def _refresh_content(self) -> None:
        if self.viewport is None:
            return
        self.viewport.set_content(self.render_log(self.viewport.width))

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def render_header(self) -> list[str]:
        """Title bar and a spacer row."""
        color = self.config.color
        mode = self.focus.mode
        title = styled(" chatterm ", "bold reverse", color)
        badge = styled(f" {MODE_LABELS[mode]} ", MODE_STYLES[mode], color)
        return [f"{title} {badge}", ""]

    def render_footer(self, width: int) -> list[str]:
        """Framed editor followed by the help line."""
        rows = self.config.editor_height + EDITOR_FRAME_ROWS
        focused = self.focus.editor_focused

        editor_lines = self.editor.render(Rect(0, 0, max(1, width - 4), self.config.editor_height))
        frame = render_block(
            "\n".join(editor_lines),
            BlockStyle(border_color="cyan" if focused else "bright_black"),
            width,
            height=rows,
            color=self.config.color,
        )
        while len(frame) < rows:
            frame.append("")

        self.status_bar.set_left(self.status_label)
        self.status_bar.set_shortcuts(SHORTCUTS[self.focus.mode])
        return frame[:rows] + self.status_bar.render(Rect(0, 0, width, 1))

    def render_log(self, width: int) -> str:
        """All messages as framed blocks, highlighting the selected one."""
        if not self.messages:
            return styled("  No messages yet. Type below and press Enter.", "dim", self.config.color)

        lines: list[str] = []
        for index, message in enumerate(self.messages):
            selected = self.focus.selection_active and index == self.focus.selected_index
            lines.extend(self._render_message(message, selected, width))
        return "\n".join(lines)

    def _render_message(self, message: Message, selected: bool, width: int) -> tuple[str, ...]:
        label = self.config.user_label if message.is_user else self.config.reply_label
        if selected:
            return _message_block(message.content, f"▶ {label}", "double", "yellow", width, self.config.color)
        border_color = "cyan" if message.is_user else "magenta"
        return _message_block(message.content, label, "rounded", border_color, width, self.config.color)

    # -------------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------------

    @property
    def ready(self) -> bool:
        """True once the first terminal size has built the viewport."""
        return self.layout_mgr.ready and self.viewport is not None

    @property
    def header_height(self) -> int:
        return len(self.render_header())

    @property
    def footer_height(self) -> int:
        return self.config.editor_height + EDITOR_FRAME_ROWS + 1

    @property
    def geometry(self) -> Optional[ViewportGeometry]:
        layout = self.layout_mgr.layout
        return layout.viewport if layout is not None else None

    @property
    def status_label(self) -> str:
        """Mode name, plus the selected position while selecting."""
        label = MODE_LABELS[self.focus.mode]
        if self.focus.selection_active:
            label += f" {self.focus.selected_index + 1}/{len(self.messages)}"
        return label

    @property
    def selected_message(self) -> Optional[Message]:
        if self.focus.selection_active:
            return self.messages[self.focus.selected_index]
        return None


def run_chat(config: Optional[ChatConfig] = None, responder: Optional[Responder] = None) -> ChatSession:
    """Launch the chat session and return it once the user quits."""
    session = ChatSession(config=config, responder=responder)
    Program(session).run()
    return session
