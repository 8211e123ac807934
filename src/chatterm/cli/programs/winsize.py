"""Window size demo: two framed boxes that follow the terminal size."""

from __future__ import annotations

from chatterm.cli.core.ansi_text import pad_to_width, visible_len
from chatterm.cli.core.events import QUIT, Command, Event, ResizeEvent
from chatterm.cli.core.input import Key, KeyEvent
from chatterm.cli.core.program import Program
from chatterm.cli.core.style import BlockStyle, render_block

BOX_STYLE = BlockStyle(border="double", border_color="#ff0000", padding=0)
BORDER_SIZE = 2  # One border column or row on each side
ALIGN = 0.8  # Vertical position of shorter blocks, 0 top to 1 bottom


def framed_box(text: str, width: int, min_height: int) -> list[str]:
    """
    Frame ``text`` in a box whose content area is ``width`` columns wide and
    at least ``min_height`` rows tall. The border sits outside that area.
    A width of 0 sizes the box to the text.
    """
    outer_width = (width or visible_len(text)) + BORDER_SIZE
    lines = render_block(text, BOX_STYLE, outer_width)
    if len(lines) < min_height + BORDER_SIZE:
        lines = render_block(text, BOX_STYLE, outer_width, height=min_height + BORDER_SIZE)
    return lines


def join_horizontal(*blocks: list[str], pos: float = 1.0) -> str:
    """
    Place blocks side by side.

    Shorter blocks are padded above and below; ``pos`` is the share of the
    padding that goes above (0.0 aligns tops, 1.0 aligns bottoms).
    """
    height = max((len(block) for block in blocks), default=0)
    columns: list[list[str]] = []
    for block in blocks:
        width = max((visible_len(line) for line in block), default=0)
        extra = height - len(block)
        above = int(extra * pos + 0.5)
        padded = [""] * above + list(block) + [""] * (extra - above)
        columns.append([pad_to_width(line, width) for line in padded])

    return "\n".join("".join(parts) for parts in zip(*columns))


class WindowSizeModel:
    """Shows the current terminal width and height; q or Ctrl+C quits."""

    def __init__(self) -> None:
        self.width = 0
        self.height = 0

    def init(self) -> list[Command]:
        return []

    def update(self, event: Event) -> list[Command]:
        if isinstance(event, ResizeEvent):
            self.width = event.width
            self.height = event.height
        elif isinstance(event, KeyEvent):
            if event.key == Key.CTRL_C or event.char == 'q':
                return [QUIT]
        return []

    def view(self) -> str:
        text = f"width: {self.width}, height: {self.height}"
        large = framed_box(text, self.width // 4, self.height // 4)
        small = framed_box(text, self.width // 8, self.height // 8)
        return join_horizontal(large, small, pos=ALIGN)


def run_winsize() -> WindowSizeModel:
    model = WindowSizeModel()
    Program(model).run()
    return model
