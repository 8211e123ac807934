"""Framed text blocks rendered to ANSI lines with rich."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

BORDERS = {
    "rounded": box.ROUNDED,
    "double": box.DOUBLE,
}


@dataclass(frozen=True)
class BlockStyle:
    """How a framed block looks."""
    border: str = "rounded"
    border_color: str = "bright_black"
    text_style: str = ""
    title: str = ""
    title_style: str = "bold"
    padding: int = 1  # Columns between the border and the text on each side


def render_block(
    text: str,
    style: BlockStyle,
    width: int,
    height: Optional[int] = None,
    color: bool = True,
) -> list[str]:
    """
    Render ``text`` inside a frame exactly ``width`` columns wide.

    ``text`` may already contain ANSI codes; they are kept. Long lines wrap
    inside the frame. With ``height`` the block is padded or cropped to that
    many rows, borders included.
    """
    if width < 3 + 2 * style.padding or (height is not None and height < 2):
        return []

    console = Console(
        file=io.StringIO(),
        width=width,
        force_terminal=True,
        color_system="256",
        no_color=not color,
        highlight=False,
        emoji=False,
    )
    title = Text(style.title, style=style.title_style) if style.title else None
    panel = Panel(
        Text.from_ansi(text, style=style.text_style),
        box=BORDERS.get(style.border, box.ROUNDED),
        title=title,
        title_align="left",
        border_style=style.border_color,
        width=width,
        height=height,
        padding=(0, style.padding),
    )
    console.print(panel)
    return console.file.getvalue().rstrip('\n').split('\n')


def styled(text: str, style: str, color: bool = True) -> str:
    """Render a single run of text with a rich style to an ANSI string."""
    console = Console(
        file=io.StringIO(),
        force_terminal=True,
        color_system="256",
        no_color=not color,
        highlight=False,
        emoji=False,
        width=max(1, len(text)),
    )
    console.print(Text(text, style=style), end="", soft_wrap=True)
    return console.file.getvalue()
