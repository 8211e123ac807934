"""Layout system for the chat screen.

The screen is split vertically into three bands:

    header     fixed height, depends only on the focus mode
    viewport   whatever is left over, scrolls the message log
    footer     editor frame plus the help line

Everything is recomputed from scratch on each terminal resize, so the
result for a given terminal size and chrome is always the same.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ViewportGeometry:
    """Size and screen position of the scrollable message area."""
    width: int
    height: int
    y_offset: int  # Screen row where the viewport starts


@dataclass(frozen=True)
class Layout:
    """Computed layout dimensions for current terminal size."""
    term_width: int
    term_height: int

    # Chrome
    header_height: int
    footer_height: int

    # Message area
    viewport: ViewportGeometry


def calculate_layout(
    term_width: int,
    term_height: int,
    header_height: int,
    footer_height: int,
) -> Layout:
    """
    Calculate the chat layout for the given terminal and chrome sizes.

    Args:
        term_width: Terminal width in columns
        term_height: Terminal height in rows
        header_height: Rows taken by the header
        footer_height: Rows taken by the footer (editor + help)

    Returns:
        Layout with the viewport filling the rows between header and footer
    """
    width = max(0, term_width)
    height = max(0, term_height)
    viewport_height = max(0, height - header_height - footer_height)

    return Layout(
        term_width=width,
        term_height=height,
        header_height=header_height,
        footer_height=footer_height,
        viewport=ViewportGeometry(
            width=width,
            height=viewport_height,
            y_offset=header_height,
        ),
    )


class LayoutManager:
    """
    Holds the most recent layout.

    The terminal size is remembered so the layout can be recomputed when
    the chrome changes without waiting for another resize.
    """

    def __init__(self) -> None:
        self._layout: Optional[Layout] = None

    def calculate(
        self,
        term_width: int,
        term_height: int,
        header_height: int,
        footer_height: int,
    ) -> Layout:
        """Calculate and cache layout for current terminal size."""
        self._layout = calculate_layout(
            term_width=term_width,
            term_height=term_height,
            header_height=header_height,
            footer_height=footer_height,
        )
        return self._layout

    def recalculate(self, header_height: int, footer_height: int) -> Optional[Layout]:
        """Recompute with the last terminal size. None before the first resize."""
        if self._layout is None:
            return None
        return self.calculate(
            self._layout.term_width,
            self._layout.term_height,
            header_height,
            footer_height,
        )

    @property
    def layout(self) -> Optional[Layout]:
        """Current cached layout."""
        return self._layout

    @property
    def ready(self) -> bool:
        """True once a terminal size has been seen."""
        return self._layout is not None
