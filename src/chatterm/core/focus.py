"""Focus state machine for the chat screen.

Focus cycles through three modes with a single key:

    EDITING -> SCROLLING -> SELECTING -> EDITING

SELECTING is skipped while the message log is empty, which collapses the
ring to EDITING <-> SCROLLING.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

NO_SELECTION = -1


class FocusMode(Enum):
    """Which part of the screen receives keyboard input."""
    EDITING = "editing"        # Text editor has focus
    SCROLLING = "scrolling"    # Message log scrolls
    SELECTING = "selecting"    # One message is highlighted


@dataclass
class FocusState:
    """
    Current focus mode plus the selected message index.

    The selected index is only meaningful while selecting:
    ``0 <= selected_index < message_count`` in SELECTING, and
    ``NO_SELECTION`` (-1) in every other mode.
    """
    mode: FocusMode = FocusMode.EDITING
    selected_index: int = NO_SELECTION

    def cycle(self, message_count: int) -> FocusMode:
        """Advance to the next mode in the ring and return it."""
        previous = self.mode

        if self.mode is FocusMode.EDITING:
            self.mode = FocusMode.SCROLLING
            self.selected_index = NO_SELECTION
        elif self.mode is FocusMode.SCROLLING:
            if message_count > 0:
                self.mode = FocusMode.SELECTING
                self.selected_index = 0
            else:
                self.mode = FocusMode.EDITING
                self.selected_index = NO_SELECTION
        elif self.mode is FocusMode.SELECTING:
            self.mode = FocusMode.EDITING
            self.selected_index = NO_SELECTION
        else:
            raise ValueError(f"Unknown focus mode: {self.mode}")

        logger.debug("focus %s -> %s (messages=%d)", previous.value, self.mode.value, message_count)
        return self.mode

    def move_up(self) -> bool:
        """Select the previous message. Returns True if the index changed."""
        if self.mode is not FocusMode.SELECTING:
            return False
        if self.selected_index > 0:
            self.selected_index -= 1
            return True
        return False

    def move_down(self, message_count: int) -> bool:
        """Select the next message. Returns True if the index changed."""
        if self.mode is not FocusMode.SELECTING:
            return False
        if self.selected_index < message_count - 1:
            self.selected_index += 1
            return True
        return False

    @property
    def editor_focused(self) -> bool:
        return self.mode is FocusMode.EDITING

    @property
    def viewport_active(self) -> bool:
        return self.mode is FocusMode.SCROLLING

    @property
    def selection_active(self) -> bool:
        return self.mode is FocusMode.SELECTING
