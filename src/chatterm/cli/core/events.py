"""Events delivered to a program model and the commands it can return.

A command is a zero-argument callable that runs off the main loop. Whatever
event it returns is posted back onto the program's queue; returning None
posts nothing.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional, Union

from chatterm.cli.core.input import Key, KeyEvent


@dataclass(frozen=True)
class ResizeEvent:
    """Terminal size changed (also sent once at startup)."""
    width: int
    height: int


@dataclass(frozen=True)
class BlinkEvent:
    """Cursor blink tick."""


@dataclass(frozen=True)
class FatalEvent:
    """The input transport or a command failed; stops the program."""
    error: BaseException


Event = Union[ResizeEvent, KeyEvent, BlinkEvent, FatalEvent]
Command = Callable[[], Optional[Event]]


def _quit() -> None:
    return None


# Returned from update() to stop the program before the next event
QUIT: Command = _quit


def blink(interval: float) -> Command:
    """Command that sleeps for one blink period and then posts a BlinkEvent."""
    def _tick() -> BlinkEvent:
        time.sleep(interval)
        return BlinkEvent()
    return _tick


def is_quit_key(event: KeyEvent) -> bool:
    """Ctrl+C, with or without modifiers, or a lone Escape ends the program."""
    return event.key == Key.CTRL_C or (event.key == Key.ESCAPE and not event.alt)
