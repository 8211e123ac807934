"""Sequential event loop driving a model.

A model implements three methods:

    init()         -> list of commands to start with
    update(event)  -> list of commands produced by handling one event
    view()         -> the full screen as a string

The program owns a single queue. An input thread posts resize and key
events, every command runs on its own daemon thread and posts its result,
and the main loop handles exactly one event at a time before rendering.
"""

from __future__ import annotations

import logging
import queue
import sys
import threading
from contextlib import nullcontext
from typing import Callable, Optional, Protocol, TextIO

from chatterm.cli.core.events import QUIT, Command, Event, FatalEvent, ResizeEvent
from chatterm.cli.core.input import InputReader, KeyEvent
from chatterm.cli.core.terminal import Terminal, TerminalSize
from chatterm.errors import ProgramError

logger = logging.getLogger(__name__)


class Model(Protocol):
    """What the program needs from the application it runs."""

    def init(self) -> list[Command]:
        ...

    def update(self, event: Event) -> list[Command]:
        ...

    def view(self) -> str:
        ...


class KeySource(Protocol):
    def read(self, timeout: float = 0.1) -> Optional[KeyEvent]:
        ...


class Program:
    """
    Runs a model until it returns QUIT or a fatal error occurs.

    Args:
        model: Application model
        reader: Key source (defaults to an InputReader on stdin)
        size: Callable returning the current terminal size
        output: Stream frames are written to
        managed: Enter alternate screen and raw mode while running
        poll_interval: Seconds the input thread waits for a key per iteration
    """

    def __init__(
        self,
        model: Model,
        reader: Optional[KeySource] = None,
        size: Callable[[], TerminalSize] = Terminal.size,
        output: Optional[TextIO] = None,
        managed: bool = True,
        poll_interval: float = 0.05,
    ) -> None:
        self.model = model
        self.reader = reader or InputReader()
        self._size = size
        self._output = output or sys.stdout
        self._managed = managed
        self._poll_interval = poll_interval

        self._queue: queue.Queue[Event] = queue.Queue()
        self._stop = threading.Event()
        self._input_thread: Optional[threading.Thread] = None
        self.running = False

    def send(self, event: Event) -> None:
        """Post an event to the loop. Safe to call from any thread."""
        self._queue.put(event)

    def run(self) -> Model:
        """Main application loop. Returns the model once it quits."""
        self.running = True
        context = Terminal.managed_mode() if self._managed else nullcontext()

        try:
            with context:
                self._dispatch(self.model.init())
                self._start_input()
                self._render()

                while self.running:
                    event = self._queue.get()
                    if isinstance(event, FatalEvent):
                        raise ProgramError(str(event.error) or type(event.error).__name__) from event.error

                    self._dispatch(self.model.update(event))
                    if not self.running:
                        break
                    self._render()
        finally:
            self.running = False
            self._stop.set()
            if self._input_thread is not None:
                self._input_thread.join(timeout=1.0)

        logger.debug("program stopped")
        return self.model

    def _dispatch(self, commands: list[Command]) -> None:
        for command in commands:
            if command is QUIT:
                logger.debug("quit requested")
                self.running = False
                return
            logger.debug("dispatching %r", command)
            thread = threading.Thread(target=self._run_command, args=(command,), daemon=True)
            thread.start()

    def _run_command(self, command: Command) -> None:
        try:
            result = command()
        except Exception as e:
            logger.exception("command %r failed", command)
            self.send(FatalEvent(e))
            return
        if result is not None and not self._stop.is_set():
            self.send(result)

    def _start_input(self) -> None:
        self._input_thread = threading.Thread(target=self._input_loop, name="chatterm-input", daemon=True)
        self._input_thread.start()

    def _input_loop(self) -> None:
        """Post size changes and key presses until the program stops."""
        last_size: Optional[TerminalSize] = None
        while not self._stop.is_set():
            try:
                size = self._size()
                if size != last_size:
                    last_size = size
                    self.send(ResizeEvent(width=size.cols, height=size.rows))

                event = self.reader.read(timeout=self._poll_interval)
            except Exception as e:
                logger.error("input transport failed: %s", e)
                self.send(FatalEvent(e))
                return

            if event is not None:
                self.send(event)

    def _render(self) -> None:
        """Write the model's view as one frame."""
        lines = self.model.view().split('\n')
        Terminal.write(Terminal.frame(lines), self._output)
