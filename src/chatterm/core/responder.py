"""Reply generation for submitted messages."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Responder(Protocol):
    """Turns a submitted message into reply text."""

    def respond(self, content: str) -> str:
        """Return the reply for ``content``. Called synchronously."""
        ...


class EchoResponder:
    """Replies with the submitted text behind a fixed prefix."""

    def __init__(self, prefix: str = "Echo: ") -> None:
        self.prefix = prefix

    def respond(self, content: str) -> str:
        return f"{self.prefix}{content}"
