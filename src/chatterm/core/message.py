"""Chat messages and the append-only message log."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class Message:
    """A single chat entry."""
    content: str
    is_user: bool


class MessageStore:
    """
    Ordered log of messages.

    Insertion order is display order. Messages can only be appended, so the
    length of the store never decreases.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []

    def append(self, message: Message) -> Message:
        """Add a message to the end of the log."""
        self._messages.append(message)
        return message

    def add_user(self, content: str) -> Message:
        return self.append(Message(content=content, is_user=True))

    def add_reply(self, content: str) -> Message:
        return self.append(Message(content=content, is_user=False))

    @property
    def messages(self) -> tuple[Message, ...]:
        """Read-only snapshot of the log."""
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]

    def __bool__(self) -> bool:
        return bool(self._messages)
