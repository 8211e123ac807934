"""Exception types raised at the edges of a chat session."""

from __future__ import annotations


class ChatError(Exception):
    """Base class for chatterm errors."""


class ConfigError(ChatError, ValueError):
    """Configuration file or value is invalid."""


class TransportError(ChatError, OSError):
    """The terminal input stream failed or was closed."""


class ProgramError(ChatError, RuntimeError):
    """The event loop stopped because of a fatal error."""
