"""
chatterm: an interactive terminal chat session

Type a message, read the replies, scroll back through the log and pick out
individual messages, all from one keyboard-driven screen.

Quick Start:
    $ chatterm chat

Library use:
    >>> from chatterm import ChatSession, EchoResponder
    >>> session = ChatSession(responder=EchoResponder())

Features:
    - Focus cycling between editor, log scrolling and message selection
    - Layout recomputed on every terminal resize
    - Pluggable responder for generating replies
    - JSON configuration with CLI overrides
"""

__version__ = "0.1.0"

# Core types
from chatterm.core.message import Message, MessageStore
from chatterm.core.focus import FocusMode, FocusState
from chatterm.core.responder import Responder, EchoResponder
from chatterm.core.config import ChatConfig

# Errors
from chatterm.errors import ChatError, ConfigError, ProgramError, TransportError

# Session
from chatterm.cli.programs.chat import ChatSession, run_chat

__all__ = [
    # Version
    "__version__",
    # Core types
    "Message",
    "MessageStore",
    "FocusMode",
    "FocusState",
    "Responder",
    "EchoResponder",
    "ChatConfig",
    # Errors
    "ChatError",
    "ConfigError",
    "ProgramError",
    "TransportError",
    # Session
    "ChatSession",
    "run_chat",
]
