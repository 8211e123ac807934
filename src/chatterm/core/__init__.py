"""Chat domain: messages, focus state, responders and settings."""

from chatterm.core.message import Message, MessageStore
from chatterm.core.focus import FocusMode, FocusState, NO_SELECTION
from chatterm.core.responder import Responder, EchoResponder
from chatterm.core.config import ChatConfig, default_config_path

__all__ = [
    "Message",
    "MessageStore",
    "FocusMode",
    "FocusState",
    "NO_SELECTION",
    "Responder",
    "EchoResponder",
    "ChatConfig",
    "default_config_path",
]
