"""Pytest configuration and shared fixtures."""

import logging
from typing import Callable

import pytest

from chatterm.cli import logging_setup
from chatterm.cli.core.events import ResizeEvent
from chatterm.cli.core.input import Key, KeyEvent
from chatterm.cli.programs.chat import ChatSession
from chatterm.core.config import ChatConfig


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep config and log lookups away from the real home directory."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("CHATTERM_CONFIG", raising=False)
    monkeypatch.setenv("CHATTERM_LOG_FILE", str(tmp_path / "logs" / "chatterm.log"))


@pytest.fixture(autouse=True)
def reset_logging(monkeypatch: pytest.MonkeyPatch):
    """Undo the file logging set up by CLI commands."""
    monkeypatch.setattr(logging_setup, "_RUNTIME", None)
    yield
    logger = logging.getLogger("chatterm")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def config() -> ChatConfig:
    return ChatConfig(color=False)


@pytest.fixture
def new_session(config: ChatConfig) -> ChatSession:
    """A session that has not seen a terminal size yet."""
    return ChatSession(config=config)


@pytest.fixture
def session(new_session: ChatSession) -> ChatSession:
    """A session laid out on an 80x24 terminal."""
    new_session.update(ResizeEvent(width=80, height=24))
    return new_session


@pytest.fixture
def type_text() -> Callable[[ChatSession, str], None]:
    """Send each character of a string as a key press."""
    def _type(session: ChatSession, text: str) -> None:
        for ch in text:
            session.update(KeyEvent(char=ch, raw=ch))
    return _type


@pytest.fixture
def submit(type_text) -> Callable[[ChatSession, str], None]:
    """Type a message and press Enter."""
    def _submit(session: ChatSession, text: str) -> None:
        type_text(session, text)
        session.update(KeyEvent(key=Key.ENTER, raw='\r'))
    return _submit
