"""Chat session settings, loaded from a JSON file."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

from chatterm.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CHATTERM_CONFIG"


def default_config_path() -> Path:
    """Location of the config file: $CHATTERM_CONFIG or ~/.config/chatterm/config.json."""
    if env_path := os.environ.get(CONFIG_ENV_VAR):
        return Path(env_path).expanduser()
    return Path.home() / ".config" / "chatterm" / "config.json"


@dataclass(frozen=True)
class ChatConfig:
    """
    Settings for a chat session.

    Attributes:
        char_limit: Maximum characters the editor buffer holds
        editor_height: Visible rows of the editor
        placeholder: Text shown while the editor is empty
        prompt: Prefix drawn at the start of each editor row
        blink_interval: Cursor blink period in seconds
        user_label: Title of the user's message blocks
        reply_label: Title of reply blocks
        reply_prefix: Text the echo responder puts before each reply
        color: Render message blocks in color
    """
    char_limit: int = 280
    editor_height: int = 3
    placeholder: str = "Send a message..."
    prompt: str = "┃ "
    blink_interval: float = 0.53
    user_label: str = "You"
    reply_label: str = "Bot"
    reply_prefix: str = "Echo: "
    color: bool = True

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise ConfigError if any value is out of range."""
        if not isinstance(self.char_limit, int) or isinstance(self.char_limit, bool) or self.char_limit <= 0:
            raise ConfigError(f"char_limit must be a positive integer, got {self.char_limit!r}")
        if not isinstance(self.editor_height, int) or isinstance(self.editor_height, bool) or self.editor_height < 1:
            raise ConfigError(f"editor_height must be at least 1, got {self.editor_height!r}")
        if (
            not isinstance(self.blink_interval, (int, float))
            or isinstance(self.blink_interval, bool)
            or self.blink_interval <= 0
        ):
            raise ConfigError(f"blink_interval must be a positive number, got {self.blink_interval!r}")
        for name in ("placeholder", "prompt", "user_label", "reply_label", "reply_prefix"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ConfigError(f"{name} must be a string, got {value!r}")
        if not isinstance(self.color, bool):
            raise ConfigError(f"color must be true or false, got {self.color!r}")

    def with_overrides(self, **values: Any) -> ChatConfig:
        """Return a copy with the given values replaced. None values are skipped."""
        changes = {key: value for key, value in values.items() if value is not None}
        if not changes:
            return self
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChatConfig:
        """Build a config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def load(cls, path: Optional[Path] = None) -> ChatConfig:
        """
        Load settings from a JSON file.

        Without an explicit path the default location is used, and a missing
        default file simply yields the defaults. A missing explicit file,
        malformed JSON or invalid values raise ConfigError.
        """
        explicit = path is not None or CONFIG_ENV_VAR in os.environ
        config_path = Path(path).expanduser() if path is not None else default_config_path()

        if not config_path.exists():
            if explicit:
                raise ConfigError(f"Config file not found: {config_path}")
            logger.debug("No config file at %s, using defaults", config_path)
            return cls()

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{config_path} must contain a JSON object")

        logger.debug("Loaded config from %s", config_path)
        return cls.from_dict(data)
