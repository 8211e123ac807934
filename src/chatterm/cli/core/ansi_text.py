"""ANSI text utilities - measuring and truncating strings with escape codes."""

from __future__ import annotations

import re

# Pattern to match ANSI escape sequences (including ~ terminator for F-keys, etc.)
_ANSI_ESCAPE = re.compile(r'\x1b\[[0-9;?]*[A-Za-z~]')


def strip_ansi(s: str) -> str:
    """Remove ANSI escape codes, leaving only visible text."""
    return _ANSI_ESCAPE.sub('', s)


def visible_len(s: str) -> int:
    """Get visible length of string (excluding ANSI escape codes)."""
    return len(strip_ansi(s))


def truncate(s: str, max_width: int, reset: bool = True) -> str:
    """
    Truncate an ANSI-escaped string to max visible width.

    Preserves ANSI codes but counts only visible characters.
    Ensures the result displays in exactly max_width columns or less.

    Args:
        s: String to truncate
        max_width: Maximum visible width
        reset: If True, append reset sequence to prevent color bleed
    """
    if max_width <= 0:
        return ""

    result: list[str] = []
    vis_len = 0
    i = 0

    while i < len(s) and vis_len < max_width:
        if s[i] == '\x1b' and i + 1 < len(s) and s[i + 1] == '[':
            # ANSI escape sequence - include whole thing
            j = i + 2
            while j < len(s) and not (s[j].isalpha() or s[j] == '~'):
                j += 1
            if j < len(s):
                j += 1  # Include terminator
            result.append(s[i:j])
            i = j
        else:
            result.append(s[i])
            vis_len += 1
            i += 1

    was_truncated = visible_len(s[i:]) > 0

    output = ''.join(result)

    # Append reset if truncated to prevent color bleed
    if reset and was_truncated:
        output += '\x1b[0m'

    return output


def pad_to_width(s: str, width: int, char: str = ' ') -> str:
    """Pad string with char to reach exactly width visible characters."""
    current = visible_len(s)
    if current >= width:
        return s
    return s + char * (width - current)
