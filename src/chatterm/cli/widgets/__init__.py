"""Reusable TUI widgets."""

from chatterm.cli.widgets.base import BaseWidget, Rect, ScrollableList, TextEditor
from chatterm.cli.widgets.text_area import TextAreaWidget
from chatterm.cli.widgets.viewport import ViewportWidget
from chatterm.cli.widgets.status_bar import Shortcut, StatusBarWidget

__all__ = [
    "BaseWidget",
    "Rect",
    "TextEditor",
    "ScrollableList",
    "TextAreaWidget",
    "ViewportWidget",
    "StatusBarWidget",
    "Shortcut",
]
