"""Tests for the chat session: dispatch, focus, submission and layout."""

import random

from chatterm.cli.core.ansi_text import strip_ansi, visible_len
from chatterm.cli.core.events import QUIT, BlinkEvent, ResizeEvent
from chatterm.cli.core.input import Key, KeyEvent
from chatterm.cli.programs.chat import ChatSession
from chatterm.cli.widgets.viewport import ViewportWidget
from chatterm.core.config import ChatConfig
from chatterm.core.focus import NO_SELECTION, FocusMode
from chatterm.core.message import Message

TAB = KeyEvent(key=Key.TAB, raw='\t')
ENTER = KeyEvent(key=Key.ENTER, raw='\r')
ALT_ENTER = KeyEvent(key=Key.ENTER, raw='\x1b\r', alt=True)
UP = KeyEvent(key=Key.UP, raw='\x1b[A')
DOWN = KeyEvent(key=Key.DOWN, raw='\x1b[B')
ESCAPE = KeyEvent(key=Key.ESCAPE, raw='\x1b')
CTRL_C = KeyEvent(key=Key.CTRL_C, raw='\x03')


def seed_messages(session: ChatSession, count: int) -> None:
    for i in range(count):
        session.messages.append(Message(f"message {i}", is_user=i % 2 == 0))


class TestReadiness:
    """Nothing is laid out until the first resize."""

    def test_not_ready_before_resize(self, new_session: ChatSession) -> None:
        assert new_session.ready is False
        assert new_session.viewport is None
        assert new_session.geometry is None
        assert new_session.view() == "\n  Initializing..."

    def test_first_resize_builds_viewport(self, new_session: ChatSession) -> None:
        new_session.update(ResizeEvent(width=80, height=24))

        assert new_session.ready is True
        assert new_session.header_height == 2
        assert new_session.footer_height == 6
        geo = new_session.geometry
        assert (geo.width, geo.height, geo.y_offset) == (80, 16, 2)
        viewport = new_session.viewport
        assert (viewport.width, viewport.height, viewport.y_offset) == (80, 16, 2)

    def test_keys_before_ready_are_handled(self, new_session: ChatSession, submit) -> None:
        submit(new_session, "early")
        assert len(new_session.messages) == 2

        new_session.update(ResizeEvent(width=80, height=24))
        assert "early" in strip_ansi(new_session.view())

    def test_viewport_factory_is_used(self, config: ChatConfig) -> None:
        calls = []

        def factory(width: int, height: int, y_offset: int) -> ViewportWidget:
            calls.append((width, height, y_offset))
            return ViewportWidget(width, height, y_offset)

        session = ChatSession(config=config, viewport_factory=factory)
        session.update(ResizeEvent(width=100, height=30))
        session.update(ResizeEvent(width=90, height=30))

        assert calls == [(100, 22, 2)]
        assert session.viewport.width == 90


class TestResize:
    """Layout recomputation on terminal resize."""

    def test_identical_resize_is_idempotent(self, session: ChatSession) -> None:
        before = session.geometry
        viewport = session.viewport
        dims = (viewport.width, viewport.height, viewport.y_offset)

        session.update(ResizeEvent(width=80, height=24))

        assert session.geometry == before
        assert session.viewport is viewport
        assert (viewport.width, viewport.height, viewport.y_offset) == dims

    def test_resize_updates_dimensions(self, session: ChatSession) -> None:
        session.update(ResizeEvent(width=120, height=40))
        geo = session.geometry
        assert (geo.width, geo.height, geo.y_offset) == (120, 32, 2)
        assert session.viewport.height == 32

    def test_tiny_terminal(self, session: ChatSession) -> None:
        session.update(ResizeEvent(width=10, height=3))
        assert session.geometry.height == 0
        assert len(session.view().split("\n")) <= 3

    def test_view_fits_terminal(self, session: ChatSession, submit) -> None:
        for i in range(10):
            submit(session, f"line {i} " * 20)

        lines = session.view().split("\n")
        assert len(lines) == 24
        assert all(visible_len(line) <= 80 for line in lines)

    def test_editor_height_changes_footer(self) -> None:
        session = ChatSession(config=ChatConfig(editor_height=5, color=False))
        session.update(ResizeEvent(width=80, height=24))
        assert session.footer_height == 8
        assert session.geometry.height == 24 - 2 - 8


class TestFocusCycling:
    """Tab cycles focus between editor, viewport and selection."""

    def test_empty_log_skips_selecting(self, session: ChatSession) -> None:
        session.update(TAB)
        assert session.focus.mode is FocusMode.SCROLLING
        assert session.editor.focused is False

        session.update(TAB)
        assert session.focus.mode is FocusMode.EDITING
        assert session.editor.focused is True
        assert session.focus.selected_index == NO_SELECTION

    def test_full_ring(self, session: ChatSession, submit) -> None:
        submit(session, "hello")

        session.update(TAB)
        assert session.focus.mode is FocusMode.SCROLLING
        session.update(TAB)
        assert session.focus.mode is FocusMode.SELECTING
        assert session.focus.selected_index == 0
        assert session.selected_message == Message("hello", is_user=True)
        session.update(TAB)
        assert session.focus.mode is FocusMode.EDITING
        assert session.focus.selected_index == NO_SELECTION
        assert session.selected_message is None

    def test_cycle_recomputes_layout_at_last_size(self, session: ChatSession) -> None:
        before = session.layout_mgr.layout
        session.update(TAB)
        after = session.layout_mgr.layout

        assert after is not before
        assert after == before
        assert session.viewport.height == after.viewport.height

    def test_selection_invariant_under_random_input(self, session: ChatSession, submit) -> None:
        rng = random.Random(42)
        for _ in range(300):
            choice = rng.choice(["tab", "up", "down", "send", "char"])
            if choice == "tab":
                session.update(TAB)
            elif choice == "up":
                session.update(UP)
            elif choice == "down":
                session.update(DOWN)
            elif choice == "send":
                submit(session, "msg")
            else:
                session.update(KeyEvent(char="x", raw="x"))

            count = len(session.messages)
            if session.focus.mode is FocusMode.SELECTING:
                assert 0 <= session.focus.selected_index < count
            else:
                assert session.focus.selected_index == NO_SELECTION
            assert session.editor.focused is (session.focus.mode is FocusMode.EDITING)


class TestSubmission:
    """Enter sends the editor contents."""

    def test_empty_submission_is_noop(self, session: ChatSession) -> None:
        session.update(ENTER)
        assert len(session.messages) == 0

    def test_whitespace_submission_is_noop(self, session: ChatSession, submit) -> None:
        submit(session, "   ")
        assert len(session.messages) == 0
        assert session.editor.value == "   "

    def test_hello_adds_two_messages(self, session: ChatSession, submit) -> None:
        submit(session, "hello")

        assert len(session.messages) == 2
        assert session.messages[0] == Message("hello", is_user=True)
        assert session.messages[1].is_user is False
        assert session.messages[1].content == "Echo: hello"
        assert session.editor.value == ""

    def test_submission_is_trimmed(self, session: ChatSession, submit) -> None:
        submit(session, "  spaced  ")
        assert session.messages[0].content == "spaced"

    def test_alt_enter_inserts_line_break(self, session: ChatSession, type_text) -> None:
        type_text(session, "a")
        session.update(ALT_ENTER)
        type_text(session, "b")

        assert session.editor.value == "a\nb"
        assert len(session.messages) == 0

        session.update(ENTER)
        assert session.messages[0].content == "a\nb"

    def test_custom_responder(self, config: ChatConfig, submit) -> None:
        class Pong:
            def respond(self, content: str) -> str:
                return "pong"

        session = ChatSession(config=config, responder=Pong())
        session.update(ResizeEvent(width=80, height=24))
        submit(session, "ping")
        assert session.messages[1] == Message("pong", is_user=False)

    def test_submission_scrolls_to_bottom(self, session: ChatSession, submit) -> None:
        for i in range(8):
            submit(session, f"message {i}")

        viewport = session.viewport
        assert viewport.max_scroll > 0
        assert viewport.scroll_y == viewport.max_scroll

    def test_sent_messages_are_shown(self, session: ChatSession, submit) -> None:
        submit(session, "hello")
        text = strip_ansi(session.view())
        assert "hello" in text
        assert "Echo: hello" in text
        assert "You" in text
        assert "Bot" in text


class TestNavigation:
    """Up/down move the selection while selecting."""

    def test_three_message_scenario(self, session: ChatSession) -> None:
        seed_messages(session, 3)
        session.update(TAB)
        session.update(TAB)
        assert session.focus.mode is FocusMode.SELECTING
        assert session.focus.selected_index == 0

        session.update(DOWN)
        session.update(DOWN)
        assert session.focus.selected_index == 2
        session.update(DOWN)
        assert session.focus.selected_index == 2

    def test_three_submissions_clamp_at_last_message(self, session: ChatSession, submit) -> None:
        for text in ("one", "two", "three"):
            submit(session, text)
        session.update(TAB)
        session.update(TAB)

        for _ in range(10):
            session.update(KeyEvent(char="j", raw="j"))
        assert session.focus.selected_index == 5

        session.update(UP)
        assert session.focus.selected_index == 4

    def test_move_up_at_top_is_noop(self, session: ChatSession, submit) -> None:
        submit(session, "hello")
        session.update(TAB)
        session.update(TAB)
        session.update(UP)
        assert session.focus.selected_index == 0

    def test_navigation_keeps_scroll_position(self, session: ChatSession, submit) -> None:
        for i in range(8):
            submit(session, f"message {i}")
        session.update(TAB)
        session.update(TAB)
        scroll = session.viewport.scroll_y

        session.update(DOWN)
        assert session.viewport.scroll_y == scroll
        assert session.focus.mode is FocusMode.SELECTING

    def test_other_input_discarded_while_selecting(self, session: ChatSession, submit) -> None:
        submit(session, "hello")
        session.update(TAB)
        session.update(TAB)

        session.update(KeyEvent(char="x", raw="x"))
        session.update(ENTER)

        assert session.editor.value == ""
        assert len(session.messages) == 2
        assert session.focus.mode is FocusMode.SELECTING

    def test_selected_message_is_highlighted(self, session: ChatSession, submit) -> None:
        submit(session, "hello")
        assert "▶" not in strip_ansi(session.view())

        session.update(TAB)
        session.update(TAB)
        assert "▶ You" in strip_ansi(session.view())

        session.update(DOWN)
        assert "▶ Bot" in strip_ansi(session.view())

    def test_status_line_shows_selected_position(self, session: ChatSession, submit) -> None:
        for i in range(8):
            submit(session, f"message {i}")
        assert strip_ansi(session.view().split("\n")[-1]).startswith(" EDIT ")

        session.update(TAB)
        session.update(TAB)
        assert session.status_label == "SELECT 1/16"
        assert "SELECT 1/16" in strip_ansi(session.view().split("\n")[-1])

        session.update(DOWN)
        assert "SELECT 2/16" in strip_ansi(session.view().split("\n")[-1])


class TestScrolling:
    """Keys go to the viewport while scrolling."""

    def test_keys_scroll_viewport(self, session: ChatSession, submit) -> None:
        for i in range(8):
            submit(session, f"message {i}")
        session.update(TAB)
        bottom = session.viewport.scroll_y

        session.update(UP)
        assert session.viewport.scroll_y == bottom - 1
        session.update(KeyEvent(key=Key.HOME, raw='\x1b[H'))
        assert session.viewport.scroll_y == 0

    def test_typing_does_not_reach_editor(self, session: ChatSession, type_text) -> None:
        session.update(TAB)
        type_text(session, "abc")
        assert session.editor.value == ""


class TestQuitAndTicks:
    """Quit keys and cursor blink."""

    def test_quit_from_every_mode(self, session: ChatSession, submit) -> None:
        submit(session, "hello")
        for _ in range(3):
            assert session.update(ESCAPE) == [QUIT]
            assert session.update(CTRL_C) == [QUIT]
            session.update(TAB)

    def test_ctrl_c_with_alt_quits(self, session: ChatSession) -> None:
        assert session.update(KeyEvent(key=Key.CTRL_C, raw="\x1b\x03", alt=True)) == [QUIT]

    def test_q_is_typed_not_quit(self, session: ChatSession) -> None:
        commands = session.update(KeyEvent(char="q", raw="q"))
        assert commands == []
        assert session.editor.value == "q"

    def test_init_schedules_blink(self, session: ChatSession) -> None:
        commands = session.init()
        assert len(commands) == 1
        assert callable(commands[0])

    def test_blink_toggles_cursor_and_reschedules(self, session: ChatSession) -> None:
        assert session.editor.cursor_visible is True
        commands = session.update(BlinkEvent())
        assert session.editor.cursor_visible is False
        assert len(commands) == 1
        assert commands[0] is not QUIT

    def test_blink_does_not_change_state(self, session: ChatSession, submit) -> None:
        submit(session, "hello")
        mode = session.focus.mode
        session.update(BlinkEvent())
        assert session.focus.mode is mode
        assert len(session.messages) == 2

    def test_unknown_events_are_ignored(self, session: ChatSession) -> None:
        assert session.update(object()) == []  # type: ignore[arg-type]
        assert session.focus.mode is FocusMode.EDITING

    def test_header_shows_mode(self, session: ChatSession) -> None:
        assert "EDIT" in strip_ansi(session.view())
        session.update(TAB)
        assert "SCROLL" in strip_ansi(session.view())
