"""Full-screen terminal session built on curses.

``initscr()`` switches to the alternate screen (the terminal's smcup
capability) and ``endwin()`` switches back, so the user's scrollback is
left untouched. The session owns raw mode for its whole lifetime and must
be left on every exit path; use it as a context manager.
"""

from __future__ import annotations

import curses

from histsearch.constants import (
    ESC_DELAY_MS,
    HEADER,
    SEARCH_PREFIX,
    SELECTED_MARKER,
    UNSELECTED_MARKER,
)
from histsearch.types import KeyEvent, KeyKind, View

_ENTER_CHARS = ("\n", "\r")
_BACKSPACE_CHARS = ("\x7f", "\b")
_ESCAPE_CHAR = "\x1b"

_KEY_CODES = {
    curses.KEY_ENTER: KeyKind.ENTER,
    curses.KEY_BACKSPACE: KeyKind.BACKSPACE,
    curses.KEY_UP: KeyKind.UP,
    curses.KEY_DOWN: KeyKind.DOWN,
    curses.KEY_RESIZE: KeyKind.RESIZE,
}


class TerminalError(Exception):
    """A curses call failed while the session was active."""


def decode_key(raw: str | int) -> KeyEvent:
    """Translate a ``get_wch()`` result into a KeyEvent."""
    if isinstance(raw, int):
        return KeyEvent(_KEY_CODES.get(raw, KeyKind.OTHER))
    if raw in _ENTER_CHARS:
        return KeyEvent(KeyKind.ENTER)
    if raw in _BACKSPACE_CHARS:
        return KeyEvent(KeyKind.BACKSPACE)
    if raw == _ESCAPE_CHAR:
        return KeyEvent(KeyKind.ESCAPE)
    if len(raw) == 1 and raw.isprintable():
        return KeyEvent(KeyKind.CHAR, raw)
    return KeyEvent(KeyKind.OTHER)


def truncate_to_width(text: str, width: int) -> str:
    """Cut ``text`` to at most ``width`` characters.

    Counts characters, not display cells: wide (e.g. CJK) glyphs take two
    columns but count as one here, so such lines can still overflow.
    """
    if width <= 0:
        return ""
    return text[:width]


def candidate_line(command: str, count: int, selected: bool) -> str:
    marker = SELECTED_MARKER if selected else UNSELECTED_MARKER
    return f"{marker}{command} ({count})"


def frame_lines(view: View, width: int, height: int) -> list[str]:
    """Build the rows of one frame, fitted to a ``width`` x ``height`` viewport."""
    lines = [HEADER, f"{SEARCH_PREFIX}{view.query}", ""]
    for i, cand in enumerate(view.candidates):
        lines.append(candidate_line(cand.command, cand.count, i == view.selected))
    return [truncate_to_width(line, width) for line in lines[: max(height, 0)]]


class TerminalSession:
    """Raw-mode, alternate-screen terminal owned for one search."""

    FIRST_CANDIDATE_ROW = 3  # header, search line, blank

    def __init__(self):
        self.stdscr = None
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def __enter__(self) -> TerminalSession:
        self.enter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.leave()
        return False

    def enter(self):
        """Take over the terminal. Calling it again while active does nothing."""
        if self._active:
            return
        try:
            self.stdscr = curses.initscr()
            # From here on leave() has something to undo
            self._active = True
            curses.noecho()
            curses.raw()
            self.stdscr.keypad(True)
            curses.set_escdelay(ESC_DELAY_MS)
            try:
                curses.curs_set(0)
            except curses.error:
                pass  # terminal cannot hide the cursor
        except curses.error as e:
            raise TerminalError(f"Failed to set up terminal: {e}") from e

    def leave(self):
        """Restore the terminal. Safe to call any number of times."""
        if not self._active:
            return
        self._active = False
        try:
            self.stdscr.erase()
            self.stdscr.refresh()
            try:
                curses.curs_set(1)
            except curses.error:
                pass  # terminal cannot show/hide the cursor
            self.stdscr.keypad(False)
            curses.noraw()
            curses.echo()
        except curses.error as e:
            raise TerminalError(f"Failed to restore terminal: {e}") from e
        finally:
            curses.endwin()

    def render(self, view: View):
        """Redraw the whole screen for ``view``.

        The viewport size is read on every call so a resize between frames
        is picked up.
        """
        height, width = self.stdscr.getmaxyx()
        first = self.FIRST_CANDIDATE_ROW
        try:
            self.stdscr.erase()
            for row, line in enumerate(frame_lines(view, width, height)):
                attr = curses.A_BOLD if row - first == view.selected else curses.A_NORMAL
                # insstr never moves the cursor, so the bottom-right cell is safe
                self.stdscr.insstr(row, 0, line, attr)
            self.stdscr.refresh()
        except curses.error as e:
            raise TerminalError(f"Failed to draw screen: {e}") from e

    def read_event(self) -> KeyEvent:
        """Block until the next key press or resize."""
        try:
            raw = self.stdscr.get_wch()
        except curses.error as e:
            raise TerminalError(f"Failed to read input: {e}") from e
        return decode_key(raw)
