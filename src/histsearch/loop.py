"""The interactive search loop.

``SearchState`` is the terminal-independent state machine: it holds the
query and selection and maps key events to transitions. ``run_search``
drives it against a terminal session, one frame per key event.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from histsearch.query_buffer import QueryBuffer
from histsearch.search import rank
from histsearch.types import Candidate, KeyEvent, KeyKind, Outcome, SearchResult, View

if TYPE_CHECKING:
    from histsearch.debug_log import DebugLogger
    from histsearch.terminal import TerminalSession


class SearchState:
    """Query, selection and the candidates last shown for them.

    Candidates are never edited in place; ``refresh()`` recomputes them
    from the frequency index for the current query.
    """

    def __init__(self, index: Mapping[str, int]):
        self.index = index
        self.query = QueryBuffer()
        self.selected = 0
        self.candidates: list[Candidate] = []

    def refresh(self):
        """Rank the index for the current query and clamp the selection."""
        self.candidates = rank(self.index, self.query.text)
        if self.selected >= len(self.candidates):
            self.selected = max(len(self.candidates) - 1, 0)

    def view(self) -> View:
        return View(self.query.text, tuple(self.candidates), self.selected)

    def move_up(self):
        if self.selected > 0:
            self.selected -= 1

    def move_down(self):
        if self.selected + 1 < len(self.candidates):
            self.selected += 1

    def handle_event(self, ev: KeyEvent) -> SearchResult | None:
        """Apply one key event. Returns a result when the search is over."""
        kind = ev.kind
        if kind is KeyKind.CHAR:
            self.query.insert(ev.char)
            self.selected = 0
        elif kind is KeyKind.BACKSPACE:
            self.query.backspace()
            self.selected = 0
        elif kind is KeyKind.UP:
            self.move_up()
        elif kind is KeyKind.DOWN:
            self.move_down()
        elif kind is KeyKind.ENTER:
            if self.candidates:
                return SearchResult(Outcome.SELECTED, self.candidates[self.selected].command)
            return SearchResult(Outcome.NO_MATCH)
        elif kind is KeyKind.ESCAPE:
            return SearchResult(Outcome.CANCELLED)
        # RESIZE and OTHER: nothing changes, the next frame redraws
        return None


def run_search(
    session: "TerminalSession",
    index: Mapping[str, int],
    logger: "DebugLogger | None" = None,
) -> SearchResult:
    """Run frames until the user picks a command or cancels."""
    state = SearchState(index)
    while True:
        state.refresh()
        view = state.view()
        if logger:
            logger.log_frame(view)
        session.render(view)

        ev = session.read_event()
        if logger:
            logger.log_key(ev)
        result = state.handle_event(ev)
        if result is not None:
            return result
