from __future__ import annotations

from collections.abc import Mapping

from histsearch.constants import MAX_CANDIDATES
from histsearch.types import Candidate


def _sort_key(item: tuple[str, int]):
    command, count = item
    return (-count, command)


def rank(index: Mapping[str, int], query: str, limit: int = MAX_CANDIDATES) -> list[Candidate]:
    """Return the top matches for ``query``, most frequent first.

    A command matches when its lowercase form contains the lowercase query
    (the empty query matches everything). Ties on count are broken by
    command text so the order never depends on index iteration order.
    The whole index is filtered and sorted before truncating to ``limit``.
    """
    needle = query.lower()
    matches = [(cmd, count) for cmd, count in index.items() if needle in cmd.lower()]
    matches.sort(key=_sort_key)
    return [Candidate(cmd, count) for cmd, count in matches[:limit]]
