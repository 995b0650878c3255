from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum, auto


class KeyKind(Enum):
    CHAR = auto()
    BACKSPACE = auto()
    UP = auto()
    DOWN = auto()
    ENTER = auto()
    ESCAPE = auto()
    RESIZE = auto()
    OTHER = auto()


@dataclass(frozen=True)
class KeyEvent:
    kind: KeyKind
    char: str = ""  # only set for CHAR


class Outcome(Enum):
    SELECTED = auto()
    NO_MATCH = auto()
    CANCELLED = auto()


@dataclass(frozen=True)
class SearchResult:
    outcome: Outcome
    command: str | None = None


@dataclass(frozen=True)
class Candidate:
    command: str
    count: int


@dataclass(frozen=True)
class View:
    """Everything the terminal needs to draw one frame."""

    query: str
    candidates: tuple[Candidate, ...]
    selected: int


def ts_str(t: float) -> str:
    lt = time.localtime(t)
    return time.strftime("%H:%M:%S", lt)
