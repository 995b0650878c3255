"""Shell history loading and the command frequency index.

History files are read as plain newline-delimited text. No timestamp or
shell-specific metadata parsing is done: every non-blank line, trimmed,
is one command, taken verbatim.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from pathlib import Path, PurePosixPath
from types import MappingProxyType

# Shell name -> history file relative to $HOME
SHELL_HISTORY_FILES = {
    "bash": ".bash_history",
    "zsh": ".zsh_history",
    "fish": ".local/share/fish/fish_history",
}


class ConfigurationError(Exception):
    """Fatal setup problem, raised before the terminal is touched."""


def resolve_history_path(shell: str, home: str | Path) -> Path:
    """Return the history file for a shell name or shell executable path.

    Matching is on the basename, so ``bash``, ``/bin/bash`` and
    ``/usr/local/bin/bash`` all resolve to ``~/.bash_history``.
    """
    name = PurePosixPath(shell.strip()).name
    rel = SHELL_HISTORY_FILES.get(name)
    if rel is None:
        supported = ", ".join(sorted(SHELL_HISTORY_FILES))
        raise ConfigurationError(f"Unsupported shell: {shell} (supported: {supported})")
    return Path(home) / rel


def _require_env(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name, "")
    if not value:
        raise ConfigurationError(f"Could not determine {name} (environment variable not set)")
    return value


def history_path_from_env(environ: Mapping[str, str], shell: str | None = None) -> Path:
    """Resolve the history file from ``HOME`` and ``SHELL``.

    An explicit ``shell`` overrides ``SHELL``.
    """
    home = _require_env(environ, "HOME")
    if shell is None:
        shell = _require_env(environ, "SHELL")
    return resolve_history_path(shell, home)


def read_history(path: str | Path) -> list[str]:
    """Read non-blank trimmed lines from a history file.

    Lines that are not valid UTF-8 are skipped.
    """
    commands: list[str] = []
    try:
        with open(path, "rb") as fh:
            for raw in fh:
                try:
                    line = raw.decode("utf-8")
                except UnicodeDecodeError:
                    continue
                line = line.strip()
                if line:
                    commands.append(line)
    except OSError as e:
        reason = e.strerror or str(e)
        raise ConfigurationError(f"Failed to open history file at {path}: {reason}") from e
    return commands


def load_history(
    environ: Mapping[str, str],
    shell: str | None = None,
    histfile: str | Path | None = None,
) -> tuple[Path, list[str]]:
    """Locate and read the history file. Returns ``(path, commands)``."""
    path = Path(histfile) if histfile else history_path_from_env(environ, shell)
    return path, read_history(path)


def build_frequency_index(commands: Iterable[str]) -> Mapping[str, int]:
    """Count occurrences of each distinct command (exact, case-sensitive)."""
    return MappingProxyType(dict(Counter(commands)))
