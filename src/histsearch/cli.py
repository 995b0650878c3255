import argparse
import os
import sys

from histsearch import __version__
from histsearch.constants import CANCELLED_NOTICE, NO_MATCH_NOTICE
from histsearch.debug_log import DebugLogger
from histsearch.history import ConfigurationError, build_frequency_index, load_history
from histsearch.loop import run_search
from histsearch.terminal import TerminalError, TerminalSession
from histsearch.types import Outcome, SearchResult


def report(result: SearchResult, out=None):
    """Print the outcome of a search once the terminal is restored."""
    if out is None:
        out = sys.stdout
    if result.outcome is Outcome.SELECTED:
        print(result.command, file=out)
    elif result.outcome is Outcome.NO_MATCH:
        print(NO_MATCH_NOTICE, file=out)
    else:
        print(CANCELLED_NOTICE, file=out)


def main(argv=None):
    p = argparse.ArgumentParser(
        prog="histsearch",
        description="Search your shell history and pick a previous command",
    )
    p.add_argument("-v", "--version", action="version",
                   version=f"%(prog)s {__version__}")
    p.add_argument("-d", "--debug", action="store_true", default=False,
                   help="Enable debug logging to histsearch_debug.log in current directory")
    p.add_argument("--shell", default=None,
                   help="Shell whose history to search (bash, zsh, fish) - overrides $SHELL")
    p.add_argument("--histfile", default=None,
                   help="Read history from this file instead of the shell's default")
    args = p.parse_args(argv)

    # Load history before touching the terminal
    try:
        path, commands = load_history(os.environ, shell=args.shell, histfile=args.histfile)
    except ConfigurationError as e:
        p.error(str(e))
    index = build_frequency_index(commands)

    logger = DebugLogger()
    if args.debug:
        try:
            logger.start()
        except OSError as e:
            p.error(f"Cannot write debug log {logger.path}: {e.strerror or e}")
    logger.log(f"history {path}: {len(commands)} lines, {len(index)} distinct commands")

    session = TerminalSession()
    error = None
    try:
        with session:
            result = run_search(session, index, logger)
        logger.log_result(result)
    except TerminalError as e:
        error = e
        logger.log(f"terminal error: {e}")
    finally:
        # Safety net: the session may have failed before its own cleanup ran
        try:
            session.leave()
        finally:
            logger.stop()

    # Only report once the terminal is back to normal
    if error is not None:
        print(f"Terminal error: {error}", file=sys.stderr)
        sys.exit(1)
    report(result)
