import time

from histsearch.constants import DEBUG_LOG_FILE
from histsearch.types import KeyEvent, KeyKind, SearchResult, View, ts_str


class DebugLogger:
    """Optional debug log of the search session, written to a file.

    The terminal is taken over while searching, so nothing is ever printed;
    all diagnostics go to the log file when enabled.
    """

    def __init__(self, path: str = DEBUG_LOG_FILE):
        self.enabled = False
        self.path = path
        self._fh = None

    def start(self):
        self._fh = open(self.path, "a", encoding="utf-8")
        self.enabled = True
        sep = f"\n{'='*60}\n  Session started: {time.strftime('%Y-%m-%d %H:%M:%S')}\n{'='*60}\n"
        self._fh.write(sep)
        self._fh.flush()

    def stop(self):
        self.enabled = False
        if self._fh:
            try:
                self._fh.close()
            except Exception:
                pass
        self._fh = None

    def log(self, message: str):
        if not self.enabled or not self._fh:
            return
        for line in message.split("\n"):
            self._fh.write(f"{ts_str(time.time())} | {line}\n")
        self._fh.flush()

    def log_key(self, ev: KeyEvent):
        if not self.enabled:
            return
        if ev.kind is KeyKind.CHAR:
            self.log(f"key {ev.kind.name} {ev.char!r}")
        else:
            self.log(f"key {ev.kind.name}")

    def log_frame(self, view: View):
        if not self.enabled:
            return
        self.log(
            f"frame query={view.query!r} candidates={len(view.candidates)} selected={view.selected}"
        )

    def log_result(self, result: SearchResult):
        if not self.enabled:
            return
        detail = f" {result.command!r}" if result.command is not None else ""
        self.log(f"result {result.outcome.name}{detail}")
