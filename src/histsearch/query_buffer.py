class QueryBuffer:
    """Search query text. Characters are only ever added or removed at the end."""

    def __init__(self):
        self._text = ""

    @property
    def text(self) -> str:
        return self._text

    def insert(self, ch: str):
        """Append a character to the query."""
        self._text += ch

    def backspace(self) -> bool:
        """Delete the last character. Returns False if the query was already empty."""
        if not self._text:
            return False
        self._text = self._text[:-1]
        return True
