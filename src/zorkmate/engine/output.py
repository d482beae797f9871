"""Append-only output log, in terminal line order."""


class OutputLog:
    """Ordered display lines, oldest first. Never truncated or reordered.

    append() merges like a terminal: text is written onto the end of the
    current last line, and each line break in it starts a new line. So
    "\\n".join(lines) is always the exact concatenation of appended chunks.
    """

    def __init__(self) -> None:
        self._lines: list[str] = []

    def append(self, text: str) -> None:
        if not text:
            return
        head, *rest = text.split("\n")
        if self._lines:
            self._lines[-1] += head
        else:
            self._lines.append(head)
        self._lines.extend(rest)

    def add_lines(self, *lines: str) -> None:
        """Add whole lines below the current output (echoes, notices)."""
        self._lines.extend(lines)

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    def tail(self, n: int) -> list[str]:
        if n <= 0:
            return []
        return self._lines[-n:]

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self):
        return iter(self._lines)
