"""A text field whose contents are capped at a number of UTF-8 bytes."""

from __future__ import annotations

from .events import Signal


def truncate_utf8(text: str, max_len: int) -> str:
    """Cut ``text`` to at most ``max_len`` UTF-8 bytes; no limit when ``max_len`` <= 0.

    A character split by the cut is decoded as U+FFFD.
    """
    if max_len <= 0:
        return text
    raw = text.encode("utf-8", "surrogatepass")
    if len(raw) <= max_len:
        return text
    return raw[:max_len].decode("utf-8", "replace")


class LimitedEdit:
    """Holds editable text, trimming it to the byte limit whenever it changes."""

    def __init__(self, max_len: int = 0) -> None:
        self.max_len = max_len
        self.text = ""
        self.text_changed = Signal()
        self.focus_lost = Signal()

    def set_max_length(self, max_len: int) -> None:
        """Set the byte limit; zero or less means unlimited."""
        self.max_len = max_len

    def set_text(self, text: str) -> None:
        """Replace the text, emitting ``text_changed`` for every change made."""
        while text != self.text:
            self.text = text
            self.text_changed.emit(text)
            text = truncate_utf8(text, self.max_len)

    def focus_out(self) -> None:
        """The field lost keyboard focus."""
        self.focus_lost.emit()