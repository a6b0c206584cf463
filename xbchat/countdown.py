"""A button that disables itself and counts down after being clicked."""

from __future__ import annotations

from .events import Signal

DEFAULT_SECONDS = 10
IDLE_TEXT = "获取"


class CountdownButton:
    """Counts down once per ``tick`` after a click, then becomes clickable again."""

    def __init__(self, seconds: int = DEFAULT_SECONDS, idle_text: str = IDLE_TEXT) -> None:
        if seconds <= 0:
            raise ValueError("seconds must be positive")
        self._seconds = seconds
        self.idle_text = idle_text
        self.counter = seconds
        self.text = idle_text
        self.enabled = True
        self.running = False
        self.clicked = Signal()

    def click(self) -> bool:
        """Start the countdown and emit ``clicked``; ignored while disabled."""
        if not self.enabled:
            return False
        self.enabled = False
        self.text = str(self.counter)
        self.running = True
        self.clicked.emit()
        return True

    def tick(self) -> None:
        """One second has passed."""
        if not self.running:
            return
        self.counter -= 1
        if self.counter <= 0:
            self.running = False
            self.counter = self._seconds
            self.text = self.idle_text
            self.enabled = True
            return
        self.text = str(self.counter)