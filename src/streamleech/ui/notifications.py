from __future__ import annotations

from collections import deque
from typing import Callable

from PySide6.QtCore import QObject, Signal

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

NOTIFICATION_TIMEOUT_MS = 3000
_HISTORY_MAX = 50


class NotificationService(QObject):
    """Short user-facing messages, shown in the window's status bar."""

    notified = Signal(str)

    def __init__(
        self,
        sink: Callable[[str, int], None] | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._sink = sink
        self._history: deque[str] = deque(maxlen=_HISTORY_MAX)

    def set_sink(self, sink: Callable[[str, int], None] | None) -> None:
        self._sink = sink

    @property
    def history(self) -> list[str]:
        return list(self._history)

    def show_notification(self, message: str) -> None:
        text = str(message or "").strip()
        if not text:
            return
        self._history.append(text)
        LOGGER.info("Notification: %s", text)
        if self._sink is not None:
            self._sink(text, NOTIFICATION_TIMEOUT_MS)
        self.notified.emit(text)
