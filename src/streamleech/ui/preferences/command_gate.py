from __future__ import annotations

import threading
from typing import Callable, TypeVar

from ...logging_utils import get_logger
from .ports import DialogServiceProtocol

LOGGER = get_logger(__name__)

T = TypeVar("T")


class CommandGate:
    """Exclusion domain for every command that touches the draft.

    ``run_exclusive`` is also the error boundary: failures are logged and
    handed to the dialog service, never raised to the caller.
    """

    def __init__(self, dialog_service: DialogServiceProtocol) -> None:
        self._dialog_service = dialog_service
        self._lock = threading.RLock()
        self._reservation_lock = threading.Lock()
        self._pending: str | None = None

    @property
    def pending(self) -> str | None:
        with self._reservation_lock:
            return self._pending

    def run_exclusive(self, operation: Callable[[], T], *, name: str = "command") -> T | None:
        try:
            with self._lock:
                LOGGER.debug("Running %s", name)
                return operation()
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("Command '%s' failed", name)
            self.report(exc)
            return None

    def report(self, exc: BaseException) -> None:
        try:
            self._dialog_service.show_and_log_exception(exc)
        except Exception:  # noqa: BLE001
            LOGGER.exception("Error reporter failed while reporting %r", exc)

    def try_reserve(self, name: str) -> bool:
        with self._reservation_lock:
            if self._pending is not None:
                LOGGER.info("Ignoring '%s' while '%s' is awaiting confirmation", name, self._pending)
                return False
            self._pending = name
            return True

    def release(self, name: str) -> None:
        with self._reservation_lock:
            if self._pending == name:
                self._pending = None
