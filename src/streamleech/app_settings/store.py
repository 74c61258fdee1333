from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path

from PySide6.QtCore import QObject, Signal

from ..logging_utils import get_logger
from .defaults import AVAILABLE_THEMES
from .preferences import Preferences

LOGGER = get_logger(__name__)


class PreferencesStore(QObject):
    """Owns the committed preferences record and its JSON file."""

    preferencesSaved = Signal(object)

    def __init__(self, path: Path, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._path = Path(path)
        self._lock = threading.Lock()
        self._current: Preferences | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def current_preferences(self) -> Preferences:
        with self._lock:
            if self._current is None:
                self._current = self._load_from_disk()
            return self._current

    @property
    def available_themes(self) -> tuple[str, ...]:
        return AVAILABLE_THEMES

    def create_default(self) -> Preferences:
        return Preferences.default()

    def save(self, preferences: Preferences) -> None:
        # Callers keep editing their draft, so the committed record is a private copy.
        committed = preferences.clone()
        self._write_to_disk(committed)
        with self._lock:
            self._current = committed
        LOGGER.info("Preferences saved to %s", self._path)
        self.preferencesSaved.emit(committed)

    def reload(self) -> Preferences:
        with self._lock:
            self._current = self._load_from_disk()
            return self._current

    def _load_from_disk(self) -> Preferences:
        if not self._path.exists():
            LOGGER.info("No preferences file at %s, using defaults", self._path)
            return Preferences.default()
        try:
            loaded = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            LOGGER.exception("Could not read preferences from %s, using defaults", self._path)
            return Preferences.default()
        if not isinstance(loaded, dict):
            LOGGER.warning("Preferences file %s does not hold an object, using defaults", self._path)
            return Preferences.default()
        return Preferences.from_json_dict(loaded)

    def _write_to_disk(self, preferences: Preferences) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(preferences.to_json_dict(), indent=2)
        fd, tmp_name = tempfile.mkstemp(prefix=".preferences-", suffix=".tmp", dir=str(self._path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
