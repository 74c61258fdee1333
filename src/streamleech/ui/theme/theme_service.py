from __future__ import annotations

from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QApplication

from ...app_settings.coercion import coerce_theme
from ...logging_utils import get_logger
from .theme_tokens import build_application_qss, build_preferences_page_qss, build_theme_tokens, tokens_signature

LOGGER = get_logger(__name__)


class ThemeService(QObject):
    themeChanged = Signal(str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._current_theme: str | None = None
        self._applied_signature = ""

    @property
    def current_theme(self) -> str | None:
        return self._current_theme

    def set_theme(self, theme_id: str) -> None:
        resolved = coerce_theme(theme_id)
        if resolved.lower() != str(theme_id or "").strip().lower():
            LOGGER.warning("Unknown theme '%s', falling back to '%s'", theme_id, resolved)
        tokens = build_theme_tokens(resolved)
        signature = tokens_signature(tokens)
        if signature != self._applied_signature:
            app = QApplication.instance()
            if app is not None:
                app.setStyleSheet(build_application_qss(tokens) + "\n" + build_preferences_page_qss(tokens))
            self._applied_signature = signature
            LOGGER.info("Theme '%s' applied", resolved)
        if resolved != self._current_theme:
            self._current_theme = resolved
            self.themeChanged.emit(resolved)
