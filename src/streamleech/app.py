import sys
import traceback
from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import QApplication, QMainWindow, QStatusBar

from .app_settings import PreferencesStore, get_crash_logs_file_path, get_preferences_file_path
from .logging_utils import configure_app_logging, get_logger
from .ui.dialog_service import DialogService
from .ui.notifications import NotificationService
from .ui.preferences.session import PreferencesSession
from .ui.preferences.view import PreferencesView
from .ui.theme import ThemeService

LOGGER = get_logger(__name__)


class PreferencesWindow(QMainWindow):
    def __init__(self, store: PreferencesStore) -> None:
        super().__init__()
        self.setWindowTitle("StreamLeech - Preferences")
        self.resize(720, 640)
        self.status = QStatusBar(self)
        self.setStatusBar(self.status)

        self.store = store
        self.theme_service = ThemeService(self)
        self.notification_service = NotificationService(self.show_status_message, self)
        self.dialog_service = DialogService(self)
        self.session = PreferencesSession(
            store,
            self.theme_service,
            self.notification_service,
            self.dialog_service,
            self,
        )
        self.view = PreferencesView(self.session, self)
        self.setCentralWidget(self.view)
        self.theme_service.set_theme(store.current_preferences.theme)

    def show_status_message(self, text: str, timeout_ms: int = 0) -> None:
        self.status.showMessage(text, timeout_ms)


def _append_crash_log(error_text: str) -> None:
    path = get_crash_logs_file_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as handle:
            handle.write(error_text.rstrip("\n"))
            handle.write("\n\n")
    except OSError:
        LOGGER.exception("Could not write crash log to %s", path)


def main(existing_app: Optional[QApplication] = None, preferences_path: Optional[Path] = None) -> PreferencesWindow:
    owns_app = existing_app is None
    app = existing_app or QApplication(sys.argv)
    if owns_app:
        configure_app_logging("INFO")
    app.setApplicationName("StreamLeech")
    LOGGER.info("App main() starting (owns_app=%s)", owns_app)

    store = PreferencesStore(preferences_path or get_preferences_file_path())
    window = PreferencesWindow(store)
    LOGGER.info("Preferences window created for %s", store.path)

    def _global_exception_hook(exc_type, exc_value, exc_tb) -> None:
        error_text = "".join(traceback.format_exception(exc_type, exc_value, exc_tb)).strip()
        LOGGER.error("Unhandled exception routed to global hook", exc_info=(exc_type, exc_value, exc_tb))
        _append_crash_log(error_text)
        sys.__excepthook__(exc_type, exc_value, exc_tb)

    sys.excepthook = _global_exception_hook

    if owns_app:
        window.show()
        LOGGER.info("Window shown by app.main() (standalone mode)")

    return window
