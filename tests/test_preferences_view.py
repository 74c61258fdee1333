import os
import sys
import unittest
from pathlib import Path

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from PySide6.QtWidgets import QApplication

from streamleech.app_settings import Preferences
from streamleech.ui.preferences import PreferencesSession
from streamleech.ui.preferences.view import PreferencesView


class _StoreStub:
    def __init__(self) -> None:
        self.current_preferences = Preferences(
            download_temp_folder="/tmp/t",
            download_folder="/tmp/d",
            search_favourite_channels=["alpha", "beta"],
            search_channel_name="alpha",
        )
        self.available_themes = ("Dark", "Light", "High Contrast")
        self.saved: list[Preferences] = []

    def save(self, preferences: Preferences) -> None:
        self.saved.append(preferences.clone())
        self.current_preferences = preferences.clone()

    def create_default(self) -> Preferences:
        return Preferences(download_temp_folder="/tmp/t", download_folder="/tmp/d")


class _ThemeStub:
    def set_theme(self, theme_id: str) -> None:
        pass


class _NotifierStub:
    def show_notification(self, message: str) -> None:
        pass


class _DialogStub:
    def __init__(self) -> None:
        self.reported: list[BaseException] = []

    def show_and_log_exception(self, exc: BaseException) -> None:
        self.reported.append(exc)

    def set_busy(self) -> None:
        pass

    def show_folder_browser_dialog(self, initial_path, callback) -> None:
        callback(False, "/picked")

    def show_file_browser_dialog(self, file_filter, initial_path, callback) -> None:
        callback(True, "")

    def ask_confirmation(self, message, title, callback) -> None:
        callback(True)


class PreferencesViewTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.app = QApplication.instance() or QApplication([])

    def setUp(self) -> None:
        self.store = _StoreStub()
        self.dialogs = _DialogStub()
        self.session = PreferencesSession(self.store, _ThemeStub(), _NotifierStub(), self.dialogs)
        self.view = PreferencesView(self.session)

    def tearDown(self) -> None:
        self.view.hide()
        self.view.deleteLater()

    def test_construction_does_not_create_draft(self) -> None:
        self.assertFalse(self.session.has_draft)
        self.assertEqual([a.text() for a in self.view.toolbar.actions()], ["Save", "Undo", "Default"])

    def test_show_fills_widgets_from_draft(self) -> None:
        self.view.show()
        self.assertTrue(self.session.has_draft)
        self.assertEqual(self.view.folder_edit.text(), "/tmp/d")
        self.assertEqual(self.view.channel_combo.count(), 2)
        self.assertEqual(self.view.channel_combo.currentText(), "alpha")
        self.assertEqual(self.view.file_name_edit.text(), self.store.current_preferences.download_file_name)
        self.assertEqual(self.dialogs.reported, [])

    def test_widget_edits_go_to_draft(self) -> None:
        self.view.show()
        self.view.search_on_startup_checkbox.setChecked(True)
        self.assertTrue(self.session.current_preferences.search_on_startup)
        self.assertFalse(self.store.current_preferences.search_on_startup)

    def test_session_changes_refresh_widgets(self) -> None:
        self.view.show()
        self.session.choose_download_folder()
        self.assertEqual(self.view.folder_edit.text(), "/picked")

    def test_failed_save_shows_errors(self) -> None:
        self.view.show()
        self.session.update_field("search_channel_name", "")
        self.session.update_field("search_on_startup", True)
        self.assertFalse(self.session.save())
        self.assertFalse(self.view.error_banner.isHidden())
        self.assertEqual(self.view.error_banner.text(), "Invalid Preferences!")
        self.assertFalse(self.view._error_labels["search_channel_name"].isHidden())
        self.assertTrue(self.view._error_labels["download_folder"].isHidden())

    def test_hide_discards_draft(self) -> None:
        self.view.show()
        self.view.search_on_startup_checkbox.setChecked(True)
        self.view.hide()
        self.assertFalse(self.session.has_draft)
        self.assertEqual(self.store.saved, [])


if __name__ == "__main__":
    unittest.main()
