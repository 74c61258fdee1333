from __future__ import annotations

import traceback
from typing import Callable

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import QApplication, QDialog, QFileDialog, QMessageBox, QWidget

from ..logging_utils import get_logger
from .preferences.ports import ConfirmCallback, FileFilter, PathCallback

LOGGER = get_logger(__name__)


def _once(callback: Callable[..., None]) -> Callable[..., None]:
    delivered = [False]

    def _wrapper(*args) -> None:
        if delivered[0]:
            return
        delivered[0] = True
        callback(*args)

    return _wrapper


class DialogService:
    """Non-blocking dialogs for the preferences page.

    Every request answers through its callback at most once; closing a
    dialog without choosing counts as a cancel/"No".
    """

    def __init__(self, window: QWidget | None = None) -> None:
        self._window = window
        self._open_dialogs: set[QDialog] = set()
        self._busy = False

    def set_window(self, window: QWidget | None) -> None:
        self._window = window

    @property
    def is_busy(self) -> bool:
        return self._busy

    def set_busy(self) -> None:
        if self._busy or QApplication.instance() is None:
            return
        self._busy = True
        QApplication.setOverrideCursor(Qt.CursorShape.WaitCursor)
        QTimer.singleShot(0, self._clear_busy)

    def _clear_busy(self) -> None:
        if not self._busy:
            return
        self._busy = False
        QApplication.restoreOverrideCursor()

    def show_and_log_exception(self, exc: BaseException) -> None:
        LOGGER.error("Unhandled error in preferences", exc_info=(type(exc), exc, exc.__traceback__))
        if QApplication.instance() is None:
            return
        details = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).strip()
        box = QMessageBox(self._window)
        box.setWindowTitle("Error")
        box.setIcon(QMessageBox.Icon.Critical)
        box.setText(str(exc) or type(exc).__name__)
        box.setInformativeText("Open 'Show Details...' for technical information.")
        box.setDetailedText(details)
        box.setStandardButtons(QMessageBox.StandardButton.Ok)
        self._open(box, lambda _result: None)

    def ask_confirmation(self, message: str, title: str, callback: ConfirmCallback) -> None:
        box = QMessageBox(self._window)
        box.setWindowTitle(title)
        box.setIcon(QMessageBox.Icon.Question)
        box.setText(message)
        box.setStandardButtons(QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No)
        box.setDefaultButton(QMessageBox.StandardButton.No)
        answer = _once(callback)

        def _finished(_result: int) -> None:
            clicked = box.clickedButton()
            answer(clicked is not None and box.standardButton(clicked) == QMessageBox.StandardButton.Yes)

        self._open(box, _finished)

    def show_folder_browser_dialog(self, initial_path: str, callback: PathCallback) -> None:
        dlg = QFileDialog(self._window, "Select Folder", initial_path or "")
        dlg.setFileMode(QFileDialog.FileMode.Directory)
        dlg.setOption(QFileDialog.Option.ShowDirsOnly, True)
        self._open_file_dialog(dlg, callback)

    def show_file_browser_dialog(self, file_filter: FileFilter, initial_path: str, callback: PathCallback) -> None:
        dlg = QFileDialog(self._window, "Select File", initial_path or "", file_filter.to_qt_filter())
        dlg.setFileMode(QFileDialog.FileMode.ExistingFile)
        if initial_path:
            dlg.selectFile(initial_path)
        self._open_file_dialog(dlg, callback)

    def _open_file_dialog(self, dlg: QFileDialog, callback: PathCallback) -> None:
        answer = _once(callback)

        def _finished(result: int) -> None:
            files = dlg.selectedFiles()
            if result != QDialog.DialogCode.Accepted.value or not files:
                answer(True, "")
                return
            answer(False, files[0])

        self._open(dlg, _finished)

    def _open(self, dlg: QDialog, on_finished: Callable[[int], None]) -> None:
        self._open_dialogs.add(dlg)

        def _finished(result: int) -> None:
            self._open_dialogs.discard(dlg)
            try:
                on_finished(result)
            finally:
                dlg.deleteLater()

        dlg.finished.connect(_finished)
        dlg.open()
