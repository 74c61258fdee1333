from __future__ import annotations

from PySide6.QtGui import QAction, QIcon
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QScrollArea,
    QSpinBox,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from ...app_settings.defaults import SEARCH_LIMIT_MAX, SEARCH_LIMIT_MIN, SEARCH_VIDEO_TYPES
from .session import PreferencesSession


class PreferencesView(QWidget):
    """Editing surface for a ``PreferencesSession``.

    Widgets only ever write through the session; the session's signals
    drive every refresh.
    """

    def __init__(self, session: PreferencesSession, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.session = session
        # Widget setup fires change signals; nothing may reach the draft until the first refresh.
        self._refreshing = True
        self._error_labels: dict[str, QLabel] = {}
        self._inputs: dict[str, QWidget] = {}

        layout = QVBoxLayout(self)
        self.toolbar = QToolBar("Preferences", self)
        for command in session.build_menu():
            action = QAction(QIcon.fromTheme(command.icon_name), command.label, self)
            action.triggered.connect(lambda _checked=False, cb=command.callback: cb())
            self.toolbar.addAction(action)
        layout.addWidget(self.toolbar)

        self.error_banner = QLabel("", self)
        self.error_banner.setProperty("role", "error")
        self.error_banner.hide()
        layout.addWidget(self.error_banner)

        self.scroll = QScrollArea(self)
        self.scroll.setWidgetResizable(True)
        layout.addWidget(self.scroll)
        container = QWidget(self.scroll)
        self.scroll.setWidget(container)
        vbox = QVBoxLayout(container)

        vbox.addWidget(self._build_app_group(container))
        vbox.addWidget(self._build_search_group(container))
        vbox.addWidget(self._build_download_group(container))
        vbox.addWidget(self._build_misc_group(container))
        vbox.addStretch(1)

        session.draftChanged.connect(lambda _draft: self._on_session_changed())
        session.fieldChanged.connect(lambda _name: self._on_session_changed())
        session.errorsChanged.connect(self._show_errors)
        self.scroll.verticalScrollBar().valueChanged.connect(self._remember_scroll)
        self._refreshing = False

    # -- construction -----------------------------------------------------

    def _build_app_group(self, parent: QWidget) -> QGroupBox:
        group = QGroupBox("Application", parent)
        form = QFormLayout(group)
        self.check_updates_checkbox = self._bool_input("app_check_for_updates", "Check for updates", group)
        self.donation_checkbox = self._bool_input("app_show_donation_button", "Show donation button", group)
        self.theme_combo = QComboBox(group)
        self.theme_combo.addItems(list(self.session.available_themes))
        self.theme_combo.currentTextChanged.connect(lambda text: self._write("theme", text))
        self._inputs["theme"] = self.theme_combo
        form.addRow(self.check_updates_checkbox)
        form.addRow(self.donation_checkbox)
        form.addRow("Theme:", self._with_error("theme", self.theme_combo, group))
        return group

    def _build_search_group(self, parent: QWidget) -> QGroupBox:
        group = QGroupBox("Search", parent)
        form = QFormLayout(group)
        self.channel_combo = QComboBox(group)
        self.channel_combo.setEditable(True)
        self.channel_combo.lineEdit().textEdited.connect(lambda text: self._write("search_channel_name", text))
        self.channel_combo.activated.connect(
            lambda _index: self._write("search_channel_name", self.channel_combo.currentText())
        )
        self._inputs["search_channel_name"] = self.channel_combo
        self.add_favourite_button = QPushButton("Add", group)
        self.remove_favourite_button = QPushButton("Remove", group)
        self.show_favourites_button = QPushButton("Favourites...", group)
        self.add_favourite_button.clicked.connect(self.session.add_favourite_channel)
        self.remove_favourite_button.clicked.connect(self.session.remove_favourite_channel)
        self.show_favourites_button.clicked.connect(self._open_dropdown)
        channel_row = QWidget(group)
        row = QHBoxLayout(channel_row)
        row.setContentsMargins(0, 0, 0, 0)
        row.addWidget(self.channel_combo, 1)
        row.addWidget(self.add_favourite_button)
        row.addWidget(self.remove_favourite_button)
        row.addWidget(self.show_favourites_button)

        self.video_type_combo = QComboBox(group)
        self.video_type_combo.addItems(list(SEARCH_VIDEO_TYPES))
        self.video_type_combo.currentTextChanged.connect(lambda text: self._write("search_video_type", text))
        self._inputs["search_video_type"] = self.video_type_combo
        self.load_limit_spin = self._int_input("search_load_limit", group)
        self.load_last_days_spin = self._int_input("search_load_last_days", group)
        self.search_on_startup_checkbox = self._bool_input("search_on_startup", "Search on startup", group)

        form.addRow("Channel:", self._with_error("search_channel_name", channel_row, group))
        form.addRow("Load by:", self._with_error("search_video_type", self.video_type_combo, group))
        form.addRow("Load limit:", self._with_error("search_load_limit", self.load_limit_spin, group))
        form.addRow("Last days:", self._with_error("search_load_last_days", self.load_last_days_spin, group))
        form.addRow(self.search_on_startup_checkbox)
        return group

    def _build_download_group(self, parent: QWidget) -> QGroupBox:
        group = QGroupBox("Download", parent)
        form = QFormLayout(group)
        self.temp_folder_edit = self._path_input("download_temp_folder", group)
        temp_button = QPushButton("Browse...", group)
        temp_button.clicked.connect(self.session.choose_download_temp_folder)
        self.folder_edit = self._path_input("download_folder", group)
        folder_button = QPushButton("Browse...", group)
        folder_button.clicked.connect(self.session.choose_download_folder)
        self.file_name_edit = QLineEdit(group)
        self.file_name_edit.textEdited.connect(lambda text: self._write("download_file_name", text))
        self._inputs["download_file_name"] = self.file_name_edit
        self.subfolders_checkbox = self._bool_input(
            "download_subfolders_for_fav", "Create subfolders for favourite channels", group
        )
        self.remove_completed_checkbox = self._bool_input(
            "download_remove_completed", "Remove completed downloads", group
        )
        self.disable_conversion_checkbox = self._bool_input(
            "download_disable_conversion", "Disable conversion", group
        )
        form.addRow("Temp folder:", self._with_error("download_temp_folder", self._row(group, self.temp_folder_edit, temp_button), group))
        form.addRow("Folder:", self._with_error("download_folder", self._row(group, self.folder_edit, folder_button), group))
        form.addRow("Filename:", self._with_error("download_file_name", self.file_name_edit, group))
        form.addRow(self.subfolders_checkbox)
        form.addRow(self.remove_completed_checkbox)
        form.addRow(self.disable_conversion_checkbox)
        return group

    def _build_misc_group(self, parent: QWidget) -> QGroupBox:
        group = QGroupBox("Miscellaneous", parent)
        form = QFormLayout(group)
        self.use_external_player_checkbox = self._bool_input(
            "misc_use_external_player", "Use external player", group
        )
        self.external_player_edit = self._path_input("misc_external_player", group)
        choose_button = QPushButton("Browse...", group)
        clear_button = QPushButton("Clear", group)
        choose_button.clicked.connect(self.session.choose_external_player)
        clear_button.clicked.connect(self.session.clear_external_player)
        form.addRow(self.use_external_player_checkbox)
        form.addRow(
            "Player:",
            self._with_error(
                "misc_external_player", self._row(group, self.external_player_edit, choose_button, clear_button), group
            ),
        )
        return group

    def _bool_input(self, name: str, label: str, parent: QWidget) -> QCheckBox:
        box = QCheckBox(label, parent)
        box.toggled.connect(lambda checked: self._write(name, bool(checked)))
        self._inputs[name] = box
        return box

    def _int_input(self, name: str, parent: QWidget) -> QSpinBox:
        spin = QSpinBox(parent)
        spin.setRange(0, SEARCH_LIMIT_MAX * 10)
        spin.setToolTip(f"{SEARCH_LIMIT_MIN} - {SEARCH_LIMIT_MAX}")
        spin.valueChanged.connect(lambda value: self._write(name, int(value)))
        self._inputs[name] = spin
        return spin

    def _path_input(self, name: str, parent: QWidget) -> QLineEdit:
        edit = QLineEdit(parent)
        edit.setReadOnly(True)
        self._inputs[name] = edit
        return edit

    @staticmethod
    def _row(parent: QWidget, *widgets: QWidget) -> QWidget:
        host = QWidget(parent)
        row = QHBoxLayout(host)
        row.setContentsMargins(0, 0, 0, 0)
        for index, widget in enumerate(widgets):
            row.addWidget(widget, 1 if index == 0 else 0)
        return host

    def _with_error(self, name: str, widget: QWidget, parent: QWidget) -> QWidget:
        host = QWidget(parent)
        column = QVBoxLayout(host)
        column.setContentsMargins(0, 0, 0, 0)
        column.addWidget(widget)
        label = QLabel("", host)
        label.setProperty("role", "error")
        label.hide()
        column.addWidget(label)
        self._error_labels[name] = label
        return host

    # -- binding ----------------------------------------------------------

    def _write(self, name: str, value) -> None:
        if self._refreshing:
            return
        self.session.update_field(name, value)

    def _open_dropdown(self) -> None:
        self.session.open_dropdown()
        self.channel_combo.showPopup()

    def _remember_scroll(self, value: int) -> None:
        self.session.scroll_position = float(value)

    def _on_session_changed(self) -> None:
        # A hidden page must not bring back the draft it just dropped.
        if self.isVisible():
            self.refresh()

    def refresh(self) -> None:
        if self._refreshing:
            return
        self._refreshing = True
        try:
            prefs = self.session.current_preferences
            self.check_updates_checkbox.setChecked(prefs.app_check_for_updates)
            self.donation_checkbox.setChecked(prefs.app_show_donation_button)
            self.theme_combo.setCurrentText(prefs.theme)
            self.channel_combo.clear()
            self.channel_combo.addItems(prefs.search_favourite_channels)
            self.channel_combo.setEditText(prefs.search_channel_name or "")
            self.video_type_combo.setCurrentText(prefs.search_video_type)
            self.load_limit_spin.setValue(int(prefs.search_load_limit))
            self.load_last_days_spin.setValue(int(prefs.search_load_last_days))
            self.load_limit_spin.setEnabled(prefs.search_video_type == "count")
            self.load_last_days_spin.setEnabled(prefs.search_video_type == "time")
            self.search_on_startup_checkbox.setChecked(prefs.search_on_startup)
            self.temp_folder_edit.setText(prefs.download_temp_folder)
            self.folder_edit.setText(prefs.download_folder)
            self.file_name_edit.setText(prefs.download_file_name)
            self.subfolders_checkbox.setChecked(prefs.download_subfolders_for_fav)
            self.remove_completed_checkbox.setChecked(prefs.download_remove_completed)
            self.disable_conversion_checkbox.setChecked(prefs.download_disable_conversion)
            self.use_external_player_checkbox.setChecked(prefs.misc_use_external_player)
            self.external_player_edit.setText(prefs.misc_external_player or "")
        finally:
            self._refreshing = False

    def _show_errors(self, field_errors: dict) -> None:
        for name, label in self._error_labels.items():
            messages = field_errors.get(name, []) if isinstance(field_errors, dict) else []
            label.setText("\n".join(messages))
            label.setVisible(bool(messages))
            widget = self._inputs.get(name)
            if widget is not None:
                widget.setProperty("invalid", "true" if messages else "false")
                widget.style().unpolish(widget)
                widget.style().polish(widget)
        banner = self.session.errors.get("current_preferences", [])
        self.error_banner.setText("\n".join(banner))
        self.error_banner.setVisible(bool(banner))

    # -- lifecycle --------------------------------------------------------

    def showEvent(self, event) -> None:  # type: ignore[override]
        super().showEvent(event)
        self.refresh()
        self.scroll.verticalScrollBar().setValue(int(self.session.scroll_position))

    def hideEvent(self, event) -> None:  # type: ignore[override]
        self._refreshing = True
        try:
            self.session.on_before_hidden()
        finally:
            self._refreshing = False
        super().hideEvent(event)
