from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, Sequence

from ...app_settings.preferences import Preferences

PathCallback = Callable[[bool, str], None]
ConfirmCallback = Callable[[bool], None]


@dataclass(frozen=True)
class FileFilter:
    name: str
    extensions: tuple[str, ...]

    def to_qt_filter(self) -> str:
        patterns = " ".join(f"*.{ext.lstrip('.')}" for ext in self.extensions) or "*"
        return f"{self.name} ({patterns})"


class PreferencesStoreProtocol(Protocol):
    @property
    def current_preferences(self) -> Preferences: ...

    @property
    def available_themes(self) -> Sequence[str]: ...

    def save(self, preferences: Preferences) -> None: ...

    def create_default(self) -> Preferences: ...


class ThemeServiceProtocol(Protocol):
    def set_theme(self, theme_id: str) -> None: ...


class NotificationServiceProtocol(Protocol):
    def show_notification(self, message: str) -> None: ...


class DialogServiceProtocol(Protocol):
    def show_and_log_exception(self, exc: BaseException) -> None: ...

    def set_busy(self) -> None: ...

    def show_folder_browser_dialog(self, initial_path: str, callback: PathCallback) -> None: ...

    def show_file_browser_dialog(self, file_filter: FileFilter, initial_path: str, callback: PathCallback) -> None: ...

    def ask_confirmation(self, message: str, title: str, callback: ConfirmCallback) -> None: ...
