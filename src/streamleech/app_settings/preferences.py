from __future__ import annotations

import re
from dataclasses import dataclass, field, fields, replace
from typing import Any

from .coercion import migrate_preferences
from .defaults import (
    AVAILABLE_THEMES,
    DEFAULT_DOWNLOAD_FILE_NAME,
    DEFAULT_SEARCH_VIDEO_TYPE,
    DEFAULT_THEME,
    FILENAME_WILDCARDS,
    PREFERENCES_SCHEMA_VERSION,
    SEARCH_LIMIT_MAX,
    SEARCH_LIMIT_MIN,
    build_default_preference_values,
)

_INVALID_FILE_NAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
_WILDCARD_PATTERN = re.compile(r"\{[^{}]*\}")


@dataclass(slots=True)
class Preferences:
    """The user's settings record.

    ``search_favourite_channels`` is ordered but behaves as a set under
    case-insensitive comparison; editing code keeps it free of repeats.
    """

    version: int = PREFERENCES_SCHEMA_VERSION
    app_check_for_updates: bool = True
    app_show_donation_button: bool = True
    search_channel_name: str | None = None
    search_favourite_channels: list[str] = field(default_factory=list)
    search_video_type: str = DEFAULT_SEARCH_VIDEO_TYPE
    search_load_limit: int = 10
    search_load_last_days: int = 10
    search_on_startup: bool = False
    download_temp_folder: str = ""
    download_folder: str = ""
    download_file_name: str = DEFAULT_DOWNLOAD_FILE_NAME
    download_subfolders_for_fav: bool = False
    download_remove_completed: bool = False
    download_disable_conversion: bool = False
    misc_use_external_player: bool = False
    misc_external_player: str | None = None
    theme: str = DEFAULT_THEME

    @classmethod
    def default(cls) -> "Preferences":
        return cls.from_json_dict(build_default_preference_values())

    def clone(self) -> "Preferences":
        return replace(self, search_favourite_channels=list(self.search_favourite_channels))

    def validate(self) -> dict[str, list[str]]:
        errors: dict[str, list[str]] = {}

        def add(name: str, message: str) -> None:
            errors.setdefault(name, []).append(message)

        if not str(self.download_temp_folder or "").strip():
            add("download_temp_folder", "Please specify a temporary download folder!")
        if not str(self.download_folder or "").strip():
            add("download_folder", "Please specify a default download folder!")

        file_name = str(self.download_file_name or "").strip()
        if not file_name:
            add("download_file_name", "Please specify a default download filename!")
        else:
            if _INVALID_FILE_NAME_CHARS.search(_WILDCARD_PATTERN.sub("", file_name)):
                add("download_file_name", "Filename contains invalid characters!")
            if not file_name.lower().endswith(".mp4"):
                add("download_file_name", "Filename must end with '.mp4'!")
            for wildcard in _WILDCARD_PATTERN.findall(file_name):
                if wildcard not in FILENAME_WILDCARDS:
                    add("download_file_name", f"Unknown wildcard '{wildcard}'!")

        if self.search_on_startup and not str(self.search_channel_name or "").strip():
            add("search_channel_name", "If 'Search on Startup' is enabled, you need to specify a default channel!")

        if self.search_video_type == "time":
            self._check_limit("search_load_last_days", add)
        elif self.search_video_type == "count":
            self._check_limit("search_load_limit", add)
        else:
            add("search_video_type", "Unknown video type!")

        if self.misc_use_external_player and not str(self.misc_external_player or "").strip():
            add("misc_external_player", "Please specify an external player!")

        theme = str(self.theme or "").strip()
        if not theme:
            add("theme", "Please select a theme!")
        elif theme not in AVAILABLE_THEMES:
            add("theme", f"Unknown theme '{theme}'!")
        return errors

    def _check_limit(self, name: str, add) -> None:
        value = getattr(self, name)
        if isinstance(value, bool) or not isinstance(value, int):
            add(name, "Value has to be a number!")
        elif not SEARCH_LIMIT_MIN <= value <= SEARCH_LIMIT_MAX:
            add(name, f"Value has to be between {SEARCH_LIMIT_MIN} and {SEARCH_LIMIT_MAX}!")

    def to_json_dict(self) -> dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["search_favourite_channels"] = list(self.search_favourite_channels)
        return data

    @classmethod
    def from_json_dict(cls, payload: dict[str, Any]) -> "Preferences":
        clean = migrate_preferences(payload if isinstance(payload, dict) else {})
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in clean.items() if key in known})
