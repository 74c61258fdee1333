from __future__ import annotations

from .paths import get_default_download_folder, get_default_download_temp_folder

PREFERENCES_SCHEMA_VERSION = 2

AVAILABLE_THEMES: tuple[str, ...] = ("Dark", "Light", "High Contrast")
DEFAULT_THEME = "Dark"

SEARCH_VIDEO_TYPES: tuple[str, ...] = ("time", "count")
DEFAULT_SEARCH_VIDEO_TYPE = "time"
SEARCH_LIMIT_MIN = 1
SEARCH_LIMIT_MAX = 999

FILENAME_WILDCARDS: tuple[str, ...] = (
    "{channel}",
    "{game}",
    "{date}",
    "{time}",
    "{id}",
    "{title}",
    "{start}",
    "{end}",
)
DEFAULT_DOWNLOAD_FILE_NAME = "{date}_{id}_{game}.mp4"


def build_default_preference_values() -> dict:
    return {
        "version": PREFERENCES_SCHEMA_VERSION,
        "app_check_for_updates": True,
        "app_show_donation_button": True,
        "search_channel_name": None,
        "search_favourite_channels": [],
        "search_video_type": DEFAULT_SEARCH_VIDEO_TYPE,
        "search_load_limit": 10,
        "search_load_last_days": 10,
        "search_on_startup": False,
        "download_temp_folder": str(get_default_download_temp_folder()),
        "download_folder": str(get_default_download_folder()),
        "download_file_name": DEFAULT_DOWNLOAD_FILE_NAME,
        "download_subfolders_for_fav": False,
        "download_remove_completed": False,
        "download_disable_conversion": False,
        "misc_use_external_player": False,
        "misc_external_player": None,
        "theme": DEFAULT_THEME,
    }
