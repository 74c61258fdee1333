from __future__ import annotations

import os
import sys
from pathlib import Path

APP_DIR_NAME = "streamleech"


def _app_data_dir() -> Path:
    override = os.environ.get("STREAMLEECH_HOME")
    if override:
        return Path(override)
    appdata = os.environ.get("APPDATA")
    if appdata:
        return Path(appdata) / APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME
    return Path.home() / ".local" / "share" / APP_DIR_NAME


def get_preferences_file_path() -> Path:
    return _app_data_dir() / "preferences.json"


def get_debug_logs_file_path() -> Path:
    return _app_data_dir() / "debug_logs.log"


def get_crash_logs_file_path() -> Path:
    return _app_data_dir() / "crash_tracebacks.log"


def get_default_download_folder() -> Path:
    return Path.home() / "Downloads" / "StreamLeech"


def get_default_download_temp_folder() -> Path:
    return _app_data_dir() / "temp"
