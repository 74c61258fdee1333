"""Preferences model, defaults and persistence."""

from .coercion import (
    coerce_bool,
    coerce_enum,
    coerce_int_clamped,
    dedupe_casefold,
    migrate_preferences,
    normalize_field_value,
)
from .defaults import AVAILABLE_THEMES, DEFAULT_THEME, build_default_preference_values
from .paths import get_crash_logs_file_path, get_debug_logs_file_path, get_preferences_file_path
from .preferences import Preferences
from .store import PreferencesStore

__all__ = [
    "AVAILABLE_THEMES",
    "DEFAULT_THEME",
    "Preferences",
    "PreferencesStore",
    "build_default_preference_values",
    "coerce_bool",
    "coerce_enum",
    "coerce_int_clamped",
    "dedupe_casefold",
    "migrate_preferences",
    "normalize_field_value",
    "get_crash_logs_file_path",
    "get_debug_logs_file_path",
    "get_preferences_file_path",
]
