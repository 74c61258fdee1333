from __future__ import annotations

from typing import Any, Iterable

from .defaults import (
    AVAILABLE_THEMES,
    DEFAULT_THEME,
    PREFERENCES_SCHEMA_VERSION,
    SEARCH_LIMIT_MAX,
    SEARCH_LIMIT_MIN,
    SEARCH_VIDEO_TYPES,
    build_default_preference_values,
)


def coerce_bool(value, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off", ""}:
            return False
    return default


def coerce_enum(value: object, allowed: Iterable[str], default: str) -> str:
    text = str(value or "").strip().lower()
    return text if text in set(allowed) else default


def coerce_int_clamped(value: object, default: int, min_value: int, max_value: int) -> int:
    try:
        num = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        num = default
    return max(min_value, min(max_value, num))


def coerce_optional_text(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def coerce_theme(value: object, default: str = DEFAULT_THEME) -> str:
    text = str(value or "").strip()
    for theme_id in AVAILABLE_THEMES:
        if text.lower() == theme_id.lower():
            return theme_id
    return default


def dedupe_casefold(values: Any) -> list[str]:
    """Drop blanks and case-insensitive repeats, first spelling wins."""
    if not isinstance(values, (list, tuple)):
        return []
    seen: set[str] = set()
    out: list[str] = []
    for raw in values:
        text = str(raw or "").strip()
        if not text:
            continue
        key = text.casefold()
        if key in seen:
            continue
        seen.add(key)
        out.append(text)
    return out


_BOOL_FIELDS = frozenset(
    {
        "app_check_for_updates",
        "app_show_donation_button",
        "search_on_startup",
        "download_subfolders_for_fav",
        "download_remove_completed",
        "download_disable_conversion",
        "misc_use_external_player",
    }
)
_INT_FIELDS = frozenset({"search_load_limit", "search_load_last_days"})


def normalize_field_value(name: str, value: object) -> object:
    """Bring a single edited value into the field's shape.

    Out-of-range or non-numeric counts and unknown themes are kept as given so
    validation can report them; favourites are always de-duplicated.
    """
    if name == "search_favourite_channels":
        if not isinstance(value, (list, tuple)):
            raise TypeError(f"Favourite channels must be a list, got {type(value).__name__}")
        return dedupe_casefold(value)
    if name in _BOOL_FIELDS:
        return coerce_bool(value, False)
    if name in _INT_FIELDS:
        if isinstance(value, bool):
            return value
        try:
            return int(str(value).strip())
        except (TypeError, ValueError):
            return value
    if name == "theme":
        return coerce_theme(value, default="") or str(value or "").strip()
    return value


def migrate_preferences(payload: dict) -> dict:
    current = dict(payload) if isinstance(payload, dict) else {}
    defaults = build_default_preference_values()
    schema = coerce_int_clamped(current.get("version", 1), 1, 1, 999)
    if schema < 2:
        # v1 stored favourites as a comma separated string and the player under a different key
        raw_favourites = current.get("search_favourite_channels")
        if isinstance(raw_favourites, str):
            current["search_favourite_channels"] = raw_favourites.split(",")
        if "misc_external_player" not in current and "external_player" in current:
            current["misc_external_player"] = current.pop("external_player")

    for key, value in defaults.items():
        current.setdefault(key, value)

    current["app_check_for_updates"] = coerce_bool(current.get("app_check_for_updates"), True)
    current["app_show_donation_button"] = coerce_bool(current.get("app_show_donation_button"), True)
    current["search_channel_name"] = coerce_optional_text(current.get("search_channel_name"))
    current["search_favourite_channels"] = dedupe_casefold(current.get("search_favourite_channels"))
    current["search_video_type"] = coerce_enum(
        current.get("search_video_type"),
        SEARCH_VIDEO_TYPES,
        defaults["search_video_type"],
    )
    current["search_load_limit"] = coerce_int_clamped(
        current.get("search_load_limit"), defaults["search_load_limit"], SEARCH_LIMIT_MIN, SEARCH_LIMIT_MAX
    )
    current["search_load_last_days"] = coerce_int_clamped(
        current.get("search_load_last_days"), defaults["search_load_last_days"], SEARCH_LIMIT_MIN, SEARCH_LIMIT_MAX
    )
    current["search_on_startup"] = coerce_bool(current.get("search_on_startup"), False)
    current["download_temp_folder"] = str(current.get("download_temp_folder") or "").strip()
    current["download_folder"] = str(current.get("download_folder") or "").strip()
    current["download_file_name"] = str(current.get("download_file_name") or "").strip()
    current["download_subfolders_for_fav"] = coerce_bool(current.get("download_subfolders_for_fav"), False)
    current["download_remove_completed"] = coerce_bool(current.get("download_remove_completed"), False)
    current["download_disable_conversion"] = coerce_bool(current.get("download_disable_conversion"), False)
    current["misc_use_external_player"] = coerce_bool(current.get("misc_use_external_player"), False)
    current["misc_external_player"] = coerce_optional_text(current.get("misc_external_player"))
    current["theme"] = coerce_theme(current.get("theme"))
    current.pop("external_player", None)
    current["version"] = PREFERENCES_SCHEMA_VERSION
    return current
