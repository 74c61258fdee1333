from __future__ import annotations

from ...app_settings.preferences import Preferences
from .ports import NotificationServiceProtocol


def find_favourite(preferences: Preferences, channel: str) -> str | None:
    key = channel.casefold()
    for entry in preferences.search_favourite_channels:
        if entry.casefold() == key:
            return entry
    return None


class FavouriteChannelRegistry:
    """Add/remove over a draft's favourite channels.

    Matching is case-insensitive and the first stored spelling is kept, so
    ``"Foo"`` followed by ``"FOO"`` leaves a single ``"Foo"`` entry.
    """

    def __init__(self, notification_service: NotificationServiceProtocol) -> None:
        self._notifications = notification_service

    def add_favourite(self, draft: Preferences) -> None:
        current_channel = draft.search_channel_name
        if not current_channel or not current_channel.strip():
            return
        existing = find_favourite(draft, current_channel)
        if existing is not None:
            draft.search_channel_name = existing
        else:
            draft.search_favourite_channels.append(current_channel)
        self._notifications.show_notification(f"'{current_channel}' added!")

    def remove_favourite(self, draft: Preferences) -> None:
        current_channel = draft.search_channel_name
        if not current_channel or not current_channel.strip():
            return
        existing = find_favourite(draft, current_channel)
        if existing is None:
            return
        draft.search_favourite_channels.remove(existing)
        remaining = draft.search_favourite_channels
        draft.search_channel_name = remaining[0] if remaining else None
        self._notifications.show_notification(f"'{current_channel}' removed!")

    @staticmethod
    def open_channel_dropdown(draft: Preferences) -> None:
        draft.search_channel_name = ""
