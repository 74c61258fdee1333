from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Callable, Sequence

from PySide6.QtCore import QObject, Signal

from ...app_settings.coercion import normalize_field_value
from ...app_settings.preferences import Preferences
from ...logging_utils import get_logger
from .command_gate import CommandGate
from .draft_state import DraftStateManager
from .favourites import FavouriteChannelRegistry
from .ports import (
    DialogServiceProtocol,
    NotificationServiceProtocol,
    PreferencesStoreProtocol,
    ThemeServiceProtocol,
)
from .selection_bridge import ExternalSelectionBridge

LOGGER = get_logger(__name__)

CURRENT_PREFERENCES_PROPERTY = "current_preferences"
INVALID_PREFERENCES_MESSAGE = "Invalid Preferences!"
UNDO_CONFIRM_MESSAGE = "Undo current changes and reload last saved preferences?"
DEFAULTS_CONFIRM_MESSAGE = "Load default preferences?"
SAVED_MESSAGE = "Preferences saved"

_PREFERENCE_FIELDS = frozenset(f.name for f in fields(Preferences))


class SessionState(str, Enum):
    NO_DRAFT = "no_draft"
    DRAFT_VALID = "draft_valid"
    DRAFT_INVALID = "draft_invalid"


@dataclass(frozen=True)
class MenuCommand:
    label: str
    icon_name: str
    callback: Callable[[], None]


class PreferencesSession(QObject):
    """Editing session over a lazily created draft of the committed preferences.

    Every user command goes through one ``CommandGate``. Save validates the
    draft before committing; Undo and Defaults wait for a confirmation and
    hold a gate reservation while the question is open, so a second
    Undo/Defaults cannot stack behind the first.
    """

    draftChanged = Signal(object)
    fieldChanged = Signal(str)
    errorsChanged = Signal(object)
    stateChanged = Signal(str)
    channelDropDownOpenChanged = Signal(bool)

    def __init__(
        self,
        store: PreferencesStoreProtocol,
        theme_service: ThemeServiceProtocol,
        notification_service: NotificationServiceProtocol,
        dialog_service: DialogServiceProtocol,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self._theme_service = theme_service
        self._notifications = notification_service
        self._dialog_service = dialog_service
        self._gate = CommandGate(dialog_service)
        self._drafts = DraftStateManager(store, on_changed=self._on_draft_changed)
        self._favourites = FavouriteChannelRegistry(notification_service)
        self._selection = ExternalSelectionBridge(
            self._gate,
            self._drafts,
            dialog_service,
            on_field_changed=self.fieldChanged.emit,
        )
        self._state = SessionState.NO_DRAFT
        self._errors: dict[str, list[str]] = {}
        self._draft_errors: dict[str, list[str]] = {}
        self._is_channel_dropdown_open = False
        self.scroll_position = 0.0

    # -- state ------------------------------------------------------------

    @property
    def gate(self) -> CommandGate:
        return self._gate

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def has_draft(self) -> bool:
        return self._drafts.has_draft

    @property
    def current_preferences(self) -> Preferences:
        return self._drafts.get_draft()

    @property
    def available_themes(self) -> Sequence[str]:
        return self._store.available_themes

    @property
    def errors(self) -> dict[str, list[str]]:
        return {key: list(values) for key, values in self._errors.items()}

    @property
    def draft_errors(self) -> dict[str, list[str]]:
        return {key: list(values) for key, values in self._draft_errors.items()}

    @property
    def has_errors(self) -> bool:
        return bool(self._errors)

    @property
    def is_channel_dropdown_open(self) -> bool:
        return self._is_channel_dropdown_open

    @is_channel_dropdown_open.setter
    def is_channel_dropdown_open(self, value: bool) -> None:
        value = bool(value)
        if value == self._is_channel_dropdown_open:
            return
        self._is_channel_dropdown_open = value
        self.channelDropDownOpenChanged.emit(value)

    # -- field editing ----------------------------------------------------

    def update_field(self, name: str, value: Any) -> None:
        def _update() -> None:
            if name not in _PREFERENCE_FIELDS:
                raise AttributeError(f"Unknown preference '{name}'")
            setattr(self._drafts.get_draft(), name, normalize_field_value(name, value))
            self.fieldChanged.emit(name)

        self._gate.run_exclusive(_update, name=f"update_{name}")

    # -- favourites -------------------------------------------------------

    def add_favourite_channel(self) -> None:
        def _add() -> None:
            self._favourites.add_favourite(self._drafts.get_draft())
            self.fieldChanged.emit("search_favourite_channels")
            self.fieldChanged.emit("search_channel_name")

        self._gate.run_exclusive(_add, name="add_favourite_channel")

    def remove_favourite_channel(self) -> None:
        def _remove() -> None:
            self._favourites.remove_favourite(self._drafts.get_draft())
            self.fieldChanged.emit("search_favourite_channels")
            self.fieldChanged.emit("search_channel_name")

        self._gate.run_exclusive(_remove, name="remove_favourite_channel")

    def open_dropdown(self) -> None:
        def _open() -> None:
            self._favourites.open_channel_dropdown(self._drafts.get_draft())
            self.fieldChanged.emit("search_channel_name")
            self.is_channel_dropdown_open = True

        self._gate.run_exclusive(_open, name="open_dropdown")

    # -- external selections ----------------------------------------------

    def choose_download_temp_folder(self) -> None:
        self._selection.choose_download_temp_folder()

    def choose_download_folder(self) -> None:
        self._selection.choose_download_folder()

    def choose_external_player(self) -> None:
        self._selection.choose_external_player()

    def clear_external_player(self) -> None:
        self._selection.clear_external_player()

    # -- lifecycle --------------------------------------------------------

    def save(self) -> bool:
        def _save() -> bool:
            self._dialog_service.set_busy()
            self.validate()
            if self.has_errors:
                LOGGER.info("Save blocked by validation errors: %s", sorted(self._draft_errors))
                return False
            draft = self._drafts.get_draft()
            self._store.save(draft)
            self._drafts.reset_draft()
            self._apply_theme(draft.theme)
            self._notifications.show_notification(SAVED_MESSAGE)
            return True

        return bool(self._gate.run_exclusive(_save, name="save"))

    def undo(self) -> None:
        asked_generation = self._drafts.generation
        self._confirm_then("undo", UNDO_CONFIRM_MESSAGE, "Undo", lambda: self._apply_undo(asked_generation))

    def defaults(self) -> None:
        self._confirm_then("defaults", DEFAULTS_CONFIRM_MESSAGE, "Defaults", self._apply_defaults)

    def on_before_hidden(self) -> None:
        self._gate.run_exclusive(self._drafts.reset_draft, name="on_before_hidden")

    def validate(self, property_name: str | None = None) -> None:
        if property_name and property_name != CURRENT_PREFERENCES_PROPERTY:
            return
        self._draft_errors = self._drafts.get_draft().validate()
        if self._draft_errors:
            self._errors = {CURRENT_PREFERENCES_PROPERTY: [INVALID_PREFERENCES_MESSAGE]}
            self._set_state(SessionState.DRAFT_INVALID)
        else:
            self._errors = {}
            self._set_state(SessionState.DRAFT_VALID)
        self.errorsChanged.emit(self.draft_errors)

    def build_menu(self) -> list[MenuCommand]:
        return [
            MenuCommand("Save", "document-save", self.save),
            MenuCommand("Undo", "edit-undo", self.undo),
            MenuCommand("Default", "preferences-system", self.defaults),
        ]

    # -- internals --------------------------------------------------------

    def _confirm_then(self, name: str, message: str, title: str, apply: Callable[[], None]) -> None:
        if not self._gate.try_reserve(name):
            return

        def _on_answer(confirmed: bool) -> None:
            try:
                if confirmed:
                    self._gate.run_exclusive(apply, name=name)
                else:
                    LOGGER.debug("%s declined", title)
            finally:
                self._gate.release(name)

        try:
            self._dialog_service.ask_confirmation(message, title, _on_answer)
        except Exception as exc:  # noqa: BLE001
            self._gate.release(name)
            LOGGER.exception("Could not ask for '%s' confirmation", name)
            self._gate.report(exc)

    def _apply_undo(self, asked_generation: int) -> None:
        if not self._drafts.has_draft:
            LOGGER.info("Undo confirmed but there is no draft left to discard")
            return
        if self._drafts.generation != asked_generation:
            # The prompt was about a draft that has since been dropped.
            LOGGER.info(
                "Undo confirmed for draft %s, keeping newer draft %s", asked_generation, self._drafts.generation
            )
            return
        self._dialog_service.set_busy()
        self._drafts.reset_draft()

    def _apply_defaults(self) -> None:
        self._dialog_service.set_busy()
        self._store.save(self._store.create_default())
        self._drafts.reset_draft()
        self._apply_theme(self._store.current_preferences.theme)

    def _apply_theme(self, theme_id: str) -> None:
        # The record is already committed; a theme failure is reported on its own.
        try:
            self._theme_service.set_theme(theme_id)
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("Could not apply theme '%s'", theme_id)
            self._gate.report(exc)

    def _on_draft_changed(self, draft: Preferences | None) -> None:
        if draft is None:
            had_errors = bool(self._errors)
            self._errors = {}
            self._draft_errors = {}
            self._set_state(SessionState.NO_DRAFT)
            if had_errors:
                self.errorsChanged.emit({})
        else:
            self._set_state(SessionState.DRAFT_VALID)
        self.draftChanged.emit(draft)

    def _set_state(self, state: SessionState) -> None:
        if state == self._state:
            return
        self._state = state
        self.stateChanged.emit(state.value)
