from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Union

from ...app_settings.preferences import Preferences
from ...logging_utils import get_logger
from .ports import PreferencesStoreProtocol

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class DraftAbsent:
    pass


@dataclass(frozen=True)
class DraftPresent:
    preferences: Preferences
    generation: int


DraftState = Union[DraftAbsent, DraftPresent]


class DraftStateManager:
    def __init__(
        self,
        store: PreferencesStoreProtocol,
        on_changed: Callable[[Preferences | None], None] | None = None,
    ) -> None:
        self._store = store
        self._on_changed = on_changed
        self._state: DraftState = DraftAbsent()
        self._generation = 0

    @property
    def state(self) -> DraftState:
        return self._state

    @property
    def has_draft(self) -> bool:
        return isinstance(self._state, DraftPresent)

    @property
    def generation(self) -> int:
        return self._generation

    def get_draft(self) -> Preferences:
        state = self._state
        if isinstance(state, DraftPresent):
            return state.preferences
        draft = self._store.current_preferences.clone()
        self._generation += 1
        self._state = DraftPresent(draft, self._generation)
        LOGGER.debug("Draft %s created from committed preferences", self._generation)
        self._notify(draft)
        return draft

    def reset_draft(self) -> None:
        if isinstance(self._state, DraftAbsent):
            return
        LOGGER.debug("Draft %s discarded", self._generation)
        self._state = DraftAbsent()
        self._notify(None)

    def _notify(self, draft: Preferences | None) -> None:
        if self._on_changed is not None:
            self._on_changed(draft)
