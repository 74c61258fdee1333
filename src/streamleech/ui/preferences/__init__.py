"""Preferences page: editing session, its collaborators and the view."""

from .command_gate import CommandGate
from .draft_state import DraftAbsent, DraftPresent, DraftStateManager
from .favourites import FavouriteChannelRegistry
from .ports import FileFilter
from .selection_bridge import ExternalSelectionBridge
from .session import MenuCommand, PreferencesSession, SessionState

__all__ = [
    "CommandGate",
    "DraftAbsent",
    "DraftPresent",
    "DraftStateManager",
    "ExternalSelectionBridge",
    "FavouriteChannelRegistry",
    "FileFilter",
    "MenuCommand",
    "PreferencesSession",
    "SessionState",
]
