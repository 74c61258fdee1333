from __future__ import annotations

from typing import Callable

from ...logging_utils import get_logger
from .command_gate import CommandGate
from .draft_state import DraftStateManager
from .ports import DialogServiceProtocol, FileFilter

LOGGER = get_logger(__name__)

EXECUTABLE_FILTER = FileFilter(name="Executables", extensions=("exe",))


class ExternalSelectionBridge:
    """Routes folder/file picker results into draft fields.

    Requests and their callbacks both run through the command gate.
    """

    def __init__(
        self,
        gate: CommandGate,
        drafts: DraftStateManager,
        dialog_service: DialogServiceProtocol,
        on_field_changed: Callable[[str], None] | None = None,
    ) -> None:
        self._gate = gate
        self._drafts = drafts
        self._dialog_service = dialog_service
        self._on_field_changed = on_field_changed

    def choose_download_temp_folder(self) -> None:
        self._request_folder("download_temp_folder")

    def choose_download_folder(self) -> None:
        self._request_folder("download_folder")

    def choose_external_player(self) -> None:
        def _request() -> None:
            draft = self._drafts.get_draft()
            self._dialog_service.show_file_browser_dialog(
                EXECUTABLE_FILTER,
                draft.misc_external_player or "",
                self._make_callback("misc_external_player"),
            )

        self._gate.run_exclusive(_request, name="choose_external_player")

    def clear_external_player(self) -> None:
        def _clear() -> None:
            self._drafts.get_draft().misc_external_player = None
            self._field_changed("misc_external_player")

        self._gate.run_exclusive(_clear, name="clear_external_player")

    def _request_folder(self, field_name: str) -> None:
        def _request() -> None:
            draft = self._drafts.get_draft()
            self._dialog_service.show_folder_browser_dialog(
                str(getattr(draft, field_name) or ""),
                self._make_callback(field_name),
            )

        self._gate.run_exclusive(_request, name=f"choose_{field_name}")

    def _make_callback(self, field_name: str) -> Callable[[bool, str], None]:
        requested_generation = self._drafts.generation

        def _callback(cancelled: bool, path: str) -> None:
            if cancelled:
                LOGGER.debug("Selection for %s cancelled", field_name)
                return

            def _apply() -> None:
                if self._drafts.generation != requested_generation or not self._drafts.has_draft:
                    LOGGER.info("Draft replaced while choosing %s, applying to current draft", field_name)
                setattr(self._drafts.get_draft(), field_name, path)
                self._field_changed(field_name)

            self._gate.run_exclusive(_apply, name=f"apply_{field_name}")

        return _callback

    def _field_changed(self, field_name: str) -> None:
        if self._on_field_changed is not None:
            self._on_field_changed(field_name)
