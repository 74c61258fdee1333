import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from streamleech.app_settings import Preferences
from streamleech.ui.preferences import DraftAbsent, DraftPresent, DraftStateManager


class _StoreStub:
    def __init__(self) -> None:
        self.committed = Preferences(download_temp_folder="/tmp/t", download_folder="/tmp/d")
        self.reads = 0

    @property
    def current_preferences(self) -> Preferences:
        self.reads += 1
        return self.committed


class DraftStateManagerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = _StoreStub()
        self.changes: list = []
        self.drafts = DraftStateManager(self.store, on_changed=self.changes.append)

    def test_starts_absent(self) -> None:
        self.assertIsInstance(self.drafts.state, DraftAbsent)
        self.assertFalse(self.drafts.has_draft)
        self.assertEqual(self.changes, [])

    def test_draft_created_lazily_once(self) -> None:
        first = self.drafts.get_draft()
        second = self.drafts.get_draft()
        self.assertIs(first, second)
        self.assertEqual(self.store.reads, 1)
        self.assertEqual(first, self.store.committed)
        self.assertIsNot(first, self.store.committed)
        self.assertEqual(self.changes, [first])
        self.assertEqual(self.drafts.state, DraftPresent(first, 1))

    def test_edits_do_not_reach_committed_record(self) -> None:
        draft = self.drafts.get_draft()
        draft.search_favourite_channels.append("someone")
        draft.download_folder = "/other"
        self.assertEqual(self.store.committed.search_favourite_channels, [])
        self.assertEqual(self.store.committed.download_folder, "/tmp/d")

    def test_reset_is_idempotent_and_next_draft_is_fresh(self) -> None:
        old = self.drafts.get_draft()
        old.search_channel_name = "edited"
        self.drafts.reset_draft()
        self.drafts.reset_draft()
        self.assertEqual(self.changes, [old, None])

        fresh = self.drafts.get_draft()
        self.assertIsNot(fresh, old)
        self.assertIsNone(fresh.search_channel_name)
        self.assertEqual(self.drafts.generation, 2)


if __name__ == "__main__":
    unittest.main()
