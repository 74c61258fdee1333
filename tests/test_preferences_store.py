import json
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from streamleech.app_settings import AVAILABLE_THEMES, Preferences, PreferencesStore


class PreferencesStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "nested" / "preferences.json"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_missing_file_gives_defaults(self) -> None:
        store = PreferencesStore(self.path)
        self.assertEqual(store.current_preferences, Preferences.default())
        self.assertFalse(self.path.exists())

    def test_corrupt_file_gives_defaults(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertLogs("streamleech", level="ERROR"):
            prefs = PreferencesStore(self.path).current_preferences
        self.assertEqual(prefs, Preferences.default())

    def test_non_object_file_gives_defaults(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text("[1, 2]", encoding="utf-8")
        self.assertEqual(PreferencesStore(self.path).current_preferences, Preferences.default())

    def test_save_persists_and_reloads(self) -> None:
        store = PreferencesStore(self.path)
        draft = store.current_preferences.clone()
        draft.search_channel_name = "somebody"
        draft.search_favourite_channels = ["somebody", "other"]
        store.save(draft)

        on_disk = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual(on_disk["search_channel_name"], "somebody")
        self.assertEqual(PreferencesStore(self.path).current_preferences, draft)
        self.assertEqual(list(self.path.parent.glob("*.tmp")), [])

    def test_save_keeps_private_copy_and_emits(self) -> None:
        store = PreferencesStore(self.path)
        received = []
        store.preferencesSaved.connect(received.append)
        draft = store.current_preferences.clone()
        draft.search_favourite_channels.append("first")
        store.save(draft)

        draft.search_favourite_channels.append("second")
        self.assertEqual(store.current_preferences.search_favourite_channels, ["first"])
        self.assertEqual(len(received), 1)
        self.assertIs(received[0], store.current_preferences)

    def test_reload_reads_external_edit(self) -> None:
        store = PreferencesStore(self.path)
        store.save(store.current_preferences.clone())
        payload = json.loads(self.path.read_text(encoding="utf-8"))
        payload["theme"] = "Light"
        self.path.write_text(json.dumps(payload), encoding="utf-8")
        self.assertEqual(store.current_preferences.theme, "Dark")
        self.assertEqual(store.reload().theme, "Light")

    def test_catalogue_and_defaults(self) -> None:
        store = PreferencesStore(self.path)
        self.assertEqual(store.available_themes, AVAILABLE_THEMES)
        self.assertEqual(store.create_default(), Preferences.default())
        self.assertIsNot(store.create_default(), store.create_default())


if __name__ == "__main__":
    unittest.main()
