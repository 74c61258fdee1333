import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from streamleech.app_settings import dedupe_casefold, migrate_preferences, normalize_field_value


class PreferencesMigrationTests(unittest.TestCase):
    def test_migrates_v1_and_sets_schema(self) -> None:
        source = {
            "version": 1,
            "search_favourite_channels": "alpha, Beta ,ALPHA,,gamma",
            "external_player": "C:/Players/vlc.exe",
        }
        migrated = migrate_preferences(source)
        self.assertEqual(migrated["version"], 2)
        self.assertEqual(migrated["search_favourite_channels"], ["alpha", "Beta", "gamma"])
        self.assertEqual(migrated["misc_external_player"], "C:/Players/vlc.exe")
        self.assertNotIn("external_player", migrated)
        self.assertIn("download_file_name", migrated)

    def test_invalid_values_are_clamped_or_defaulted(self) -> None:
        source = {
            "version": 2,
            "search_load_limit": 5000,
            "search_load_last_days": -3,
            "search_video_type": "weird",
            "theme": "neon",
            "search_on_startup": "yes",
        }
        migrated = migrate_preferences(source)
        self.assertEqual(migrated["search_load_limit"], 999)
        self.assertEqual(migrated["search_load_last_days"], 1)
        self.assertEqual(migrated["search_video_type"], "time")
        self.assertEqual(migrated["theme"], "Dark")
        self.assertTrue(migrated["search_on_startup"])

    def test_blank_channel_becomes_none(self) -> None:
        migrated = migrate_preferences({"version": 2, "search_channel_name": "   "})
        self.assertIsNone(migrated["search_channel_name"])

    def test_unknown_keys_preserved(self) -> None:
        migrated = migrate_preferences({"version": 2, "my_custom_flag": "x"})
        self.assertEqual(migrated["my_custom_flag"], "x")

    def test_source_payload_is_not_mutated(self) -> None:
        source = {"version": 1, "search_favourite_channels": "a,b"}
        migrate_preferences(source)
        self.assertEqual(source, {"version": 1, "search_favourite_channels": "a,b"})


class DedupeCasefoldTests(unittest.TestCase):
    def test_first_spelling_wins(self) -> None:
        self.assertEqual(dedupe_casefold(["Foo", "FOO", "bar", " foo "]), ["Foo", "bar"])

    def test_non_sequence_gives_empty_list(self) -> None:
        self.assertEqual(dedupe_casefold("foo"), [])
        self.assertEqual(dedupe_casefold(None), [])


class NormalizeFieldValueTests(unittest.TestCase):
    def test_favourites_are_deduplicated(self) -> None:
        self.assertEqual(normalize_field_value("search_favourite_channels", ("a", "A", "b")), ["a", "b"])
        with self.assertRaises(TypeError):
            normalize_field_value("search_favourite_channels", "a,b")

    def test_counts_keep_unparseable_values_for_validation(self) -> None:
        self.assertEqual(normalize_field_value("search_load_limit", " 40 "), 40)
        self.assertEqual(normalize_field_value("search_load_limit", 0), 0)
        self.assertEqual(normalize_field_value("search_load_last_days", "abc"), "abc")

    def test_bools_and_themes(self) -> None:
        self.assertTrue(normalize_field_value("search_on_startup", "yes"))
        self.assertEqual(normalize_field_value("theme", " high contrast "), "High Contrast")
        self.assertEqual(normalize_field_value("theme", "Neon"), "Neon")
        self.assertEqual(normalize_field_value("download_folder", "/x"), "/x")


if __name__ == "__main__":
    unittest.main()
