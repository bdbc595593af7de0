"""Tests for preference persistence and value coercion.

Validates defaults, legacy key aliases, and write-through behavior.
Ensures malformed stored payloads self-heal to defaults.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from niftymenu.runtime import config
from niftymenu.runtime.config import (
    CONFIG_KEY,
    DEFAULTS,
    JsonFileStorage,
    MemoryStorage,
    Preferences,
    canonical_key,
    coerce_bool,
)


class PreferencesBehaviorTests(unittest.TestCase):
    def test_defaults_before_any_set(self) -> None:
        prefs = Preferences(MemoryStorage())

        self.assertEqual(prefs.get("arrowStyle"), "arrow")
        self.assertFalse(prefs.get_bool("expose"))
        self.assertFalse(prefs.get_bool("darkMode"))
        self.assertTrue(prefs.get_bool("backgroundImage"))
        self.assertEqual(prefs.get(), DEFAULTS)

    def test_first_load_writes_corrected_record(self) -> None:
        storage = MemoryStorage()

        Preferences(storage).get("darkMode")

        self.assertEqual(storage.writes, 1)
        self.assertEqual(json.loads(storage.items[CONFIG_KEY]), DEFAULTS)

    def test_unknown_key_reads_as_absent(self) -> None:
        prefs = Preferences(MemoryStorage())

        self.assertIsNone(prefs.get("fontSize"))
        self.assertFalse(prefs.get_bool("fontSize"))

    def test_set_unknown_key_is_ignored_and_logged(self) -> None:
        storage = MemoryStorage()
        prefs = Preferences(storage)
        prefs.get()

        with self.assertLogs("niftymenu.runtime.config", level="WARNING"):
            prefs.set("fontSize", 12)

        self.assertEqual(storage.writes, 1)
        self.assertNotIn("fontSize", json.loads(storage.items[CONFIG_KEY]))

    def test_set_persists_across_reload(self) -> None:
        storage = MemoryStorage()
        prefs = Preferences(storage)

        prefs.set("darkMode", 1)
        restarted = Preferences(storage)

        self.assertTrue(restarted.get_bool("darkMode"))
        prefs.reload()
        self.assertTrue(prefs.get_bool("darkMode"))

    def test_each_set_writes_and_update_batches(self) -> None:
        storage = MemoryStorage()
        prefs = Preferences(storage)
        prefs.get()

        prefs.set("darkMode", 1)
        prefs.set("exposeMode", 1)
        self.assertEqual(storage.writes, 3)

        prefs.update({"darkMode": 0, "exposeMode": 0, "arrowStyle": "circle"})
        self.assertEqual(storage.writes, 4)
        self.assertEqual(prefs.get("arrowStyle"), "circle")

    def test_stored_values_win_over_defaults(self) -> None:
        storage = MemoryStorage({CONFIG_KEY: json.dumps({"arrowStyle": "circle", "darkMode": "yes"})})
        prefs = Preferences(storage)

        self.assertEqual(prefs.get("arrowStyle"), "circle")
        self.assertTrue(prefs.get_bool("darkMode"))
        self.assertTrue(prefs.get_bool("backgroundImage"))

    def test_legacy_keys_are_migrated(self) -> None:
        stored = {"bgimage": 0, "expose": 1, "darkmode": "true", "darkMode": 0}
        storage = MemoryStorage({CONFIG_KEY: json.dumps(stored)})
        prefs = Preferences(storage)

        self.assertFalse(prefs.get_bool("backgroundImage"))
        self.assertTrue(prefs.get_bool("exposeMode"))
        self.assertFalse(prefs.get_bool("darkMode"))
        self.assertEqual(sorted(json.loads(storage.items[CONFIG_KEY])), sorted(DEFAULTS))

        prefs.set("expose", 0)
        self.assertFalse(prefs.get_bool("exposeMode"))

    def test_malformed_payload_self_heals(self) -> None:
        for payload in ("{not json", "[1, 2]", "null", '"text"'):
            with self.subTest(payload=payload):
                storage = MemoryStorage({CONFIG_KEY: payload})
                with self.assertLogs("niftymenu.runtime.config", level="WARNING"):
                    prefs = Preferences(storage)
                    self.assertEqual(prefs.get("arrowStyle"), "arrow")
                self.assertEqual(json.loads(storage.items[CONFIG_KEY]), DEFAULTS)

    def test_get_without_key_returns_copy(self) -> None:
        prefs = Preferences(MemoryStorage())

        record = prefs.get()
        record["arrowStyle"] = "circle"

        self.assertEqual(prefs.get("arrowStyle"), "arrow")

    def test_canonical_key(self) -> None:
        self.assertEqual(canonical_key("darkMode"), "darkMode")
        self.assertEqual(canonical_key("bgimage"), "backgroundImage")
        self.assertIsNone(canonical_key("bogus"))


class CoerceBoolTests(unittest.TestCase):
    def test_truthy_values(self) -> None:
        for value in (1, 2, -1, 0.5, True, "1", "2.5", "yes", "Y", " true ", "TRUE", "Yes"):
            with self.subTest(value=value):
                self.assertTrue(coerce_bool(value))

    def test_falsy_values(self) -> None:
        for value in (0, 0.0, False, None, "", "0", "no", "false", "nan", float("nan"), "maybe", "off"):
            with self.subTest(value=value):
                self.assertFalse(coerce_bool(value))


class JsonFileStorageTests(unittest.TestCase):
    def test_round_trip_through_config_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "storage.json"
            with mock.patch("niftymenu.runtime.config.CONFIG_PATH", config_path):
                prefs = Preferences()
                prefs.set("darkMode", 1)

                self.assertTrue(config_path.exists())
                on_disk = json.loads(config_path.read_text(encoding="utf-8"))
                self.assertEqual(json.loads(on_disk[CONFIG_KEY])["darkMode"], 1)
                self.assertTrue(Preferences().get_bool("darkMode"))

    def test_explicit_path_overrides_config_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "custom.json"
            storage = JsonFileStorage(path)

            storage.set_item("a", "1")

            self.assertEqual(storage.path, path)
            self.assertEqual(storage.get_item("a"), "1")
            self.assertIsNone(storage.get_item("b"))

    def test_missing_or_malformed_file_reads_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "storage.json"
            storage = JsonFileStorage(path)
            self.assertIsNone(storage.get_item(CONFIG_KEY))

            path.write_text("{broken", encoding="utf-8")
            self.assertIsNone(storage.get_item(CONFIG_KEY))

            path.write_text(json.dumps({CONFIG_KEY: {"not": "a string"}}), encoding="utf-8")
            self.assertIsNone(storage.get_item(CONFIG_KEY))

    def test_corrupted_file_is_rewritten_with_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "storage.json"
            path.write_text(json.dumps({CONFIG_KEY: "{oops", "other": "kept"}), encoding="utf-8")

            with self.assertLogs("niftymenu.runtime.config", level="WARNING"):
                self.assertEqual(Preferences(JsonFileStorage(path)).get("arrowStyle"), "arrow")

            on_disk = json.loads(path.read_text(encoding="utf-8"))
            self.assertEqual(json.loads(on_disk[CONFIG_KEY]), DEFAULTS)
            self.assertEqual(on_disk["other"], "kept")

    def test_write_failure_is_logged_not_raised(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            storage = JsonFileStorage(Path(tmp))

            with self.assertLogs("niftymenu.runtime.config", level="WARNING"):
                storage.set_item("a", "1")

    def test_default_config_path_lives_under_app_dir(self) -> None:
        self.assertEqual(config.CONFIG_PATH.name, config.STORAGE_FILENAME)
        self.assertIn(config.APP_NAME, str(config.CONFIG_PATH))


if __name__ == "__main__":
    unittest.main()
