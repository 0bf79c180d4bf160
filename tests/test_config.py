"""Tests for settings loading.

Covers: pomo.core.config
"""

import json
import shutil
import tempfile
import unittest
from pathlib import Path


# ──────────────────────────────────────────────────────────────────────────
# config.py tests
# ──────────────────────────────────────────────────────────────────────────

class TestConfig(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.path = Path(self.tmpdir) / "config.json"

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_missing_file_gives_defaults(self):
        from pomo.core.config import load_config, PomoConfig
        self.assertEqual(load_config(self.path), PomoConfig())

    def test_save_and_load_roundtrip(self):
        from pomo.core.config import load_config, save_config, PomoConfig
        config = PomoConfig(default_timer_name="Focus", log_level="DEBUG", console_log=True)
        save_config(config, self.path)
        self.assertEqual(load_config(self.path), config)

    def test_partial_file_defaults_missing_keys(self):
        from pomo.core.config import load_config
        with open(self.path, "w") as f:
            json.dump({"default_timer_name": "Focus", "console_log": "yes", "extra": 1}, f)
        with self.assertLogs("pomo", level="WARNING") as logs:
            config = load_config(self.path)
        self.assertEqual(config.default_timer_name, "Focus")
        self.assertFalse(config.console_log)
        self.assertIn("console_log", logs.output[0])

    def test_corrupted_file_gives_defaults(self):
        from pomo.core.config import load_config, PomoConfig
        self.path.write_text("{invalid json!!")
        self.assertEqual(load_config(self.path), PomoConfig())

    def test_non_object_file_gives_defaults(self):
        from pomo.core.config import load_config, PomoConfig
        self.path.write_text("[1, 2, 3]")
        self.assertEqual(load_config(self.path), PomoConfig())


if __name__ == "__main__":
    unittest.main()
