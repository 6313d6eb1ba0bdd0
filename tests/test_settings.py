"""Unit tests for settings loading."""

import json
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from lineedit.settings import (
    CONFIG_DIR_ENV,
    Settings,
    SettingsStore,
    validate_setting,
)


class TestSettingsStore(unittest.TestCase):
    """Test settings file handling."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.store = SettingsStore(config_dir=Path(self.temp_dir))

    def tearDown(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _write(self, content):
        with open(self.store.settings_file, 'w', encoding='utf-8') as f:
            f.write(content)

    def test_missing_file_gives_defaults(self):
        self.assertEqual(self.store.load(), Settings())

    def test_load_valid_settings(self):
        self._write(json.dumps({
            "initial_capacity": 16,
            "encoding": "latin-1",
            "atomic_save": False,
        }))
        settings = self.store.load()
        self.assertEqual(settings.initial_capacity, 16)
        self.assertEqual(settings.encoding, "latin-1")
        self.assertFalse(settings.atomic_save)

    def test_corrupted_file_gives_defaults(self):
        self._write("{ not json")
        with self.assertLogs('lineedit.settings', level='WARNING'):
            settings = self.store.load()
        self.assertEqual(settings, Settings())

    def test_non_dict_file_gives_defaults(self):
        self._write("[1, 2, 3]")
        with self.assertLogs('lineedit.settings', level='WARNING'):
            self.assertEqual(self.store.load(), Settings())

    def test_invalid_value_falls_back_per_key(self):
        self._write(json.dumps({"initial_capacity": 0, "encoding": "latin-1"}))
        with self.assertLogs('lineedit.settings', level='WARNING'):
            settings = self.store.load()
        self.assertEqual(settings.initial_capacity, Settings().initial_capacity)
        self.assertEqual(settings.encoding, "latin-1")

    def test_multibyte_encoding_falls_back_to_default(self):
        self._write(json.dumps({"encoding": "utf-16"}))
        with self.assertLogs('lineedit.settings', level='WARNING'):
            settings = self.store.load()
        self.assertEqual(settings.encoding, Settings().encoding)

    def test_unknown_key_ignored(self):
        self._write(json.dumps({"theme": "dark"}))
        with self.assertLogs('lineedit.settings', level='WARNING'):
            self.assertEqual(self.store.load(), Settings())

    def test_config_dir_from_environment(self):
        with patch.dict(os.environ, {CONFIG_DIR_ENV: self.temp_dir}):
            store = SettingsStore()
        self.assertEqual(store.settings_file, Path(self.temp_dir) / "settings.json")

    def test_default_config_dir_uses_platformdirs(self):
        env = {k: v for k, v in os.environ.items() if k != CONFIG_DIR_ENV}
        with patch.dict(os.environ, env, clear=True):
            with patch('lineedit.settings.platformdirs.user_config_dir',
                       return_value=self.temp_dir) as mock_dir:
                store = SettingsStore()
        mock_dir.assert_called_once_with("lineedit")
        self.assertEqual(store.settings_file.parent, Path(self.temp_dir))


class TestValidateSetting(unittest.TestCase):

    def test_capacity(self):
        self.assertTrue(validate_setting('initial_capacity', 1))
        self.assertFalse(validate_setting('initial_capacity', 0))
        self.assertFalse(validate_setting('initial_capacity', True))
        self.assertFalse(validate_setting('initial_capacity', "256"))

    def test_encoding(self):
        self.assertTrue(validate_setting('encoding', 'utf-8'))
        self.assertFalse(validate_setting('encoding', 'klingon'))
        self.assertFalse(validate_setting('encoding', 8))

    def test_encoding_must_keep_ascii_single_byte(self):
        self.assertTrue(validate_setting('encoding', 'latin-1'))
        self.assertTrue(validate_setting('encoding', 'cp1252'))
        self.assertFalse(validate_setting('encoding', 'utf-16'))
        self.assertFalse(validate_setting('encoding', 'utf-32'))
        self.assertFalse(validate_setting('encoding', 'hex'))

    def test_atomic_save(self):
        self.assertTrue(validate_setting('atomic_save', False))
        self.assertFalse(validate_setting('atomic_save', 'yes'))

    def test_unknown_key(self):
        self.assertFalse(validate_setting('colour', 'red'))


if __name__ == '__main__':
    unittest.main()
