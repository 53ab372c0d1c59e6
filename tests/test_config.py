import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from pyglean.core import config as config_module
from pyglean.core.config import Config
from pyglean.utils.types import UNDEFINED

from tests.helpers import clean_env, write_config


class TestConfig(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp_dir.cleanup)
        self.user_config = Path(self.tmp_dir.name) / "user" / "config.toml"
        user_patch = patch.object(config_module, "USER_CONFIG_PATH", self.user_config)
        user_patch.start()
        self.addCleanup(user_patch.stop)
        env_patch = clean_env()
        env_patch.start()
        self.addCleanup(env_patch.stop)

    def test_defaults(self):
        config = Config(config_path=write_config(self.tmp_dir.name, ""))
        self.assertEqual(config.get("server_endpoint"), "https://incoming.telemetry.mozilla.org")
        self.assertEqual(config.get("validation.header_max_length"), 20)
        self.assertFalse(config.get("debug.log_pings"))
        self.assertIs(config.get("application_id", UNDEFINED), UNDEFINED)
        self.assertFalse(config.has("application_id"))

    def test_defaults_are_not_shared(self):
        first = Config(config_path=write_config(self.tmp_dir.name, ""))
        first.set("debug.log_pings", True)
        second = Config(config_path=write_config(self.tmp_dir.name, ""))
        self.assertFalse(second.get("debug.log_pings"))

    def test_file_values_are_merged(self):
        path = write_config(self.tmp_dir.name, (
            'application_id = "org.mozilla.test-app"\n'
            "[debug]\n"
            'debug_view_tag = "my-tag"\n'
        ))
        config = Config(config_path=path)
        self.assertEqual(config.get("application_id"), "org.mozilla.test-app")
        self.assertEqual(config.get("debug.debug_view_tag"), "my-tag")
        self.assertFalse(config.get("debug.log_pings"))
        self.assertEqual(config.loaded_files, [str(path)])

    def test_invalid_file_is_skipped(self):
        path = write_config(self.tmp_dir.name, "this is = = not toml")
        with patch("sys.stderr") as stderr:
            config = Config(config_path=path)
        self.assertTrue(stderr.write.called)
        self.assertEqual(config.loaded_files, [])
        self.assertEqual(config.get("max_events"), 1)

    def test_project_config_is_found_in_cwd(self):
        write_config(self.tmp_dir.name, 'channel = "nightly"\n')
        with patch("pathlib.Path.cwd", return_value=Path(self.tmp_dir.name)):
            config = Config()
        self.assertEqual(config.get("channel"), "nightly")

    def test_env_overrides(self):
        path = write_config(self.tmp_dir.name, 'server_endpoint = "https://from.file"\n')
        overrides = {
            "PYGLEAN_SERVER_ENDPOINT": "https://from.env",
            "PYGLEAN_LOG_PINGS": "yes",
            "PYGLEAN_MAX_EVENTS": "500",
            "PYGLEAN_SOURCE_TAGS": "automation, perf",
        }
        with patch.dict(os.environ, overrides):
            config = Config(config_path=path)
        self.assertEqual(config.get("server_endpoint"), "https://from.env")
        self.assertIs(config.get("debug.log_pings"), True)
        self.assertEqual(config.get("max_events"), 500)
        self.assertEqual(config.get("debug.source_tags"), ["automation", "perf"])

    def test_env_invalid_integer_is_kept_as_string(self):
        path = write_config(self.tmp_dir.name, "")
        with patch.dict(os.environ, {"PYGLEAN_MAX_EVENTS": "lots"}), patch("sys.stderr"):
            config = Config(config_path=path)
        self.assertEqual(config.get("max_events"), "lots")

    def test_validator_selection(self):
        config = Config(config_path=write_config(self.tmp_dir.name, 'disable_validators = ["MaxEvents"]\n'))
        self.assertFalse(config.is_validator_enabled("MaxEvents"))
        self.assertTrue(config.is_validator_enabled("ServerEndpoint"))

        config.set("enable_validators", ["ServerEndpoint"])
        self.assertTrue(config.is_validator_enabled("ServerEndpoint"))
        self.assertFalse(config.is_validator_enabled("ApplicationId"))

    def test_save_user_config(self):
        config = Config(config_path=write_config(self.tmp_dir.name, ""))
        config.set("application_id", "org.example.app")
        config.save_user_config()

        self.assertTrue(self.user_config.exists())
        reloaded = Config(config_path=self.user_config)
        self.assertEqual(reloaded.get("application_id"), "org.example.app")
        self.assertNotIn("server_endpoint", self.user_config.read_text(encoding="utf-8"))


if __name__ == '__main__':
    unittest.main()
