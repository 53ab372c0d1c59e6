import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from pyglean import cli
from pyglean.core import config as config_module

from tests.helpers import clean_env, write_config


class TestCli(unittest.TestCase):

    def setUp(self):
        self.runner = CliRunner()
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp_dir.cleanup)
        self.user_config = Path(self.tmp_dir.name) / "user" / "config.toml"
        user_patch = patch.object(config_module, "USER_CONFIG_PATH", self.user_config)
        user_patch.start()
        self.addCleanup(user_patch.stop)
        env_patch = clean_env()
        env_patch.start()
        self.addCleanup(env_patch.stop)

    def test_check_valid_config_as_json(self):
        path = write_config(self.tmp_dir.name, 'application_id = "org.mozilla.test-app"\n')
        result = self.runner.invoke(cli.main, ["check", "--config", str(path), "--json"])
        self.assertEqual(result.exit_code, 0, result.output)
        payload = json.loads(result.output)
        self.assertEqual(payload["sanitized_application_id"], "org-mozilla-test-app")
        self.assertEqual(payload["errors"], [])

    def test_check_invalid_config_exits_with_error(self):
        path = write_config(self.tmp_dir.name, 'server_endpoint = "glean://wrong.protocol"\n')
        result = self.runner.invoke(cli.main, ["check", "--config", str(path), "--md"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("## Errors", result.output)

    def test_check_table_output(self):
        path = write_config(self.tmp_dir.name, 'application_id = "org-mozilla-test-app"\n')
        result = self.runner.invoke(cli.main, ["check", "--config", str(path)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Validator Summary", result.output)

    def test_sanitize(self):
        result = self.runner.invoke(cli.main, ["sanitize", "org.mozilla..test---app", "Org.Example"])
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output.splitlines(), ["org-mozilla-test-app", "org-example"])

    def test_url(self):
        self.assertEqual(self.runner.invoke(cli.main, ["url", "https://localhost:3000/"]).exit_code, 0)
        self.assertEqual(self.runner.invoke(cli.main, ["url", "http://"]).exit_code, 1)

    def test_header(self):
        self.assertEqual(self.runner.invoke(cli.main, ["header", "-also-valid-value"]).exit_code, 0)
        self.assertEqual(self.runner.invoke(cli.main, ["header", "invalid_value"]).exit_code, 1)
        self.assertEqual(
            self.runner.invoke(cli.main, ["header", "a-value-longer-than-twenty", "--max-length", "30"]).exit_code,
            0,
        )

    def test_aliases(self):
        self.assertEqual(self.runner.invoke(cli.main, ["s", "A.B"]).output.strip(), "a-b")
        path = write_config(self.tmp_dir.name, 'application_id = "org-mozilla-test-app"\n')
        self.assertEqual(self.runner.invoke(cli.main, ["c", "--config", str(path), "--json"]).exit_code, 0)

    def test_header_that_looks_like_markup(self):
        result = self.runner.invoke(cli.main, ["header", "[/x]"])
        self.assertIsInstance(result.exception, SystemExit)
        self.assertEqual(result.exit_code, 1)
        self.assertIn("[/x]", result.output)

    def test_check_with_markup_in_config_values(self):
        path = write_config(self.tmp_dir.name, (
            'application_id = "org-mozilla-test-app"\n'
            "[debug]\n"
            'debug_view_tag = "[/red]"\n'
        ))
        result = self.runner.invoke(cli.main, ["check", "--config", str(path)])
        self.assertIsInstance(result.exception, SystemExit)
        self.assertEqual(result.exit_code, 1)
        self.assertIn("[/red]", result.output)

    def test_config_set_and_get(self):
        with patch("pathlib.Path.cwd", return_value=Path(self.tmp_dir.name)):
            result = self.runner.invoke(cli.main, ["config", "set", "debug.debug_view_tag", "my-tag"])
            self.assertEqual(result.exit_code, 0, result.output)
            self.assertTrue(self.user_config.exists())

            result = self.runner.invoke(cli.main, ["config", "get", "debug.debug_view_tag"])
        self.assertEqual(json.loads(result.output), "my-tag")

    def test_config_get_requires_key(self):
        result = self.runner.invoke(cli.main, ["config", "get"])
        self.assertEqual(result.exit_code, 1)


if __name__ == '__main__':
    unittest.main()
