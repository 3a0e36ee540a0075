"""Functional tests for the CLI using actual subprocess calls."""

import json
import tempfile
import unittest
from pathlib import Path

from splurge_dotenv_rotator.env_parser import parse

from tests.test_utility import EnvFileHelper, TestUtilities


class TestCLIFunctional(unittest.TestCase):
    """Functional tests for the CLI using actual subprocess calls."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        """Clean up test fixtures."""
        TestUtilities.cleanup_temp_dir(self.temp_dir)

    def test_rotate_default_env_file(self):
        """Test rotating .env in the working directory."""
        env_path, _, old_private = EnvFileHelper.write_env_pair(self.temp_dir)

        result = TestUtilities.run_cli_command(["rotate"], cwd=self.temp_dir)

        self.assertTrue(result["success"])
        self.assertEqual(result["processed_envs"][0]["keys"], ["API_KEY", "DB_PASS"])
        keys_text = (Path(self.temp_dir) / ".env.keys").read_text(encoding="utf-8")
        new_private = parse(keys_text)["DOTENV_PRIVATE_KEY"]
        self.assertNotEqual(new_private, old_private)
        self.assertEqual(
            EnvFileHelper.decrypt_all(env_path.read_text(encoding="utf-8"), new_private),
            EnvFileHelper.PLAINTEXTS,
        )
        self.assertNotIn(new_private, json.dumps(result))

    def test_rotate_dry_run(self):
        """Test --dry-run leaves files untouched."""
        env_path, _, _ = EnvFileHelper.write_env_pair(self.temp_dir)
        before = env_path.read_text(encoding="utf-8")

        result = TestUtilities.run_cli_command(["rotate", "-f", str(env_path), "--dry-run"])

        self.assertTrue(result["success"])
        self.assertEqual(result["written"], [])
        self.assertEqual(env_path.read_text(encoding="utf-8"), before)

    def test_rotate_stdout_carries_new_private_key(self):
        """Test --stdout prints the rewritten env text with its new private key."""
        env_path, _, old_private = EnvFileHelper.write_env_pair(self.temp_dir)
        keys_path = Path(self.temp_dir) / ".env.keys"
        before_env = env_path.read_text(encoding="utf-8")
        before_keys = keys_path.read_text(encoding="utf-8")

        completed = TestUtilities.run_cli(["rotate", "-f", str(env_path), "--stdout"])

        self.assertEqual(completed.returncode, 0)
        printed = parse(completed.stdout)
        new_private = printed["DOTENV_PRIVATE_KEY"]
        self.assertNotEqual(new_private, old_private)
        self.assertEqual(EnvFileHelper.decrypt_all(completed.stdout, new_private), EnvFileHelper.PLAINTEXTS)
        self.assertEqual(env_path.read_text(encoding="utf-8"), before_env)
        self.assertEqual(keys_path.read_text(encoding="utf-8"), before_keys)

    def test_rotate_missing_file(self):
        """Test a missing env file exits non-zero with the error in the payload."""
        missing = str(Path(self.temp_dir) / ".env.missing")

        completed = TestUtilities.run_cli(["rotate", "-f", missing])

        self.assertEqual(completed.returncode, 1)
        payload = json.loads(completed.stdout)
        self.assertEqual(payload["processed_envs"][0]["error"]["code"], "MissingEnvFileError")

    def test_rotate_bad_pattern(self):
        """Test an invalid key pattern is reported as a pattern error."""
        env_path, _, _ = EnvFileHelper.write_env_pair(self.temp_dir)

        result = TestUtilities.run_cli_command(["rotate", "-f", str(env_path), "-k", "{API"])

        self.assertFalse(result["success"])
        self.assertEqual(result["error_code"], "pattern_error")

    def test_keypair(self):
        """Test keypair generation."""
        result = TestUtilities.run_cli_command(["keypair", "--show-private"])

        self.assertTrue(result["success"])
        self.assertEqual(len(result["public_key"]), 66)
        self.assertEqual(len(result["private_key"]), 64)


if __name__ == "__main__":
    unittest.main()
