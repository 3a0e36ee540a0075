"""Tests for the exceptions module."""

import unittest

from splurge_dotenv_rotator.exceptions import (
    DecryptionError,
    DecryptionKeyMissingError,
    EncryptionError,
    FileOperationError,
    MissingEnvFileError,
    MissingEnvKeysFileError,
    ParseError,
    PatternError,
    RotatorError,
    ValidationError,
)


class TestExceptions(unittest.TestCase):
    """Test cases for the exceptions module."""

    def test_rotator_error(self):
        """Test RotatorError exception."""
        error = RotatorError("Test error message")

        self.assertIsInstance(error, Exception)
        self.assertEqual(str(error), "Test error message")

    def test_pattern_error(self):
        """Test PatternError is a ValidationError carrying the pattern."""
        error = PatternError("bad pattern", pattern="[")

        self.assertIsInstance(error, ValidationError)
        self.assertIsInstance(error, RotatorError)
        self.assertEqual(error.pattern, "[")

    def test_missing_env_file_error(self):
        """Test MissingEnvFileError carries both paths and a hint."""
        error = MissingEnvFileError(env_filepath=".env.missing", filepath="/abs/.env.missing")

        self.assertIsInstance(error, FileOperationError)
        self.assertEqual(error.env_filepath, ".env.missing")
        self.assertEqual(error.filepath, "/abs/.env.missing")
        self.assertIn("MISSING_ENV_FILE", str(error))
        self.assertIn(".env.missing", error.help)

    def test_missing_env_keys_file_error(self):
        """Test MissingEnvKeysFileError carries the keys path."""
        error = MissingEnvKeysFileError(env_keys_filepath="/abs/.env.keys")

        self.assertIsInstance(error, FileOperationError)
        self.assertNotIsInstance(error, MissingEnvFileError)
        self.assertEqual(error.env_keys_filepath, "/abs/.env.keys")

    def test_parse_error_line_number(self):
        """Test ParseError prefixes the line number."""
        error = ParseError("expected KEY=value assignment", line_number=3)

        self.assertEqual(error.line_number, 3)
        self.assertEqual(str(error), "line 3: expected KEY=value assignment")
        self.assertEqual(str(ParseError("oops")), "oops")

    def test_decryption_errors(self):
        """Test the decryption error hierarchy."""
        error = DecryptionKeyMissingError(key="API_KEY", private_key_name="DOTENV_PRIVATE_KEY")

        self.assertIsInstance(error, DecryptionError)
        self.assertIsInstance(error, EncryptionError)
        self.assertEqual(error.key, "API_KEY")
        self.assertEqual(error.private_key_name, "DOTENV_PRIVATE_KEY")
        self.assertIn("MISSING_PRIVATE_KEY", str(error))
        self.assertEqual(DecryptionError("x", key="K").key, "K")


if __name__ == "__main__":
    unittest.main()
