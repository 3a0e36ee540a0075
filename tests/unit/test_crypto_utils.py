"""Unit tests for the crypto_utils module."""

import base64
import unittest

from splurge_dotenv_rotator.crypto_utils import CryptoUtils
from splurge_dotenv_rotator.exceptions import DecryptionError, EncryptionError


class TestCryptoUtils(unittest.TestCase):
    """Test cases for CryptoUtils."""

    def setUp(self):
        """Set up test fixtures."""
        self.public_key, self.private_key = CryptoUtils.generate_keypair()

    def test_generate_keypair_shape(self):
        """Test generated keys are hex of the expected sizes."""
        self.assertEqual(len(self.public_key), 66)
        self.assertEqual(len(self.private_key), 64)
        self.assertIn(self.public_key[:2], ("02", "03"))
        bytes.fromhex(self.public_key)
        bytes.fromhex(self.private_key)

    def test_generate_keypair_independent(self):
        """Test consecutive keypairs differ."""
        other_public, other_private = CryptoUtils.generate_keypair()
        self.assertNotEqual(self.public_key, other_public)
        self.assertNotEqual(self.private_key, other_private)

    def test_public_key_from_private(self):
        """Test the public key can be derived from the private key."""
        self.assertEqual(CryptoUtils.public_key_from_private(self.private_key), self.public_key)

    def test_public_key_from_invalid_private(self):
        """Test deriving from an invalid private key fails."""
        with self.assertRaises(EncryptionError):
            CryptoUtils.public_key_from_private("not-hex")

    def test_encrypt_decrypt(self):
        """Test a value decrypts to the original plaintext."""
        encrypted = CryptoUtils.encrypt_value("hello world", self.public_key)

        self.assertTrue(encrypted.startswith("encrypted:"))
        self.assertEqual(CryptoUtils.decrypt_value(encrypted, self.private_key), "hello world")

    def test_encrypt_is_randomized(self):
        """Test encrypting the same value twice gives different ciphertext."""
        first = CryptoUtils.encrypt_value("same", self.public_key)
        second = CryptoUtils.encrypt_value("same", self.public_key)
        self.assertNotEqual(first, second)

    def test_encrypt_empty_and_unicode(self):
        """Test empty and non-ASCII values are supported."""
        for value in ("", "päss wörd ✓", "line1\nline2"):
            encrypted = CryptoUtils.encrypt_value(value, self.public_key)
            self.assertEqual(CryptoUtils.decrypt_value(encrypted, self.private_key), value)

    def test_encrypt_invalid_public_key(self):
        """Test encrypting for an invalid public key fails."""
        with self.assertRaises(EncryptionError):
            CryptoUtils.encrypt_value("value", "02deadbeef")
        with self.assertRaises(EncryptionError):
            CryptoUtils.encrypt_value("value", "zz")

    def test_decrypt_with_wrong_key(self):
        """Test decrypting with another private key fails."""
        encrypted = CryptoUtils.encrypt_value("secret", self.public_key)
        _, other_private = CryptoUtils.generate_keypair()

        with self.assertRaises(DecryptionError):
            CryptoUtils.decrypt_value(encrypted, other_private)

    def test_decrypt_tampered_value(self):
        """Test a modified ciphertext is rejected."""
        encrypted = CryptoUtils.encrypt_value("secret", self.public_key)
        payload = bytearray(base64.b64decode(encrypted[len("encrypted:"):]))
        payload[-1] ^= 0x01
        tampered = "encrypted:" + base64.b64encode(bytes(payload)).decode("ascii")

        with self.assertRaises(DecryptionError):
            CryptoUtils.decrypt_value(tampered, self.private_key)

    def test_decrypt_malformed_values(self):
        """Test malformed ciphertext raises DecryptionError."""
        for value in ("plain", "encrypted:", "encrypted:!!!notbase64!!!", "encrypted:AAAA"):
            with self.assertRaises(DecryptionError):
                CryptoUtils.decrypt_value(value, self.private_key)

    def test_decrypt_invalid_private_key(self):
        """Test an invalid private key raises DecryptionError."""
        encrypted = CryptoUtils.encrypt_value("secret", self.public_key)
        for private_key in ("xyz", "00" * 16, "00" * 32):
            with self.assertRaises(DecryptionError):
                CryptoUtils.decrypt_value(encrypted, private_key)

    def test_is_encrypted(self):
        """Test the ciphertext marker check."""
        self.assertTrue(CryptoUtils.is_encrypted("encrypted:abc"))
        self.assertFalse(CryptoUtils.is_encrypted("encrypted:"))
        self.assertFalse(CryptoUtils.is_encrypted("abc"))
        self.assertFalse(CryptoUtils.is_encrypted("ENCRYPTED:abc"))
        self.assertFalse(CryptoUtils.is_encrypted(None))


if __name__ == "__main__":
    unittest.main()
