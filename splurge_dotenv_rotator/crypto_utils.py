"""Cryptographic utilities for the Splurge Dotenv Rotator.

Values are protected with ECIES over secp256k1: an ephemeral keypair is
combined with the recipient public key through ECDH, the shared secret is
expanded with HKDF-SHA256 and the value is sealed with AES-256-GCM.

Encoded payload layout (before base64)::

    ephemeral_public_key (65) || nonce (16) || tag (16) || ciphertext
"""

import base64
import binascii
import secrets

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from splurge_dotenv_rotator.constants import Constants
from splurge_dotenv_rotator.exceptions import DecryptionError, EncryptionError


class CryptoUtils:
    """Keypair generation and value encryption for env files."""

    _CURVE = ec.SECP256K1

    @classmethod
    def generate_keypair(cls) -> tuple[str, str]:
        """Generate a fresh secp256k1 keypair.

        Returns:
            Tuple of (public_key_hex, private_key_hex). The public key is the
            compressed point, the private key the raw 32-byte scalar.

        Raises:
            EncryptionError: If the keypair cannot be generated
        """
        try:
            private_key = ec.generate_private_key(cls._CURVE())
            return cls._public_key_hex(private_key), cls._private_key_hex(private_key)
        except Exception as e:
            raise EncryptionError(f"Keypair generation failed: {e}") from e

    @classmethod
    def public_key_from_private(cls, private_key_hex: str) -> str:
        """Derive the compressed public key hex for a private key hex."""
        try:
            return cls._public_key_hex(cls._load_private_key(private_key_hex))
        except ValueError as e:
            raise EncryptionError(f"Invalid private key: {e}") from e

    @classmethod
    def encrypt_value(cls, value: str, public_key_hex: str) -> str:
        """Encrypt a plaintext value for the given public key.

        Args:
            value: Plaintext value
            public_key_hex: Recipient public key (compressed or uncompressed hex)

        Returns:
            Encoded value carrying the ``encrypted:`` marker

        Raises:
            EncryptionError: If the public key is invalid or encryption fails
        """
        try:
            recipient = ec.EllipticCurvePublicKey.from_encoded_point(
                cls._CURVE(), bytes.fromhex(public_key_hex)
            )
        except (ValueError, TypeError) as e:
            raise EncryptionError(f"Invalid public key: {e}") from e

        try:
            ephemeral = ec.generate_private_key(cls._CURVE())
            ephemeral_public = ephemeral.public_key().public_bytes(
                serialization.Encoding.X962,
                serialization.PublicFormat.UncompressedPoint,
            )
            shared = ephemeral.exchange(ec.ECDH(), recipient)
            aes_key = cls._derive_aes_key(ephemeral_public, shared)

            nonce = secrets.token_bytes(Constants.NONCE_SIZE_BYTES())
            sealed = AESGCM(aes_key).encrypt(nonce, value.encode("utf-8"), None)
            tag_size = Constants.TAG_SIZE_BYTES()
            ciphertext, tag = sealed[:-tag_size], sealed[-tag_size:]
        except Exception as e:
            raise EncryptionError(f"Encryption failed: {e}") from e

        payload = ephemeral_public + nonce + tag + ciphertext
        return Constants.ENCRYPTED_PREFIX() + base64.b64encode(payload).decode("ascii")

    @classmethod
    def decrypt_value(cls, encoded_value: str, private_key_hex: str) -> str:
        """Decrypt an encoded value with a private key.

        Args:
            encoded_value: Value carrying the ``encrypted:`` marker
            private_key_hex: Private key scalar as hex

        Returns:
            Plaintext value

        Raises:
            DecryptionError: If the value is malformed or the key is wrong
        """
        if not cls.is_encrypted(encoded_value):
            raise DecryptionError("Value is not encrypted")

        try:
            private_key = cls._load_private_key(private_key_hex)
        except ValueError as e:
            raise DecryptionError(f"Invalid private key: {e}") from e

        try:
            payload = base64.b64decode(
                encoded_value[len(Constants.ENCRYPTED_PREFIX()):], validate=True
            )
        except (binascii.Error, ValueError) as e:
            raise DecryptionError(f"Malformed ciphertext: {e}") from e

        pub_size = Constants.UNCOMPRESSED_PUBLIC_KEY_SIZE_BYTES()
        nonce_size = Constants.NONCE_SIZE_BYTES()
        tag_size = Constants.TAG_SIZE_BYTES()
        if len(payload) < pub_size + nonce_size + tag_size:
            raise DecryptionError("Malformed ciphertext: payload too short")

        ephemeral_public = payload[:pub_size]
        nonce = payload[pub_size:pub_size + nonce_size]
        tag = payload[pub_size + nonce_size:pub_size + nonce_size + tag_size]
        ciphertext = payload[pub_size + nonce_size + tag_size:]

        try:
            ephemeral = ec.EllipticCurvePublicKey.from_encoded_point(cls._CURVE(), ephemeral_public)
            shared = private_key.exchange(ec.ECDH(), ephemeral)
            aes_key = cls._derive_aes_key(ephemeral_public, shared)
            plaintext = AESGCM(aes_key).decrypt(nonce, ciphertext + tag, None)
            return plaintext.decode("utf-8")
        except InvalidTag as e:
            raise DecryptionError("Decryption failed: wrong private key or tampered value") from e
        except Exception as e:
            raise DecryptionError(f"Decryption failed: {e}") from e

    @staticmethod
    def is_encrypted(value: str | None) -> bool:
        """Return True if ``value`` carries the ciphertext marker and a payload."""
        if not isinstance(value, str):
            return False
        prefix = Constants.ENCRYPTED_PREFIX()
        return value.startswith(prefix) and len(value) > len(prefix)

    @classmethod
    def _load_private_key(cls, private_key_hex: str) -> ec.EllipticCurvePrivateKey:
        raw = bytes.fromhex(private_key_hex.strip())
        if len(raw) != Constants.PRIVATE_KEY_SIZE_BYTES():
            raise ValueError(
                f"Private key must be exactly {Constants.PRIVATE_KEY_SIZE_BYTES()} bytes"
            )
        return ec.derive_private_key(int.from_bytes(raw, byteorder="big"), cls._CURVE())

    @staticmethod
    def _private_key_hex(private_key: ec.EllipticCurvePrivateKey) -> str:
        scalar = private_key.private_numbers().private_value
        return scalar.to_bytes(Constants.PRIVATE_KEY_SIZE_BYTES(), byteorder="big").hex()

    @staticmethod
    def _public_key_hex(private_key: ec.EllipticCurvePrivateKey) -> str:
        return private_key.public_key().public_bytes(
            serialization.Encoding.X962,
            serialization.PublicFormat.CompressedPoint,
        ).hex()

    @staticmethod
    def _derive_aes_key(ephemeral_public: bytes, shared: bytes) -> bytes:
        hkdf = HKDF(
            algorithm=hashes.SHA256(),
            length=Constants.AES_KEY_SIZE_BYTES(),
            salt=None,
            info=Constants.HKDF_INFO(),
        )
        return hkdf.derive(ephemeral_public + shared)
