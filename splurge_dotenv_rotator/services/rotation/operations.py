"""Stateless per-value operations used while rotating an env file."""

import logging

from splurge_dotenv_rotator.crypto_utils import CryptoUtils
from splurge_dotenv_rotator.exceptions import DecryptionError, DecryptionKeyMissingError

logger = logging.getLogger(__name__)


def decrypt_key_value(
    key: str,
    value: str,
    private_key_name: str,
    private_key: str | None
) -> str:
    """Decrypt the encrypted value of ``key``.

    ``private_key`` may hold several comma-separated keys; each is tried in
    turn.

    Args:
        key: Variable name the value belongs to
        value: Encrypted value
        private_key_name: Name of the private key variable (for messages)
        private_key: Private key(s) as hex, or None

    Returns:
        Plaintext value

    Raises:
        DecryptionKeyMissingError: If no private key is available
        DecryptionError: If no candidate key decrypts the value
    """
    candidates = [k.strip() for k in (private_key or "").split(",") if k.strip()]
    if not candidates:
        raise DecryptionKeyMissingError(key=key, private_key_name=private_key_name)

    last_error: DecryptionError | None = None
    for candidate in candidates:
        try:
            return CryptoUtils.decrypt_value(value, candidate)
        except DecryptionError as e:
            last_error = e

    raise DecryptionError(
        f"[DECRYPTION_FAILED] could not decrypt {key} using private key '{private_key_name}='",
        key=key,
    ) from last_error


def re_encrypt_value(
    key: str,
    value: str,
    private_key_name: str,
    private_key: str | None,
    new_public_key: str
) -> str:
    """Decrypt ``value`` with the current private key and encrypt it for ``new_public_key``.

    Raises:
        DecryptionKeyMissingError: If no private key is available
        DecryptionError: If the value cannot be decrypted
        EncryptionError: If the value cannot be encrypted
    """
    plaintext = decrypt_key_value(key, value, private_key_name, private_key)
    return CryptoUtils.encrypt_value(plaintext, new_public_key)
