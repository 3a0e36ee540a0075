"""Splurge Dotenv Rotator - keypair rotation for encrypted env files.

This package rotates the keypair protecting encrypted values in ``.env``
files: it generates a new keypair, re-encrypts the encrypted values under the
new public key and records the new private key in the companion keys file.
"""

from splurge_dotenv_rotator.crypto_utils import CryptoUtils
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
from splurge_dotenv_rotator.file_manager import FileManager
from splurge_dotenv_rotator.key_matcher import KeyMatcher
from splurge_dotenv_rotator.models import (
    EnvSource,
    EnvTarget,
    ProcessedEnvRecord,
    RotationRequest,
    RotationResult,
)
from splurge_dotenv_rotator.services.rotation import EnvRotator

try:
    from importlib.metadata import version
    __version__ = version("splurge-dotenv-rotator")
except ImportError:
    # Fallback for environments without importlib.metadata or an installed distribution
    __version__ = "unknown"

__all__ = [
    "CryptoUtils",
    "DecryptionError",
    "DecryptionKeyMissingError",
    "EncryptionError",
    "EnvRotator",
    "EnvSource",
    "EnvTarget",
    "FileManager",
    "FileOperationError",
    "KeyMatcher",
    "MissingEnvFileError",
    "MissingEnvKeysFileError",
    "ParseError",
    "PatternError",
    "ProcessedEnvRecord",
    "RotationRequest",
    "RotationResult",
    "RotatorError",
    "ValidationError",
]
