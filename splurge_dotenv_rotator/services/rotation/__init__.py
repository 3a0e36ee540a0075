"""Rotation services package for Splurge Dotenv Rotator."""

from splurge_dotenv_rotator.services.rotation.manager import EnvRotator, aggregate
from splurge_dotenv_rotator.services.rotation.operations import (
    decrypt_key_value,
    re_encrypt_value,
)

__all__ = [
    "EnvRotator",
    "aggregate",
    "decrypt_key_value",
    "re_encrypt_value",
]
