"""Services package for Splurge Dotenv Rotator."""

from splurge_dotenv_rotator.services.rotation import EnvRotator

__all__ = [
    "EnvRotator",
]
