"""Configuration management for the Splurge Dotenv Rotator."""

from dataclasses import dataclass

from splurge_dotenv_rotator.constants import Constants


@dataclass
class RotatorConfig:
    """Configuration for EnvRotator and its collaborators."""

    # File settings
    default_env_filename: str = Constants.DEFAULT_ENV_FILENAME()
    keys_filename: str = Constants.DEFAULT_ENV_KEYS_FILENAME()
    default_encoding: str = "utf-8"
    atomic_write_enabled: bool = True
    secure_permissions: bool = True

    # Private key lookup settings
    check_process_env: bool = True

    # Execution settings
    max_workers: int = 1

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.default_env_filename:
            raise ValueError("default_env_filename cannot be empty")
        if not self.keys_filename:
            raise ValueError("keys_filename cannot be empty")
        if "/" in self.keys_filename or "\\" in self.keys_filename:
            raise ValueError("keys_filename must be a bare filename")
        if not self.default_encoding:
            raise ValueError("default_encoding cannot be empty")

        # Validate execution settings
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")


# Default configuration instance
DEFAULT_CONFIG = RotatorConfig()
