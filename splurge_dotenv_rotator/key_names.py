"""Key naming convention and private key lookup for env files."""

import logging
import os
from pathlib import Path

from splurge_dotenv_rotator.config import DEFAULT_CONFIG, RotatorConfig
from splurge_dotenv_rotator.constants import Constants
from splurge_dotenv_rotator.env_parser import parse
from splurge_dotenv_rotator.exceptions import FileOperationError, ParseError
from splurge_dotenv_rotator.file_manager import FileManager

logger = logging.getLogger(__name__)


def guess_environment(filepath: str | Path) -> str | None:
    """Guess the environment name encoded in an env filename.

    ``.env`` has no environment, ``.env.production`` is ``production`` and
    ``.env.production.local`` is ``production_local``.
    """
    parts = Path(filepath).name.split(".")
    candidates = parts[2:]

    if not candidates:
        return None
    return "_".join(candidates[:2])


def _key_name(prefix: str, filepath: str | Path) -> str:
    environment = guess_environment(filepath)
    if not environment:
        return prefix
    return f"{prefix}_{environment.upper()}"


def guess_public_key_name(filepath: str | Path) -> str:
    """Return the public key variable name for an env file."""
    return _key_name(Constants.PUBLIC_KEY_PREFIX(), filepath)


def guess_private_key_name(filepath: str | Path) -> str:
    """Return the private key variable name for an env file."""
    return _key_name(Constants.PRIVATE_KEY_PREFIX(), filepath)


def resolve_keys_filepath(
    env_filepath: str | Path,
    env_keys_filepath: str | Path | None = None,
    *,
    config: RotatorConfig | None = None
) -> str:
    """Resolve the absolute path of the keys file belonging to an env file.

    Args:
        env_filepath: Env file path as given by the caller
        env_keys_filepath: Explicit keys file path overriding the default
        config: Rotator configuration

    Returns:
        Absolute keys file path
    """
    config = config or DEFAULT_CONFIG
    if env_keys_filepath:
        return str(Path(env_keys_filepath).resolve())
    return str(Path(env_filepath).resolve().parent / config.keys_filename)


def find_private_key(
    env_filepath: str | Path,
    env_keys_filepath: str | Path | None = None,
    *,
    config: RotatorConfig | None = None,
    file_manager: FileManager | None = None,
    environ: dict[str, str] | None = None
) -> str | None:
    """Locate the current private key for an env file.

    Looks in the override keys file, then the default sibling keys file, then
    the process environment. The first non-empty value wins.

    Args:
        env_filepath: Env file path as given by the caller
        env_keys_filepath: Explicit keys file path (optional)
        config: Rotator configuration
        file_manager: File manager used to read keys files
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        The private key, or None if none can be found
    """
    config = config or DEFAULT_CONFIG
    file_manager = file_manager or FileManager(config)
    private_key_name = guess_private_key_name(env_filepath)

    candidates: list[str] = []
    if env_keys_filepath:
        candidates.append(resolve_keys_filepath(env_filepath, env_keys_filepath, config=config))
    default_path = resolve_keys_filepath(env_filepath, config=config)
    if default_path not in candidates:
        candidates.append(default_path)

    for path in candidates:
        value = _read_key_from_file(path, private_key_name, file_manager)
        if value:
            return value

    if config.check_process_env:
        value = (environ if environ is not None else os.environ).get(private_key_name)
        if value:
            return value

    logger.debug(f"No private key found for {env_filepath}", extra={
        "private_key_name": private_key_name,
        "event": "private_key_not_found"
    })
    return None


def _read_key_from_file(path: str, name: str, file_manager: FileManager) -> str | None:
    try:
        text, _ = file_manager.read_text(path)
    except FileNotFoundError:
        return None
    except FileOperationError as e:
        logger.warning(f"Could not read keys file {path}: {e}")
        return None

    try:
        return parse(text).get(name)
    except ParseError as e:
        logger.warning(f"Could not parse keys file {path}: {e}")
        return None
