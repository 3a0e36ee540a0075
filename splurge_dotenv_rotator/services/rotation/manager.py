"""Rotation orchestrator for env file keypairs."""

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from splurge_dotenv_rotator.config import DEFAULT_CONFIG, RotatorConfig
from splurge_dotenv_rotator.crypto_utils import CryptoUtils
from splurge_dotenv_rotator.env_parser import parse
from splurge_dotenv_rotator.env_text import append, replace
from splurge_dotenv_rotator.exceptions import MissingEnvFileError, MissingEnvKeysFileError
from splurge_dotenv_rotator.file_manager import FileManager
from splurge_dotenv_rotator.key_matcher import KeyMatcher
from splurge_dotenv_rotator.key_names import (
    find_private_key,
    guess_private_key_name,
    guess_public_key_name,
)
from splurge_dotenv_rotator.models import (
    EnvTarget,
    ProcessedEnvRecord,
    RotationRequest,
    RotationResult,
)

from splurge_dotenv_rotator.services.rotation.operations import re_encrypt_value

logger = logging.getLogger(__name__)

KeypairFactory = Callable[[], tuple[str, str]]


def aggregate(records: Iterable[ProcessedEnvRecord]) -> RotationResult:
    """Fold per-file records into a RotationResult.

    Errored records land in neither path set. A path that changed in any
    record is never reported as unchanged.
    """
    records = tuple(records)
    changed: list[str] = []
    unchanged: list[str] = []

    for record in records:
        if not record.succeeded:
            continue
        bucket = changed if record.changed else unchanged
        if record.filepath not in bucket:
            bucket.append(record.filepath)

    return RotationResult(
        processed_envs=records,
        changed_filepaths=tuple(changed),
        unchanged_filepaths=tuple(path for path in unchanged if path not in changed),
    )


class EnvRotator:
    """Rotates the keypair protecting the encrypted values of env files."""

    def __init__(
        self,
        config: RotatorConfig | None = None,
        *,
        file_manager: FileManager | None = None,
        keypair_factory: KeypairFactory | None = None,
        environ: dict[str, str] | None = None
    ):
        """Initialize the rotator.

        Args:
            config: Rotator configuration (defaults to DEFAULT_CONFIG)
            file_manager: File manager used to read env and keys files
            keypair_factory: Callable returning a fresh (public, private) keypair
            environ: Environment consulted for private keys (defaults to ``os.environ``)
        """
        self._config = config or DEFAULT_CONFIG
        self._file_manager = file_manager or FileManager(self._config)
        self._keypair_factory = keypair_factory or CryptoUtils.generate_keypair
        self._environ = environ

    def rotate(
        self,
        envs: Any = None,
        key: Any = None,
        exclude_key: Any = None,
        env_keys_filepath: str | None = None,
        *,
        max_workers: int | None = None
    ) -> RotationResult:
        """Build a RotationRequest from loose arguments and run it.

        Raises:
            ValidationError: If an argument is invalid
            PatternError: If a key pattern is invalid
        """
        request = RotationRequest.from_args(
            envs,
            key,
            exclude_key,
            env_keys_filepath,
            config=self._config,
        )
        return self.run(request, max_workers=max_workers)

    def run(
        self,
        request: RotationRequest,
        *,
        max_workers: int | None = None
    ) -> RotationResult:
        """Rotate every env file of a request.

        Nothing is written to disk; pass the result to
        ``FileManager.persist`` to apply it.

        Args:
            request: Rotation request
            max_workers: Number of files rotated concurrently (defaults to config)

        Returns:
            RotationResult with one record per env file, in request order

        Raises:
            PatternError: If an include/exclude pattern is invalid
        """
        matcher = KeyMatcher(request.keys, request.exclude_keys)

        targets = []
        for source in request.envs:
            if not source.is_env_file:
                logger.debug(f"Skipping env source of type {source.type}")
                continue
            targets.append(
                EnvTarget.from_source(source, request.env_keys_filepath, config=self._config)
            )

        def rotate_target(target: EnvTarget) -> ProcessedEnvRecord:
            return self.rotate_env_file(target, matcher, env_keys_filepath=request.env_keys_filepath)

        workers = max_workers or self._config.max_workers
        if workers > 1 and len(targets) > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                records = list(executor.map(rotate_target, targets))
        else:
            records = [rotate_target(target) for target in targets]

        result = aggregate(records)

        logger.info("Env file rotation completed", extra={
            "processed_envs": len(result.processed_envs),
            "changed_files": len(result.changed_filepaths),
            "errored_files": len(result.errors),
            "event": "env_rotation_completed"
        })
        return result

    def rotate_env_file(
        self,
        target: EnvTarget,
        matcher: KeyMatcher,
        *,
        env_keys_filepath: str | None = None
    ) -> ProcessedEnvRecord:
        """Rotate a single env file in memory.

        Either every qualifying value is re-encrypted and the record carries
        the rewritten text, or the record carries the error and no text.

        Args:
            target: Env file to rotate
            matcher: Compiled include/exclude key matcher
            env_keys_filepath: Keys file override as given by the caller

        Returns:
            ProcessedEnvRecord for the file; never raises for file-local errors
        """
        try:
            env_src, encoding = self._read_env_file(target)
            env_parsed = parse(env_src)

            public_key_name = guess_public_key_name(target.env_filepath)
            private_key_name = guess_private_key_name(target.env_filepath)
            existing_private_key = find_private_key(
                target.env_filepath,
                env_keys_filepath,
                config=self._config,
                file_manager=self._file_manager,
                environ=self._environ,
            )

            env_keys_src, env_keys_encoding = self._read_keys_file(target)

            new_public_key, new_private_key = self._keypair_factory()

            if public_key_name in env_parsed:
                env_src = replace(
                    env_src,
                    public_key_name,
                    new_public_key,
                    old_value=env_parsed[public_key_name],
                )
            else:
                logger.warning(f"{target.env_filepath} has no {public_key_name}; only values will be rotated")

            rotated_keys: list[str] = []
            for key, value in env_parsed.items():
                if not matcher.participates(key):
                    logger.debug(f"Key {key} filtered out of rotation")
                    continue

                # only values that are already encrypted get rotated
                if not CryptoUtils.is_encrypted(value):
                    continue

                encrypted_value = re_encrypt_value(
                    key,
                    value,
                    private_key_name,
                    existing_private_key,
                    new_public_key,
                )
                env_src = replace(env_src, key, encrypted_value, old_value=value)
                rotated_keys.append(key)

            env_keys_src = append(env_keys_src, private_key_name, new_private_key)

        except Exception as e:
            logger.warning(f"Rotation failed for {target.env_filepath}: {e}", extra={
                "env_filepath": target.env_filepath,
                "error_type": type(e).__name__,
                "event": "env_rotation_failed"
            })
            return ProcessedEnvRecord(
                env_filepath=target.env_filepath,
                filepath=target.filepath,
                env_keys_filepath=target.env_keys_filepath,
                error=e,
            )

        logger.info(f"Rotated {target.env_filepath}", extra={
            "env_filepath": target.env_filepath,
            "rotated_keys": len(rotated_keys),
            "event": "env_file_rotated"
        })

        return ProcessedEnvRecord(
            env_filepath=target.env_filepath,
            filepath=target.filepath,
            env_keys_filepath=target.env_keys_filepath,
            keys=tuple(rotated_keys),
            changed=True,
            private_key_added=True,
            public_key_name=public_key_name,
            public_key=new_public_key,
            private_key_name=private_key_name,
            private_key=new_private_key,
            env_src=env_src,
            env_keys_src=env_keys_src,
            encoding=encoding,
            env_keys_encoding=env_keys_encoding,
        )

    def _read_env_file(self, target: EnvTarget) -> tuple[str, str]:
        try:
            return self._file_manager.read_text(target.filepath)
        except FileNotFoundError as e:
            raise MissingEnvFileError(
                env_filepath=target.env_filepath,
                filepath=target.filepath,
            ) from e

    def _read_keys_file(self, target: EnvTarget) -> tuple[str, str]:
        try:
            return self._file_manager.read_text(target.env_keys_filepath)
        except FileNotFoundError as e:
            raise MissingEnvKeysFileError(env_keys_filepath=target.env_keys_filepath) from e
