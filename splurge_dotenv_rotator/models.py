"""Data models for the Splurge Dotenv Rotator."""

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from splurge_dotenv_rotator.config import DEFAULT_CONFIG, RotatorConfig
from splurge_dotenv_rotator.constants import Constants
from splurge_dotenv_rotator.exceptions import ValidationError
from splurge_dotenv_rotator.validation_utils import normalize_key_list, validate_env_filepath


@dataclass(frozen=True)
class EnvSource:
    """A typed env source as resolved from caller input."""

    type: str
    value: str

    @property
    def is_env_file(self) -> bool:
        return self.type == Constants.ENV_SOURCE_TYPE_FILE()

    @classmethod
    def coerce(cls, value: Any) -> "EnvSource":
        """Build an EnvSource from a path, a mapping or an EnvSource.

        Raises:
            ValidationError: If the value cannot describe an env source
        """
        if isinstance(value, EnvSource):
            return value

        if isinstance(value, Mapping):
            if "type" not in value or "value" not in value:
                raise ValidationError("Env source mapping requires 'type' and 'value'")
            source_type = str(value["type"])
            if source_type == Constants.ENV_SOURCE_TYPE_FILE():
                return cls(type=source_type, value=validate_env_filepath(value["value"]))
            return cls(type=source_type, value=str(value["value"]))

        return cls(type=Constants.ENV_SOURCE_TYPE_FILE(), value=validate_env_filepath(value))


@dataclass(frozen=True)
class RotationRequest:
    """Everything a single rotation run needs. Immutable for the run."""

    envs: tuple[EnvSource, ...]
    keys: tuple[str, ...] = ()
    exclude_keys: tuple[str, ...] = ()
    env_keys_filepath: str | None = None

    @classmethod
    def from_args(
        cls,
        envs: Any = None,
        key: str | Iterable[str] | None = None,
        exclude_key: str | Iterable[str] | None = None,
        env_keys_filepath: str | os.PathLike | None = None,
        *,
        config: RotatorConfig | None = None
    ) -> "RotationRequest":
        """Create a request from loosely typed caller arguments.

        ``envs`` may be a single path, a single source or an iterable of
        either; empty means the default ``.env``. ``key`` and
        ``exclude_key`` may be a single pattern or a list of patterns.

        Raises:
            ValidationError: If an argument is invalid
        """
        config = config or DEFAULT_CONFIG

        if envs is None:
            raw_envs: list[Any] = []
        elif isinstance(envs, (str, os.PathLike, Mapping, EnvSource)):
            raw_envs = [envs]
        else:
            raw_envs = list(envs)

        sources = tuple(EnvSource.coerce(env) for env in raw_envs)
        if not sources:
            sources = (EnvSource(type=Constants.ENV_SOURCE_TYPE_FILE(), value=config.default_env_filename),)

        if env_keys_filepath is not None:
            env_keys_filepath = validate_env_filepath(env_keys_filepath)

        return cls(
            envs=sources,
            keys=normalize_key_list(key),
            exclude_keys=normalize_key_list(exclude_key),
            env_keys_filepath=env_keys_filepath,
        )


@dataclass(frozen=True)
class EnvTarget:
    """One env file to rotate, with its resolved paths."""

    env_filepath: str  # as given by the caller
    filepath: str  # absolute
    env_keys_filepath: str  # absolute

    @classmethod
    def from_source(
        cls,
        source: EnvSource,
        env_keys_filepath: str | None = None,
        *,
        config: RotatorConfig | None = None
    ) -> "EnvTarget":
        """Resolve the paths for an env file source."""
        config = config or DEFAULT_CONFIG
        filepath = Path(source.value).resolve()
        if env_keys_filepath:
            keys_path = Path(env_keys_filepath).resolve()
        else:
            keys_path = filepath.parent / config.keys_filename
        return cls(
            env_filepath=source.value,
            filepath=str(filepath),
            env_keys_filepath=str(keys_path),
        )


@dataclass(frozen=True)
class ProcessedEnvRecord:
    """Outcome of rotating one env file.

    ``changed`` means the public key was replaced and a private key appended
    to the keys text, not that at least one secret was re-encrypted.
    Rewritten text is held in memory only; writing it is up to the caller.
    """

    env_filepath: str
    filepath: str
    env_keys_filepath: str | None = None
    type: str = Constants.ENV_SOURCE_TYPE_FILE()
    keys: tuple[str, ...] = ()
    changed: bool = False
    private_key_added: bool = False
    public_key_name: str | None = None
    public_key: str | None = None
    private_key_name: str | None = None
    private_key: str | None = field(default=None, repr=False)
    env_src: str | None = field(default=None, repr=False)
    env_keys_src: str | None = field(default=None, repr=False)
    encoding: str | None = None
    env_keys_encoding: str | None = None
    error: Exception | None = field(default=None, compare=False)

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def to_dict(self, *, include_private_key: bool = False) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary.

        Private key material and rewritten text are left out unless
        ``include_private_key`` is set.
        """
        data: dict[str, Any] = {
            "type": self.type,
            "env_filepath": self.env_filepath,
            "filepath": self.filepath,
            "env_keys_filepath": self.env_keys_filepath,
            "keys": list(self.keys),
            "changed": self.changed,
            "private_key_added": self.private_key_added,
            "public_key_name": self.public_key_name,
            "public_key": self.public_key,
            "private_key_name": self.private_key_name,
        }
        if include_private_key:
            data["private_key"] = self.private_key
        if self.error is not None:
            data["error"] = {
                "code": type(self.error).__name__,
                "message": str(self.error),
            }
            hint = getattr(self.error, "help", None)
            if hint:
                data["error"]["help"] = hint
        return data


@dataclass(frozen=True)
class RotationResult:
    """Aggregate outcome of a rotation run.

    ``changed_filepaths`` and ``unchanged_filepaths`` hold resolved paths,
    are free of duplicates, are disjoint, and never contain errored files.
    """

    processed_envs: tuple[ProcessedEnvRecord, ...] = ()
    changed_filepaths: tuple[str, ...] = ()
    unchanged_filepaths: tuple[str, ...] = ()

    @property
    def errors(self) -> tuple[ProcessedEnvRecord, ...]:
        return tuple(record for record in self.processed_envs if not record.succeeded)

    @property
    def has_errors(self) -> bool:
        return any(not record.succeeded for record in self.processed_envs)

    def to_dict(self, *, include_private_key: bool = False) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "processed_envs": [
                record.to_dict(include_private_key=include_private_key)
                for record in self.processed_envs
            ],
            "changed_filepaths": list(self.changed_filepaths),
            "unchanged_filepaths": list(self.unchanged_filepaths),
        }
