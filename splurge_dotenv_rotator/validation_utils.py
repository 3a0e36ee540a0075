"""Validation utilities for the dotenv rotator package."""

import os
from collections.abc import Iterable, Mapping

from splurge_dotenv_rotator.exceptions import ValidationError


def normalize_key_list(
    value: str | Iterable[str] | None,
    *,
    error_cls: type[ValidationError] = ValidationError
) -> tuple[str, ...]:
    """Normalize an include/exclude key argument to a tuple of strings.

    A single string becomes a one-element tuple and None becomes an empty
    tuple.

    Args:
        value: Key pattern or iterable of key patterns
        error_cls: Exception type raised for invalid entries

    Returns:
        Tuple of key patterns in the order given

    Raises:
        ValidationError: If the value or one of its entries is not a string
    """
    if value is None:
        return ()

    if isinstance(value, str):
        return (value,)

    if isinstance(value, (bytes, Mapping)) or not isinstance(value, Iterable):
        raise error_cls(f"Key list must be a string or a sequence of strings, got {type(value).__name__}")

    keys = tuple(value)
    for key in keys:
        if not isinstance(key, str):
            raise error_cls(f"Key patterns must be strings, got {type(key).__name__}")
    return keys


def validate_env_filepath(value: object) -> str:
    """Validate an env file path given by the caller.

    Args:
        value: Path string or path-like object

    Returns:
        The path as a string

    Raises:
        ValidationError: If the path is empty or not path-like
    """
    if isinstance(value, os.PathLike):
        value = os.fspath(value)

    if not isinstance(value, str):
        raise ValidationError(f"Env file path must be a string, got {type(value).__name__}")

    if value.strip() == "":
        raise ValidationError("Env file path cannot be empty")

    if "\x00" in value:
        raise ValidationError("Env file path cannot contain null bytes")

    return value
