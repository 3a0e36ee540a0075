"""File management utilities for env and keys files."""

import codecs
import logging
import os
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from splurge_dotenv_rotator.config import DEFAULT_CONFIG, RotatorConfig
from splurge_dotenv_rotator.env_text import append
from splurge_dotenv_rotator.exceptions import FileOperationError

if TYPE_CHECKING:
    from splurge_dotenv_rotator.models import RotationResult

logger = logging.getLogger(__name__)


class FileManager:
    """Reads env files with encoding detection and writes them back atomically."""

    _BOMS = (
        (codecs.BOM_UTF8, "utf-8-sig"),
        (codecs.BOM_UTF16_LE, "utf-16"),
        (codecs.BOM_UTF16_BE, "utf-16"),
    )

    def __init__(self, config: RotatorConfig | None = None):
        """Initialize the file manager.

        Args:
            config: Rotator configuration (defaults to DEFAULT_CONFIG)
        """
        self._config = config or DEFAULT_CONFIG

    def detect_encoding(self, file_path: str | Path) -> str:
        """Detect the text encoding of a file from its byte order mark.

        Args:
            file_path: Path to the file

        Returns:
            Codec name suitable for ``open``; the configured default when no
            BOM is present or the file does not exist
        """
        try:
            with Path(file_path).open("rb") as f:
                head = f.read(4)
        except OSError:
            return self._config.default_encoding

        for bom, encoding in self._BOMS:
            if head.startswith(bom):
                return encoding
        return self._config.default_encoding

    def read_text(self, file_path: str | Path) -> tuple[str, str]:
        """Read a text file, detecting its encoding.

        Args:
            file_path: Path to the file to read

        Returns:
            Tuple of (text, encoding)

        Raises:
            FileNotFoundError: If the file does not exist
            FileOperationError: If the file cannot be read or decoded
        """
        file_path = Path(file_path)
        encoding = self.detect_encoding(file_path)
        try:
            # newline="" keeps CRLF line endings byte-identical on write back
            with file_path.open(encoding=encoding, newline="") as f:
                return f.read(), encoding
        except FileNotFoundError:
            raise
        except (OSError, UnicodeDecodeError) as e:
            raise FileOperationError(f"Failed to read file {file_path}: {e}") from e

    def write_text_atomic(
        self,
        file_path: str | Path,
        text: str,
        *,
        encoding: str | None = None
    ) -> None:
        """Write text atomically using a temporary file.

        Args:
            file_path: Path to the target file
            text: Text to write
            encoding: Encoding to write with (defaults to the configured default)

        Raises:
            FileOperationError: If write operation fails
        """
        file_path = Path(file_path)
        encoding = encoding or self._config.default_encoding

        if not self._config.atomic_write_enabled:
            try:
                with file_path.open("w", encoding=encoding, newline="") as f:
                    f.write(text)
                self._set_secure_permissions(file_path)
            except OSError as e:
                raise FileOperationError(f"Failed to write file {file_path}: {e}") from e
            return

        temp_file = file_path.with_name(file_path.name + ".temp")
        archive_file = file_path.with_name(file_path.name + ".archive")

        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)

            with temp_file.open("w", encoding=encoding, newline="") as f:
                f.write(text)

            if file_path.exists():
                shutil.move(str(file_path), str(archive_file))

            shutil.move(str(temp_file), str(file_path))

            self._set_secure_permissions(file_path)

            if archive_file.exists():
                archive_file.unlink()

        except Exception as e:
            if temp_file.exists():
                temp_file.unlink()
            # Put the original back if it was already moved aside
            if archive_file.exists() and not file_path.exists():
                shutil.move(str(archive_file), str(file_path))
            raise FileOperationError(f"Failed to write file {file_path}: {e}") from e

    def persist(self, result: "RotationResult") -> list[str]:
        """Write the rewritten keys and env text of every changed record.

        Keys files are written before any env file. A failed keys write
        therefore leaves every env file readable with its current private key.

        Several env files may share one keys file. Each record holds the keys
        text with only its own private key appended, so the keys text written
        for a shared file accumulates the private keys of every record.

        Args:
            result: Result returned by ``EnvRotator.run``

        Returns:
            List of paths written, in write order

        Raises:
            FileOperationError: If a write fails
        """
        records = [
            record for record in result.processed_envs
            if record.changed and record.succeeded
        ]

        keys_texts: dict[str, tuple[str, str | None]] = {}
        for record in records:
            if not record.private_key_added:
                continue
            if record.env_keys_filepath in keys_texts:
                text, encoding = keys_texts[record.env_keys_filepath]
                text = append(text, record.private_key_name, record.private_key)
            else:
                text, encoding = record.env_keys_src, record.env_keys_encoding
            keys_texts[record.env_keys_filepath] = (text, encoding)

        written: list[str] = []
        for env_keys_filepath, (text, encoding) in keys_texts.items():
            self.write_text_atomic(env_keys_filepath, text, encoding=encoding)
            written.append(env_keys_filepath)

        for record in records:
            self.write_text_atomic(record.filepath, record.env_src, encoding=record.encoding)
            written.append(record.filepath)

        logger.info("Persisted rotated env files", extra={
            "files_written": len(written),
            "event": "rotation_persisted"
        })
        return written

    def _set_secure_permissions(self, file_path: Path) -> None:
        """Restrict keys files to the owner when secure permissions are enabled."""
        if not self._config.secure_permissions:
            return
        if file_path.name != self._config.keys_filename:
            return
        try:
            os.chmod(file_path, 0o600)
        except OSError as e:
            logger.warning(f"Could not set permissions on {file_path}: {e}")
