"""Custom exceptions for the Splurge Dotenv Rotator."""


class RotatorError(Exception):
    """Base exception for all rotator errors."""


class ValidationError(RotatorError):
    """Raised when input validation fails."""


class PatternError(ValidationError):
    """Raised when an include/exclude key pattern cannot be compiled."""

    def __init__(self, message: str, *, pattern: object = None) -> None:
        super().__init__(message)
        self.pattern = pattern


class FileOperationError(RotatorError):
    """Raised when file operations fail."""


class MissingEnvFileError(FileOperationError):
    """Raised when an env file to rotate does not exist."""

    def __init__(self, *, env_filepath: str, filepath: str) -> None:
        super().__init__(f"[MISSING_ENV_FILE] missing {env_filepath} file ({filepath})")
        self.env_filepath = env_filepath
        self.filepath = filepath
        self.help = f"? add one with [echo \"HELLO=World\" > {env_filepath}]"


class MissingEnvKeysFileError(FileOperationError):
    """Raised when the companion keys file of an env file does not exist."""

    def __init__(self, *, env_keys_filepath: str) -> None:
        super().__init__(f"[MISSING_ENV_KEYS_FILE] missing keys file ({env_keys_filepath})")
        self.env_keys_filepath = env_keys_filepath


class ParseError(RotatorError):
    """Raised when env file text contains a malformed assignment."""

    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class EncryptionError(RotatorError):
    """Raised when encryption operations or key generation fail."""


class DecryptionError(EncryptionError):
    """Raised when an encrypted value cannot be decrypted."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class DecryptionKeyMissingError(DecryptionError):
    """Raised when an encrypted value is found but no private key is available."""

    def __init__(self, *, key: str, private_key_name: str) -> None:
        super().__init__(
            f"[MISSING_PRIVATE_KEY] could not decrypt {key} using private key "
            f"'{private_key_name}=' (not found)",
            key=key,
        )
        self.private_key_name = private_key_name
