"""Library-wide constants.

These constants centralize tunable values used across modules to keep
behavior consistent and avoid duplication.
"""



class Constants:

    # File naming
    _DEFAULT_ENV_FILENAME: str = ".env"
    _DEFAULT_ENV_KEYS_FILENAME: str = ".env.keys"
    _ENV_SOURCE_TYPE_FILE: str = "envFile"

    # Key naming
    _PUBLIC_KEY_PREFIX: str = "DOTENV_PUBLIC_KEY"
    _PRIVATE_KEY_PREFIX: str = "DOTENV_PRIVATE_KEY"

    # Ciphertext marker
    _ENCRYPTED_PREFIX: str = "encrypted:"

    # secp256k1 / ECIES sizes
    _PRIVATE_KEY_SIZE_BYTES: int = 32
    _UNCOMPRESSED_PUBLIC_KEY_SIZE_BYTES: int = 65
    _AES_KEY_SIZE_BYTES: int = 32
    _NONCE_SIZE_BYTES: int = 16
    _TAG_SIZE_BYTES: int = 16
    _HKDF_INFO: bytes = b""

    @classmethod
    def DEFAULT_ENV_FILENAME(cls) -> str:
        return cls._DEFAULT_ENV_FILENAME

    @classmethod
    def DEFAULT_ENV_KEYS_FILENAME(cls) -> str:
        return cls._DEFAULT_ENV_KEYS_FILENAME

    @classmethod
    def ENV_SOURCE_TYPE_FILE(cls) -> str:
        return cls._ENV_SOURCE_TYPE_FILE

    @classmethod
    def PUBLIC_KEY_PREFIX(cls) -> str:
        return cls._PUBLIC_KEY_PREFIX

    @classmethod
    def PRIVATE_KEY_PREFIX(cls) -> str:
        return cls._PRIVATE_KEY_PREFIX

    @classmethod
    def ENCRYPTED_PREFIX(cls) -> str:
        return cls._ENCRYPTED_PREFIX

    # Private key scalar size
    @classmethod
    def PRIVATE_KEY_SIZE_BYTES(cls) -> int:
        return cls._PRIVATE_KEY_SIZE_BYTES

    @classmethod
    def UNCOMPRESSED_PUBLIC_KEY_SIZE_BYTES(cls) -> int:
        return cls._UNCOMPRESSED_PUBLIC_KEY_SIZE_BYTES

    @classmethod
    def AES_KEY_SIZE_BYTES(cls) -> int:
        return cls._AES_KEY_SIZE_BYTES

    # AES-GCM nonce
    @classmethod
    def NONCE_SIZE_BYTES(cls) -> int:
        return cls._NONCE_SIZE_BYTES

    @classmethod
    def TAG_SIZE_BYTES(cls) -> int:
        return cls._TAG_SIZE_BYTES

    @classmethod
    def HKDF_INFO(cls) -> bytes:
        return cls._HKDF_INFO
