#!/usr/bin/env python3
"""Example demonstrating env file keypair rotation."""

import tempfile
from pathlib import Path

from splurge_dotenv_rotator import CryptoUtils, EnvRotator, FileManager
from splurge_dotenv_rotator.env_parser import parse


def main() -> None:
    """Demonstrate rotating the keypair of an env file."""

    with tempfile.TemporaryDirectory() as temp_dir:
        env_path = Path(temp_dir) / ".env"
        keys_path = Path(temp_dir) / ".env.keys"

        print("🔐 Env Rotation Example")
        print("=" * 50)

        # Encrypt a couple of values with an initial keypair
        public_key, private_key = CryptoUtils.generate_keypair()
        env_path.write_text(
            f'DOTENV_PUBLIC_KEY="{public_key}"\n'
            "\n"
            "HELLO=World\n"
            f'API_KEY="{CryptoUtils.encrypt_value("sk-live-123", public_key)}"\n'
            f'DB_PASS="{CryptoUtils.encrypt_value("hunter2", public_key)}"\n',
            encoding="utf-8",
        )
        keys_path.write_text(f'DOTENV_PRIVATE_KEY="{private_key}"\n', encoding="utf-8")
        print(f"📁 Wrote {env_path}")

        # Rotate everything except DB_PASS
        rotator = EnvRotator()
        result = rotator.rotate(str(env_path), exclude_key="DB_PASS")

        for record in result.processed_envs:
            if record.error:
                print(f"  ❌ {record.env_filepath}: {record.error}")
            else:
                print(f"  ✅ {record.env_filepath}: rotated {', '.join(record.keys) or 'no keys'}")

        # Nothing has been written yet
        written = FileManager().persist(result)
        print(f"\n💾 Wrote {len(written)} files")

        new_private_key = parse(keys_path.read_text(encoding="utf-8"))["DOTENV_PRIVATE_KEY"]
        api_key = parse(env_path.read_text(encoding="utf-8"))["API_KEY"]
        print(f"🔓 API_KEY decrypts to: {CryptoUtils.decrypt_value(api_key, new_private_key)}")


if __name__ == "__main__":
    main()
