#!/usr/bin/env python3
"""Command-line interface for the Splurge Dotenv Rotator."""

import argparse
import json
import logging
import sys
from typing import Any, Optional

from splurge_dotenv_rotator.config import RotatorConfig
from splurge_dotenv_rotator.crypto_utils import CryptoUtils
from splurge_dotenv_rotator.env_text import append
from splurge_dotenv_rotator.exceptions import PatternError, ValidationError
from splurge_dotenv_rotator.file_manager import FileManager
from splurge_dotenv_rotator.services.rotation import EnvRotator


class DotenvRotatorCLI:
    """Command-line interface for env file keypair rotation."""

    def __init__(self) -> None:
        """Initialize the CLI."""
        self._parser = self._create_parser()
        self._pretty = False

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser.

        Returns:
            Configured argument parser
        """
        parser = argparse.ArgumentParser(
            description="Splurge Dotenv Rotator - rotate the keypair of encrypted env files",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Rotate .env in the current directory
  splurge-dotenv-rotator rotate

  # Rotate several env files
  splurge-dotenv-rotator rotate -f .env -f .env.production

  # Rotate only some keys
  splurge-dotenv-rotator rotate -f .env -k API_KEY -k "DB_*"

  # Rotate everything except some keys
  splurge-dotenv-rotator rotate -f .env -ek "LEGACY_*"

  # Use a keys file somewhere else
  splurge-dotenv-rotator rotate -f .env -fk ../secrets/.env.keys

  # Show what would change without writing
  splurge-dotenv-rotator rotate -f .env --dry-run

  # Print the rewritten env file and its new private key instead of writing them
  splurge-dotenv-rotator rotate -f .env --stdout

  # Generate a keypair
  splurge-dotenv-rotator keypair --show-private
            """,
        )

        # Global arguments
        parser.add_argument(
            "--pretty",
            action="store_true",
            help="Pretty-print JSON outputs",
        )
        parser.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Log progress to stderr",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command",
            help="Available commands",
        )

        # Rotate command
        rotate_parser = subparsers.add_parser(
            "rotate",
            help="Rotate the keypair of env files and re-encrypt their values",
        )
        rotate_parser.add_argument(
            "-f",
            "--env-file",
            action="append",
            default=[],
            help="Path to an env file (repeatable, default: .env)",
        )
        rotate_parser.add_argument(
            "-fk",
            "--env-keys-file",
            help="Path to the keys file (default: .env.keys next to each env file)",
        )
        rotate_parser.add_argument(
            "-k",
            "--key",
            action="append",
            default=[],
            help="Key (or glob pattern) to rotate (repeatable, default: all keys)",
        )
        rotate_parser.add_argument(
            "-ek",
            "--exclude-key",
            action="append",
            default=[],
            help="Key (or glob pattern) to leave alone (repeatable)",
        )
        rotate_parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report what would change without writing any file",
        )
        rotate_parser.add_argument(
            "--stdout",
            action="store_true",
            help="Print the rewritten env files and their new private keys instead of writing them",
        )

        # Keypair command
        keypair_parser = subparsers.add_parser(
            "keypair",
            help="Generate a new keypair",
        )
        keypair_parser.add_argument(
            "--show-private",
            action="store_true",
            help="Include the private key in the output",
        )

        return parser

    def _print_json(self, payload: dict[str, Any]) -> None:
        """Print a JSON payload to stdout."""
        print(json.dumps(payload, indent=2 if self._pretty else None))

    def _print_error(self, *, message: str, code: str = "error", extra: dict[str, Any] | None = None) -> None:
        """Print a JSON error to stderr and exit non-zero."""
        error_obj = {
            "success": False,
            "error_code": code,
            "message": message,
        }
        if extra:
            error_obj["data"] = extra
        print(json.dumps(error_obj, indent=2), file=sys.stderr)
        sys.exit(1)

    def _handle_rotate(self, args: argparse.Namespace) -> None:
        """Handle rotate command."""
        self._handle_rotate_with_dependencies(
            env_files=args.env_file,
            env_keys_file=args.env_keys_file,
            keys=args.key,
            exclude_keys=args.exclude_key,
            dry_run=args.dry_run,
            to_stdout=args.stdout,
        )

    def _handle_rotate_with_dependencies(
        self,
        *,
        env_files: list[str],
        env_keys_file: str | None,
        keys: list[str],
        exclude_keys: list[str],
        dry_run: bool = False,
        to_stdout: bool = False,
        config: RotatorConfig | None = None
    ) -> None:
        """Handle rotate command with explicit dependencies.

        Args:
            env_files: Env file paths
            env_keys_file: Keys file override
            keys: Include key patterns
            exclude_keys: Exclude key patterns
            dry_run: Skip writing files
            to_stdout: Print rewritten env text instead of writing files
            config: Rotator configuration
        """
        try:
            rotator = EnvRotator(config)
            result = rotator.rotate(
                envs=env_files,
                key=keys,
                exclude_key=exclude_keys,
                env_keys_filepath=env_keys_file,
            )

            if to_stdout:
                # nothing is written, so the new private key goes out with the env text
                for record in result.processed_envs:
                    if record.changed:
                        sys.stdout.write(append(record.env_src, record.private_key_name, record.private_key))
                if result.has_errors:
                    self._print_error(
                        message="One or more env files could not be rotated",
                        code="rotation_failed",
                        extra=result.to_dict(),
                    )
                return

            written: list[str] = []
            if not dry_run:
                written = FileManager(config).persist(result)

            self._print_json({
                "success": not result.has_errors,
                "command": "rotate",
                "dry_run": dry_run,
                "written": written,
                **result.to_dict(),
            })

            if result.has_errors:
                sys.exit(1)

        except PatternError as e:
            self._print_error(message=str(e), code="pattern_error")
        except ValidationError as e:
            self._print_error(message=str(e), code="validation_error")
        except Exception as e:
            self._print_error(message=str(e), code="unexpected_error")

    def _handle_keypair(self, args: argparse.Namespace) -> None:
        """Handle keypair command."""
        try:
            public_key, private_key = CryptoUtils.generate_keypair()
            payload: dict[str, Any] = {
                "success": True,
                "command": "keypair",
                "public_key": public_key,
            }
            if args.show_private:
                payload["private_key"] = private_key
            self._print_json(payload)
        except Exception as e:
            self._print_error(message=str(e), code="unexpected_error")

    def run(self, args: Optional[list[str]] = None) -> None:
        """Run the CLI with given arguments."""
        try:
            parsed_args = self._parser.parse_args(args)
            self._pretty = bool(getattr(parsed_args, "pretty", False))

            if parsed_args.verbose:
                logging.basicConfig(
                    level=logging.DEBUG,
                    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                    stream=sys.stderr,
                )

            if not parsed_args.command:
                self._print_error(message="No command specified", code="missing_command")

            # Handle commands
            if parsed_args.command == "rotate":
                self._handle_rotate(parsed_args)
            elif parsed_args.command == "keypair":
                self._handle_keypair(parsed_args)
            else:
                self._print_error(message=f"Unknown command: {parsed_args.command}", code="unknown_command")

        except KeyboardInterrupt:
            self._print_error(message="Operation cancelled by user", code="cancelled")


def main() -> None:
    """Main entry point for the CLI."""
    cli = DotenvRotatorCLI()
    cli.run()


if __name__ == "__main__":
    main()
