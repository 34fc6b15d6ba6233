"""aws-vault CLI — S3 file transfer and Secrets Manager upserts.

Usage examples::

    aws-vault upload --bucket my-bucket --file notes.txt --subdirectory backups
    aws-vault update-secret -n db-pass -r us-east-1 -d "prod db password" -j secret.json --update
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from dataclasses import dataclass, field
from typing import Any, Callable

from pydantic import ValidationError

from awsvault.base.config import SecretSpec, TransferRequest
from awsvault.base.exceptions import AwsVaultError, ConfigurationError, LocalFileError
from awsvault.base.logger import vault_logger
from awsvault.transfer import download_file, read_local_file, upload_file
from awsvault.upsert import Deadline, UpsertAction, upsert_secret

DEFAULT_TIMEOUT = "30s"

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(value: str) -> float:
    """Parse a duration such as ``30s``, ``1m30s`` or ``250ms`` into seconds.

    A bare number is taken as seconds.

    Raises:
        argparse.ArgumentTypeError: If the value is not a valid duration.
    """
    text = value.strip()
    try:
        return float(text)
    except ValueError:
        pass
    total = 0.0
    pos = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    if not text or pos != len(text):
        raise argparse.ArgumentTypeError(f"invalid duration: {value!r}")
    return total


@dataclass
class Command:
    """One subcommand: its flags and the handler that runs it."""

    name: str
    summary: str
    handler: Callable[[argparse.Namespace], None]
    flags: list[tuple[tuple[str, ...], dict[str, Any]]] = field(default_factory=list)


def _require(ns: argparse.Namespace, names: list[str]) -> None:
    """Fail before any network call if a required flag is missing or empty."""
    if any(not getattr(ns, name.lstrip("-").replace("-", "_")) for name in names):
        if len(names) == 2:
            listed = " and ".join(names)
        else:
            listed = ", ".join(names[:-1]) + ", and " + names[-1]
        raise ConfigurationError(f"Please provide all required input parameters: {listed}")


def _validated(model: type, **values: Any) -> Any:
    try:
        return model(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid input: {e}") from e


def _make_client(service_name: str, config: dict) -> Any:
    from botocore.exceptions import BotoCoreError
    from awsvault.factory import universal_factory

    try:
        return universal_factory(service_name, "aws", config)
    except (ValueError, BotoCoreError) as e:
        raise ConfigurationError(f"Error loading AWS SDK config: {e}") from e


# --- handlers ---


def _transfer_request(ns: argparse.Namespace) -> TransferRequest:
    _require(ns, ["--bucket", "--file"])
    return _validated(
        TransferRequest,
        bucket_name=ns.bucket,
        file_path=ns.file,
        subdirectory=ns.subdirectory,
    )


def _upload(ns: argparse.Namespace) -> None:
    request = _transfer_request(ns)
    storage = _make_client("storage", {})
    upload_file(storage, request)
    print("File uploaded to S3 successfully.")


def _download(ns: argparse.Namespace) -> None:
    request = _transfer_request(ns)
    storage = _make_client("storage", {})
    download_file(storage, request)
    print("File downloaded from S3 successfully.")


def _secret_spec(ns: argparse.Namespace, update_requested: bool) -> SecretSpec:
    _require(ns, ["--name", "--region", "--description", "--json-file"])
    try:
        secret_value = read_local_file(ns.json_file).decode("utf-8")
    except UnicodeDecodeError as e:
        raise LocalFileError(f"Secret file '{ns.json_file}' is not UTF-8 text: {e}") from e
    return _validated(
        SecretSpec,
        name=ns.name,
        region=ns.region,
        description=ns.description,
        secret_value=secret_value,
        timeout=ns.timeout,
        update_requested=update_requested,
    )


def _upsert(spec: SecretSpec) -> None:
    deadline = Deadline(spec.timeout)
    manager = _make_client("secret_manager", spec.client_config())
    result = upsert_secret(manager, spec, deadline)
    if result.action is UpsertAction.CREATED:
        print("Successfully created, Secret ARN:", result.arn)
    elif result.action is UpsertAction.UPDATED:
        print("Successfully updated secret.")
    else:
        print("Secret already exists and update flag not set. Exiting.")


def _create_secret(ns: argparse.Namespace) -> None:
    _upsert(_secret_spec(ns, update_requested=False))


def _update_secret(ns: argparse.Namespace) -> None:
    _upsert(_secret_spec(ns, update_requested=ns.update))


# --- command table ---


def _transfer_flags(verb: str) -> list[tuple[tuple[str, ...], dict[str, Any]]]:
    return [
        (("--bucket", "-b"), {"default": "", "help": "S3 bucket name"}),
        (("--file", "-f"), {"default": "", "help": f"Path to file to {verb}"}),
        (("--subdirectory", "-s"), {"default": "", "help": "Subdirectory in S3 bucket"}),
    ]


def _secret_flags() -> list[tuple[tuple[str, ...], dict[str, Any]]]:
    return [
        (("--name", "-n"), {"default": "", "help": "Name of the secret"}),
        (("--region", "-r"), {"default": "", "help": "AWS region"}),
        (("--description", "-d"), {"default": "", "help": "Description of the secret"}),
        (
            ("--json-file", "-j"),
            {"default": "", "help": "Path to JSON file containing secret value"},
        ),
        (
            ("--timeout", "-t"),
            {
                "type": parse_duration,
                "default": DEFAULT_TIMEOUT,
                "help": "Timeout for the operation (e.g. 30s, 1m30s)",
            },
        ),
    ]


def build_commands() -> list[Command]:
    """Assemble the command table."""
    update_flags = _secret_flags() + [
        (
            ("--update", "-u"),
            {"action": "store_true", "help": "Update secret if it already exists"},
        ),
    ]
    return [
        Command("upload", "Upload file to S3 bucket", _upload, _transfer_flags("upload")),
        Command("download", "Download file from S3 bucket", _download, _transfer_flags("download")),
        Command(
            "update-secret", "Update secret in Secrets Manager", _update_secret, update_flags
        ),
        Command(
            "create-secret", "Create secret in Secrets Manager", _create_secret, _secret_flags()
        ),
    ]


def _build_parser(commands: list[Command]) -> argparse.ArgumentParser:
    """Build the argparse parser for the ``aws-vault`` CLI.

    Returns:
        Configured :class:`~argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="aws-vault",
        description="CLI tool for interacting with AWS services",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Emit debug logs on stderr",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="command")
    for command in commands:
        sub = subparsers.add_parser(
            command.name, help=command.summary, description=command.summary
        )
        for names, options in command.flags:
            sub.add_argument(*names, **options)
        sub.set_defaults(handler=command.handler)
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Parses arguments and runs the selected command.  Status lines go to
    stdout; any failure prints one line to stderr and exits with status 1.

    Args:
        argv: Optional argument list (defaults to ``sys.argv``).
    """
    parser = _build_parser(build_commands())
    ns = parser.parse_args(argv)

    if ns.command is None:
        parser.print_usage()
        return

    if ns.verbose:
        vault_logger.set_level(logging.DEBUG)

    try:
        ns.handler(ns)
    except ConfigurationError as e:
        print(e, file=sys.stderr)
        sys.exit(1)
    except AwsVaultError as e:
        vault_logger.debug(f"{ns.command} failed", operation=ns.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
