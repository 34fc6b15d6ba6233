"""Move one local file to or from object storage, whole, in memory."""

from __future__ import annotations

import os

from awsvault.base import CloudStorageBlueprint
from awsvault.base.config import TransferRequest
from awsvault.base.exceptions import LocalFileError
from awsvault.base.logger import vault_logger

# rw-r--r--
DOWNLOAD_FILE_MODE = 0o644


def read_local_file(path: str) -> bytes:
    try:
        with open(path, "rb") as fh:
            return fh.read()
    except OSError as e:
        raise LocalFileError(f"Failed to read file '{path}': {e}") from e


def write_local_file(path: str, data: bytes) -> None:
    """Overwrite ``path`` with ``data``; new files get mode 0644 (before umask)."""
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, DOWNLOAD_FILE_MODE)
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
    except OSError as e:
        raise LocalFileError(f"Failed to write file '{path}' to disk: {e}") from e


def upload_file(storage: CloudStorageBlueprint, request: TransferRequest) -> str:
    """Upload ``request.file_path`` under ``request.object_key``.

    Returns:
        The object key that was written.

    Raises:
        LocalFileError: If the file cannot be read.
        StorageError: If the upload fails.
    """
    data = read_local_file(request.file_path)
    storage.put_object(request.bucket_name, request.object_key, data)
    vault_logger.info(
        f"Uploaded {len(data)} bytes to s3://{request.bucket_name}/{request.object_key}",
        service="storage",
        operation="put_object",
    )
    return request.object_key


def download_file(storage: CloudStorageBlueprint, request: TransferRequest) -> str:
    """Download ``request.object_key`` to ``request.file_path``.

    The local file is overwritten unconditionally.

    Returns:
        The local path that was written.

    Raises:
        StorageError: If the download fails.
        LocalFileError: If the file cannot be written.
    """
    data = storage.get_object(request.bucket_name, request.object_key)
    write_local_file(request.file_path, data)
    vault_logger.info(
        f"Downloaded {len(data)} bytes from s3://{request.bucket_name}/{request.object_key}",
        service="storage",
        operation="get_object",
    )
    return request.file_path
