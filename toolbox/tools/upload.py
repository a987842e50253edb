"""Multipart upload pipeline.

Parts are processed one at a time in the order Robyn decoded them. The first
failing part stops the batch; the files stored before it are attached to the
raised ``UploadError`` as ``uploaded`` so callers can clean them up.
"""

import io
from pathlib import Path
from typing import Any, BinaryIO

from toolbox.core.errors import (
    NoFileUploadedError,
    PayloadTooLargeError,
    UnsupportedFileTypeError,
    UploadIOError,
)
from toolbox.core.logger import LogIcon, logger
from toolbox.core.settings import settings as st
from toolbox.models.core import ToolConfiguration, UploadedFile, UploadFile
from toolbox.tools.filesystem import create_dir_if_not_exist
from toolbox.tools.randomness import random_string
from toolbox.tools.sniff import SNIFF_LEN, detect_content_type

COPY_CHUNK_SIZE = 1024 * 64
MAX_NAME_ATTEMPTS = 5


def request_size(request: Any, files: UploadFile) -> int:
    """Size of the multipart body: Content-Length when sent, else the sum of the parts."""
    headers = getattr(request, "headers", None)
    content_length = headers.get("content-length") if headers is not None else None
    try:
        return int(content_length) if content_length else files.total_size
    except ValueError:
        return files.total_size


def new_file_name(original: str, rename: bool) -> str:
    if not rename:
        return original
    return f"{random_string(st.RANDOM_NAME_LENGTH)}{Path(original).suffix}"


def _copy(source: BinaryIO, target: BinaryIO) -> int:
    total = 0
    while chunk := source.read(COPY_CHUNK_SIZE):
        target.write(chunk)
        total += len(chunk)
    return total


def _store(
    source: BinaryIO, directory: Path, original: str, rename: bool, uploaded: list[UploadedFile]
) -> UploadedFile:
    """Write ``source`` under ``directory`` without ever replacing an existing file.

    A write that fails after the file was created leaves it on disk; its path is
    attached to the raised ``UploadIOError`` as ``partial_file``.
    """
    attempts = MAX_NAME_ATTEMPTS if rename else 1
    for _ in range(attempts):
        target = directory / new_file_name(original, rename)
        try:
            outfile = target.open("xb")
        except FileExistsError:
            continue
        except OSError as err:
            raise UploadIOError(f"could not store {original}: {err.strerror or err}", uploaded) from err

        with outfile:
            try:
                size = _copy(source, outfile)
            except OSError as err:
                raise UploadIOError(
                    f"could not store {original}: {err.strerror or err}", uploaded, partial_file=target
                ) from err
        return UploadedFile(new_file_name=target.name, original_file_name=original, file_size=size)

    raise UploadIOError(f"could not store {original}: {directory / original} already exists", uploaded)


def upload_files(
    request: Any,
    upload_dir: str | Path,
    rename: bool = True,
    config: ToolConfiguration | None = None,
) -> list[UploadedFile]:
    """
    Persist every file part of a multipart request under ``upload_dir``.

    Args:
        request: Robyn request (anything exposing ``files`` and ``headers``).
        upload_dir: Destination directory, created if missing.
        rename: Store each part under a random name keeping the original extension.
        config: Size limit and content-type allow-list.

    Returns:
        One ``UploadedFile`` per part, in decode order.

    Raises:
        FileSystemError: The destination directory cannot be created.
        PayloadTooLargeError: The body exceeds ``max_file_size``.
        UnsupportedFileTypeError: A sniffed type is not in the allow-list.
        UploadIOError: A part cannot be written.
    """
    config = config or ToolConfiguration()
    max_size = config.effective_max_file_size

    directory = create_dir_if_not_exist(upload_dir)

    files = UploadFile.from_request(request)
    if request_size(request, files) > max_size:
        raise PayloadTooLargeError("the uploaded file is too big", max_size)

    uploaded: list[UploadedFile] = []
    for original, data in files:
        with io.BytesIO(data) as infile:
            content_type = detect_content_type(infile.read(SNIFF_LEN))
            if not config.allows(content_type):
                raise UnsupportedFileTypeError(content_type, uploaded)
            infile.seek(0)
            stored = _store(infile, directory, original, rename, uploaded)

        logger.info(
            "File uploaded",
            icon=LogIcon.UPLOAD,
            original=stored.original_file_name,
            stored=stored.new_file_name,
            size=stored.file_size,
            content_type=content_type,
        )
        uploaded.append(stored)

    return uploaded


def upload_one_file(
    request: Any,
    upload_dir: str | Path,
    rename: bool = True,
    config: ToolConfiguration | None = None,
) -> UploadedFile:
    """Single-file variant of ``upload_files``; returns the first stored part."""
    files = upload_files(request, upload_dir, rename=rename, config=config)
    if not files:
        raise NoFileUploadedError()
    return files[0]
