"""Tests for the error taxonomy."""

import pytest

from toolbox.core.errors import (
    EmptyBodyError,
    FileSystemError,
    JSONDecodeError,
    NoFileUploadedError,
    NotFoundError,
    PayloadTooLargeError,
    SerializationError,
    ToolboxError,
    TransportError,
    TypeMismatchError,
    UnsupportedFileTypeError,
    UploadError,
    UploadIOError,
)
from toolbox.models.core import UploadedFile


@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (PayloadTooLargeError("too big", 10), 413),
        (UnsupportedFileTypeError("text/plain"), 415),
        (NoFileUploadedError(), 400),
        (UploadIOError("disk full"), 500),
        (EmptyBodyError(), 400),
        (SerializationError("bad"), 500),
        (TransportError("down"), 502),
        (NotFoundError("/x"), 404),
    ],
)
def test_status_codes(error: ToolboxError, status_code: int) -> None:
    """Verify every error suggests an HTTP status."""
    assert isinstance(error, ToolboxError)
    assert error.status_code == status_code
    assert str(error) == error.message


def test_upload_errors_carry_partial_results() -> None:
    """Verify the files stored before the failure are kept."""
    stored = UploadedFile(new_file_name="a.png", original_file_name="a.png", file_size=1)
    error = UnsupportedFileTypeError("text/plain", [stored])

    assert isinstance(error, UploadError)
    assert error.uploaded == [stored]


def test_upload_io_error_is_filesystem_error() -> None:
    assert issubclass(UploadIOError, FileSystemError)
    assert issubclass(UploadIOError, UploadError)


def test_type_mismatch_without_field() -> None:
    assert TypeMismatchError(offset=5).message == "body contains incorrect JSON type (at: 5)"
    assert issubclass(TypeMismatchError, JSONDecodeError)
