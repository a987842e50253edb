"""Toolbox error definitions.

Every operation raises a subclass of ``ToolboxError``; none of them log or
swallow the failure. ``status_code`` is the HTTP status a handler would
normally answer with, ready to pass to ``error_json``.
"""

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from toolbox.models.core import UploadedFile


class ToolboxError(Exception):
    """Base class for toolbox errors."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# ============================================================================
#                           Filesystem & uploads
# ============================================================================


class PayloadTooLargeError(ToolboxError):
    """Raised when an upload or JSON body exceeds its configured size limit."""

    status_code = 413

    def __init__(self, message: str, limit: int) -> None:
        super().__init__(message)
        self.limit = limit


class FileSystemError(ToolboxError):
    """Raised when a directory or file cannot be created or written."""

    status_code = 500


class UploadError(ToolboxError):
    """Base class for upload failures, carrying the files stored before the failing part."""

    def __init__(self, message: str, uploaded: "list[UploadedFile] | None" = None) -> None:
        super().__init__(message)
        self.uploaded: list[UploadedFile] = list(uploaded or [])


class UnsupportedFileTypeError(UploadError):
    """Raised when a sniffed content type is not in the allow-list."""

    status_code = 415

    def __init__(self, content_type: str, uploaded: "list[UploadedFile] | None" = None) -> None:
        super().__init__("the uploaded file type is not permitted", uploaded)
        self.content_type = content_type


class UploadIOError(UploadError, FileSystemError):
    """Raised when an uploaded part cannot be persisted.

    ``partial_file`` is the file left behind when a write failed midway.
    """

    def __init__(
        self,
        message: str,
        uploaded: "list[UploadedFile] | None" = None,
        partial_file: Path | None = None,
    ) -> None:
        super().__init__(message, uploaded)
        self.partial_file = partial_file


class NoFileUploadedError(UploadError):
    """Raised when a single-file upload finds no file part."""

    def __init__(self) -> None:
        super().__init__("no file was uploaded")


# ============================================================================
#                               Slugify
# ============================================================================


class EmptyInputError(ToolboxError):
    """Raised when slugify receives an empty string."""

    def __init__(self) -> None:
        super().__init__("empty string")


class EmptyResultError(ToolboxError):
    """Raised when nothing is left after slug normalization."""

    def __init__(self) -> None:
        super().__init__("after removing characters, slug is zero length")


# ============================================================================
#                             JSON decoding
# ============================================================================


class JSONDecodeError(ToolboxError):
    """Base class for request body decode failures."""


class MalformedSyntaxError(JSONDecodeError):
    def __init__(self, offset: int) -> None:
        super().__init__(f"body contains badly-formed JSON (at character {offset})")
        self.offset = offset


class TruncatedInputError(JSONDecodeError):
    def __init__(self) -> None:
        super().__init__("body contains badly-formed JSON")


class TypeMismatchError(JSONDecodeError):
    def __init__(self, field: str | None = None, offset: int | None = None) -> None:
        if field:
            message = f'body contains incorrect JSON type for field "{field}"'
        else:
            message = f"body contains incorrect JSON type (at: {offset or 0})"
        super().__init__(message)
        self.field = field
        self.offset = offset


class EmptyBodyError(JSONDecodeError):
    def __init__(self) -> None:
        super().__init__("body must not be empty")


class UnknownFieldError(JSONDecodeError):
    def __init__(self, field: str) -> None:
        super().__init__(f'body contains unknown key "{field}"')
        self.field = field


class MultipleValuesError(JSONDecodeError):
    def __init__(self) -> None:
        super().__init__("body must contain only one JSON value")


# ============================================================================
#                       Encoding, transport & files
# ============================================================================


class SerializationError(ToolboxError):
    """Raised when a value cannot be encoded as JSON."""

    status_code = 500


class TransportError(ToolboxError):
    """Raised when a remote endpoint cannot be reached."""

    status_code = 502


class NotFoundError(ToolboxError):
    """Raised when a requested static file does not exist."""

    status_code = 404

    def __init__(self, path: str) -> None:
        super().__init__(f"file not found: {path}")
        self.path = path
