"""Core models for request/response handling."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer

from toolbox.core.settings import settings as st

DEFAULT_MAX_FILE_SIZE = 1024 * 1024 * 1024
DEFAULT_MAX_JSON_SIZE = 1024 * 1024


class UploadFile:
    """Container for uploaded files from multipart/form-data requests."""

    __slots__ = ("files",)

    def __init__(self, files: dict[str, bytes] | None = None) -> None:
        self.files = files or {}

    @classmethod
    def from_request(cls, request: Any) -> "UploadFile":
        """Collect the file parts Robyn already decoded from the request."""
        return cls(files=dict(getattr(request, "files", None) or {}))

    def __bool__(self) -> bool:
        return bool(self.files)

    def __iter__(self):
        return iter(self.files.items())

    def __len__(self) -> int:
        return len(self.files)

    @property
    def total_size(self) -> int:
        return sum(len(data) for data in self.files.values())


class UploadedFile(BaseModel):
    """A multipart part persisted to disk."""

    model_config = ConfigDict(frozen=True)

    new_file_name: str
    original_file_name: str
    file_size: int


class JSONEnvelope(BaseModel):
    """Wire format for JSON error and success responses."""

    error: bool = False
    message: str = ""
    data: Any | None = None

    @model_serializer(mode="wrap")
    def _omit_empty_data(self, handler) -> dict[str, Any]:
        dumped = handler(self)
        if self.data is None:
            dumped.pop("data", None)
        return dumped


class ToolConfiguration(BaseModel):
    """
    Settings shared by every toolbox operation.

    A zero size limit falls back to the built-in default at the start of each
    operation; an empty ``allowed_file_types`` accepts every content type.
    """

    model_config = ConfigDict(frozen=True)

    max_file_size: int = Field(default_factory=lambda: st.MAX_FILE_SIZE, ge=0)
    allowed_file_types: frozenset[str] = Field(default_factory=lambda: frozenset(st.ALLOWED_FILE_TYPES))
    max_json_size: int = Field(default_factory=lambda: st.MAX_JSON_SIZE, ge=0)
    allow_unknown_fields: bool = Field(default_factory=lambda: st.ALLOW_UNKNOWN_FIELDS)

    @property
    def effective_max_file_size(self) -> int:
        return self.max_file_size or DEFAULT_MAX_FILE_SIZE

    @property
    def effective_max_json_size(self) -> int:
        return self.max_json_size or DEFAULT_MAX_JSON_SIZE

    def allows(self, content_type: str) -> bool:
        """Case-insensitive exact match against the allow-list."""
        if not self.allowed_file_types:
            return True
        return any(content_type.lower() == allowed.lower() for allowed in self.allowed_file_types)
