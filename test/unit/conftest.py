"""Test fixtures for toolbox unit tests."""

import struct
import zlib
from dataclasses import dataclass, field

import pytest

from toolbox.models.core import ToolConfiguration


# -----------------------------------------------------------------------------
# Mock classes for Robyn Request
# -----------------------------------------------------------------------------


@dataclass
class MockHeaders:
    """Mock Headers object for Robyn Request."""

    _data: dict = field(default_factory=dict)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._data.get(key.lower(), default)

    def set(self, key: str, value: str) -> None:
        self._data[key.lower()] = value

    def __getitem__(self, key: str) -> str:
        return self._data[key.lower()]


@dataclass
class MockRequest:
    """Mock Request object for Robyn."""

    body: str | bytes = b""
    files: dict[str, bytes] = field(default_factory=dict)
    headers: MockHeaders = field(default_factory=MockHeaders)
    method: str = "POST"
    path: str = "/"


# -----------------------------------------------------------------------------
# Payloads
# -----------------------------------------------------------------------------


def build_png(width: int = 16, height: int = 16) -> bytes:
    """Encode a solid red RGB image as PNG."""

    def chunk(tag: bytes, data: bytes) -> bytes:
        return struct.pack(">I", len(data)) + tag + data + struct.pack(">I", zlib.crc32(tag + data) & 0xFFFFFFFF)

    header = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    rows = b"".join(b"\x00" + b"\xff\x00\x00" * width for _ in range(height))
    return b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", header) + chunk(b"IDAT", zlib.compress(rows)) + chunk(b"IEND", b"")


@pytest.fixture(scope="session")
def png_bytes() -> bytes:
    return build_png()


# -----------------------------------------------------------------------------
# Request factories
# -----------------------------------------------------------------------------


@pytest.fixture
def make_json_request():
    """Factory fixture to create requests carrying a raw JSON body."""

    def _make(body: str | bytes = b"") -> MockRequest:
        return MockRequest(body=body, headers=MockHeaders({"content-type": "application/json"}))

    return _make


@pytest.fixture
def make_upload_request():
    """Factory fixture to create multipart requests from ``{filename: bytes}``."""

    def _make(files: dict[str, bytes] | None = None, content_length: int | None = None) -> MockRequest:
        headers = MockHeaders({"content-type": "multipart/form-data; boundary=toolbox"})
        if content_length is not None:
            headers.set("content-length", str(content_length))
        return MockRequest(files=dict(files or {}), headers=headers)

    return _make


@pytest.fixture
def png_only() -> ToolConfiguration:
    return ToolConfiguration(allowed_file_types=frozenset({"image/jpg", "image/png"}))
