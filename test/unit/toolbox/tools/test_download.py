"""Tests for static file downloads."""

import pytest
from robyn.responses import FileResponse

from toolbox.core.errors import NotFoundError
from toolbox.tools.download import download_static


class TestDownloadStatic:
    """Tests for download_static."""

    def test_serves_file_as_attachment(self, tmp_path, png_bytes) -> None:
        """Verify the response points at the file and carries the disposition header."""
        (tmp_path / "tanjiro.png").write_bytes(png_bytes)

        response = download_static(tmp_path, "tanjiro.png", "Tanjiro.png")

        assert isinstance(response, FileResponse)
        assert response.status_code == 200
        assert response.file_path == str(tmp_path / "tanjiro.png")
        assert response.headers.get("Content-Disposition") == 'attachment; filename"Tanjiro.png"'
        assert response.headers.get("Content-Type") == "image/png"

    def test_unknown_extension_is_octet_stream(self, tmp_path) -> None:
        (tmp_path / "data.unknownext").write_bytes(b"\x00" * 10)

        response = download_static(str(tmp_path), "data.unknownext", "data")

        assert response.headers.get("Content-Type") == "application/octet-stream"

    def test_missing_file_raises(self, tmp_path) -> None:
        """Verify a missing file raises NotFoundError."""
        with pytest.raises(NotFoundError) as exc_info:
            download_static(tmp_path, "missing.jpg", "Missing.jpg")

        assert exc_info.value.status_code == 404

    def test_directory_is_not_served(self, tmp_path) -> None:
        """Verify directories count as missing."""
        (tmp_path / "sub").mkdir()

        with pytest.raises(NotFoundError):
            download_static(tmp_path, "sub", "sub")
