"""Every toolbox operation bound to one configuration."""

from pathlib import Path
from typing import Any

import httpx
from robyn import Response, status_codes
from robyn.responses import FileResponse

from toolbox.models.core import ToolConfiguration, UploadedFile
from toolbox.tools.download import download_static
from toolbox.tools.filesystem import create_dir_if_not_exist
from toolbox.tools.json_io import error_json, read_json, write_json
from toolbox.tools.randomness import random_string
from toolbox.tools.remote import push_json
from toolbox.tools.slug import slugify
from toolbox.tools.upload import upload_files, upload_one_file


class Tools:
    """Every toolbox operation sharing one read-only ``ToolConfiguration``."""

    __slots__ = ("config",)

    def __init__(self, config: ToolConfiguration | None = None) -> None:
        self.config = config or ToolConfiguration()

    def random_string(self, n: int) -> str:
        return random_string(n)

    def create_dir_if_not_exist(self, path: str | Path) -> Path:
        return create_dir_if_not_exist(path)

    def upload_files(self, request: Any, upload_dir: str | Path, rename: bool = True) -> list[UploadedFile]:
        return upload_files(request, upload_dir, rename=rename, config=self.config)

    def upload_one_file(self, request: Any, upload_dir: str | Path, rename: bool = True) -> UploadedFile:
        return upload_one_file(request, upload_dir, rename=rename, config=self.config)

    def slugify(self, text: str) -> str:
        return slugify(text)

    def read_json(self, request: Any, target: Any = None) -> Any:
        return read_json(request, target, config=self.config)

    def write_json(self, status_code: int, data: Any, headers: dict[str, str] | None = None) -> Response:
        return write_json(status_code, data, headers)

    def error_json(self, err: Exception, status_code: int = status_codes.HTTP_400_BAD_REQUEST) -> Response:
        return error_json(err, status_code)

    def push_json(self, url: str, data: Any, client: httpx.Client | None = None) -> tuple[httpx.Response, int]:
        return push_json(url, data, client)

    def download_static(self, path: str | Path, file_name: str, display_name: str) -> FileResponse:
        return download_static(path, file_name, display_name)
