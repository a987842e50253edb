"""Static file downloads."""

import mimetypes
from pathlib import Path

from robyn import Headers, status_codes
from robyn.responses import FileResponse

from toolbox.core.errors import NotFoundError
from toolbox.core.logger import LogIcon, logger

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def download_static(path: str | Path, file_name: str, display_name: str) -> FileResponse:
    """Serve ``path/file_name`` as an attachment named ``display_name``.

    Robyn streams the file itself; nothing is read into memory here.
    """
    file_path = Path(path) / file_name
    if not file_path.is_file():
        raise NotFoundError(str(file_path))

    content_type = mimetypes.guess_type(file_name)[0] or DEFAULT_CONTENT_TYPE
    headers = Headers(
        {
            "Content-Type": content_type,
            "Content-Disposition": f'attachment; filename"{display_name}"',
        }
    )

    logger.info("Static file served", icon=LogIcon.DOWNLOAD, file=str(file_path))
    return FileResponse(str(file_path), status_code=status_codes.HTTP_200_OK, headers=headers)
