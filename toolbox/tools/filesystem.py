"""Filesystem helpers."""

from pathlib import Path

from toolbox.core.errors import FileSystemError
from toolbox.core.logger import LogIcon, logger

DIRECTORY_MODE = 0o755


def create_dir_if_not_exist(path: str | Path) -> Path:
    """Create ``path`` and any missing parents. An existing directory is left as is."""
    directory = Path(path)
    if directory.is_dir():
        return directory

    try:
        directory.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
    except OSError as err:
        raise FileSystemError(f"could not create directory {directory}: {err.strerror or err}") from err

    logger.debug("Directory created", icon=LogIcon.FOLDER, path=str(directory))
    return directory
