import fcntl
import logging
import os
from pathlib import Path

from src.components.install.errors import (
    FilesystemError,
    FilesystemErrorKind,
    InstallLockedError,
)

logger = logging.getLogger(__name__)

LOCK_FILE_NAME = ".install.lock"


class InstallLock:
    """Advisory, non-blocking ``flock`` on ``<root>/.install.lock``."""

    def __init__(self, root_dir: str | Path) -> None:
        self.path = Path(root_dir) / LOCK_FILE_NAME
        self._fd: int | None = None

    @property
    def held(self) -> bool:
        return self._fd is not None

    def acquire(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_RDWR | os.O_CREAT, 0o600)
        except OSError as e:
            raise FilesystemError(
                FilesystemErrorKind.ROOT_UNAVAILABLE, str(self.path.parent)
            ) from e
        try:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError:
            os.close(fd)
            raise InstallLockedError() from None
        except OSError as e:
            os.close(fd)
            raise FilesystemError(
                FilesystemErrorKind.ROOT_UNAVAILABLE, str(self.path.parent)
            ) from e
        self._fd = fd
        logger.debug("Acquired %s", self.path)

    def release(self) -> None:
        if self._fd is None:
            return
        try:
            fcntl.flock(self._fd, fcntl.LOCK_UN)
        finally:
            os.close(self._fd)
            self._fd = None
        logger.debug("Released %s", self.path)
