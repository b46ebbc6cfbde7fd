"""
Filesystem Provisioner.

Creates the deployment's writable folders and proves each one is usable by
round-tripping a marker file through it.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Sequence
from pathlib import Path
from uuid import uuid4

from src.components.install.defaults import ACCESS_FILE_TEMPLATE
from src.components.install.errors import FilesystemError, FilesystemErrorKind

logger = logging.getLogger(__name__)

MARKER_CONTENT = "This is a test file generated by Fernpress. You can safely delete it."
ACCESS_FILE_NAME = ".htaccess"


class FilesystemProvisioner:
    """Folder provisioning rooted at the deployment directory."""

    def __init__(
        self,
        root_dir: str | Path,
        access_template: str | Path = ACCESS_FILE_TEMPLATE,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.access_template = Path(access_template)

    def provision(self, folders: Sequence[str]) -> None:
        for folder in folders:
            self._provision_folder(folder)

    def _provision_folder(self, folder: str) -> None:
        path = self.root_dir / folder
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(FilesystemErrorKind.CREATE_FAILED, folder) from e

        marker = path / f"fernpress-read-write-test-{uuid4()}.txt"
        try:
            with open(marker, "w", encoding="utf-8") as f:
                f.write(MARKER_CONTENT)
        except OSError as e:
            raise FilesystemError(FilesystemErrorKind.WRITE_FAILED, folder) from e

        try:
            with open(marker, encoding="utf-8") as f:
                content = f.read()
        except OSError as e:
            self._discard(marker)
            raise FilesystemError(FilesystemErrorKind.READ_FAILED, folder) from e

        self._discard(marker)
        if content != MARKER_CONTENT:
            raise FilesystemError(FilesystemErrorKind.READ_FAILED, folder)

        logger.debug("Folder /%s is read/write capable", folder)

    def _discard(self, marker: Path) -> None:
        try:
            marker.unlink()
        except OSError as e:
            logger.warning("Could not remove marker file %s: %s", marker, e)

    def ensure_access_file(self) -> None:
        target = self.root_dir / ACCESS_FILE_NAME
        if target.exists():
            return
        try:
            shutil.copyfile(self.access_template, target)
        except OSError as e:
            raise FilesystemError(
                FilesystemErrorKind.ACCESS_FILE_FAILED, ACCESS_FILE_NAME
            ) from e
        logger.info("Created %s", target)
