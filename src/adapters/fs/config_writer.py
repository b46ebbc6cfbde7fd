"""
Config Committer.

Writes ``database.yaml`` from its template. The artifact doubles as the
"installed" bit, so it is written atomically and never overwritten.
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path

from src.components.install.defaults import CONFIG_TEMPLATE
from src.components.install.errors import CommitError, ConfigExistsError
from src.components.install.models import ConnectionDescriptor

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "database.yaml"

MSG_COMMIT_FAILED = (
    "Unable to create /database.yaml. Make sure the directory is writeable or create "
    "the file yourself by copying it from database.yaml.tmpl and try again."
)
MSG_ALREADY_INSTALLED = (
    "Fernpress is already installed. Remove /database.yaml to run the installer again."
)

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


def render_template(template: str, values: dict[str, str]) -> str:
    """Substitute ``{{name}}`` tokens with double-quoted YAML scalars.

    >>> render_template("user: {{user}}", {"user": "root"})
    'user: "root"'
    """

    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in values:
            return match.group(0)
        # JSON strings are valid YAML double-quoted scalars.
        return json.dumps(values[name])

    return _PLACEHOLDER.sub(substitute, template)


class ConfigCommitter:
    def __init__(
        self,
        root_dir: str | Path,
        template: str | Path = CONFIG_TEMPLATE,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.template = Path(template)

    @property
    def path(self) -> Path:
        return self.root_dir / CONFIG_FILE_NAME

    def exists(self) -> bool:
        return self.path.exists()

    def commit(self, descriptor: ConnectionDescriptor) -> None:
        """
        Render and write the artifact.

        Raises:
            ConfigExistsError: the artifact is already present.
            CommitError: the template could not be read or the file written.
        """
        if self.exists():
            raise ConfigExistsError(MSG_ALREADY_INSTALLED)

        try:
            template = self.template.read_text(encoding="utf-8")
        except OSError as e:
            raise CommitError(MSG_COMMIT_FAILED) from e

        content = render_template(template, descriptor.placeholders())
        tmp_path = self.path.with_name(f".{CONFIG_FILE_NAME}.{os.getpid()}.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            try:
                tmp_path.unlink(missing_ok=True)
            except OSError:
                logger.warning("Could not remove temporary file %s", tmp_path)
            raise CommitError(MSG_COMMIT_FAILED) from e

        logger.info("Wrote %s", self.path)

    def remove(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove %s: %s", self.path, e)
            return
        logger.info("Removed %s", self.path)
