from pathlib import Path

import yaml
from pydantic import ValidationError

from src.rules.models import InstallRules


def extract_yaml(content: str) -> str:
    """Return the first ```yaml fenced block, or the whole text if there is none."""
    yaml_lines = []
    in_block = False
    found_block = False

    for line in content.splitlines():
        s_line = line.strip()
        if s_line.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and s_line.startswith("```"):
            break
        if in_block:
            yaml_lines.append(line)

    return "\n".join(yaml_lines) if found_block else content


def load_rules(path: Path) -> InstallRules:
    """
    Load and validate the installer rules file.
    A missing file yields the defaults.
    Raises ValueError if the YAML or the schema is invalid.
    """
    if not path.exists():
        return InstallRules()

    with open(path, encoding="utf-8") as f:
        content = f.read()

    try:
        data = yaml.safe_load(extract_yaml(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    # An empty file means "all defaults"
    if data is None:
        return InstallRules()

    try:
        return InstallRules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e
