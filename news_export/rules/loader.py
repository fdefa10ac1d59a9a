from pathlib import Path

import yaml
from pydantic import ValidationError

from news_export.core.errors import RulesLoadError
from news_export.rules.models import ExportRules


def extract_yaml(content: str) -> str:
    """
    Body of the first ```yaml fence, or the whole text when there is none.
    """
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


def load_rules(path: Path) -> ExportRules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises RulesLoadError if the YAML or its schema is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    with open(path) as f:
        content = f.read()

    try:
        data = yaml.safe_load(extract_yaml(content))
    except yaml.YAMLError as e:
        raise RulesLoadError(f"Invalid YAML syntax in rules file: {e}") from e

    # An empty file means all defaults
    if data is None:
        data = {}

    try:
        return ExportRules.model_validate(data)
    except ValidationError as e:
        raise RulesLoadError(f"Rules validation failed:\n{e}") from e
