import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from pineblog.rules.models import BlogRules

RULES_ENV_VAR = "PINEBLOG_RULES"


def default_rules_path() -> Path:
    """Rules path from $PINEBLOG_RULES, else ./rules.yaml."""
    return Path(os.environ.get(RULES_ENV_VAR, "rules.yaml")).resolve()


def _extract_yaml(content: str) -> str:
    # Accept a Markdown document holding a ```yaml fenced block
    lines = content.splitlines()
    yaml_lines = []
    in_block = False
    found_block = False

    for line in lines:
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


def load_rules(path: Path | None = None) -> BlogRules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if the YAML or the schema is invalid.
    """
    path = path or default_rules_path()
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    with open(path) as f:
        content = f.read()

    try:
        data = yaml.safe_load(_extract_yaml(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    try:
        return BlogRules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e
