from pathlib import Path

import pytest

from pineblog.rules import BlogRules, load_rules

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def rules() -> BlogRules:
    """Rules loaded from the project's rules.yaml."""
    return load_rules(PROJECT_ROOT / "rules.yaml")
