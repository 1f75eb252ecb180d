"""constants モジュールのテスト。"""
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from claude_review_auditor.constants import (
    ASSISTANT_TRIGGERS,
    DEFAULT_OWNERS,
    DEFAULT_REPO_LIMIT,
    INTERACTIVE_TRIGGERS,
    OWNER_KINDS,
    WORKFLOWS_DIR,
)
from claude_review_auditor.config import DEFAULT_CONFIG_TEXT, parse_config

try:
    import tomllib
except ImportError:
    import tomli as tomllib


def test_workflows_dir():
    assert WORKFLOWS_DIR == ".github/workflows"


def test_interactive_triggers_are_assistant_triggers():
    assert set(INTERACTIVE_TRIGGERS) <= set(ASSISTANT_TRIGGERS)
    assert "issues:" in ASSISTANT_TRIGGERS


def test_default_config_text_matches_defaults():
    config = parse_config(tomllib.loads(DEFAULT_CONFIG_TEXT))
    assert tuple((o.name, o.kind) for o in config.owners) == DEFAULT_OWNERS
    assert config.repo_limit == DEFAULT_REPO_LIMIT
    assert all(o.kind in OWNER_KINDS for o in config.owners)
