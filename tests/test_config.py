from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from claude_review_auditor.config import (  # noqa: E402
    AuditConfig,
    ConfigError,
    Owner,
    load_audit_config,
    load_config,
    parse_config,
)


def test_load_config_creates_default_when_missing(tmp_path: Path) -> None:
    config_path = tmp_path / "claude_review_audit.toml"

    config = load_audit_config(config_path)

    assert config.owners == (
        Owner("smartwatermelon", "User"),
        Owner("nightowlstudiollc", "Organization"),
    )
    assert config.target_secret == "CLAUDE_CODE_OAUTH_TOKEN"
    assert config.repo_limit == 300
    assert config_path.exists()
    assert "# Claude Review Audit Configuration" in config_path.read_text(encoding="utf-8")


def test_load_config_reads_existing_config(tmp_path: Path) -> None:
    config_path = tmp_path / "audit.toml"
    config_path.write_text(
        """repo_limit = 50

[[owners]]
name = "acme"
kind = "Organization"
""",
        encoding="utf-8",
    )

    config = load_audit_config(config_path)

    assert config == AuditConfig(owners=(Owner("acme", "Organization"),), repo_limit=50)
    assert config.owners[0].is_organization is True


def test_load_config_rejects_invalid_toml(tmp_path: Path) -> None:
    config_path = tmp_path / "audit.toml"
    config_path.write_text("owners = [\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(config_path)


@pytest.mark.parametrize(
    "raw",
    [
        {},
        {"owners": []},
        {"owners": [{"kind": "User"}]},
        {"owners": [{"name": "alice", "kind": "Team"}]},
        {"owners": ["alice"]},
        {"owners": [{"name": "alice", "kind": "User"}], "repo_limit": 0},
        {"owners": [{"name": "alice", "kind": "User"}], "repo_limit": True},
        {"owners": [{"name": "alice", "kind": "User"}], "target_secret": ""},
    ],
)
def test_parse_config_rejects_bad_values(raw) -> None:
    with pytest.raises(ConfigError):
        parse_config(raw)


def test_owner_order_is_preserved() -> None:
    config = parse_config(
        {"owners": [{"name": "b", "kind": "User"}, {"name": "a", "kind": "Organization"}]}
    )

    assert [owner.name for owner in config.owners] == ["b", "a"]
    assert config.owners[0].is_organization is False
