"""Configuration helpers for claude-review-auditor."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple

try:
    import tomllib
except ImportError:  # pragma: no cover - Python 3.11+ includes tomllib; fallback to tomli on older versions
    import tomli as tomllib

from .constants import DEFAULT_REPO_LIMIT, KIND_ORGANIZATION, OWNER_KINDS, TARGET_SECRET

DEFAULT_CONFIG_PATH = "claude_review_audit.toml"

DEFAULT_CONFIG_TEXT = """# Claude Review Audit Configuration
# Owners are audited in the order listed. kind is "User" or "Organization".

target_secret = "CLAUDE_CODE_OAUTH_TOKEN"
repo_limit = 300

[[owners]]
name = "smartwatermelon"
kind = "User"

[[owners]]
name = "nightowlstudiollc"
kind = "Organization"
"""


class ConfigError(Exception):
    """Raised when configuration cannot be loaded."""


@dataclass(frozen=True)
class Owner:
    """A GitHub account whose repositories are audited."""

    name: str
    kind: str

    @property
    def is_organization(self) -> bool:
        return self.kind == KIND_ORGANIZATION


@dataclass(frozen=True)
class AuditConfig:
    owners: Tuple[Owner, ...]
    target_secret: str = TARGET_SECRET
    repo_limit: int = DEFAULT_REPO_LIMIT


def write_default_config(config_path: str | Path = DEFAULT_CONFIG_PATH) -> Path:
    """
    Write the default configuration file if it does not already exist.

    Args:
        config_path: Path where the configuration should reside.

    Returns:
        The resolved path to the configuration file.
    """
    path = Path(config_path)
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(DEFAULT_CONFIG_TEXT, encoding="utf-8")
    return path


def load_config(config_path: str | Path = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """
    Load raw configuration from a TOML file, creating a default file when missing.

    Raises:
        ConfigError: If reading or parsing fails.
    """
    path = write_default_config(config_path)

    try:
        with path.open("rb") as stream:
            return tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to load configuration from {path}") from exc


def parse_config(raw: Dict[str, Any]) -> AuditConfig:
    """
    Validate a raw configuration mapping.

    Raises:
        ConfigError: On missing owner names, unknown owner kinds or a bad repo_limit.
    """
    owners = []
    for index, entry in enumerate(raw.get("owners") or []):
        if not isinstance(entry, dict):
            raise ConfigError(f"owners[{index}] must be a table")
        name = entry.get("name")
        if not isinstance(name, str) or not name:
            raise ConfigError(f"owners[{index}] is missing a name")
        kind = entry.get("kind")
        if kind not in OWNER_KINDS:
            raise ConfigError(f"owners[{index}] ({name}) has unknown kind {kind!r}; expected one of {', '.join(OWNER_KINDS)}")
        owners.append(Owner(name=name, kind=kind))

    if not owners:
        raise ConfigError("No owners configured.")

    target_secret = raw.get("target_secret", TARGET_SECRET)
    if not isinstance(target_secret, str) or not target_secret:
        raise ConfigError("target_secret must be a non-empty string")

    repo_limit = raw.get("repo_limit", DEFAULT_REPO_LIMIT)
    if not isinstance(repo_limit, int) or isinstance(repo_limit, bool) or repo_limit <= 0:
        raise ConfigError("repo_limit must be a positive integer")

    return AuditConfig(owners=tuple(owners), target_secret=target_secret, repo_limit=repo_limit)


def load_audit_config(config_path: str | Path = DEFAULT_CONFIG_PATH) -> AuditConfig:
    """Load and validate the audit configuration."""
    return parse_config(load_config(config_path))
