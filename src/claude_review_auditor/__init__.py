"""claude_review_auditor package."""

from .checker import RepoReport, check_repository
from .config import DEFAULT_CONFIG_TEXT, AuditConfig, ConfigError, Owner, load_audit_config
from .github_api import GitHubClient
from .summary import AuditSummary, summarize
from .workflows import classify_workflow

__all__ = [
    "AuditConfig",
    "AuditSummary",
    "ConfigError",
    "DEFAULT_CONFIG_TEXT",
    "GitHubClient",
    "Owner",
    "RepoReport",
    "check_repository",
    "classify_workflow",
    "load_audit_config",
    "summarize",
]
