"""Per-repository Claude review policy checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .config import Owner
from .constants import (
    BLOCKING_REVIEW_WORKFLOW,
    CATEGORY_ASSISTANT,
    CATEGORY_BLOCKING_REVIEW,
    CATEGORY_CODE_REVIEW,
    REQUIRED_CHECK_KEYWORD,
    TARGET_SECRET,
    WORKFLOWS_DIR,
)
from .github_api import GitHubClient
from .workflows import CallerInfo, classify_workflow, expected_check_name, find_caller_info, passes_oauth_secret

OK = "ok"
FAIL = "fail"
WARN = "warn"
INFO = "info"

REPO_ACCESS_ERROR = "repo access error"


@dataclass(frozen=True)
class Finding:
    """One console line of a repository check."""

    level: str
    message: str


@dataclass
class RepoReport:
    """Result of auditing a single repository."""

    full_name: str
    findings: List[Finding] = field(default_factory=list)
    issues: List[str] = field(default_factory=list)

    def ok(self, message: str) -> None:
        self.findings.append(Finding(OK, message))

    def fail(self, message: str) -> None:
        self.findings.append(Finding(FAIL, message))

    def warn(self, message: str) -> None:
        self.findings.append(Finding(WARN, message))

    def info(self, message: str) -> None:
        self.findings.append(Finding(INFO, message))

    def add_issue(self, issue: str) -> None:
        self.issues.append(issue)

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)


@dataclass
class WorkflowScan:
    has_blocking_caller: bool = False
    has_assistant: bool = False
    has_code_review: bool = False
    caller: CallerInfo = field(default_factory=CallerInfo)

    @property
    def any_claude_workflow(self) -> bool:
        return self.has_blocking_caller or self.has_assistant or self.has_code_review


def merge_required_checks(protection: dict) -> List[str]:
    """
    Collect required status check names from both the legacy ``contexts``
    list and the newer ``checks`` list, deduplicated and sorted.
    """
    required = protection.get("required_status_checks") or {}
    if not isinstance(required, dict):
        return []
    names = set()
    for context in required.get("contexts") or []:
        if isinstance(context, str) and context:
            names.add(context)
    for check in required.get("checks") or []:
        if isinstance(check, dict) and isinstance(check.get("context"), str) and check["context"]:
            names.add(check["context"])
    return sorted(names)


def claude_checks(checks: Iterable[str]) -> List[str]:
    return [name for name in checks if REQUIRED_CHECK_KEYWORD in name.lower()]


def org_secret_grants_access(visibility: Optional[str], selected_repos: Optional[Sequence[str]], repo_name: str) -> bool:
    """Whether an org-level secret with the given visibility reaches ``repo_name``."""
    if visibility in ("all", "private"):
        return True
    if visibility == "selected":
        return repo_name in (selected_repos or [])
    return False


def _enabled_flag(protection: dict, key: str) -> bool:
    value = protection.get(key)
    if isinstance(value, dict):
        return bool(value.get("enabled", False))
    return bool(value)


def check_workflows(client: GitHubClient, full_name: str, report: RepoReport, target_secret: str = TARGET_SECRET) -> WorkflowScan:
    scan = WorkflowScan()
    entries = client.list_directory(full_name, WORKFLOWS_DIR)
    names = [e["name"] for e in entries or [] if isinstance(e, dict) and isinstance(e.get("name"), str)]

    if not names:
        report.fail(f"No {WORKFLOWS_DIR} directory found")
        report.add_issue(f"Add {WORKFLOWS_DIR} with Claude workflow(s)")
        return scan

    for wf in names:
        raw = client.fetch_file(full_name, f"{WORKFLOWS_DIR}/{wf}")
        if not raw:
            report.warn(f"Could not fetch {wf} — skipped")
            continue

        categories = classify_workflow(raw)

        if CATEGORY_BLOCKING_REVIEW in categories:
            scan.has_blocking_caller = True
            scan.caller = find_caller_info(raw)
            job_suffix = f" (job: {scan.caller.job_key})" if scan.caller.job_key else ""
            report.ok(f"Blocking review caller: {wf}{job_suffix}")

            if passes_oauth_secret(raw):
                report.ok("Caller passes claude_oauth_token secret to blocking review")
            else:
                report.fail("Caller does not appear to pass claude_oauth_token to blocking review")
                report.add_issue(f"In {wf}, add: secrets: claude_oauth_token: ${{{{ secrets.{target_secret} }}}}")

        if CATEGORY_ASSISTANT in categories:
            scan.has_assistant = True
            report.ok(f"Claude assistant workflow: {wf}")

        if CATEGORY_CODE_REVIEW in categories:
            scan.has_code_review = True
            report.ok(f"Claude code review workflow: {wf}")

    if not scan.any_claude_workflow:
        report.fail(f"No Claude workflows found ({len(names)} workflow files scanned)")
        report.add_issue(f"Add workflow calling {BLOCKING_REVIEW_WORKFLOW} and/or claude-assistant (claude.yml)")

    return scan


def check_secret(client: GitHubClient, owner: Owner, repo_name: str, report: RepoReport, target_secret: str = TARGET_SECRET) -> bool:
    full_name = f"{owner.name}/{repo_name}"
    found = False

    repo_secrets = client.list_repo_secrets(full_name)
    if repo_secrets is None:
        report.warn("Could not read repo secrets (token scope may be insufficient)")
        report.add_issue(f"Verify {target_secret} secret exists — could not check")
    elif target_secret in repo_secrets:
        found = True
        report.ok(f"{target_secret} found in repo secrets")

    if not found and owner.is_organization:
        # /repositories は visibility=selected のときしか中身を返さない
        visibility = client.get_org_secret_visibility(owner.name, target_secret)
        selected = None
        if visibility == "selected":
            selected = client.list_org_secret_repositories(owner.name, target_secret)
        if org_secret_grants_access(visibility, selected, repo_name):
            found = True
            if visibility == "selected":
                report.ok(f"{target_secret} available via org-level secret (selected for this repo)")
            else:
                report.ok(f"{target_secret} available via org-level secret (visibility={visibility})")

    if not found and repo_secrets is not None:
        report.fail(f"{target_secret} not found at repo or org level")
        if owner.is_organization:
            report.add_issue(f"Add {target_secret} at repo level, or configure org-level secret to include this repo")
        else:
            report.add_issue(f"Add {target_secret} secret to this repo")

    return found


def check_branch_protection(client: GitHubClient, full_name: str, default_branch: str, caller: CallerInfo, report: RepoReport) -> None:
    protection = client.get_branch_protection(full_name, default_branch)
    if protection is None:
        report.fail(f"No branch protection on '{default_branch}'")
        report.add_issue(f"Enable branch protection on '{default_branch}' with Claude review as required status check")
        return

    all_checks = merge_required_checks(protection)
    matching = claude_checks(all_checks)
    if matching:
        report.ok(f"Claude review is a required status check on '{default_branch}'")
        for name in matching:
            report.ok(f"   check name: {name}")
    else:
        report.fail(f"Claude review is NOT in required status checks on '{default_branch}'")
        expected = expected_check_name(caller)
        hint = f' (expected: "{expected}")' if expected else ""
        report.add_issue(f"Add Claude review to required status checks on '{default_branch}'{hint}")
        if all_checks:
            report.info("Current required checks:")
            for name in all_checks:
                report.info(f"  - {name}")
        else:
            report.info("No required status checks configured at all")

    if not _enabled_flag(protection, "enforce_admins"):
        report.warn("enforce_admins=false: admins can merge without passing required checks")

    required = protection.get("required_status_checks")
    if not (isinstance(required, dict) and required.get("strict", False)):
        report.warn("strict=false: branch doesn't need to be up-to-date before merging")


def check_actions_enabled(client: GitHubClient, full_name: str, report: RepoReport) -> None:
    enabled = client.get_actions_enabled(full_name)
    if enabled is False:
        report.fail("GitHub Actions are DISABLED for this repo")
        report.add_issue("Enable GitHub Actions in repo settings")
    elif enabled is True:
        report.info("GitHub Actions: enabled")


def check_repository(client: GitHubClient, owner: Owner, repo_name: str, target_secret: str = TARGET_SECRET) -> RepoReport:
    """
    Audit one repository against the Claude review policy.

    Every check is best-effort and independent; only an unreachable
    repository stops the remaining checks.

    Args:
        client: Read-only GitHub API client.
        owner: Owner of the repository.
        repo_name: Repository name.
        target_secret: Name of the OAuth token secret.

    Returns:
        The repository's findings and remediation issues.
    """
    full_name = f"{owner.name}/{repo_name}"
    report = RepoReport(full_name=full_name)

    meta = client.get_repository(full_name)
    if meta is None:
        report.fail("Cannot access repo — skipping")
        report.add_issue(REPO_ACCESS_ERROR)
        return report

    default_branch = meta.get("default_branch") or "main"
    report.info(f"branch={default_branch}  visibility={meta.get('visibility')}")

    scan = check_workflows(client, full_name, report, target_secret)
    check_secret(client, owner, repo_name, report, target_secret)
    if scan.has_blocking_caller:
        check_branch_protection(client, full_name, default_branch, scan.caller, report)
    check_actions_enabled(client, full_name, report)

    if not report.has_issues:
        report.ok("Configuration looks complete")
    return report
