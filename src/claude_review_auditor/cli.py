"""Command-line entry point for claude-review-auditor."""

from __future__ import annotations

import argparse
import sys
from datetime import datetime
from typing import Callable, Sequence

from .checker import check_repository
from .colors import C
from .config import DEFAULT_CONFIG_PATH, ConfigError, load_audit_config
from .display import print_banner, print_owner_header, print_repo_report, print_summary, print_warning
from .github_api import GitHubClient, get_auth_status, get_token_from_gh
from .summary import AuditSummary

MIN_PYTHON = (3, 10)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Audit Claude Code Review configuration across GitHub repositories (read-only).",
    )
    parser.add_argument("--verbose", action="store_true", help="Show additional informational details")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to TOML configuration file")
    return parser


def check_runtime(version_info=None) -> bool:
    """Whether the running interpreter is new enough."""
    version_info = version_info or sys.version_info
    return tuple(version_info[:2]) >= MIN_PYTHON


def main(
    argv: Sequence[str] | None = None,
    client: GitHubClient | None = None,
    stream=None,
    *,
    now: datetime | None = None,
    auth_status_fn: Callable[[], str] | None = None,
) -> int:
    """
    Run the audit.

    Args:
        argv: Optional argument list for testing.
        client: Optional GitHubClient override for testing.
        stream: Optional stream to write the report to. Defaults to stdout.
        now: Timestamp shown in the banner.
        auth_status_fn: Optional override for the `gh auth status` lookup.

    Returns:
        Exit code. Findings do not change it; only startup failures return 1.
    """
    stream = stream or sys.stdout

    if not check_runtime():
        required = ".".join(str(part) for part in MIN_PYTHON)
        print(
            f"{C.NG_RED}ERROR{C.RESET}: Python {required}+ required (found {sys.version.split()[0]}).",
            file=sys.stderr,
        )
        return 1

    args, unknown = _build_parser().parse_known_args(argv)
    for arg in unknown:
        print(f"Warning: unrecognized argument '{arg}'. Usage: claude-review-audit [--verbose]", file=sys.stderr)

    try:
        config = load_audit_config(args.config)
    except ConfigError as exc:
        stream.write(f"Failed to load configuration: {exc}\n")
        return 1

    if client is None:
        client = GitHubClient(token=None)
        if not client.token:
            client.token = get_token_from_gh()

    token_status = (auth_status_fn or get_auth_status)()
    print_banner(stream, config.owners, token_status, now or datetime.now(), config.target_secret)

    summary = AuditSummary()
    for owner in config.owners:
        print_owner_header(stream, owner)

        repos = client.list_repositories(owner.name, owner.kind, config.repo_limit)
        if not repos:
            print_warning(stream, f"No repos found for {owner.name} (no access or empty)")
            continue
        if len(repos) >= config.repo_limit:
            print_warning(
                stream,
                f"Hit the {config.repo_limit}-repo limit for {owner.name} — increase repo_limit if more repos exist",
            )
        stream.write(f"  Scanning {len(repos)} non-archived repos…\n")

        for name in repos:
            report = check_repository(client, owner, name, config.target_secret)
            print_repo_report(stream, report, verbose=args.verbose)
            summary = summary.add(report)

    print_summary(stream, summary)
    return 0
