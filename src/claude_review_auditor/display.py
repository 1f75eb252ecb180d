"""
監査レポートの整形・出力。

すべての関数は stream に書き込むだけで、外部状態には触れない。
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence, TextIO

from .checker import INFO, RepoReport
from .colors import C, count, head, hl, ng, ok, repo, tagged
from .config import Owner
from .summary import AuditSummary

W = 58
BAR = "═" * W

CHECKS_DESCRIPTION = (
    "Claude workflow files (.github/workflows/*.yml)",
    "Caller passes claude_oauth_token secret to reusable workflow",
    "Secret: {secret} (repo + org level)",
    "Branch protection & required status checks (for blocking review)",
    "GitHub Actions enabled",
)


def print_banner(stream: TextIO, owners: Sequence[Owner], token_status: str, now: datetime, target_secret: str) -> None:
    """実行日時・認証状態・対象オーナー・チェック項目を表示する。"""
    stream.write(f"\n{BAR}\n")
    stream.write(f"  {head('Claude Review Configuration Audit')}\n")
    stream.write(f"  {now.strftime('%Y-%m-%d %H:%M:%S')}\n")
    stream.write(f"  Token: {token_status}\n")
    stream.write(f"{BAR}\n")
    stream.write("\nChecking the following owners:\n")
    for owner in owners:
        stream.write(f"  • {repo(owner.name)} ({owner.kind})\n")
    stream.write("\nWhat this script checks per repo:\n")
    for i, text in enumerate(CHECKS_DESCRIPTION, 1):
        stream.write(f"  {i}. {text.format(secret=target_secret)}\n")
    stream.write("\nNOTE: This script is read-only — it reports issues but makes no changes.\n")


def print_owner_header(stream: TextIO, owner: Owner) -> None:
    bar = "═" * 30
    stream.write(f"\n\n{bar}\n  {hl(owner.name)} ({owner.kind})\n{bar}\n")


def print_warning(stream: TextIO, message: str) -> None:
    stream.write(f"{tagged('warn', message)}\n")


def print_repo_report(stream: TextIO, report: RepoReport, verbose: bool = False) -> None:
    """1リポジトリ分の結果を表示する。info は verbose 時のみ。"""
    stream.write(f"\n── {repo(report.full_name)}\n")
    for finding in report.findings:
        if finding.level == INFO and not verbose:
            continue
        stream.write(f"{tagged(finding.level, finding.message)}\n")

    if report.has_issues:
        stream.write(f"\n  {ng(f'CHANGES NEEDED ({len(report.issues)}):')}\n")
        for issue in report.issues:
            stream.write(f"    → {issue}\n")


def print_summary(stream: TextIO, summary: AuditSummary) -> None:
    """最終サマリーを表示する。"""
    stream.write(f"\n\n{BAR}\n")
    stream.write(f"  {head('FINAL SUMMARY')}\n")
    stream.write(f"{BAR}\n")
    stream.write(f"  Repos scanned    : {count(summary.repos_scanned)}\n")
    stream.write(f"  Repos with issues: {count(len(summary.repos_with_issues))}\n")
    stream.write(f"  Total issues     : {count(summary.total_issues)}\n")

    if summary.all_clear:
        stream.write(f"\n  ✅ {ok('All repos appear correctly configured — no changes needed.')}\n")
    else:
        stream.write(f"\n  ❌ {ng('Repos requiring attention:')}\n")
        for name in summary.repos_with_issues:
            stream.write(f"    → {repo(name)}\n")

        stream.write("\n  All issues by repo:\n")
        for line in summary.issue_lines:
            stream.write(f"    • {line}\n")

    stream.write(f"\n{BAR}\n")
    stream.write(f"  {C.DIM}Run with --verbose for additional informational details.{C.RESET}\n")
    stream.write(f"{BAR}\n\n")
