"""Aggregation of per-repository reports into a run summary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

from .checker import RepoReport


@dataclass(frozen=True)
class AuditSummary:
    repos_scanned: int = 0
    repos_with_issues: Tuple[str, ...] = ()
    issue_lines: Tuple[str, ...] = ()

    @property
    def total_issues(self) -> int:
        return len(self.issue_lines)

    @property
    def all_clear(self) -> bool:
        return not self.repos_with_issues

    def add(self, report: RepoReport) -> "AuditSummary":
        """Return a new summary that also covers ``report``."""
        if not report.has_issues:
            return AuditSummary(self.repos_scanned + 1, self.repos_with_issues, self.issue_lines)
        return AuditSummary(
            repos_scanned=self.repos_scanned + 1,
            repos_with_issues=self.repos_with_issues + (report.full_name,),
            issue_lines=self.issue_lines + tuple(f"{report.full_name}: {issue}" for issue in report.issues),
        )


def summarize(reports: Iterable[RepoReport]) -> AuditSummary:
    summary = AuditSummary()
    for report in reports:
        summary = summary.add(report)
    return summary
