"""Classification of GitHub Actions workflow files by content."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, FrozenSet, Optional

import yaml

from .constants import (
    ASSISTANT_TRIGGERS,
    BLOCKING_REVIEW_WORKFLOW,
    CATEGORY_ASSISTANT,
    CATEGORY_BLOCKING_REVIEW,
    CATEGORY_CODE_REVIEW,
    CLAUDE_ACTION,
    INTERACTIVE_TRIGGERS,
    PULL_REQUEST_TRIGGER,
    SECRET_PASSING_KEY,
)

_COMMENT_LINE = re.compile(r"^\s*#")
_JOB_KEY_LINE = re.compile(r"^  ([A-Za-z0-9_-]+):")


@dataclass(frozen=True)
class CallerInfo:
    """Display name and job key of a workflow that calls the blocking review."""

    workflow_name: Optional[str] = None
    job_key: Optional[str] = None


def strip_comments(text: str) -> str:
    """Drop lines whose first non-blank character is ``#``."""
    return "\n".join(line for line in text.splitlines() if not _COMMENT_LINE.match(line))


def classify_workflow(text: str) -> FrozenSet[str]:
    """
    Return the set of Claude workflow categories a workflow file belongs to.

    Comment-only lines are ignored so that usage examples in documentation
    comments do not count. Categories are evaluated independently; a file
    may belong to none, one, or several of them.
    """
    content = strip_comments(text)
    categories = set()

    if BLOCKING_REVIEW_WORKFLOW in content:
        categories.add(CATEGORY_BLOCKING_REVIEW)

    if CLAUDE_ACTION in content:
        if any(trigger in content for trigger in ASSISTANT_TRIGGERS):
            categories.add(CATEGORY_ASSISTANT)
        if PULL_REQUEST_TRIGGER in content and not any(trigger in content for trigger in INTERACTIVE_TRIGGERS):
            categories.add(CATEGORY_CODE_REVIEW)

    return frozenset(categories)


def passes_oauth_secret(text: str) -> bool:
    return SECRET_PASSING_KEY in text


def _references(node: Any, needle: str) -> bool:
    if isinstance(node, str):
        return needle in node
    if isinstance(node, dict):
        return any(_references(key, needle) or _references(value, needle) for key, value in node.items())
    if isinstance(node, list):
        return any(_references(item, needle) for item in node)
    return False


def _scan_caller_info(text: str) -> CallerInfo:
    """Line-based fallback for documents PyYAML cannot parse."""
    workflow_name = None
    for line in text.splitlines():
        if line.startswith("name:"):
            workflow_name = line[len("name:"):].strip().replace("'", "").replace('"', "") or None
            break

    job_key = None
    current_job = None
    for line in text.splitlines():
        match = _JOB_KEY_LINE.match(line)
        if match:
            current_job = match.group(1)
        if current_job and BLOCKING_REVIEW_WORKFLOW in line:
            job_key = current_job
            break

    return CallerInfo(workflow_name=workflow_name, job_key=job_key)


def find_caller_info(text: str) -> CallerInfo:
    """
    Locate the display name of a caller workflow and the job that invokes
    the reusable blocking review workflow.

    Args:
        text: Raw workflow YAML.

    Returns:
        CallerInfo with whichever fields could be determined.
    """
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError:
        return _scan_caller_info(text)
    if not isinstance(document, dict):
        return _scan_caller_info(text)

    name = document.get("name")
    workflow_name = str(name) if isinstance(name, (str, int, float)) and str(name) else None

    job_key = None
    jobs = document.get("jobs")
    if isinstance(jobs, dict):
        for key, body in jobs.items():
            if _references(body, BLOCKING_REVIEW_WORKFLOW):
                job_key = str(key)
                break

    return CallerInfo(workflow_name=workflow_name, job_key=job_key)


def expected_check_name(caller: CallerInfo) -> Optional[str]:
    """Best-effort name of the status check a caller workflow reports."""
    if caller.workflow_name and caller.job_key:
        return f"{caller.workflow_name} / {caller.job_key}"
    if caller.job_key:
        return f"<workflow-name> / {caller.job_key}"
    return None
