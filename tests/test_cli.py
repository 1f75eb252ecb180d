from __future__ import annotations

import io
import sys
from datetime import datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

import claude_review_auditor.cli as cli_module  # noqa: E402
from claude_review_auditor.cli import check_runtime, main  # noqa: E402

from test_checker import CALLER_YML, GOOD_PROTECTION, StubClient  # noqa: E402

FIXED_NOW = datetime(2026, 1, 2, 3, 4, 5)

CONFIG_TEXT = """
[[owners]]
name = "alice"
kind = "User"

[[owners]]
name = "acme"
kind = "Organization"
"""


class FleetClient(StubClient):
    """StubClient that also lists repositories per owner."""

    def __init__(self, repos, **kwargs):
        super().__init__(**kwargs)
        self.repos = repos

    def list_repositories(self, owner, kind, limit):
        self.calls.append(("list", owner, kind, limit))
        return self.repos.get(owner)


def _healthy(repos):
    return FleetClient(
        repos,
        meta={"default_branch": "main", "visibility": "private"},
        files={"review.yml": CALLER_YML},
        secrets=["CLAUDE_CODE_OAUTH_TOKEN"],
        protection=GOOD_PROTECTION,
        actions_enabled=True,
    )


def _run(tmp_path, client, argv=()):
    config_path = tmp_path / "audit.toml"
    if not config_path.exists():
        config_path.write_text(CONFIG_TEXT, encoding="utf-8")
    buffer = io.StringIO()
    exit_code = main(
        ["--config", str(config_path), *argv],
        client=client,
        stream=buffer,
        now=FIXED_NOW,
        auth_status_fn=lambda: "Logged in to github.com account alice",
    )
    return exit_code, buffer.getvalue()


def test_all_clear_run(tmp_path):
    client = _healthy({"alice": ["app"], "acme": ["svc"]})

    exit_code, output = _run(tmp_path, client)

    assert exit_code == 0
    assert "Configuration looks complete" in output
    assert "All repos appear correctly configured" in output
    assert "CHANGES NEEDED" not in output
    assert "Token: Logged in to github.com account alice" in output
    assert [c[1] for c in client.calls if c[0] == "list"] == ["alice", "acme"]


def test_issues_still_exit_zero(tmp_path):
    client = _healthy({"alice": ["app"], "acme": []})
    client.actions_enabled = False

    exit_code, output = _run(tmp_path, client)

    assert exit_code == 0
    assert "CHANGES NEEDED (1):" in output
    assert "alice/app: Enable GitHub Actions in repo settings" in output
    assert "No repos found for acme (no access or empty)" in output


def test_verbose_shows_info_lines(tmp_path):
    client = _healthy({"alice": ["app"], "acme": None})

    _, quiet = _run(tmp_path, client)
    _, verbose = _run(tmp_path, client, ["--verbose"])

    assert "GitHub Actions: enabled" not in quiet
    assert "GitHub Actions: enabled" in verbose


def test_unknown_argument_warns_and_continues(tmp_path, capsys):
    client = _healthy({"alice": ["app"], "acme": None})

    exit_code, output = _run(tmp_path, client, ["--bogus"])

    assert exit_code == 0
    assert "FINAL SUMMARY" in output
    assert "unrecognized argument '--bogus'" in capsys.readouterr().err


def test_repo_limit_warning(tmp_path):
    config_path = tmp_path / "audit.toml"
    config_path.write_text('repo_limit = 1\n' + CONFIG_TEXT, encoding="utf-8")
    client = _healthy({"alice": ["app"], "acme": None})

    _, output = _run(tmp_path, client)

    assert "Hit the 1-repo limit for alice" in output


def test_runs_are_idempotent(tmp_path):
    client = _healthy({"alice": ["app", "lib"], "acme": ["svc"]})
    client.secrets = []

    _, first = _run(tmp_path, client)
    _, second = _run(tmp_path, client)

    assert first == second


def test_config_error_returns_one(tmp_path):
    config_path = tmp_path / "audit.toml"
    config_path.write_text("owners = []\n", encoding="utf-8")

    exit_code, output = _run(tmp_path, _healthy({}))

    assert exit_code == 1
    assert "Failed to load configuration" in output


def test_unsupported_runtime_aborts_before_network(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(cli_module, "check_runtime", lambda: False)
    client = _healthy({"alice": ["app"]})

    exit_code, output = _run(tmp_path, client)

    assert exit_code == 1
    assert client.calls == []
    assert output == ""
    assert "required" in capsys.readouterr().err


def test_check_runtime():
    assert check_runtime((3, 12, 0)) is True
    assert check_runtime((3, 9, 18)) is False
