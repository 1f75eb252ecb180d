"""colors モジュールのテスト。"""
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from claude_review_auditor.colors import C, TAGS, ok, ng, warn, head, dim, repo, hl, count, tagged


def test_c_has_reset():
    assert C.RESET == "\033[0m"


def test_ok_wraps_with_ok_grn():
    result = ok("text")
    assert C.OK_GRN in result
    assert "text" in result
    assert C.RESET in result


def test_ng_wraps_with_ng_red():
    result = ng("text")
    assert C.NG_RED in result
    assert result.endswith(C.RESET)


def test_warn_wraps_with_warn():
    assert warn("text") == f"{C.WARN}text{C.RESET}"


def test_head_wraps_with_title_and_bold():
    result = head("text")
    assert C.TITLE in result
    assert C.BOLD in result


def test_dim_and_repo_and_count():
    assert dim("x") == f"{C.DIM}x{C.RESET}"
    assert repo("x") == f"{C.REPO}x{C.RESET}"
    assert count(3) == f"{C.PURPLE}{C.BOLD}3{C.RESET}"


def test_tagged_uses_emoji_for_level():
    line = tagged("fail", "broken")
    assert line.startswith(f"  {TAGS['fail']} ")
    assert C.NG_RED in line
    assert "broken" in line


def test_tagged_unknown_level_is_plain():
    assert tagged("other", "text") == "  - text"


def test_hl_wraps_with_orange_and_bold():
    result = hl("text")
    assert result == f"{C.ORANGE}{C.BOLD}text{C.RESET}"
