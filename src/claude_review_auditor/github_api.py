"""
GitHub REST API クライアント。gh コマンドによるトークン取得・認証状態表示と、
監査に必要な読み取り専用リクエストを提供する。

すべての取得処理はベストエフォート: HTTP エラー・通信エラー・JSON 解析失敗は
例外を投げず None を返す。
"""

from __future__ import annotations

import base64
import binascii
import os
import subprocess
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from .constants import AUTH_STATUS_PLACEHOLDER, DEFAULT_REPO_LIMIT, KIND_ORGANIZATION

API_BASE = "https://api.github.com"
PER_PAGE = 100


def get_token_from_gh() -> str | None:
    """gh auth token コマンドで GitHub トークンを取得する。取得できなければ None。"""
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True, text=True, timeout=10
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None
    return result.stdout.strip() or None


def get_auth_status() -> str:
    """gh auth status の "Logged in" 行を返す。失敗時はプレースホルダー。"""
    try:
        result = subprocess.run(
            ["gh", "auth", "status"],
            capture_output=True, text=True, timeout=10
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return AUTH_STATUS_PLACEHOLDER
    # gh は状態を stderr に出すバージョンがある
    for line in (result.stdout + "\n" + result.stderr).splitlines():
        if "Logged in" in line:
            return " ".join(line.split())
    return AUTH_STATUS_PLACEHOLDER


class GitHubClient:
    """Small read-only wrapper around requests for the GitHub REST API."""

    def __init__(self, token: str | None = None, session: requests.Session | None = None) -> None:
        self.session = session or requests.Session()
        self.token = token or os.getenv("GITHUB_TOKEN") or os.getenv("GH_TOKEN")
        self._login: str | None = None
        self._login_fetched = False

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "claude-review-auditor/0.1",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _get(self, url: str, params: Dict[str, Any] | None = None) -> requests.Response | None:
        try:
            response = self.session.get(url, params=params, headers=self._headers(), timeout=15)
        except requests.RequestException:
            return None
        if response.status_code != 200:
            return None
        return response

    def get_json(self, path: str, params: Dict[str, Any] | None = None) -> Any:
        """
        GET a path relative to the API root.

        Returns:
            Parsed JSON, or None for any error status, network failure or
            unparseable body.
        """
        url = path if path.startswith("http") else f"{API_BASE}/{path.lstrip('/')}"
        response = self._get(url, params)
        if response is None:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    def authenticated_login(self) -> str | None:
        """Login of the token's user, fetched once."""
        if not self._login_fetched:
            self._login_fetched = True
            data = self.get_json("user")
            if isinstance(data, dict) and isinstance(data.get("login"), str):
                self._login = data["login"]
        return self._login

    def _paginate(self, path: str, params: Dict[str, Any], limit: int) -> List[dict] | None:
        """Collect up to ``limit`` non-archived repositories following Link headers."""
        url: str | None = f"{API_BASE}/{path}"
        query: Dict[str, Any] | None = dict(params, per_page=PER_PAGE)
        items: List[dict] = []
        while url and len(items) < limit:
            response = self._get(url, query)
            if response is None:
                return items if items else None
            try:
                page = response.json()
            except ValueError:
                return items if items else None
            if not isinstance(page, list):
                return items if items else None
            items.extend(
                entry for entry in page
                if isinstance(entry, dict) and isinstance(entry.get("name"), str) and not entry.get("archived", False)
            )
            # next の URL にはクエリが含まれている
            url = (getattr(response, "links", None) or {}).get("next", {}).get("url")
            query = None
        return items

    def list_repositories(self, owner: str, kind: str, limit: int = DEFAULT_REPO_LIMIT) -> List[str] | None:
        """
        List names of non-archived repositories for an owner, in listing order.

        Args:
            owner: User or organization login.
            kind: "User" or "Organization".
            limit: Maximum number of repositories to return.

        Returns:
            Repository names, or None when the listing could not be read.
        """
        if kind == KIND_ORGANIZATION:
            repos = self._paginate(f"orgs/{quote(owner)}/repos", {"type": "all"}, limit)
        elif self.authenticated_login() == owner:
            # /users/{owner}/repos は公開リポジトリしか返さない
            repos = self._paginate("user/repos", {"affiliation": "owner", "visibility": "all"}, limit)
        else:
            repos = self._paginate(f"users/{quote(owner)}/repos", {"type": "owner"}, limit)
        if repos is None:
            return None
        return [r["name"] for r in repos][:limit]

    def get_repository(self, full_name: str) -> dict | None:
        data = self.get_json(f"repos/{full_name}")
        return data if isinstance(data, dict) else None

    def list_directory(self, full_name: str, path: str) -> List[dict] | None:
        """Contents listing of a directory; None when missing or not a directory."""
        data = self.get_json(f"repos/{full_name}/contents/{quote(path)}")
        if not isinstance(data, list):
            return None
        return data

    def fetch_file(self, full_name: str, path: str) -> str | None:
        """Fetch a file via the contents API and base64-decode it."""
        data = self.get_json(f"repos/{full_name}/contents/{quote(path)}")
        if not isinstance(data, dict) or not isinstance(data.get("content"), str):
            return None
        try:
            decoded = base64.b64decode(data["content"].replace("\n", "")).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            return None
        return decoded or None

    def list_repo_secrets(self, full_name: str) -> List[str] | None:
        """Names of repository-level Actions secrets; None when unreadable."""
        data = self.get_json(f"repos/{full_name}/actions/secrets")
        if not isinstance(data, dict) or not isinstance(data.get("secrets"), list):
            return None
        return [s["name"] for s in data["secrets"] if isinstance(s, dict) and isinstance(s.get("name"), str)]

    def get_org_secret_visibility(self, org: str, secret: str) -> str | None:
        """Visibility ("all", "private", "selected") of an org secret."""
        data = self.get_json(f"orgs/{quote(org)}/actions/secrets/{quote(secret)}")
        if not isinstance(data, dict):
            return None
        visibility = data.get("visibility")
        return visibility if isinstance(visibility, str) else None

    def list_org_secret_repositories(self, org: str, secret: str) -> List[str] | None:
        """Repository names selected for an org secret, across all pages."""
        url: str | None = f"{API_BASE}/orgs/{quote(org)}/actions/secrets/{quote(secret)}/repositories"
        query: Dict[str, Any] | None = {"per_page": PER_PAGE}
        names: List[str] | None = None
        while url:
            response = self._get(url, query)
            if response is None:
                break
            try:
                data = response.json()
            except ValueError:
                break
            if not isinstance(data, dict) or not isinstance(data.get("repositories"), list):
                break
            names = (names or []) + [
                r["name"] for r in data["repositories"] if isinstance(r, dict) and isinstance(r.get("name"), str)
            ]
            url = (getattr(response, "links", None) or {}).get("next", {}).get("url")
            query = None
        return names

    def get_branch_protection(self, full_name: str, branch: str) -> dict | None:
        data = self.get_json(f"repos/{full_name}/branches/{quote(branch, safe='')}/protection")
        return data if isinstance(data, dict) and data else None

    def get_actions_enabled(self, full_name: str) -> Optional[bool]:
        """Actions enabled flag; None when unknown."""
        data = self.get_json(f"repos/{full_name}/actions/permissions")
        if not isinstance(data, dict):
            return None
        enabled = data.get("enabled")
        return enabled if isinstance(enabled, bool) else None
