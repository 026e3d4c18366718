"""
Pytest configuration and shared fixtures.

Provides an in-memory repository cache, GitHub API payload builders and a
fake GitHub client that serves canned commits and check runs.
"""

import threading
from typing import Any, Dict, List, Optional

import pytest

from shub.config import Config
from shub.core.database import Database
from shub.core.pagination import Page, PageCursor
from shub.core.types import CheckRun, Commit, RepoId

# ==============================================================================
# Payload Builders
# ==============================================================================


def repo_payload(
    name: str,
    owner: str = "kafji",
    fork: bool = False,
    archived: bool = False,
    **extra: Any,
) -> Dict[str, Any]:
    """Build a repository object as returned by the GitHub API."""
    payload = {
        "name": name,
        "owner": {"login": owner},
        "fork": fork,
        "archived": archived,
        "private": False,
        "description": None,
        "language": None,
        "pushed_at": None,
        "ssh_url": f"git@github.com:{owner}/{name}.git",
        "clone_url": f"https://github.com/{owner}/{name}.git",
    }
    payload.update(extra)
    return payload


def check_run(name: str, status: str, conclusion: Optional[str] = None) -> CheckRun:
    """Build a check run without timestamps."""
    return CheckRun(name=name, status=status, conclusion=conclusion)


# ==============================================================================
# Fake GitHub Client
# ==============================================================================


class FakeGitHubClient:
    """Serves canned repositories, commits and check runs.

    Repository listings are split into pages of `page_size` items and served
    through a real PageCursor. Every call is counted in `calls`.
    """

    def __init__(
        self,
        repos: Optional[List[Dict[str, Any]]] = None,
        runs: Optional[Dict[str, List[CheckRun]]] = None,
        page_size: int = 2,
        username: str = "kafji",
    ):
        self.username = username
        self.token = "secret"
        self.repos = repos or []
        # Keyed by repository name; a name without an entry has no commits
        self.runs = runs or {}
        self.page_size = page_size
        self.calls: List[str] = []
        self.updated: Dict[RepoId, Dict[str, Any]] = {}
        self.workflow_runs: Dict[str, List[Dict[str, Any]]] = {}
        self.issues: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

    @property
    def is_authenticated(self) -> bool:
        return True

    def _record(self, call: str) -> None:
        with self._lock:
            self.calls.append(call)

    def list_owned_repositories(self) -> PageCursor[Dict[str, Any]]:
        def fetch(page: Optional[int]) -> Page[Dict[str, Any]]:
            self._record(f"list:{page}")
            start = ((page or 1) - 1) * self.page_size
            items = self.repos[start:start + self.page_size]
            return Page(items=items, has_more=start + self.page_size < len(self.repos))

        return PageCursor(fetch, description="owned repositories")

    def list_starred_repositories(self) -> PageCursor[Dict[str, Any]]:
        return self.list_owned_repositories()

    def list_user_issues(self) -> PageCursor[Dict[str, Any]]:
        def fetch(page: Optional[int]) -> Page[Dict[str, Any]]:
            self._record(f"issues:{page}")
            start = ((page or 1) - 1) * self.page_size
            return Page(
                items=self.issues[start:start + self.page_size],
                has_more=start + self.page_size < len(self.issues),
            )

        return PageCursor(fetch, description="issues assigned to you")

    def get_latest_commit(self, repo_id: RepoId) -> Optional[Commit]:
        self._record(f"commit:{repo_id}")
        if repo_id.name not in self.runs:
            return None
        return Commit(sha=f"sha-{repo_id.name}", message=f"Update {repo_id.name}")

    def get_check_runs_for_gitref(self, repo_id: RepoId, gitref: str) -> List[CheckRun]:
        self._record(f"runs:{repo_id}@{gitref}")
        return self.runs[repo_id.name]

    def get_repository(self, repo_id: RepoId) -> Dict[str, Any]:
        self._record(f"repo:{repo_id}")
        return repo_payload(repo_id.name, owner=repo_id.owner, allow_squash_merge=True)

    def update_repository(self, repo_id: RepoId, fields: Dict[str, Any]) -> Dict[str, Any]:
        self._record(f"update:{repo_id}")
        self.updated[repo_id] = fields
        return repo_payload(repo_id.name, owner=repo_id.owner, **fields)

    def fork_repository(self, repo_id: RepoId) -> Dict[str, Any]:
        self._record(f"fork:{repo_id}")
        return {"full_name": f"{self.username}/{repo_id.name}"}

    def list_workflow_runs(self, repo_id: RepoId) -> PageCursor[Dict[str, Any]]:
        runs = self.workflow_runs.get(repo_id.name, [])

        def fetch(page: Optional[int]) -> Page[Dict[str, Any]]:
            self._record(f"runs-list:{page}")
            start = ((page or 1) - 1) * self.page_size
            return Page(
                items=runs[start:start + self.page_size],
                has_more=start + self.page_size < len(runs),
            )

        return PageCursor(fetch, description=f"workflow runs of {repo_id}")

    def delete_workflow_run(self, repo_id: RepoId, run_id: int) -> None:
        self._record(f"delete:{repo_id}#{run_id}")

    def get_clone_url(self, repo: Dict[str, Any]) -> str:
        return repo["ssh_url"]


# ==============================================================================
# Fixtures
# ==============================================================================


@pytest.fixture
def database():
    """Provide an in-memory repository cache."""
    db = Database(":memory:")
    yield db
    db.close()


@pytest.fixture
def config(tmp_path):
    """Provide a config rooted in a temporary directory."""
    return Config(
        github_username="kafji",
        workspace_root_dir=str(tmp_path / "workspace"),
        database_path=str(tmp_path / "shub.db"),
        github_token="secret",
    )


@pytest.fixture
def output():
    """Collect lines written by commands."""
    return []
