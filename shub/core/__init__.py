"""Core package for shub."""

from .types import (
    BuildStatus,
    RepoId,
    PartialRepoId,
    Repository,
    CheckRun,
    Commit,
    RepositorySettings,
)
from .errors import (
    ShubError,
    GitHubAPIError,
    NotFoundError,
    RateLimitError,
    PaginationError,
    StatusFetchError,
    CacheError,
)
from .pagination import CursorState, Page, PageCursor
from .build_status import reduce_check_runs, status_of
from .database import Database
from .fetcher import StatusFetcher
from .github_client import GitHubClient
from .dashboard import Dashboard, DashboardState
from .registry import Registry
from .logger import setup_logging

__all__ = [
    # Types
    'BuildStatus',
    'RepoId',
    'PartialRepoId',
    'Repository',
    'CheckRun',
    'Commit',
    'RepositorySettings',
    # Errors
    'ShubError',
    'GitHubAPIError',
    'NotFoundError',
    'RateLimitError',
    'PaginationError',
    'StatusFetchError',
    'CacheError',
    # Dashboard pipeline
    'CursorState',
    'Page',
    'PageCursor',
    'reduce_check_runs',
    'status_of',
    'Database',
    'StatusFetcher',
    'GitHubClient',
    'Dashboard',
    'DashboardState',
    # Plumbing
    'Registry',
    'setup_logging',
]
