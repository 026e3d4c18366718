"""Exception hierarchy for shub."""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .types import RepoId


class ShubError(Exception):
    """Base class for all errors raised by shub."""
    pass


class GitHubAPIError(ShubError):
    """A GitHub API request failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(GitHubAPIError):
    """The requested GitHub resource does not exist."""
    pass


class RateLimitError(GitHubAPIError):
    """The GitHub API rate limit is exhausted."""
    pass


class PaginationError(ShubError):
    """Fetching a page failed in the middle of a paginated listing.

    Items yielded before the failure remain valid. The cursor that raised
    this error is exhausted and will not fetch again.
    """

    def __init__(self, message: str, page: Optional[int] = None):
        super().__init__(message)
        self.page = page


class StatusFetchError(ShubError):
    """Fetching the build status of a single repository failed."""

    def __init__(self, repo_id: 'RepoId', cause: BaseException):
        super().__init__(f"Failed to fetch build status for {repo_id}: {cause}")
        self.repo_id = repo_id
        self.cause = cause


class CacheError(ShubError):
    """The local repository cache could not be read or written."""
    pass
