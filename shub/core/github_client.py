"""GitHub API client for repository, commit and check run queries."""

import logging
import threading
import requests
from typing import List, Dict, Any, Optional

from .. import __version__
from .errors import GitHubAPIError, NotFoundError, PaginationError, RateLimitError
from .pagination import Page, PageCursor
from .types import CheckRun, Commit, RepoId

logger = logging.getLogger('shub')

API_URL = "https://api.github.com"
PER_PAGE = 100


class GitHubClient:
    """Client for interacting with GitHub API."""

    def __init__(
        self,
        username: str,
        token: Optional[str] = None,
        base_url: str = API_URL,
        session: Optional[requests.Session] = None
    ):
        """Initialize GitHub client.

        Args:
            username: GitHub username
            token: Optional GitHub personal access token
            base_url: API root, overridable for GitHub Enterprise
            session: Optional preconfigured requests session, shared by
                every thread. Without one each thread opens its own session
        """
        self.username = username
        self.token = token
        self.base_url = base_url.rstrip('/')
        self.headers = {
            'Accept': 'application/vnd.github+json',
            'User-Agent': f'shub/{__version__}',
        }
        self._shared_session = session
        self._local = threading.local()

        if token:
            self.headers['Authorization'] = f'token {token}'
            logger.info("Using GitHub token for authentication")
        else:
            logger.info("Using unauthenticated mode (public repos only)")

        if session is not None:
            session.headers.update(self.headers)

    @property
    def session(self) -> requests.Session:
        """HTTP session of the calling thread.

        Status fetches run this client from several worker threads at once
        and a requests.Session is not safe to share between them.
        """
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, 'session', None)
        if session is None:
            session = requests.Session()
            session.headers.update(self.headers)
            self._local.session = session
        return session

    @property
    def is_authenticated(self) -> bool:
        """Check if client is authenticated.

        Returns:
            True if token is available
        """
        return bool(self.token)

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        """Send a request and raise on any non-success status.

        Args:
            method: HTTP method
            path: Path relative to the API root
            **kwargs: Passed through to requests

        Returns:
            Successful response

        Raises:
            RateLimitError: If the rate limit is exhausted
            NotFoundError: If the resource does not exist
            GitHubAPIError: On any other failure
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug(f"{method} {url} {kwargs.get('params') or ''}")
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise GitHubAPIError(f"Request to {url} failed: {e}") from e

        if response.status_code == 403 and response.headers.get('X-RateLimit-Remaining') == '0':
            raise RateLimitError("GitHub API rate limit exceeded", status_code=403)
        if response.status_code == 404:
            raise NotFoundError(f"Not found: {path}", status_code=404)
        if not response.ok:
            raise GitHubAPIError(
                f"{method} {path} failed: {response.status_code} {_error_message(response)}",
                status_code=response.status_code
            )
        return response

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self._request('GET', path, params=params)

    def _paginate(
        self,
        path: str,
        params: Dict[str, Any],
        description: str,
        items_key: Optional[str] = None
    ) -> PageCursor[Dict[str, Any]]:
        """Create a cursor over a paged list endpoint.

        Whether more pages exist is read from the `Link: rel="next"` header.

        Args:
            path: Endpoint path
            params: Query parameters sent with every page
            description: Name of the collection for logs and errors
            items_key: Key holding the items when the endpoint wraps them
                in an object
        """
        def fetch(page: Optional[int]) -> Page[Dict[str, Any]]:
            page_params = dict(params)
            if page is not None:
                page_params['page'] = page
            response = self._get(path, params=page_params)
            data = response.json()
            items = data.get(items_key, []) if items_key else data
            return Page(items=items, has_more='next' in response.links)

        return PageCursor(fetch, description=description)

    def list_owned_repositories(self) -> PageCursor[Dict[str, Any]]:
        """List repositories owned by the authenticated user.

        Returns:
            Cursor over repository dictionaries, most recently updated first
        """
        return self._paginate(
            'user/repos',
            {'affiliation': 'owner', 'sort': 'updated', 'direction': 'desc', 'per_page': PER_PAGE},
            description="owned repositories"
        )

    def list_starred_repositories(self) -> PageCursor[Dict[str, Any]]:
        """List repositories starred by the authenticated user.

        Returns:
            Cursor over repository dictionaries, most recently updated first
        """
        return self._paginate(
            'user/starred',
            {'sort': 'updated', 'per_page': PER_PAGE},
            description="starred repositories"
        )

    def list_user_issues(self) -> PageCursor[Dict[str, Any]]:
        """List open issues and pull requests assigned to the authenticated user.

        Returns:
            Cursor over issue dictionaries across all visible repositories
        """
        return self._paginate(
            'issues',
            {'per_page': PER_PAGE},
            description="issues assigned to you"
        )

    def list_repository_commits(
        self,
        repo_id: RepoId,
        per_page: int = PER_PAGE
    ) -> PageCursor[Dict[str, Any]]:
        """List commits of a repository's default branch, newest first.

        Args:
            repo_id: Repository to list
            per_page: Commits requested per page

        Returns:
            Cursor over commit dictionaries
        """
        return self._paginate(
            f'repos/{repo_id.owner}/{repo_id.name}/commits',
            {'per_page': per_page},
            description=f"commits of {repo_id}"
        )

    def get_latest_commit(self, repo_id: RepoId) -> Optional[Commit]:
        """Get the most recent commit of a repository.

        Args:
            repo_id: Repository to query

        Returns:
            Latest commit, or None if the repository has no commits
        """
        try:
            latest = next(self.list_repository_commits(repo_id, per_page=1), None)
        except PaginationError as e:
            # GitHub answers 409 for a repository without any commit
            if isinstance(e.__cause__, GitHubAPIError) and e.__cause__.status_code == 409:
                return None
            raise

        if latest is None:
            return None
        return Commit.from_api(latest)

    def get_check_runs_for_gitref(self, repo_id: RepoId, gitref: str) -> List[CheckRun]:
        """Get the check runs reported for a commit.

        Args:
            repo_id: Repository of the commit
            gitref: Commit sha, branch or tag

        Returns:
            Check runs of the ref
        """
        response = self._get(
            f'repos/{repo_id.owner}/{repo_id.name}/commits/{gitref}/check-runs',
            params={'per_page': PER_PAGE}
        )
        return [CheckRun.from_api(run) for run in response.json().get('check_runs', [])]

    def get_repository(self, repo_id: RepoId) -> Dict[str, Any]:
        """Get a repository.

        Args:
            repo_id: Repository to get

        Returns:
            Repository dictionary

        Raises:
            NotFoundError: If the repository does not exist
        """
        try:
            return self._get(f'repos/{repo_id.owner}/{repo_id.name}').json()
        except NotFoundError as e:
            raise NotFoundError(f"Repository {repo_id} does not exist.", status_code=404) from e

    def update_repository(self, repo_id: RepoId, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Update repository settings.

        Args:
            repo_id: Repository to update
            fields: Settings to change

        Returns:
            Updated repository dictionary
        """
        response = self._request('PATCH', f'repos/{repo_id.owner}/{repo_id.name}', json=fields)
        return response.json()

    def fork_repository(self, repo_id: RepoId) -> Dict[str, Any]:
        """Fork a repository into the authenticated user's account.

        Args:
            repo_id: Repository to fork

        Returns:
            Dictionary of the new fork
        """
        response = self._request('POST', f'repos/{repo_id.owner}/{repo_id.name}/forks')
        return response.json()

    def list_workflow_runs(self, repo_id: RepoId) -> PageCursor[Dict[str, Any]]:
        """List GitHub Actions workflow runs of a repository.

        Args:
            repo_id: Repository to list

        Returns:
            Cursor over workflow run dictionaries
        """
        return self._paginate(
            f'repos/{repo_id.owner}/{repo_id.name}/actions/runs',
            {'per_page': PER_PAGE},
            description=f"workflow runs of {repo_id}",
            items_key='workflow_runs'
        )

    def delete_workflow_run(self, repo_id: RepoId, run_id: int) -> None:
        """Delete a workflow run and its logs."""
        self._request('DELETE', f'repos/{repo_id.owner}/{repo_id.name}/actions/runs/{run_id}')

    def get_clone_url(self, repo: Dict[str, Any]) -> str:
        """Get the appropriate clone URL based on authentication.

        Args:
            repo: Repository dictionary from GitHub API

        Returns:
            Clone URL (SSH if authenticated, HTTPS otherwise)
        """
        if self.is_authenticated:
            return repo['ssh_url']
        return repo['clone_url']


def _error_message(response: requests.Response) -> str:
    """Extract GitHub's error message from a failed response."""
    try:
        data = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(data, dict):
        return data.get('message', '')
    return ''
