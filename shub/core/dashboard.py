"""Dashboard of build statuses for every repository of an owner."""

import asyncio
import logging
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .build_status import reduce_check_runs
from .database import Database
from .fetcher import DEFAULT_CONCURRENCY, StatusFetcher
from .github_client import GitHubClient
from .types import BuildStatus, RepoId, Repository
from ..utils.async_bridge import run_async
from ..utils.display import render_dashboard
from ..utils.filters import RepoFilter

logger = logging.getLogger('shub')


class DashboardState(Enum):
    """Progress of one dashboard refresh cycle."""
    IDLE = "idle"
    LIST_LOADED = "list_loaded"
    STATUSES_FETCHED = "statuses_fetched"
    PERSISTED = "persisted"
    RENDERED = "rendered"


class Dashboard:
    """Keeps the cached repository list and build statuses up to date.

    A full cycle loads the repository list (from the cache, or from GitHub
    when the cache holds nothing for the owner), fetches every build status
    concurrently, stores the statuses and renders the table. `display`
    renders whatever is cached without touching the network.
    """

    def __init__(
        self,
        github_client: GitHubClient,
        database: Database,
        owner: str,
        concurrency: int = DEFAULT_CONCURRENCY,
        isolate_failures: bool = False
    ):
        """Initialize dashboard.

        Args:
            github_client: GitHub API client
            database: Repository cache, owned by this dashboard for the cycle
            owner: Login whose repositories are shown
            concurrency: Maximum concurrent status fetches
            isolate_failures: Skip repositories whose status fetch fails
        """
        self.github_client = github_client
        self.database = database
        self.owner = owner
        self.concurrency = concurrency
        self.isolate_failures = isolate_failures
        self.state = DashboardState.IDLE

    def _advance(self, state: DashboardState) -> None:
        logger.debug(f"Dashboard: {self.state.value} -> {state.value}")
        self.state = state

    def load_repositories(self, refresh: bool = False) -> List[Repository]:
        """Load the owner's repositories, syncing from GitHub if needed.

        Args:
            refresh: Re-sync the listing even when the cache has entries

        Returns:
            Cached repositories of the owner
        """
        cached = self.database.get_repositories(self.owner)
        if cached and not refresh:
            logger.info(f"Loaded {len(cached)} repositories from cache")
            self._advance(DashboardState.LIST_LOADED)
            return cached

        logger.info("Fetching owned repositories from GitHub...")
        repo_filter = RepoFilter(owner_names=[self.owner])
        repos = [
            Repository.from_api(repo)
            for repo in repo_filter.filter(self.github_client.list_owned_repositories())
        ]

        # A listing carries no status, keep the ones fetched earlier
        known = {repo.id: repo.build_status for repo in cached}
        for repo in repos:
            repo.build_status = known.get(repo.id)

        self.database.put_repositories(repos)
        self._advance(DashboardState.LIST_LOADED)
        return self.database.get_repositories(self.owner)

    async def fetch_build_status(self, repo_id: RepoId) -> Optional[BuildStatus]:
        """Fetch the summarized status of a repository's latest commit.

        The HTTP calls are blocking and run in worker threads.

        Args:
            repo_id: Repository to query

        Returns:
            Build status, or None without commits or started check runs
        """
        # Runs in a worker thread; the client opens one HTTP session per thread
        commit = await asyncio.to_thread(self.github_client.get_latest_commit, repo_id)
        if commit is None:
            logger.info(f"{repo_id} has no commits")
            return None
        runs = await asyncio.to_thread(
            self.github_client.get_check_runs_for_gitref, repo_id, commit.sha
        )
        return reduce_check_runs(runs)

    async def fetch_build_statuses(
        self,
        repos: List[Repository]
    ) -> List[Tuple[RepoId, BuildStatus]]:
        """Fetch build statuses of many repositories concurrently.

        Args:
            repos: Repositories to query

        Returns:
            Statuses of the repositories that reported one
        """
        fetcher = StatusFetcher(
            self.fetch_build_status,
            concurrency=self.concurrency,
            isolate_failures=self.isolate_failures
        )
        statuses = await fetcher.run(repo.id for repo in repos)
        if fetcher.failures:
            logger.warning(f"Failed to fetch {len(fetcher.failures)} build statuses")
        return statuses

    def render(self) -> List[str]:
        """Render the cached dashboard.

        Forks and archived repositories are not shown.

        Returns:
            One line per repository
        """
        repos = [
            repo for repo in self.database.get_repositories(self.owner)
            if not repo.is_fork and not repo.is_archived
        ]
        rows = [
            (repo.name, repo.build_status.value if repo.build_status else '')
            for repo in repos
        ]
        self._advance(DashboardState.RENDERED)
        return render_dashboard(rows)

    def display(self, write: Callable[[str], None] = print) -> List[str]:
        """Print what is cached, without network calls or writes.

        Args:
            write: Line sink (default: print to stdout)

        Returns:
            Printed lines
        """
        self.load_cached()
        lines = self.render()
        for line in lines:
            write(line)
        return lines

    def load_cached(self) -> List[Repository]:
        """Read the cached list without syncing."""
        repos = self.database.get_repositories(self.owner)
        self._advance(DashboardState.LIST_LOADED)
        return repos

    def update(self, refresh: bool = False, write: Callable[[str], None] = print) -> List[str]:
        """Run a full refresh cycle and print the dashboard.

        Nothing is written to the cache if a status fetch fails (unless
        failures are isolated).

        Args:
            refresh: Re-sync the repository listing first
            write: Line sink (default: print to stdout)

        Returns:
            Printed lines
        """
        self._advance(DashboardState.IDLE)
        self.load_repositories(refresh=refresh)

        logger.info("Updating build statuses...")
        repos = self.database.get_repositories(self.owner)
        statuses = run_async(self.fetch_build_statuses(repos))
        self._advance(DashboardState.STATUSES_FETCHED)

        self.database.set_build_statuses(statuses)
        self._advance(DashboardState.PERSISTED)

        lines = self.render()
        for line in lines:
            write(line)
        return lines
