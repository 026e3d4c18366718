"""Local SQLite cache of repositories and their build statuses.

The cache mirrors the owner's repository listing so the dashboard can be
printed without talking to GitHub. Rows are keyed by (owner, name); writing
a row with an existing key replaces it wholesale. Rows are never deleted, so
a repository removed on GitHub stays in the cache until the file is removed.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple, Union

from .errors import CacheError
from .types import BuildStatus, RepoId, Repository

logger = logging.getLogger('shub')

SCHEMA_VERSION = 1

# All statements must be idempotent, they run on every startup
MIGRATIONS = """
    CREATE TABLE IF NOT EXISTS repositories (
        rid INTEGER PRIMARY KEY AUTOINCREMENT,
        owner TEXT NOT NULL,
        name TEXT NOT NULL,
        is_fork BOOLEAN NOT NULL DEFAULT FALSE,
        is_archived BOOLEAN NOT NULL DEFAULT FALSE,
        build_status TEXT NULL
            CHECK (build_status IN ('success', 'in_progress', 'failure')),
        UNIQUE (owner, name) ON CONFLICT REPLACE
    );
    CREATE INDEX IF NOT EXISTS idx_repositories_owner ON repositories (owner);
"""


class Database:
    """Repository cache backed by a single SQLite file."""

    def __init__(self, path: Union[str, Path]):
        """Open the cache and bring its schema up to date.

        Args:
            path: Database file, or ":memory:" for a throwaway cache

        Raises:
            CacheError: If the file cannot be opened or migrated
        """
        self.path = str(path)
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)

        with self._guard("open cache"):
            self._conn = sqlite3.connect(self.path)
        logger.debug(f"Opened repository cache at {self.path}")
        try:
            self.migrate()
        except CacheError:
            self._conn.close()
            raise

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        """Translate storage failures into CacheError."""
        try:
            yield
        except sqlite3.Error as e:
            raise CacheError(f"Failed to {action} ({self.path}): {e}") from e

    def migrate(self) -> None:
        """Create the schema if it does not exist yet."""
        with self._guard("migrate cache"):
            self._conn.executescript(MIGRATIONS)
            self._conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")

    def schema(self) -> List[str]:
        """Get the SQL of every schema object, for inspection."""
        with self._guard("read schema"):
            rows = self._conn.execute(
                "SELECT sql FROM sqlite_master WHERE sql IS NOT NULL ORDER BY name"
            ).fetchall()
        return [row[0] for row in rows]

    def put_repositories(self, repositories: Iterable[Repository]) -> None:
        """Insert repositories, replacing stored rows with the same key.

        The replacement is wholesale: a stored build status is overwritten
        by whatever the incoming record carries, including None.

        Args:
            repositories: Repositories to store
        """
        rows = [
            (
                repo.owner,
                repo.name,
                repo.is_fork,
                repo.is_archived,
                repo.build_status.value if repo.build_status else None,
            )
            for repo in repositories
        ]
        with self._guard("store repositories"), self._conn:
            self._conn.executemany(
                """
                INSERT INTO repositories (owner, name, is_fork, is_archived, build_status)
                VALUES (?, ?, ?, ?, ?)
                """,
                rows
            )
        logger.info(f"Stored {len(rows)} repositories in cache")

    def get_repositories(self, owner: str) -> List[Repository]:
        """Get every cached repository of an owner.

        Args:
            owner: Owner login

        Returns:
            Repositories ordered by name
        """
        with self._guard("read repositories"):
            rows = self._conn.execute(
                """
                SELECT owner, name, is_fork, is_archived, build_status
                FROM repositories
                WHERE owner = ?
                ORDER BY name
                """,
                (owner,)
            ).fetchall()

        repositories = []
        for row_owner, name, is_fork, is_archived, build_status in rows:
            try:
                status = BuildStatus.parse(build_status) if build_status else None
            except ValueError as e:
                raise CacheError(f"Corrupt build status for {row_owner}/{name}: {e}") from e
            repositories.append(Repository(
                owner=row_owner,
                name=name,
                is_fork=bool(is_fork),
                is_archived=bool(is_archived),
                build_status=status,
            ))
        return repositories

    def set_build_statuses(self, statuses: Iterable[Tuple[RepoId, BuildStatus]]) -> None:
        """Update the build status of existing rows.

        Only the build status column changes. Ids without a stored row are
        ignored.

        Args:
            statuses: Pairs of repository id and build status
        """
        rows = [(status.value, repo_id.owner, repo_id.name) for repo_id, status in statuses]
        with self._guard("store build statuses"), self._conn:
            self._conn.executemany(
                "UPDATE repositories SET build_status = ? WHERE owner = ? AND name = ?",
                rows
            )
        logger.info(f"Stored {len(rows)} build statuses in cache")

    def close(self) -> None:
        """Close the underlying connection."""
        with self._guard("close cache"):
            self._conn.close()

    def __enter__(self) -> 'Database':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
