"""Tests for the SQLite repository cache."""

import sqlite3
from unittest.mock import Mock, patch

import pytest

from shub.core.database import Database
from shub.core.errors import CacheError
from shub.core.types import BuildStatus, RepoId, Repository


class TestDatabaseMigration:
    """Tests for schema creation."""

    def test_migrate_is_idempotent(self, database: Database) -> None:
        """Test that migrating an up-to-date cache changes nothing."""
        before = database.schema()
        database.migrate()
        database.migrate()
        assert database.schema() == before
        assert any("CREATE TABLE repositories" in sql for sql in before)

    def test_reopen_existing_file(self, tmp_path) -> None:
        """Test that a cache file survives being reopened."""
        path = tmp_path / "nested" / "shub.db"
        with Database(path) as db:
            db.put_repositories([Repository("kafji", "shub")])
            schema = db.schema()

        with Database(path) as db:
            assert db.schema() == schema
            assert [r.name for r in db.get_repositories("kafji")] == ["shub"]

    def test_unopenable_path(self, tmp_path) -> None:
        """Test that an unusable path raises CacheError."""
        with pytest.raises(CacheError, match="open cache"):
            Database(tmp_path)

    def test_failed_migration_closes_connection(self, tmp_path) -> None:
        """Test that the connection is closed when the schema cannot be created."""
        conn = Mock()
        conn.executescript.side_effect = sqlite3.DatabaseError("file is not a database")
        with patch("shub.core.database.sqlite3.connect", return_value=conn):
            with pytest.raises(CacheError, match="migrate cache"):
                Database(tmp_path / "shub.db")
        conn.close.assert_called_once_with()

    def test_not_a_database_file(self, tmp_path) -> None:
        """Test that a file that is not SQLite raises CacheError."""
        path = tmp_path / "shub.db"
        path.write_bytes(b"not a database" * 100)
        with pytest.raises(CacheError, match="migrate cache"):
            Database(path)


class TestDatabaseRepositories:
    """Tests for storing and reading repositories."""

    def test_get_filters_by_owner_and_sorts(self, database: Database) -> None:
        """Test that only the owner's rows come back, ordered by name."""
        database.put_repositories([
            Repository("kafji", "zebra"),
            Repository("other", "alpha"),
            Repository("kafji", "apple", is_fork=True),
        ])

        repos = database.get_repositories("kafji")

        assert [r.name for r in repos] == ["apple", "zebra"]
        assert repos[0].is_fork is True
        assert repos[1].is_archived is False

    def test_put_replaces_same_key(self, database: Database) -> None:
        """Test that a second write with the same key replaces the row."""
        database.put_repositories([Repository("kafji", "shub", build_status=BuildStatus.FAILURE)])
        database.put_repositories([Repository("kafji", "shub", is_archived=True)])

        (repo,) = database.get_repositories("kafji")
        assert repo.is_archived is True
        assert repo.build_status is None

    def test_put_nothing(self, database: Database) -> None:
        """Test that an empty write is accepted."""
        database.put_repositories([])
        assert database.get_repositories("kafji") == []

    def test_unknown_owner(self, database: Database) -> None:
        """Test that an owner without rows gets an empty list."""
        assert database.get_repositories("nobody") == []


class TestDatabaseBuildStatuses:
    """Tests for updating build statuses."""

    def test_only_status_column_changes(self, database: Database) -> None:
        """Test that fork and archived flags survive a status update."""
        database.put_repositories([
            Repository("kafji", "a", is_fork=True),
            Repository("kafji", "b", is_archived=True),
        ])

        database.set_build_statuses([
            (RepoId("kafji", "a"), BuildStatus.SUCCESS),
            (RepoId("kafji", "b"), BuildStatus.IN_PROGRESS),
        ])

        a, b = database.get_repositories("kafji")
        assert (a.is_fork, a.build_status) == (True, BuildStatus.SUCCESS)
        assert (b.is_archived, b.build_status) == (True, BuildStatus.IN_PROGRESS)

    def test_unknown_ids_ignored(self, database: Database) -> None:
        """Test that updating a missing row neither fails nor inserts."""
        database.set_build_statuses([(RepoId("kafji", "ghost"), BuildStatus.FAILURE)])
        assert database.get_repositories("kafji") == []

    def test_untouched_rows_keep_status(self, database: Database) -> None:
        """Test that rows outside the update keep their status."""
        database.put_repositories([
            Repository("kafji", "a", build_status=BuildStatus.FAILURE),
            Repository("kafji", "b"),
        ])

        database.set_build_statuses([(RepoId("kafji", "b"), BuildStatus.SUCCESS)])

        a, b = database.get_repositories("kafji")
        assert a.build_status is BuildStatus.FAILURE
        assert b.build_status is BuildStatus.SUCCESS


class TestDatabaseErrors:
    """Tests for storage failures."""

    def test_closed_connection(self) -> None:
        """Test that using a closed cache raises CacheError."""
        db = Database(":memory:")
        db.close()
        with pytest.raises(CacheError, match="read repositories"):
            db.get_repositories("kafji")

    def test_corrupt_status(self, tmp_path) -> None:
        """Test that an undecodable stored status raises CacheError."""
        path = tmp_path / "shub.db"
        with Database(path):
            pass
        conn = sqlite3.connect(path)
        with conn:
            conn.execute("DROP TABLE repositories")
            conn.execute(
                "CREATE TABLE repositories (owner TEXT, name TEXT, is_fork BOOLEAN, "
                "is_archived BOOLEAN, build_status TEXT)"
            )
            conn.execute("INSERT INTO repositories VALUES ('kafji', 'shub', 0, 0, 'broken')")
        conn.close()

        with Database(path) as db:
            with pytest.raises(CacheError, match="Corrupt build status for kafji/shub"):
                db.get_repositories("kafji")
