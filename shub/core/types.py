"""Core types shared by the client, the cache and the dashboard."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from functools import total_ordering
from typing import Dict, Any, Optional


@total_ordering
class BuildStatus(Enum):
    """Summarized build status of a repository.

    Ordered by severity: SUCCESS < IN_PROGRESS < FAILURE. Reducing many
    statuses with max() therefore reports the worst outcome.
    """
    SUCCESS = "success"
    IN_PROGRESS = "in_progress"
    FAILURE = "failure"

    @property
    def severity(self) -> int:
        """Position of this status in the severity order."""
        return _SEVERITY[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BuildStatus):
            return NotImplemented
        return self.severity < other.severity

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> 'BuildStatus':
        """Parse the canonical lowercase representation.

        Raises:
            ValueError: If the string is not a known status
        """
        for status in cls:
            if status.value == value:
                return status
        raise ValueError(f"unexpected string, was `{value}`")


_SEVERITY = {
    BuildStatus.SUCCESS: 0,
    BuildStatus.IN_PROGRESS: 1,
    BuildStatus.FAILURE: 2,
}


@dataclass(frozen=True)
class RepoId:
    """Identity of a repository: owner login plus repository name."""
    owner: str
    name: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def parse(cls, value: str) -> 'RepoId':
        """Parse an `owner/name` string.

        Only the first `/` separates owner from name.

        Raises:
            ValueError: If the owner or the name is missing
        """
        owner, sep, name = value.partition('/')
        if not sep or not owner or not name:
            raise ValueError(f"Expecting in `:owner/:name` format, but was `{value}`.")
        return cls(owner=owner, name=name)


@dataclass(frozen=True)
class PartialRepoId:
    """Repository identity whose owner may be omitted on the command line."""
    owner: Optional[str]
    name: str

    @classmethod
    def parse(cls, value: str) -> 'PartialRepoId':
        """Parse a `name` or `owner/name` string.

        Raises:
            ValueError: If a separator is present but the name is empty
        """
        owner, sep, name = value.partition('/')
        if not sep:
            return cls(owner=None, name=value)
        if not name:
            raise ValueError(f"Expecting in `:owner?/:name` format, but was `{value}`.")
        return cls(owner=owner, name=name)

    def complete(self, default_owner: str) -> RepoId:
        """Fill in a missing owner.

        Args:
            default_owner: Owner to use when none was given

        Returns:
            Complete repository id
        """
        return RepoId(owner=self.owner or default_owner, name=self.name)


@dataclass
class Repository:
    """A repository as stored in the local cache."""
    owner: str
    name: str
    is_fork: bool = False
    is_archived: bool = False
    build_status: Optional[BuildStatus] = None

    @property
    def id(self) -> RepoId:
        """Get the repository identity."""
        return RepoId(owner=self.owner, name=self.name)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Repository':
        """Create a repository from a GitHub API repository object.

        The build status is never part of a listing and starts absent.

        Raises:
            ValueError: If the API object has no owner
        """
        owner = (data.get('owner') or {}).get('login')
        if not owner:
            raise ValueError(f"owner can not be none, was `{data.get('owner')!r}`")
        return cls(
            owner=owner,
            name=data['name'],
            is_fork=bool(data.get('fork', False)),
            is_archived=bool(data.get('archived', False)),
        )


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp as returned by the GitHub API."""
    if not value:
        return None
    return datetime.fromisoformat(value.replace('Z', '+00:00'))


@dataclass
class CheckRun:
    """One CI job result for a commit."""
    name: str
    status: str
    conclusion: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def timestamp(self) -> Optional[datetime]:
        """Completion time if finished, otherwise start time."""
        return self.completed_at or self.started_at

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'CheckRun':
        """Create a check run from a GitHub API check run object."""
        return cls(
            name=data['name'],
            status=data['status'],
            conclusion=data.get('conclusion'),
            started_at=parse_timestamp(data.get('started_at')),
            completed_at=parse_timestamp(data.get('completed_at')),
        )


@dataclass
class Commit:
    """A commit as listed by the GitHub commits endpoint."""
    sha: str
    message: str
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    date: Optional[datetime] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Commit':
        """Create a commit from a GitHub API commit object."""
        detail = data.get('commit') or {}
        author = detail.get('author') or {}
        return cls(
            sha=data['sha'],
            message=detail.get('message', ''),
            author_name=author.get('name'),
            author_email=author.get('email'),
            date=parse_timestamp(author.get('date')),
        )


@dataclass
class RepositorySettings:
    """Merge settings that can be copied between repositories."""
    allow_rebase_merge: bool
    allow_squash_merge: bool
    allow_auto_merge: bool
    delete_branch_on_merge: bool
    allow_merge_commit: bool

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'RepositorySettings':
        """Extract settings from a GitHub API repository object."""
        return cls(
            allow_rebase_merge=bool(data.get('allow_rebase_merge', False)),
            allow_squash_merge=bool(data.get('allow_squash_merge', False)),
            allow_auto_merge=bool(data.get('allow_auto_merge', False)),
            delete_branch_on_merge=bool(data.get('delete_branch_on_merge', False)),
            allow_merge_commit=bool(data.get('allow_merge_commit', False)),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RepositorySettings':
        """Load settings from a saved settings file.

        Raises:
            ValueError: If a setting is missing or not a boolean
        """
        values = {}
        for field_name in cls.__dataclass_fields__:
            if field_name not in data:
                raise ValueError(f"Missing setting: {field_name}")
            if not isinstance(data[field_name], bool):
                raise ValueError(f"Setting {field_name} must be true or false")
            values[field_name] = data[field_name]
        return cls(**values)

    def to_dict(self) -> Dict[str, bool]:
        """Serialize settings for the update endpoint or a settings file."""
        return {name: getattr(self, name) for name in self.__dataclass_fields__}
