"""Repository filtering utilities."""

import fnmatch
import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Dict, Any, Optional

logger = logging.getLogger('shub')


class RepoFilter:
    """Filter for selecting repositories based on criteria."""

    def __init__(
        self,
        owner_names: Optional[List[str]] = None,
        patterns: Optional[List[str]] = None,
        include_forks: bool = False,
        include_archived: bool = False
    ):
        """Initialize repository filter.

        Args:
            owner_names: Owner logins to keep
            patterns: Glob patterns for repository names
            include_forks: Include forked repositories (default: False)
            include_archived: Include archived repositories (default: False)
        """
        self.owner_names = set(owner_names) if owner_names else None
        self.patterns = patterns or []
        self.include_forks = include_forks
        self.include_archived = include_archived

    def filter(self, repos: Iterable[Dict[str, Any]]) -> Iterator[Dict[str, Any]]:
        """Lazily filter repositories based on criteria.

        Args:
            repos: Repository dictionaries, possibly a page cursor

        Yields:
            Repositories that pass every criterion
        """
        for repo in repos:
            if self.matches(repo):
                yield repo

    def matches(self, repo: Dict[str, Any]) -> bool:
        """Check if repository should be included.

        Args:
            repo: Repository dictionary

        Returns:
            True if should be included
        """
        # Check owner
        if self.owner_names:
            owner = (repo.get('owner') or {}).get('login', '')
            if owner not in self.owner_names:
                return False

        # Check patterns
        if self.patterns:
            if not any(fnmatch.fnmatch(repo['name'], pattern) for pattern in self.patterns):
                return False

        # Check fork status
        if not self.include_forks and repo.get('fork', False):
            return False

        # Check archived status
        if not self.include_archived and repo.get('archived', False):
            return False

        return True


@dataclass(frozen=True)
class LangFilter:
    """Keep (or with negation, drop) repositories of one language."""
    lang: str
    negation: bool = False

    @classmethod
    def parse(cls, value: str) -> 'LangFilter':
        """Parse a language filter, `!` prefix negates.

        Args:
            value: e.g. "rust" or "!rust"

        Returns:
            Language filter
        """
        if value.startswith('!'):
            return cls(lang=value[1:], negation=True)
        return cls(lang=value, negation=False)

    def matches(self, repo: Dict[str, Any]) -> bool:
        """Check a repository's primary language, case-insensitively."""
        language = (repo.get('language') or '').lower()
        same = language == self.lang.lower()
        return not same if self.negation else same
