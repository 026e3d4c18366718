"""List command: repositories owned by the authenticated user."""

import argparse
import logging

from .base import Command
from ..utils.display import format_owned_repository
from ..utils.filters import RepoFilter

logger = logging.getLogger('shub')


class ListCommand(Command):
    """Print owned repositories, one line each, as pages arrive."""

    name = "list"
    description = "List repositories you own"
    requires_token = True

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            '--pattern',
            metavar='GLOB',
            help='Filter by name pattern (e.g., "my-*")'
        )
        parser.add_argument(
            '--include-forks',
            action='store_true',
            help='Include forked repositories (excluded by default)'
        )
        parser.add_argument(
            '--include-archived',
            action='store_true',
            help='Include archived repositories (excluded by default)'
        )

    def run(self, args: argparse.Namespace) -> int:
        repo_filter = RepoFilter(
            patterns=[args.pattern] if args.pattern else None,
            include_forks=args.include_forks,
            include_archived=args.include_archived
        )

        count = 0
        for repo in repo_filter.filter(self.github_client.list_owned_repositories()):
            self.write(format_owned_repository(repo))
            count += 1

        logger.info(f"Listed {count} repositories")
        return 0
