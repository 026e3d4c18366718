"""Starred command: repositories starred by the authenticated user."""

import argparse

from .base import Command
from ..utils.display import format_starred_repository
from ..utils.filters import LangFilter


class StarredCommand(Command):
    """Print starred repositories, optionally filtered by language."""

    name = "starred"
    description = "List repositories you starred"
    requires_token = True

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            '--lang',
            type=LangFilter.parse,
            metavar='LANG',
            help='Filter by language. Prefix with `!` to exclude it, e.g. `!rust`'
        )
        parser.add_argument(
            '--short',
            action='store_true',
            help='Truncate long descriptions'
        )

    def run(self, args: argparse.Namespace) -> int:
        for repo in self.github_client.list_starred_repositories():
            if args.lang and not args.lang.matches(repo):
                continue
            self.write(format_starred_repository(repo, short=args.short))
        return 0
