"""Fork command: fork a repository into your account."""

import argparse

from .base import Command
from ..core.types import RepoId


class ForkCommand(Command):
    """Fork OWNER/NAME."""

    name = "fork"
    description = "Fork a repository into your account"
    requires_token = True

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            'repo',
            type=RepoId.parse,
            help='Repository to fork as OWNER/NAME'
        )

    def run(self, args: argparse.Namespace) -> int:
        self.write(f"Forking {args.repo}.")
        fork = self.github_client.fork_repository(args.repo)
        self.write(f"Forked to {fork.get('full_name', args.repo.name)}.")
        return 0
