"""Build status command: latest commit and check runs of one repository."""

import argparse
import logging
import time
from typing import Optional

from .base import Command
from ..core.build_status import reduce_check_runs
from ..core.types import BuildStatus, PartialRepoId, RepoId
from ..utils.display import format_check_run, format_commit

logger = logging.getLogger('shub')

DEFAULT_INTERVAL = 10.0


class BuildStatusCommand(Command):
    """Show the CI state of a repository's latest commit."""

    name = "build-status"
    description = "Show check runs of a repository's latest commit"

    def __init__(self, *args, sleep=time.sleep, **kwargs):
        super().__init__(*args, **kwargs)
        self.sleep = sleep

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            'repo',
            type=PartialRepoId.parse,
            help='Repository as NAME or OWNER/NAME (owner defaults to your username)'
        )
        parser.add_argument(
            '--watch', '-w',
            action='store_true',
            help='Poll until the build is no longer in progress'
        )
        parser.add_argument(
            '--interval',
            type=float,
            default=DEFAULT_INTERVAL,
            metavar='SECONDS',
            help=f'Seconds between polls with --watch (default: {DEFAULT_INTERVAL:g})'
        )

    def show(self, repo_id: RepoId) -> Optional[BuildStatus]:
        """Print the latest commit, its check runs and the reduced status.

        Args:
            repo_id: Repository to inspect

        Returns:
            Reduced build status, None without commits or started runs
        """
        commit = self.github_client.get_latest_commit(repo_id)
        if commit is None:
            self.write(f"{repo_id} has no commits.")
            return None

        for line in format_commit(commit):
            self.write(line)
        self.write('')

        runs = self.github_client.get_check_runs_for_gitref(repo_id, commit.sha)
        for run in runs:
            self.write(format_check_run(run))

        status = reduce_check_runs(runs)
        self.write(f"Status: {status.value if status else 'unknown'}")
        return status

    def run(self, args: argparse.Namespace) -> int:
        if args.interval <= 0:
            raise ValueError(f"--interval must be positive, was {args.interval:g}")

        repo_id = args.repo.complete(self.config.github_username)
        status = self.show(repo_id)
        while args.watch and status is BuildStatus.IN_PROGRESS:
            logger.info(f"{repo_id} still in progress, checking again in {args.interval:g}s")
            self.sleep(args.interval)
            self.write('')
            status = self.show(repo_id)

        return 1 if status is BuildStatus.FAILURE else 0
