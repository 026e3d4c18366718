"""Delete-runs command: remove every GitHub Actions run of a repository."""

import argparse
import logging

from .base import Command
from ..core.types import PartialRepoId

logger = logging.getLogger('shub')


class DeleteRunsCommand(Command):
    """Delete all workflow runs of a repository."""

    name = "delete-runs"
    description = "Delete all GitHub Actions workflow runs of a repository"
    requires_token = True

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            'repo',
            type=PartialRepoId.parse,
            help='Repository as NAME or OWNER/NAME (owner defaults to your username)'
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Count the runs without deleting them'
        )

    def run(self, args: argparse.Namespace) -> int:
        repo_id = args.repo.complete(self.config.github_username)

        # Collect every id first, page offsets shift as runs disappear
        run_ids = [run['id'] for run in self.github_client.list_workflow_runs(repo_id)]

        if args.dry_run:
            self.write(f"[DRY RUN] Would delete {len(run_ids)} workflow runs in {repo_id}.")
            return 0

        self.write(f"Deleting workflow runs in {repo_id}.")
        for run_id in run_ids:
            self.github_client.delete_workflow_run(repo_id, run_id)
            logger.info(f"Deleted workflow run {run_id} of {repo_id}")
        self.write(f"{len(run_ids)} workflow runs deleted.")
        return 0
