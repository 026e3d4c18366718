"""Clone command: clone a repository into the workspace."""

import argparse
import logging
import os

from .base import Command
from ..core.types import PartialRepoId
from ..utils.git import repo_exists, clone_repo

logger = logging.getLogger('shub')


class CloneCommand(Command):
    """Clone a repository to <workspace>/<owner>/<name>."""

    name = "clone"
    description = "Clone a repository into the workspace"

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
            help='Preview changes without executing'
        )

    def get_repo_path(self, owner: str, name: str) -> str:
        """Get the local path of a repository in the workspace."""
        return os.path.join(self.config.workspace_root_dir, owner, name)

    def run(self, args: argparse.Namespace) -> int:
        repo_id = args.repo.complete(self.config.github_username)
        repo_path = self.get_repo_path(repo_id.owner, repo_id.name)

        # Skip if repo already exists
        if repo_exists(repo_path):
            logger.warning(f"Skipping {repo_id}: already exists at {repo_path}")
            return 0

        repo = self.github_client.get_repository(repo_id)
        clone_url = self.github_client.get_clone_url(repo)

        if args.dry_run:
            self.write(f"[DRY RUN] Would clone {repo_id} from {clone_url} to {repo_path}")
            return 0

        self.write(f"Cloning {repo_id} to {repo_path}.")
        if not clone_repo(clone_url, repo_path):
            logger.error(f"Failed to clone {repo_id}")
            return 1
        return 0
