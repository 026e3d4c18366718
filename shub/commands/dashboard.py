"""Dashboard command: build statuses of all owned repositories."""

import argparse
import logging

from .base import Command
from ..core.dashboard import Dashboard
from ..core.database import Database

logger = logging.getLogger('shub')


class DashboardCommand(Command):
    """Print the cached dashboard, optionally refreshing it first."""

    name = "dashboard"
    description = "Show build statuses of your repositories"
    requires_token = True

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            '--update', '-u',
            action='store_true',
            help='Fetch build statuses from GitHub before printing'
        )
        parser.add_argument(
            '--refresh',
            action='store_true',
            help='Re-sync the repository list from GitHub (implies --update)'
        )
        parser.add_argument(
            '--workers',
            type=int,
            metavar='N',
            help='Number of concurrent status fetches (default: 2)'
        )
        parser.add_argument(
            '--isolate-failures',
            action='store_true',
            help='Skip repositories whose status cannot be fetched instead of aborting'
        )

    def run(self, args: argparse.Namespace) -> int:
        with Database(self.config.database_path) as database:
            dashboard = Dashboard(
                github_client=self.github_client,
                database=database,
                owner=self.config.github_username,
                concurrency=self.config.max_concurrency,
                isolate_failures=self.config.isolate_failures
            )

            if args.update or args.refresh:
                lines = dashboard.update(refresh=args.refresh, write=self.write)
            else:
                lines = dashboard.display(write=self.write)

        if not lines:
            logger.warning("Dashboard is empty. Run `shub dashboard --update` to fill it")
        return 0
