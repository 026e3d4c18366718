"""Issues command: open issues assigned to the authenticated user."""

import argparse

from .base import Command
from ..utils.display import format_issue


class IssuesCommand(Command):
    """Print issues and pull requests assigned to you across repositories."""

    name = "issues"
    description = "List open issues assigned to you"
    requires_token = True

    def run(self, args: argparse.Namespace) -> int:
        for issue in self.github_client.list_user_issues():
            self.write(format_issue(issue))
        return 0
