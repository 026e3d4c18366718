"""Base class for CLI commands."""

import argparse
from abc import ABC, abstractmethod
from typing import Callable

from ..config import Config
from ..core.github_client import GitHubClient


class Command(ABC):
    """Abstract base class for shub commands.

    Subclasses are discovered by the command registry and exposed as
    subcommands under their `name`.
    """

    # Class attributes to be overridden by subclasses
    name: str = "base"
    description: str = "Base command"
    requires_token: bool = False

    def __init__(
        self,
        config: Config,
        github_client: GitHubClient,
        write: Callable[[str], None] = print
    ):
        """Initialize command.

        Args:
            config: Loaded configuration
            github_client: GitHub API client
            write: Sink for command output lines (default: stdout)
        """
        self.config = config
        self.github_client = github_client
        self.write = write

    @classmethod
    def add_arguments(cls, parser: argparse.ArgumentParser) -> None:
        """Add command-specific arguments.

        Args:
            parser: Subcommand parser
        """
        pass

    @abstractmethod
    def run(self, args: argparse.Namespace) -> int:
        """Execute the command.

        Args:
            args: Parsed command line arguments

        Returns:
            Process exit code
        """
        pass
