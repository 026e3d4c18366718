"""Configuration management for shub."""

import os
from pathlib import Path
from typing import Optional
from dataclasses import dataclass

from .core.fetcher import DEFAULT_CONCURRENCY

APP_NAME = 'shub'


def get_config_dir() -> Path:
    """Get the shub directory under the XDG config home.

    Returns:
        $XDG_CONFIG_HOME/shub, or ~/.config/shub when unset
    """
    if xdg_home := os.environ.get('XDG_CONFIG_HOME'):
        return Path(xdg_home) / APP_NAME
    return Path.home() / '.config' / APP_NAME


@dataclass
class Config:
    """Configuration for shub.

    Merges environment variables with CLI arguments.
    CLI arguments take precedence over environment variables.
    """

    github_username: str
    workspace_root_dir: str
    database_path: str
    github_token: Optional[str] = None
    max_concurrency: int = DEFAULT_CONCURRENCY
    isolate_failures: bool = False

    @classmethod
    def from_env_and_args(
        cls,
        username: Optional[str] = None,
        token: Optional[str] = None,
        workspace_dir: Optional[str] = None,
        database_path: Optional[str] = None,
        max_concurrency: Optional[int] = None,
        isolate_failures: bool = False
    ) -> 'Config':
        """Create config from environment variables and CLI arguments.

        CLI arguments override environment variables.

        Args:
            username: GitHub username (overrides GITHUB_USERNAME)
            token: GitHub token (overrides GITHUB_TOKEN)
            workspace_dir: Clone root (overrides WORKSPACE_HOME)
            database_path: Cache file (overrides SHUB_DATABASE)
            max_concurrency: Concurrent build status fetches
            isolate_failures: Keep fetching when one repository fails

        Returns:
            Config instance

        Raises:
            ValueError: If required config is missing or invalid
        """
        # Merge with environment variables (CLI args take precedence)
        final_username = username or os.getenv('GITHUB_USERNAME')
        final_token = token or os.getenv('GITHUB_TOKEN')
        final_workspace = workspace_dir or os.getenv('WORKSPACE_HOME') or os.getcwd()
        final_database = (
            database_path
            or os.getenv('SHUB_DATABASE')
            or str(get_config_dir() / f'{APP_NAME}.db')
        )

        # Validate required fields
        if not final_username:
            raise ValueError(
                "GitHub username is required. "
                "Set GITHUB_USERNAME in .env or use --username"
            )
        if max_concurrency is not None and max_concurrency < 1:
            raise ValueError(f"--workers must be at least 1, was {max_concurrency}")

        return cls(
            github_username=final_username,
            workspace_root_dir=os.path.expanduser(final_workspace),
            database_path=os.path.expanduser(final_database),
            github_token=final_token,
            max_concurrency=max_concurrency or DEFAULT_CONCURRENCY,
            isolate_failures=isolate_failures
        )

    @property
    def is_authenticated(self) -> bool:
        """Check if GitHub token is available.

        Returns:
            True if token is available
        """
        return bool(self.github_token)
