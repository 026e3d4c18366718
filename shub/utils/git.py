"""Git operations and utilities."""

import os
import subprocess
import logging

logger = logging.getLogger('shub')


def repo_exists(repo_path: str) -> bool:
    """Check if a repository exists locally.

    Args:
        repo_path: Path to check

    Returns:
        True if the path exists and is a directory
    """
    return os.path.exists(repo_path) and os.path.isdir(repo_path)


def clone_repo(clone_url: str, repo_path: str) -> bool:
    """Clone a repository, creating missing parent directories.

    Args:
        clone_url: URL to clone from
        repo_path: Local path to clone to

    Returns:
        True if successful, False otherwise
    """
    os.makedirs(os.path.dirname(repo_path) or '.', exist_ok=True)
    try:
        logger.info(f"Cloning to {repo_path}...")
        subprocess.run(
            ["git", "clone", clone_url, repo_path],
            check=True,
            capture_output=True,
            text=True
        )
        return True
    except subprocess.CalledProcessError as e:
        logger.error(f"Failed to clone: {e.stderr.strip() if e.stderr else e}")
        return False
    except FileNotFoundError:
        logger.error("git executable not found")
        return False
