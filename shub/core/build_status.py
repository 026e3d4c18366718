"""Summarize the check runs of a commit into a single build status."""

from typing import Iterable, Optional

from .types import BuildStatus, CheckRun


def status_of(run: CheckRun) -> Optional[BuildStatus]:
    """Map one check run to a build status.

    Args:
        run: Check run reported for a commit

    Returns:
        Build status, or None for queued runs which do not count yet
    """
    if run.status == "queued":
        return None
    if run.status == "in_progress":
        return BuildStatus.IN_PROGRESS
    if run.status == "completed" and run.conclusion == "success":
        return BuildStatus.SUCCESS
    # Failed, cancelled, timed out, or a status we do not know
    return BuildStatus.FAILURE


def reduce_check_runs(runs: Iterable[CheckRun]) -> Optional[BuildStatus]:
    """Reduce the check runs of a commit to the most severe status.

    Args:
        runs: Check runs of one commit, in any order

    Returns:
        Most severe status, or None when no run has started
    """
    statuses = [status for status in map(status_of, runs) if status is not None]
    if not statuses:
        return None
    return max(statuses)
