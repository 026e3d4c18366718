"""Plain-text formatting for command output."""

from datetime import datetime, timezone
from typing import List, Dict, Any, Optional, Sequence, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.types import CheckRun, Commit

DASHBOARD_MARGIN = 2

NAME_LEN = 15
DESCRIPTION_LEN = 30
STARRED_DESCRIPTION_LEN = 60
OWNER_NAME_LEN = 15
PUSHED_AT_LEN = 12
LANG_NAME_LEN = 10
ATTRS_LEN = 15
ISSUE_TITLE_LEN = 50


def ellipsize(text: str, threshold: int) -> str:
    """Shorten text to at most `threshold` characters.

    Newlines become spaces and shortened text ends with "..".

    Args:
        text: Text to shorten
        threshold: Maximum length, at least 3

    Returns:
        Text no longer than threshold
    """
    if threshold < 3:
        raise ValueError(f"threshold must be at least 3, was {threshold}")
    if len(text) <= threshold:
        return text
    shortened = text.replace('\n', ' ')[:threshold - 2].strip()
    return f"{shortened}.."


def since(moment: datetime, now: Optional[datetime] = None) -> str:
    """Describe how long ago a moment was.

    Args:
        moment: Timezone-aware timestamp
        now: Reference time, defaults to the current UTC time

    Returns:
        e.g. "just now", "5 minutes ago", "this week", "2 years ago"
    """
    now = now or datetime.now(timezone.utc)
    elapsed = now - moment
    days = elapsed.days

    if days < 1:
        hours = int(elapsed.total_seconds() // 3600)
        if hours < 1:
            minutes = int(elapsed.total_seconds() // 60)
            if minutes < 1:
                return "just now"
            return f"{minutes} minutes ago"
        return f"{hours} hours ago"
    if days < 7:
        return "this week"
    if days < 30:
        return "this month"
    if days < 365:
        return "this year"

    years = days // 365
    return f"{years} year ago" if years == 1 else f"{years} years ago"


def snake_case_to_statement(text: str) -> str:
    """Turn `snake_case` into `Statement` form, e.g. "timed_out" -> "Timed out"."""
    if not text:
        return text
    text = text.replace('_', ' ')
    return text[0].upper() + text[1:]


def render_dashboard(rows: Sequence[Tuple[str, str]], margin: int = DASHBOARD_MARGIN) -> List[str]:
    """Render dashboard lines with the status column aligned.

    Args:
        rows: Pairs of repository name and status text
        margin: Spaces between the longest name and the status column

    Returns:
        One line per row
    """
    if not rows:
        return []
    width = max(len(name) for name, _ in rows)
    return [
        f"{name}{' ' * (width - len(name) + margin)}{status}"
        for name, status in rows
    ]


def _column(text: str, length: int) -> str:
    return f"{ellipsize(text, length):<{length}}"


def _age(timestamp: Optional[str], now: Optional[datetime]) -> str:
    if not timestamp:
        return ''
    return since(datetime.fromisoformat(timestamp.replace('Z', '+00:00')), now)


def _attrs(repo: Dict[str, Any]) -> str:
    attrs = []
    if repo.get('archived'):
        attrs.append('archived')
    if repo.get('fork'):
        attrs.append('fork')
    return ', '.join(attrs)


def format_owned_repository(repo: Dict[str, Any], now: Optional[datetime] = None) -> str:
    """Format one line of the owned repository listing.

    Args:
        repo: Repository dictionary from GitHub API
        now: Reference time for relative timestamps

    Returns:
        Columns: visibility | name | description | pushed | language | attributes
    """
    visibility = 'private' if repo.get('private') else 'public'
    columns = [
        _column(visibility, 7),
        _column(repo['name'], NAME_LEN),
        _column(repo.get('description') or '', DESCRIPTION_LEN),
        _column(_age(repo.get('pushed_at'), now), PUSHED_AT_LEN),
        _column(repo.get('language') or '', LANG_NAME_LEN),
        _column(_attrs(repo), ATTRS_LEN),
    ]
    return ' | '.join(columns).rstrip()


def format_starred_repository(
    repo: Dict[str, Any],
    short: bool = False,
    now: Optional[datetime] = None
) -> str:
    """Format one line of the starred repository listing.

    Args:
        repo: Repository dictionary from GitHub API
        short: Truncate the description
        now: Reference time for relative timestamps

    Returns:
        Columns: name | description | owner | pushed | language | attributes
    """
    description = (repo.get('description') or '').replace('\n', ' ')
    if short:
        description = _column(description, STARRED_DESCRIPTION_LEN)
    columns = [
        _column(repo['name'], NAME_LEN),
        description,
        _column((repo.get('owner') or {}).get('login', ''), OWNER_NAME_LEN),
        _column(_age(repo.get('pushed_at'), now), PUSHED_AT_LEN),
        _column(repo.get('language') or '', LANG_NAME_LEN),
        _column(_attrs(repo), ATTRS_LEN),
    ]
    return ' | '.join(columns).rstrip()


def format_commit(commit: 'Commit', now: Optional[datetime] = None) -> List[str]:
    """Format a commit summary: author and age, short sha, first message line."""
    if commit.author_name and commit.author_email:
        author = f"{commit.author_name} <{commit.author_email}> - "
    elif commit.author_name or commit.author_email:
        author = f"{commit.author_name or commit.author_email} - "
    else:
        author = ''
    age = since(commit.date, now) if commit.date else ''
    first_line = commit.message.split('\n', 1)[0]
    return [f"{author}{age}", commit.sha[:8], first_line]


def format_check_run(run: 'CheckRun', now: Optional[datetime] = None) -> str:
    """Format a check run as `<name>: <result> - <age>`."""
    result = snake_case_to_statement(run.conclusion or run.status)
    age = since(run.timestamp, now) if run.timestamp else ''
    return f"{run.name}: {result} - {age}"


def format_issue(issue: Dict[str, Any], now: Optional[datetime] = None) -> str:
    """Format one line of the issue listing.

    Args:
        issue: Issue dictionary from GitHub API
        now: Reference time for relative timestamps

    Returns:
        Columns: repository#number | title | updated
    """
    repository = (issue.get('repository') or {}).get('full_name', '')
    columns = [
        f"{repository}#{issue['number']}",
        _column(issue.get('title') or '', ISSUE_TITLE_LEN),
        _age(issue.get('updated_at'), now),
    ]
    return ' | '.join(columns).rstrip()
