"""Plain records passed between git, the remote APIs and the renderer."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class StagedFileStat:
    """Line counts for one staged file."""

    file: str
    additions: int = 0
    deletions: int = 0


@dataclass(frozen=True)
class PullRequest:
    """A merged pull request authored by the user."""

    title: str
    html_url: str
    closed_at: datetime


@dataclass(frozen=True)
class JiraIssue:
    key: str
    summary: str
    description: str = ""
