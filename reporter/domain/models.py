"""Domain entities for GitHub repositories, pull requests, reviews and issues."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class User:
    """GitHub account reference."""

    login: str


@dataclass(frozen=True)
class Repository:
    """Immutable repository entity."""

    owner: str
    name: str
    full_name: str
    url: str = ""


@dataclass(frozen=True)
class Review:
    """Review left on a pull request."""

    user: User
    state: str
    author_association: str = ""
    html_url: str = ""


@dataclass(frozen=True)
class PullRequest:
    """Read-only view of a pull request."""

    number: int
    title: str
    user: User
    state: str
    html_url: str
    draft: bool = False
    merged: bool = False
    assignee: Optional[User] = None
    created_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    merged_at: Optional[datetime] = None


@dataclass(frozen=True)
class PullRequestStatus:
    """Pull request together with the reviews fetched for it."""

    pull_request: PullRequest
    reviews: Tuple[Review, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Issue:
    """Read-only view of an issue."""

    number: int
    title: str
    user: User
    state: str
    html_url: str
    assignee: Optional[User] = None
    created_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
