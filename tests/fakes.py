from __future__ import annotations

from datetime import datetime, timezone

from reporter.domain.errors import UpstreamError
from reporter.domain.models import Issue, PullRequest, Repository, Review, User

NOW = datetime(2024, 3, 14, 12, 0, tzinfo=timezone.utc)


def make_pr(number: int = 1, login: str = "bob", *, title: str = "", state: str = "closed",
            draft: bool = False, merged_at: datetime | None = None,
            closed_at: datetime | None = None, created_at: datetime | None = None,
            assignee: str | None = None, merged: bool = False) -> PullRequest:
    return PullRequest(
        number=number,
        title=title or f"PR {number}",
        user=User(login),
        state=state,
        html_url=f"https://github.com/acme/app/pull/{number}",
        draft=draft,
        merged=merged,
        assignee=User(assignee) if assignee else None,
        created_at=created_at,
        closed_at=closed_at,
        merged_at=merged_at,
    )


def make_review(login: str, state: str = "APPROVED", association: str = "MEMBER") -> Review:
    return Review(user=User(login), state=state, author_association=association,
                  html_url=f"https://github.com/acme/app/pull/1#review-{login}")


def make_issue(number: int, login: str, *, assignee: str | None, closed_at: datetime | None) -> Issue:
    return Issue(
        number=number,
        title=f"Issue {number}",
        user=User(login),
        state="closed",
        html_url=f"https://github.com/acme/app/issues/{number}",
        assignee=User(assignee) if assignee else None,
        closed_at=closed_at,
    )


class FakeGitHubClient:
    """In-memory stand-in for GitHubClient that records calls."""

    def __init__(self, *, login: str = "Me", repos: list[Repository] | None = None,
                 pulls: dict[tuple[str, str], list[PullRequest]] | None = None,
                 reviews: dict[int, list[Review]] | None = None,
                 issues: list[Issue] | None = None):
        self.login = login
        self.repos = repos or []
        self.pulls = pulls or {}
        self.reviews = reviews or {}
        self.issues = issues or []
        self.calls: list[tuple] = []

    def __enter__(self) -> "FakeGitHubClient":
        return self

    def __exit__(self, *exc) -> None:
        self.calls.append(("close",))

    def get_authenticated_user(self) -> User:
        self.calls.append(("user",))
        return User(self.login)

    def list_org_repositories(self, org: str) -> list[Repository]:
        self.calls.append(("org_repos", org))
        return [r for r in self.repos if r.owner == org]

    def get_repository(self, owner: str, name: str) -> Repository:
        self.calls.append(("repo", owner, name))
        for r in self.repos:
            if (r.owner, r.name) == (owner, name):
                return r
        raise UpstreamError(f"Not found: {owner}/{name}", 404)

    def list_pull_requests(self, owner: str, name: str, state: str = "open", sort: str | None = None) -> list[PullRequest]:
        self.calls.append(("pulls", owner, name, state, sort))
        return list(self.pulls.get((owner, name), []))

    def list_reviews(self, owner: str, name: str, number: int) -> list[Review]:
        self.calls.append(("reviews", owner, name, number))
        return list(self.reviews.get(number, []))

    def list_org_issues(self, org: str, filter: str = "assigned", state: str = "closed") -> list[Issue]:
        self.calls.append(("issues", org, filter, state))
        return list(self.issues)

