"""Contributor statistics: merged pull requests, reviews and closed issues."""

import logging
from typing import Callable, Iterable, Optional, Set

from reporter.application.filters import FilterChain, closed_in, not_bot
from reporter.domain.date_range import DateRange
from reporter.domain.models import Issue, PullRequest, Repository, Review
from reporter.domain.stats import UsersStats
from reporter.infrastructure.github_client import GitHubClient

logger = logging.getLogger(__name__)

MEMBER = "MEMBER"
REVIEW_DECISIONS = ("APPROVED", "CHANGES_REQUESTED")

# kind ("review", "pull" or "issue"), login, url
ContributionCallback = Callable[[str, str, str], None]


def is_decisive_member_review(review: Review) -> bool:
    return review.author_association == MEMBER and review.state in REVIEW_DECISIONS


def is_delegated_issue(issue: Issue) -> bool:
    """True for issues assigned to someone other than the reporter."""
    if issue.assignee is None:
        return False
    return issue.assignee.login.lower() != issue.user.login.lower()


class ContributorAggregator:
    """Accumulates per-user contribution counts over a date range."""

    def __init__(
        self,
        github_client: GitHubClient,
        date_range: DateRange,
        author: str = "",
        on_contribution: Optional[ContributionCallback] = None,
    ):
        self.github_client = github_client
        self.date_range = date_range
        self.author = author.lower()
        self.on_contribution = on_contribution
        self.stats = UsersStats()

    def _tracked(self, login: str) -> bool:
        return not self.author or self.author == login.lower()

    def _notify(self, kind: str, login: str, url: str):
        if self.on_contribution is not None:
            self.on_contribution(kind, login, url)

    def add_pull_request(self, pr: PullRequest, reviews: Iterable[Review]):
        """Count the reviews of a closed pull request and the pull request itself if merged."""
        reviewers: Set[str] = set()
        for review in reviews:
            if not is_decisive_member_review(review):
                continue
            login = review.user.login
            # Deleted accounts come back without a user
            if not login or not self._tracked(login):
                continue
            self._notify("review", login, review.html_url)
            reviewers.add(login.lower())

        # One review per reviewer per pull request
        for reviewer in reviewers:
            self.stats.review(reviewer)

        if pr.merged_at is not None and self._tracked(pr.user.login):
            self.stats.pull(pr.user.login)
            self._notify("pull", pr.user.login, pr.html_url)

    def add_issue(self, issue: Issue):
        """Count a closed issue for its reporter when it was handed to someone else."""
        if not self.date_range.include(issue.closed_at):
            return
        if not is_delegated_issue(issue):
            return
        if self._tracked(issue.user.login):
            self.stats.issue(issue.user.login)
            self._notify("issue", issue.user.login, issue.html_url)

    def collect(self, repos: Iterable[Repository], org: str) -> UsersStats:
        """
        Aggregate contributions for the repositories and the organization's issues.

        Args:
            repos: Repositories whose closed pull requests are examined
            org: Organization whose closed, assigned issues are examined

        Returns:
            Accumulated statistics
        """
        chain = FilterChain([closed_in(self.date_range), not_bot])
        for repo in repos:
            prs = self.github_client.list_pull_requests(repo.owner, repo.name, state="closed")
            logger.info(f"Fetched {len(prs)} closed pull requests from {repo.full_name}")
            for pr in chain.apply(prs):
                reviews = self.github_client.list_reviews(repo.owner, repo.name, pr.number)
                self.add_pull_request(pr, reviews)

        issues = self.github_client.list_org_issues(org, filter="assigned", state="closed")
        logger.info(f"Fetched {len(issues)} closed issues from {org}")
        for issue in issues:
            self.add_issue(issue)

        return self.stats
