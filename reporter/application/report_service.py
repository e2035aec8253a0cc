"""Application service listing pull requests for the report and status commands."""

import logging
from typing import Iterable, Iterator

from reporter.application.filters import report_chain, status_chain
from reporter.domain.date_range import DateRange
from reporter.domain.models import PullRequest, PullRequestStatus, Repository
from reporter.infrastructure.github_client import GitHubClient

logger = logging.getLogger(__name__)


class ReportService:
    """Fetches pull requests repository by repository and applies the exclusion rules.

    Results are lazy: each repository is fetched only when the previous one is
    exhausted, so output can be printed while fetching continues.
    """

    def __init__(self, github_client: GitHubClient):
        """
        Initialize report service.

        Args:
            github_client: GitHub API client
        """
        self.github_client = github_client

    def merged_pull_requests(
        self,
        repos: Iterable[Repository],
        author: str,
        date_range: DateRange,
    ) -> Iterator[PullRequest]:
        """
        Yield pull requests merged within the date range.

        Args:
            repos: Repositories in resolution order
            author: Lowercase author login, empty for everyone
            date_range: Range the close timestamp must fall in

        Returns:
            Iterator over surviving pull requests
        """
        chain = report_chain(author, date_range)
        for repo in repos:
            prs = self.github_client.list_pull_requests(repo.owner, repo.name, state="closed")
            logger.info(f"Fetched {len(prs)} closed pull requests from {repo.full_name}")
            yield from chain.apply(prs)

    def open_pull_requests(
        self,
        repos: Iterable[Repository],
        author: str,
    ) -> Iterator[PullRequestStatus]:
        """
        Yield open, non-draft pull requests with their reviews.

        Reviews are fetched with one extra request per surviving pull request.
        """
        chain = status_chain(author)
        for repo in repos:
            prs = self.github_client.list_pull_requests(
                repo.owner, repo.name, state="open", sort="updated"
            )
            logger.info(f"Fetched {len(prs)} open pull requests from {repo.full_name}")
            for pr in chain.apply(prs):
                reviews = self.github_client.list_reviews(repo.owner, repo.name, pr.number)
                yield PullRequestStatus(pull_request=pr, reviews=tuple(reviews))
