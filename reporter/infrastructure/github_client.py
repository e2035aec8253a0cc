"""GitHub REST API client used by the report commands."""

import logging
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional

import requests

from reporter.config import Settings
from reporter.domain.errors import RateLimitExceeded, UpstreamError
from reporter.domain.models import Issue, PullRequest, Repository, Review, User

logger = logging.getLogger(__name__)


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _parse_user(node: Optional[Dict[str, Any]]) -> Optional[User]:
    if not node:
        return None
    return User(login=node.get("login") or "")


def _parse_repository(node: Dict[str, Any]) -> Repository:
    owner = (node.get("owner") or {}).get("login") or ""
    name = node.get("name") or ""
    return Repository(
        owner=owner,
        name=name,
        full_name=node.get("full_name") or f"{owner}/{name}",
        url=node.get("html_url") or "",
    )


def _parse_pull_request(node: Dict[str, Any]) -> PullRequest:
    return PullRequest(
        number=node["number"],
        title=node.get("title") or "",
        user=_parse_user(node.get("user")) or User(login=""),
        state=node.get("state") or "",
        html_url=node.get("html_url") or "",
        draft=bool(node.get("draft")),
        merged=bool(node.get("merged")),
        assignee=_parse_user(node.get("assignee")),
        created_at=_parse_datetime(node.get("created_at")),
        closed_at=_parse_datetime(node.get("closed_at")),
        merged_at=_parse_datetime(node.get("merged_at")),
    )


def _parse_review(node: Dict[str, Any]) -> Review:
    return Review(
        user=_parse_user(node.get("user")) or User(login=""),
        state=node.get("state") or "",
        author_association=node.get("author_association") or "",
        html_url=node.get("html_url") or "",
    )


def _parse_issue(node: Dict[str, Any]) -> Issue:
    return Issue(
        number=node["number"],
        title=node.get("title") or "",
        user=_parse_user(node.get("user")) or User(login=""),
        state=node.get("state") or "",
        html_url=node.get("html_url") or "",
        assignee=_parse_user(node.get("assignee")),
        created_at=_parse_datetime(node.get("created_at")),
        closed_at=_parse_datetime(node.get("closed_at")),
    )


class GitHubClient:
    """Client for the GitHub REST API authenticated with a bearer token.

    Failures are never retried: every error is raised as UpstreamError.
    """

    def __init__(self, token: str, settings: Optional[Settings] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize GitHub REST client.

        Args:
            token: GitHub personal access token
            settings: API URL, timeout and paging settings. Defaults to Settings().
            session: HTTP session to use. A new one is created if None.
        """
        self.settings = settings or Settings()
        self.base_url = self.settings.api_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": "2022-11-28",
        })

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        """Release the HTTP session."""
        self.session.close()

    def _execute_request(self, url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        """
        Execute a GET request and check the response status.

        Args:
            url: Absolute URL
            params: Query parameters

        Returns:
            Successful response

        Raises:
            RateLimitExceeded: If rate limit is exceeded
            UpstreamError: If the request fails for any other reason
        """
        logger.debug(f"GET {url} {params or ''}")
        try:
            response = self.session.get(url, params=params, timeout=self.settings.timeout)
        except requests.exceptions.RequestException as e:
            raise UpstreamError(f"Request to {url} failed: {e}") from e

        if response.status_code == 200:
            return response

        if response.status_code == 401:
            raise UpstreamError("Authentication failed. Check your GitHub token.", 401)

        if response.status_code in (403, 429):
            remaining = response.headers.get("X-RateLimit-Remaining")
            if remaining == "0" or response.status_code == 429:
                reset_time = response.headers.get("X-RateLimit-Reset", "")
                raise RateLimitExceeded(
                    f"Rate limit exceeded (resets at {reset_time or 'unknown'})",
                    response.status_code,
                )
            raise UpstreamError(f"Forbidden: {self._error_message(response)}", 403)

        if response.status_code == 404:
            raise UpstreamError(f"Not found: {url}", 404)

        raise UpstreamError(
            f"GitHub API error {response.status_code}: {self._error_message(response)}",
            response.status_code,
        )

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.text
        if isinstance(data, dict):
            return data.get("message", response.text)
        return response.text

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"Invalid JSON from {response.url}: {e}") from e

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._json(self._execute_request(f"{self.base_url}{path}", params))

    def _paginate(self, path: str, params: Optional[Dict[str, Any]] = None) -> Iterator[Dict[str, Any]]:
        """
        Iterate over every item of a list endpoint, following `Link: rel="next"`.

        Stops after `settings.max_pages` pages when that limit is set.
        """
        url: Optional[str] = f"{self.base_url}{path}"
        query: Optional[Dict[str, Any]] = dict(params or {}, per_page=self.settings.per_page)
        pages = 0

        while url:
            response = self._execute_request(url, query)
            data = self._json(response)
            if not isinstance(data, list):
                raise UpstreamError(f"Expected a list from {url}")
            yield from data

            pages += 1
            if self.settings.max_pages and pages >= self.settings.max_pages:
                if "next" in response.links:
                    logger.warning(f"Stopped after {pages} pages of {path}")
                break

            # The next link already carries the query string
            url = response.links.get("next", {}).get("url")
            query = None

    def get_authenticated_user(self) -> User:
        """Return the user the token belongs to."""
        return _parse_user(self._get("/user")) or User(login="")

    def list_org_repositories(self, org: str) -> List[Repository]:
        """List all repositories owned by an organization."""
        repos = [_parse_repository(node) for node in self._paginate(f"/orgs/{org}/repos")]
        logger.info(f"Found {len(repos)} repositories in {org}")
        return repos

    def get_repository(self, owner: str, name: str) -> Repository:
        """Fetch a single repository."""
        return _parse_repository(self._get(f"/repos/{owner}/{name}"))

    def list_pull_requests(self, owner: str, name: str, state: str = "open",
                           sort: Optional[str] = None) -> List[PullRequest]:
        """
        List pull requests of a repository.

        Args:
            owner: Repository owner
            name: Repository name
            state: "open", "closed" or "all"
            sort: Optional sort key, e.g. "updated"
        """
        params: Dict[str, Any] = {"state": state}
        if sort:
            params["sort"] = sort
            params["direction"] = "desc"
        return [
            _parse_pull_request(node)
            for node in self._paginate(f"/repos/{owner}/{name}/pulls", params)
        ]

    def list_reviews(self, owner: str, name: str, number: int) -> List[Review]:
        """List reviews submitted on a pull request."""
        return [
            _parse_review(node)
            for node in self._paginate(f"/repos/{owner}/{name}/pulls/{number}/reviews")
        ]

    def list_org_issues(self, org: str, filter: str = "assigned", state: str = "closed") -> List[Issue]:
        """List organization issues visible to the authenticated user."""
        params = {"filter": filter, "state": state}
        return [_parse_issue(node) for node in self._paginate(f"/orgs/{org}/issues", params)]
