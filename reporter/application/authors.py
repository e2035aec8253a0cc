"""Normalization of the --author filter value."""

from typing import Optional

from reporter.infrastructure.github_client import GitHubClient

ME = "me"


def normalize_login(login: Optional[str]) -> str:
    """Strip one leading `@` and lowercase."""
    login = login or ""
    if login.startswith("@"):
        login = login[1:]
    return login.lower()


def resolve_author(client: GitHubClient, raw: Optional[str]) -> str:
    """
    Resolve the author filter to a lowercase login.

    `me` stands for the authenticated user. An empty result means no filter.
    """
    if raw == ME:
        raw = client.get_authenticated_user().login
    return normalize_login(raw)
