"""Resolve a command source string into repositories."""

import logging
from typing import List

from reporter.domain.errors import InvalidTarget, NotFound, UpstreamError
from reporter.domain.models import Repository
from reporter.infrastructure.github_client import GitHubClient

logger = logging.getLogger(__name__)


def split_source(source: str) -> List[str]:
    """Split `owner` or `owner/name` into its parts."""
    parts = (source or "").split("/")
    if len(parts) not in (1, 2) or not all(parts):
        raise InvalidTarget(source)
    return parts


def resolve_targets(client: GitHubClient, source: str) -> List[Repository]:
    """
    Resolve the repositories a command reports on.

    Args:
        client: GitHub API client
        source: Organization name or `owner/name`

    Returns:
        Every repository of the organization, or the single named repository

    Raises:
        InvalidTarget: If the source string is malformed
        NotFound: If the named repository cannot be fetched
    """
    parts = split_source(source)
    if len(parts) == 1:
        return client.list_org_repositories(parts[0])

    owner, name = parts
    try:
        repo = client.get_repository(owner, name)
    except UpstreamError as e:
        raise NotFound(source, str(e)) from e
    logger.info(f"Resolved repository {repo.full_name}")
    return [repo]
