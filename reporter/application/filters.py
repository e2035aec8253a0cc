"""Exclusion predicates for pull requests and issues.

TimeFilter (creation-time checks) is library API only; no command uses it,
the commands filter on close time through `closed_in`.
"""

from typing import Callable, Iterable, Iterator, List, TypeVar, Union

from reporter.domain.date_range import DateRange
from reporter.domain.models import Issue, PullRequest

Item = Union[PullRequest, Issue]
T = TypeVar("T", PullRequest, Issue)
Predicate = Callable[[Item], bool]

BOT_PREFIX = "dependabot"


def is_bot(login: str) -> bool:
    return login.startswith(BOT_PREFIX)


def not_bot(item: Item) -> bool:
    return not is_bot(item.user.login)


def by_author(author: str) -> Predicate:
    """Match the item author case-insensitively; empty author matches all."""
    def check(item: Item) -> bool:
        return not author or author.lower() == item.user.login.lower()
    return check


def not_draft(item: PullRequest) -> bool:
    return not item.draft


def merged(item: PullRequest) -> bool:
    # The list endpoint does not fill `merged`, only `merged_at`
    return item.merged_at is not None


def closed_in(date_range: DateRange) -> Predicate:
    def check(item: Item) -> bool:
        return date_range.include(item.closed_at)
    return check


class FilterChain:
    """Ordered predicates combined with AND, stopping at the first rejection."""

    def __init__(self, predicates: Iterable[Predicate]):
        self.predicates: List[Predicate] = list(predicates)

    def accepts(self, item: Item) -> bool:
        return all(predicate(item) for predicate in self.predicates)

    def apply(self, items: Iterable[T]) -> Iterator[T]:
        return (item for item in items if self.accepts(item))


class TimeFilter:
    """Checks the creation time of pull requests and tickets against a range."""

    def __init__(self, date_range: DateRange):
        self.range = date_range

    def check_pr(self, pr: PullRequest) -> bool:
        return self.range.include(pr.created_at)

    def check_ticket(self, issue: Issue) -> bool:
        return self.range.include(issue.created_at)


def report_chain(author: str, date_range: DateRange) -> FilterChain:
    """Filters for merged pull requests listed by the report command."""
    return FilterChain([not_bot, by_author(author), merged, closed_in(date_range)])


def status_chain(author: str) -> FilterChain:
    """Filters for open pull requests listed by the status command."""
    return FilterChain([not_bot, by_author(author), not_draft])
