"""Console output for the report, status and contrib commands."""

import sys
from typing import Iterable, Optional, TextIO

from reporter.domain.models import PullRequest, PullRequestStatus
from reporter.domain.stats import UsersStats

NOTHING = " - Nothing ;)"
NONE = " - None ;)"

HIDDEN_REVIEW_STATES = ("DISMISSED", "COMMENTED")


def format_merged(pr: PullRequest, show_authors: bool = True) -> str:
    line = f" - {pr.title}"
    if show_authors:
        line += f" @{pr.user.login}"
    return f"{line}: {pr.html_url}"


def format_status(item: PullRequestStatus) -> str:
    pr = item.pull_request
    state = pr.state
    if pr.merged:
        state += ":merged"

    if pr.assignee is not None:
        assignee = f"(a:@{pr.assignee.login})"
    else:
        assignee = "(a:0)"

    decisions = "".join(
        f"{review.user.login}:{review.state},"
        for review in item.reviews
        if review.state not in HIDDEN_REVIEW_STATES
    )
    return f" - {pr.title} ({state}, [{decisions}]) by @{pr.user.login} {assignee} {pr.html_url}"


def render_merged(items: Iterable[PullRequest], out: Optional[TextIO] = None,
                  show_authors: bool = True) -> int:
    """Print one line per merged pull request. Returns the number of lines."""
    if out is None:
        out = sys.stdout
    count = 0
    for pr in items:
        print(format_merged(pr, show_authors), file=out, flush=True)
        count += 1
    if not count:
        print(NOTHING, file=out)
    return count


def render_status(items: Iterable[PullRequestStatus], out: Optional[TextIO] = None) -> int:
    """Print open pull requests with review decisions and assignee."""
    if out is None:
        out = sys.stdout
    count = 0
    for item in items:
        print(format_status(item), file=out, flush=True)
        count += 1
    if not count:
        print(NONE, file=out)
    return count


def render_contributors(stats: UsersStats, out: Optional[TextIO] = None) -> int:
    """Print counters and score per user, highest score first."""
    if out is None:
        out = sys.stdout
    rows = sorted(stats.items(), key=lambda kv: (-kv[1].sum(), kv[0]))
    for login, user_stats in rows:
        print(f"{login} - {user_stats} ({user_stats.sum():f})", file=out)
    if not rows:
        print(NOTHING, file=out)
    return len(rows)
