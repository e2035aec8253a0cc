from __future__ import annotations

import io

from fakes import make_pr, make_review
from reporter.application.render import (
    NONE,
    NOTHING,
    render_contributors,
    render_merged,
    render_status,
)
from reporter.domain.models import PullRequestStatus
from reporter.domain.stats import UsersStats


def test_render_merged_lines() -> None:
    out = io.StringIO()
    count = render_merged([make_pr(1, "bob", title="Fix it")], out)
    assert count == 1
    assert out.getvalue() == " - Fix it @bob: https://github.com/acme/app/pull/1\n"


def test_render_merged_hides_authors() -> None:
    out = io.StringIO()
    render_merged([make_pr(1, "bob", title="Fix it")], out, show_authors=False)
    assert out.getvalue() == " - Fix it: https://github.com/acme/app/pull/1\n"


def test_render_status_line() -> None:
    item = PullRequestStatus(
        pull_request=make_pr(2, "bob", title="Add X", state="open", assignee="carol"),
        reviews=(
            make_review("alice", "APPROVED"),
            make_review("dave", "COMMENTED"),
            make_review("erin", "CHANGES_REQUESTED"),
            make_review("frank", "DISMISSED"),
        ),
    )
    out = io.StringIO()
    render_status([item], out)
    assert out.getvalue() == (
        " - Add X (open, [alice:APPROVED,erin:CHANGES_REQUESTED,]) by @bob (a:@carol) "
        "https://github.com/acme/app/pull/2\n"
    )


def test_render_status_unassigned_merged() -> None:
    item = PullRequestStatus(pull_request=make_pr(3, "bob", title="T", state="closed", merged=True))
    out = io.StringIO()
    render_status([item], out)
    assert out.getvalue().startswith(" - T (closed:merged, []) by @bob (a:0) ")


def test_empty_sequences_render_one_placeholder() -> None:
    for render, placeholder in ((render_merged, NOTHING), (render_status, NONE)):
        out = io.StringIO()
        assert render(iter([]), out) == 0
        assert out.getvalue().splitlines() == [placeholder]

    out = io.StringIO()
    assert render_contributors(UsersStats(), out) == 0
    assert out.getvalue().splitlines() == [NOTHING]


def test_render_contributors() -> None:
    stats = UsersStats()
    stats.pull("bob")
    stats.issue("bob")
    stats.review("alice")
    out = io.StringIO()
    assert render_contributors(stats, out) == 2
    lines = set(out.getvalue().splitlines())
    assert lines == {
        "bob - pr=1 rev=0 tic=1 (1.500000)",
        "alice - pr=0 rev=1 tic=0 (0.500000)",
    }
