from __future__ import annotations

from reporter.domain.stats import UserStats, UsersStats


def test_keys_are_lowercased() -> None:
    stats = UsersStats()
    stats.pull("Bob")
    stats.pull("bob")
    assert len(stats) == 1
    assert stats["BOB"].pulls == 2
    assert dict(stats.items()).keys() == {"bob"}


def test_score_weights() -> None:
    s = UserStats(pulls=2, issues=1, reviews=3)
    assert s.sum() == 2 + 0.5 + 1.5
    assert str(s) == "pr=2 rev=3 tic=1"
