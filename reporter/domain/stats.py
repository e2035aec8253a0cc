"""Per-user contribution counters."""

from dataclasses import dataclass
from typing import Dict, Iterator, Tuple

PULL_WEIGHT = 1.0
REVIEW_WEIGHT = 0.5
ISSUE_WEIGHT = 0.5


@dataclass
class UserStats:
    """Mutable counter triple for one contributor."""

    pulls: int = 0
    issues: int = 0
    reviews: int = 0

    def sum(self) -> float:
        """Weighted score: a merged pull request counts twice a review or issue."""
        return (
            self.pulls * PULL_WEIGHT
            + self.reviews * REVIEW_WEIGHT
            + self.issues * ISSUE_WEIGHT
        )

    def __str__(self) -> str:
        return f"pr={self.pulls} rev={self.reviews} tic={self.issues}"


class UsersStats:
    """Mapping from lowercase login to counters."""

    def __init__(self):
        self._stats: Dict[str, UserStats] = {}

    def get(self, login: str) -> UserStats:
        key = login.lower()
        stats = self._stats.get(key)
        if stats is None:
            stats = UserStats()
            self._stats[key] = stats
        return stats

    def review(self, login: str):
        self.get(login).reviews += 1

    def pull(self, login: str):
        self.get(login).pulls += 1

    def issue(self, login: str):
        self.get(login).issues += 1

    def items(self) -> Iterator[Tuple[str, UserStats]]:
        return iter(self._stats.items())

    def __contains__(self, login: str) -> bool:
        return login.lower() in self._stats

    def __getitem__(self, login: str) -> UserStats:
        return self._stats[login.lower()]

    def __len__(self) -> int:
        return len(self._stats)
