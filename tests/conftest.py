from __future__ import annotations

import pytest

from reporter.domain.models import Repository


@pytest.fixture
def repo() -> Repository:
    return Repository(owner="acme", name="app", full_name="acme/app", url="https://github.com/acme/app")
