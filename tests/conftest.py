from typing import Callable

import pytest

from tests.test_utils import RaceScenario


@pytest.fixture
def scenario() -> Callable[..., RaceScenario]:
    """Factory fixture to create scenarios."""

    def _builder(*track_lines: str) -> RaceScenario:
        return RaceScenario(list(track_lines))

    return _builder
