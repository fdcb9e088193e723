import sys
from pathlib import Path

# Ensure the application source root is on sys.path so `langpack` and
# `tests.factories` import the same way regardless of invocation.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest

from tests.factories.i18n import CountingRandom, make_engine


@pytest.fixture
def counting_random():
    """Deterministic random source that counts draws."""
    return CountingRandom(1234)


@pytest.fixture
def engine(counting_random):
    """Engine with the built-in language table and sample fields."""
    return make_engine(random_source=counting_random)
