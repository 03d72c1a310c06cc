import sys
from pathlib import Path

import pytest

# Add the project root to the path so imports work
sys.path.insert(0, str(Path(__file__).parent.parent))

from hustle.models import HustleIdeasOutput


class FakeIdeator:
    """Stands in for HustleIdeator: returns a canned result or raises."""

    def __init__(self, result=None, error=None):
        self.result = result if result is not None else HustleIdeasOutput()
        self.error = error
        self.requests = []

    def generate_ideas(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def fake_ideator_factory():
    return FakeIdeator
