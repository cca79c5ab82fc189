# Ensures local imports (e.g. from journal_cli import ReflectionJournalApp) work
import sys, os
import pytest

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from reflection_journal.storage import InMemoryStorage
from reflection_journal.reflection_store import ReflectionStore


class FrozenClock:
    """
    Returns the same instant until advanced, so tests can force
    several creations into one millisecond.
    """

    def __init__(self, start: float = 1714521600.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def store(storage, clock):
    s = ReflectionStore(storage, clock=clock)
    s.load()
    yield s
    s.close()
