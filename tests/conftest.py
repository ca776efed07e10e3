"""
Shared fixtures for the to-do tests
"""

import pytest

from models import MemoryBlobStore
from store import IdGenerator, TodoStore


class FakeClientStorage:
    def __init__(self):
        self.data = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value
        return True


class FakePage:
    """Stands in for ft.Page: counts update() calls and exposes client_storage"""

    def __init__(self, web=False):
        self.web = web
        self.session_id = "test-session"
        self.client_storage = FakeClientStorage()
        self.updates = 0

    def update(self, *controls):
        self.updates += 1


class TickingClock:
    """Returns the same second until advanced, to force id collisions"""

    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def blob_store():
    return MemoryBlobStore()


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def store(blob_store, clock):
    return TodoStore(blob_store, id_generator=IdGenerator(clock=clock))


@pytest.fixture
def page():
    return FakePage()
