"""Shared pytest fixtures for Friend Finder tests."""
import threading
import time

import pytest

from config import USERS_STORAGE_KEY
from database import MemoryStorage
from profile_store import ProfileStore


class SlowFirstWriteStorage(MemoryStorage):
    """Holds the first users write for a moment so other writers can overtake it."""

    def __init__(self, delay=0.05):
        super().__init__()
        self.delay = delay
        self._first = threading.Event()

    def set_item(self, key, value):
        if key == USERS_STORAGE_KEY and not self._first.is_set():
            self._first.set()
            time.sleep(self.delay)
        super().set_item(key, value)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def slow_storage():
    return SlowFirstWriteStorage()


@pytest.fixture
def store(storage):
    s = ProfileStore(storage)
    s.load()
    return s


@pytest.fixture
def sanya(store):
    return store.create_user("Sanya", 24, ["tech", "music", "reading", "coding", "art"])


@pytest.fixture
def nikhil(store):
    return store.create_user("Nikhil", 26, ["sports", "gaming", "tech", "fitness", "movies"])


@pytest.fixture
def rahul(store):
    return store.create_user("Rahul", 25, ["gaming", "tech", "movies", "coding", "science"])
