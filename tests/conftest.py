"""Shared fixtures for the random indexing tests."""

import pytest

from context_window import ContextWindow
from encoder import ProjectionCache
from storage import Accumulator

SMALL_DIM = 32


class RecordingCache(ProjectionCache):
    """ProjectionCache that remembers every key it was asked for."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.keys = set()

    def lookup(self, key):
        self.keys.add(key)
        return super().lookup(key)


class FlakyStream:
    """Text stream that returns the given chunks, then fails."""

    def __init__(self, chunks, error=None):
        self.chunks = list(chunks)
        self.error = error or OSError("device went away")

    def read(self, size=-1):
        if self.chunks:
            return self.chunks.pop(0)
        raise self.error


def filled_window(tokens, size=5):
    window = ContextWindow(size)
    for token in tokens:
        window.push(token)
    return window


@pytest.fixture
def cache():
    return ProjectionCache(dim=SMALL_DIM)


@pytest.fixture
def reference_cache():
    """Independent cache for computing expected vectors."""
    return ProjectionCache(dim=SMALL_DIM)


@pytest.fixture
def accumulator(cache):
    return Accumulator(cache)
