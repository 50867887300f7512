"""
Shared test fixtures for the randsym test suite.

Provides:
- FixedWordSource, an entropy source replaying a fixed word cycle
- Factories for RandomCore / RandomSymbolCore over fixed words
"""

import itertools

import numpy as np
import pytest

from randsym.core import RandomCore
from randsym.entropy import WORD_DTYPE, WORD_SIZE, EntropySource
from randsym.symbols import RandomSymbolCore

# Word pairs that compose to known floats
ZERO = (0, 0)
HALF = (0x80000000, 0)
MAX_BELOW_ONE = (0xFFFFFFFF, 0xFFFFFFFF)


class FixedWordSource(EntropySource):
    """Replays `words` cyclically and records every request size."""

    name = 'fixed'

    def __init__(self, words):
        self._words = itertools.cycle(words)
        self.requests = []
        self.closed = False

    def read_bytes(self, num_bytes):
        count = num_bytes // WORD_SIZE
        self.requests.append(count)
        words = [next(self._words) for _ in range(count)]
        return np.array(words, dtype=WORD_DTYPE).tobytes()

    def close(self):
        self.closed = True


@pytest.fixture
def make_core():
    """Build a RandomCore whose floats come from fixed word pairs."""
    def _make(*pairs):
        words = [word for pair in pairs for word in pair]
        return RandomCore(FixedWordSource(words))
    return _make


@pytest.fixture
def make_symbols(make_core):
    def _make(*pairs):
        return RandomSymbolCore(make_core(*pairs))
    return _make


@pytest.fixture
def core():
    """RandomCore over the OS source."""
    return RandomCore()


@pytest.fixture
def symbols(core):
    return RandomSymbolCore(core)
