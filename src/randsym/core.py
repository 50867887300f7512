"""
Uniform random floats, integers and selections from a secure word source.

Float Construction:
-------------------
A double has a 52-bit mantissa. Two uniform 32-bit words A and B give
exactly 52 random bits by keeping all of A and the top 20 bits of B:

    M = A * 2**20 + (B >> 12)        0 <= M < 2**52
    x = M * 2**-52                   0 <= x < 1

Every representable value k * 2**-52 is equally likely, and 1.0 is never
produced.

Ranges:
-------
Float and integer ranges are left-inclusive, right-exclusive. A zero upper
bound means "range from 0 to the first argument", so random_int(6) is a
draw from 0..5.
"""

import math
import re
from typing import Iterator, Optional, Sequence, TypeVar

import numpy as np

from .entropy import EntropySource, SystemEntropySource
from .errors import EmptySequenceError

T = TypeVar('T')

MANTISSA_HIGH_SHIFT = 20
MANTISSA_LOW_SHIFT = 12
MANTISSA_SCALE = 2.0 ** -52

_NON_LETTERS = re.compile(r'[^A-Za-z]')


def compose_float(high_word: int, low_word: int) -> float:
    """Build a float in [0, 1) from two uint32 words."""
    mantissa = (int(high_word) << MANTISSA_HIGH_SHIFT) | (int(low_word) >> MANTISSA_LOW_SHIFT)
    return mantissa * MANTISSA_SCALE


def compose_floats(words: np.ndarray) -> np.ndarray:
    """Vectorised compose_float over consecutive word pairs."""
    pairs = words.reshape(-1, 2).astype(np.uint64)
    mantissas = (pairs[:, 0] << np.uint64(MANTISSA_HIGH_SHIFT)) | (
        pairs[:, 1] >> np.uint64(MANTISSA_LOW_SHIFT)
    )
    return mantissas.astype(np.float64) * MANTISSA_SCALE


def _scale_float(value: float, low: float, high: float) -> float:
    if high == 0:
        return value * low
    return value * (high - low) + low


def _scale_int(value: float, low: int, high: int) -> int:
    if high == 0:
        return math.floor(value * low)
    return math.floor(value * (high - low)) + low


def _check_length(length: int) -> None:
    if length < 0:
        raise ValueError(f"Sequence length must be non-negative, got {length}")


class RandomCore:
    """
    Random floats, integers and element selection over an entropy source.

    Every call draws fresh words; nothing is cached between calls. Sequence
    methods draw their whole batch when called and return a single-pass
    iterator, so a failing source raises before any value is handed out.
    """

    def __init__(self, source: Optional[EntropySource] = None):
        self.source = source if source is not None else SystemEntropySource()

    def uniform_uint32_sequence(self, count: int = 1) -> np.ndarray:
        """
        Return `count` uniform 32-bit unsigned integers in [0, 2**32 - 1].

        Raises:
            EntropySourceError: The source is unavailable or `count` exceeds
                the per-call word limit.
        """
        return self.source.read_words(count)

    # Floats

    def random_float(self) -> float:
        """Return a float uniformly distributed in [0, 1)."""
        high_word, low_word = self.uniform_uint32_sequence(2)
        return compose_float(high_word, low_word)

    def random_float_sequence(self, length: int = 1) -> Iterator[float]:
        """
        Return an iterator over `length` independent floats in [0, 1).

        All 2 * length words are drawn before this method returns.
        """
        _check_length(length)
        floats = compose_floats(self.uniform_uint32_sequence(2 * length))
        return (float(value) for value in floats)

    def random_float_in_range(self, low: float, high: float = 0) -> float:
        """
        Return a float in [low, high), or in [0, low) when high is 0.
        """
        return _scale_float(self.random_float(), low, high)

    def random_float_range_sequence(self, length: int = 1, low: float = 1,
                                    high: float = 0) -> Iterator[float]:
        floats = self.random_float_sequence(length)
        return (_scale_float(value, low, high) for value in floats)

    # Integers

    def random_int(self, low: float, high: float = 0) -> int:
        """
        Return an integer in [ceil(low), floor(high)).

        When floor(high) is 0 the range is [0, ceil(low)) instead.
        """
        return _scale_int(self.random_float(), math.ceil(low), math.floor(high))

    def random_int_inclusive(self, low: float, high: float = 0) -> int:
        """Same as random_int with the upper bound included."""
        return self.random_int(low, high + 1)

    def random_int_sequence(self, length: int = 1, low: float = 1,
                            high: float = 0) -> Iterator[int]:
        low, high = math.ceil(low), math.floor(high)
        floats = self.random_float_sequence(length)
        return (_scale_int(value, low, high) for value in floats)

    def random_int_inclusive_sequence(self, length: int = 1, low: float = 1,
                                      high: float = 0) -> Iterator[int]:
        return self.random_int_sequence(length, low, high + 1)

    # Items

    def pick_element(self, sequence: Sequence[T]) -> T:
        """
        Return a uniformly chosen element of a list, tuple or string.

        Raises:
            EmptySequenceError: `sequence` is empty.
        """
        if len(sequence) == 0:
            raise EmptySequenceError("Cannot pick an element from an empty sequence")
        return sequence[self.random_int(len(sequence))]

    def pick_word(self, text: str, separator: str = ' ') -> str:
        """
        Return a random word of `text`.

        The text is split on `separator` and every character outside A-Z/a-z
        is removed from each piece; pieces left empty are not candidates.

        Raises:
            EmptySequenceError: No piece contains a letter.
        """
        words = [_NON_LETTERS.sub('', piece) for piece in text.split(separator)]
        words = [word for word in words if word]
        if not words:
            raise EmptySequenceError(f"No words found in {text!r}")
        return self.pick_element(words)
