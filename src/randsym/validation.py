"""
Statistical checks and plots for generator output.

Byte Statistics:
----------------
For N uniform bytes:
- Mean: 127.5, standard deviation: ~73.9
- Shannon entropy: H = -sum p(x) log2 p(x), close to 8 bits/byte
- Chi-squared over 256 bins with 255 degrees of freedom: ~255 expected,
  ~293 is the p = 0.05 critical value

Monte Carlo Pi:
---------------
Pairs of uniform floats (x, y) fall inside the unit quarter circle with
probability pi / 4. A biased float generator skews the estimate.

These are sanity checks, not a replacement for NIST SP 800-22, Dieharder
or TestU01.
"""

from dataclasses import dataclass
from typing import Dict, Iterable

import numpy as np

from .core import RandomCore
from .entropy import WORD_SIZE, words_from_bytes
from .symbols import ALLOWED_SYMBOL_CHARS, SymbolCategory

# Matplotlib is optional for headless environments
try:
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt
    MATPLOTLIB_AVAILABLE = True
except ImportError:
    MATPLOTLIB_AVAILABLE = False

BYTE_VALUES = 256
CHI_SQUARED_CRITICAL = 293.0


@dataclass(frozen=True)
class ByteStatistics:
    size: int
    mean: float
    std: float
    entropy: float
    chi_squared: float

    @property
    def efficiency(self) -> float:
        """Entropy as a fraction of the 8 bits/byte maximum."""
        return self.entropy / 8

    @property
    def looks_uniform(self) -> bool:
        return self.chi_squared < CHI_SQUARED_CRITICAL


def byte_statistics(data: bytes) -> ByteStatistics:
    """
    Summarise the distribution of byte values in `data`.

    Raises:
        ValueError: `data` is empty.
    """
    if not data:
        raise ValueError("Cannot compute statistics of empty data")

    byte_array = np.frombuffer(data, dtype=np.uint8)
    counts = np.bincount(byte_array, minlength=BYTE_VALUES)

    probabilities = counts[counts > 0] / len(byte_array)
    entropy = float(-np.sum(probabilities * np.log2(probabilities)))

    expected_count = len(byte_array) / BYTE_VALUES
    chi_squared = float(np.sum((counts - expected_count) ** 2 / expected_count))

    return ByteStatistics(
        size=len(byte_array),
        mean=float(np.mean(byte_array)),
        std=float(np.std(byte_array)),
        entropy=entropy,
        chi_squared=chi_squared,
    )


def estimate_pi(core: RandomCore, points: int) -> float:
    """
    Estimate pi from `points` random (x, y) pairs.

    Points are drawn in batches that respect the per-call word limit.
    """
    if points <= 0:
        raise ValueError(f"Point count must be positive, got {points}")

    # Two floats per point, two words per float
    batch_points = 2048
    inside = 0
    remaining = points
    while remaining > 0:
        batch = min(batch_points, remaining)
        coords = np.fromiter(core.random_float_sequence(2 * batch), dtype=np.float64)
        x, y = coords[0::2], coords[1::2]
        inside += int(np.count_nonzero(x * x + y * y <= 1.0))
        remaining -= batch

    return 4.0 * inside / points


def classify_symbol(char: str) -> SymbolCategory:
    """Return the category a generated character belongs to."""
    if '0' <= char <= '9':
        return SymbolCategory.DIGIT
    if 'a' <= char <= 'z':
        return SymbolCategory.LOWER_LETTER
    if 'A' <= char <= 'Z':
        return SymbolCategory.UPPER_LETTER
    if char in ALLOWED_SYMBOL_CHARS:
        return SymbolCategory.SPECIAL_SYMBOL
    raise ValueError(f"{char!r} is not a generated symbol")


def category_proportions(symbols: Iterable[str]) -> Dict[SymbolCategory, float]:
    """Share of each symbol category among `symbols`."""
    counts = {category: 0 for category in SymbolCategory}
    total = 0
    for char in symbols:
        counts[classify_symbol(char)] += 1
        total += 1
    if total == 0:
        raise ValueError("Cannot compute proportions of an empty symbol stream")
    return {category: count / total for category, count in counts.items()}


def outlier_bins(data: bytes, sigmas: float = 3.0) -> np.ndarray:
    """
    Byte values whose count is more than `sigmas` standard deviations from
    the uniform expectation N / 256.
    """
    byte_array = np.frombuffer(data, dtype=np.uint8)
    counts = np.bincount(byte_array, minlength=BYTE_VALUES)
    expected = len(byte_array) / BYTE_VALUES
    sigma = np.sqrt(expected * (1 - 1 / BYTE_VALUES))
    return np.flatnonzero(np.abs(counts - expected) > sigmas * sigma)


def create_histogram_plot(data: bytes, output_path: str) -> bool:
    """
    Write per-byte-value counts against a 3-sigma band around N / 256.

    Bins outside the band are drawn in red; the title carries the
    chi-squared verdict and Shannon entropy.

    Returns:
        True if the plot was written, False if matplotlib is missing.
    """
    if not MATPLOTLIB_AVAILABLE:
        print("Skipping histogram (matplotlib not available)")
        return False

    stats = byte_statistics(data)
    counts = np.bincount(np.frombuffer(data, dtype=np.uint8), minlength=BYTE_VALUES)
    expected = stats.size / BYTE_VALUES
    sigma = np.sqrt(expected * (1 - 1 / BYTE_VALUES))
    outliers = outlier_bins(data)

    colors = np.full(BYTE_VALUES, 'tab:blue', dtype=object)
    colors[outliers] = 'tab:red'

    fig, ax = plt.subplots(figsize=(11, 5))
    ax.axhspan(expected - 3 * sigma, expected + 3 * sigma,
               color='tab:green', alpha=0.15, label='Uniform ±3σ')
    ax.bar(np.arange(BYTE_VALUES), counts, width=1.0, color=list(colors))
    ax.set_xlim(-0.5, BYTE_VALUES - 0.5)
    ax.set_xlabel('Byte value')
    ax.set_ylabel('Count')

    verdict = 'uniform' if stats.looks_uniform else 'NOT uniform'
    ax.set_title(
        f'{stats.size:,} bytes: χ² = {stats.chi_squared:.1f} ({verdict}), '
        f'H = {stats.entropy:.4f} bits/byte, {len(outliers)} bins outside ±3σ'
    )
    ax.legend(loc='lower right')

    fig.tight_layout()
    fig.savefig(output_path, dpi=120)
    plt.close(fig)
    return True


def create_bitmap_plot(data: bytes, output_path: str) -> bool:
    """
    Write two panels: the bytes as a square grayscale image, and a lag-1
    scatter of each uint32 word's top byte against the next word's.

    Structure in either panel (stripes, clusters, a diagonal) points at
    correlation between successive draws.

    Returns:
        True if the plot was written, False if matplotlib is missing.
    """
    if not MATPLOTLIB_AVAILABLE:
        print("Skipping bitmap (matplotlib not available)")
        return False

    if not data:
        raise ValueError("Cannot plot empty data")

    byte_array = np.frombuffer(data, dtype=np.uint8)
    side = max(1, int(np.sqrt(len(byte_array))))
    image = byte_array[:side * side].reshape((side, side))

    usable = len(data) - len(data) % WORD_SIZE
    top_bytes = (words_from_bytes(data[:usable]) >> 24).astype(np.uint8)
    lag_x, lag_y = top_bytes[:-1], top_bytes[1:]
    lag_corr = float(np.corrcoef(lag_x, lag_y)[0, 1]) if len(lag_x) > 1 else float('nan')

    fig, (ax_image, ax_lag) = plt.subplots(1, 2, figsize=(13, 6))
    ax_image.imshow(image, cmap='gray', interpolation='nearest', vmin=0, vmax=255)
    ax_image.set_title(f'{side}×{side} bytes')
    ax_image.axis('off')

    ax_lag.scatter(lag_x, lag_y, s=1, alpha=0.3, color='black')
    ax_lag.set_xlim(0, 255)
    ax_lag.set_ylim(0, 255)
    ax_lag.set_aspect('equal')
    ax_lag.set_xlabel('Top byte of word i')
    ax_lag.set_ylabel('Top byte of word i + 1')
    ax_lag.set_title(f'Lag-1 words, r = {lag_corr:+.4f}')

    fig.tight_layout()
    fig.savefig(output_path, dpi=120)
    plt.close(fig)
    return True
