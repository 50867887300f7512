"""
randsym command line.

Usage:
    randsym symbols [-n LENGTH] [--category {digit,lower,upper,special} ...]
    randsym ints LOW HIGH [-n COUNT] [--inclusive]
    randsym floats [--low LOW] [--high HIGH] [-n COUNT]
    randsym word TEXT [--separator SEP]
    randsym validate [-s SIZE_KB] [-o OUTPUT] [--histogram PATH] [--bitmap PATH]

Every command accepts --source {system,noise} before the subcommand.
"""

import argparse
import sys
from typing import List, Optional

from .core import RandomCore
from .entropy import MAX_BYTES_PER_CALL, SOURCE_KINDS, EntropySource, create_entropy_source
from .errors import RandsymError
from .symbols import RandomSymbolCore, SymbolCategory
from .validation import (
    byte_statistics,
    create_bitmap_plot,
    create_histogram_plot,
    estimate_pi,
)

# Defaults
DEFAULT_PASSWORD_LENGTH = 16
DEFAULT_SIZE_KB = 100
DEFAULT_OUTPUT_FILE = 'random_output.bin'
HISTOGRAM_OUTPUT = 'validation_histogram.png'
BITMAP_OUTPUT = 'validation_bitmap.png'
DEFAULT_PI_POINTS = 100_000


def generate_random_data(source: EntropySource, size_bytes: int) -> bytes:
    """
    Draw `size_bytes` random bytes in chunks within the per-call limit.
    """
    print(f"[*] Generating {size_bytes:,} bytes of random data...")

    buffer = bytearray()
    while len(buffer) < size_bytes:
        chunk_size = min(MAX_BYTES_PER_CALL, size_bytes - len(buffer))
        buffer.extend(source.read_bytes(chunk_size))

    print(f"[+] Generated {len(buffer):,} bytes successfully.")
    return bytes(buffer)


def cmd_symbols(symbols: RandomSymbolCore, args) -> None:
    if args.length < 0:
        raise ValueError(f"Length must be non-negative, got {args.length}")
    if args.category:
        categories = [SymbolCategory(name) for name in args.category]
        chars = [symbols.generate(symbols.core.pick_element(categories))
                 for _ in range(args.length)]
    else:
        chars = [symbols.random_symbol() for _ in range(args.length)]
    print(''.join(chars))


def cmd_ints(symbols: RandomSymbolCore, args) -> None:
    core = symbols.core
    if args.inclusive:
        values = core.random_int_inclusive_sequence(args.count, args.low, args.high)
    else:
        values = core.random_int_sequence(args.count, args.low, args.high)
    for value in values:
        print(value)


def cmd_floats(symbols: RandomSymbolCore, args) -> None:
    for value in symbols.core.random_float_range_sequence(args.count, args.low, args.high):
        print(repr(value))


def cmd_word(symbols: RandomSymbolCore, args) -> None:
    print(symbols.core.pick_word(args.text, args.separator))


def cmd_validate(symbols: RandomSymbolCore, args) -> None:
    if args.size <= 0:
        raise ValueError(f"Size must be at least 1 KB, got {args.size}")
    if args.points <= 0:
        raise ValueError(f"Point count must be positive, got {args.points}")

    data = generate_random_data(symbols.core.source, args.size * 1024)

    with open(args.output, 'wb') as f:
        f.write(data)
    print(f"[+] Saved random data to: {args.output}")

    stats = byte_statistics(data)
    print("\n=== Randomness Validation ===")
    print(f"Data size: {stats.size:,} bytes")
    print(f"Mean value: {stats.mean:.2f} (expected: 127.5)")
    print(f"Std deviation: {stats.std:.2f} (expected: ~73.9)")
    print(f"Shannon entropy: {stats.entropy:.4f} bits/byte (max: 8.0)")
    print(f"Entropy efficiency: {stats.efficiency * 100:.2f}%")
    print(f"Chi-squared statistic: {stats.chi_squared:.1f} (expected ~255 for uniform)")

    pi_estimate = estimate_pi(symbols.core, args.points)
    print(f"Monte Carlo pi: {pi_estimate:.5f} ({args.points:,} points)")

    if create_histogram_plot(data, args.histogram):
        print(f"[+] Histogram saved to: {args.histogram}")
    if create_bitmap_plot(data, args.bitmap):
        print(f"[+] Bitmap saved to: {args.bitmap}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='randsym',
        description='Cryptographically sourced random numbers, characters and symbols',
    )
    parser.add_argument(
        '--source',
        choices=SOURCE_KINDS,
        default='system',
        help='Entropy source (default: system)'
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    p_symbols = subparsers.add_parser('symbols', help='Print a random symbol string')
    p_symbols.add_argument(
        '-n', '--length',
        type=int,
        default=DEFAULT_PASSWORD_LENGTH,
        help=f'Number of symbols (default: {DEFAULT_PASSWORD_LENGTH})'
    )
    p_symbols.add_argument(
        '--category',
        action='append',
        choices=[category.value for category in SymbolCategory],
        help='Restrict to a category; repeat to allow several'
    )
    p_symbols.set_defaults(func=cmd_symbols)

    p_ints = subparsers.add_parser('ints', help='Print random integers in [LOW, HIGH)')
    p_ints.add_argument('low', type=int)
    p_ints.add_argument('high', type=int)
    p_ints.add_argument('-n', '--count', type=int, default=1)
    p_ints.add_argument('--inclusive', action='store_true',
                        help='Include HIGH in the range')
    p_ints.set_defaults(func=cmd_ints)

    p_floats = subparsers.add_parser('floats', help='Print random floats in [LOW, HIGH)')
    p_floats.add_argument('--low', type=float, default=1.0)
    p_floats.add_argument('--high', type=float, default=0.0)
    p_floats.add_argument('-n', '--count', type=int, default=1)
    p_floats.set_defaults(func=cmd_floats)

    p_word = subparsers.add_parser('word', help='Print a random word of TEXT')
    p_word.add_argument('text')
    p_word.add_argument('--separator', default=' ')
    p_word.set_defaults(func=cmd_word)

    p_validate = subparsers.add_parser('validate', help='Generate data and validate it')
    p_validate.add_argument(
        '-s', '--size',
        type=int,
        default=DEFAULT_SIZE_KB,
        help=f'Size in kilobytes to generate (default: {DEFAULT_SIZE_KB} KB)'
    )
    p_validate.add_argument(
        '-o', '--output',
        default=DEFAULT_OUTPUT_FILE,
        help=f'Output binary file path (default: {DEFAULT_OUTPUT_FILE})'
    )
    p_validate.add_argument(
        '--histogram',
        default=HISTOGRAM_OUTPUT,
        help=f'Histogram output path (default: {HISTOGRAM_OUTPUT})'
    )
    p_validate.add_argument(
        '--bitmap',
        default=BITMAP_OUTPUT,
        help=f'Bitmap output path (default: {BITMAP_OUTPUT})'
    )
    p_validate.add_argument(
        '--points',
        type=int,
        default=DEFAULT_PI_POINTS,
        help=f'Monte Carlo pi sample points (default: {DEFAULT_PI_POINTS:,})'
    )
    p_validate.set_defaults(func=cmd_validate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        with create_entropy_source(args.source) as source:
            symbols = RandomSymbolCore(RandomCore(source))
            args.func(symbols, args)
    except (RandsymError, ValueError) as e:
        print(f"[-] Error: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
