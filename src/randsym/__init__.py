"""
randsym - Cryptographically sourced random primitives

Provides floats, integers, element/word selection, digits, latin letters
and password-safe symbols drawn from a secure entropy source:
- OS CSPRNG (default)
- Webcam shot noise and microphone thermal noise (optional hardware)

The module-level functions share one default generator over the OS source.
"""

from .core import RandomCore
from .entropy import (
    MAX_WORDS_PER_CALL,
    EntropySource,
    NoiseEntropySource,
    SystemEntropySource,
    create_entropy_source,
)
from .errors import EmptySequenceError, EntropySourceError, RandsymError
from .symbols import (
    ALLOWED_SYMBOL_CHARS,
    ALLOWED_SYMBOL_CODES,
    RandomSymbolCore,
    SymbolCategory,
)

__version__ = '1.0.0'

_default = RandomSymbolCore()

uniform_uint32_sequence = _default.core.uniform_uint32_sequence
random_float = _default.core.random_float
random_float_sequence = _default.core.random_float_sequence
random_float_in_range = _default.core.random_float_in_range
random_float_range_sequence = _default.core.random_float_range_sequence
random_int = _default.core.random_int
random_int_inclusive = _default.core.random_int_inclusive
random_int_sequence = _default.core.random_int_sequence
random_int_inclusive_sequence = _default.core.random_int_inclusive_sequence
pick_element = _default.core.pick_element
pick_word = _default.core.pick_word

random_char_code = _default.random_char_code
random_char_code_sequence = _default.random_char_code_sequence
random_digit = _default.random_digit
random_digit_sequence = _default.random_digit_sequence
random_lower_letter = _default.random_lower_letter
random_lower_letter_sequence = _default.random_lower_letter_sequence
random_upper_letter = _default.random_upper_letter
random_upper_letter_sequence = _default.random_upper_letter_sequence
random_special_symbol = _default.random_special_symbol
random_symbol = _default.random_symbol

__all__ = [
    'RandomCore', 'RandomSymbolCore', 'SymbolCategory',
    'EntropySource', 'SystemEntropySource', 'NoiseEntropySource',
    'create_entropy_source', 'MAX_WORDS_PER_CALL',
    'ALLOWED_SYMBOL_CODES', 'ALLOWED_SYMBOL_CHARS',
    'RandsymError', 'EntropySourceError', 'EmptySequenceError',
    'uniform_uint32_sequence', 'random_float', 'random_float_sequence',
    'random_float_in_range', 'random_float_range_sequence',
    'random_int', 'random_int_inclusive', 'random_int_sequence',
    'random_int_inclusive_sequence', 'pick_element', 'pick_word',
    'random_char_code', 'random_char_code_sequence',
    'random_digit', 'random_digit_sequence',
    'random_lower_letter', 'random_lower_letter_sequence',
    'random_upper_letter', 'random_upper_letter_sequence',
    'random_special_symbol', 'random_symbol',
]
