"""
Random characters: digits, latin letters and password-safe symbols.
"""

from enum import Enum
from typing import Callable, Dict, Iterator, Optional

from .core import RandomCore

# Code points of characters allowed in secure passwords
ALLOWED_SYMBOL_CODES = (
    64, 37, 43, 47, 39, 33, 35, 36, 94,
    63, 58, 46, 40, 41, 123, 125, 91, 93,
    126, 96, 45, 95, 44, 38, 42, 61, 124, 62, 60,
)

# Same characters, positionally aligned with ALLOWED_SYMBOL_CODES
ALLOWED_SYMBOL_CHARS = tuple(chr(code) for code in ALLOWED_SYMBOL_CODES)

DIGIT_RANGE = (48, 57)          # '0'..'9'
LOWER_LETTER_RANGE = (97, 122)  # 'a'..'z'
UPPER_LETTER_RANGE = (65, 90)   # 'A'..'Z'


class SymbolCategory(str, Enum):
    DIGIT = 'digit'
    LOWER_LETTER = 'lower'
    UPPER_LETTER = 'upper'
    SPECIAL_SYMBOL = 'special'


class RandomSymbolCore:
    """
    Character generators built on a RandomCore.

    The core is held, not inherited; its number generators stay reachable
    as `self.core`.
    """

    def __init__(self, core: Optional[RandomCore] = None):
        self.core = core if core is not None else RandomCore()
        self._generators: Dict[SymbolCategory, Callable[[], str]] = {
            SymbolCategory.DIGIT: self.random_digit,
            SymbolCategory.LOWER_LETTER: self.random_lower_letter,
            SymbolCategory.UPPER_LETTER: self.random_upper_letter,
            SymbolCategory.SPECIAL_SYMBOL: self.random_special_symbol,
        }
        self._categories = tuple(SymbolCategory)

    # Character codes

    def random_char_code(self, low: int, high: int) -> str:
        """Return the character for a code point in [low, high], both inclusive."""
        return chr(self.core.random_int_inclusive(low, high))

    def random_char_code_sequence(self, low: int, high: int,
                                  length: int = 1) -> Iterator[str]:
        codes = self.core.random_int_inclusive_sequence(length, low, high)
        return (chr(code) for code in codes)

    # Digits

    def random_digit(self) -> str:
        return self.random_char_code(*DIGIT_RANGE)

    def random_digit_sequence(self, length: int = 1) -> Iterator[str]:
        return self.random_char_code_sequence(*DIGIT_RANGE, length)

    # Letters (latin)

    def random_lower_letter(self) -> str:
        return self.random_char_code(*LOWER_LETTER_RANGE)

    def random_lower_letter_sequence(self, length: int = 1) -> Iterator[str]:
        return self.random_char_code_sequence(*LOWER_LETTER_RANGE, length)

    def random_upper_letter(self) -> str:
        return self.random_char_code(*UPPER_LETTER_RANGE)

    def random_upper_letter_sequence(self, length: int = 1) -> Iterator[str]:
        return self.random_char_code_sequence(*UPPER_LETTER_RANGE, length)

    # Symbols

    def random_special_symbol(self) -> str:
        """Return one of the password-safe special characters."""
        return self.core.pick_element(ALLOWED_SYMBOL_CHARS)

    def generate(self, category: SymbolCategory) -> str:
        """
        Return one character of the given category.

        Raises:
            ValueError: `category` is not a SymbolCategory value.
        """
        return self._generators[SymbolCategory(category)]()

    def random_symbol(self) -> str:
        """
        Return a digit, lowercase letter, uppercase letter or special symbol.

        Each category is equally likely regardless of how many characters
        it holds.
        """
        return self.generate(self.core.pick_element(self._categories))
