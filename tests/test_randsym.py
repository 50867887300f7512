"""
Tests for the package-level functions.
"""

import string

import pytest

import randsym


class TestFacade:
    """Test module-level functions over the default generator."""

    def test_exports(self):
        for name in randsym.__all__:
            assert hasattr(randsym, name), name

    def test_numbers(self):
        assert len(randsym.uniform_uint32_sequence(5)) == 5
        assert 0 <= randsym.random_float() < 1
        assert 3 <= randsym.random_float_in_range(3, 4) < 4
        assert 0 <= randsym.random_int(10) < 10
        assert 1 <= randsym.random_int_inclusive(1, 2) <= 2
        assert len(list(randsym.random_float_sequence(3))) == 3
        assert len(list(randsym.random_float_range_sequence(3, 5))) == 3
        assert len(list(randsym.random_int_sequence(3, 5))) == 3
        assert len(list(randsym.random_int_inclusive_sequence(3, 1, 5))) == 3

    def test_selection(self):
        assert randsym.pick_element([42]) == 42
        assert randsym.pick_word('only') == 'only'
        with pytest.raises(randsym.EmptySequenceError):
            randsym.pick_element([])

    def test_characters(self):
        assert randsym.random_digit() in string.digits
        assert randsym.random_lower_letter() in string.ascii_lowercase
        assert randsym.random_upper_letter() in string.ascii_uppercase
        assert randsym.random_special_symbol() in randsym.ALLOWED_SYMBOL_CHARS
        assert randsym.random_char_code(120, 122) in 'xyz'
        assert set(randsym.random_char_code_sequence(48, 49, 8)) <= {'0', '1'}
        assert len(list(randsym.random_digit_sequence(4))) == 4
        assert len(list(randsym.random_lower_letter_sequence(4))) == 4
        assert len(list(randsym.random_upper_letter_sequence(4))) == 4
        assert len(randsym.random_symbol()) == 1

    def test_error_hierarchy(self):
        assert issubclass(randsym.EntropySourceError, randsym.RandsymError)
        assert issubclass(randsym.EmptySequenceError, randsym.RandsymError)
        assert issubclass(randsym.EmptySequenceError, IndexError)
