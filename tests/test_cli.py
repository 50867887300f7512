"""
Tests for the randsym command line.
"""

import string

import pytest

from randsym.cli import main
from randsym.entropy import MAX_WORDS_PER_CALL
from randsym.symbols import ALLOWED_SYMBOL_CHARS


def _lines(capsys):
    return capsys.readouterr().out.splitlines()


class TestSymbolsCommand:
    """Test symbol string generation."""

    def test_default_length(self, capsys):
        assert main(['symbols']) == 0
        assert len(_lines(capsys)[0]) == 16

    def test_custom_length(self, capsys):
        assert main(['symbols', '-n', '40']) == 0
        line = _lines(capsys)[0]
        allowed = set(string.ascii_letters + string.digits) | set(ALLOWED_SYMBOL_CHARS)
        assert len(line) == 40
        assert set(line) <= allowed

    def test_single_category(self, capsys):
        assert main(['symbols', '-n', '20', '--category', 'digit']) == 0
        assert _lines(capsys)[0].isdigit()

    def test_several_categories(self, capsys):
        assert main(['symbols', '-n', '30', '--category', 'lower', '--category', 'upper']) == 0
        assert _lines(capsys)[0].isalpha()

    def test_unknown_category(self):
        with pytest.raises(SystemExit):
            main(['symbols', '--category', 'emoji'])


class TestNumberCommands:
    """Test integer and float output."""

    def test_ints(self, capsys):
        assert main(['ints', '1', '7', '-n', '50']) == 0
        values = [int(line) for line in _lines(capsys)]
        assert len(values) == 50
        assert all(1 <= value < 7 for value in values)

    def test_ints_inclusive(self, capsys):
        assert main(['ints', '1', '3', '-n', '300', '--inclusive']) == 0
        assert {int(line) for line in _lines(capsys)} == {1, 2, 3}

    def test_ints_over_limit(self, capsys):
        assert main(['ints', '0', '10', '-n', str(MAX_WORDS_PER_CALL)]) == 1
        assert _lines(capsys)[0].startswith('[-] Error:')

    def test_floats(self, capsys):
        assert main(['floats', '--low', '2', '--high', '3', '-n', '25']) == 0
        values = [float(line) for line in _lines(capsys)]
        assert len(values) == 25
        assert all(2 <= value < 3 for value in values)


class TestWordCommand:
    """Test word selection."""

    def test_word(self, capsys):
        assert main(['word', 'hello, world']) == 0
        assert _lines(capsys)[0] in {'hello', 'world'}

    def test_separator(self, capsys):
        assert main(['word', 'one|two', '--separator', '|']) == 0
        assert _lines(capsys)[0] in {'one', 'two'}

    def test_no_words(self, capsys):
        assert main(['word', '123 !!']) == 1
        assert '[-] Error:' in capsys.readouterr().out


class TestValidateCommand:
    """Test data generation and validation output."""

    def test_validate(self, tmp_path, capsys):
        output = tmp_path / 'out.bin'
        histogram = tmp_path / 'histogram.png'
        bitmap = tmp_path / 'bitmap.png'

        code = main([
            'validate',
            '-s', '80',
            '-o', str(output),
            '--histogram', str(histogram),
            '--bitmap', str(bitmap),
            '--points', '2000',
        ])

        assert code == 0
        assert output.stat().st_size == 80 * 1024
        out = capsys.readouterr().out
        assert 'Shannon entropy' in out
        assert 'Monte Carlo pi' in out

    def test_validate_rejects_zero_size(self, tmp_path, capsys):
        output = tmp_path / 'out.bin'

        assert main(['validate', '-s', '0', '-o', str(output)]) == 1
        assert not output.exists()
        assert '[-] Error:' in capsys.readouterr().out

    def test_noise_source_falls_back(self, monkeypatch, capsys):
        from randsym import entropy
        monkeypatch.setattr(entropy, 'CV2_AVAILABLE', False)
        monkeypatch.setattr(entropy, 'PYAUDIO_AVAILABLE', False)

        assert main(['--source', 'noise', 'ints', '0', '5']) == 0
        assert 'Using fallback entropy' in capsys.readouterr().out


def test_missing_command():
    with pytest.raises(SystemExit):
        main([])
