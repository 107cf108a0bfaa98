import pytest

from algolib.alphabet.core import EmptyAlphabet, EmptyAlphabetName
from algolib.alphabet.range_alphabets import (
    ASCII,
    IntervalAlphabet,
    NumberSetAlphabet,
    PrintableASCII,
    SetAlphabet,
    SubAlphabet,
)


def test_interval_alphabet_symbols():
    alphabet = IntervalAlphabet(10, 15, "small")
    assert list(alphabet) == list(range(10, 16))
    assert len(alphabet) == len(list(alphabet))
    assert 10 in alphabet and 15 in alphabet
    assert 9 not in alphabet and 16 not in alphabet


def test_interval_single_symbol():
    alphabet = IntervalAlphabet(7, 7, "one")
    assert list(alphabet) == [7]


def test_interval_empty_range_raises():
    with pytest.raises(EmptyAlphabet):
        IntervalAlphabet(5, 4, "bad")


def test_interval_symbol_at_out_of_range():
    with pytest.raises(IndexError):
        IntervalAlphabet(1, 3, "x").symbol_at(3)


def test_ascii():
    alphabet = ASCII()
    assert alphabet.name == "ASCII"
    assert alphabet.min_symbol() == 0
    assert alphabet.max_symbol() == 127
    assert alphabet.supports_ascii_escape_sequence() is True


def test_printable_ascii():
    alphabet = PrintableASCII()
    assert alphabet.name == "printable-ASCII"
    assert alphabet.min_symbol() == 32
    assert alphabet.max_symbol() == 126
    assert ASCII().contains_alphabet(alphabet)
    assert not alphabet.contains_alphabet(ASCII())


def test_set_alphabet_sorts_and_dedupes():
    alphabet = SetAlphabet([3, 1, 3, 2], "x")
    assert list(alphabet) == [1, 2, 3]
    assert 2 in alphabet
    assert 4 not in alphabet


def test_set_alphabet_empty_raises():
    with pytest.raises(EmptyAlphabet):
        SetAlphabet([], "x")


def test_set_alphabet_name_checked_first():
    with pytest.raises(EmptyAlphabetName):
        SetAlphabet([], "")


def test_number_set_alphabet_prints_numbers():
    alphabet = NumberSetAlphabet([300, 5], "numbers")
    assert alphabet.to_string(300) == str(300)
    assert alphabet.to_string(5) == str(5)


def test_sub_alphabet_name_and_printing():
    parent = ASCII()
    sub = SubAlphabet(parent, [ord("b"), ord("a")])
    assert sub.name == "sub_alphabet_of_" + parent.name
    assert list(sub) == sorted([ord("a"), ord("b")])
    assert sub.to_string(ord("a")) == parent.to_string(ord("a"))
    assert parent.contains_alphabet(sub)


def test_sub_alphabet_unknown_symbol():
    sub = SubAlphabet(ASCII(), [ord("a")])
    assert sub.to_string(ord("q")) == "(unknown symbol)"