"""Alphabets built on top of other alphabets."""

from __future__ import annotations

from algolib.alphabet.core import (
    BLANK_SYMBOL,
    ENDMARKER,
    Alphabet,
    InvalidAlphabet,
    Symbol,
)


class EndmarkedAlphabet(Alphabet):
    """An alphabet extended by the endmarker as its last symbol."""

    def __init__(self, alphabet: Alphabet) -> None:
        self._alphabet = alphabet
        self._has_endmarker = ENDMARKER in alphabet
        if self._has_endmarker:
            super().__init__(alphabet.name)
        else:
            super().__init__("endmarked_" + alphabet.name)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._alphabet or symbol == ENDMARKER

    def __len__(self) -> int:
        return len(self._alphabet) + (0 if self._has_endmarker else 1)

    def symbol_at(self, index: int) -> Symbol:
        if index + 1 == len(self):
            return ENDMARKER
        return self._alphabet.symbol_at(index)

    def supports_ascii_escape_sequence(self) -> bool:
        return self._alphabet.supports_ascii_escape_sequence()

    def original_alphabet(self) -> Alphabet:
        return self._alphabet

    def _to_string(self, symbol: Symbol) -> str:
        return self._alphabet.to_string(symbol)


class AlphabetWithBlankSymbol(Alphabet):
    """An alphabet extended by the blank symbol, placed before any endmarker."""

    def __init__(self, alphabet: Alphabet) -> None:
        self._alphabet = alphabet
        self._has_blank_symbol = BLANK_SYMBOL in alphabet
        self._has_endmarker = ENDMARKER in alphabet
        if self._has_blank_symbol:
            super().__init__(alphabet.name)
        else:
            super().__init__(alphabet.name + "_with_blank_symbol")

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._alphabet or symbol == BLANK_SYMBOL

    def __len__(self) -> int:
        return len(self._alphabet) + (0 if self._has_blank_symbol else 1)

    def symbol_at(self, index: int) -> Symbol:
        if self._has_blank_symbol:
            return self._alphabet.symbol_at(index)
        size = len(self)
        if index + 1 == size:
            return ENDMARKER if self._has_endmarker else BLANK_SYMBOL
        if index + 2 == size and self._has_endmarker:
            return BLANK_SYMBOL
        return self._alphabet.symbol_at(index)

    def supports_ascii_escape_sequence(self) -> bool:
        return self._alphabet.supports_ascii_escape_sequence()

    def original_alphabet(self) -> Alphabet:
        return self._alphabet

    def _to_string(self, symbol: Symbol) -> str:
        return self._alphabet.to_string(symbol)


class UnionAlphabet(Alphabet):
    """Two alphabets side by side; every symbol of the first is smaller."""

    def __init__(self, first: Alphabet, second: Alphabet, name: str = "") -> None:
        if first.max_symbol() >= second.min_symbol():
            raise InvalidAlphabet("alphabet1 is not less than alphabet2")
        super().__init__(name or first.name + "_union_" + second.name)
        self._first = first
        self._second = second

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._first or symbol in self._second

    def __len__(self) -> int:
        return len(self._first) + len(self._second)

    def symbol_at(self, index: int) -> Symbol:
        first_size = len(self._first)
        if index < first_size:
            return self._first.symbol_at(index)
        return self._second.symbol_at(index - first_size)

    def supports_ascii_escape_sequence(self) -> bool:
        return (
            self._first.supports_ascii_escape_sequence()
            or self._second.supports_ascii_escape_sequence()
        )

    def mma_draw(self, symbol: Symbol) -> str:
        if symbol in self._first:
            return self._first.mma_draw(symbol)
        return self._second.mma_draw(symbol)

    def _to_string(self, symbol: Symbol) -> str:
        if symbol in self._first:
            return self._first.to_string(symbol)
        return self._second.to_string(symbol)