"""Alphabets given by a range or a set of symbols."""

from __future__ import annotations

from typing import Iterable

from algolib.alphabet.core import Alphabet, EmptyAlphabet, Symbol


class IntervalAlphabet(Alphabet):
    """All symbols from ``min_symbol`` to ``max_symbol`` inclusive."""

    def __init__(self, min_symbol: Symbol, max_symbol: Symbol, name: str) -> None:
        super().__init__(name)
        if max_symbol < min_symbol:
            raise EmptyAlphabet("range is empty")
        self._low = min_symbol
        self._high = max_symbol

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, int) and self._low <= symbol <= self._high

    def __len__(self) -> int:
        return self._high - self._low + 1

    def symbol_at(self, index: int) -> Symbol:
        if not 0 <= index < len(self):
            raise IndexError(f"symbol index {index} out of range")
        return self._low + index


class SetAlphabet(Alphabet):
    """The distinct symbols of a collection, in increasing order."""

    def __init__(self, symbols: Iterable[Symbol], name: str) -> None:
        super().__init__(name)
        self._symbols = tuple(sorted(set(symbols)))
        if not self._symbols:
            raise EmptyAlphabet("symbol set is empty")
        self._members = frozenset(self._symbols)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._members

    def __len__(self) -> int:
        return len(self._symbols)

    def symbol_at(self, index: int) -> Symbol:
        if not 0 <= index < len(self._symbols):
            raise IndexError(f"symbol index {index} out of range")
        return self._symbols[index]


class NumberSetAlphabet(SetAlphabet):
    """A set alphabet whose symbols print as decimal numbers."""

    def _to_string(self, symbol: Symbol) -> str:
        return str(symbol)


class ASCII(IntervalAlphabet):
    """The 128 ASCII code points."""

    def __init__(self) -> None:
        super().__init__(0, 127, "ASCII")

    def supports_ascii_escape_sequence(self) -> bool:
        return True


class PrintableASCII(IntervalAlphabet):
    """The printable ASCII characters, space to tilde."""

    def __init__(self) -> None:
        super().__init__(32, 126, "printable-ASCII")

    def supports_ascii_escape_sequence(self) -> bool:
        return True


class SubAlphabet(SetAlphabet):
    """A subset of another alphabet that prints symbols as its parent does."""

    def __init__(self, parent: Alphabet, symbols: Iterable[Symbol]) -> None:
        super().__init__(symbols, "sub_alphabet_of_" + parent.name)
        self._parent = parent

    def _to_string(self, symbol: Symbol) -> str:
        return self._parent.to_string(symbol)