"""Symbols, alphabet errors and the abstract alphabet."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Iterable, Iterator, Optional

Symbol = int

_SYMBOL_MAX = 0xFFFFFFFF

ENDMARKER: Symbol = _SYMBOL_MAX - 1
BLANK_SYMBOL: Symbol = _SYMBOL_MAX - 2


class AlphabetError(ValueError):
    """Base class of alphabet errors."""


class EmptyAlphabetName(AlphabetError):
    """An alphabet was given an empty name."""


class EmptyAlphabet(AlphabetError):
    """An alphabet would hold no symbols."""


class InvalidAlphabet(AlphabetError):
    """Alphabets cannot be combined as requested."""


class UnexistedAlphabet(AlphabetError):
    """No alphabet is registered under the requested name."""


MMADrawFun = Callable[["Alphabet", Symbol], str]


class Alphabet(ABC):
    """A finite, ordered set of integer symbols with a name."""

    def __init__(self, name: str) -> None:
        self._name = ""
        self._mma_draw_fun: Optional[MMADrawFun] = None
        self._set_name(name)

    @property
    def name(self) -> str:
        return self._name

    def _set_name(self, name: str) -> None:
        if not name:
            raise EmptyAlphabetName("alphabet name must not be empty")
        self._name = name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._name == other._name

    def __hash__(self) -> int:
        return hash(self._name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r})"

    def __iter__(self) -> Iterator[Symbol]:
        return (self.symbol_at(index) for index in range(len(self)))

    @abstractmethod
    def __contains__(self, symbol: object) -> bool:
        """Tell whether ``symbol`` belongs to the alphabet."""

    @abstractmethod
    def __len__(self) -> int:
        """Return the number of symbols."""

    @abstractmethod
    def symbol_at(self, index: int) -> Symbol:
        """Return the symbol at position ``index`` in alphabet order."""

    def min_symbol(self) -> Symbol:
        return self.symbol_at(0)

    def max_symbol(self) -> Symbol:
        """Return the largest symbol, not counting an endmarker."""
        if ENDMARKER in self:
            return self.symbol_at(len(self) - 2)
        return self.symbol_at(len(self) - 1)

    def contains_alphabet(self, subset: Alphabet) -> bool:
        return all(symbol in self for symbol in subset)

    def to_string(self, symbol: Symbol) -> str:
        if symbol in self:
            return self._to_string(symbol)
        if symbol == ENDMARKER:
            return "$"
        if symbol == BLANK_SYMBOL:
            return "blank"
        return "(unknown symbol)"

    def _to_string(self, symbol: Symbol) -> str:
        return "'" + chr(symbol & 0xFF) + "'"

    def supports_ascii_escape_sequence(self) -> bool:
        return False

    def set_mma_draw(self, fun: Optional[MMADrawFun]) -> None:
        """Install a custom drawing function used by ``mma_draw``."""
        self._mma_draw_fun = fun

    def mma_draw(self, symbol: Symbol) -> str:
        """Return a Mathematica expression that draws ``symbol``."""
        if self._mma_draw_fun is not None:
            return self._mma_draw_fun(self, symbol)
        cmd = self.to_string(symbol)
        if cmd.startswith("'"):
            cmd = '"' + cmd[1:-1] + '"'
        return f"Style[{cmd},Bold,Purple]"


def endmarked_symbol_string(symbols: Iterable[Symbol]) -> Iterator[Symbol]:
    """Yield ``symbols`` followed by the endmarker."""
    yield from symbols
    yield ENDMARKER