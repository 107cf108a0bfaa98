"""Multi-pattern string search."""

from __future__ import annotations

from typing import Any, Hashable, Iterable, Sequence, TypeVar

S = TypeVar("S", bound=Sequence[Any])


def _build_trie(words: Iterable[Sequence[Hashable]]) -> tuple[list[dict[Any, int]], dict[int, int]]:
    trie: list[dict[Any, int]] = [{}]
    final_states: dict[int, int] = {}
    for word in words:
        state = 0
        for element in word:
            next_state = trie[state].get(element)
            if next_state is None:
                next_state = len(trie)
                trie[state][element] = next_state
                trie.append({})
            state = next_state
        final_states.setdefault(state, len(word))
    return trie, final_states


def _failure_function(trie: list[dict[Any, int]]) -> list[int]:
    failure = [0] * len(trie)
    frontier = [(0, state) for state in range(1, len(trie))]
    while frontier:
        frontier.sort(key=lambda pair: pair[0])
        next_frontier = []
        for prefix_state, suffix_state in frontier:
            prefix_children = trie[prefix_state]
            for element, next_state in sorted(trie[suffix_state].items()):
                matched = prefix_children.get(element)
                if matched is not None:
                    next_frontier.append((matched, next_state))
                    failure[next_state] = matched
        frontier = next_frontier
    return failure


def aho_corasick(words: Iterable[S], text: S) -> S | None:
    """Find an occurrence of one of ``words`` in ``text`` and return it as a
    slice of ``text``; return None when the scan finds none."""
    trie, final_states = _build_trie(words)
    if len(trie) == 1:
        return None
    failure = _failure_function(trie)

    state = 0
    i = 0
    while state != 0 or i < len(text):
        if i < len(text):
            next_state = trie[state].get(text[i])
            if next_state is not None:
                state = next_state
                i += 1
            elif state == 0:
                i += 1
            else:
                state = failure[state]
        else:
            state = failure[state]

        word_size = final_states.get(state)
        if word_size is not None:
            return text[i - word_size:i]
    return None