import random

from algolib.kmp import KMP


def test_matches_str_find_on_random_strings():
    rng = random.Random(2)
    for _ in range(500):
        text = "".join(rng.choice("ab") for _ in range(rng.randint(0, 30)))
        pattern = "".join(rng.choice("ab") for _ in range(rng.randint(1, 6)))
        expected = text.find(pattern)
        result = KMP(pattern).search(text)
        assert result == (None if expected < 0 else expected)


def test_empty_pattern_matches_at_start():
    assert KMP("").search("anything") == 0
    assert KMP("").search("") == 0


def test_no_match_returns_none():
    assert KMP("abc").search("ababab") is None
    assert KMP("abc").search("") is None


def test_match_slice_equals_pattern():
    text = "the quick brown fox jumps over the lazy dog"
    for pattern in ["quick", "fox", "lazy dog", "the"]:
        start = KMP(pattern).search(text)
        assert text[start:start + len(pattern)] == pattern


def test_works_on_lists():
    assert KMP([1, 2, 3]).search([0, 1, 2, 1, 2, 3]) == 3


def test_wildcard_in_pattern():
    assert KMP("a?c", "?").search("xxabcx") == 2


def test_wildcard_matches_any_element():
    matcher = KMP("a?", "?")
    for text in ["ab", "az", "aa"]:
        assert matcher.search(text) == 0
    assert matcher.search("ba") is None