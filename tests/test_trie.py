import pytest

from algolib.trie import Trie, TrieNode


@pytest.fixture
def trie():
    return Trie(["ab", "ac", "b"])


def test_first_level_holds_distinct_first_elements(trie):
    level = trie.get_level(0)
    assert {node.element_id for node in level} == {"a", "b"}
    assert all(node.parent_id is None for node in level)


def test_end_flags_on_first_level(trie):
    flags = {node.element_id: node.is_end for node in trie.get_level(0)}
    assert flags == {"a": False, "b": True}


def test_second_level_links_to_parent(trie):
    level = trie.get_level(1)
    assert {(n.element_id, n.parent_id) for n in level} == {("b", "a"), ("c", "a")}
    assert all(node.is_end for node in level)


def test_missing_level_raises(trie):
    with pytest.raises(IndexError):
        trie.get_level(2)


def test_empty_trie_has_no_levels():
    with pytest.raises(IndexError):
        Trie([]).get_level(0)


def test_prefix_marked_as_end_after_insert(trie):
    trie.insert("a")
    flags = {node.element_id: node.is_end for node in trie.get_level(0)}
    assert flags["a"] is True
    assert len(trie.get_level(0)) == 2


def test_node_equality_ignores_end_flag():
    assert TrieNode("a", None, True) == TrieNode("a", None, False)
    assert hash(TrieNode("a", "b", True)) == hash(TrieNode("a", "b"))


def test_data_id_round_trip(trie):
    ids = {node.element_id for node in trie.get_level(0)}
    assert trie.get_data_id("a") in ids