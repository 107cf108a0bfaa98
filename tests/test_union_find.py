from algolib.union_find import find, make_set, union


def test_make_set_is_own_root():
    node = make_set("x")
    assert find(node) is node
    assert node.data == "x"
    assert node.rank == 0


def test_find_none():
    assert find(None) is None


def test_union_joins_sets():
    a, b, c = make_set(1), make_set(2), make_set(3)
    union(a, b)
    assert find(a) is find(b)
    assert find(c) is c
    assert find(a) is not find(c)


def test_union_with_none_or_self_changes_nothing():
    a = make_set(1)
    union(a, None)
    union(None, a)
    union(a, a)
    assert find(a) is a
    assert a.rank == 0


def test_chain_of_unions_shares_one_root():
    nodes = [make_set(i) for i in range(50)]
    for left, right in zip(nodes, nodes[1:]):
        union(left, right)
    root = find(nodes[0])
    assert all(find(n) is root for n in nodes)
    assert all(n.representative in (None, root) for n in nodes)


def test_repeated_union_within_same_set_terminates():
    a, b, c = make_set("a"), make_set("b"), make_set("c")
    union(a, b)
    union(b, a)
    union(c, a)
    union(a, c)
    root = find(a)
    assert find(b) is root and find(c) is root


def test_equal_rank_union_increments_rank():
    a, b = make_set(1), make_set(2)
    union(a, b)
    root = find(a)
    assert root.rank == 1


def test_separate_groups_stay_apart():
    evens = [make_set(i) for i in range(0, 10, 2)]
    odds = [make_set(i) for i in range(1, 10, 2)]
    for n in evens[1:]:
        union(evens[0], n)
    for n in odds[1:]:
        union(n, odds[0])
    assert len({id(find(n)) for n in evens}) == 1
    assert len({id(find(n)) for n in odds}) == 1
    assert find(evens[0]) is not find(odds[0])