from datetime import datetime

from siteadmin.models.category import CategoryRead
from siteadmin.services.category import build_tree, collect_descendants


def cat(id, parent_id, name=None):
    now = datetime.utcnow()
    return CategoryRead(
        id=id,
        name=name or f"c{id}",
        parent_id=parent_id,
        created_at=now,
        updated_at=now,
    )


# 1 ─┬─ 2 ── 4 ── 6
#    └─ 3 ── 5
# 7 (separate root)
FLAT = [cat(1, 0), cat(2, 1), cat(3, 1), cat(4, 2), cat(5, 3), cat(6, 4), cat(7, 0)]


def ids(categories):
    return sorted(c.id for c in categories)


def test_descendants_are_transitive():
    assert ids(collect_descendants(FLAT, 1)) == [2, 3, 4, 5, 6]
    assert ids(collect_descendants(FLAT, 2)) == [4, 6]


def test_descendants_of_leaf_and_unknown_node_are_empty():
    assert collect_descendants(FLAT, 6) == []
    assert collect_descendants(FLAT, 999) == []


def test_descendants_come_level_by_level():
    order = [c.id for c in collect_descendants(FLAT, 1)]
    assert order.index(2) < order.index(4) < order.index(6)
    assert order.index(3) < order.index(5)


def test_descendants_terminate_on_cycle():
    # 10 -> 11 -> 12 -> 10
    looped = [cat(10, 12), cat(11, 10), cat(12, 11)]
    assert ids(collect_descendants(looped, 10)) == [11, 12]


def test_descendants_never_include_the_start_node():
    self_loop = [cat(20, 20), cat(21, 20)]
    assert ids(collect_descendants(self_loop, 20)) == [21]


def test_build_tree_nests_children():
    tree = build_tree(FLAT, 0)
    assert [node.id for node in tree] == [1, 7]
    first = tree[0]
    assert [child.id for child in first.children] == [2, 3]
    assert first.children[0].children[0].id == 4
    assert first.children[0].children[0].children[0].id == 6
    assert tree[1].children == []


def test_build_tree_from_inner_root():
    tree = build_tree(FLAT, 3)
    assert [node.id for node in tree] == [5]


def test_build_tree_stops_on_cycle():
    looped = [cat(10, 12), cat(11, 10), cat(12, 11)]
    tree = build_tree(looped, 10)
    assert [node.id for node in tree] == [11]
    assert [node.id for node in tree[0].children] == [12]
    assert tree[0].children[0].children == []
