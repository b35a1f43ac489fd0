import pytest

from minisql.bplus_tree_internal_page import InternalPage
from minisql.bplus_tree_page import BPlusTreePage, IndexPageType
from minisql.page import INVALID_PAGE_ID


def make_page(page_id, keys, values, max_size=8):
    page = InternalPage(page_id, max_size=max_size)
    page.populate_new_root(values[0], keys[0], values[1])
    for key, value in zip(keys[1:], values[2:]):
        page.insert_node_after(page.value_at(page.size - 1), key, value)
    return page


@pytest.fixture
def children():
    return {pid: BPlusTreePage(IndexPageType.LEAF_PAGE, page_id=pid, parent_page_id=1) for pid in range(100, 120)}


def test_new_page_header():
    page = InternalPage(7, parent_id=3, key_size=4, max_size=6)
    assert page.page_type is IndexPageType.INTERNAL_PAGE
    assert not page.is_leaf_page()
    assert not page.is_root_page()
    assert page.size == 0
    assert page.min_size() == 3


def test_populate_new_root():
    page = InternalPage(1)
    page.populate_new_root(100, 50, 101)
    assert page.size == 2
    assert page.value_at(0) == 100
    assert page.key_at(1) == 50
    assert page.value_at(1) == 101
    assert page.is_root_page()
    assert page.parent_page_id == INVALID_PAGE_ID


def test_lookup_routes_by_key():
    page = make_page(1, [10, 20, 30], [100, 101, 102, 103])
    assert page.lookup(5) == 100
    assert page.lookup(10) == 101
    assert page.lookup(15) == 101
    assert page.lookup(20) == 102
    assert page.lookup(25) == 102
    assert page.lookup(30) == 103
    assert page.lookup(99) == 103


def test_lookup_on_empty_page_raises():
    with pytest.raises(LookupError):
        InternalPage(1).lookup(3)


def test_insert_node_after_middle():
    page = make_page(1, [10, 30], [100, 101, 102])
    size = page.insert_node_after(101, 20, 105)
    assert size == 4
    assert [page.value_at(i) for i in range(page.size)] == [100, 101, 105, 102]
    assert [page.key_at(i) for i in range(1, page.size)] == [10, 20, 30]
    assert page.lookup(25) == 105


def test_insert_node_after_unknown_child():
    page = make_page(1, [10], [100, 101])
    with pytest.raises(ValueError):
        page.insert_node_after(999, 20, 102)


def test_value_index():
    page = make_page(1, [10, 20], [100, 101, 102])
    assert page.value_index(102) == 2
    assert page.value_index(100) == 0
    assert page.value_index(555) == -1


def test_set_key_and_value():
    page = make_page(1, [10, 20], [100, 101, 102])
    page.set_key_at(2, 25)
    page.set_value_at(2, 110)
    assert page.key_at(2) == 25
    assert page.value_at(2) == 110
    assert page.lookup(22) == 101


def test_remove_keeps_order():
    page = make_page(1, [10, 20, 30], [100, 101, 102, 103])
    page.remove(2)
    assert page.size == 3
    assert [page.value_at(i) for i in range(page.size)] == [100, 101, 103]
    assert page.key_at(2) == 30


def test_remove_and_return_only_child():
    page = InternalPage(1)
    page.populate_new_root(100, 10, 101)
    page.remove(1)
    assert page.remove_and_return_only_child() == 100
    assert page.size == 0


def test_move_half_to_adopts_children(children):
    page = make_page(1, [10, 20, 30, 40], [100, 101, 102, 103, 104])
    sibling = InternalPage(2)
    page.move_half_to(sibling, children)
    assert page.size + sibling.size == 5
    assert page.size == 3
    assert [sibling.value_at(i) for i in range(sibling.size)] == [103, 104]
    assert sibling.key_at(0) == 30
    assert sibling.key_at(1) == 40
    assert children[103].parent_page_id == 2
    assert children[104].parent_page_id == 2
    assert children[100].parent_page_id == 1


def test_move_all_to_uses_middle_key(children):
    left = make_page(1, [10], [100, 101])
    right = make_page(2, [30], [102, 103])
    right.move_all_to(left, 20, children)
    assert right.size == 0
    assert [left.value_at(i) for i in range(left.size)] == [100, 101, 102, 103]
    assert [left.key_at(i) for i in range(1, left.size)] == [10, 20, 30]
    assert children[102].parent_page_id == 1
    assert children[103].parent_page_id == 1
    assert left.lookup(25) == 102


def test_move_first_to_end_of(children):
    left = make_page(1, [10], [100, 101])
    right = make_page(2, [30, 40], [102, 103, 104])
    right.move_first_to_end_of(left, 20, children)
    assert [left.value_at(i) for i in range(left.size)] == [100, 101, 102]
    assert left.key_at(2) == 20
    assert [right.value_at(i) for i in range(right.size)] == [103, 104]
    assert right.key_at(0) == 30
    assert children[102].parent_page_id == 1


def test_move_last_to_front_of(children):
    left = make_page(1, [10, 20], [100, 101, 102])
    right = make_page(2, [40], [103, 104])
    right_key = left.key_at(left.size - 1)
    left.move_last_to_front_of(right, 30, children)
    assert [left.value_at(i) for i in range(left.size)] == [100, 101]
    assert [right.value_at(i) for i in range(right.size)] == [102, 103, 104]
    assert right.key_at(1) == 30
    assert right.key_at(2) == 40
    assert right_key == 20
    assert children[102].parent_page_id == 2
    assert right.lookup(35) == 103


def test_moves_require_known_children():
    page = make_page(1, [10, 20], [100, 101, 102])
    with pytest.raises(KeyError):
        page.move_half_to(InternalPage(2), {})


def test_size_cannot_grow():
    page = make_page(1, [10], [100, 101])
    with pytest.raises(ValueError):
        page.size = 5
    page.size = 1
    assert list(page) == [(None, 100)]