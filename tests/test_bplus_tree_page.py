from minisql.bplus_tree_page import UNDEFINED_SIZE, BPlusTreePage, IndexPageType
from minisql.page import INVALID_LSN, INVALID_PAGE_ID


def test_defaults():
    page = BPlusTreePage()
    assert page.page_type is IndexPageType.INVALID_INDEX_PAGE
    assert page.size == 0
    assert page.max_size == UNDEFINED_SIZE
    assert page.page_id == INVALID_PAGE_ID
    assert page.lsn == INVALID_LSN


def test_is_leaf_page():
    assert BPlusTreePage(IndexPageType.LEAF_PAGE).is_leaf_page()
    assert not BPlusTreePage(IndexPageType.INTERNAL_PAGE).is_leaf_page()


def test_is_root_page_depends_on_parent():
    assert BPlusTreePage(page_id=3).is_root_page()
    assert not BPlusTreePage(page_id=3, parent_page_id=1).is_root_page()


def test_min_size_is_half_of_max():
    assert BPlusTreePage(max_size=5).min_size() == 2
    assert BPlusTreePage(max_size=8).min_size() == 4


def test_increase_size_adds_and_subtracts():
    page = BPlusTreePage()
    page.increase_size(3)
    page.increase_size(4)
    page.increase_size(-2)
    assert page.size == 5


def test_size_can_be_set():
    page = BPlusTreePage()
    page.size = 11
    page.increase_size(-11)
    assert page.size == 0