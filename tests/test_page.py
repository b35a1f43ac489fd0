import struct

from minisql.page import INVALID_PAGE_ID, PAGE_SIZE, Page


def test_new_page_is_zeroed():
    page = Page()
    assert page.data == bytes(PAGE_SIZE)
    assert page.page_id == INVALID_PAGE_ID
    assert page.pin_count == 0
    assert page.is_dirty is False


def test_lsn_round_trip_and_layout():
    page = Page()
    page.lsn = 12345
    assert page.lsn == 12345
    assert page.data[Page.OFFSET_LSN:Page.OFFSET_LSN + 4] == struct.pack("<i", 12345)


def test_reset_memory_clears_data():
    page = Page()
    page.data[10:15] = b"hello"
    page.lsn = 77
    page.reset_memory()
    assert page.data == bytes(PAGE_SIZE)
    assert page.lsn == 0
    assert len(page.data) == PAGE_SIZE


def test_custom_page_size():
    page = Page(page_size=64)
    assert len(page.data) == 64