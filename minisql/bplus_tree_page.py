"""Header shared by the leaf and internal pages of a B+ tree."""

from enum import Enum

from minisql.page import INVALID_LSN, INVALID_PAGE_ID

UNDEFINED_SIZE = 0


class IndexPageType(Enum):
    INVALID_INDEX_PAGE = 0
    LEAF_PAGE = 1
    INTERNAL_PAGE = 2


class BPlusTreePage:
    """Page type, key size, LSN, entry count, capacity, parent and own page id."""

    def __init__(
        self,
        page_type=IndexPageType.INVALID_INDEX_PAGE,
        page_id=INVALID_PAGE_ID,
        parent_page_id=INVALID_PAGE_ID,
        key_size=UNDEFINED_SIZE,
        max_size=UNDEFINED_SIZE,
    ):
        self.page_type = page_type
        self.page_id = page_id
        self.parent_page_id = parent_page_id
        self.key_size = key_size
        self.max_size = max_size
        self.lsn = INVALID_LSN
        self._size = 0

    @property
    def size(self):
        """Number of key/value pairs stored in the page."""
        return self._size

    @size.setter
    def size(self, value):
        self._size = value

    def is_leaf_page(self):
        return self.page_type is IndexPageType.LEAF_PAGE

    def is_root_page(self):
        return self.parent_page_id == INVALID_PAGE_ID

    def min_size(self):
        """Fewest entries a non-root page may hold."""
        return self.max_size // 2

    def increase_size(self, amount):
        self.size += amount