"""Leaf page of a B+ tree: sorted unique keys with their row ids."""

import bisect
from functools import cmp_to_key

from minisql.bplus_tree_page import UNDEFINED_SIZE, BPlusTreePage, IndexPageType
from minisql.comparator import basic_compare
from minisql.page import INVALID_PAGE_ID


class DuplicateKeyError(ValueError):
    """Raised when a key already present in a leaf is inserted again."""


class LeafPage(BPlusTreePage):
    """Sorted (key, row id) pairs plus a link to the next leaf."""

    def __init__(
        self,
        page_id,
        parent_id=INVALID_PAGE_ID,
        key_size=UNDEFINED_SIZE,
        max_size=UNDEFINED_SIZE,
        comparator=basic_compare,
    ):
        self._items = []
        super().__init__(IndexPageType.LEAF_PAGE, page_id, parent_id, key_size, max_size)
        self.comparator = comparator
        self._sort_key = cmp_to_key(comparator)
        self.next_page_id = INVALID_PAGE_ID

    @property
    def size(self):
        return len(self._items)

    @size.setter
    def size(self, value):
        if value > len(self._items):
            raise ValueError("a leaf page cannot grow without entries")
        del self._items[value:]

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def key_index(self, key):
        """Index of the first entry whose key is not less than key."""
        wrap = self._sort_key
        return bisect.bisect_left(self._items, wrap(key), key=lambda item: wrap(item[0]))

    def key_at(self, index):
        return self._items[index][0]

    def value_at(self, index):
        return self._items[index][1]

    def item(self, index):
        return self._items[index]

    def _matches(self, index, key):
        return index < len(self._items) and self.comparator(key, self._items[index][0]) == 0

    def insert(self, key, value):
        """Insert in key order and return the new size."""
        index = self.key_index(key)
        if self._matches(index, key):
            raise DuplicateKeyError(f"key {key!r} already present")
        self._items.insert(index, (key, value))
        return self.size

    def lookup(self, key):
        """Return the value stored under key, or None."""
        index = self.key_index(key)
        if not self._matches(index, key):
            return None
        return self._items[index][1]

    def remove_and_delete_record(self, key):
        """Delete key if present and return the size afterwards."""
        index = self.key_index(key)
        if self._matches(index, key):
            del self._items[index]
        return self.size

    def move_half_to(self, recipient):
        """Move the upper half of the entries to the end of recipient."""
        start = (self.size + 1) // 2
        recipient._items.extend(self._items[start:])
        del self._items[start:]

    def move_all_to(self, recipient):
        """Move every entry to recipient, which takes over the next-leaf link."""
        recipient._items.extend(self._items)
        recipient.next_page_id = self.next_page_id
        self._items.clear()

    def move_first_to_end_of(self, recipient):
        recipient._items.append(self._items.pop(0))

    def move_last_to_front_of(self, recipient):
        recipient._items.insert(0, self._items.pop())