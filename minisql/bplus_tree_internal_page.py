"""Internal page of a B+ tree: separator keys and child page ids."""

import bisect
from functools import cmp_to_key

from minisql.bplus_tree_page import UNDEFINED_SIZE, BPlusTreePage, IndexPageType
from minisql.comparator import basic_compare
from minisql.page import INVALID_PAGE_ID


class InternalPage(BPlusTreePage):
    """n child page ids and n keys, of which the first key is never used.

    Child i holds the keys K with key(i) <= K < key(i + 1).

    Methods that move children between pages take ``pages``, a mapping from
    page id to the child page objects, so that moved children can be given
    their new parent.
    """

    def __init__(
        self,
        page_id,
        parent_id=INVALID_PAGE_ID,
        key_size=UNDEFINED_SIZE,
        max_size=UNDEFINED_SIZE,
        comparator=basic_compare,
    ):
        self._keys = []
        self._values = []
        super().__init__(IndexPageType.INTERNAL_PAGE, page_id, parent_id, key_size, max_size)
        self.comparator = comparator
        self._sort_key = cmp_to_key(comparator)

    @property
    def size(self):
        return len(self._values)

    @size.setter
    def size(self, value):
        if value > len(self._values):
            raise ValueError("an internal page cannot grow without entries")
        del self._keys[value:]
        del self._values[value:]

    def __len__(self):
        return len(self._values)

    def __iter__(self):
        return iter(zip(self._keys, self._values))

    def key_at(self, index):
        return self._keys[index]

    def set_key_at(self, index, key):
        self._keys[index] = key

    def value_at(self, index):
        return self._values[index]

    def set_value_at(self, index, value):
        self._values[index] = value

    def value_index(self, value):
        """Index of the entry pointing at child ``value``, or -1."""
        try:
            return self._values.index(value)
        except ValueError:
            return -1

    def lookup(self, key):
        """Return the child page id whose subtree may contain key."""
        if not self._values:
            raise LookupError("lookup in an empty internal page")
        wrap = self._sort_key
        index = bisect.bisect_right(self._keys, wrap(key), lo=1, key=lambda k: wrap(k))
        return self._values[index - 1]

    def populate_new_root(self, old_value, new_key, new_value):
        """Fill a fresh root with two children separated by new_key."""
        self._keys = [None, new_key]
        self._values = [old_value, new_value]

    def insert_node_after(self, old_value, new_key, new_value):
        """Insert (new_key, new_value) right after child old_value; return the new size."""
        index = self.value_index(old_value)
        if index == -1:
            raise ValueError(f"child page {old_value} is not in page {self.page_id}")
        self._keys.insert(index + 1, new_key)
        self._values.insert(index + 1, new_value)
        return self.size

    def remove(self, index):
        del self._keys[index]
        del self._values[index]

    def remove_and_return_only_child(self):
        """Empty the page and return the child its first entry pointed at."""
        child = self._values[0]
        self._keys.clear()
        self._values.clear()
        return child

    def _adopt(self, child_id, pages):
        pages[child_id].parent_page_id = self.page_id

    def _append_entries(self, keys, values, pages):
        self._keys.extend(keys)
        self._values.extend(values)
        for child_id in values:
            self._adopt(child_id, pages)

    def move_half_to(self, recipient, pages):
        """Move the upper half of the entries to the end of recipient."""
        start = (self.size + 1) // 2
        recipient._append_entries(self._keys[start:], self._values[start:], pages)
        self.size = start

    def move_all_to(self, recipient, middle_key, pages):
        """Move every entry to recipient, putting middle_key in front of them."""
        if self._keys:
            self._keys[0] = middle_key
        recipient._append_entries(self._keys, self._values, pages)
        self._keys = []
        self._values = []

    def move_first_to_end_of(self, recipient, middle_key, pages):
        """Move the first entry to the end of recipient under middle_key."""
        self._keys[0] = middle_key
        recipient._append_entries([self._keys[0]], [self._values[0]], pages)
        self.remove(0)

    def move_last_to_front_of(self, recipient, middle_key, pages):
        """Move the last child to the front of recipient; middle_key becomes its second key."""
        child = self._values[-1]
        if recipient._keys:
            recipient._keys[0] = middle_key
        recipient._keys.insert(0, middle_key)
        recipient._values.insert(0, child)
        recipient._adopt(child, pages)
        self._keys.pop()
        self._values.pop()