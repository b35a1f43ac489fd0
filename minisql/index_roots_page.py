"""Page storing the root page id of every index."""

import struct

from minisql.page import PAGE_SIZE

_COUNT = struct.Struct("<i")
_PAIR = struct.Struct("<Ii")


class IndexRootsPage:
    """View over a page buffer: a 4-byte count then (index id, root id) pairs."""

    def __init__(self, data=None):
        self.data = bytearray(PAGE_SIZE) if data is None else data

    @property
    def max_index_count(self):
        return (len(self.data) - _COUNT.size) // _PAIR.size

    def init(self):
        self._set_count(0)

    def index_count(self):
        return _COUNT.unpack_from(self.data, 0)[0]

    def _set_count(self, count):
        _COUNT.pack_into(self.data, 0, count)

    @staticmethod
    def _offset(index):
        return _COUNT.size + index * _PAIR.size

    def _pair(self, index):
        return _PAIR.unpack_from(self.data, self._offset(index))

    def _find_index(self, index_id):
        return next((i for i in range(self.index_count()) if self._pair(i)[0] == index_id), -1)

    def insert(self, index_id, root_id):
        """Add an entry; return False if the index id is already present."""
        if self._find_index(index_id) != -1:
            return False
        count = self.index_count()
        if count >= self.max_index_count:
            raise ValueError("index roots page is full")
        _PAIR.pack_into(self.data, self._offset(count), index_id, root_id)
        self._set_count(count + 1)
        return True

    def delete(self, index_id):
        """Remove an entry; return False if it does not exist."""
        index = self._find_index(index_id)
        if index == -1:
            return False
        count = self.index_count()
        start, end = self._offset(index), self._offset(count)
        self.data[start:end - _PAIR.size] = self.data[start + _PAIR.size:end]
        self._set_count(count - 1)
        return True

    def update(self, index_id, root_id):
        """Change an entry's root id; return False if it does not exist."""
        index = self._find_index(index_id)
        if index == -1:
            return False
        _PAIR.pack_into(self.data, self._offset(index), index_id, root_id)
        return True

    def get_root_id(self, index_id):
        """Return the root id of an index, or None."""
        index = self._find_index(index_id)
        if index == -1:
            return None
        return self._pair(index)[1]