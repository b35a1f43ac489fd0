"""Page mapping names to root page ids."""

import struct

from minisql.page import INVALID_PAGE_ID, Page

_INT32 = struct.Struct("<i")


class HeaderPage(Page):
    """Table of (name, root id) records: a 4-byte count then 36-byte records."""

    HEADER_PAGE_MAX_ENTRY_NAME_LEN = 32
    RECORD_SIZE = 36
    _COUNT_SIZE = 4

    @property
    def max_records(self):
        return (len(self.data) - self._COUNT_SIZE) // self.RECORD_SIZE

    def init(self):
        self._set_record_count(0)

    def record_count(self):
        return _INT32.unpack_from(self.data, 0)[0]

    def _set_record_count(self, count):
        _INT32.pack_into(self.data, 0, count)

    def _offset(self, index):
        return self._COUNT_SIZE + index * self.RECORD_SIZE

    @classmethod
    def _encode(cls, name):
        raw = name.encode("utf-8")
        if len(raw) >= cls.HEADER_PAGE_MAX_ENTRY_NAME_LEN:
            raise ValueError(f"name {name!r} is too long")
        return raw

    def _find_record(self, raw):
        for i in range(self.record_count()):
            start = self._offset(i)
            stored = self.data[start:start + self.HEADER_PAGE_MAX_ENTRY_NAME_LEN]
            if stored.split(b"\0", 1)[0] == raw:
                return i
        return -1

    def insert_record(self, name, root_id):
        """Add a record; return False if the name is already present."""
        raw = self._encode(name)
        if root_id <= INVALID_PAGE_ID:
            raise ValueError(f"invalid root page id {root_id}")
        if self._find_record(raw) != -1:
            return False
        count = self.record_count()
        if count >= self.max_records:
            raise ValueError("header page is full")
        start = self._offset(count)
        name_len = self.HEADER_PAGE_MAX_ENTRY_NAME_LEN
        self.data[start:start + name_len] = raw.ljust(name_len, b"\0")
        _INT32.pack_into(self.data, start + name_len, root_id)
        self._set_record_count(count + 1)
        return True

    def delete_record(self, name):
        """Remove a record; return False if there is none with that name."""
        index = self._find_record(name.encode("utf-8"))
        if index == -1:
            return False
        count = self.record_count()
        start = self._offset(index)
        end = self._offset(count)
        self.data[start:end - self.RECORD_SIZE] = self.data[start + self.RECORD_SIZE:end]
        self._set_record_count(count - 1)
        return True

    def update_record(self, name, root_id):
        """Change the root id of a record; return False if it does not exist."""
        index = self._find_record(self._encode(name))
        if index == -1:
            return False
        _INT32.pack_into(self.data, self._offset(index) + self.HEADER_PAGE_MAX_ENTRY_NAME_LEN, root_id)
        return True

    def get_root_id(self, name):
        """Return the root id stored for name, or None."""
        index = self._find_record(self._encode(name))
        if index == -1:
            return None
        return _INT32.unpack_from(self.data, self._offset(index) + self.HEADER_PAGE_MAX_ENTRY_NAME_LEN)[0]