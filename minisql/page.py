"""Fixed-size storage page and the bookkeeping the buffer pool keeps for it."""

import struct
import threading

PAGE_SIZE = 4096
INVALID_PAGE_ID = -1
INVALID_LSN = -1

_INT32 = struct.Struct("<i")


class Page:
    """A block of PAGE_SIZE bytes plus its page id, pin count and dirty flag."""

    SIZE_PAGE_HEADER = 8
    OFFSET_PAGE_START = 0
    OFFSET_LSN = 4

    def __init__(self, page_size=PAGE_SIZE):
        self.data = bytearray(page_size)
        self.page_id = INVALID_PAGE_ID
        self.pin_count = 0
        self.is_dirty = False
        self.latch = threading.RLock()

    def reset_memory(self):
        """Zero out the page contents."""
        self.data[:] = bytes(len(self.data))

    @property
    def lsn(self):
        """Log sequence number stored in the page header."""
        return _INT32.unpack_from(self.data, self.OFFSET_LSN)[0]

    @lsn.setter
    def lsn(self, value):
        _INT32.pack_into(self.data, self.OFFSET_LSN, value)