"""Free-page bitmap of an extent and the disk file meta page."""

import struct
from dataclasses import dataclass, field

from minisql.page import PAGE_SIZE

_HEADER = struct.Struct("<II")


class BitmapFullError(Exception):
    """Raised when every page tracked by a bitmap is already allocated."""


class BitmapPage:
    """Bitmap recording which pages of an extent are in use (bit set = used)."""

    def __init__(self, page_size=PAGE_SIZE):
        self.page_size = page_size
        self._max_chars = page_size - _HEADER.size
        self.page_allocated = 0
        self.next_free_page = 0
        self.bits = bytearray(self._max_chars)

    def max_supported_size(self):
        """Number of pages this bitmap can track."""
        return 8 * self._max_chars

    def _check(self, page_offset):
        if not 0 <= page_offset < self.max_supported_size():
            raise IndexError(f"page offset {page_offset} out of range")

    @staticmethod
    def _mask(page_offset):
        return 1 << (7 - page_offset % 8)

    def allocate_page(self):
        """Mark the lowest free page as used and return its offset."""
        limit = self.max_supported_size()
        if self.page_allocated == limit:
            raise BitmapFullError("no free page left in this extent")
        offset = self.next_free_page
        self.page_allocated += 1
        self.bits[offset // 8] |= self._mask(offset)
        self.next_free_page = next(
            (i for i in range(offset + 1, limit) if not self.bits[i // 8] & self._mask(i)),
            limit,
        )
        return offset

    def deallocate_page(self, page_offset):
        """Free a page; return False if it was already free."""
        self._check(page_offset)
        if self.is_page_free(page_offset):
            return False
        self.bits[page_offset // 8] &= ~self._mask(page_offset) & 0xFF
        self.page_allocated -= 1
        self.next_free_page = min(self.next_free_page, page_offset)
        return True

    def is_page_free(self, page_offset):
        self._check(page_offset)
        return not self.bits[page_offset // 8] & self._mask(page_offset)

    def to_bytes(self):
        return _HEADER.pack(self.page_allocated, self.next_free_page) + bytes(self.bits)

    @classmethod
    def from_bytes(cls, raw):
        page = cls(page_size=len(raw))
        page.page_allocated, page.next_free_page = _HEADER.unpack_from(raw, 0)
        page.bits[:] = raw[_HEADER.size:]
        return page


MAX_VALID_PAGE_ID = (PAGE_SIZE - 8) // 4 * BitmapPage().max_supported_size()


@dataclass
class DiskFileMetaPage:
    """Counts of allocated pages, overall and per extent."""

    num_allocated_pages: int = 0
    num_extents: int = 0
    extent_used_pages: list = field(default_factory=list)

    def extent_used_page(self, extent_id):
        if extent_id >= self.num_extents:
            return 0
        return self.extent_used_pages[extent_id]

    def to_bytes(self, page_size=PAGE_SIZE):
        used = list(self.extent_used_pages[: self.num_extents])
        used += [0] * (self.num_extents - len(used))
        raw = _HEADER.pack(self.num_allocated_pages, self.num_extents)
        raw += struct.pack(f"<{len(used)}I", *used)
        if len(raw) > page_size:
            raise ValueError("too many extents for one meta page")
        return raw + bytes(page_size - len(raw))

    @classmethod
    def from_bytes(cls, raw):
        allocated, extents = _HEADER.unpack_from(raw, 0)
        used = list(struct.unpack_from(f"<{extents}I", raw, _HEADER.size))
        return cls(allocated, extents, used)