"""Slotted page holding the serialized tuples of a table."""

import struct
from dataclasses import dataclass

from minisql.page import INVALID_PAGE_ID, PAGE_SIZE, Page

_I32 = struct.Struct("<i")
_U32 = struct.Struct("<I")


@dataclass(frozen=True, order=True)
class RowId:
    """Location of a tuple: the page it lives on and its slot number."""

    page_id: int = INVALID_PAGE_ID
    slot_num: int = 0


INVALID_ROWID = RowId()


class TablePageError(Exception):
    """Raised when a tuple operation refers to a slot that cannot be used."""


class TablePage(Page):
    """Slotted page: header and slot array grow forward, tuples grow backward.

    Header layout: page id, LSN, previous page id, next page id,
    free space pointer, tuple count, then (offset, size) per slot.
    """

    DELETE_MASK = 1 << 31
    SIZE_TABLE_PAGE_HEADER = 24
    SIZE_TUPLE = 8
    OFFSET_PREV_PAGE_ID = 8
    OFFSET_NEXT_PAGE_ID = 12
    OFFSET_FREE_SPACE = 16
    OFFSET_TUPLE_COUNT = 20
    OFFSET_TUPLE_OFFSET = 24
    OFFSET_TUPLE_SIZE = 28
    SIZE_MAX_ROW = PAGE_SIZE - SIZE_TABLE_PAGE_HEADER - SIZE_TUPLE

    def init(self, page_id, prev_id):
        """Format an empty table page."""
        _I32.pack_into(self.data, 0, page_id)
        self.prev_page_id = prev_id
        self.next_page_id = INVALID_PAGE_ID
        self._free_space_pointer = len(self.data)
        self._tuple_count = 0

    # ---- header fields -------------------------------------------------

    @property
    def table_page_id(self):
        return _I32.unpack_from(self.data, 0)[0]

    @property
    def prev_page_id(self):
        return _I32.unpack_from(self.data, self.OFFSET_PREV_PAGE_ID)[0]

    @prev_page_id.setter
    def prev_page_id(self, value):
        _I32.pack_into(self.data, self.OFFSET_PREV_PAGE_ID, value)

    @property
    def next_page_id(self):
        return _I32.unpack_from(self.data, self.OFFSET_NEXT_PAGE_ID)[0]

    @next_page_id.setter
    def next_page_id(self, value):
        _I32.pack_into(self.data, self.OFFSET_NEXT_PAGE_ID, value)

    @property
    def _free_space_pointer(self):
        return _U32.unpack_from(self.data, self.OFFSET_FREE_SPACE)[0]

    @_free_space_pointer.setter
    def _free_space_pointer(self, value):
        _U32.pack_into(self.data, self.OFFSET_FREE_SPACE, value)

    @property
    def _tuple_count(self):
        return _U32.unpack_from(self.data, self.OFFSET_TUPLE_COUNT)[0]

    @_tuple_count.setter
    def _tuple_count(self, value):
        _U32.pack_into(self.data, self.OFFSET_TUPLE_COUNT, value)

    def _free_space_remaining(self):
        return self._free_space_pointer - self.SIZE_TABLE_PAGE_HEADER - self.SIZE_TUPLE * self._tuple_count

    def _slot_offset(self, slot):
        return _U32.unpack_from(self.data, self.OFFSET_TUPLE_OFFSET + self.SIZE_TUPLE * slot)[0]

    def _set_slot_offset(self, slot, offset):
        _U32.pack_into(self.data, self.OFFSET_TUPLE_OFFSET + self.SIZE_TUPLE * slot, offset)

    def _slot_size(self, slot):
        return _U32.unpack_from(self.data, self.OFFSET_TUPLE_SIZE + self.SIZE_TUPLE * slot)[0]

    def _set_slot_size(self, slot, size):
        _U32.pack_into(self.data, self.OFFSET_TUPLE_SIZE + self.SIZE_TUPLE * slot, size)

    @classmethod
    def _is_deleted(cls, tuple_size):
        return bool(tuple_size & cls.DELETE_MASK) or tuple_size == 0

    # ---- tuple operations ----------------------------------------------

    def insert_tuple(self, data):
        """Store a tuple and return its RowId, or None if the page has no room."""
        size = len(data)
        if size == 0:
            raise ValueError("cannot insert an empty tuple")
        if self._free_space_remaining() < size + self.SIZE_TUPLE:
            return None
        count = self._tuple_count
        slot = next((i for i in range(count) if self._slot_size(i) == 0), count)
        pointer = self._free_space_pointer - size
        self._free_space_pointer = pointer
        self.data[pointer:pointer + size] = data
        self._set_slot_offset(slot, pointer)
        self._set_slot_size(slot, size)
        if slot == count:
            self._tuple_count = count + 1
        return RowId(self.table_page_id, slot)

    def mark_delete(self, rid):
        """Flag a tuple as deleted; return False if it is missing or already deleted."""
        slot = rid.slot_num
        if slot >= self._tuple_count:
            return False
        size = self._slot_size(slot)
        if self._is_deleted(size):
            return False
        self._set_slot_size(slot, size | self.DELETE_MASK)
        return True

    def update_tuple(self, new_data, rid):
        """Replace a tuple in place and return its old bytes.

        Returns None when the page lacks room, in which case the caller
        should delete and insert elsewhere. Raises TablePageError if the
        slot is out of range or the tuple is deleted.
        """
        if rid == INVALID_ROWID:
            raise ValueError("invalid row id")
        new_size = len(new_data)
        if new_size == 0:
            raise ValueError("cannot store an empty tuple")
        slot = rid.slot_num
        if slot >= self._tuple_count:
            raise TablePageError(f"slot {slot} does not exist")
        tuple_size = self._slot_size(slot)
        if self._is_deleted(tuple_size):
            raise TablePageError(f"tuple in slot {slot} is deleted")
        if self._free_space_remaining() + tuple_size < new_size:
            return None
        tuple_offset = self._slot_offset(slot)
        old = bytes(self.data[tuple_offset:tuple_offset + tuple_size])
        pointer = self._free_space_pointer
        shift = tuple_size - new_size
        self.data[pointer + shift:tuple_offset + shift] = self.data[pointer:tuple_offset]
        self._free_space_pointer = pointer + shift
        start = tuple_offset + shift
        self.data[start:start + new_size] = new_data
        self._set_slot_size(slot, new_size)
        for i in range(self._tuple_count):
            offset = self._slot_offset(i)
            if self._slot_size(i) > 0 and offset < tuple_offset + tuple_size:
                self._set_slot_offset(i, offset + shift)
        return old

    def apply_delete(self, rid):
        """Physically remove a tuple and compact the tuple area."""
        slot = rid.slot_num
        if slot >= self._tuple_count:
            raise TablePageError(f"slot {slot} does not exist")
        tuple_offset = self._slot_offset(slot)
        tuple_size = self._slot_size(slot) & ~self.DELETE_MASK
        pointer = self._free_space_pointer
        if tuple_offset < pointer:
            raise TablePageError("free space appears before tuples")
        self.data[pointer + tuple_size:tuple_offset + tuple_size] = self.data[pointer:tuple_offset]
        self._free_space_pointer = pointer + tuple_size
        self._set_slot_size(slot, 0)
        self._set_slot_offset(slot, 0)
        for i in range(self._tuple_count):
            offset = self._slot_offset(i)
            if self._slot_size(i) != 0 and offset < tuple_offset:
                self._set_slot_offset(i, offset + tuple_size)

    def rollback_delete(self, rid):
        """Clear the deleted flag of a tuple."""
        slot = rid.slot_num
        if slot >= self._tuple_count:
            raise TablePageError(f"slot {slot} does not exist")
        size = self._slot_size(slot)
        if self._is_deleted(size):
            self._set_slot_size(slot, size & ~self.DELETE_MASK)

    def get_tuple(self, rid):
        """Return the bytes of a tuple, or None if it is missing or deleted."""
        if rid == INVALID_ROWID:
            raise ValueError("invalid row id")
        slot = rid.slot_num
        if slot >= self._tuple_count:
            return None
        size = self._slot_size(slot)
        if self._is_deleted(size):
            return None
        offset = self._slot_offset(slot)
        return bytes(self.data[offset:offset + size])

    def _live_rid_from(self, start):
        page_id = self.table_page_id
        return next(
            (RowId(page_id, i) for i in range(start, self._tuple_count) if not self._is_deleted(self._slot_size(i))),
            None,
        )

    def first_tuple_rid(self):
        """RowId of the first live tuple, or None."""
        return self._live_rid_from(0)

    def next_tuple_rid(self, cur_rid):
        """RowId of the first live tuple after cur_rid, or None."""
        if cur_rid.page_id != self.table_page_id:
            raise ValueError("row id belongs to another page")
        return self._live_rid_from(cur_rid.slot_num + 1)