"""Lock requests on a row and the queue that holds them."""

import threading
from collections import deque
from dataclasses import dataclass, field
from enum import Enum


class LockMode(Enum):
    NONE = 0
    SHARED = 1
    EXCLUSIVE = 2


@dataclass(eq=False)
class LockRequest:
    """A lock a transaction asked for, and the mode granted so far."""

    txn_id: int
    lock_mode: LockMode = LockMode.SHARED
    granted: LockMode = LockMode.NONE


@dataclass
class LockRequestQueue:
    """Requests on one row, newest first, with a condition for waiters."""

    requests: deque = field(default_factory=deque)
    _by_txn: dict = field(default_factory=dict, repr=False)
    cv: threading.Condition = field(default_factory=threading.Condition, repr=False)
    is_writing: bool = False
    is_upgrading: bool = False
    sharing_count: int = 0

    def emplace_lock_request(self, txn_id, lock_mode):
        if txn_id in self._by_txn:
            raise ValueError(f"transaction {txn_id} already has a request in this queue")
        request = LockRequest(txn_id, lock_mode)
        self.requests.appendleft(request)
        self._by_txn[txn_id] = request
        return request

    def erase_lock_request(self, txn_id):
        """Drop a transaction's request; return False if it had none."""
        request = self._by_txn.pop(txn_id, None)
        if request is None:
            return False
        self.requests.remove(request)
        return True

    def get_lock_request(self, txn_id):
        try:
            return self._by_txn[txn_id]
        except KeyError:
            raise KeyError(f"no lock request for transaction {txn_id}") from None