"""Transaction state for two-phase locking."""

import threading
from dataclasses import dataclass, field
from enum import Enum

INVALID_TXN_ID = -1


class IsolationLevel(Enum):
    READ_UNCOMMITTED = 0
    READ_COMMITTED = 1
    REPEATED_READ = 2


class AbortReason(Enum):
    LOCK_ON_SHRINKING = 0
    UNLOCK_ON_SHRINKING = 1
    UPGRADE_CONFLICT = 2
    DEADLOCK = 3
    LOCK_SHARED_ON_READ_UNCOMMITTED = 4


class TxnState(Enum):
    GROWING = 0
    SHRINKING = 1
    COMMITTED = 2
    ABORTED = 3


class TxnAbortError(Exception):
    """Raised when a transaction must abort."""

    def __init__(self, txn_id, abort_reason):
        super().__init__(f"transaction {txn_id} aborted: {abort_reason.name}")
        self.txn_id = txn_id
        self.abort_reason = abort_reason


@dataclass(eq=False)
class Txn:
    """A transaction with its state and the row locks it holds."""

    txn_id: int = INVALID_TXN_ID
    isolation_level: IsolationLevel = IsolationLevel.REPEATED_READ
    state: TxnState = TxnState.GROWING
    thread_id: int = field(default_factory=threading.get_ident)
    shared_lock_set: set = field(default_factory=set)
    exclusive_lock_set: set = field(default_factory=set)