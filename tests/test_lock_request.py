import pytest

from minisql.lock_request import LockMode, LockRequest, LockRequestQueue


def test_request_defaults():
    request = LockRequest(1, LockMode.EXCLUSIVE)
    assert request.granted is LockMode.NONE
    assert request.lock_mode is LockMode.EXCLUSIVE


def test_emplace_puts_newest_first():
    queue = LockRequestQueue()
    queue.emplace_lock_request(1, LockMode.SHARED)
    queue.emplace_lock_request(2, LockMode.EXCLUSIVE)
    assert [r.txn_id for r in queue.requests] == [2, 1]
    assert queue.get_lock_request(2).lock_mode is LockMode.EXCLUSIVE


def test_duplicate_emplace_rejected():
    queue = LockRequestQueue()
    queue.emplace_lock_request(1, LockMode.SHARED)
    with pytest.raises(ValueError):
        queue.emplace_lock_request(1, LockMode.EXCLUSIVE)
    assert len(queue.requests) == 1


def test_erase():
    queue = LockRequestQueue()
    for txn_id in (1, 2, 3):
        queue.emplace_lock_request(txn_id, LockMode.SHARED)
    assert queue.erase_lock_request(2)
    assert [r.txn_id for r in queue.requests] == [3, 1]
    assert queue.erase_lock_request(2) is False
    with pytest.raises(KeyError):
        queue.get_lock_request(2)


def test_get_returns_live_request():
    queue = LockRequestQueue()
    queue.emplace_lock_request(5, LockMode.SHARED)
    queue.get_lock_request(5).granted = LockMode.SHARED
    assert next(iter(queue.requests)).granted is LockMode.SHARED


def test_queue_flags_default():
    queue = LockRequestQueue()
    assert (queue.is_writing, queue.is_upgrading, queue.sharing_count) == (False, False, 0)