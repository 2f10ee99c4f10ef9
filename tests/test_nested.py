import random
import threading
import time

import pytest

from diskmonitors.nested import (
    IDLE,
    MAX_CYLINDER,
    DiskAccess,
    DiskTransfer,
    InvalidCylinderError,
    user_process,
)


class _ScriptedRandom(random.Random):
    def __init__(self, values=()):
        super().__init__(0)
        self._values = list(values)
        self._guard = threading.Lock()

    def randrange(self, *args, **kwargs):
        with self._guard:
            return self._values.pop(0) if self._values else 0


def _wait_until(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError("condition not reached in time")
        time.sleep(0.005)


def _fast_transfer(values=()):
    return DiskTransfer(_ScriptedRandom(values), base_ms=0, jitter_ms=1000)


def test_single_read_records_and_returns_idle(capsys):
    transfer = _fast_transfer()
    access = DiskAccess(transfer)
    access.doio(7, 42)
    assert transfer.reads == [(7, 42)]
    assert access.position == IDLE
    assert "[User 7] Reading from cylinder 42" in capsys.readouterr().out


@pytest.mark.parametrize("cylinder", [-1, MAX_CYLINDER + 1, 9999])
def test_invalid_cylinder_rejected_without_read(cylinder):
    transfer = _fast_transfer()
    access = DiskAccess(transfer)
    with pytest.raises(InvalidCylinderError) as info:
        access.doio(9, cylinder)
    assert info.value.cylinder == cylinder
    assert info.value.user_id == 9
    assert transfer.reads == []
    assert access.position == IDLE


@pytest.mark.parametrize("cylinder", [0, MAX_CYLINDER])
def test_boundary_cylinders_read(cylinder):
    transfer = _fast_transfer()
    DiskAccess(transfer).doio(1, cylinder)
    assert transfer.reads == [(1, cylinder)]


@pytest.mark.timeout(10)
def test_reads_follow_cscan_order():
    transfer = _fast_transfer([800])
    access = DiskAccess(transfer)

    first = threading.Thread(target=access.doio, args=(1, 50))
    first.start()
    _wait_until(lambda: access.position == 50)

    others = [
        threading.Thread(target=access.doio, args=(user_id, cylinder))
        for user_id, cylinder in [(2, 170), (3, 10), (4, 80), (5, 60)]
    ]
    for thread in others:
        thread.start()
    _wait_until(lambda: access.waiting == 4)

    for thread in [first, *others]:
        thread.join()

    assert transfer.reads == [(1, 50), (5, 60), (4, 80), (2, 170), (3, 10)]
    assert access.waiting == 0
    assert access.position == IDLE


@pytest.mark.timeout(10)
def test_same_cylinder_served_twice_in_turn():
    transfer = _fast_transfer([500])
    access = DiskAccess(transfer)
    first = threading.Thread(target=access.doio, args=(1, 30))
    first.start()
    _wait_until(lambda: access.position == 30)
    second = threading.Thread(target=access.doio, args=(2, 30))
    second.start()
    _wait_until(lambda: access.waiting == 1)
    first.join()
    second.join()
    assert transfer.reads == [(1, 30), (2, 30)]


def test_user_process_denied(capsys):
    transfer = _fast_transfer()
    assert user_process(10, 420, DiskAccess(transfer), _ScriptedRandom()) is False
    out = capsys.readouterr().out
    assert "Pedido negado" in out
    assert transfer.reads == []


def test_user_process_served(capsys):
    transfer = _fast_transfer()
    assert user_process(1, 50, DiskAccess(transfer), _ScriptedRandom()) is True
    out = capsys.readouterr().out
    assert "[User 1] Requesting cylinder 50" in out
    assert "[User 1] Finished operation on cylinder 50" in out
    assert transfer.reads == [(1, 50)]