import random
import threading
import time

import pytest

from diskmonitors.separate import (
    IDLE,
    MAX_CYLINDER,
    DiskScheduler,
    InvalidCylinderError,
    main,
    user_process,
)


class _ZeroRandom(random.Random):
    def randrange(self, *args, **kwargs):
        return 0


def _wait_until(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError("condition not reached in time")
        time.sleep(0.005)


def test_initially_idle():
    assert DiskScheduler().current_position() == IDLE


def test_request_on_idle_disk_takes_head_and_release_frees_it():
    scheduler = DiskScheduler()
    scheduler.request(42, 1)
    assert scheduler.current_position() == 42
    scheduler.release()
    assert scheduler.current_position() == IDLE


@pytest.mark.parametrize("cylinder", [-1, MAX_CYLINDER + 1, 420])
def test_invalid_cylinder_rejected(cylinder):
    scheduler = DiskScheduler()
    with pytest.raises(InvalidCylinderError) as info:
        scheduler.request(cylinder, 3)
    assert info.value.cylinder == cylinder
    assert info.value.user_id == 3
    assert str(cylinder) in str(info.value)
    assert scheduler.current_position() == IDLE


@pytest.mark.parametrize("cylinder", [0, MAX_CYLINDER])
def test_boundary_cylinders_accepted(cylinder):
    scheduler = DiskScheduler()
    scheduler.request(cylinder, 1)
    assert scheduler.current_position() == cylinder


@pytest.mark.timeout(10)
def test_requests_served_in_cscan_order():
    scheduler = DiskScheduler()
    scheduler.request(50, 1)
    order = []
    order_lock = threading.Lock()

    def worker(user_id, cylinder):
        scheduler.request(cylinder, user_id)
        with order_lock:
            order.append(cylinder)
        scheduler.release()

    threads = [
        threading.Thread(target=worker, args=(user_id, cylinder))
        for user_id, cylinder in [(2, 170), (3, 10), (4, 80), (5, 60)]
    ]
    for thread in threads:
        thread.start()
    _wait_until(lambda: scheduler.waiting == 4)
    scheduler.release()
    for thread in threads:
        thread.join()

    assert order == [60, 80, 170, 10]
    assert scheduler.waiting == 0
    assert scheduler.current_position() == IDLE


@pytest.mark.timeout(10)
def test_same_cylinder_waits_for_release():
    scheduler = DiskScheduler()
    scheduler.request(50, 1)
    granted = threading.Event()

    def worker():
        scheduler.request(50, 2)
        granted.set()

    thread = threading.Thread(target=worker)
    thread.start()
    _wait_until(lambda: scheduler.waiting == 1)
    assert not granted.is_set()
    scheduler.release()
    thread.join()
    assert granted.is_set()
    assert scheduler.current_position() == 50


def test_user_process_denied(capsys):
    scheduler = DiskScheduler()
    assert user_process(3, 420, scheduler, _ZeroRandom()) is False
    out = capsys.readouterr().out
    assert "[User 3] Requesting cylinder 420" in out
    assert "Pedido negado" in out


@pytest.mark.timeout(10)
def test_user_process_served(capsys):
    scheduler = DiskScheduler()
    assert user_process(1, 69, scheduler, _ZeroRandom()) is True
    out = capsys.readouterr().out
    assert "[User 1] Accessing cylinder 69" in out
    assert "[User 1] Released cylinder 69" in out
    assert scheduler.current_position() == IDLE


@pytest.mark.timeout(30)
def test_main_runs_whole_batch(capsys):
    assert main(["--seed", "1"]) == 0
    out = capsys.readouterr().out
    assert out.rstrip().endswith("All disk requests completed.")
    assert out.count("Pedido negado") == 1
    assert out.count("Released cylinder") == 8