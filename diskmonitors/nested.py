"""C-SCAN disk scheduler as a nested monitor.

:class:`DiskAccess` orders requests and calls the :class:`DiskTransfer`
monitor through an open call, so the access monitor is not held while the
transfer runs.
"""

from __future__ import annotations

import argparse
import random
import sys
import threading
import time
from collections import deque
from dataclasses import dataclass, field

MAX_CYLINDER = 199
IDLE = -1

REQUESTS: tuple[int, ...] = (50, 10, 170, 3, 75, 90, 8, 110, 9999, 420, 150, 30, 180, 200)

_print_lock = threading.Lock()


def _say(message: str) -> None:
    with _print_lock:
        print(message, flush=True)


class InvalidCylinderError(ValueError):
    """Raised when a user asks for a cylinder outside 0..MAX_CYLINDER."""

    def __init__(self, cylinder: int, user_id: int) -> None:
        self.cylinder = cylinder
        self.user_id = user_id
        super().__init__(
            f"Invalid cylinder request: {cylinder} Por parte do cliente {user_id}. "
            f"O cilindro deve estar entre 0 e {MAX_CYLINDER}."
        )


class DiskTransfer:
    """Monitor performing the actual (simulated) disk reads."""

    def __init__(
        self,
        rng: random.Random | None = None,
        base_ms: int = 200,
        jitter_ms: int = 300,
    ) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._base_ms = base_ms
        self._jitter_ms = jitter_ms
        self._lock = threading.Lock()
        self._reads: list[tuple[int, int]] = []

    @property
    def reads(self) -> list[tuple[int, int]]:
        """(user id, cylinder) of every read so far, in order."""
        with self._lock:
            return list(self._reads)

    def read(self, user_id: int, cylinder: int) -> None:
        """Read from ``cylinder`` for ``user_id``; takes a random time."""
        with self._lock:
            self._reads.append((user_id, cylinder))
            _say(f"[User {user_id}] Reading from cylinder {cylinder}")
        jitter = self._rng.randrange(self._jitter_ms) if self._jitter_ms > 0 else 0
        time.sleep((self._base_ms + jitter) / 1000)


@dataclass
class _Waiter:
    condition: threading.Condition
    granted: bool = field(default=False)


class DiskAccess:
    """Monitor ordering accesses to a :class:`DiskTransfer` in C-SCAN order."""

    def __init__(self, disk: DiskTransfer) -> None:
        self._disk = disk
        self._lock = threading.Lock()
        self._queues: tuple[dict[int, deque[_Waiter]], dict[int, deque[_Waiter]]] = ({}, {})
        self._position = IDLE
        self._current = 0
        self._next = 1

    @property
    def position(self) -> int:
        """Cylinder currently being served, or ``IDLE``."""
        with self._lock:
            return self._position

    @property
    def waiting(self) -> int:
        """Number of users blocked in either sweep queue."""
        with self._lock:
            return sum(len(waiters) for queue in self._queues for waiters in queue.values())

    def doio(self, user_id: int, cylinder: int) -> None:
        """Wait for the head, read ``cylinder`` and pass the head on."""
        if not 0 <= cylinder <= MAX_CYLINDER:
            raise InvalidCylinderError(cylinder, user_id)
        with self._lock:
            if self._position == IDLE:
                self._position = cylinder
            else:
                direction = self._current if cylinder > self._position else self._next
                waiter = _Waiter(threading.Condition(self._lock))
                self._queues[direction].setdefault(cylinder, deque()).append(waiter)
                waiter.condition.wait_for(lambda: waiter.granted)

        try:
            self._disk.read(user_id, cylinder)
        finally:
            with self._lock:
                self._signal_next()

    def _signal_next(self) -> None:
        if not self._queues[self._current] and self._queues[self._next]:
            self._current, self._next = self._next, self._current
        queue = self._queues[self._current]
        if not queue:
            self._position = IDLE
            return
        cylinder = min(queue)
        waiters = queue[cylinder]
        waiter = waiters.popleft()
        if not waiters:
            del queue[cylinder]
        self._position = cylinder
        waiter.granted = True
        waiter.condition.notify()


def user_process(
    user_id: int,
    cylinder: int,
    access: DiskAccess,
    rng: random.Random,
) -> bool:
    """Simulate one user performing a read. Return False if denied."""
    time.sleep(rng.randrange(1000) / 1000)
    _say(f"[User {user_id}] Requesting cylinder {cylinder}")
    try:
        access.doio(user_id, cylinder)
    except InvalidCylinderError as error:
        _say(f"[User {user_id}] Pedido negado: {error}")
        return False
    _say(f"[User {user_id}] Finished operation on cylinder {cylinder}")
    return True


def main(argv: list[str] | None = None) -> int:
    """Run the simulation over the fixed batch of requests."""
    parser = argparse.ArgumentParser(description="C-SCAN disk scheduling with a nested monitor.")
    parser.add_argument("--seed", type=int, default=None, help="seed for the random delays")
    options = parser.parse_args(argv)

    rng = random.Random(options.seed)
    access = DiskAccess(DiskTransfer(rng))
    users = [
        threading.Thread(target=user_process, args=(user_id, cylinder, access, rng))
        for user_id, cylinder in enumerate(REQUESTS, start=1)
    ]
    for user in users:
        user.start()
    for user in users:
        user.join()

    print("All operations completed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())