"""C-SCAN disk scheduler as a separate monitor.

Users call :meth:`DiskScheduler.request` before touching the disk and
:meth:`DiskScheduler.release` afterwards; the disk itself is accessed outside
the monitor. Requests beyond the head wait for the current sweep, the others
for the next one.
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

REQUESTS: tuple[int, ...] = (69, 100, 420, 3, 7, 12, 13, 8, 51)

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
            f"Invalid cylinder request: {cylinder} Por parte do cliente {user_id}."
            f"O cilindro deve estar entre 0 e {MAX_CYLINDER}."
        )


@dataclass
class _Waiter:
    condition: threading.Condition
    granted: bool = field(default=False)


class DiskScheduler:
    """Monitor granting the disk head to one user at a time in C-SCAN order."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._queues: tuple[dict[int, deque[_Waiter]], dict[int, deque[_Waiter]]] = ({}, {})
        self._position = IDLE
        self._current = 0
        self._next = 1

    @property
    def waiting(self) -> int:
        """Number of users blocked in either sweep queue."""
        with self._lock:
            return sum(len(waiters) for queue in self._queues for waiters in queue.values())

    def request(self, cylinder: int, user_id: int) -> None:
        """Block until the head is granted at ``cylinder``."""
        if not 0 <= cylinder <= MAX_CYLINDER:
            raise InvalidCylinderError(cylinder, user_id)
        with self._lock:
            if self._position == IDLE:
                self._position = cylinder
                return
            direction = self._current if cylinder > self._position else self._next
            waiter = _Waiter(threading.Condition(self._lock))
            self._queues[direction].setdefault(cylinder, deque()).append(waiter)
            waiter.condition.wait_for(lambda: waiter.granted)

    def release(self) -> None:
        """Hand the head to the next waiting request, or leave it idle."""
        with self._lock:
            self._signal_next()

    def current_position(self) -> int:
        """Cylinder currently granted, or ``IDLE``."""
        with self._lock:
            return self._position

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
    scheduler: DiskScheduler,
    rng: random.Random,
) -> bool:
    """Simulate one user: request, access, release. Return False if denied."""
    time.sleep(rng.randrange(1000) / 1000)
    _say(f"[User {user_id}] Requesting cylinder {cylinder}")
    try:
        scheduler.request(cylinder, user_id)
    except InvalidCylinderError as error:
        _say(f"[User {user_id}] Pedido negado: {error}")
        return False

    _say(f"[User {user_id}] Accessing cylinder {cylinder}")
    time.sleep((300 + rng.randrange(200)) / 1000)
    scheduler.release()
    _say(f"[User {user_id}] Released cylinder {cylinder}")
    return True


def main(argv: list[str] | None = None) -> int:
    """Run the simulation over the fixed batch of requests."""
    parser = argparse.ArgumentParser(description="C-SCAN disk scheduling with a separate monitor.")
    parser.add_argument("--seed", type=int, default=None, help="seed for the random delays")
    options = parser.parse_args(argv)

    rng = random.Random(options.seed)
    scheduler = DiskScheduler()
    users = [
        threading.Thread(target=user_process, args=(user_id, cylinder, scheduler, rng))
        for user_id, cylinder in enumerate(REQUESTS, start=1)
    ]
    for user in users:
        user.start()
    for user in users:
        user.join()

    print("All disk requests completed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())