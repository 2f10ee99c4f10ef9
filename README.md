# diskmonitors

Three disk-head schedulers built from monitors (a lock plus condition
variables). Each one comes with a small threaded simulation that you can run.

- `diskmonitors.intermediary` does SCAN scheduling. A `DiskInterface`
  monitor sits between user threads and one driver thread.
  - A user calls `use_disk(cylinder, transfer_args)` with a `TransferArgs`
    and blocks until the driver has served it. The call then returns the
    driver's `TransferResult`.
  - The driver calls `get_next_request()`, which moves the head to the next
    cylinder in scan order and returns that user's `TransferArgs`. It then
    calls `finished_transfer(result)`.
  - `DiskInterface.position` is the cylinder being served. It is `IDLE` (-1)
    when nothing is being served and `NOT_STARTED` (-2) before the driver
    first runs.
  - `DiskInterface.queued` counts the distinct cylinders that are waiting.
  - `driver_process(total_requests, disk, io_time=0.5, idle_time=0.1)`
    serves that many requests. It returns the `(user_id, cylinder)` pairs
    in the order they were served.
  - `user_process(user_id, cylinder, disk, delay=None)` sleeps and then
    requests the cylinder. With no `delay` it sleeps 0.1 s per user id.
- `diskmonitors.separate` does C-SCAN with a separate scheduling monitor.
  - A user puts its own disk access between
    `DiskScheduler.request(cylinder, user_id)` and `DiskScheduler.release()`.
  - `current_position()` returns the granted cylinder, or `-1` when the head
    is idle.
  - `waiting` counts the users that are blocked.
- `diskmonitors.nested` does C-SCAN with nested monitors.
  - `DiskAccess(disk).doio(user_id, cylinder)` waits for its turn. It then
    makes an open call to `DiskTransfer.read`, with the access monitor not
    held. Afterwards it passes the head on, even if the read raised.
  - `DiskTransfer(rng=None, base_ms=200, jitter_ms=300)` sleeps for
    `base_ms` plus a random jitter on each read.
  - `DiskTransfer.reads` lists every `(user_id, cylinder)` read so far.
  - `DiskAccess` also has the `position` and `waiting` properties.

Valid cylinders run from 0 to 199. In `separate` and `nested`, a request
outside that range raises `InvalidCylinderError`, a subclass of
`ValueError`. Both modules define their own `InvalidCylinderError`. The
exception carries `cylinder` and `user_id`.

## Running the simulations

```
diskmonitors-intermediary [--debug | --no-debug]
diskmonitors-separate [--seed N]
diskmonitors-nested [--seed N]
```

- `diskmonitors-intermediary` runs eight users over a fixed list of
  cylinders.
  - With `--debug`, every step of the users and the driver is logged to
    standard output.
  - If neither `--debug` nor `--no-debug` is given, it asks on standard
    input. An answer that starts with `s` or `S` turns logging on.
- `diskmonitors-separate` and `diskmonitors-nested` run fixed batches of
  requests with random delays.
  - The batches include out-of-range cylinders, and those requests are
    printed as refused.
  - `--seed` fixes the random delays.

## Using the monitors directly

```python
import threading
from diskmonitors.separate import DiskScheduler

scheduler = DiskScheduler()

def worker(user_id, cylinder):
    scheduler.request(cylinder, user_id)
    try:
        ...  # access the cylinder
    finally:
        scheduler.release()

threads = [threading.Thread(target=worker, args=(i, c))
           for i, c in enumerate([50, 10, 170, 3])]
for t in threads:
    t.start()
for t in threads:
    t.join()
```

## What it does not do

No real disk is touched. All I/O is simulated with sleeps.

## Tests

```
pip install -e .[test]
pytest
```