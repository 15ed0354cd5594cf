"""In-process mutual exclusion per vehicle.

Row locks (SELECT ... FOR UPDATE) serialize writers on PostgreSQL; SQLite has no
row locks, so every section that reads bookings and then writes bookings or the
vehicle status also holds this lock.
"""
import asyncio
import weakref

_locks: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, dict[int, asyncio.Lock]]" = (
    weakref.WeakKeyDictionary()
)


def vehicle_lock(vehicle_id: int) -> asyncio.Lock:
    # asyncio.Lock is bound to the loop it first waits on
    loop = asyncio.get_running_loop()
    # one lock per vehicle id, so the map is bounded by the fleet size
    per_loop = _locks.setdefault(loop, {})
    lock = per_loop.get(vehicle_id)
    if lock is None:
        lock = per_loop[vehicle_id] = asyncio.Lock()
    return lock
