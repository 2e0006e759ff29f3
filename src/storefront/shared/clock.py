"""Timestamps for ``created_at``/``added_at`` style fields.

Listings order by these timestamps, so ``utcnow`` never hands out the same
instant twice within a process: a call landing on the previous microsecond
is pushed one microsecond forward.
"""

import threading
from datetime import UTC, datetime, timedelta

_lock = threading.Lock()
_last = datetime.min.replace(tzinfo=UTC)


def utcnow():
    global _last
    with _lock:
        now = datetime.now(UTC)
        if now <= _last:
            now = _last + timedelta(microseconds=1)
        _last = now
        return now
