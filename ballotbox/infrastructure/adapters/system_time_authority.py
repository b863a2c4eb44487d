"""System clock adapter for TimeAuthorityProtocol.

Readings are whole seconds since the Unix epoch. The adapter never returns
a reading smaller than one it returned before, so a wall-clock step
backwards cannot reopen a closed election.
"""

from __future__ import annotations

import threading
import time

from ballotbox.application.ports.time_authority import TimeAuthorityProtocol


class SystemTimeAuthority(TimeAuthorityProtocol):
    """Time authority backed by the host wall clock.

    Attributes:
        _last: Highest reading returned so far.
    """

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        """Return current epoch seconds, clamped to be non-decreasing."""
        reading = int(time.time())
        with self._lock:
            if reading < self._last:
                reading = self._last
            self._last = reading
        return reading
