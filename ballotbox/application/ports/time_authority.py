"""Time Authority Protocol - interface for the election clock.

Every operation that needs the current time MUST obtain it from an injected
TimeAuthorityProtocol implementation instead of reading the system clock
directly. The election core only reads the clock; it never schedules
anything against it.

Benefits:
1. **Testability**: Tests inject FakeTimeAuthority and advance time explicitly
2. **Consistency**: One clock reading per operation, taken on entry
"""

from abc import ABC, abstractmethod


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority.

    Readings are integers in clock units (seconds for the system clock).
    Implementations must never return a value smaller than a previous one.

    Example usage:
        class MyService:
            def __init__(self, time_authority: TimeAuthorityProtocol) -> None:
                self._time = time_authority

            def process(self) -> None:
                now = self._time.now()
                ...

    For production:
        Use SystemTimeAuthority from ballotbox.infrastructure.adapters

    For testing:
        Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
    """

    @abstractmethod
    def now(self) -> int:
        """Return the current clock reading.

        Returns:
            Current time as a non-negative integer.
        """
        ...
