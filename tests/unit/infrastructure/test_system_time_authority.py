"""Unit tests for SystemTimeAuthority."""

from unittest.mock import patch

from ballotbox.application.ports.time_authority import TimeAuthorityProtocol
from ballotbox.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)


class TestSystemTimeAuthority:
    """Tests for the wall-clock adapter."""

    def test_implements_protocol(self) -> None:
        assert isinstance(SystemTimeAuthority(), TimeAuthorityProtocol)

    def test_returns_whole_seconds(self) -> None:
        with patch(
            "ballotbox.infrastructure.adapters.system_time_authority.time.time",
            return_value=1_700_000_000.9,
        ):
            assert SystemTimeAuthority().now() == 1_700_000_000

    def test_never_goes_backwards(self) -> None:
        clock = SystemTimeAuthority()
        with patch(
            "ballotbox.infrastructure.adapters.system_time_authority.time.time",
            side_effect=[2000.0, 1500.0, 2500.0],
        ):
            assert clock.now() == 2000
            assert clock.now() == 2000
            assert clock.now() == 2500
