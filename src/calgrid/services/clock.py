"""Clock 구현체."""

import time

from calgrid.models import Instant
from calgrid.services.protocols import Clock


class SystemClock:
    """실제 시스템 시각."""

    def now(self) -> Instant:
        return time.time_ns() // 1_000_000


class FixedClock:
    """고정된 시각을 돌려준다. 테스트와 재현 가능한 렌더링용."""

    def __init__(self, instant: Instant) -> None:
        self._instant = instant

    def now(self) -> Instant:
        return self._instant

    def __repr__(self) -> str:
        return f"FixedClock({self._instant})"


_system_clock = SystemClock()


def get_clock(clock: Clock | None = None) -> Clock:
    """clock이 없으면 시스템 clock."""
    return clock if clock is not None else _system_clock
