"""엔진이 외부에 의존하는 지점의 Protocol 정의."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """현재 시각 공급자. is_today 판정과 미지정 from/to 해석에만 쓰인다."""

    def now(self) -> int: ...
