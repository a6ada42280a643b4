"""엔진과 UI 레이어가 주고받는 데이터 모델.

Instant는 epoch 기준 밀리초 정수(int)이며, 모든 달력 계산은 로컬 시간 기준이다.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum

Instant = int


# ── 열거형 ──


class PickMode(str, Enum):
    """선택 cardinality."""

    SINGLE = "single"
    RANGE = "range"
    MULTI = "multi"


class DisplayMode(str, Enum):
    """그리드 단위."""

    MONTH = "month"
    WEEK = "week"


class OutputType(str, Enum):
    """결과 값의 표현 방식."""

    STRING = "string"
    DATETIME = "datetime"
    TIME = "time"
    OBJECT = "object"


class TimeUnit(str, Enum):
    """달력 연산 단위."""

    DAY = "days"
    WEEK = "weeks"
    MONTH = "months"
    YEAR = "years"


class CalendarView(str, Enum):
    """Navigator가 보여주는 화면."""

    DAYS = "days"
    MONTH = "month"
    YEAR = "year"


# ── Grid 모델 ──


@dataclass(frozen=True)
class CalendarDay:
    """그리드의 한 칸. selected 외에는 생성 후 바뀌지 않는다."""

    time: Instant
    is_today: bool
    title: str
    subtitle: str
    selected: bool = False
    is_last_month: bool = False  # 이전 달에 속하는 padding day
    is_next_month: bool = False  # 다음 달에 속하는 padding day
    marked: bool = False
    css_class: str = ""
    disable: bool = False
    is_first: bool = False  # 그 달의 1일
    is_last: bool = False  # 그 달의 말일


@dataclass(frozen=True)
class CalendarOriginal:
    """그리드가 표현하는 달(또는 주)의 메타데이터."""

    year: int
    month: int  # 1-based
    first_week: int  # 1일의 요일 (0 = Sunday)
    how_many_days: int
    time: Instant  # 그리드의 첫 날 (월: 1일, 주: 주 시작일)
    date: Instant  # 그리드를 만든 기준 instant
    last_day: Instant  # 그리드의 마지막 실제 날짜


@dataclass(frozen=True)
class CalendarMonth:
    """월(42칸) 또는 주(7칸) 그리드. 빈 칸은 None."""

    days: tuple[CalendarDay | None, ...]
    original: CalendarOriginal

    def weeks(self) -> list[tuple[CalendarDay | None, ...]]:
        """7칸 단위 행으로 분할."""
        return [self.days[i : i + 7] for i in range(0, len(self.days), 7)]

    def real_days(self) -> list[CalendarDay]:
        return [d for d in self.days if d is not None]


# ── 결과 모델 ──


@dataclass(frozen=True)
class CalendarResult:
    """선택된 하루를 여러 표현으로 동시에 담은 값."""

    time: Instant
    unix: int
    date_obj: datetime
    string: str
    year: int
    month: int  # 1-based
    day: int


@dataclass(frozen=True)
class RangeResult:
    """RANGE 모드의 {from, to} 쌍."""

    from_: CalendarResult
    to: CalendarResult


@dataclass(frozen=True)
class PageChange:
    """Navigator 이동 결과. 이벤트 대신 반환값으로 전달한다."""

    old: CalendarResult
    new: CalendarResult
    month_changed: bool = False
    page: CalendarMonth | None = field(default=None, compare=False)


def to_dict(obj) -> dict:
    """dataclass → JSON 직렬화 가능한 dict (datetime은 ISO 8601)."""
    data = asdict(obj)
    return _jsonable(data)


def _jsonable(value):
    if isinstance(value, dict):
        return {k.rstrip("_"): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value
