"""선택된 날짜 → 호출자가 요청한 결과 형태."""

from collections.abc import Sequence
from typing import Any

from calgrid.models import (
    CalendarDay,
    CalendarResult,
    Instant,
    OutputType,
    PickMode,
    RangeResult,
)
from calgrid.options import CalendarOptions
from calgrid.services import date_utils


def multi_format(time: Instant, date_format: str = date_utils.DATE_FORMAT) -> CalendarResult:
    """하나의 instant를 모든 표현으로."""
    dt = date_utils.to_datetime(time)
    return CalendarResult(
        time=time,
        unix=time // 1000,
        date_obj=dt,
        string=date_utils.format_instant(time, date_format),
        year=dt.year,
        month=dt.month,
        day=dt.day,
    )


def wrap_result(
    days: Sequence[CalendarDay | None],
    pick_mode: PickMode | str,
    date_format: str = date_utils.DATE_FORMAT,
):
    """SINGLE → CalendarResult, RANGE → RangeResult, MULTI → list[CalendarResult].

    선택이 비어 있으면 SINGLE/RANGE는 None, MULTI는 빈 리스트.
    알 수 없는 pick_mode는 입력을 그대로 돌려준다.
    """
    try:
        mode = PickMode(pick_mode)
    except ValueError:
        return list(days)

    picked = [d for d in days if d is not None]
    match mode:
        case PickMode.SINGLE:
            return multi_format(picked[0].time, date_format) if picked else None
        case PickMode.RANGE:
            if not picked:
                return None
            end = picked[1] if len(picked) > 1 else picked[0]
            return RangeResult(
                from_=multi_format(picked[0].time, date_format),
                to=multi_format(end.time, date_format),
            )
        case PickMode.MULTI:
            return [multi_format(d.time, date_format) for d in picked]


def handle_type(
    time: Instant,
    output_type: OutputType | str = OutputType.STRING,
    date_format: str = date_utils.DATE_FORMAT,
) -> Any:
    """요청된 표현 하나로 변환."""
    dt = date_utils.to_datetime(time)
    match OutputType(output_type):
        case OutputType.STRING:
            return date_utils.format_instant(time, date_format)
        case OutputType.DATETIME:
            return dt
        case OutputType.TIME:
            return time
        case OutputType.OBJECT:
            return {
                "year": dt.year,
                "month": dt.month,
                "day": dt.day,
                "hour": dt.hour,
                "minute": dt.minute,
                "second": dt.second,
                "millisecond": dt.microsecond // 1000,
            }


def wrap_output(days: Sequence[CalendarDay | None], options: CalendarOptions) -> Any:
    """폼 컨트롤이 내보내는 값: pick_mode 형태 + output_type 표현.

    RANGE는 양 끝이 모두 있을 때만 값을 만든다
    (default_end_date_to_start_date면 시작일만으로도 from == to).
    """

    def convert(day: CalendarDay) -> Any:
        return handle_type(day.time, options.output_type, options.date_format)

    first = days[0] if days else None
    match options.pick_mode:
        case PickMode.SINGLE:
            return convert(first) if first is not None else None
        case PickMode.RANGE:
            second = days[1] if len(days) > 1 else None
            if first is not None and second is None and options.default_end_date_to_start_date:
                second = first
            if first is None or second is None:
                return None
            return {"from": convert(first), "to": convert(second)}
        case PickMode.MULTI:
            return [convert(d) for d in days if d is not None]
