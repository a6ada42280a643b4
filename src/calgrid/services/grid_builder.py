"""월(6x7) / 주(1x7) 그리드 조립."""

import logging

from calgrid.models import CalendarDay, CalendarMonth, CalendarOriginal, Instant, TimeUnit
from calgrid.options import CalendarOptions
from calgrid.services import date_utils
from calgrid.services.clock import get_clock
from calgrid.services.day_builder import build_day
from calgrid.services.protocols import Clock

logger = logging.getLogger(__name__)

MONTH_SLOTS = 42
WEEK_SLOTS = 7


def create_original(time: Instant) -> CalendarOriginal:
    """time이 속한 달의 메타데이터."""
    dt = date_utils.to_datetime(time)
    first = date_utils.from_ymd(dt.year, dt.month, 1)
    how_many_days = date_utils.month_length(dt.year, dt.month)
    return CalendarOriginal(
        year=dt.year,
        month=dt.month,
        first_week=date_utils.weekday(first),
        how_many_days=how_many_days,
        time=first,
        date=time,
        last_day=date_utils.from_ymd(dt.year, dt.month, how_many_days),
    )


def first_column(first_week: int, week_start: int) -> int:
    """1일이 놓일 칸. week_start=1이면 한 칸 왼쪽으로 (일요일 시작 달은 6번 칸)."""
    return (first_week - week_start) % 7


def build_month_grid(
    time: Instant,
    options: CalendarOptions,
    *,
    clock: Clock | None = None,
) -> CalendarMonth:
    """time이 속한 달의 42칸 그리드."""
    clock = get_clock(clock)
    original = create_original(time)
    offset = first_column(original.first_week, options.week_start)

    days: list[CalendarDay | None] = [None] * MONTH_SLOTS
    for n in range(1, original.how_many_days + 1):
        item_time = date_utils.from_ymd(original.year, original.month, n)
        days[offset + n - 1] = build_day(item_time, options, clock=clock)

    if options.show_adjacent_month_day:
        _fill_adjacent(days, offset, offset + original.how_many_days - 1, original, options, clock)

    logger.debug(
        "Month grid built: %04d-%02d (offset=%d, adjacent=%s)",
        original.year,
        original.month,
        offset,
        options.show_adjacent_month_day,
    )
    return CalendarMonth(days=tuple(days), original=original)


def _fill_adjacent(
    days: list[CalendarDay | None],
    first_index: int,
    last_index: int,
    original: CalendarOriginal,
    options: CalendarOptions,
    clock: Clock,
) -> None:
    """앞쪽 빈 칸은 하루씩 뒤로, 뒤쪽 빈 칸은 하루씩 앞으로 채운다."""
    reference = (original.year, original.month)

    for i in range(first_index - 1, -1, -1):
        day_before = date_utils.add(days[i + 1].time, -1, TimeUnit.DAY)
        days[i] = build_day(day_before, options, reference, clock=clock)

    # 마지막 칸까지 이미 채워졌으면 뒤쪽 padding 없음
    if last_index == len(days) - 1:
        return
    for i in range(last_index + 1, len(days)):
        day_after = date_utils.add(days[i - 1].time, 1, TimeUnit.DAY)
        days[i] = build_day(day_after, options, reference, clock=clock)


def build_week_grid(
    time: Instant,
    options: CalendarOptions,
    *,
    clock: Clock | None = None,
) -> CalendarMonth:
    """time이 속한 표시 주의 7칸 그리드. 다른 달의 날은 time의 달 기준으로 표시."""
    clock = get_clock(clock)
    month = create_original(time)
    start = date_utils.start_of_week(time, options.week_start)
    reference = (month.year, month.month)

    days = tuple(
        build_day(date_utils.add(start, i, TimeUnit.DAY), options, reference, clock=clock)
        for i in range(WEEK_SLOTS)
    )
    original = CalendarOriginal(
        year=month.year,
        month=month.month,
        first_week=month.first_week,
        how_many_days=month.how_many_days,
        time=start,
        date=time,
        last_day=days[-1].time,
    )
    logger.debug("Week grid built: %s", date_utils.format_instant(start))
    return CalendarMonth(days=days, original=original)
