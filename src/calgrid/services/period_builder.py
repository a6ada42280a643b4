"""여러 페이지(월/주/연) 그리드 생성 및 주 단위 페이지 이동."""

import logging

from calgrid.models import CalendarMonth, Instant, TimeUnit
from calgrid.options import CalendarOptions
from calgrid.services import date_utils
from calgrid.services.clock import get_clock
from calgrid.services.grid_builder import build_month_grid, build_week_grid
from calgrid.services.protocols import Clock

logger = logging.getLogger(__name__)


def months_for_period(
    start: Instant,
    count: int,
    options: CalendarOptions,
    *,
    clock: Clock | None = None,
) -> list[CalendarMonth]:
    """start가 속한 달부터 count개월의 월 그리드."""
    clock = get_clock(clock)
    first = date_utils.start_of_month(start)
    months = [
        build_month_grid(date_utils.add(first, i, TimeUnit.MONTH), options, clock=clock)
        for i in range(count)
    ]
    logger.debug("Built %d month grids from %s", len(months), date_utils.format_instant(first))
    return months


def weeks_for_period(
    start: Instant,
    options: CalendarOptions,
    *,
    clock: Clock | None = None,
) -> list[CalendarMonth]:
    """start가 속한 한 주. 페이지 이동은 next_week_anchor / prev_week_anchor로."""
    return [build_week_grid(start, options, clock=clock)]


def years_for_period(
    start_year: int,
    count: int,
    options: CalendarOptions,
    *,
    clock: Clock | None = None,
) -> list[CalendarMonth]:
    """연도 선택기용: 각 해의 1월 1일 기준 그리드 하나씩."""
    clock = get_clock(clock)
    first = date_utils.from_ymd(start_year, 1, 1)
    return [
        build_month_grid(date_utils.add(first, i, TimeUnit.YEAR), options, clock=clock)
        for i in range(count)
    ]


def _month_key(time: Instant) -> tuple[int, int]:
    dt = date_utils.to_datetime(time)
    return dt.year, dt.month


def next_week_anchor(current: Instant, options: CalendarOptions) -> Instant:
    """options.weeks 주 뒤. continuous가 아니고 달이 바뀌면 새 달 1일로 맞춘다."""
    next_time = date_utils.add(current, options.weeks, TimeUnit.WEEK)
    if _month_key(current) != _month_key(next_time) and not options.continuous:
        next_time = date_utils.set_day(next_time, 1)
    return next_time


def prev_week_anchor(current: Instant, options: CalendarOptions) -> Instant:
    """options.weeks 주 앞. continuous가 아니고 달이 바뀌면:

    - 현재 주에 이번 달 1일이 있으면 → 이전 달 말일
    - 아니면 → 이번 달 1일 (1일이 있는 주)
    """
    back = date_utils.add(current, -options.weeks, TimeUnit.WEEK)
    if _month_key(current) == _month_key(back) or options.continuous:
        return back

    days_into_week = (date_utils.weekday(current) - options.week_start) % 7
    first = date_utils.start_of_month(current)
    if date_utils.day_of_month(current) - days_into_week <= 1:
        return date_utils.add(first, -1, TimeUnit.DAY)
    return first
