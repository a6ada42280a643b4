"""UI 레이어가 쓰는 엔진 진입점 묶음."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from calgrid.models import (
    CalendarDay,
    CalendarMonth,
    CalendarOriginal,
    CalendarResult,
    DisplayMode,
    Instant,
    PickMode,
)
from calgrid.options import DEFAULT_STEP, CalendarOptions, resolve_options
from calgrid.services import date_utils
from calgrid.services.clock import get_clock
from calgrid.services.day_builder import build_day
from calgrid.services.grid_builder import build_month_grid, build_week_grid, create_original
from calgrid.services.period_builder import months_for_period, weeks_for_period, years_for_period
from calgrid.services.protocols import Clock
from calgrid.services.result_formatter import multi_format, wrap_result

logger = logging.getLogger(__name__)


class CalendarService:
    """defaults가 주어지면 프로세스 전역 기본값 대신 그 레코드를 기본값 레이어로 쓴다."""

    DEFAULT_STEP = DEFAULT_STEP

    def __init__(
        self,
        defaults: Mapping[str, Any] | None = None,
        *,
        clock: Clock | None = None,
    ) -> None:
        self._defaults = dict(defaults) if defaults is not None else None
        self._clock = get_clock(clock)

    @property
    def clock(self) -> Clock:
        return self._clock

    def safe_opt(self, partial: Mapping[str, Any] | None = None) -> CalendarOptions:
        return resolve_options(partial, defaults=self._defaults)

    resolve_options = safe_opt

    def create_original_calendar(self, time: Instant) -> CalendarOriginal:
        return create_original(time)

    def create_calendar_day(
        self,
        time: Instant,
        options: CalendarOptions,
        reference_month: tuple[int, int] | None = None,
    ) -> CalendarDay:
        return build_day(time, options, reference_month, clock=self._clock)

    def create_month(self, time: Instant, options: CalendarOptions) -> CalendarMonth:
        return build_month_grid(time, options, clock=self._clock)

    def create_week(self, time: Instant, options: CalendarOptions) -> CalendarMonth:
        return build_week_grid(time, options, clock=self._clock)

    def create_months_by_period(
        self, start: Instant, count: int, options: CalendarOptions
    ) -> list[CalendarMonth]:
        return months_for_period(start, count, options, clock=self._clock)

    def create_weeks_by_period(self, start: Instant, options: CalendarOptions) -> list[CalendarMonth]:
        return weeks_for_period(start, options, clock=self._clock)

    def create_years_by_period(
        self, start_year: int, count: int, options: CalendarOptions
    ) -> list[CalendarMonth]:
        return years_for_period(start_year, count, options, clock=self._clock)

    def create_initial_page(self, options: CalendarOptions) -> list[CalendarMonth]:
        """첫 화면: week 모드면 한 주, 아니면 scroll 대상 달부터 options.step개월."""
        start = options.scroll_to(self._clock.now())
        if options.display_mode is DisplayMode.WEEK:
            return self.create_weeks_by_period(start, options)
        return self.create_months_by_period(start, options.step, options)

    def wrap_result(
        self,
        days: Sequence[CalendarDay | None],
        pick_mode: PickMode | str,
        date_format: str = date_utils.DATE_FORMAT,
    ):
        return wrap_result(days, pick_mode, date_format)

    def multi_format(self, time: Instant) -> CalendarResult:
        return multi_format(time)
