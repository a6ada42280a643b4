"""현재 페이지와 화면(days/month/year)을 들고 다니는 페이지 이동기.

UI 이벤트 대신 PageChange 값을 반환한다. 이동이 없으면 None.
"""

from __future__ import annotations

import logging
from datetime import MAXYEAR, MINYEAR

from calgrid.models import CalendarMonth, CalendarView, DisplayMode, Instant, PageChange, TimeUnit
from calgrid.options import CalendarOptions
from calgrid.services import date_utils
from calgrid.services.clock import get_clock
from calgrid.services.grid_builder import build_month_grid, build_week_grid
from calgrid.services.period_builder import next_week_anchor, prev_week_anchor, years_for_period
from calgrid.services.protocols import Clock
from calgrid.services.result_formatter import multi_format

logger = logging.getLogger(__name__)

# 1년 1월 그리드는 앞쪽 padding(0년 12월)을 만들 수 없다
FIRST_PICKER_YEAR = MINYEAR + 1


def _month_key(time: Instant) -> tuple[int, int]:
    return date_utils.year_of(time), date_utils.month_of(time)


class CalendarNavigator:
    def __init__(
        self,
        options: CalendarOptions,
        *,
        start: Instant | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._options = options
        self._clock = get_clock(clock)
        self.view = CalendarView.DAYS
        self.year_step = 0
        if start is None:
            start = options.scroll_to(self._clock.now())
        self.page = self._create(start)

    @property
    def options(self) -> CalendarOptions:
        return self._options

    @property
    def is_week_mode(self) -> bool:
        return self._options.display_mode is DisplayMode.WEEK

    def _create(self, time: Instant) -> CalendarMonth:
        if self.is_week_mode:
            return build_week_grid(time, self._options, clock=self._clock)
        return build_month_grid(time, self._options, clock=self._clock)

    def _move(self, old_time: Instant, new_time: Instant, page: CalendarMonth) -> PageChange:
        self.page = page
        change = PageChange(
            old=multi_format(old_time, self._options.date_format),
            new=multi_format(page.original.date, self._options.date_format),
            month_changed=_month_key(old_time) != _month_key(new_time),
            page=page,
        )
        logger.debug("Page moved: %s → %s", change.old.string, change.new.string)
        return change

    # ── 화면별 이동 ──

    def next(self) -> PageChange | None:
        if self.view is CalendarView.DAYS:
            return self.next_week() if self.is_week_mode else self.next_month()
        if self.view is CalendarView.MONTH:
            return self.next_year()
        if self._year_page_start(self.year_step + 1) <= MAXYEAR:
            self.year_step += 1
        return None

    def prev(self) -> PageChange | None:
        if self.view is CalendarView.DAYS:
            return self.prev_week() if self.is_week_mode else self.prev_month()
        if self.view is CalendarView.MONTH:
            return self.prev_year()
        if self._year_page_start(self.year_step - 1) + self._options.step > FIRST_PICKER_YEAR:
            self.year_step -= 1
        return None

    def next_month(self) -> PageChange:
        old = self.page.original.time
        new = date_utils.add(old, 1, TimeUnit.MONTH)
        return self._move(old, new, build_month_grid(new, self._options, clock=self._clock))

    def prev_month(self) -> PageChange:
        old = self.page.original.time
        new = date_utils.add(old, -1, TimeUnit.MONTH)
        return self._move(old, new, build_month_grid(new, self._options, clock=self._clock))

    def next_week(self) -> PageChange:
        old = self.page.original.date
        new = next_week_anchor(old, self._options)
        return self._move(old, new, build_week_grid(new, self._options, clock=self._clock))

    def prev_week(self) -> PageChange:
        old = self.page.original.date
        new = prev_week_anchor(old, self._options)
        return self._move(old, new, build_week_grid(new, self._options, clock=self._clock))

    def next_year(self) -> PageChange:
        old = self.page.original.time
        new = date_utils.add(old, 1, TimeUnit.YEAR)
        return self._move(old, new, self._create(new))

    def prev_year(self) -> PageChange:
        old = self.page.original.time
        new = date_utils.add(old, -1, TimeUnit.YEAR)
        return self._move(old, new, self._create(new))

    def swipe(self, delta_x: float) -> PageChange | None:
        """왼쪽으로 밀면(delta_x < 0) 다음 달, 오른쪽이면 이전 달."""
        if delta_x < 0 and self.can_next():
            return self.next_month()
        if delta_x >= 0 and self.can_prev():
            return self.prev_month()
        return None

    # ── 경계 ──

    def can_next(self) -> bool:
        """to가 있으면 페이지 마지막 날이 to 이전일 때만."""
        if not self._options.to or self.view is not CalendarView.DAYS:
            return True
        return self.page.original.last_day < self._options.to

    def can_prev(self) -> bool:
        """from이 있으면 페이지 첫 날이 from 이후일 때만."""
        if self._options.from_ is None or self.view is not CalendarView.DAYS:
            return True
        return self.page.original.time > self._options.from_

    # ── 직접 선택 ──

    def set_view_date(self, value) -> CalendarMonth:
        """문자열(date_format), datetime, date, Instant 중 하나로 페이지 이동."""
        time = date_utils.coerce_instant(value, self._options.date_format)
        self.page = self._create(time)
        return self.page

    def select_month(self, month: int) -> PageChange:
        """월 선택기에서 month(1-based)를 고름 → days 화면."""
        self.view = CalendarView.DAYS
        old = self.page.original.time
        new = date_utils.set_month(old, month)
        return self._move(old, new, self._create(new))

    def select_year(self, year: int) -> PageChange:
        """연도 선택기에서 year를 고름 → month 화면."""
        self.view = CalendarView.MONTH
        old = self.page.original.time
        new = date_utils.set_year(old, year)
        return self._move(old, new, build_month_grid(new, self._options, clock=self._clock))

    def switch_view(self) -> CalendarView:
        """days → (year | month) → month → days."""
        if self.view is CalendarView.DAYS:
            self.view = CalendarView.YEAR if self._options.show_year_picker else CalendarView.MONTH
        elif self.view is CalendarView.YEAR:
            self.view = CalendarView.MONTH
        else:
            self.view = CalendarView.DAYS
        return self.view

    # ── 표시 ──

    def month_label(self) -> str:
        if not self._options.month_format:
            return ""
        return date_utils.format_instant(self.page.original.time, self._options.month_format)

    def year_page(self) -> list[CalendarMonth]:
        """연도 선택기 한 페이지 (options.step 개의 해, year_step만큼 이동)."""
        first = self._year_page_start(self.year_step)
        start_year = max(FIRST_PICKER_YEAR, first)
        end_year = min(MAXYEAR, first + self._options.step - 1)
        count = end_year - start_year + 1
        return years_for_period(start_year, count, self._options, clock=self._clock)

    def _year_page_start(self, year_step: int) -> int:
        step = self._options.step
        year = self.page.original.year
        return year - year % step + year_step * step
