"""엔진 밖에서 관리하는 선택 상태.

그리드(CalendarMonth)는 불변 조회 결과로 남고, 선택은 Instant(자정 기준)의
순서 있는 집합으로 따로 보관한다. 화면에 그릴 때 apply_selection으로
selected 플래그가 반영된 새 그리드를 만든다.
"""

import logging
from collections.abc import Iterable
from dataclasses import replace

from calgrid.models import CalendarDay, CalendarMonth, Instant, PickMode
from calgrid.options import CalendarOptions
from calgrid.services import date_utils
from calgrid.services.day_builder import build_day
from calgrid.services.protocols import Clock

logger = logging.getLogger(__name__)


class SelectionState:
    def __init__(
        self,
        pick_mode: PickMode | str,
        instants: Iterable[Instant] = (),
        *,
        default_end_date_to_start_date: bool = False,
    ) -> None:
        self._pick_mode = PickMode(pick_mode)
        self._end_defaults_to_start = default_end_date_to_start_date
        days = [date_utils.start_of_day(t) for t in instants]
        match self._pick_mode:
            case PickMode.SINGLE:
                self._instants = days[:1]
            case PickMode.RANGE:
                self._instants = sorted(days[:2])
            case _:
                self._instants = list(dict.fromkeys(days))

    @classmethod
    def from_options(cls, options: CalendarOptions) -> "SelectionState":
        """pick_mode에 맞는 기존 선택으로 초기화. 없으면 빈 상태."""
        return cls(
            options.pick_mode,
            options.default_selection(),
            default_end_date_to_start_date=options.default_end_date_to_start_date,
        )

    @property
    def pick_mode(self) -> PickMode:
        return self._pick_mode

    @property
    def instants(self) -> list[Instant]:
        return list(self._instants)

    def __len__(self) -> int:
        return len(self._instants)

    def select(self, day: CalendarDay) -> bool:
        """사용자가 day를 눌렀을 때. 비활성 날짜는 무시하고 False."""
        if day.disable:
            logger.debug("Ignored click on disabled day %s", date_utils.format_instant(day.time))
            return False

        time = date_utils.start_of_day(day.time)
        match self._pick_mode:
            case PickMode.SINGLE:
                self._instants = [time]
            case PickMode.RANGE:
                self._select_range(time)
            case PickMode.MULTI:
                if time in self._instants:
                    self._instants.remove(time)
                else:
                    self._instants.append(time)
        logger.debug("Selection (%s): %s", self._pick_mode.value, self._instants)
        return True

    def _select_range(self, time: Instant) -> None:
        if not self._instants:
            self._instants = [time]
        elif len(self._instants) == 1:
            start = self._instants[0]
            self._instants = [start, time] if time >= start else [time, start]
        else:
            start, end = self._instants
            if time < start:
                self._instants = [time, end]
            elif time > end:
                self._instants = [start, time]
            else:
                self._instants = [time]

    def is_selected(self, time: Instant) -> bool:
        return date_utils.start_of_day(time) in self._instants

    def in_range(self, time: Instant) -> bool:
        """RANGE 모드에서 양 끝 사이(양 끝 포함)인지."""
        if self._pick_mode is not PickMode.RANGE or len(self._instants) < 2:
            return False
        return date_utils.is_between_days(time, self._instants[0], self._instants[1])

    def is_complete(self) -> bool:
        """결과를 내보낼 수 있는 상태인지."""
        match self._pick_mode:
            case PickMode.SINGLE:
                return len(self._instants) == 1
            case PickMode.RANGE:
                if len(self._instants) == 1:
                    return self._end_defaults_to_start
                return len(self._instants) == 2
            case _:
                return bool(self._instants)

    def clear(self) -> None:
        self._instants = []


def apply_selection(grid: CalendarMonth, state: SelectionState) -> CalendarMonth:
    """selected 플래그를 반영한 새 그리드. 원본 그리드는 그대로."""
    days = tuple(
        replace(day, selected=state.is_selected(day.time)) if day is not None else None
        for day in grid.days
    )
    return CalendarMonth(days=days, original=grid.original)


def selected_days(
    state: SelectionState,
    options: CalendarOptions,
    *,
    clock: Clock | None = None,
) -> list[CalendarDay]:
    """선택된 instant들을 wrap_result에 넘길 CalendarDay로."""
    return [replace(build_day(t, options, clock=clock), selected=True) for t in state.instants]
