"""월/주 그리드 레이아웃 테스트.

기준 달력 (2026):
    1월 1일 목 / 2월 1일 일 (28일) / 3월 1일 일 / 4월 1일 수 / 12월 1일 화
"""

import pytest

from calgrid.options import resolve_options
from calgrid.services.date_utils import add, from_ymd
from calgrid.services.grid_builder import (
    MONTH_SLOTS,
    build_month_grid,
    build_week_grid,
    create_original,
    first_column,
)

ALL_MONTHS = [(2026, m) for m in range(1, 13)] + [(2024, 2), (2025, 12), (2027, 1)]


def _times(grid):
    return [d.time if d is not None else None for d in grid.days]


class TestOriginal:
    def test_april_2026(self):
        original = create_original(from_ymd(2026, 4, 17))
        assert original.year == 2026
        assert original.month == 4
        assert original.first_week == 3
        assert original.how_many_days == 30
        assert original.time == from_ymd(2026, 4, 1)
        assert original.date == from_ymd(2026, 4, 17)
        assert original.last_day == from_ymd(2026, 4, 30)

    def test_first_column(self):
        assert first_column(3, 0) == 3
        assert first_column(3, 1) == 2
        assert first_column(0, 1) == 6


class TestMonthGridShape:
    @pytest.mark.parametrize("year,month", ALL_MONTHS)
    @pytest.mark.parametrize("week_start", [0, 1])
    @pytest.mark.parametrize("adjacent", [True, False])
    def test_slot_count_is_42(self, year, month, week_start, adjacent, clock):
        options = resolve_options({"weekStart": week_start, "showAdjacentMonthDay": adjacent})
        grid = build_month_grid(from_ymd(year, month, 1), options, clock=clock)
        assert len(grid.days) == MONTH_SLOTS
        assert len(grid.days) % 7 == 0
        assert len(grid.weeks()) == 6

    @pytest.mark.parametrize("year,month", ALL_MONTHS)
    @pytest.mark.parametrize("week_start", [0, 1])
    def test_every_real_day_once(self, year, month, week_start, clock):
        options = resolve_options(
            {"weekStart": week_start, "from": "2026-01-10", "to": "2026-02-20"}
        )
        grid = build_month_grid(from_ymd(year, month, 1), options, clock=clock)
        own = [d for d in grid.real_days() if not d.is_last_month and not d.is_next_month]
        enabled = [d for d in own if not d.disable]
        disabled = [d for d in own if d.disable]
        assert len(enabled) + len(disabled) == grid.original.how_many_days
        assert len({d.time for d in own}) == grid.original.how_many_days

    @pytest.mark.parametrize("year,month", ALL_MONTHS)
    def test_no_adjacent_leaves_empty_slots(self, year, month, clock):
        options = resolve_options({"showAdjacentMonthDay": False})
        grid = build_month_grid(from_ymd(year, month, 1), options, clock=clock)
        assert len(grid.real_days()) == grid.original.how_many_days
        assert all(not d.is_last_month and not d.is_next_month for d in grid.real_days())

    @pytest.mark.parametrize("year,month", ALL_MONTHS)
    def test_adjacent_fills_every_slot_consecutively(self, year, month, open_options, clock):
        grid = build_month_grid(from_ymd(year, month, 1), open_options, clock=clock)
        times = _times(grid)
        assert None not in times
        for prev, cur in zip(times, times[1:]):
            assert add(prev, 1, "day") == cur


class TestAdjacentFill:
    def test_wednesday_start_leading_days(self, open_options, clock):
        grid = build_month_grid(from_ymd(2026, 4, 1), open_options, clock=clock)
        leading = grid.days[:3]
        assert [d.time for d in leading] == [
            from_ymd(2026, 3, 29),
            from_ymd(2026, 3, 30),
            from_ymd(2026, 3, 31),
        ]
        assert all(d.is_last_month for d in leading)
        assert grid.days[3].time == from_ymd(2026, 4, 1)
        assert grid.days[3].is_last_month is False

    def test_wednesday_start_without_adjacent(self, clock):
        options = resolve_options({"showAdjacentMonthDay": False})
        grid = build_month_grid(from_ymd(2026, 4, 1), options, clock=clock)
        assert grid.days[:3] == (None, None, None)
        assert grid.days[3].time == from_ymd(2026, 4, 1)
        assert grid.days[33] is None

    def test_trailing_days_flagged_next_month(self, open_options, clock):
        grid = build_month_grid(from_ymd(2026, 4, 1), open_options, clock=clock)
        # 4월 30일은 slot 32
        assert grid.days[32].time == from_ymd(2026, 4, 30)
        trailing = grid.days[33:]
        assert trailing[0].time == from_ymd(2026, 5, 1)
        assert all(d.is_next_month for d in trailing)

    def test_month_filling_whole_weeks_has_no_leading_padding(self, open_options, clock):
        # 2026-02: 일요일 시작, 28일 → 정확히 4주
        grid = build_month_grid(from_ymd(2026, 2, 1), open_options, clock=clock)
        assert grid.days[0].time == from_ymd(2026, 2, 1)
        assert grid.days[27].time == from_ymd(2026, 2, 28)
        assert grid.days[28].time == from_ymd(2026, 3, 1)
        assert all(d.is_next_month for d in grid.days[28:])
        assert not any(d.is_last_month for d in grid.days)

    def test_january_padding_is_prior_december(self, open_options, clock):
        grid = build_month_grid(from_ymd(2026, 1, 1), open_options, clock=clock)
        assert grid.days[0].time == from_ymd(2025, 12, 28)
        assert all(d.is_last_month for d in grid.days[:4])

    def test_december_padding_is_next_january(self, open_options, clock):
        grid = build_month_grid(from_ymd(2025, 12, 1), open_options, clock=clock)
        assert grid.days[0].time == from_ymd(2025, 11, 30)
        assert grid.days[0].is_last_month is True
        assert grid.days[32].time == from_ymd(2026, 1, 1)
        assert grid.days[32].is_next_month is True


class TestWeekStart:
    def test_monday_start_shifts_one_column(self, open_options, clock):
        monday = resolve_options({"from": "2000-01-01", "to": "2100-12-31", "weekStart": 1})
        sunday_grid = build_month_grid(from_ymd(2026, 4, 1), open_options, clock=clock)
        monday_grid = build_month_grid(from_ymd(2026, 4, 1), monday, clock=clock)
        assert monday_grid.days[2].time == from_ymd(2026, 4, 1)
        for i in range(1, MONTH_SLOTS):
            assert monday_grid.days[i - 1].time == sunday_grid.days[i].time

    def test_first_row_pulls_next_sunday_up(self, clock):
        options = resolve_options({"showAdjacentMonthDay": False})
        monday = resolve_options({"showAdjacentMonthDay": False, "weekStart": 1})
        sunday_grid = build_month_grid(from_ymd(2026, 4, 1), options, clock=clock)
        monday_row = build_month_grid(from_ymd(2026, 4, 1), monday, clock=clock).days[:7]
        # 한 칸씩 당겨지므로 다음 행의 첫 날(4/5 일요일)이 마지막 칸으로 올라온다
        assert monday_row == sunday_grid.days[1:7] + (sunday_grid.days[7],)
        assert monday_row[6].time == from_ymd(2026, 4, 5)

    def test_sunday_first_moves_to_last_column(self, open_options, clock):
        monday = resolve_options({"from": "2000-01-01", "to": "2100-12-31", "weekStart": 1})
        grid = build_month_grid(from_ymd(2026, 2, 1), monday, clock=clock)
        assert grid.days[6].time == from_ymd(2026, 2, 1)
        assert grid.days[0].time == from_ymd(2026, 1, 26)
        assert all(d.is_last_month for d in grid.days[:6])


class TestWeekGrid:
    def test_sunday_week(self, open_options, clock):
        grid = build_week_grid(from_ymd(2026, 1, 15), open_options, clock=clock)
        assert len(grid.days) == 7
        assert grid.days[0].time == from_ymd(2026, 1, 11)
        assert grid.days[6].time == from_ymd(2026, 1, 17)
        assert grid.original.time == from_ymd(2026, 1, 11)
        assert grid.original.date == from_ymd(2026, 1, 15)
        assert grid.original.last_day == from_ymd(2026, 1, 17)

    def test_monday_week(self, clock):
        options = resolve_options({"from": "2000-01-01", "to": "2100-12-31", "weekStart": 1})
        grid = build_week_grid(from_ymd(2026, 1, 15), options, clock=clock)
        assert grid.days[0].time == from_ymd(2026, 1, 12)
        assert grid.days[6].time == from_ymd(2026, 1, 18)

    def test_week_crossing_month(self, open_options, clock):
        grid = build_week_grid(from_ymd(2026, 4, 1), open_options, clock=clock)
        assert [d.is_last_month for d in grid.days] == [True, True, True] + [False] * 4
        assert grid.original.month == 4
        assert grid.days[3].is_first is True

    def test_week_days_carry_today(self, open_options, clock):
        grid = build_week_grid(from_ymd(2026, 1, 15), open_options, clock=clock)
        assert [d.is_today for d in grid.days] == [False] * 4 + [True] + [False] * 2
