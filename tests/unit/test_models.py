from datetime import datetime

import pytest

from calgrid.models import (
    CalendarDay,
    CalendarView,
    DisplayMode,
    OutputType,
    PageChange,
    PickMode,
    TimeUnit,
    to_dict,
)
from calgrid.options import resolve_options
from calgrid.services.date_utils import from_ymd
from calgrid.services.day_builder import build_day
from calgrid.services.grid_builder import build_month_grid
from calgrid.services.result_formatter import multi_format, wrap_result


class TestEnums:
    def test_values_match_wire_names(self):
        assert [m.value for m in PickMode] == ["single", "range", "multi"]
        assert [m.value for m in DisplayMode] == ["month", "week"]
        assert [m.value for m in OutputType] == ["string", "datetime", "time", "object"]
        assert [m.value for m in CalendarView] == ["days", "month", "year"]
        assert TimeUnit("months") is TimeUnit.MONTH

    def test_str_enum_compares_to_string(self):
        assert PickMode.RANGE == "range"


class TestCalendarDay:
    def test_defaults(self):
        day = CalendarDay(time=0, is_today=False, title="1", subtitle="")
        assert day.selected is False
        assert day.disable is False
        assert day.css_class == ""

    def test_frozen(self):
        day = CalendarDay(time=0, is_today=False, title="1", subtitle="")
        with pytest.raises(AttributeError):
            day.selected = True


class TestCalendarMonth:
    def test_weeks_split_rows(self, open_options, clock):
        grid = build_month_grid(from_ymd(2026, 4, 1), open_options, clock=clock)
        rows = grid.weeks()
        assert len(rows) == 6
        assert all(len(row) == 7 for row in rows)
        assert rows[0][3].time == from_ymd(2026, 4, 1)


class TestToDict:
    def test_month_grid(self, clock):
        grid = build_month_grid(
            from_ymd(2026, 4, 1), resolve_options({"showAdjacentMonthDay": False}), clock=clock
        )
        data = to_dict(grid)
        assert data["original"]["month"] == 4
        assert len(data["days"]) == 42
        assert data["days"][0] is None
        assert data["days"][3]["title"] == "1"

    def test_datetime_as_iso(self):
        result = multi_format(from_ymd(2026, 3, 5))
        data = to_dict(result)
        assert data["date_obj"] == datetime(2026, 3, 5).isoformat()
        assert data["string"] == "2026-03-05"

    def test_trailing_underscore_stripped(self, open_options, clock):
        day = build_day(from_ymd(2026, 3, 5), open_options, clock=clock)
        data = to_dict(wrap_result([day], PickMode.RANGE))
        assert set(data) == {"from", "to"}

    def test_page_change_ignores_page_in_equality(self):
        a = PageChange(old=multi_format(0), new=multi_format(0), page=None)
        b = PageChange(old=multi_format(0), new=multi_format(0), page="other")
        assert a == b
