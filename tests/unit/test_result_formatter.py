from datetime import datetime

from calgrid.models import OutputType, PickMode, RangeResult
from calgrid.options import resolve_options
from calgrid.services.date_utils import from_ymd
from calgrid.services.day_builder import build_day
from calgrid.services.result_formatter import handle_type, multi_format, wrap_output, wrap_result


def _day(y, m, d, options, clock):
    return build_day(from_ymd(y, m, d), options, clock=clock)


class TestMultiFormat:
    def test_all_representations(self):
        t = from_ymd(2026, 3, 5)
        result = multi_format(t)
        assert result.time == t
        assert result.unix == t // 1000
        assert result.date_obj == datetime(2026, 3, 5)
        assert result.string == "2026-03-05"
        assert (result.year, result.month, result.day) == (2026, 3, 5)

    def test_custom_format(self):
        assert multi_format(from_ymd(2026, 3, 5), "DD.MM.YYYY").string == "05.03.2026"


class TestWrapResult:
    def test_single(self, open_options, clock):
        result = wrap_result([_day(2026, 1, 12, open_options, clock)], PickMode.SINGLE)
        assert result.string == "2026-01-12"

    def test_single_empty(self):
        assert wrap_result([], "single") is None

    def test_range(self, open_options, clock):
        days = [_day(2026, 1, 12, open_options, clock), _day(2026, 1, 14, open_options, clock)]
        result = wrap_result(days, "range")
        assert isinstance(result, RangeResult)
        assert result.from_.string == "2026-01-12"
        assert result.to.string == "2026-01-14"

    def test_range_with_one_day(self, open_options, clock):
        result = wrap_result([_day(2026, 1, 12, open_options, clock)], PickMode.RANGE)
        assert result.from_ == result.to

    def test_range_skips_empty_slots(self, open_options, clock):
        days = [None, _day(2026, 1, 12, open_options, clock)]
        assert wrap_result(days, PickMode.RANGE).from_.string == "2026-01-12"

    def test_multi(self, open_options, clock):
        days = [_day(2026, 1, d, open_options, clock) for d in (3, 1, 2)]
        assert [r.day for r in wrap_result(days, PickMode.MULTI)] == [3, 1, 2]

    def test_multi_empty(self):
        assert wrap_result([], PickMode.MULTI) == []

    def test_unknown_mode_returns_input(self, open_options, clock):
        days = [_day(2026, 1, 12, open_options, clock)]
        assert wrap_result(days, "week") == days


class TestHandleType:
    def test_string(self):
        assert handle_type(from_ymd(2026, 3, 5), OutputType.STRING, "D MMM") == "5 Mar"

    def test_datetime(self):
        assert handle_type(from_ymd(2026, 3, 5), "datetime") == datetime(2026, 3, 5)

    def test_time(self):
        t = from_ymd(2026, 3, 5)
        assert handle_type(t, "time") == t

    def test_object(self):
        value = handle_type(from_ymd(2026, 3, 5) + 3_661_001,"object")
        assert value == {
            "year": 2026,
            "month": 3,
            "day": 5,
            "hour": 1,
            "minute": 1,
            "second": 1,
            "millisecond": 1,
        }


class TestWrapOutput:
    def test_single_uses_output_type(self, clock):
        options = resolve_options({"outputType": "time", "from": "2026-01-01", "to": "2026-12-31"})
        day = _day(2026, 1, 12, options, clock)
        assert wrap_output([day], options) == from_ymd(2026, 1, 12)

    def test_range_needs_both_ends(self, clock):
        options = resolve_options({"pickMode": "range", "from": "2026-01-01", "to": "2026-12-31"})
        day = _day(2026, 1, 12, options, clock)
        assert wrap_output([day], options) is None
        end = _day(2026, 1, 14, options, clock)
        assert wrap_output([day, end], options) == {"from": "2026-01-12", "to": "2026-01-14"}

    def test_range_end_defaults_to_start(self, clock):
        options = resolve_options(
            {
                "pickMode": "range",
                "defaultEndDateToStartDate": True,
                "from": "2026-01-01",
                "to": "2026-12-31",
            }
        )
        day = _day(2026, 1, 12, options, clock)
        assert wrap_output([day], options) == {"from": "2026-01-12", "to": "2026-01-12"}

    def test_multi(self, clock):
        options = resolve_options({"pickMode": "multi", "type": "object"})
        day = _day(2026, 1, 15, options, clock)
        assert wrap_output([day, None], options) == [
            {"year": 2026, "month": 1, "day": 15, "hour": 0, "minute": 0, "second": 0, "millisecond": 0}
        ]

    def test_nothing_selected(self, open_options):
        assert wrap_output([], open_options) is None
