"""Calendar date-grid engine."""

from calgrid.models import (
    CalendarDay,
    CalendarMonth,
    CalendarOriginal,
    CalendarResult,
    DisplayMode,
    OutputType,
    PickMode,
    RangeResult,
)
from calgrid.options import CalendarOptions, DayConfig, resolve_options
from calgrid.services.day_builder import build_day
from calgrid.services.grid_builder import build_month_grid, build_week_grid
from calgrid.services.period_builder import months_for_period, weeks_for_period, years_for_period
from calgrid.services.result_formatter import wrap_result

__all__ = [
    "CalendarDay",
    "CalendarMonth",
    "CalendarOptions",
    "CalendarOriginal",
    "CalendarResult",
    "DayConfig",
    "DisplayMode",
    "OutputType",
    "PickMode",
    "RangeResult",
    "build_day",
    "build_month_grid",
    "build_week_grid",
    "months_for_period",
    "resolve_options",
    "weeks_for_period",
    "wrap_result",
    "years_for_period",
]
