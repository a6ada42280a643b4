"""calgrid CLI (Typer). 그리드를 텍스트 또는 JSON으로 출력."""

import json
import logging
from pathlib import Path
from typing import Any

import typer

from calgrid.exceptions import CalgridError
from calgrid.logging_config import setup_file_logging, setup_logging
from calgrid.models import CalendarMonth, to_dict
from calgrid.options import CalendarOptions, resolve_options
from calgrid.services import date_utils
from calgrid.services.clock import SystemClock
from calgrid.services.period_builder import months_for_period, weeks_for_period, years_for_period
from calgrid.services.protocols import Clock

logger = logging.getLogger(__name__)

app = typer.Typer(help="Calendar date-grid generator")

CELL_WIDTH = 5


def _echo(msg: str = "", err: bool = False) -> None:
    typer.echo(msg, err=err)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable DEBUG logging"),
    log_dir: Path = typer.Option(None, "--log-dir", help="Also write DEBUG logs here"),
) -> None:
    """Calendar date-grid generator."""
    level = logging.DEBUG if verbose else logging.INFO
    setup_logging(level)
    if log_dir is not None:
        setup_file_logging(log_dir)


def _get_clock() -> Clock:
    return SystemClock()


def _handle_error(e: CalgridError) -> None:
    _echo(f"Error: {e}", err=True)
    raise typer.Exit(code=1)


def _parse_date(value: str, pattern: str) -> int:
    try:
        return date_utils.parse_instant(value, pattern)
    except CalgridError as e:
        _handle_error(e)


def _build_options(
    week_start: int | None,
    date_from: str | None,
    date_to: str | None,
    backwards: bool,
    disabled_weekdays: list[int] | None,
    no_adjacent: bool,
    **extra: Any,
) -> CalendarOptions:
    partial: dict[str, Any] = dict(extra)
    partial["week_start"] = week_start
    if date_from:
        partial["from"] = _parse_date(date_from, date_utils.DATE_FORMAT)
    if date_to:
        partial["to"] = _parse_date(date_to, date_utils.DATE_FORMAT)
    if backwards:
        partial["can_backwards_selected"] = True
    if disabled_weekdays:
        partial["disabled_weekdays"] = disabled_weekdays
    if no_adjacent:
        partial["show_adjacent_month_day"] = False
    try:
        return resolve_options(partial)
    except CalgridError as e:
        _handle_error(e)


def _cell(day) -> str:
    if day is None:
        return " " * CELL_WIDTH
    text = day.title
    if day.is_last_month or day.is_next_month:
        text = f"[{text}]"
    elif day.disable:
        text = f"({text})"
    if day.is_today:
        text += "*"
    return text.rjust(CELL_WIDTH)


def _render(grid: CalendarMonth, options: CalendarOptions, heading: str) -> list[str]:
    lines = [heading]
    lines.append("".join(label.rjust(CELL_WIDTH) for label in options.weekday_labels()))
    for row in grid.weeks():
        if all(day is None for day in row):
            continue
        lines.append("".join(_cell(day) for day in row).rstrip())
    return lines


def _output(grids: list[CalendarMonth], options: CalendarOptions, as_json: bool, heading) -> None:
    if as_json:
        _echo(json.dumps([to_dict(g) for g in grids], ensure_ascii=False, indent=2))
        return
    for i, grid in enumerate(grids):
        if i:
            _echo()
        for line in _render(grid, options, heading(grid)):
            _echo(line)


# 공통 옵션
WEEK_START = typer.Option(None, "--week-start", help="0 = Sunday, 1 = Monday")
DATE_FROM = typer.Option(None, "--from", help="Selectable from (YYYY-MM-DD)")
DATE_TO = typer.Option(None, "--to", help="Selectable to (YYYY-MM-DD)")
BACKWARDS = typer.Option(False, "--backwards", help="Only enforce the lower bound")
DISABLE_WEEKDAY = typer.Option(None, "--disable-weekday", help="Weekday to disable (0 = Sunday)")
NO_ADJACENT = typer.Option(False, "--no-adjacent", help="Leave neighbouring-month cells empty")
AS_JSON = typer.Option(False, "--json", help="Print grids as JSON")


@app.command()
def month(
    value: str = typer.Argument(None, help="Month to show (YYYY-MM), default: this month"),
    count: int = typer.Option(1, "--count", "-n", help="Number of consecutive months"),
    week_start: int = WEEK_START,
    date_from: str = DATE_FROM,
    date_to: str = DATE_TO,
    backwards: bool = BACKWARDS,
    disable_weekday: list[int] = DISABLE_WEEKDAY,
    no_adjacent: bool = NO_ADJACENT,
    as_json: bool = AS_JSON,
) -> None:
    """Show month grids."""
    clock = _get_clock()
    options = _build_options(
        week_start, date_from, date_to, backwards, disable_weekday, no_adjacent
    )
    start = _parse_date(value, "YYYY-MM") if value else clock.now()
    grids = months_for_period(start, count, options, clock=clock)
    _output(
        grids,
        options,
        as_json,
        lambda g: date_utils.format_instant(g.original.time, options.month_format),
    )


@app.command()
def week(
    value: str = typer.Argument(None, help="Any day of the week (YYYY-MM-DD)"),
    week_start: int = WEEK_START,
    date_from: str = DATE_FROM,
    date_to: str = DATE_TO,
    backwards: bool = BACKWARDS,
    disable_weekday: list[int] = DISABLE_WEEKDAY,
    as_json: bool = AS_JSON,
) -> None:
    """Show the week containing a day."""
    clock = _get_clock()
    options = _build_options(
        week_start, date_from, date_to, backwards, disable_weekday, False, display_mode="week"
    )
    start = _parse_date(value, date_utils.DATE_FORMAT) if value else clock.now()
    grids = weeks_for_period(start, options, clock=clock)
    _output(
        grids,
        options,
        as_json,
        lambda g: f"Week of {date_utils.format_instant(g.original.time, options.date_format)}",
    )


@app.command()
def years(
    start_year: int = typer.Argument(..., help="First year"),
    count: int = typer.Option(1, "--count", "-n", help="Number of years"),
    week_start: int = WEEK_START,
    as_json: bool = AS_JSON,
) -> None:
    """Show the January grid of consecutive years (year picker)."""
    clock = _get_clock()
    options = _build_options(week_start, None, None, False, None, False)
    grids = years_for_period(start_year, count, options, clock=clock)
    _output(
        grids,
        options,
        as_json,
        lambda g: date_utils.format_instant(g.original.time, options.year_format),
    )


@app.command("options")
def show_options(
    week_start: int = WEEK_START,
    date_from: str = DATE_FROM,
    date_to: str = DATE_TO,
    backwards: bool = BACKWARDS,
    disable_weekday: list[int] = DISABLE_WEEKDAY,
    no_adjacent: bool = NO_ADJACENT,
) -> None:
    """Print the resolved options (built-in < environment < flags) as JSON."""
    options = _build_options(
        week_start, date_from, date_to, backwards, disable_weekday, no_adjacent
    )
    _echo(json.dumps(options.model_dump(mode="json"), ensure_ascii=False, indent=2))
