"""하루(CalendarDay)의 표시/선택 상태 계산."""

from calgrid.models import CalendarDay, Instant
from calgrid.options import CalendarOptions, DayConfig
from calgrid.services import date_utils
from calgrid.services.clock import get_clock
from calgrid.services.protocols import Clock


def find_day_config(time: Instant, options: CalendarOptions) -> DayConfig | None:
    """같은 날짜의 첫 번째 override. 없으면 None."""
    for config in options.days_config:
        if date_utils.is_same_day(time, config.date):
            return config
    return None


def is_disabled(
    time: Instant,
    options: CalendarOptions,
    now: Instant,
    day_config: DayConfig | None = None,
) -> bool:
    """override → 비활성 요일 → 선택 가능 구간 순으로 판정."""
    if day_config is not None and day_config.disable is not None:
        return day_config.disable

    if date_utils.weekday(time) in options.disabled_weekdays:
        return True

    range_start = options.from_ if options.from_ is not None else now
    if options.can_backwards_selected:
        # 하한만 적용, to는 보지 않는다
        return date_utils.is_before_day(time, range_start)

    range_end = options.to if options.to != 0 else now
    return not date_utils.is_between_days(time, range_start, range_end)


def build_day(
    time: Instant,
    options: CalendarOptions,
    reference_month: tuple[int, int] | None = None,
    *,
    clock: Clock | None = None,
) -> CalendarDay:
    """time 하루의 CalendarDay 생성.

    reference_month는 (year, month) 쌍이며, 주어지면 그 달 기준으로
    이전/다음 달 padding 여부를 표시한다.
    """
    now = get_clock(clock).now()
    day_config = find_day_config(time, options)
    dt = date_utils.to_datetime(time)

    if day_config is not None and day_config.title:
        title = day_config.title
    elif options.default_title:
        title = options.default_title
    else:
        title = str(dt.day)

    if day_config is not None and day_config.subtitle:
        subtitle = day_config.subtitle
    elif options.default_subtitle:
        subtitle = options.default_subtitle
    else:
        subtitle = ""

    is_last_month = is_next_month = False
    if reference_month is not None:
        own = (dt.year, dt.month)
        is_last_month = own < reference_month
        is_next_month = own > reference_month

    return CalendarDay(
        time=time,
        is_today=date_utils.is_same_day(now, time),
        title=title,
        subtitle=subtitle,
        selected=False,
        is_last_month=is_last_month,
        is_next_month=is_next_month,
        marked=day_config.marked if day_config is not None else False,
        css_class=day_config.css_class if day_config is not None else "",
        disable=is_disabled(time, options, now, day_config),
        is_first=dt.day == 1,
        is_last=dt.day == date_utils.month_length(dt.year, dt.month),
    )
