"""Instant(ms) 기반 달력 연산 및 패턴 포맷팅.

모든 연산은 로컬 벽시계 기준이다. 월/연 단위 연산은 relativedelta로 처리하여
짧은 달에서는 말일로 clamp된다 (1/31 + 1개월 → 2월 말일).
"""

import calendar
import re
from datetime import date, datetime, time, timedelta

from dateutil.relativedelta import relativedelta

from calgrid.exceptions import DateParseError
from calgrid.models import Instant, TimeUnit

DATE_FORMAT = "YYYY-MM-DD"

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]
MONTH_ABBR = [name[:3] for name in MONTH_NAMES]

# 0 = Sunday
WEEKDAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
WEEKDAY_ABBR = [name[:3] for name in WEEKDAY_NAMES]
WEEKDAY_MIN = [name[:2] for name in WEEKDAY_NAMES]

# 긴 토큰이 먼저 오도록 정렬되어 있어야 한다.
_TOKEN_RE = re.compile(
    r"\[[^\]]*\]|YYYY|yyyy|YY|yy|MMMM|MMM|MM|M|DD|D|dddd|ddd|dd|d|HH|H|hh|h|mm|m|ss|s|SSS|A|a|X|x"
)


# ── 변환 ──


def to_datetime(instant: Instant) -> datetime:
    """Instant → naive 로컬 datetime."""
    return datetime.fromtimestamp(instant // 1000) + timedelta(milliseconds=instant % 1000)


def to_instant(value: datetime | date | Instant) -> Instant:
    """datetime/date/Instant → Instant. naive 값은 로컬 시간으로 해석."""
    if isinstance(value, datetime):
        whole = int(value.replace(microsecond=0).timestamp())
        return whole * 1000 + value.microsecond // 1000
    if isinstance(value, date):
        return to_instant(datetime.combine(value, time()))
    return int(value)


def from_ymd(year: int, month: int, day: int = 1) -> Instant:
    """로컬 자정 기준 Instant."""
    return to_instant(datetime(year, month, day))


def coerce_instant(value, pattern: str = DATE_FORMAT) -> Instant:
    """UI에서 넘어온 값(문자열/datetime/date/숫자) → Instant."""
    if isinstance(value, bool):
        raise DateParseError(str(value), pattern)
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, (datetime, date)):
        return to_instant(value)
    if isinstance(value, str):
        return parse_instant(value, pattern)
    raise DateParseError(repr(value), pattern)


# ── 산술 ──


def _unit(unit: TimeUnit | str) -> TimeUnit:
    if isinstance(unit, TimeUnit):
        return unit
    name = unit.lower()
    if not name.endswith("s"):
        name += "s"
    return TimeUnit(name)


def add(instant: Instant, amount: int, unit: TimeUnit | str = TimeUnit.DAY) -> Instant:
    """달력 단위로 amount만큼 이동 (음수면 과거로)."""
    delta = relativedelta(**{_unit(unit).value: amount})
    return to_instant(to_datetime(instant) + delta)


def subtract(instant: Instant, amount: int, unit: TimeUnit | str = TimeUnit.DAY) -> Instant:
    return add(instant, -amount, unit)


def start_of_day(instant: Instant) -> Instant:
    return to_instant(to_datetime(instant).date())


def start_of_month(instant: Instant) -> Instant:
    dt = to_datetime(instant)
    return from_ymd(dt.year, dt.month, 1)


def start_of_week(instant: Instant, week_start: int = 0) -> Instant:
    """instant가 속한 표시 주의 첫 날 (week_start 0 = Sunday, 1 = Monday)."""
    offset = (weekday(instant) - week_start) % 7
    return add(start_of_day(instant), -offset, TimeUnit.DAY)


def set_day(instant: Instant, day: int) -> Instant:
    """같은 달 안에서 일(day)만 바꾼다. 말일을 넘으면 말일로 clamp."""
    dt = to_datetime(instant)
    day = min(day, month_length(dt.year, dt.month))
    return to_instant(dt.replace(day=day))


def set_month(instant: Instant, month: int) -> Instant:
    """월(1-based)만 바꾼다. 일은 clamp."""
    dt = to_datetime(instant)
    return to_instant(dt + relativedelta(month=month))


def set_year(instant: Instant, year: int) -> Instant:
    dt = to_datetime(instant)
    return to_instant(dt + relativedelta(year=year))


# ── 필드 추출 ──


def weekday(instant: Instant) -> int:
    """요일 (0 = Sunday ... 6 = Saturday)."""
    return (to_datetime(instant).weekday() + 1) % 7


def day_of_month(instant: Instant) -> int:
    return to_datetime(instant).day


def month_of(instant: Instant) -> int:
    """월 (1-based)."""
    return to_datetime(instant).month


def year_of(instant: Instant) -> int:
    return to_datetime(instant).year


def month_length(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def days_in_month(instant: Instant) -> int:
    dt = to_datetime(instant)
    return month_length(dt.year, dt.month)


# ── 비교 (달력 일 단위) ──


def is_same_day(a: Instant, b: Instant) -> bool:
    return to_datetime(a).date() == to_datetime(b).date()


def is_before_day(a: Instant, b: Instant) -> bool:
    """a의 날짜가 b의 날짜보다 엄격히 앞선다."""
    return to_datetime(a).date() < to_datetime(b).date()


def is_between_days(instant: Instant, start: Instant, end: Instant) -> bool:
    """[start, end] 구간 포함 여부 (일 단위, 양 끝 포함)."""
    day = to_datetime(instant).date()
    return to_datetime(start).date() <= day <= to_datetime(end).date()


# ── 포맷팅 ──


def _format_token(token: str, dt: datetime, instant: Instant) -> str:
    if token.startswith("["):
        return token[1:-1]
    match token:
        case "YYYY" | "yyyy":
            return f"{dt.year:04d}"
        case "YY" | "yy":
            return f"{dt.year % 100:02d}"
        case "MMMM":
            return MONTH_NAMES[dt.month - 1]
        case "MMM":
            return MONTH_ABBR[dt.month - 1]
        case "MM":
            return f"{dt.month:02d}"
        case "M":
            return str(dt.month)
        case "DD":
            return f"{dt.day:02d}"
        case "D":
            return str(dt.day)
        case "dddd":
            return WEEKDAY_NAMES[(dt.weekday() + 1) % 7]
        case "ddd":
            return WEEKDAY_ABBR[(dt.weekday() + 1) % 7]
        case "dd":
            return WEEKDAY_MIN[(dt.weekday() + 1) % 7]
        case "d":
            return str((dt.weekday() + 1) % 7)
        case "HH":
            return f"{dt.hour:02d}"
        case "H":
            return str(dt.hour)
        case "hh":
            return f"{dt.hour % 12 or 12:02d}"
        case "h":
            return str(dt.hour % 12 or 12)
        case "mm":
            return f"{dt.minute:02d}"
        case "m":
            return str(dt.minute)
        case "ss":
            return f"{dt.second:02d}"
        case "s":
            return str(dt.second)
        case "SSS":
            return f"{dt.microsecond // 1000:03d}"
        case "A":
            return "PM" if dt.hour >= 12 else "AM"
        case "a":
            return "pm" if dt.hour >= 12 else "am"
        case "X":
            return str(instant // 1000)
        case "x":
            return str(instant)
    return token


def format_instant(instant: Instant, pattern: str = DATE_FORMAT) -> str:
    """패턴 문자열로 포맷. 인식하지 못한 문자는 그대로 통과한다."""
    dt = to_datetime(instant)
    return _TOKEN_RE.sub(lambda m: _format_token(m.group(0), dt, instant), pattern)


# ── 파싱 ──

_NAME_RE = "[A-Za-z]+"

# token → (정규식, 필드명). 필드명이 None이면 매칭만 하고 버린다.
_PARSERS: dict[str, tuple[str, str | None]] = {
    "YYYY": (r"\d{4}", "year"),
    "yyyy": (r"\d{4}", "year"),
    "YY": (r"\d{2}", "year2"),
    "yy": (r"\d{2}", "year2"),
    "MMMM": (_NAME_RE, "month_name"),
    "MMM": (_NAME_RE, "month_name"),
    "MM": (r"\d{1,2}", "month"),
    "M": (r"\d{1,2}", "month"),
    "DD": (r"\d{1,2}", "day"),
    "D": (r"\d{1,2}", "day"),
    "dddd": (_NAME_RE, None),
    "ddd": (_NAME_RE, None),
    "dd": (_NAME_RE, None),
    "d": (r"\d", None),
    "HH": (r"\d{1,2}", "hour"),
    "H": (r"\d{1,2}", "hour"),
    "hh": (r"\d{1,2}", "hour12"),
    "h": (r"\d{1,2}", "hour12"),
    "mm": (r"\d{1,2}", "minute"),
    "m": (r"\d{1,2}", "minute"),
    "ss": (r"\d{1,2}", "second"),
    "s": (r"\d{1,2}", "second"),
    "SSS": (r"\d{1,3}", "millisecond"),
    "A": (r"[AaPp][Mm]", "meridiem"),
    "a": (r"[AaPp][Mm]", "meridiem"),
    "X": (r"-?\d+", "unix"),
    "x": (r"-?\d+", "ms"),
}


def _compile_pattern(pattern: str) -> tuple[re.Pattern, list[str | None]]:
    parts: list[str] = []
    fields: list[str | None] = []
    pos = 0
    for m in _TOKEN_RE.finditer(pattern):
        parts.append(re.escape(pattern[pos : m.start()]))
        token = m.group(0)
        if token.startswith("["):
            parts.append(re.escape(token[1:-1]))
        else:
            regex, name = _PARSERS[token]
            parts.append(f"({regex})")
            fields.append(name)
        pos = m.end()
    parts.append(re.escape(pattern[pos:]))
    return re.compile("".join(parts)), fields


def _month_from_name(name: str) -> int:
    key = name[:3].lower()
    for i, abbr in enumerate(MONTH_ABBR):
        if abbr.lower() == key:
            return i + 1
    raise ValueError(f"unknown month name: {name}")


def parse_instant(text: str, pattern: str = DATE_FORMAT) -> Instant:
    """패턴에 맞는 문자열 → Instant. 빠진 필드는 1970-01-01 00:00:00 기준으로 채운다."""
    regex, fields = _compile_pattern(pattern)
    match = regex.fullmatch(text.strip())
    if not match:
        raise DateParseError(text, pattern)

    values: dict[str, str] = {}
    for name, raw in zip(fields, match.groups()):
        if name is not None:
            values[name] = raw

    if "ms" in values:
        return int(values["ms"])
    if "unix" in values:
        return int(values["unix"]) * 1000

    try:
        year = 1970
        if "year" in values:
            year = int(values["year"])
        elif "year2" in values:
            short = int(values["year2"])
            year = 1900 + short if short > 68 else 2000 + short

        month = int(values["month"]) if "month" in values else 1
        if "month_name" in values:
            month = _month_from_name(values["month_name"])

        hour = int(values.get("hour", 0))
        if "hour12" in values:
            hour = int(values["hour12"]) % 12
            if values.get("meridiem", "am").lower() == "pm":
                hour += 12

        dt = datetime(
            year,
            month,
            int(values.get("day", 1)),
            hour,
            int(values.get("minute", 0)),
            int(values.get("second", 0)),
            int(values.get("millisecond", 0)) * 1000,
        )
    except ValueError as e:
        raise DateParseError(text, pattern) from e
    return to_instant(dt)
