"""캘린더 옵션 모델과 3단계 병합 (built-in < 프로세스 전역 < 호출 지점)."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from calgrid.config import CalendarSettings, get_default_options
from calgrid.exceptions import InvalidOptionsError
from calgrid.models import DisplayMode, Instant, OutputType, PickMode
from calgrid.services import date_utils

logger = logging.getLogger(__name__)

DEFAULT_STEP = 12
DEFAULT_COLOR = "primary"
DEFAULT_WEEKDAYS = ("S", "M", "T", "W", "T", "F", "S")


def _coerce_instant(value: Any) -> Any:
    """datetime/date/ISO 문자열 → Instant. 나머지는 pydantic에 맡긴다."""
    if isinstance(value, (datetime, date)):
        return date_utils.to_instant(value)
    if isinstance(value, str):
        try:
            return date_utils.to_instant(datetime.fromisoformat(value))
        except ValueError:
            return value
    return value


class _Model(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class DayConfig(_Model):
    """특정 하루에 대한 override."""

    date: Instant
    disable: bool | None = None
    title: str | None = None
    subtitle: str | None = Field(
        default=None, validation_alias=AliasChoices("subtitle", "subTitle", "sub_title")
    )
    marked: bool = False
    css_class: str = ""

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, value: Any) -> Any:
        return _coerce_instant(value)


class DateRange(_Model):
    """RANGE 모드의 기존 선택."""

    from_: Instant | None = Field(default=None, alias="from")
    to: Instant | None = None

    @field_validator("from_", "to", mode="before")
    @classmethod
    def coerce_bounds(cls, value: Any) -> Any:
        return _coerce_instant(value)


class CalendarOptions(_Model):
    """병합 및 검증이 끝난 옵션. 다음 설정 변경까지 불변."""

    id: str = ""

    # 선택 가능 구간. from_ None = "지금", to 0 = "지금" (판정 시점에 해석)
    from_: Instant | None = Field(default=None, alias="from")
    to: Instant = 0
    pick_mode: PickMode = PickMode.SINGLE
    can_backwards_selected: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "can_backwards_selected", "canBackwardsSelected", "canSelectBeforeFrom"
        ),
    )
    disabled_weekdays: tuple[int, ...] = Field(
        default=(),
        validation_alias=AliasChoices(
            "disabled_weekdays", "disabledWeekdays", "disable_weeks", "disableWeeks"
        ),
    )
    days_config: tuple[DayConfig, ...] = ()

    # 그리드 레이아웃
    week_start: int = 0
    show_adjacent_month_day: bool = True
    display_mode: DisplayMode = DisplayMode.MONTH
    weeks: int = Field(
        default=1, ge=1, validation_alias=AliasChoices("weeks", "weeksPerPage", "weeks_per_page")
    )
    continuous: bool = Field(
        default=False,
        validation_alias=AliasChoices("continuous", "continuousWeeks", "continuous_weeks"),
    )
    step: int = Field(default=DEFAULT_STEP, ge=1)

    # 표시용 텍스트 (엔진은 해석하지 않음)
    default_title: str = ""
    default_subtitle: str = ""
    title: str = "CALENDAR"
    close_label: str = "CANCEL"
    done_label: str = "DONE"
    clear_label: str | None = None
    close_icon: bool = False
    done_icon: bool = False
    auto_done: bool = False
    show_year_picker: bool = False
    is_save_history: bool = False
    color: str = DEFAULT_COLOR
    css_class: str = ""
    weekdays: tuple[str, ...] = DEFAULT_WEEKDAYS

    # 포맷
    month_format: str = "MMM YYYY"
    year_format: str = "YYYY"
    date_format: str = date_utils.DATE_FORMAT
    output_type: OutputType = Field(
        default=OutputType.STRING,
        validation_alias=AliasChoices("output_type", "outputType", "type"),
    )

    # 기존 선택 (pick_mode에 맞는 하나만 의미 있음)
    default_scroll_to: Instant | None = None
    default_date: Instant | None = None
    default_dates: tuple[Instant, ...] = ()
    default_date_range: DateRange | None = None
    default_end_date_to_start_date: bool = False

    @field_validator("from_", "to", "default_scroll_to", "default_date", mode="before")
    @classmethod
    def coerce_instants(cls, value: Any) -> Any:
        return _coerce_instant(value)

    @field_validator("default_dates", mode="before")
    @classmethod
    def coerce_dates(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [_coerce_instant(v) for v in value]
        return value

    @field_validator("week_start")
    @classmethod
    def check_week_start(cls, value: int) -> int:
        if value not in (0, 1):
            raise ValueError("week_start must be 0 (Sunday) or 1 (Monday)")
        return value

    @field_validator("disabled_weekdays")
    @classmethod
    def check_weekdays(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        bad = [d for d in value if not 0 <= d <= 6]
        if bad:
            raise ValueError(f"weekday index out of range 0-6: {bad}")
        return value

    @field_validator("weekdays")
    @classmethod
    def check_weekday_labels(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if len(value) != 7:
            raise ValueError("weekdays needs exactly 7 labels")
        return value

    def default_selection(self) -> list[Instant]:
        """pick_mode에 해당하는 기존 선택만 반환."""
        match self.pick_mode:
            case PickMode.SINGLE:
                return [self.default_date] if self.default_date is not None else []
            case PickMode.RANGE:
                rng = self.default_date_range
                if rng is None or rng.from_ is None:
                    return []
                return [rng.from_] if rng.to is None else [rng.from_, rng.to]
            case PickMode.MULTI:
                return list(self.default_dates)
        return []

    def scroll_to(self, now: Instant) -> Instant:
        """처음 보여줄 instant: default_scroll_to → from → now."""
        if self.default_scroll_to is not None:
            return self.default_scroll_to
        if self.from_ is not None:
            return self.from_
        return now

    def weekday_labels(self) -> tuple[str, ...]:
        """week_start에 맞춰 회전한 요일 헤더."""
        return self.weekdays[self.week_start :] + self.weekdays[: self.week_start]


def _alias_map() -> dict[str, str]:
    """모든 허용 키 → 필드명."""
    mapping: dict[str, str] = {}
    for name, info in CalendarOptions.model_fields.items():
        mapping[name] = name
        if info.alias:
            mapping[info.alias] = name
        if isinstance(info.validation_alias, AliasChoices):
            for choice in info.validation_alias.choices:
                if isinstance(choice, str):
                    mapping[choice] = name
        elif isinstance(info.validation_alias, str):
            mapping[info.validation_alias] = name
    return mapping


_ALIASES = _alias_map()


def _canonical(layer: Mapping[str, Any] | None) -> dict[str, Any]:
    """키를 필드명으로 정규화하고 None 값(= 생략)은 버린다. 모르는 키도 버린다."""
    if not layer:
        return {}
    result: dict[str, Any] = {}
    for key, value in layer.items():
        name = _ALIASES.get(key)
        if name is None or value is None:
            continue
        result[name] = value
    return result


def _error_field(loc: tuple) -> str:
    """pydantic 에러 위치(alias일 수 있음) → 필드명."""
    if not loc:
        return "options"
    head = _ALIASES.get(str(loc[0]), str(loc[0]))
    return ".".join([head, *(str(p) for p in loc[1:])])


def _as_layer(partial: Mapping[str, Any] | CalendarOptions | None) -> Mapping[str, Any] | None:
    if isinstance(partial, CalendarOptions):
        return partial.model_dump(exclude_unset=True)
    return partial


def resolve_options(
    partial: Mapping[str, Any] | CalendarOptions | None = None,
    *,
    defaults: Mapping[str, Any] | None = None,
) -> CalendarOptions:
    """호출 지점 옵션을 기본값 레이어 위에 병합하여 검증된 CalendarOptions 반환.

    defaults를 주면 프로세스 전역 기본값(환경변수 + set_default_options) 대신 사용한다.
    범위를 벗어난 값은 InvalidOptionsError로 거부한다.
    """
    if defaults is None:
        layers = [CalendarSettings().as_defaults(), get_default_options()]
    else:
        layers = [dict(defaults)]
    layers.append(_as_layer(partial))

    merged: dict[str, Any] = {}
    for layer in layers:
        merged.update(_canonical(layer))

    try:
        options = CalendarOptions.model_validate(merged)
    except ValidationError as e:
        fields = sorted({_error_field(err["loc"]) for err in e.errors()})
        logger.debug("Rejected calendar options: %s", e)
        raise InvalidOptionsError(fields, e) from e

    logger.debug(
        "Options resolved: pick_mode=%s display_mode=%s week_start=%d",
        options.pick_mode.value,
        options.display_mode.value,
        options.week_start,
    )
    return options
