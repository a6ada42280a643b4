"""프로세스 전역 기본 옵션.

두 가지 소스를 가진다:
    1. 환경변수 / .env 파일 (CalendarSettings, CALGRID_ prefix)
    2. 앱 초기화 시 set_default_options()로 한 번 설치하는 레코드

둘 다 비어 있어도 된다. 그 경우 built-in 기본값만 적용된다.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class CalendarSettings(BaseSettings):
    """환경변수에서 읽는 기본 옵션. 지정된 값만 기본값 레이어에 들어간다."""

    model_config = SettingsConfigDict(
        env_prefix="CALGRID_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    week_start: int | None = None
    pick_mode: str | None = None
    display_mode: str | None = None
    show_adjacent_month_day: bool | None = None
    can_backwards_selected: bool | None = None

    # 포맷 패턴
    date_format: str | None = None
    month_format: str | None = None
    year_format: str | None = None

    color: str | None = None

    # 페이지 이동
    step: int | None = None
    weeks: int | None = None
    continuous: bool | None = None

    def as_defaults(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


_default_options: dict[str, Any] | None = None


def set_default_options(options: Mapping[str, Any]) -> None:
    """프로세스 전역 기본 옵션 설치. 앱 초기화 시 한 번 호출한다."""
    global _default_options
    if _default_options is not None:
        logger.warning("Replacing process-wide calendar defaults (%d keys)", len(options))
    _default_options = dict(options)
    logger.debug("Process-wide calendar defaults set: %s", sorted(_default_options))


def get_default_options() -> dict[str, Any]:
    """set_default_options로 설치된 레코드만. 환경변수 레이어는 포함하지 않는다. 없으면 빈 dict."""
    return dict(_default_options) if _default_options else {}


def reset_default_options() -> None:
    """Reset process-wide defaults. For testing only."""
    global _default_options
    _default_options = None
