import os

import pytest

from calgrid.config import CalendarSettings, reset_default_options
from calgrid.options import CalendarOptions, resolve_options
from calgrid.services.clock import FixedClock
from calgrid.services.date_utils import from_ymd

HOUR = 3600 * 1000


@pytest.fixture(autouse=True)
def _use_test_env(monkeypatch):
    """모든 테스트에서 .env 대신 .env.test를 사용하고 CALGRID_ 환경변수를 비운다."""
    monkeypatch.setattr(
        CalendarSettings,
        "model_config",
        {**CalendarSettings.model_config, "env_file": ".env.test"},
    )
    for key in list(os.environ):
        if key.startswith("CALGRID_"):
            monkeypatch.delenv(key)


@pytest.fixture(autouse=True)
def _reset_process_defaults():
    """프로세스 전역 기본 옵션이 테스트 간에 새지 않도록."""
    reset_default_options()
    yield
    reset_default_options()


@pytest.fixture
def now() -> int:
    """고정된 '지금': 2026-01-15 (목) 12:00 로컬."""
    return from_ymd(2026, 1, 15) + 12 * HOUR


@pytest.fixture
def clock(now: int) -> FixedClock:
    return FixedClock(now)


@pytest.fixture
def open_options() -> CalendarOptions:
    """모든 날짜가 선택 가능한 옵션 (2000-01-01 ~ 2100-12-31)."""
    return resolve_options({"from": from_ymd(2000, 1, 1), "to": from_ymd(2100, 12, 31)})
