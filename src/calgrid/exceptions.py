"""calgrid 예외 계층.

계층 구조:
    CalgridError
    ├── InvalidOptionsError  (Option resolver: 옵션 값이 허용 범위를 벗어남)
    └── DateParseError       (Date adapter: 문자열이 패턴과 맞지 않음)

그 외의 경우(override 미일치, 빈 default selection 등)는 예외가 아니라
기본값 대입으로 처리한다.
"""


class CalgridError(Exception):
    """calgrid의 모든 예외의 기반 클래스."""


class InvalidOptionsError(CalgridError):
    """옵션 병합 결과가 유효하지 않음. resolve_options가 발생시킨다."""

    def __init__(self, errors: list[str], cause: Exception | None = None):
        self.errors = errors
        self.cause = cause
        super().__init__(f"Invalid calendar options: {', '.join(errors)}")


class DateParseError(CalgridError, ValueError):
    """문자열 → Instant 변환 실패."""

    def __init__(self, value: str, pattern: str):
        self.value = value
        self.pattern = pattern
        super().__init__(f"'{value}' does not match date pattern '{pattern}'")
