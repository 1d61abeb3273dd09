"""
services/errors.py

- 서비스 계층에서 발생시키는 도메인 예외 모음
- middlewares/error_handler.py 에서 code/status_code 그대로 JSON 에러 응답으로 변환
"""

from typing import Optional


class AppError(Exception):
    """모든 도메인 예외의 공통 부모"""
    code = "APP_ERROR"
    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field  # 어떤 입력 필드가 문제인지 (예: subjects[1].grade)


class NotFound(AppError):
    code = "NOT_FOUND"
    status_code = 404


class InvalidInput(AppError):
    code = "INVALID_INPUT"
    status_code = 422


class Conflict(AppError):
    """중복 등록 등 (이메일/학번 중복)"""
    code = "CONFLICT"
    status_code = 409


class ConcurrencyConflict(AppError):
    """버전 비교 실패. 호출 측에서 전체 요청을 다시 시도하면 된다."""
    code = "CONCURRENCY_CONFLICT"
    status_code = 409


class PersistenceFailure(AppError):
    code = "PERSISTENCE_FAILURE"
    status_code = 503
