import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
from sqlalchemy.exc import OperationalError

from services.errors import AppError, PersistenceFailure

logger = logging.getLogger(__name__)


def _now_iso():
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _error_body(code: str, message: str, field=None):
    error = {"code": code, "message": message}
    if field:
        error["field"] = field
    return {
        "error": error,
        "generated_at": _now_iso(),
        "latency_ms": 0,
    }


def _field_path(loc):
    """("body", "subjects", 0, "credits") → "subjects[0].credits" (서비스 계층 표기와 통일)"""
    path = ""
    for part in loc:
        if part == "body" and not path:
            continue
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or None


def add_error_handlers(app: FastAPI):
    # ✅ 도메인 예외 (NotFound / InvalidInput / Conflict / ConcurrencyConflict / PersistenceFailure)
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} 실패: {exc.code} {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.code, exc.message, exc.field),
        )

    # ✅ 요청 본문 형식 오류 (pydantic)
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        field = _field_path(first.get("loc", ()))
        return JSONResponse(
            status_code=422,
            content=_error_body("INVALID_INPUT", first.get("msg", "Invalid request"), field),
        )

    # ✅ DB 연결 실패 등
    @app.exception_handler(OperationalError)
    async def db_error_handler(request: Request, exc: OperationalError):
        logger.error(f"{request.method} {request.url.path} 저장소 오류: {exc}")
        return JSONResponse(
            status_code=PersistenceFailure.status_code,
            content=_error_body(PersistenceFailure.code, "저장소에 접근할 수 없습니다"),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"{request.method} {request.url.path} 처리 중 예상치 못한 오류")
        return JSONResponse(
            status_code=500,
            content=_error_body("INTERNAL_ERROR", str(exc)),
        )
