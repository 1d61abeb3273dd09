from typing import Optional, Annotated
from fastapi import Header, HTTPException
from config.settings import settings
import hmac

AuthHeader = Annotated[Optional[str], Header(alias="Authorization")]

# ✅ 역할 → 설정 토큰 이름
ROLE_TOKENS = {
    "admin": "ADMIN_API_TOKEN",
    "teacher": "TEACHER_API_TOKEN",
    "hod": "HOD_API_TOKEN",
}


def _unauthorized(detail: str):
    return HTTPException(
        status_code=401,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_role(token: str) -> Optional[str]:
    """토큰과 일치하는 역할 반환 (설정이 비어 있는 역할은 건너뜀)"""
    for role, setting_name in ROLE_TOKENS.items():
        expected = getattr(settings, setting_name, "")
        # 타이밍 안전 비교
        if expected and hmac.compare_digest(token.encode(), expected.encode()):
            return role
    return None


def require_roles(*roles: str):
    """허용 역할 중 하나의 Bearer 토큰을 요구하는 의존성 생성"""

    def dependency(authorization: AuthHeader = None) -> str:
        if not authorization:
            raise _unauthorized("Missing Authorization header")

        # "Bearer <token>" 파싱
        try:
            scheme, token = authorization.split(" ", 1)
        except ValueError:
            raise _unauthorized("Invalid Authorization header format")

        if scheme.lower() != "bearer":
            raise _unauthorized("Invalid auth scheme")

        role = resolve_role(token.strip())
        if role is None:
            raise _unauthorized("Invalid token")
        if role not in roles:
            raise HTTPException(status_code=403, detail=f"Role '{role}' is not allowed")
        return role

    return dependency
