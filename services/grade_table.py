from typing import Optional

from services.errors import InvalidInput

# ✅ 등급 → 평점 (10점 만점)
GRADE_POINTS = {
    "O": 10,
    "A+": 9,
    "A": 8,
    "B+": 7,
    "B": 6,
    "C": 5,
    "F": 0,
    "Ab": 0,
}

# ✅ 재수강 대상(백로그) 등급
BACKLOG_GRADES = frozenset({"F", "Ab"})


def points(grade: str, field: Optional[str] = None) -> int:
    """등급의 평점 조회. 표에 없는 등급은 0점 처리하지 않고 InvalidInput."""
    try:
        return GRADE_POINTS[grade]
    except (KeyError, TypeError):
        allowed = ", ".join(GRADE_POINTS)
        raise InvalidInput(f"알 수 없는 성적 등급입니다: {grade!r} (허용: {allowed})", field=field or "grade")


def is_backlog(grade: str) -> bool:
    return grade in BACKLOG_GRADES
