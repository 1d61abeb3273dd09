"""
services/semester_processor.py

- 한 학기 과목 목록으로 학기 레코드(SGPA, 학점 합계, 백로그 수)를 계산
- 순수 계산만 수행하고 저장은 호출 측(student_service)이 담당
- 검증은 계산 전에 모두 끝낸다: 하나라도 잘못되면 InvalidInput, 아무 것도 반영되지 않음
"""

from typing import Iterable, List

from schemas.academics import SemesterResult, SubjectResult
from services.errors import InvalidInput
from services.grade_table import is_backlog, points
from utils.rounding import ratio2

MIN_SEMESTER = 1
MAX_SEMESTER = 10


def validate_semester(semester) -> int:
    if isinstance(semester, bool) or not isinstance(semester, int):
        raise InvalidInput(f"학기는 정수여야 합니다: {semester!r}", field="semester")
    if not MIN_SEMESTER <= semester <= MAX_SEMESTER:
        raise InvalidInput(
            f"학기는 {MIN_SEMESTER}~{MAX_SEMESTER} 사이여야 합니다: {semester}", field="semester"
        )
    return semester


def _as_dict(subject) -> dict:
    if hasattr(subject, "model_dump"):
        return subject.model_dump()
    return dict(subject)


def normalize_subject(subject, index: int) -> SubjectResult:
    """과목 1건 검증 후 grade_points를 붙여 반환"""
    sub = _as_dict(subject)
    prefix = f"subjects[{index}]"

    for key in ("subject_name", "subject_code"):
        value = sub.get(key)
        if not isinstance(value, str) or not value.strip():
            raise InvalidInput(f"{key} 값이 비어 있습니다", field=f"{prefix}.{key}")

    credits = sub.get("credits")
    if isinstance(credits, bool) or not isinstance(credits, int) or credits <= 0:
        raise InvalidInput(f"학점은 양의 정수여야 합니다: {credits!r}", field=f"{prefix}.credits")

    grade = sub.get("grade")
    gp = points(grade, field=f"{prefix}.grade")

    marks = sub.get("marks")
    if marks is not None and (
        isinstance(marks, bool) or not isinstance(marks, (int, float)) or not 0 <= marks <= 100
    ):
        raise InvalidInput(f"점수는 0~100 사이여야 합니다: {marks}", field=f"{prefix}.marks")

    return SubjectResult(
        subject_name=sub["subject_name"].strip(),
        subject_code=sub["subject_code"].strip(),
        credits=credits,
        grade=grade,
        grade_points=gp,  # 호출 측 값은 무시하고 항상 재계산
        marks=marks,
    )


def build_semester_record(semester: int, subjects: Iterable) -> SemesterResult:
    semester = validate_semester(semester)
    processed: List[SubjectResult] = [normalize_subject(s, i) for i, s in enumerate(subjects)]

    total_credits = sum(s.credits for s in processed)
    total_weighted = sum(s.grade_points * s.credits for s in processed)
    earned_credits = sum(s.credits for s in processed if s.grade_points > 0)
    backlogs = sum(1 for s in processed if is_backlog(s.grade))

    return SemesterResult(
        semester=semester,
        subjects=processed,
        sgpa=ratio2(total_weighted, total_credits),
        total_credits=total_credits,
        earned_credits=earned_credits,
        backlogs_this_sem=backlogs,
    )
