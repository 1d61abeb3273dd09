"""
services/academic_history.py

- 학생의 전체 학기 기록으로 CGPA, 현재 백로그, 누적 백로그를 다시 계산
- CGPA는 항상 전체 이력에서 처음부터 계산 (증분 갱신 없음 → 재업로드 시 자동 보정)
- current_backlogs 정책
  1) latest     : 방금 업로드한 학기의 backlogs_this_sem
  2) cumulative : 과목 코드별 가장 최근 응시 결과가 F/Ab 인 과목 수
"""

from typing import Iterable, List

from schemas.academics import HistorySummary, SemesterResult
from services.grade_table import is_backlog
from utils.rounding import ratio2

BACKLOG_POLICIES = ("latest", "cumulative")


def replace_semester(academics: Iterable[SemesterResult], record: SemesterResult) -> List[SemesterResult]:
    """같은 학기 기록은 통째로 교체 (병합하지 않음)"""
    kept = [sem for sem in academics if sem.semester != record.semester]
    kept.append(record)
    return sorted(kept, key=lambda sem: sem.semester)


def compute_cgpa(academics: Iterable[SemesterResult]) -> float:
    # sgpa > 0 인 학기만 이수 학기로 본다
    completed = [sem for sem in academics if sem.sgpa > 0]
    total_grade_points = sum(sem.sgpa * sem.total_credits for sem in completed)
    total_credits = sum(sem.total_credits for sem in completed)
    return ratio2(total_grade_points, total_credits)


def outstanding_backlogs(academics: Iterable[SemesterResult]) -> int:
    latest_attempt = {}
    for sem in sorted(academics, key=lambda s: s.semester):
        for sub in sem.subjects:
            latest_attempt[sub.subject_code] = sub.grade
    return sum(1 for grade in latest_attempt.values() if is_backlog(grade))


def aggregate(academics: Iterable[SemesterResult], latest: SemesterResult, policy: str = "latest") -> HistorySummary:
    academics = list(academics)
    if policy not in BACKLOG_POLICIES:
        raise ValueError(f"unknown backlog policy: {policy}")

    if policy == "cumulative":
        current = outstanding_backlogs(academics)
    else:
        current = latest.backlogs_this_sem

    return HistorySummary(
        cgpa=compute_cgpa(academics),
        current_backlogs=current,
        total_backlogs_ever=sum(sem.backlogs_this_sem for sem in academics),
    )
