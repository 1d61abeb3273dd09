"""
services/student_service.py

학생 레코드 단위의 읽기 → 계산 → 쓰기 흐름
- 성적 업로드: 학기 기록 생성 → 같은 학기 교체 → CGPA/백로그 재계산 → 위험도 상승 → 저장
- 출결 갱신: 누계 증가 → 출석률 재계산 → 저장
- 경고 설정/해제: 경고 기록 추가, 위험도 수동 조정
- 모든 변경은 students.version 비교-교체(CAS)로 보호. 실패 시 ConcurrencyConflict
- 검증/계산은 DB 쓰기 전에 모두 끝나므로 실패해도 부분 반영 없음
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from config.settings import settings
from models.academics import SemesterRecord, SubjectRecord
from models.students import Student as StudentModel
from models.warnings import StudentWarning
from schemas.academics import MarksUploadResult, SemesterResult
from schemas.attendance import AttendanceResult
from schemas.students import StudentCreate
from services.academic_history import aggregate, replace_semester
from services.attendance_aggregator import apply_attendance
from services.errors import Conflict, ConcurrencyConflict, NotFound, PersistenceFailure
from services.risk_classifier import RiskPolicy, RiskState, escalate, override
from services.semester_processor import build_semester_record

logger = logging.getLogger(__name__)


# ==========================================================
# [공통] 조회 / 버전 / 커밋
# ==========================================================
def get_student(db: Session, student_id: int) -> StudentModel:
    student = db.get(StudentModel, student_id)
    if student is None:
        raise NotFound(f"학생을 찾을 수 없습니다: id={student_id}", field="student_id")
    return student


def _check_expected_version(student: StudentModel, expected_version: Optional[int]):
    if expected_version is not None and student.version != expected_version:
        raise ConcurrencyConflict(
            f"학생 레코드가 이미 변경되었습니다 (expected={expected_version}, current={student.version})",
            field="expected_version",
        )


def _claim(db: Session, student: StudentModel):
    """읽었던 버전 그대로일 때만 version+1. 다른 요청이 먼저 썼으면 롤백 후 충돌"""
    loaded = student.version
    try:
        rows = (
            db.query(StudentModel)
            .filter(StudentModel.id == student.id, StudentModel.version == loaded)
            .update({StudentModel.version: StudentModel.version + 1}, synchronize_session=False)
        )
    except OperationalError as e:
        db.rollback()
        raise PersistenceFailure(f"저장소에 접근할 수 없습니다: {e.orig}")

    if rows != 1:
        db.rollback()
        logger.warning(f"동시 수정 충돌: student_id={student.id}, loaded_version={loaded}")
        raise ConcurrencyConflict(f"다른 요청이 학생 레코드를 먼저 수정했습니다: id={student.id}")
    student.version = loaded + 1


def _commit(db: Session):
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Conflict(f"중복되거나 제약 조건에 맞지 않는 데이터입니다: {e.orig}")
    except OperationalError as e:
        db.rollback()
        raise PersistenceFailure(f"저장소에 접근할 수 없습니다: {e.orig}")


def _risk_state(student: StudentModel) -> RiskState:
    return RiskState(
        is_at_risk=student.is_at_risk,
        risk_level=student.risk_level,
        risk_score=student.risk_score,
    )


def _apply_risk(student: StudentModel, state: RiskState):
    student.is_at_risk = state.is_at_risk
    student.risk_level = state.risk_level
    student.risk_score = state.risk_score


def _to_orm(record: SemesterResult) -> SemesterRecord:
    return SemesterRecord(
        semester=record.semester,
        sgpa=record.sgpa,
        total_credits=record.total_credits,
        earned_credits=record.earned_credits,
        backlogs_this_sem=record.backlogs_this_sem,
        subjects=[
            SubjectRecord(position=i, **sub.model_dump())
            for i, sub in enumerate(record.subjects)
        ],
    )


# ==========================================================
# [1단계] 학생 등록 / 조회
# ==========================================================
def register_student(db: Session, data: StudentCreate) -> StudentModel:
    duplicate = (
        db.query(StudentModel)
        .filter((StudentModel.email == data.email) | (StudentModel.roll_no == data.roll_no))
        .first()
    )
    if duplicate is not None:
        field = "email" if duplicate.email == data.email else "roll_no"
        raise Conflict(f"이미 등록된 학생입니다 ({field})", field=field)

    student = StudentModel(**data.model_dump())
    db.add(student)
    _commit(db)
    db.refresh(student)
    logger.info(f"학생 등록: id={student.id}, roll_no={student.roll_no}")
    return student


def list_at_risk(db: Session) -> List[StudentModel]:
    return (
        db.query(StudentModel)
        .filter(StudentModel.is_at_risk.is_(True))
        .order_by(StudentModel.risk_score.desc(), StudentModel.id)
        .all()
    )


# ==========================================================
# [2단계] 학기 성적 업로드
# ==========================================================
def upload_semester_marks(
    db: Session,
    student_id: int,
    semester: int,
    subjects: Iterable,
    expected_version: Optional[int] = None,
    policy: Optional[RiskPolicy] = None,
    backlog_policy: Optional[str] = None,
) -> MarksUploadResult:
    student = get_student(db, student_id)
    _check_expected_version(student, expected_version)

    # ✅ 쓰기 전에 모든 검증/계산 완료
    record = build_semester_record(semester, subjects)
    history = replace_semester(
        [SemesterResult.model_validate(sem) for sem in student.academics], record
    )
    summary = aggregate(history, record, backlog_policy or settings.BACKLOG_POLICY)
    risk = escalate(_risk_state(student), record.backlogs_this_sem, record.sgpa, policy)

    _claim(db, student)

    # ✅ 같은 학기 기록은 삭제 후 새로 추가 (유니크 제약 때문에 삭제를 먼저 flush)
    for existing in [sem for sem in student.academics if sem.semester == record.semester]:
        student.academics.remove(existing)
    db.flush()
    student.academics.append(_to_orm(record))

    student.cgpa = summary.cgpa
    student.current_backlogs = summary.current_backlogs
    student.total_backlogs_ever = summary.total_backlogs_ever
    _apply_risk(student, risk)
    _commit(db)

    logger.info(
        f"성적 업로드 완료: student_id={student_id}, semester={record.semester}, "
        f"sgpa={record.sgpa}, cgpa={summary.cgpa}, backlogs={record.backlogs_this_sem}"
    )
    return MarksUploadResult(
        student=student.name,
        semester=record.semester,
        sgpa=record.sgpa,
        cgpa=student.cgpa,
        backlogs_this_sem=record.backlogs_this_sem,
        current_backlogs=student.current_backlogs,
        total_backlogs_ever=student.total_backlogs_ever,
        is_at_risk=student.is_at_risk,
        risk_level=student.risk_level,
        risk_score=student.risk_score,
        version=student.version,
    )


# ==========================================================
# [3단계] 출결 누계 갱신
# ==========================================================
def update_attendance(
    db: Session,
    student_id: int,
    attended: int,
    total: int,
    expected_version: Optional[int] = None,
) -> AttendanceResult:
    student = get_student(db, student_id)
    _check_expected_version(student, expected_version)

    totals = apply_attendance(student.attended_classes, student.total_classes, attended, total)

    _claim(db, student)
    student.attended_classes = totals.attended_classes
    student.total_classes = totals.total_classes
    student.attendance_percentage = totals.attendance_percentage
    _commit(db)

    logger.info(
        f"출결 갱신: student_id={student_id}, +{attended}/{total} → "
        f"{totals.attended_classes}/{totals.total_classes} ({totals.attendance_percentage}%)"
    )
    return AttendanceResult(
        student_id=student_id,
        attended_classes=student.attended_classes,
        total_classes=student.total_classes,
        attendance_percentage=student.attendance_percentage,
        version=student.version,
    )


# ==========================================================
# [4단계] 경고 설정/해제 (수동 조정)
# ==========================================================
def set_warning(
    db: Session,
    student_id: int,
    reason: Optional[str] = None,
    is_at_risk: Optional[bool] = None,
    risk_score: Optional[int] = None,
    given_by: Optional[str] = None,
    expected_version: Optional[int] = None,
    policy: Optional[RiskPolicy] = None,
) -> StudentModel:
    student = get_student(db, student_id)
    _check_expected_version(student, expected_version)

    reason = reason.strip() if reason else None
    risk = override(_risk_state(student), is_at_risk=is_at_risk, risk_score=risk_score, policy=policy)

    _claim(db, student)
    if reason:
        student.warnings.append(StudentWarning(reason=reason, given_by=given_by))
    _apply_risk(student, risk)
    _commit(db)

    logger.info(
        f"경고/위험도 수동 조정: student_id={student_id}, reason={reason!r}, "
        f"is_at_risk={student.is_at_risk}, level={student.risk_level}, score={student.risk_score}"
    )
    return student
