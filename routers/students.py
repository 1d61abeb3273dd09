from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import SessionLocal
from dependencies.security import require_roles
from schemas.attendance import AttendanceUpdate
from schemas.students import AtRiskStudent, Student as StudentSchema, StudentCreate
from schemas.warnings import WarningUpdate
from services import student_service

router = APIRouter(prefix="/students", tags=["학생 정보"])

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ==========================================================
# [1단계] 등록 / 조회
# ==========================================================

# ✅ [CREATE] 학생 등록 (관리자)
@router.post("/", status_code=201)
def create_student(
    student: StudentCreate,
    db: Session = Depends(get_db),
    role: str = Depends(require_roles("admin")),
):
    db_student = student_service.register_student(db, student)
    return {
        "success": True,
        "data": StudentSchema.model_validate(db_student).model_dump(),
        "message": "학생 정보가 성공적으로 추가되었습니다",
    }


# ✅ [RISK] 위험 학생 목록 (위험 점수 높은 순)
# - /{student_id} 보다 먼저 선언해야 경로 충돌이 없음
@router.get("/risk")
def read_at_risk_students(
    db: Session = Depends(get_db),
    role: str = Depends(require_roles("teacher", "hod", "admin")),
):
    records = student_service.list_at_risk(db)
    return {
        "success": True,
        "count": len(records),
        "data": [AtRiskStudent.model_validate(r).model_dump() for r in records],
    }


# ✅ [READ] 학생 상세 (학기 기록/경고 포함)
@router.get("/{student_id}")
def read_student(
    student_id: int,
    db: Session = Depends(get_db),
    role: str = Depends(require_roles("teacher", "hod", "admin")),
):
    db_student = student_service.get_student(db, student_id)
    return {"success": True, "data": StudentSchema.model_validate(db_student).model_dump()}


# ==========================================================
# [2단계] 출결 / 경고
# ==========================================================

# ✅ [ATTENDANCE] 출결 누계 갱신 (예: attended=3, total=5)
@router.patch("/{student_id}/attendance")
def update_attendance(
    student_id: int,
    body: AttendanceUpdate,
    db: Session = Depends(get_db),
    role: str = Depends(require_roles("teacher", "hod")),
):
    result = student_service.update_attendance(
        db,
        student_id,
        attended=body.attended,
        total=body.total,
        expected_version=body.expected_version,
    )
    return {
        "success": True,
        "message": "Attendance updated",
        "attendance_percentage": result.attendance_percentage,
        "data": result.model_dump(),
    }


# ✅ [WARNING] 경고 기록 추가 / 위험 여부 수동 설정·해제
@router.patch("/{student_id}/warning")
def update_warning(
    student_id: int,
    body: WarningUpdate,
    db: Session = Depends(get_db),
    role: str = Depends(require_roles("teacher", "hod")),
):
    db_student = student_service.set_warning(
        db,
        student_id,
        reason=body.reason,
        is_at_risk=body.is_at_risk,
        risk_score=body.risk_score,
        given_by=role,
        expected_version=body.expected_version,
    )
    return {"success": True, "student": StudentSchema.model_validate(db_student).model_dump()}
