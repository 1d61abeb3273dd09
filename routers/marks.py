from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import SessionLocal
from dependencies.security import require_roles
from schemas.academics import MarksUploadRequest
from services import student_service

router = APIRouter(prefix="/marks", tags=["성적 업로드"])

# ==========================================================
# [공통] DB 세션 관리
# ==========================================================
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ✅ [UPLOAD] 학기 성적 업로드 → SGPA/CGPA/백로그/위험도 재계산
# - 같은 학기를 다시 올리면 이전 기록은 통째로 교체
@router.post("/upload")
def upload_marks(
    req: MarksUploadRequest,
    db: Session = Depends(get_db),
    role: str = Depends(require_roles("teacher", "hod")),
):
    result = student_service.upload_semester_marks(
        db,
        student_id=req.student_id,
        semester=req.semester,
        subjects=req.subjects,
        expected_version=req.expected_version,
    )
    return {
        "success": True,
        "data": result.model_dump(),
        "message": "성적 업로드 및 CGPA 갱신 완료",
    }
