from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime

from schemas.academics import SemesterResult
from schemas.warnings import WarningOut


# ✅ 입력용 (관리자 학생 등록)
class StudentCreate(BaseModel):
    name: str                                # 학생 이름
    email: str                               # 이메일 (소문자로 저장)
    roll_no: str                             # 학번
    department: str                          # 학과
    program: str                             # 과정
    batch: str                               # 입학 기수
    semester: int = Field(1, ge=1, le=10)    # 현재 학기 (1~10)
    section: str                             # 분반
    fee_pending: bool = False                # 등록금 미납 여부

    @field_validator("name", "roll_no", "department", "program", "batch", "section")
    @classmethod
    def _not_blank(cls, v: str):
        v = v.strip()
        if not v:
            raise ValueError("빈 값은 허용되지 않습니다")
        return v

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, v: str):
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("이메일 형식이 아닙니다")
        return v


# ✅ 전체 출력용 (GET, 상세조회 등)
class Student(BaseModel):
    id: int
    name: str
    email: str
    roll_no: str
    department: str
    program: str
    batch: str
    semester: int
    section: str

    total_classes: int
    attended_classes: int
    attendance_percentage: float

    cgpa: float
    current_backlogs: int
    total_backlogs_ever: int

    is_at_risk: bool
    risk_level: str
    risk_score: int
    fee_pending: bool

    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    academics: List[SemesterResult] = []
    warnings: List[WarningOut] = []

    model_config = ConfigDict(from_attributes=True)


# ✅ 위험 학생 목록용 요약
class AtRiskStudent(BaseModel):
    id: int
    name: str
    roll_no: str
    attendance_percentage: float
    cgpa: float
    current_backlogs: int
    risk_level: str
    risk_score: int
    warnings: List[WarningOut] = []

    model_config = ConfigDict(from_attributes=True)
