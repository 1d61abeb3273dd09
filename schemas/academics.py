from pydantic import BaseModel, ConfigDict, Field, StrictInt
from typing import List, Optional


# ✅ 입력용: 과목 1건 (교사 성적 업로드)
class SubjectIn(BaseModel):
    subject_name: str                        # 과목명
    subject_code: str                        # 과목 코드
    credits: StrictInt                       # 학점 (SGPA 가중치, true/1.0 등은 거부)
    grade: str                               # 성적 등급 (O, A+, A, B+, B, C, F, Ab)
    marks: Optional[float] = None            # 원점수 0~100 (참고용, SGPA 계산에 미사용)

    # grade_points 등 호출 측이 보낸 파생 값은 무시
    model_config = ConfigDict(extra="ignore")


# ✅ 입력용: 학기 성적 업로드 요청
class MarksUploadRequest(BaseModel):
    student_id: int
    semester: StrictInt
    subjects: List[SubjectIn]
    expected_version: Optional[int] = Field(default=None, description="낙관적 잠금용 학생 레코드 버전(선택)")


# ✅ 계산 결과: 과목 1건
class SubjectResult(BaseModel):
    subject_name: str
    subject_code: str
    credits: int
    grade: str
    grade_points: int
    marks: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)


# ✅ 계산 결과: 학기 1건
class SemesterResult(BaseModel):
    semester: int
    subjects: List[SubjectResult] = []
    sgpa: float = 0
    total_credits: int = 0
    earned_credits: int = 0
    backlogs_this_sem: int = 0

    model_config = ConfigDict(from_attributes=True)


# ✅ 누적 집계 결과
class HistorySummary(BaseModel):
    cgpa: float
    current_backlogs: int
    total_backlogs_ever: int


# ✅ 출력용: 업로드 응답 데이터
class MarksUploadResult(BaseModel):
    student: str
    semester: int
    sgpa: float
    cgpa: float
    backlogs_this_sem: int
    current_backlogs: int
    total_backlogs_ever: int
    is_at_risk: bool
    risk_level: str
    risk_score: int
    version: int
