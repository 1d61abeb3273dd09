from pydantic import BaseModel, StrictInt
from typing import Optional


# ✅ 출결 누계 갱신 요청 (예: 5회 수업 중 3회 출석)
class AttendanceUpdate(BaseModel):
    attended: StrictInt                      # 이번 배치 출석 수
    total: StrictInt                         # 이번 배치 수업 수
    expected_version: Optional[int] = None


# ✅ 출결 갱신 결과
class AttendanceResult(BaseModel):
    student_id: int
    attended_classes: int
    total_classes: int
    attendance_percentage: float
    version: int
