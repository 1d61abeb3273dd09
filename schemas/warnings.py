from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


# ✅ 경고 설정/해제 요청 (교사 수동 조정)
class WarningUpdate(BaseModel):
    reason: Optional[str] = None             # 경고 사유 (있으면 경고 기록 추가)
    is_at_risk: Optional[bool] = None        # 지정 시 위험 여부/등급 직접 덮어쓰기
    risk_score: Optional[int] = None         # 지정 시 위험 점수 재설정 (0~100)
    expected_version: Optional[int] = None


# ✅ 경고 기록 출력용
class WarningOut(BaseModel):
    id: int
    date: Optional[datetime] = None
    reason: str
    given_by: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
