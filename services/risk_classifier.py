"""
services/risk_classifier.py

학업 위험도 상태 머신 (두 주체)
- 자동 상승(escalate): 새 학기 성적이 처리될 때만 호출. 위험도를 올리기만 하고 절대 내리지 않음
- 수동 조정(override): 교사가 경고를 해제/설정할 때 호출. 위험도를 내릴 수 있는 유일한 경로
"""

import logging
from typing import Literal, Optional

from pydantic import BaseModel

from config.settings import settings

logger = logging.getLogger(__name__)

RiskLevel = Literal["Low", "Medium", "High", "Critical"]
RISK_LEVELS = ("Low", "Medium", "High", "Critical")


class RiskPolicy(BaseModel):
    sgpa_threshold: float = 5.0
    critical_sgpa: float = 4.0
    critical_backlogs: int = 3
    score_step: int = 25
    score_max: int = 100

    @classmethod
    def from_settings(cls) -> "RiskPolicy":
        return cls(
            sgpa_threshold=settings.RISK_SGPA_THRESHOLD,
            critical_sgpa=settings.RISK_CRITICAL_SGPA,
            critical_backlogs=settings.RISK_CRITICAL_BACKLOGS,
            score_step=settings.RISK_SCORE_STEP,
            score_max=settings.RISK_SCORE_MAX,
        )


class RiskState(BaseModel):
    is_at_risk: bool = False
    risk_level: RiskLevel = "Low"
    risk_score: int = 0


def is_triggered(backlogs_this_sem: int, sgpa: float, policy: RiskPolicy) -> bool:
    return backlogs_this_sem > 0 or sgpa < policy.sgpa_threshold


def escalate(state: RiskState, backlogs_this_sem: int, sgpa: float, policy: Optional[RiskPolicy] = None) -> RiskState:
    """트리거 조건 미충족 시 상태를 그대로 돌려준다 (자동 하향 없음)"""
    policy = policy or RiskPolicy.from_settings()
    if not is_triggered(backlogs_this_sem, sgpa, policy):
        return state

    critical = backlogs_this_sem >= policy.critical_backlogs or sgpa < policy.critical_sgpa
    level = "Critical" if critical else "High"
    # 이미 더 높은 등급이면 유지
    if RISK_LEVELS.index(state.risk_level) > RISK_LEVELS.index(level):
        level = state.risk_level

    new_state = RiskState(
        is_at_risk=True,
        risk_level=level,
        risk_score=min(policy.score_max, state.risk_score + policy.score_step),
    )
    logger.info(
        f"위험도 상승: backlogs={backlogs_this_sem}, sgpa={sgpa}, "
        f"{state.risk_level}/{state.risk_score} → {new_state.risk_level}/{new_state.risk_score}"
    )
    return new_state


def override(
    state: RiskState,
    is_at_risk: Optional[bool] = None,
    risk_score: Optional[int] = None,
    policy: Optional[RiskPolicy] = None,
) -> RiskState:
    """교사 수동 조정: is_at_risk 설정 시 High, 해제 시 Low. risk_score는 지정된 경우에만 재설정"""
    policy = policy or RiskPolicy.from_settings()
    new_state = state.model_copy()

    if is_at_risk is not None:
        new_state.is_at_risk = is_at_risk
        new_state.risk_level = "High" if is_at_risk else "Low"

    if risk_score is not None:
        new_state.risk_score = max(0, min(policy.score_max, risk_score))

    return new_state
