from pydantic import BaseModel

from services.errors import InvalidInput
from utils.rounding import ratio2


class AttendanceTotals(BaseModel):
    attended_classes: int
    total_classes: int
    attendance_percentage: float


def _check_delta(value, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"{field} 값은 정수여야 합니다: {value!r}", field=field)
    if value < 0:
        raise InvalidInput(f"{field} 값은 음수일 수 없습니다: {value}", field=field)
    return value


def attendance_percentage(attended: int, total: int) -> float:
    return ratio2(attended, total, scale=100)


def apply_attendance(attended: int, total: int, attended_delta: int, total_delta: int) -> AttendanceTotals:
    """누적 출석/전체 수업 수에 이번 배치를 더한다 (교체가 아닌 증가)"""
    attended_delta = _check_delta(attended_delta, "attended")
    total_delta = _check_delta(total_delta, "total")
    if attended_delta > total_delta:
        raise InvalidInput(
            f"출석 수({attended_delta})가 수업 수({total_delta})보다 클 수 없습니다", field="attended"
        )

    new_attended = attended + attended_delta
    new_total = total + total_delta
    if new_attended > new_total:
        raise InvalidInput(
            f"누적 출석 수({new_attended})가 누적 수업 수({new_total})를 초과합니다", field="attended"
        )

    return AttendanceTotals(
        attended_classes=new_attended,
        total_classes=new_total,
        attendance_percentage=attendance_percentage(new_attended, new_total),
    )
