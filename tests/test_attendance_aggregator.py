import pytest

from services.attendance_aggregator import apply_attendance, attendance_percentage
from services.errors import InvalidInput


def test_batches_accumulate():
    first = apply_attendance(0, 0, attended_delta=3, total_delta=5)
    assert (first.attended_classes, first.total_classes, first.attendance_percentage) == (3, 5, 60.0)

    second = apply_attendance(first.attended_classes, first.total_classes, attended_delta=2, total_delta=5)
    assert (second.attended_classes, second.total_classes) == (5, 10)
    assert second.attendance_percentage == 50.0


def test_percentage_rounded_to_two_places():
    assert attendance_percentage(2, 3) == 66.67
    assert attendance_percentage(1, 3) == 33.33
    assert attendance_percentage(0, 0) == 0


def test_zero_batch_keeps_totals():
    totals = apply_attendance(4, 8, 0, 0)
    assert totals.attendance_percentage == 50.0


def test_attended_more_than_held_is_rejected():
    with pytest.raises(InvalidInput) as exc:
        apply_attendance(0, 0, attended_delta=6, total_delta=5)
    assert exc.value.field == "attended"


@pytest.mark.parametrize("attended,total,field", [(-1, 5, "attended"), (1, -5, "total"), (1.5, 2, "attended")])
def test_bad_deltas_rejected(attended, total, field):
    with pytest.raises(InvalidInput) as exc:
        apply_attendance(0, 0, attended, total)
    assert exc.value.field == field


def test_corrupt_running_totals_are_not_extended():
    with pytest.raises(InvalidInput):
        apply_attendance(6, 5, 0, 0)
