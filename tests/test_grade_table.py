import pytest

from services.errors import InvalidInput
from services.grade_table import GRADE_POINTS, is_backlog, points


@pytest.mark.parametrize(
    "grade,expected",
    [("O", 10), ("A+", 9), ("A", 8), ("B+", 7), ("B", 6), ("C", 5), ("F", 0), ("Ab", 0)],
)
def test_points_for_known_grades(grade, expected):
    assert points(grade) == expected


def test_table_has_exactly_eight_grades():
    assert len(GRADE_POINTS) == 8


@pytest.mark.parametrize("grade", ["D", "o", "AB", "", None])
def test_unknown_grade_is_rejected_not_zeroed(grade):
    with pytest.raises(InvalidInput) as exc:
        points(grade, field="subjects[2].grade")
    assert exc.value.field == "subjects[2].grade"


def test_only_f_and_ab_are_backlogs():
    assert is_backlog("F")
    assert is_backlog("Ab")
    for grade in ("O", "A+", "A", "B+", "B", "C"):
        assert not is_backlog(grade)
