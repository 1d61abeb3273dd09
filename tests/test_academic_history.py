import pytest

from schemas.academics import SemesterResult, SubjectResult
from services.academic_history import aggregate, compute_cgpa, outstanding_backlogs, replace_semester
from services.semester_processor import build_semester_record


def sem(number, sgpa, credits, backlogs=0):
    return SemesterResult(semester=number, sgpa=sgpa, total_credits=credits, backlogs_this_sem=backlogs)


def sub(code, grade, credits=4):
    return {"subject_name": code, "subject_code": code, "credits": credits, "grade": grade}


def test_cgpa_weighted_by_semester_credits():
    # (8*20 + 7*22) / 42 = 7.476...
    assert compute_cgpa([sem(1, 8.0, 20), sem(2, 7.0, 22)]) == 7.48


def test_cgpa_skips_semesters_with_zero_sgpa():
    history = [sem(1, 8.0, 20), sem(2, 0, 18, backlogs=5), sem(3, 6.0, 20)]
    assert compute_cgpa(history) == 7.0


def test_cgpa_is_zero_without_completed_semesters():
    assert compute_cgpa([]) == 0
    assert compute_cgpa([sem(1, 0, 20, backlogs=4)]) == 0


def test_cgpa_recomputation_is_idempotent():
    history = [sem(1, 8.25, 21), sem(2, 6.9, 19), sem(3, 7.33, 24)]
    first = compute_cgpa(history)
    assert compute_cgpa(history) == first
    assert compute_cgpa(list(reversed(history))) == first


def test_replace_semester_drops_previous_record_for_same_semester():
    old = build_semester_record(3, [sub("CS301", "O"), sub("CS302", "A")])
    new = build_semester_record(3, [sub("EE301", "C")])
    history = replace_semester([sem(1, 8.0, 20), old, sem(2, 7.0, 22)], new)

    assert [s.semester for s in history] == [1, 2, 3]
    third = history[-1]
    assert [s.subject_code for s in third.subjects] == ["EE301"]
    assert third.sgpa == 5.0


def test_latest_policy_uses_only_uploaded_semester():
    first = build_semester_record(1, [sub("MA101", "F"), sub("PH101", "F")])
    second = build_semester_record(2, [sub("MA201", "A"), sub("PH201", "B")])
    history = replace_semester([first], second)

    summary = aggregate(history, second, policy="latest")
    assert summary.current_backlogs == 0
    assert summary.total_backlogs_ever == 2


def test_cumulative_policy_counts_uncleared_subjects():
    first = build_semester_record(1, [sub("MA101", "F"), sub("PH101", "A")])
    second = build_semester_record(2, [sub("MA101", "B"), sub("CS201", "Ab")])
    history = replace_semester([first], second)

    summary = aggregate(history, second, policy="cumulative")
    assert summary.current_backlogs == 1  # MA101 cleared, CS201 outstanding
    assert summary.total_backlogs_ever == 2
    assert outstanding_backlogs(history) == 1


def test_cumulative_policy_uses_latest_attempt_by_semester_order():
    later = SemesterResult(
        semester=4,
        subjects=[SubjectResult(subject_name="X", subject_code="X1", credits=3, grade="F", grade_points=0)],
        backlogs_this_sem=1,
    )
    earlier = SemesterResult(
        semester=2,
        sgpa=8.0,
        total_credits=3,
        subjects=[SubjectResult(subject_name="X", subject_code="X1", credits=3, grade="A", grade_points=8)],
    )
    assert outstanding_backlogs([later, earlier]) == 1


def test_unknown_backlog_policy_rejected():
    record = build_semester_record(1, [sub("MA101", "A")])
    with pytest.raises(ValueError):
        aggregate([record], record, policy="sum")
