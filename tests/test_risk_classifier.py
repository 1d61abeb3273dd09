import pytest

from services.risk_classifier import RiskPolicy, RiskState, escalate, is_triggered, override

POLICY = RiskPolicy()


def test_good_semester_leaves_state_unchanged():
    state = RiskState(is_at_risk=True, risk_level="Critical", risk_score=50)
    assert escalate(state, backlogs_this_sem=0, sgpa=9.1, policy=POLICY) == state


def test_clean_student_stays_low():
    state = escalate(RiskState(), backlogs_this_sem=0, sgpa=7.43, policy=POLICY)
    assert state == RiskState(is_at_risk=False, risk_level="Low", risk_score=0)


@pytest.mark.parametrize(
    "backlogs,sgpa,level",
    [
        (1, 6.5, "High"),
        (0, 4.5, "High"),
        (0, 4.0, "High"),
        (2, 5.5, "High"),
        (3, 6.0, "Critical"),
        (0, 3.43, "Critical"),
        (1, 3.99, "Critical"),
    ],
)
def test_trigger_sets_level_and_adds_score(backlogs, sgpa, level):
    state = escalate(RiskState(risk_score=10), backlogs_this_sem=backlogs, sgpa=sgpa, policy=POLICY)
    assert state.is_at_risk is True
    assert state.risk_level == level
    assert state.risk_score == 35


def test_sgpa_exactly_at_threshold_does_not_trigger():
    assert not is_triggered(0, 5.0, POLICY)
    assert is_triggered(0, 4.99, POLICY)


def test_score_is_clamped_at_100():
    state = RiskState(is_at_risk=True, risk_level="High", risk_score=90)
    assert escalate(state, 1, 6.0, policy=POLICY).risk_score == 100
    assert escalate(RiskState(risk_score=100), 1, 6.0, policy=POLICY).risk_score == 100


def test_score_never_decreases_across_events():
    state = RiskState()
    scores = []
    for backlogs, sgpa in [(1, 6.0), (0, 8.0), (0, 3.0), (0, 9.5), (4, 2.0), (2, 4.5), (0, 7.0)]:
        state = escalate(state, backlogs, sgpa, policy=POLICY)
        scores.append(state.risk_score)
    assert scores == sorted(scores)
    assert scores[-1] == 100


def test_escalation_keeps_higher_existing_level():
    state = RiskState(is_at_risk=True, risk_level="Critical", risk_score=25)
    state = escalate(state, backlogs_this_sem=1, sgpa=6.0, policy=POLICY)
    assert state.risk_level == "Critical"
    assert state.risk_score == 50


def test_custom_policy_thresholds():
    strict = RiskPolicy(sgpa_threshold=6.0, critical_sgpa=5.0, critical_backlogs=2, score_step=10, score_max=30)
    state = escalate(RiskState(risk_score=25), backlogs_this_sem=2, sgpa=5.5, policy=strict)
    assert state.risk_level == "Critical"
    assert state.risk_score == 30


def test_manual_clear_is_the_only_downgrade():
    state = RiskState(is_at_risk=True, risk_level="Critical", risk_score=75)
    cleared = override(state, is_at_risk=False, policy=POLICY)
    assert cleared.is_at_risk is False
    assert cleared.risk_level == "Low"
    assert cleared.risk_score == 75
    # 원래 상태는 바뀌지 않음
    assert state.risk_level == "Critical"


def test_manual_set_marks_high():
    state = override(RiskState(), is_at_risk=True, policy=POLICY)
    assert state == RiskState(is_at_risk=True, risk_level="High", risk_score=0)


def test_manual_score_reset_is_clamped():
    state = RiskState(is_at_risk=True, risk_level="High", risk_score=75)
    assert override(state, risk_score=-10, policy=POLICY).risk_score == 0
    assert override(state, risk_score=250, policy=POLICY).risk_score == 100
    assert override(state, risk_score=20, policy=POLICY).risk_score == 20


def test_override_without_changes_keeps_state():
    state = RiskState(is_at_risk=True, risk_level="Medium", risk_score=40)
    assert override(state, policy=POLICY) == state
