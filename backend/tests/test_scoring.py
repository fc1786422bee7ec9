import pytest

from proctor_app.services.scoring import (
    COUNT_THRESHOLDS,
    SCORE_LOCK_THRESHOLD,
    count_violations_by_type,
    evaluate_lock,
    get_risk_level,
)


def counts_of(*types):
    return count_violations_by_type(types)


def test_counts_include_every_type():
    counts = counts_of("tabSwitch", "tabSwitch", "gazeAway")
    assert counts["tabSwitch"] == 2
    assert counts["gazeAway"] == 1
    assert counts["noFaceDetected"] == 0
    assert len(counts) == 12


LOCK_COUNTS = [
    ("noFaceDetected", 5),
    ("multipleFaces", 3),
    ("differentPerson", 3),
    ("gazeAway", 10),
    ("exitFullscreen", 2),
    ("tabSwitch", 2),
    ("windowSwitch", 2),
    ("cameraAccessDenied", 3),
]


def test_count_rules_in_evaluation_order():
    assert list(COUNT_THRESHOLDS) == LOCK_COUNTS


@pytest.mark.parametrize("violation_type,threshold", LOCK_COUNTS)
def test_count_rule_fires_exactly_at_threshold(violation_type, threshold):
    below = evaluate_lock(counts_of(*[violation_type] * (threshold - 1)), 0)
    assert below.should_lock is False

    at = evaluate_lock(counts_of(*[violation_type] * threshold), 0)
    assert at.should_lock is True
    assert at.rule == violation_type
    assert at.reason == f"Exceeded threshold for {violation_type}"


def test_no_violations_does_not_lock():
    decision = evaluate_lock(counts_of(), 0)
    assert decision.should_lock is False
    assert decision.reason is None


def test_different_person_threshold():
    assert not evaluate_lock(counts_of(*["differentPerson"] * 2), 80).should_lock
    decision = evaluate_lock(counts_of(*["differentPerson"] * 3), 120)
    assert decision.should_lock
    assert decision.rule == "differentPerson"


def test_tab_switch_twice_locks():
    decision = evaluate_lock(counts_of("tabSwitch", "tabSwitch"), 50)
    assert decision.should_lock
    assert decision.reason == "Exceeded threshold for tabSwitch"


def test_gaze_away_count_rule():
    assert not evaluate_lock(counts_of(*["gazeAway"] * 9), 45).should_lock
    decision = evaluate_lock(counts_of(*["gazeAway"] * 10), 50)
    assert decision.rule == "gazeAway"


def test_score_rule():
    decision = evaluate_lock(counts_of("multipleFaces", "multipleFaces", "suspiciousObject", "suspiciousObject"),
                             SCORE_LOCK_THRESHOLD)
    assert decision.should_lock
    assert decision.rule == "suspicionScore"
    assert "100" in decision.reason


def test_first_rule_in_order_wins():
    counts = counts_of(*(["noFaceDetected"] * 5 + ["tabSwitch"] * 2))
    decision = evaluate_lock(counts, 200)
    assert decision.rule == "noFaceDetected"


def test_count_rule_beats_score_rule():
    decision = evaluate_lock(counts_of("exitFullscreen", "exitFullscreen"), 150)
    assert decision.rule == "exitFullscreen"


@pytest.mark.parametrize("score,level", [
    (0, "low"),
    (24, "low"),
    (25, "medium"),
    (49, "medium"),
    (50, "high"),
    (99, "high"),
    (100, "critical"),
    (340, "critical"),
])
def test_risk_level(score, level):
    assert get_risk_level(score) == level
