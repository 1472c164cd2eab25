import pytest

from ksense_risk.scoring import (
    RiskScore,
    SubScore,
    bp_stage,
    has_fever,
    risk_score,
    score_age,
    score_bp,
    score_temp,
)


@pytest.mark.parametrize("systolic, diastolic, expected", [
    (118, 76, 0),    # normal
    (125, 75, 1),    # elevated
    (135, 70, 2),    # stage 1 by systolic
    (110, 85, 2),    # stage 1 by diastolic
    (145, 70, 3),    # stage 2 by systolic
    (110, 95, 3),    # stage 2 by diastolic
    (150, 85, 2),    # stage 1 wins over stage 2: precedence, not severity
    (125, 85, 2),    # diastolic in [80, 90) hits stage 1 first
    (130, 80, 2),
    (140, 80, 2),
    (140, 79, 3),
    (120, 79, 1),
    (119.9, 79.9, 0),
])
def test_bp_stage_precedence(systolic, diastolic, expected):
    assert bp_stage(systolic, diastolic) == expected


def test_bp_stage_unclassified_defaults_to_zero():
    # Only values that fail every comparison reach the default branch.
    assert bp_stage(float("nan"), float("nan")) == 0
    assert bp_stage(float("nan"), 70) == 0


def test_score_bp():
    assert score_bp({"blood_pressure": "150/95"}) == SubScore(3, False)
    assert score_bp({"blood_pressure": "INVALID"}) == SubScore(0, True)
    assert score_bp({}) == SubScore(0, True)


@pytest.mark.parametrize("temp, expected", [
    (98.6, 0),
    (99.59, 0),
    (99.6, 1),
    (100.9, 1),
    (100.95, 0),  # between the two bands
    (101.0, 2),
    ("103.4", 2),
])
def test_score_temp(temp, expected):
    assert score_temp({"temperature": temp}) == SubScore(expected, False)


@pytest.mark.parametrize("temp", [None, "TEMP_ERROR", "invalid", ""])
def test_score_temp_issue(temp):
    assert score_temp({"temperature": temp}) == SubScore(0, True)


@pytest.mark.parametrize("age, expected", [
    (39, 0),
    (40, 1),
    (65, 1),
    (66, 2),
    ("70", 2),
    (0, 0),
])
def test_score_age(age, expected):
    assert score_age({"age": age}) == SubScore(expected, False)


@pytest.mark.parametrize("age", [None, "unknown", "fifty-three", "N/A"])
def test_score_age_issue(age):
    assert score_age({"age": age}) == SubScore(0, True)


def test_risk_score_aggregates():
    score = risk_score({
        "patient_id": "DEMO010",
        "blood_pressure": "142/88",
        "temperature": 101.2,
        "age": 67,
    })
    assert score == RiskScore("DEMO010", 2, 2, 2, 6, False)


def test_quality_flag_independent_of_scores():
    # an unparseable field scores 0, same as a healthy one
    healthy = risk_score({"patient_id": "A", "blood_pressure": "110/70", "temperature": 98.1, "age": 25})
    dirty = risk_score({"patient_id": "B", "blood_pressure": "110/70", "temperature": 98.1, "age": "unknown"})
    assert healthy.total_score == dirty.total_score == 0
    assert healthy.has_data_quality_issues is False
    assert dirty.has_data_quality_issues is True


def test_risk_score_is_immutable():
    score = risk_score({"patient_id": "A"})
    with pytest.raises(AttributeError):
        score.total_score = 10


@pytest.mark.parametrize("temp, expected", [
    (99.6, True),
    (99.59, False),
    ("100.1", True),
    ("TEMP_ERROR", False),
    (None, False),
])
def test_has_fever(temp, expected):
    assert has_fever({"temperature": temp}) is expected


def test_end_to_end_scores(sample_patients):
    scores = [risk_score(p) for p in sample_patients]
    assert scores == [
        RiskScore("DEMO001", 0, 0, 0, 0, False),
        RiskScore("DEMO002", 0, 2, 2, 4, True),
        RiskScore("DEMO003", 0, 0, 0, 0, True),
    ]
