from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from ksense_risk.parsing import parse_age, parse_blood_pressure, parse_temperature

FEVER_THRESHOLD = 99.6


class SubScore(NamedTuple):
    score: int
    has_issue: bool


MISSING = SubScore(0, True)


@dataclass(frozen=True)
class RiskScore:
    patient_id: str
    bp_score: int
    temp_score: int
    age_score: int
    total_score: int
    has_data_quality_issues: bool


def bp_stage(systolic: float, diastolic: float) -> int:
    # First match wins. The order is not by severity and must stay as is:
    # e.g. 150/85 lands in stage 1 (2 points), not stage 2.
    if 130 <= systolic < 140 or 80 <= diastolic < 90:
        return 2  # Stage 1
    if 120 <= systolic < 130 and diastolic < 80:
        return 1  # Elevated
    if systolic >= 140 or diastolic >= 90:
        return 3  # Stage 2
    if systolic < 120 and diastolic < 80:
        return 0  # Normal
    # Unclassified readings default to 0; flagged for product review.
    return 0


def score_bp(patient) -> SubScore:
    bp = parse_blood_pressure(patient.get("blood_pressure"))
    if bp is None:
        return MISSING
    return SubScore(bp_stage(*bp), False)


def score_temp(patient) -> SubScore:
    t = parse_temperature(patient.get("temperature"))
    if t is None:
        return MISSING
    if t >= 101.0:
        return SubScore(2, False)
    if 99.6 <= t <= 100.9:
        return SubScore(1, False)
    return SubScore(0, False)


def score_age(patient) -> SubScore:
    a = parse_age(patient.get("age"))
    if a is None:
        return MISSING
    if a > 65:
        return SubScore(2, False)
    if 40 <= a <= 65:
        return SubScore(1, False)
    return SubScore(0, False)


def risk_score(patient) -> RiskScore:
    """Score one raw patient record across blood pressure, temperature and age."""
    bp = score_bp(patient)
    temp = score_temp(patient)
    age = score_age(patient)
    return RiskScore(
        patient_id=patient.get("patient_id"),
        bp_score=bp.score,
        temp_score=temp.score,
        age_score=age.score,
        total_score=bp.score + temp.score + age.score,
        has_data_quality_issues=bp.has_issue or temp.has_issue or age.has_issue,
    )


def has_fever(patient) -> bool:
    """True when the raw temperature parses to at least 99.6°F.

    Read straight from the record, not from ``temp_score``.
    """
    t = parse_temperature(patient.get("temperature"))
    return t is not None and t >= FEVER_THRESHOLD
