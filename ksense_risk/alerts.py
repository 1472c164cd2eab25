from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from ksense_risk.scoring import RiskScore, has_fever, risk_score

HIGH_RISK_THRESHOLD = 4


@dataclass
class AlertLists:
    high_risk_patients: List[str] = field(default_factory=list)
    fever_patients: List[str] = field(default_factory=list)
    data_quality_issues: List[str] = field(default_factory=list)

    def to_payload(self) -> dict:
        return {
            "high_risk_patients": list(self.high_risk_patients),
            "fever_patients": list(self.fever_patients),
            "data_quality_issues": list(self.data_quality_issues),
        }


def classify(patients: Sequence[dict], scores: Sequence[RiskScore]) -> AlertLists:
    """Bucket patient ids into the three alert lists, preserving input order.

    ``scores[i]`` must be the score of ``patients[i]``. Fever is decided from
    the raw record, the other two lists from the score.
    """
    if len(patients) != len(scores):
        raise ValueError(f"got {len(patients)} patients but {len(scores)} scores")

    alerts = AlertLists()
    for patient, score in zip(patients, scores):
        pid = score.patient_id
        if score.total_score >= HIGH_RISK_THRESHOLD:
            alerts.high_risk_patients.append(pid)
        if has_fever(patient):
            alerts.fever_patients.append(pid)
        if score.has_data_quality_issues:
            alerts.data_quality_issues.append(pid)
    return alerts


def analyze(patients: Sequence[dict]) -> Tuple[List[RiskScore], AlertLists]:
    scores = [risk_score(p) for p in patients]
    return scores, classify(patients, scores)
