"""Patient risk scoring over a paginated, unreliable records API."""

from ksense_risk.alerts import AlertLists, analyze, classify
from ksense_risk.client import PatientClient
from ksense_risk.config import Config, load_config
from ksense_risk.scoring import RiskScore, has_fever, risk_score

__version__ = "0.1.0"

__all__ = [
    "AlertLists",
    "Config",
    "PatientClient",
    "RiskScore",
    "analyze",
    "classify",
    "has_fever",
    "load_config",
    "risk_score",
]
