"""Preventive Screening Recommendations Module.

Patient-education decision support: matches a demographic and risk-factor
profile against simplified USPSTF screening guidelines.
"""

from .models import (
    DerivedProfile,
    Grade,
    PatientProfile,
    Recommendation,
    RiskFactor,
    Sex,
    SmokingStatus,
)
from .rules import ScreeningRulesEngine, derive, evaluate

__version__ = "1.0.0"

__all__ = [
    "DerivedProfile",
    "Grade",
    "PatientProfile",
    "Recommendation",
    "RiskFactor",
    "Sex",
    "SmokingStatus",
    "ScreeningRulesEngine",
    "derive",
    "evaluate",
]
