"""USPSTF screening rules.

Deterministic eligibility logic for preventive screening recommendations.
The profile reader builds a PatientProfile, the engine derives smoking
exposure and applies every catalog rule, and the renderer displays what
applies.

Architecture:
    Form fields → Profile Reader → Rules Engine → Renderer
"""

from .catalog import SCREENING_RULES, SCREENING_RULES_BY_ID, ScreeningRule
from .engine import ScreeningRulesEngine, evaluate
from .uspstf_criteria import calculate_pack_years, derive

__all__ = [
    "SCREENING_RULES",
    "SCREENING_RULES_BY_ID",
    "ScreeningRule",
    "ScreeningRulesEngine",
    "evaluate",
    "calculate_pack_years",
    "derive",
]
