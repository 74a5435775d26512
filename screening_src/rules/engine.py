"""Preventive screening rules engine.

Evaluates a patient profile against the screening catalog and returns
every recommendation that applies.

    PatientProfile → derive() → DerivedProfile → catalog → [Recommendation]

The profile is derived once per call. Every rule is evaluated; no rule
suppresses another. Results keep catalog order.
"""

import logging
from typing import Sequence

from ..models import PatientProfile, Recommendation
from .catalog import SCREENING_RULES, ScreeningRule
from .uspstf_criteria import derive

logger = logging.getLogger(__name__)


class ScreeningRulesEngine:
    """Apply the screening catalog to a single profile.

    Holds no per-call state, so one instance can serve concurrent callers.
    """

    def __init__(self, rules: Sequence[ScreeningRule] = SCREENING_RULES):
        self.rules = tuple(rules)

    def evaluate(self, profile: PatientProfile) -> list[Recommendation]:
        """Compute the applicable recommendations for a profile.

        Args:
            profile: Validated profile from the profile reader

        Returns:
            Recommendations in catalog order; empty if none apply
        """
        derived = derive(profile)
        recommendations = []

        for rule in self.rules:
            if not rule.applies(derived):
                continue
            recommendation = rule.recommend(derived)
            logger.debug(
                f"Rule {rule.rule_id} matched: {recommendation.name} "
                f"(grade {recommendation.grade.value})"
            )
            recommendations.append(recommendation)

        logger.debug(
            f"{len(recommendations)} of {len(self.rules)} screening rules apply "
            f"(age={derived.age}, sex={derived.sex.value}, "
            f"pack_years={derived.pack_years:g})"
        )
        return recommendations


_default_engine = ScreeningRulesEngine()


def evaluate(profile: PatientProfile) -> list[Recommendation]:
    """Evaluate a profile against the standard screening catalog."""
    return _default_engine.evaluate(profile)
